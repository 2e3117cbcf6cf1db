"""Builder that fills in defaults and validates FbOptions."""

from __future__ import annotations

import logging
import os
from datetime import timedelta
from typing import Annotated, Any, List, Mapping, Optional, Sequence, Union

from pydantic import AnyUrl, BaseModel, Field, UrlConstraints, ValidationError, field_validator

from .bootstrapping import BootstrapProvider, NullBootstrapProvider
from .errors import ConfigurationError
from .logging import LoggerFactory, NullLoggerFactory
from .options import (
    DEFAULT_AUTO_FLUSH_INTERVAL,
    DEFAULT_CLOSE_TIMEOUT,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_EVENT_URI,
    DEFAULT_FLUSH_TIMEOUT,
    DEFAULT_KEEP_ALIVE_INTERVAL,
    DEFAULT_MAX_EVENT_PER_REQUEST,
    DEFAULT_MAX_EVENTS_IN_QUEUE,
    DEFAULT_MAX_SEND_EVENT_ATTEMPTS,
    DEFAULT_RECONNECT_RETRY_DELAYS,
    DEFAULT_SEND_EVENT_RETRY_INTERVAL,
    DEFAULT_START_WAIT_TIME,
    DEFAULT_STREAMING_URI,
    FbOptions,
    default_max_flush_worker,
)

logger = logging.getLogger(__name__)

Duration = Union[timedelta, int, float]

PositiveDuration = Annotated[timedelta, Field(gt=timedelta(0))]
NonNegativeDuration = Annotated[timedelta, Field(ge=timedelta(0))]
PositiveInt = Annotated[int, Field(ge=1)]
WebsocketUri = Annotated[AnyUrl, UrlConstraints(allowed_schemes=["ws", "wss"])]
HttpUri = Annotated[AnyUrl, UrlConstraints(allowed_schemes=["http", "https"])]


class _OptionsSchema(BaseModel):
    env_secret: str
    start_wait_time: Annotated[timedelta, Field(ge=timedelta(seconds=1))]
    offline: bool
    streaming_uri: WebsocketUri
    event_uri: HttpUri
    connect_timeout: PositiveDuration
    close_timeout: PositiveDuration
    keep_alive_interval: PositiveDuration
    reconnect_retry_delays: Annotated[List[NonNegativeDuration], Field(min_length=1)]
    flush_timeout: PositiveDuration
    max_flush_worker: PositiveInt
    auto_flush_interval: PositiveDuration
    max_events_in_queue: PositiveInt
    max_event_per_request: PositiveInt
    max_send_event_attempts: PositiveInt
    send_event_retry_interval: NonNegativeDuration
    logger_factory: Any

    @field_validator("env_secret")
    @classmethod
    def _secret_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("env secret must not be empty")
        return value

    @field_validator("logger_factory")
    @classmethod
    def _factory_present(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("logger factory must not be None")
        return value


def _uri_text(uri: AnyUrl) -> str:
    text = str(uri)
    # AnyUrl adds a "/" to an empty path
    if uri.path == "/" and not uri.query and not uri.fragment and text.endswith("/"):
        return text[:-1]
    return text


def _mask(secret: Optional[str]) -> str:
    if not secret:
        return "<empty>"
    return secret[:4] + "***" if len(secret) > 8 else "***"


class FbOptionsBuilder:
    """Collects option overrides; :meth:`build` validates and returns a snapshot.

    Durations accept a ``timedelta`` or a number of seconds. ``processor_count``
    drives the default ``max_flush_worker`` and falls back to ``os.cpu_count()``.
    """

    def __init__(self, env_secret: Optional[str], processor_count: Optional[int] = None) -> None:
        self._env_secret = env_secret
        self._processor_count = processor_count if processor_count is not None else os.cpu_count()
        self._start_wait_time: Any = DEFAULT_START_WAIT_TIME
        self._offline = False
        self._streaming_uri: Any = DEFAULT_STREAMING_URI
        self._event_uri: Any = DEFAULT_EVENT_URI
        self._connect_timeout: Any = DEFAULT_CONNECT_TIMEOUT
        self._close_timeout: Any = DEFAULT_CLOSE_TIMEOUT
        self._keep_alive_interval: Any = DEFAULT_KEEP_ALIVE_INTERVAL
        self._reconnect_retry_delays: Any = DEFAULT_RECONNECT_RETRY_DELAYS
        self._flush_timeout: Any = DEFAULT_FLUSH_TIMEOUT
        self._max_flush_worker: Optional[int] = None
        self._auto_flush_interval: Any = DEFAULT_AUTO_FLUSH_INTERVAL
        self._max_events_in_queue = DEFAULT_MAX_EVENTS_IN_QUEUE
        self._max_event_per_request = DEFAULT_MAX_EVENT_PER_REQUEST
        self._max_send_event_attempts = DEFAULT_MAX_SEND_EVENT_ATTEMPTS
        self._send_event_retry_interval: Any = DEFAULT_SEND_EVENT_RETRY_INTERVAL
        self._logger_factory: Optional[LoggerFactory] = NullLoggerFactory()
        self._bootstrap_provider: BootstrapProvider = NullBootstrapProvider()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FbOptionsBuilder":
        env = os.environ if environ is None else environ
        builder = cls(env.get("FEATBIT_ENV_SECRET"))
        if env.get("FEATBIT_STREAMING_URI"):
            builder.streaming(env["FEATBIT_STREAMING_URI"])
        if env.get("FEATBIT_EVENT_URI"):
            builder.event(env["FEATBIT_EVENT_URI"])
        builder.offline(env.get("FEATBIT_OFFLINE", "false").strip().lower() == "true")
        start_wait = env.get("FEATBIT_START_WAIT_TIME")
        if start_wait:
            try:
                builder.start_wait_time(float(start_wait))
            except ValueError as exc:
                raise ConfigurationError("start_wait_time", f"not a number of seconds: {start_wait!r}") from exc
        return builder

    def start_wait_time(self, value: Duration) -> "FbOptionsBuilder":
        self._start_wait_time = value
        return self

    def offline(self, value: bool) -> "FbOptionsBuilder":
        self._offline = value
        return self

    def streaming(self, uri: str) -> "FbOptionsBuilder":
        self._streaming_uri = uri
        return self

    def event(self, uri: str) -> "FbOptionsBuilder":
        self._event_uri = uri
        return self

    def connect_timeout(self, value: Duration) -> "FbOptionsBuilder":
        self._connect_timeout = value
        return self

    def close_timeout(self, value: Duration) -> "FbOptionsBuilder":
        self._close_timeout = value
        return self

    def keep_alive_interval(self, value: Duration) -> "FbOptionsBuilder":
        self._keep_alive_interval = value
        return self

    def reconnect_retry_delays(self, delays: Sequence[Duration]) -> "FbOptionsBuilder":
        self._reconnect_retry_delays = delays
        return self

    def flush_timeout(self, value: Duration) -> "FbOptionsBuilder":
        self._flush_timeout = value
        return self

    def max_flush_worker(self, value: int) -> "FbOptionsBuilder":
        self._max_flush_worker = value
        return self

    def auto_flush_interval(self, value: Duration) -> "FbOptionsBuilder":
        self._auto_flush_interval = value
        return self

    def max_events_in_queue(self, value: int) -> "FbOptionsBuilder":
        self._max_events_in_queue = value
        return self

    def max_event_per_request(self, value: int) -> "FbOptionsBuilder":
        self._max_event_per_request = value
        return self

    def max_send_event_attempts(self, value: int) -> "FbOptionsBuilder":
        self._max_send_event_attempts = value
        return self

    def send_event_retry_interval(self, value: Duration) -> "FbOptionsBuilder":
        self._send_event_retry_interval = value
        return self

    def logger_factory(self, factory: LoggerFactory) -> "FbOptionsBuilder":
        self._logger_factory = factory
        return self

    def _with_bootstrap_provider(self, provider: BootstrapProvider) -> "FbOptionsBuilder":
        # reserved for featbit_sdk.bootstrapping
        if provider is None:
            raise ConfigurationError("bootstrap_provider", "provider must not be None")
        self._bootstrap_provider = provider
        return self

    def build(self) -> FbOptions:
        max_flush_worker = self._max_flush_worker
        if max_flush_worker is None:
            max_flush_worker = default_max_flush_worker(self._processor_count)

        try:
            schema = _OptionsSchema(
                env_secret=self._env_secret,
                start_wait_time=self._start_wait_time,
                offline=self._offline,
                streaming_uri=self._streaming_uri,
                event_uri=self._event_uri,
                connect_timeout=self._connect_timeout,
                close_timeout=self._close_timeout,
                keep_alive_interval=self._keep_alive_interval,
                reconnect_retry_delays=self._reconnect_retry_delays,
                flush_timeout=self._flush_timeout,
                max_flush_worker=max_flush_worker,
                auto_flush_interval=self._auto_flush_interval,
                max_events_in_queue=self._max_events_in_queue,
                max_event_per_request=self._max_event_per_request,
                max_send_event_attempts=self._max_send_event_attempts,
                send_event_retry_interval=self._send_event_retry_interval,
                logger_factory=self._logger_factory,
            )
        except ValidationError as exc:
            error = exc.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else "options"
            raise ConfigurationError(field, error["msg"]) from exc

        options = FbOptions(
            start_wait_time=schema.start_wait_time,
            offline=schema.offline,
            env_secret=schema.env_secret,
            streaming_uri=_uri_text(schema.streaming_uri),
            event_uri=_uri_text(schema.event_uri),
            connect_timeout=schema.connect_timeout,
            close_timeout=schema.close_timeout,
            keep_alive_interval=schema.keep_alive_interval,
            reconnect_retry_delays=tuple(schema.reconnect_retry_delays),
            flush_timeout=schema.flush_timeout,
            max_flush_worker=schema.max_flush_worker,
            auto_flush_interval=schema.auto_flush_interval,
            max_events_in_queue=schema.max_events_in_queue,
            max_event_per_request=schema.max_event_per_request,
            max_send_event_attempts=schema.max_send_event_attempts,
            send_event_retry_interval=schema.send_event_retry_interval,
            logger_factory=schema.logger_factory,
            _bootstrap_provider=self._bootstrap_provider,
        )
        logger.debug(
            "Built FbOptions env_secret=%s streaming_uri=%s event_uri=%s offline=%s max_flush_worker=%s",
            _mask(options.env_secret),
            options.streaming_uri,
            options.event_uri,
            options.offline,
            options.max_flush_worker,
        )
        return options


__all__ = ["FbOptionsBuilder"]
