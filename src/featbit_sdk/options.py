"""Options snapshot consumed by the streaming, event and bootstrap components."""

from __future__ import annotations

import copy
from dataclasses import FrozenInstanceError, dataclass, field
from datetime import timedelta
from typing import Optional, Tuple

from .bootstrapping import BootstrapProvider, NullBootstrapProvider
from .logging import LoggerFactory

DEFAULT_START_WAIT_TIME = timedelta(seconds=5)
DEFAULT_STREAMING_URI = "ws://localhost:5100"
DEFAULT_EVENT_URI = "http://localhost:5100"
DEFAULT_CONNECT_TIMEOUT = timedelta(seconds=3)
DEFAULT_CLOSE_TIMEOUT = timedelta(seconds=2)
DEFAULT_KEEP_ALIVE_INTERVAL = timedelta(seconds=15)
DEFAULT_RECONNECT_RETRY_DELAYS: Tuple[timedelta, ...] = tuple(
    timedelta(seconds=s) for s in (0, 1, 2, 3, 5, 8, 13, 21, 34, 55)
)
DEFAULT_FLUSH_TIMEOUT = timedelta(seconds=5)
DEFAULT_AUTO_FLUSH_INTERVAL = timedelta(seconds=5)
DEFAULT_MAX_EVENTS_IN_QUEUE = 10_000
DEFAULT_MAX_EVENT_PER_REQUEST = 50
DEFAULT_MAX_SEND_EVENT_ATTEMPTS = 2
DEFAULT_SEND_EVENT_RETRY_INTERVAL = timedelta(milliseconds=200)

MAX_FLUSH_WORKER_CAP = 4

_READ_ONLY_FIELDS = frozenset(
    {
        "start_wait_time",
        "env_secret",
        "streaming_uri",
        "event_uri",
        "connect_timeout",
        "close_timeout",
        "keep_alive_interval",
        "reconnect_retry_delays",
        "logger_factory",
    }
)


def default_max_flush_worker(processor_count: Optional[int]) -> int:
    """Half the available execution units, at least 1 and at most 4."""
    count = processor_count if processor_count and processor_count > 0 else 1
    return min(max(count // 2, 1), MAX_FLUSH_WORKER_CAP)


@dataclass
class FbOptions:
    """Validated client options.

    Instances come from :class:`~featbit_sdk.options_builder.FbOptionsBuilder`.
    Fields in ``_READ_ONLY_FIELDS`` are fixed once set; the flush/event tuning
    fields and ``offline`` may be changed in place. Changes are not pushed to
    components that copied a value, they have to re-read the live field.
    """

    start_wait_time: timedelta
    offline: bool
    env_secret: str = field(repr=False)
    streaming_uri: str
    event_uri: str
    connect_timeout: timedelta
    close_timeout: timedelta
    keep_alive_interval: timedelta
    reconnect_retry_delays: Tuple[timedelta, ...]
    flush_timeout: timedelta
    max_flush_worker: int
    auto_flush_interval: timedelta
    max_events_in_queue: int
    max_event_per_request: int
    max_send_event_attempts: int
    send_event_retry_interval: timedelta
    logger_factory: LoggerFactory = field(repr=False)
    _bootstrap_provider: BootstrapProvider = field(default_factory=NullBootstrapProvider, repr=False, compare=False)

    def __setattr__(self, name: str, value: object) -> None:
        if name in _READ_ONLY_FIELDS and name in self.__dict__:
            raise FrozenInstanceError(f"cannot assign to read-only option '{name}'")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if name in _READ_ONLY_FIELDS:
            raise FrozenInstanceError(f"cannot delete read-only option '{name}'")
        super().__delattr__(name)

    @property
    def bootstrap_provider(self) -> BootstrapProvider:
        return self._bootstrap_provider

    @classmethod
    def default(cls, secret: str) -> "FbOptions":
        return default(secret)

    def shallow_copy(self) -> "FbOptions":
        """Copy with independent mutable fields; references (logger factory, provider, delays) are shared."""
        return copy.copy(self)


def default(secret: str) -> FbOptions:
    """Options for ``secret`` with every other field at its default."""
    from .options_builder import FbOptionsBuilder

    return FbOptionsBuilder(secret).build()


__all__ = [
    "DEFAULT_AUTO_FLUSH_INTERVAL",
    "DEFAULT_CLOSE_TIMEOUT",
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_EVENT_URI",
    "DEFAULT_FLUSH_TIMEOUT",
    "DEFAULT_KEEP_ALIVE_INTERVAL",
    "DEFAULT_MAX_EVENTS_IN_QUEUE",
    "DEFAULT_MAX_EVENT_PER_REQUEST",
    "DEFAULT_MAX_SEND_EVENT_ATTEMPTS",
    "DEFAULT_RECONNECT_RETRY_DELAYS",
    "DEFAULT_SEND_EVENT_RETRY_INTERVAL",
    "DEFAULT_START_WAIT_TIME",
    "DEFAULT_STREAMING_URI",
    "FbOptions",
    "default",
    "default_max_flush_worker",
]
