"""Bootstrap providers seed flag state before (or without) a streaming connection."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import ConfigurationError

if TYPE_CHECKING:  # pragma: no cover
    from .options import FbOptions
    from .options_builder import FbOptionsBuilder


class DataSet(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    feature_flags: List[Dict[str, Any]] = Field(default_factory=list, alias="featureFlags")
    segments: List[Dict[str, Any]] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _unwrap_data_sync(cls, value: Any) -> Any:
        # data-sync messages carry the payload under "data"
        if isinstance(value, dict) and isinstance(value.get("data"), dict):
            return value["data"]
        return value


class BootstrapProvider(Protocol):
    def data_set(self) -> Optional[DataSet]:  # pragma: no cover - interface
        ...


class NullBootstrapProvider:
    """Reports that no bootstrap data is available."""

    def data_set(self) -> Optional[DataSet]:
        return None


class JsonBootstrapProvider:
    def __init__(self, json_text: str) -> None:
        try:
            self._data_set = DataSet.model_validate_json(json_text)
        except ValidationError as exc:
            raise ConfigurationError("bootstrap_provider", f"invalid bootstrap json: {exc.errors()[0]['msg']}") from exc

    def data_set(self) -> Optional[DataSet]:
        return self._data_set


def use_bootstrap_provider(options: "FbOptions", provider: BootstrapProvider) -> None:
    """Install ``provider`` on an existing snapshot. SDK-internal."""
    if provider is None:
        raise ConfigurationError("bootstrap_provider", "provider must not be None")
    options._bootstrap_provider = provider


def use_json_bootstrap(builder: "FbOptionsBuilder", json_text: str) -> "FbOptionsBuilder":
    return builder._with_bootstrap_provider(JsonBootstrapProvider(json_text))


def bootstrapped_options(options: "FbOptions", provider: BootstrapProvider) -> "FbOptions":
    """Derive an offline working copy seeded by ``provider``; ``options`` is left untouched."""
    working = options.shallow_copy()
    use_bootstrap_provider(working, provider)
    working.offline = True
    return working


__all__ = [
    "BootstrapProvider",
    "DataSet",
    "JsonBootstrapProvider",
    "NullBootstrapProvider",
    "bootstrapped_options",
    "use_bootstrap_provider",
    "use_json_bootstrap",
]
