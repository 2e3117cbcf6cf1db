from __future__ import annotations

import json

import pytest

from featbit_sdk import ConfigurationError, FbOptionsBuilder, JsonBootstrapProvider, NullBootstrapProvider, default
from featbit_sdk.bootstrapping import bootstrapped_options, use_bootstrap_provider, use_json_bootstrap

BOOTSTRAP_JSON = json.dumps(
    {
        "messageType": "data-sync",
        "data": {
            "eventType": "full",
            "featureFlags": [{"key": "hello-world", "isEnabled": True}],
            "segments": [{"id": "beta-users"}],
        },
    }
)


def test_json_provider_parses_data_sync_payload() -> None:
    data_set = JsonBootstrapProvider(BOOTSTRAP_JSON).data_set()

    assert data_set is not None
    assert data_set.feature_flags[0]["key"] == "hello-world"
    assert data_set.segments == [{"id": "beta-users"}]


def test_json_provider_accepts_bare_data_set() -> None:
    data_set = JsonBootstrapProvider('{"featureFlags": [], "segments": []}').data_set()

    assert data_set is not None
    assert data_set.feature_flags == []


@pytest.mark.parametrize("payload", ["{not json", '{"featureFlags": "nope"}'])
def test_json_provider_rejects_invalid_payload(payload: str) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        JsonBootstrapProvider(payload)

    assert excinfo.value.field == "bootstrap_provider"


def test_builder_public_surface_has_no_bootstrap_setter() -> None:
    public = [name for name in dir(FbOptionsBuilder) if not name.startswith("_")]

    assert not any("bootstrap" in name for name in public)


def test_use_json_bootstrap_installs_provider() -> None:
    options = use_json_bootstrap(FbOptionsBuilder("secret"), BOOTSTRAP_JSON).build()

    assert isinstance(options.bootstrap_provider, JsonBootstrapProvider)
    assert options.offline is False


def test_use_bootstrap_provider_sets_in_place() -> None:
    options = default("secret")
    provider = JsonBootstrapProvider(BOOTSTRAP_JSON)

    use_bootstrap_provider(options, provider)

    assert options.bootstrap_provider is provider
    with pytest.raises(ConfigurationError):
        use_bootstrap_provider(options, None)  # type: ignore[arg-type]


def test_bootstrapped_options_leave_original_untouched() -> None:
    options = default("secret")
    provider = JsonBootstrapProvider(BOOTSTRAP_JSON)

    working = bootstrapped_options(options, provider)

    assert working.offline is True
    assert working.bootstrap_provider is provider
    assert options.offline is False
    assert isinstance(options.bootstrap_provider, NullBootstrapProvider)
    assert working.env_secret == options.env_secret
