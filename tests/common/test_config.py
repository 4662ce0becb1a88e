from __future__ import annotations

import pytest

from brokersync.config import (
    ConfigurationError,
    MissingConfigurationError,
    get_cloudfoundry_config,
    get_proxy_config,
    get_registry_config,
    optional_env_bool,
    optional_env_float,
    require_env_var,
    require_env_vars,
)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_B", raising=False)
    monkeypatch.delenv("MISSING_A", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert str(exc.value) == "Missing configuration for: MISSING_A, MISSING_B"


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_optional_env_float(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_FLOAT", raising=False)
    assert optional_env_float("EXAMPLE_FLOAT", 5.0) == 5.0

    monkeypatch.setenv("EXAMPLE_FLOAT", "2.5")
    assert optional_env_float("EXAMPLE_FLOAT", 5.0) == 2.5

    for invalid in ("abc", "0", "-1"):
        monkeypatch.setenv("EXAMPLE_FLOAT", invalid)
        with pytest.raises(ConfigurationError):
            optional_env_float("EXAMPLE_FLOAT", 5.0)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("true", True), ("YES", True), ("1", True), ("off", False), ("0", False), ("", False)],
)
def test_optional_env_bool(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("EXAMPLE_BOOL", raw)

    assert optional_env_bool("EXAMPLE_BOOL") is expected


def test_optional_env_bool_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_BOOL", "maybe")

    with pytest.raises(ConfigurationError):
        optional_env_bool("EXAMPLE_BOOL")


def test_get_proxy_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BROKERSYNC_PROXY_URL", "https://proxy.example.com/")
    monkeypatch.setenv("BROKERSYNC_RESYNC_PERIOD", "15")
    monkeypatch.delenv("BROKERSYNC_BROKER_PREFIX", raising=False)
    monkeypatch.delenv("BROKERSYNC_SHUTDOWN_TIMEOUT", raising=False)

    config = get_proxy_config()

    assert config.proxy_path == "https://proxy.example.com/v1/osb"
    assert config.broker_prefix == "sm-proxy-"
    assert config.resync_period_seconds == 15.0
    assert config.shutdown_timeout_seconds == 30.0


def test_get_proxy_config_rejects_non_http_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BROKERSYNC_PROXY_URL", "proxy.example.com")

    with pytest.raises(ConfigurationError):
        get_proxy_config()


@pytest.mark.parametrize(
    "url",
    [
        "https://proxy.example.com/base?x=1",
        "https://proxy.example.com/base#section",
        "https://proxy.example.com?",
    ],
)
def test_get_proxy_config_rejects_query_or_fragment(
    monkeypatch: pytest.MonkeyPatch,
    url: str,
) -> None:
    monkeypatch.setenv("BROKERSYNC_PROXY_URL", url)

    with pytest.raises(ConfigurationError, match="query or fragment"):
        get_proxy_config()


def test_get_proxy_config_keeps_base_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BROKERSYNC_PROXY_URL", "https://proxy.example.com/base/")

    assert get_proxy_config().proxy_path == "https://proxy.example.com/base/v1/osb"


def test_get_registry_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BROKERSYNC_REGISTRY_URL", "https://registry.example.com/")
    monkeypatch.setenv("BROKERSYNC_REGISTRY_USER", "admin")
    monkeypatch.setenv("BROKERSYNC_REGISTRY_PASSWORD", "secret")
    monkeypatch.setenv("BROKERSYNC_REGISTRY_SKIP_SSL_VALIDATION", "true")
    monkeypatch.delenv("BROKERSYNC_REGISTRY_REQUEST_TIMEOUT", raising=False)

    config = get_registry_config()

    assert config.url == "https://registry.example.com"
    assert config.user == "admin"
    assert config.resilience.verify_ssl is False
    assert config.resilience.timeout_seconds == 10.0


def test_get_cloudfoundry_config_requires_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CF_API_ADDRESS", "https://api.cf.example.com")
    for name in ("CF_CLIENT_ID", "CF_CLIENT_SECRET", "CF_REG_USER", "CF_REG_PASSWORD"):
        monkeypatch.delenv(name, raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        get_cloudfoundry_config()

    assert "CF_CLIENT_ID" in str(exc.value)
    assert "CF_REG_PASSWORD" in str(exc.value)


def test_get_cloudfoundry_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CF_API_ADDRESS", "https://api.cf.example.com/")
    monkeypatch.setenv("CF_CLIENT_ID", "client")
    monkeypatch.setenv("CF_CLIENT_SECRET", "client-secret")
    monkeypatch.setenv("CF_REG_USER", "proxy-user")
    monkeypatch.setenv("CF_REG_PASSWORD", "proxy-password")
    monkeypatch.setenv("CF_REQUEST_TIMEOUT", "3")
    monkeypatch.delenv("CF_SKIP_SSL_VALIDATION", raising=False)

    config = get_cloudfoundry_config()

    assert config.api_address == "https://api.cf.example.com"
    assert config.registration.user == "proxy-user"
    assert config.resilience.base_url == "https://api.cf.example.com"
    assert config.resilience.timeout_seconds == 3.0
    assert config.resilience.verify_ssl is True
