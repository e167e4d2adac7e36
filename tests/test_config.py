from __future__ import annotations

import pytest

from label_janitor.config import DEFAULT_API_URL, DEFAULT_TIMEOUT_S, ConfigError, Settings, load_settings


def test_missing_api_key_raises_config_error() -> None:
    with pytest.raises(ConfigError, match="Missing LINEAR_API_KEY"):
        load_settings({"DRY_RUN": "false"})


def test_blank_api_key_is_treated_as_missing() -> None:
    with pytest.raises(ConfigError):
        load_settings({"LINEAR_API_KEY": "   "})


def test_defaults_keep_dry_run_on() -> None:
    settings = load_settings({"LINEAR_API_KEY": "lin_api_x"})
    assert settings.api_key == "lin_api_x"
    assert settings.dry_run is True
    assert settings.api_url == DEFAULT_API_URL
    assert settings.timeout_s == DEFAULT_TIMEOUT_S
    assert settings.deletion_enabled is False


@pytest.mark.parametrize("raw", ["", "true", "0", "no", "False", "FALSE", " false", "off"])
def test_only_literal_false_disables_dry_run(raw: str) -> None:
    assert load_settings({"LINEAR_API_KEY": "k", "DRY_RUN": raw}).dry_run is True


def test_literal_false_disables_dry_run() -> None:
    assert load_settings({"LINEAR_API_KEY": "k", "DRY_RUN": "false"}).dry_run is False


def test_optional_overrides() -> None:
    settings = load_settings(
        {
            "LINEAR_API_KEY": "k",
            "LINEAR_API_URL": "https://linear.example/graphql",
            "LABEL_JANITOR_TIMEOUT_S": "2.5",
            "LABEL_JANITOR_ENABLE_DELETION": "1",
        }
    )
    assert settings.api_url == "https://linear.example/graphql"
    assert settings.timeout_s == 2.5
    assert settings.deletion_enabled is True


@pytest.mark.parametrize(
    "env",
    [
        {"LINEAR_API_URL": "ftp://linear.example"},
        {"LINEAR_API_URL": "not a url"},
        {"LABEL_JANITOR_TIMEOUT_S": "soon"},
        {"LABEL_JANITOR_TIMEOUT_S": "0"},
    ],
)
def test_invalid_optional_settings_raise(env: dict) -> None:
    with pytest.raises(ConfigError):
        load_settings({"LINEAR_API_KEY": "k", **env})


def test_reads_process_environment_by_default(monkeypatch) -> None:
    monkeypatch.setenv("LINEAR_API_KEY", "from-env")
    monkeypatch.delenv("DRY_RUN", raising=False)
    assert load_settings().api_key == "from-env"


def test_settings_repr_hides_api_key() -> None:
    settings = Settings(api_key="lin_api_secret")
    assert "lin_api_secret" not in repr(settings)
    assert settings.with_deletion_enabled().deletion_enabled is True
