"""Tests for settings loading."""

from langfuse_provider.settings import ProviderSettings, get_settings, reload_settings


def test_defaults():
    settings = ProviderSettings()

    assert settings.admin_api_key is None
    assert settings.base_url == "http://localhost:3000"
    assert settings.log_level == "INFO"
    assert settings.stack_name == "dev"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LANGFUSE_ADMIN_API_KEY", "from-env")
    monkeypatch.setenv("LANGFUSE_BASE_URL", "https://langfuse.example.com")

    settings = ProviderSettings()

    assert settings.admin_api_key == "from-env"
    assert settings.base_url == "https://langfuse.example.com"


def test_standard_pulumi_passphrase_variable(monkeypatch):
    monkeypatch.setenv("PULUMI_CONFIG_PASSPHRASE", "hunter2")

    assert ProviderSettings().pulumi_config_passphrase == "hunter2"


def test_get_settings_is_cached_until_reload(monkeypatch):
    first = get_settings()
    assert get_settings() is first

    monkeypatch.setenv("LANGFUSE_LOG_LEVEL", "DEBUG")
    reloaded = reload_settings()

    assert reloaded is not first
    assert get_settings().log_level == "DEBUG"
