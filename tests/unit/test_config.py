"""Tests for settings."""

from saas_connector.config import LeadvertexSettings, MoyskladSettings, Settings, get_settings


class TestProviderSettings:
    """Tests for provider settings."""

    def test_moysklad_defaults(self):
        """Test MoySklad defaults."""
        settings = MoyskladSettings()

        assert settings.base_url == "https://online.moysklad.ru/api/remap/"
        assert settings.api_version == "1.1"
        assert settings.pre_request_delay == 0.25
        assert settings.follow_redirects is False
        assert settings.verify_tls is True

    def test_leadvertex_url(self):
        """Test client id substitution in the LeadVertex URL."""
        settings = LeadvertexSettings(client_id="acme")

        assert settings.url == "https://acme.leadvertex.ru/api/admin/"
        assert settings.follow_redirects is True

    def test_env_override(self, monkeypatch):
        """Test that environment variables override defaults."""
        monkeypatch.setenv("MOYSKLAD_LOGIN", "admin@acme")
        monkeypatch.setenv("MOYSKLAD_VERIFY_TLS", "false")

        settings = MoyskladSettings()

        assert settings.login == "admin@acme"
        assert settings.verify_tls is False


class TestSettings:
    """Tests for the main settings."""

    def test_nested_settings(self, mock_settings):
        """Test nested provider settings."""
        assert mock_settings.leadvertex.client_id == "shop"
        assert mock_settings.moysklad.pre_request_delay == 0
        assert mock_settings.retry_wait == 0

    def test_get_settings_cached(self):
        """Test that get_settings returns a cached instance."""
        get_settings.cache_clear()

        assert get_settings() is get_settings()
        assert isinstance(get_settings(), Settings)

        get_settings.cache_clear()
