"""Tests for application settings."""

from app.core.configs import AppConfig


class TestAppConfig:
    """Tests for environment-driven settings."""

    def test_password_is_masked_in_repr(self, monkeypatch):
        monkeypatch.setenv('CLASSROOM_PASSWORD', 'hunter2')

        config = AppConfig(_env_file=None)

        assert config.CLASSROOM_PASSWORD == 'hunter2'
        assert 'hunter2' not in repr(config)

    def test_log_handlers_from_comma_separated_string(self, monkeypatch):
        monkeypatch.setenv('LOG_HANDLERS', 'stream, file')

        assert AppConfig(_env_file=None).LOG_HANDLERS == ['stream', 'file']

    def test_browser_defaults(self):
        config = AppConfig(_env_file=None)

        assert config.BROWSER_TIMEOUT_SECONDS == 180
        assert config.FIREFOX_POLL_INTERVAL_SECONDS == 0.5
        assert config.FIREFOX_STARTUP_TIMEOUT_SECONDS == 30
        assert config.DEFAULT_PAGE_WAIT_SECONDS == 2
