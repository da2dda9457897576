"""
Unit tests for settings loading.
"""
from stackup.MODELS.settings import Settings, load_settings

ENV_VARS = [
    "STACKUP_DOCKER_BIN", "STACKUP_SHELL", "STACKUP_COMMAND_TIMEOUT",
    "STACKUP_WEB_HOST", "STACKUP_WEB_SCHEME", "STACKUP_LOG_LEVEL",
]


class TestLoadSettings:
    """Tests for load_settings."""

    def _clear(self, monkeypatch):
        for name in ENV_VARS:
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self, monkeypatch, tmp_path):
        """Without any variables the defaults apply."""
        self._clear(monkeypatch)
        settings = load_settings(dotenv_path=str(tmp_path / "missing.env"))
        assert settings == Settings()
        assert settings.command_timeout is None

    def test_environment_overrides(self, monkeypatch, tmp_path):
        """STACKUP_* variables override defaults."""
        self._clear(monkeypatch)
        monkeypatch.setenv("STACKUP_DOCKER_BIN", "/usr/bin/docker")
        monkeypatch.setenv("STACKUP_SHELL", "/usr/bin/bash")
        monkeypatch.setenv("STACKUP_COMMAND_TIMEOUT", "90")
        monkeypatch.setenv("STACKUP_LOG_LEVEL", "debug")
        settings = load_settings(dotenv_path=str(tmp_path / "missing.env"))
        assert settings.docker_bin == "/usr/bin/docker"
        assert settings.shell == "/usr/bin/bash"
        assert settings.command_timeout == 90.0
        assert settings.log_level == "DEBUG"

    def test_invalid_timeout_falls_back(self, monkeypatch, tmp_path):
        """Unparseable or non-positive timeouts mean no timeout."""
        self._clear(monkeypatch)
        for raw in ("soon", "0", "-5", ""):
            monkeypatch.setenv("STACKUP_COMMAND_TIMEOUT", raw)
            assert load_settings(dotenv_path=str(tmp_path / "missing.env")).command_timeout is None

    def test_dotenv_file(self, monkeypatch, tmp_path):
        """Values are read from a .env file when not already set."""
        self._clear(monkeypatch)
        env_file = tmp_path / ".env"
        env_file.write_text("STACKUP_WEB_HOST=127.0.0.1\nSTACKUP_WEB_SCHEME=https\n")
        settings = load_settings(dotenv_path=str(env_file))
        assert settings.web_host == "127.0.0.1"
        assert settings.web_scheme == "https"
