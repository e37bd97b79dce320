"""Unit tests for engine settings and logging setup."""

import pytest
from pydantic import ValidationError

from locatif.core.exceptions import ConfigurationError
from locatif.core.logging import configure_logging, get_logger
from locatif.core.settings import EngineSettings, get_settings


class TestEngineSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LOCATIF_APPRECIATION_PCT", raising=False)
        settings = EngineSettings(_env_file=None)
        assert settings.appreciation_pct == 2.0
        assert settings.projection_years_back == 2
        assert settings.projection_years_ahead == 20
        assert settings.projection_step_months == 3
        assert settings.irr_min_months == 6
        assert settings.irr_max_iterations == 100

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("LOCATIF_APPRECIATION_PCT", "3.5")
        monkeypatch.setenv("LOCATIF_LOG_LEVEL", "DEBUG")
        settings = EngineSettings(_env_file=None)
        assert settings.appreciation_pct == 3.5
        assert settings.log_level == "DEBUG"

    def test_bounds(self):
        with pytest.raises(ValidationError):
            EngineSettings(_env_file=None, projection_step_months=0)

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_invalid_environment(self, monkeypatch):
        monkeypatch.setenv("LOCATIF_PROJECTION_STEP_MONTHS", "0")
        get_settings.cache_clear()
        try:
            with pytest.raises(ConfigurationError):
                get_settings()
        finally:
            monkeypatch.delenv("LOCATIF_PROJECTION_STEP_MONTHS")
            get_settings.cache_clear()


class TestLogging:
    def test_configure_is_idempotent(self):
        configure_logging()
        assert configure_logging() is not None

    def test_named_logger(self):
        log = get_logger("locatif.tests")
        log.debug("test_event", value=1)
