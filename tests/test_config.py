"""Tests for settings and logging setup."""

import pytest
import structlog
from py_voronoi.config import Settings
from py_voronoi.log_config import configure_logging


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PY_VORONOI_DXF_VERSION", raising=False)
        settings = Settings(_env_file=None)
        assert settings.log_level == "INFO"
        assert settings.dxf_version == "R2010"
        assert settings.dxf_layer_prefix == ""

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PY_VORONOI_DXF_VERSION", "R2000")
        monkeypatch.setenv("PY_VORONOI_LOG_LEVEL", "DEBUG")
        settings = Settings(_env_file=None)
        assert settings.dxf_version == "R2000"
        assert settings.log_level == "DEBUG"


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def reset_structlog(self):
        yield
        structlog.reset_defaults()

    @pytest.mark.parametrize("fmt", ["json", "console"])
    def test_formats(self, fmt):
        configure_logging(level="DEBUG", fmt=fmt)
        structlog.get_logger("test").info("configured", fmt=fmt)

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            configure_logging(fmt="xml")
