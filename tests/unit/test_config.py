"""Tests for runtime config — env-driven settings."""

from __future__ import annotations

from fluxdispatch.config import FluxSettings
from fluxdispatch.core.dispatcher import Dispatcher


class TestFluxSettings:
    def test_defaults(self):
        settings = FluxSettings()
        assert settings.log_level == "INFO"
        assert settings.token_prefix == "ID_"
        assert settings.debug is False

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("FLUXDISPATCH_TOKEN_PREFIX", "cb_")
        monkeypatch.setenv("FLUXDISPATCH_LOG_LEVEL", "DEBUG")
        settings = FluxSettings()
        assert settings.token_prefix == "cb_"
        assert settings.log_level == "DEBUG"


class TestDispatcherUsesConfig:
    def test_default_prefix(self):
        assert Dispatcher().register(lambda payload: None) == "ID_1"

    def test_explicit_prefix(self):
        assert Dispatcher(token_prefix="store-").register(lambda payload: None) == "store-1"
