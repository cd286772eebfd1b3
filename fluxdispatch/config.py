"""Runtime configuration, env-driven.

Centralized settings using pydantic-settings. Reads from a .env file and
FLUXDISPATCH_* environment variables.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class FluxSettings(BaseSettings):
    """Dispatcher configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export FLUXDISPATCH_LOG_LEVEL=DEBUG
        export FLUXDISPATCH_DEBUG=true
        export FLUXDISPATCH_TOKEN_PREFIX=cb_
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FLUXDISPATCH_",
        env_file_encoding="utf-8",
    )

    log_level: str = "INFO"
    debug: bool = False

    # Prefix for minted callback tokens ("ID_1", "ID_2", ...)
    token_prefix: str = "ID_"


# Module-level singleton, import as `from fluxdispatch.config import config`
config = FluxSettings()
