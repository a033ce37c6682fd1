"""Runtime configuration loaded from DECKPLUGIN_* environment variables.

The host's launch parameters (port, plugin UUID, register event, info) are
not settings: they arrive on the command line for every launch.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class PluginSettings(BaseSettings):
    """Plugin runtime settings.

    All fields are read from environment variables with the ``DECKPLUGIN_``
    prefix.  For example, ``DECKPLUGIN_LOG_LEVEL=DEBUG`` maps to ``log_level``.
    """

    model_config = SettingsConfigDict(
        env_prefix="DECKPLUGIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"
    log_file: str | None = None
    """Also write logs here (rotated at 5 MB).  Stderr only when unset."""

    # -- Transport -------------------------------------------------------------
    max_message_size: int | None = None
    """Largest inbound frame accepted, in bytes.  ``None`` disables the limit."""


def get_settings() -> PluginSettings:
    """Return a cached settings instance.

    Call ``_get_settings_cached.cache_clear()`` in tests to force a re-read
    after overriding env vars.
    """
    return _get_settings_cached()


@lru_cache(maxsize=1)
def _get_settings_cached() -> PluginSettings:
    return PluginSettings()
