"""Configuration settings for runtime ratio trackers."""

from __future__ import annotations

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_LOGGER = "runtime_ratio"


class RatioSettings(BaseSettings):
    """
    Settings loaded from ``RUNTIME_RATIO_*`` environment variables.

    ``reference`` picks the strategy used when a tracker is created without
    naming one: ``cpu`` for process CPU time, ``wall`` for wall-clock time.
    """

    model_config = SettingsConfigDict(env_prefix="RUNTIME_RATIO_", extra="ignore")

    reference: str = "cpu"
    log_anomalies: bool = False
    log_level: str = "WARNING"

    @field_validator("reference")
    @classmethod
    def _normalise_reference(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        return value.strip().upper()


settings = RatioSettings()


def get_settings(reload: bool = False) -> RatioSettings:
    """Return the shared settings, re-reading the environment when asked."""

    global settings
    if reload:
        settings = RatioSettings()
    return settings


def configure_logging(config: RatioSettings | None = None) -> logging.Logger:
    cfg = config or get_settings()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(cfg.log_level)
    return logger


__all__ = ["RatioSettings", "configure_logging", "get_settings", "settings"]
