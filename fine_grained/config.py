"""Application settings for the stopwatch demo and its logging.

Values come from environment variables when set, otherwise from the defaults
below. The ``Stopwatch`` itself takes no configuration.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, PositiveInt, field_validator

ENV_PREFIX = "FINE_GRAINED_"


class DemoConfig(BaseModel):
    rounds: PositiveInt = 10
    sleep_ms: PositiveInt = 50


class AppConfig(BaseModel):
    log_level: str = "WARNING"
    demo: DemoConfig = Field(default_factory=DemoConfig)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        name = v.upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"unknown log level: {v!r}")
        return name

    @staticmethod
    def from_env() -> "AppConfig":
        """Build a config from FINE_GRAINED_* variables; unset ones keep their defaults."""
        demo: Dict[str, Any] = {}
        for key in ("rounds", "sleep_ms"):
            raw = os.getenv(f"{ENV_PREFIX}DEMO_{key.upper()}")
            if raw is not None:
                demo[key] = raw
        fields: Dict[str, Any] = {"demo": DemoConfig(**demo)}
        level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if level is not None:
            fields["log_level"] = level
        return AppConfig(**fields)


_config_singleton: Optional[AppConfig] = None

def get_config(force_refresh: bool = False) -> AppConfig:
    """
    Return a cached AppConfig, re-reading the environment on ``force_refresh``.
    """
    global _config_singleton
    if force_refresh or _config_singleton is None:
        _config_singleton = AppConfig.from_env()
    return _config_singleton


__all__ = ["AppConfig", "DemoConfig", "get_config"]
