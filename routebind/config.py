"""Configuration model for routebind.

Values can be supplied directly or read from the environment with
``BindingConfig.from_env()``.
"""

import logging
import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .constants import ROUTE_ARGS_METADATA, EnvVars

_LEVEL_NAMES = {"debug", "info", "warning", "error", "critical"}


class BindingConfig(BaseModel):
    """Configuration for the binding metadata system.

    Attributes:
        metadata_key: Namespace under which method binding maps are stored
        log_level: Level of the ``routebind`` logger
    """

    metadata_key: str = Field(default=ROUTE_ARGS_METADATA, min_length=1)
    log_level: str = "warning"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().lower()
        if level not in _LEVEL_NAMES:
            raise ValueError(
                f"log_level must be one of {sorted(_LEVEL_NAMES)}, got {value!r}"
            )
        return level

    @property
    def log_level_value(self) -> int:
        """Numeric logging level for ``log_level``."""
        return getattr(logging, self.log_level.upper())

    @classmethod
    def from_env(cls, overrides: Optional[dict] = None) -> "BindingConfig":
        """Build a config from environment variables.

        Args:
            overrides: Values that take precedence over the environment

        Returns:
            Populated BindingConfig

        Environment Variables:
            ROUTEBIND_METADATA_KEY: Metadata namespace (default: "__routeArguments__")
            ROUTEBIND_LOG_LEVEL: Logger level (default: "warning")
        """
        values = {
            "metadata_key": os.getenv(EnvVars.METADATA_KEY, ROUTE_ARGS_METADATA),
            "log_level": os.getenv(EnvVars.LOG_LEVEL, "warning"),
        }
        if overrides:
            values.update(overrides)
        return cls(**values)
