"""Logging configuration for routebind.

All modules log through ``logging.getLogger(__name__)`` under the
``routebind`` namespace; this module only adjusts that namespace.
"""

import logging
from typing import Optional

from .config import BindingConfig
from .constants import LogIcons

LOGGER_NAME = "routebind"

logger = logging.getLogger(__name__)


def configure_logging(config: Optional[BindingConfig] = None) -> logging.Logger:
    """Apply the configured level to the ``routebind`` logger.

    Args:
        config: Configuration to apply; read from the environment when omitted

    Returns:
        The configured package logger
    """
    config = config or BindingConfig.from_env()
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(config.log_level_value)
    logger.debug(f"{LogIcons.CONFIG} routebind logging set to {config.log_level}")
    return package_logger
