"""Configuration loading and validation."""

from qanda.config.loader import load_config
from qanda.config.schema import (
    APIConfig,
    DatabaseConfig,
    GeneralConfig,
    LoggingConfig,
    QandaConfig,
)

__all__ = [
    "APIConfig",
    "DatabaseConfig",
    "GeneralConfig",
    "LoggingConfig",
    "QandaConfig",
    "load_config",
]
