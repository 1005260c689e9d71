"""Core types, errors, and shared utilities."""

from qanda.core.errors import (
    ConfigError,
    InvalidIdentifierError,
    NotFoundError,
    PersistenceError,
    QandaError,
    ValidationError,
)
from qanda.core.logging import setup_logging

__all__ = [
    "ConfigError",
    "InvalidIdentifierError",
    "NotFoundError",
    "PersistenceError",
    "QandaError",
    "ValidationError",
    "setup_logging",
]
