"""Exception hierarchy for qanda.

Every module imports from here. The hierarchy is:

    QandaError
    ├── InvalidIdentifierError(value)
    ├── NotFoundError(kind, entity_id)
    ├── ValidationError
    ├── PersistenceError
    └── ConfigError
"""

from __future__ import annotations


class QandaError(Exception):
    """Base exception for all qanda errors."""


# ─── Lookup Errors ────────────────────────────────────────────


class InvalidIdentifierError(QandaError):
    """Identifier string is not a well-formed object id."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid identifier: {value!r}")


class NotFoundError(QandaError):
    """Well-formed identifier, but no matching document."""

    def __init__(self, kind: str, entity_id: str) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind.capitalize()} not found: {entity_id}")


# ─── Input Errors ─────────────────────────────────────────────


class ValidationError(QandaError):
    """Missing, unknown, or malformed fields."""


# ─── Storage Errors ───────────────────────────────────────────


class PersistenceError(QandaError):
    """Write was not acknowledged or the store connection failed."""


# ─── Configuration Errors ─────────────────────────────────────


class ConfigError(QandaError):
    """Invalid configuration."""
