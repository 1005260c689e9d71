"""Tests for the core error hierarchy."""

from qanda.core.errors import (
    ConfigError,
    InvalidIdentifierError,
    NotFoundError,
    PersistenceError,
    QandaError,
    ValidationError,
)


class TestHierarchy:
    """All errors inherit from QandaError."""

    def test_all_are_qanda_errors(self):
        errors = [
            InvalidIdentifierError("xyz"),
            NotFoundError("question", "abc"),
            ValidationError("bad"),
            PersistenceError("down"),
            ConfigError("bad config"),
        ]
        for err in errors:
            assert isinstance(err, QandaError)

    def test_not_found_is_distinct_from_invalid_identifier(self):
        assert not isinstance(NotFoundError("question", "x"), InvalidIdentifierError)
        assert not isinstance(InvalidIdentifierError("x"), NotFoundError)

    def test_validation_error_is_not_builtin_value_error(self):
        assert not isinstance(ValidationError("x"), ValueError)


class TestMessages:
    def test_invalid_identifier(self):
        err = InvalidIdentifierError("nope")
        assert err.value == "nope"
        assert str(err) == "Invalid identifier: 'nope'"

    def test_not_found(self):
        err = NotFoundError("answer", "abc123")
        assert err.kind == "answer"
        assert err.entity_id == "abc123"
        assert str(err) == "Answer not found: abc123"
