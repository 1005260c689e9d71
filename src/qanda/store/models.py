"""SQLAlchemy models for the Q&A document collections.

Entities: Question, Answer.
Vote log: QuestionVote, AnswerVote (append-only, never updated).

Answers and votes reference their targets by plain indexed columns.
Referential checks happen at write time in the repository; the store
does not enforce them, so orphaned vote rows may outlive their target.
"""

from __future__ import annotations

import enum
import re
import threading
import uuid
from datetime import UTC, datetime, timedelta

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from qanda.core.errors import InvalidIdentifierError

OBJECT_ID_LENGTH = 24

_OBJECT_ID_RE = re.compile(r"[0-9a-fA-F]{24}")


def _object_id() -> str:
    """Generate a 24-hex-character identifier for primary keys."""
    return uuid.uuid4().hex[:OBJECT_ID_LENGTH]


_clock_lock = threading.Lock()
_last_timestamp = datetime.min.replace(tzinfo=UTC)


def _utcnow() -> datetime:
    """Current UTC time, strictly increasing within the process.

    Lists are ordered by ``created_at``; two writes in the same clock
    tick still get distinct, ordered timestamps.
    """
    global _last_timestamp
    with _clock_lock:
        now = datetime.now(UTC)
        if now <= _last_timestamp:
            now = _last_timestamp + timedelta(microseconds=1)
        _last_timestamp = now
        return now


def parse_object_id(value: str) -> str:
    """Normalise an identifier string, rejecting malformed input.

    Raises InvalidIdentifierError unless *value* is exactly 24 hex chars.
    """
    if not isinstance(value, str) or not _OBJECT_ID_RE.fullmatch(value):
        raise InvalidIdentifierError(str(value))
    return value.lower()


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone-aware UTC datetimes on every backend.

    SQLite returns naive values; they are stored as UTC and come back
    tagged as UTC, so loaded and freshly created timestamps compare.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    @staticmethod
    def _as_utc(value: datetime | None) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_bind_param(self, value, dialect):  # type: ignore[no-untyped-def]
        return self._as_utc(value)

    def process_result_value(self, value, dialect):  # type: ignore[no-untyped-def]
        return self._as_utc(value)


class EntityKind(enum.Enum):
    """Kinds of top-level documents that can be voted on."""

    QUESTION = "question"
    ANSWER = "answer"


class Base(DeclarativeBase):
    """Declarative base for all qanda models."""


# ── Entities ─────────────────────────────────────────────────────


class Question(Base):
    """A question posted by a client."""

    __tablename__ = "questions"
    __table_args__ = (Index("ix_questions_created_at", "created_at"),)

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH), primary_key=True, default=_object_id
    )
    title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=_utcnow
    )


class Answer(Base):
    """An answer posted under a question."""

    __tablename__ = "answers"

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH), primary_key=True, default=_object_id
    )
    question_id: Mapped[str] = mapped_column(String(OBJECT_ID_LENGTH), index=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=_utcnow
    )


# ── Vote log ─────────────────────────────────────────────────────


class QuestionVote(Base):
    """One immutable vote event on a question."""

    __tablename__ = "question_votes"

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH), primary_key=True, default=_object_id
    )
    question_id: Mapped[str] = mapped_column(String(OBJECT_ID_LENGTH), index=True)
    vote: Mapped[int] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=_utcnow
    )


class AnswerVote(Base):
    """One immutable vote event on an answer."""

    __tablename__ = "answer_votes"

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH), primary_key=True, default=_object_id
    )
    answer_id: Mapped[str] = mapped_column(String(OBJECT_ID_LENGTH), index=True)
    vote: Mapped[int] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=_utcnow
    )
