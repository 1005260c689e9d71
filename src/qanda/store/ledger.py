"""Vote ledger — append-only vote events and on-demand tallies.

Vote rows are never updated or deleted.  A tally is always recomputed
from the log with a single grouped aggregate; nothing is cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqlalchemy import case, func, select
from sqlalchemy.exc import SQLAlchemyError

from qanda.core.errors import PersistenceError, ValidationError
from qanda.store.models import (
    AnswerVote,
    EntityKind,
    QuestionVote,
    _utcnow,
    parse_object_id,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstrumentedAttribute

UPVOTE = 1
DOWNVOTE = -1
VOTE_VALUES = frozenset({UPVOTE, DOWNVOTE})

VoteEvent = QuestionVote | AnswerVote


@dataclass(frozen=True, slots=True)
class Tally:
    """Derived up/down vote counts for one target."""

    upvotes: int = 0
    downvotes: int = 0


def _target(
    kind: EntityKind,
) -> tuple[type[QuestionVote] | type[AnswerVote], InstrumentedAttribute[str]]:
    """Return the vote model and its target column for an entity kind."""
    if kind is EntityKind.QUESTION:
        return QuestionVote, QuestionVote.question_id
    return AnswerVote, AnswerVote.answer_id


class VoteLedger:
    """Async ledger over the ``question_votes`` and ``answer_votes`` logs."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _execute(self, stmt: Any) -> Any:
        try:
            return await self._session.execute(stmt)
        except SQLAlchemyError as e:
            msg = "Vote ledger query failed"
            raise PersistenceError(msg) from e

    async def append(self, kind: EntityKind, target_id: str, value: int) -> VoteEvent:
        """Record one vote event. ``value`` must be +1 or -1."""
        if isinstance(value, bool) or value not in VOTE_VALUES:
            msg = f"Vote value must be {UPVOTE} or {DOWNVOTE}, got {value!r}"
            raise ValidationError(msg)

        target_id = parse_object_id(target_id)
        now = _utcnow()
        event: VoteEvent
        if kind is EntityKind.QUESTION:
            event = QuestionVote(
                question_id=target_id, vote=value, created_at=now, updated_at=now
            )
        else:
            event = AnswerVote(
                answer_id=target_id, vote=value, created_at=now, updated_at=now
            )
        self._session.add(event)
        try:
            await self._session.flush()
        except SQLAlchemyError as e:
            msg = f"Failed to record {kind.value} vote"
            raise PersistenceError(msg) from e
        return event

    async def tally(self, kind: EntityKind, target_id: str) -> Tally:
        """Count upvotes and downvotes for a target (zeros if none)."""
        model, column = _target(kind)
        stmt = (
            select(
                func.sum(case((model.vote == UPVOTE, 1), else_=0)),
                func.sum(case((model.vote == DOWNVOTE, 1), else_=0)),
            )
            .where(column == parse_object_id(target_id))
            .group_by(column)
        )
        row = (await self._execute(stmt)).one_or_none()
        if row is None:
            return Tally()
        upvotes, downvotes = row
        return Tally(upvotes=int(upvotes or 0), downvotes=int(downvotes or 0))

    async def count(self, kind: EntityKind, target_id: str | None = None) -> int:
        """Number of vote events, overall or for one target."""
        model, column = _target(kind)
        stmt = select(func.count(model.id))
        if target_id is not None:
            stmt = stmt.where(column == parse_object_id(target_id))
        return int((await self._execute(stmt)).scalar() or 0)
