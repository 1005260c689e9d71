"""Entity repository — CRUD and keyword search for questions and answers.

All mutating methods add objects to the session and flush, but do NOT
commit.  The caller controls transaction boundaries via
``session.commit()`` (see ``qanda.store.database.commit``).

Absence on reads is reported as ``None``; absence on writes raises
``NotFoundError``.  Malformed identifiers raise
``InvalidIdentifierError`` before the store is touched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import SQLAlchemyError

from qanda.core.errors import NotFoundError, PersistenceError, ValidationError
from qanda.store.models import (
    Answer,
    EntityKind,
    Question,
    _utcnow,
    parse_object_id,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.sql import Executable

Entity = Question | Answer

DEFAULT_LIMIT = 10

_MODELS: dict[EntityKind, type[Question] | type[Answer]] = {
    EntityKind.QUESTION: Question,
    EntityKind.ANSWER: Answer,
}

# Fields a client may set.  ``question_id`` is only accepted on answer
# creation and never changes afterwards.
WRITABLE_FIELDS: dict[EntityKind, frozenset[str]] = {
    EntityKind.QUESTION: frozenset({"title", "description", "category"}),
    EntityKind.ANSWER: frozenset({"content"}),
}


def _like_pattern(term: str) -> str:
    """Case-insensitive substring pattern with LIKE wildcards escaped."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _check_fields(kind: EntityKind, data: Mapping[str, Any]) -> dict[str, Any]:
    """Return *data* as a dict, rejecting fields outside the allow-list."""
    unknown = set(data) - WRITABLE_FIELDS[kind]
    if unknown:
        msg = f"Unexpected {kind.value} fields: {', '.join(sorted(unknown))}"
        raise ValidationError(msg)
    return dict(data)


class EntityRepository:
    """Async repository for question and answer documents."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    # ── Store access ─────────────────────────────────────────────

    async def _execute(self, stmt: Executable) -> Any:
        try:
            return await self._session.execute(stmt)
        except SQLAlchemyError as e:
            msg = "Document store request failed"
            raise PersistenceError(msg) from e

    async def _flush(self) -> None:
        try:
            await self._session.flush()
        except SQLAlchemyError as e:
            msg = "Write was not acknowledged by the store"
            raise PersistenceError(msg) from e

    # ── Create ───────────────────────────────────────────────────

    async def create(self, kind: EntityKind, data: Mapping[str, Any]) -> Entity:
        """Insert a new document and return it with its generated ID.

        For answers, ``data`` must carry ``question_id`` referencing an
        existing question; nothing is written otherwise.
        """
        fields = dict(data)
        entity: Entity
        now = _utcnow()
        if kind is EntityKind.ANSWER:
            raw_question_id = fields.pop("question_id", None)
            if raw_question_id is None:
                msg = "Answer requires a question_id"
                raise ValidationError(msg)
            question_id = parse_object_id(raw_question_id)
            if not await self.exists(EntityKind.QUESTION, question_id):
                raise NotFoundError(EntityKind.QUESTION.value, question_id)
            entity = Answer(
                question_id=question_id,
                created_at=now,
                updated_at=now,
                **_check_fields(kind, fields),
            )
        else:
            entity = Question(
                created_at=now, updated_at=now, **_check_fields(kind, fields)
            )
        self._session.add(entity)
        await self._flush()
        return entity

    # ── Read ─────────────────────────────────────────────────────

    async def get_by_id(self, kind: EntityKind, entity_id: str) -> Entity | None:
        """Load a document by ID, or None if it does not exist."""
        model = _MODELS[kind]
        stmt = select(model).where(model.id == parse_object_id(entity_id))
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def exists(self, kind: EntityKind, entity_id: str) -> bool:
        """Return True if a document with this ID exists."""
        return await self.get_by_id(kind, entity_id) is not None

    async def list_entities(
        self,
        kind: EntityKind,
        *,
        title: str | None = None,
        category: str | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> list[Entity]:
        """List documents in insertion order.

        Order is by ``created_at``, which ``_utcnow`` keeps strictly
        increasing within one process. Writers in separate processes can
        still interleave; ties then fall back to ``id``.

        For questions, ``title`` and ``category`` are case-insensitive
        substring filters combined with OR.  With neither supplied the
        first ``limit`` documents are returned unfiltered.
        """
        if limit < 1:
            msg = f"limit must be positive, got {limit}"
            raise ValidationError(msg)

        model = _MODELS[kind]
        stmt = select(model).order_by(model.created_at, model.id)

        if kind is EntityKind.QUESTION:
            clauses = []
            if title:
                clauses.append(
                    Question.title.ilike(_like_pattern(title), escape="\\")
                )
            if category:
                clauses.append(
                    Question.category.ilike(_like_pattern(category), escape="\\")
                )
            if clauses:
                stmt = stmt.where(or_(*clauses))
        elif title or category:
            msg = "title/category filters apply to questions only"
            raise ValidationError(msg)

        result = await self._execute(stmt.limit(limit))
        return list(result.scalars().all())

    async def list_answers(self, question_id: str) -> list[Answer] | None:
        """Get all answers for a question, or None if the question is absent."""
        question_id = parse_object_id(question_id)
        if not await self.exists(EntityKind.QUESTION, question_id):
            return None
        stmt = (
            select(Answer)
            .where(Answer.question_id == question_id)
            .order_by(Answer.created_at, Answer.id)
        )
        result = await self._execute(stmt)
        return list(result.scalars().all())

    # ── Update ───────────────────────────────────────────────────

    async def update(
        self, kind: EntityKind, entity_id: str, data: Mapping[str, Any]
    ) -> Entity:
        """Merge supplied fields into a document and refresh ``updated_at``.

        Raises NotFoundError if the document does not exist.
        """
        fields = _check_fields(kind, data)
        if not fields:
            msg = f"No {kind.value} fields to update"
            raise ValidationError(msg)

        entity = await self.get_by_id(kind, entity_id)
        if entity is None:
            raise NotFoundError(kind.value, entity_id)
        for name, value in fields.items():
            setattr(entity, name, value)
        entity.updated_at = _utcnow()
        await self._flush()
        return entity

    # ── Delete ───────────────────────────────────────────────────

    async def delete(self, kind: EntityKind, entity_id: str) -> None:
        """Delete a single document.

        Raises NotFoundError if the document does not exist.  Deleting a
        question here does not touch its answers; use
        ``CascadeService.delete_question`` for that.
        """
        model = _MODELS[kind]
        entity_id = parse_object_id(entity_id)
        result = await self._execute(delete(model).where(model.id == entity_id))
        if result.rowcount == 0:
            raise NotFoundError(kind.value, entity_id)

    async def delete_answers_for_question(self, question_id: str) -> int:
        """Delete every answer referencing a question. Returns the count."""
        stmt = delete(Answer).where(Answer.question_id == parse_object_id(question_id))
        result = await self._execute(stmt)
        return result.rowcount or 0
