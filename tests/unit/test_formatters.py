"""Tests for the presentation formatters."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone
from typing import TYPE_CHECKING

from qanda.formatters import (
    format_answer,
    format_entity,
    format_question,
    format_with_tally,
)
from qanda.store.ledger import Tally
from qanda.store.models import Answer, EntityKind, Question
from qanda.store.repository import EntityRepository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

QID = "65f0c0ffee0123456789abcd"
WHEN = datetime(2024, 3, 1, 12, 30, tzinfo=UTC)


class TestFormatQuestion:
    def test_full_document(self) -> None:
        q = Question(
            id=QID,
            title="T",
            description="D",
            category="C",
            created_at=WHEN,
            updated_at=WHEN,
        )
        assert format_question(q) == {
            "id": QID,
            "title": "T",
            "description": "D",
            "category": "C",
            "created_at": "2024-03-01T12:30:00.000+00:00",
            "updated_at": "2024-03-01T12:30:00.000+00:00",
        }

    def test_missing_optional_fields(self) -> None:
        q = Question(id=QID)
        data = format_question(q)
        assert data["title"] == ""
        assert data["description"] == ""
        assert data["category"] == ""
        assert data["created_at"] is None
        assert data["updated_at"] is None

    def test_other_offsets_kept(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        when = datetime(2024, 3, 1, 14, 30, tzinfo=plus_two)
        q = Question(id=QID, created_at=when)
        assert format_question(q)["created_at"] == "2024-03-01T14:30:00.000+02:00"


class TestFormatAnswer:
    def test_full_document(self) -> None:
        a = Answer(
            id="a" * 24,
            question_id=QID,
            content="hi",
            created_at=WHEN,
            updated_at=WHEN,
        )
        data = format_answer(a)
        assert data["id"] == "a" * 24
        assert data["question_id"] == QID
        assert data["content"] == "hi"
        assert data["created_at"] == "2024-03-01T12:30:00.000+00:00"

    def test_missing_optional_fields(self) -> None:
        data = format_answer(Answer(id="a" * 24))
        assert data["question_id"] == ""
        assert data["content"] == ""
        assert data["updated_at"] is None


class TestFormatWithTally:
    def test_adds_counts(self) -> None:
        data = format_with_tally({"id": QID}, Tally(upvotes=3, downvotes=1))
        assert data == {"id": QID, "upvotes": 3, "downvotes": 1}

    def test_missing_tally_defaults_to_zero(self) -> None:
        data = format_with_tally({"id": QID}, None)
        assert data["upvotes"] == 0
        assert data["downvotes"] == 0

    def test_does_not_mutate_input(self) -> None:
        original = {"id": QID}
        format_with_tally(original, Tally(1, 1))
        assert original == {"id": QID}


def test_format_entity_dispatches_on_type() -> None:
    q = Question(id=QID, title="T")
    a = Answer(id="a" * 24, question_id=QID, content="c")
    assert format_entity(q) == format_question(q)
    assert format_entity(a) == format_answer(a)


async def test_created_question_round_trips(db_session: AsyncSession):
    fields = {"title": "A", "description": "B", "category": "tech"}
    repo = EntityRepository(db_session)
    question = await repo.create(EntityKind.QUESTION, fields)
    await db_session.commit()

    data = format_question(question)
    for key, value in fields.items():
        assert data[key] == value
    assert data["id"]
    assert data["created_at"] is not None
    assert data["updated_at"] is not None


async def test_reloaded_timestamps_carry_utc_offset(db_session: AsyncSession):
    repo = EntityRepository(db_session)
    question = await repo.create(EntityKind.QUESTION, {"title": "A"})
    qid = question.id
    await db_session.commit()
    db_session.expire_all()

    reloaded = await repo.get_by_id(EntityKind.QUESTION, qid)
    assert reloaded is not None
    data = format_question(reloaded)
    assert data["created_at"].endswith("+00:00")
    assert data["updated_at"].endswith("+00:00")
