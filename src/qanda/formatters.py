"""Map stored documents to the external response shape.

Pure functions: identifiers as strings, timestamps as ISO-8601 (or
None when absent), optional strings defaulted to "".
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from qanda.store.models import Answer, Question

if TYPE_CHECKING:
    from datetime import datetime

    from qanda.store.ledger import Tally


def _iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds")


def format_question(question: Question) -> dict[str, Any]:
    """External representation of a question."""
    return {
        "id": str(question.id),
        "title": question.title or "",
        "description": question.description or "",
        "category": question.category or "",
        "created_at": _iso(question.created_at),
        "updated_at": _iso(question.updated_at),
    }


def format_answer(answer: Answer) -> dict[str, Any]:
    """External representation of an answer."""
    return {
        "id": str(answer.id),
        "question_id": str(answer.question_id) if answer.question_id else "",
        "content": answer.content or "",
        "created_at": _iso(answer.created_at),
        "updated_at": _iso(answer.updated_at),
    }


def format_entity(entity: Question | Answer) -> dict[str, Any]:
    """Format a question or an answer, whichever it is."""
    if isinstance(entity, Question):
        return format_question(entity)
    return format_answer(entity)


def format_with_tally(formatted: dict[str, Any], tally: Tally | None) -> dict[str, Any]:
    """Merge an up/down vote tally into an already formatted document."""
    return {
        **formatted,
        "upvotes": tally.upvotes if tally is not None else 0,
        "downvotes": tally.downvotes if tally is not None else 0,
    }
