"""Health check endpoints."""

from __future__ import annotations

import time
from typing import Any

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])

_START_TIME = time.monotonic()


@router.get("/api/health")
async def health() -> dict[str, str]:
    """Basic health check -- always returns quickly."""
    return {"status": "ok"}


@router.get("/api/health/detailed")
async def health_detailed(request: Request) -> dict[str, Any]:
    """Detailed health check with store status and document counts."""
    from sqlalchemy import func, select, text

    from qanda import __version__
    from qanda.store.ledger import VoteLedger
    from qanda.store.models import Answer, EntityKind, Question

    checks: dict[str, Any] = {
        "status": "ok",
        "version": __version__,
        "uptime_seconds": round(time.monotonic() - _START_TIME, 1),
        "components": {},
    }

    try:
        db_factory = request.app.state.db_factory
        async with db_factory() as session:
            await session.execute(text("SELECT 1"))
            ledger = VoteLedger(session)
            counts = {
                "questions": (
                    await session.execute(select(func.count(Question.id)))
                ).scalar_one(),
                "answers": (
                    await session.execute(select(func.count(Answer.id)))
                ).scalar_one(),
                "question_votes": await ledger.count(EntityKind.QUESTION),
                "answer_votes": await ledger.count(EntityKind.ANSWER),
            }
        checks["components"]["database"] = {"status": "ok", "counts": counts}
    except Exception as e:
        checks["components"]["database"] = {"status": "error", "detail": str(e)}
        checks["status"] = "degraded"

    return checks
