"""Vote service: check target, append event, recompute tally.

Every call records a new event.  There is no per-voter de-duplication,
so the same caller voting twice contributes twice to the tally.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from qanda.core.errors import NotFoundError
from qanda.formatters import format_entity, format_with_tally
from qanda.store.database import commit
from qanda.store.ledger import VoteLedger
from qanda.store.models import Answer, EntityKind
from qanda.store.repository import EntityRepository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class VoteService:
    """Casts votes on questions and answers within one session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._entities = EntityRepository(session)
        self._ledger = VoteLedger(session)

    async def cast_vote(
        self, kind: EntityKind, target_id: str, value: int
    ) -> dict[str, Any]:
        """Record a vote and return the formatted target with its tally.

        Raises NotFoundError (and records nothing) if the target, or for
        an answer its parent question, does not exist.
        """
        target = await self._entities.get_by_id(kind, target_id)
        if target is None:
            raise NotFoundError(kind.value, target_id)

        if isinstance(target, Answer) and not await self._entities.exists(
            EntityKind.QUESTION, target.question_id
        ):
            raise NotFoundError(EntityKind.QUESTION.value, target.question_id)

        formatted = format_entity(target)
        await self._ledger.append(kind, formatted["id"], value)
        await commit(self._session)
        logger.info("Recorded %+d vote on %s %s", value, kind.value, formatted["id"])

        tally = await self._ledger.tally(kind, formatted["id"])
        return format_with_tally(formatted, tally)
