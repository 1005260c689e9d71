"""Question deletion with cascade to its answers.

The question delete and the answer cleanup are committed separately.
If the process fails between the two, the question is gone and its
answers remain as orphans; this is logged and not retried.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from qanda.core.errors import PersistenceError
from qanda.store.database import commit
from qanda.store.models import EntityKind, parse_object_id
from qanda.store.repository import EntityRepository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class CascadeService:
    """Deletes questions together with their dependent answers."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._entities = EntityRepository(session)

    async def delete_question(self, question_id: str) -> int:
        """Delete a question, then its answers. Returns answers removed.

        Raises NotFoundError if the question does not exist; in that
        case no answers are touched.
        """
        question_id = parse_object_id(question_id)
        await self._entities.delete(EntityKind.QUESTION, question_id)
        await commit(self._session)
        logger.info("Deleted question %s", question_id)

        try:
            return await self.delete_question_cascade(question_id)
        except PersistenceError:
            logger.error(
                "Question %s deleted but its answers were not; they are orphaned",
                question_id,
            )
            raise

    async def delete_question_cascade(self, question_id: str) -> int:
        """Delete every answer referencing ``question_id``.

        Zero matching answers is a success.
        """
        removed = await self._entities.delete_answers_for_question(question_id)
        await commit(self._session)
        logger.debug(
            "Cascade removed %d answer(s) of question %s", removed, question_id
        )
        return removed
