"""Document store: models, repository, vote ledger."""

from qanda.store.database import commit, create_db, create_schema
from qanda.store.ledger import DOWNVOTE, UPVOTE, Tally, VoteLedger
from qanda.store.models import (
    Answer,
    AnswerVote,
    Base,
    EntityKind,
    Question,
    QuestionVote,
    parse_object_id,
)
from qanda.store.repository import EntityRepository

__all__ = [
    "DOWNVOTE",
    "UPVOTE",
    "Answer",
    "AnswerVote",
    "Base",
    "EntityKind",
    "EntityRepository",
    "Question",
    "QuestionVote",
    "Tally",
    "VoteLedger",
    "commit",
    "create_db",
    "create_schema",
    "parse_object_id",
]
