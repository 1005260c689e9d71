"""/answers endpoints: read, update, delete, votes."""

from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel, ConfigDict, Field

from qanda.core.errors import NotFoundError
from qanda.formatters import format_answer
from qanda.services.voting import VoteService
from qanda.store.database import commit
from qanda.store.ledger import DOWNVOTE, UPVOTE
from qanda.store.models import EntityKind
from qanda.store.repository import EntityRepository

router = APIRouter(prefix="/answers", tags=["answers"])

MAX_ANSWER_LENGTH = 300


# -- Schemas -------------------------------------------------------------------


class AnswerCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    content: str = Field(min_length=1, max_length=MAX_ANSWER_LENGTH)


class AnswerUpdate(AnswerCreate):
    pass


class AnswerResponse(BaseModel):
    id: str
    question_id: str
    content: str
    created_at: str | None = None
    updated_at: str | None = None


class VotedAnswerResponse(AnswerResponse):
    upvotes: int = 0
    downvotes: int = 0


class AnswerEnvelope(BaseModel):
    message: str
    data: AnswerResponse


class AnswerListEnvelope(BaseModel):
    message: str
    data: list[AnswerResponse]


class VotedAnswerEnvelope(BaseModel):
    message: str
    data: VotedAnswerResponse


class DeletedAnswer(BaseModel):
    id: str


class DeletedAnswerEnvelope(BaseModel):
    message: str
    data: DeletedAnswer


# -- GET /answers/{id} ---------------------------------------------------------


@router.get("/{answer_id}", response_model=AnswerEnvelope)
async def get_answer(answer_id: str, request: Request) -> AnswerEnvelope:
    async with request.app.state.db_factory() as session:
        repo = EntityRepository(session)
        answer = await repo.get_by_id(EntityKind.ANSWER, answer_id)
        if answer is None:
            raise NotFoundError(EntityKind.ANSWER.value, answer_id)
        data = AnswerResponse(**format_answer(answer))
    return AnswerEnvelope(message="Successfully retrieved the answer.", data=data)


# -- PUT /answers/{id} ---------------------------------------------------------


@router.put("/{answer_id}", response_model=AnswerEnvelope)
async def update_answer(
    answer_id: str, body: AnswerUpdate, request: Request
) -> AnswerEnvelope:
    async with request.app.state.db_factory() as session:
        repo = EntityRepository(session)
        answer = await repo.update(EntityKind.ANSWER, answer_id, body.model_dump())
        data = AnswerResponse(**format_answer(answer))
        await commit(session)
    return AnswerEnvelope(message="Successfully updated the answer.", data=data)


# -- DELETE /answers/{id} ------------------------------------------------------


@router.delete("/{answer_id}", response_model=DeletedAnswerEnvelope)
async def delete_answer(answer_id: str, request: Request) -> DeletedAnswerEnvelope:
    async with request.app.state.db_factory() as session:
        repo = EntityRepository(session)
        await repo.delete(EntityKind.ANSWER, answer_id)
        await commit(session)
    return DeletedAnswerEnvelope(
        message="Successfully deleted the answer.",
        data=DeletedAnswer(id=answer_id.lower()),
    )


# -- Votes ---------------------------------------------------------------------


async def _vote(request: Request, answer_id: str, value: int) -> dict[str, object]:
    async with request.app.state.db_factory() as session:
        return await VoteService(session).cast_vote(EntityKind.ANSWER, answer_id, value)


@router.post("/{answer_id}/upvote", response_model=VotedAnswerEnvelope)
async def upvote_answer(answer_id: str, request: Request) -> VotedAnswerEnvelope:
    data = await _vote(request, answer_id, UPVOTE)
    return VotedAnswerEnvelope(
        message="Successfully upvoted the answer.",
        data=VotedAnswerResponse(**data),
    )


@router.post("/{answer_id}/downvote", response_model=VotedAnswerEnvelope)
async def downvote_answer(answer_id: str, request: Request) -> VotedAnswerEnvelope:
    data = await _vote(request, answer_id, DOWNVOTE)
    return VotedAnswerEnvelope(
        message="Successfully downvoted the answer.",
        data=VotedAnswerResponse(**data),
    )
