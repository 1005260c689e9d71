"""/questions endpoints: CRUD, keyword search, answers, votes."""

from __future__ import annotations

from fastapi import APIRouter, Query, Request
from pydantic import BaseModel, ConfigDict, Field

from qanda.api.routes.answers import (
    AnswerCreate,
    AnswerEnvelope,
    AnswerListEnvelope,
    AnswerResponse,
)
from qanda.core.errors import NotFoundError
from qanda.formatters import format_answer, format_question
from qanda.services.cascade import CascadeService
from qanda.services.voting import VoteService
from qanda.store.database import commit
from qanda.store.ledger import DOWNVOTE, UPVOTE
from qanda.store.models import EntityKind
from qanda.store.repository import EntityRepository

router = APIRouter(prefix="/questions", tags=["questions"])


# -- Schemas -------------------------------------------------------------------


class QuestionCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    category: str = Field(min_length=1, max_length=100)


class QuestionUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None, min_length=1, max_length=100)


class QuestionResponse(BaseModel):
    id: str
    title: str
    description: str
    category: str
    created_at: str | None = None
    updated_at: str | None = None


class VotedQuestionResponse(QuestionResponse):
    upvotes: int = 0
    downvotes: int = 0


class QuestionEnvelope(BaseModel):
    message: str
    data: QuestionResponse


class QuestionListEnvelope(BaseModel):
    message: str
    data: list[QuestionResponse]


class VotedQuestionEnvelope(BaseModel):
    message: str
    data: VotedQuestionResponse


class DeletedQuestion(BaseModel):
    id: str
    deleted_answers: int


class DeletedQuestionEnvelope(BaseModel):
    message: str
    data: DeletedQuestion


# -- GET /questions ------------------------------------------------------------


@router.get("", response_model=QuestionListEnvelope)
async def list_questions(
    request: Request,
    title: str | None = None,
    category: str | None = None,
    limit: int | None = Query(default=None, ge=1, le=100),
) -> QuestionListEnvelope:
    """Keyword search over questions (title OR category, case-insensitive)."""
    if limit is None:
        limit = request.app.state.config.general.page_size

    async with request.app.state.db_factory() as session:
        repo = EntityRepository(session)
        questions = await repo.list_entities(
            EntityKind.QUESTION, title=title, category=category, limit=limit
        )
        data = [QuestionResponse(**format_question(q)) for q in questions]
    return QuestionListEnvelope(
        message="Successfully retrieved the list of questions.", data=data
    )


# -- GET /questions/{id} -------------------------------------------------------


@router.get("/{question_id}", response_model=QuestionEnvelope)
async def get_question(question_id: str, request: Request) -> QuestionEnvelope:
    async with request.app.state.db_factory() as session:
        repo = EntityRepository(session)
        question = await repo.get_by_id(EntityKind.QUESTION, question_id)
        if question is None:
            raise NotFoundError(EntityKind.QUESTION.value, question_id)
        data = QuestionResponse(**format_question(question))
    return QuestionEnvelope(message="Successfully retrieved the question.", data=data)


# -- POST /questions -----------------------------------------------------------


@router.post("", response_model=QuestionEnvelope, status_code=201)
async def create_question(body: QuestionCreate, request: Request) -> QuestionEnvelope:
    async with request.app.state.db_factory() as session:
        repo = EntityRepository(session)
        question = await repo.create(EntityKind.QUESTION, body.model_dump())
        data = QuestionResponse(**format_question(question))
        await commit(session)
    return QuestionEnvelope(message="Question created successfully.", data=data)


# -- PUT /questions/{id} -------------------------------------------------------


@router.put("/{question_id}", response_model=QuestionEnvelope)
async def update_question(
    question_id: str, body: QuestionUpdate, request: Request
) -> QuestionEnvelope:
    async with request.app.state.db_factory() as session:
        repo = EntityRepository(session)
        question = await repo.update(
            EntityKind.QUESTION, question_id, body.model_dump(exclude_none=True)
        )
        data = QuestionResponse(**format_question(question))
        await commit(session)
    return QuestionEnvelope(message="Successfully updated the question.", data=data)


# -- DELETE /questions/{id} ----------------------------------------------------


@router.delete("/{question_id}", response_model=DeletedQuestionEnvelope)
async def delete_question(
    question_id: str, request: Request
) -> DeletedQuestionEnvelope:
    """Delete a question and every answer posted under it."""
    async with request.app.state.db_factory() as session:
        removed = await CascadeService(session).delete_question(question_id)
    return DeletedQuestionEnvelope(
        message="Successfully deleted the question.",
        data=DeletedQuestion(id=question_id.lower(), deleted_answers=removed),
    )


# -- Answers under a question --------------------------------------------------


@router.get("/{question_id}/answers", response_model=AnswerListEnvelope)
async def list_answers(question_id: str, request: Request) -> AnswerListEnvelope:
    async with request.app.state.db_factory() as session:
        repo = EntityRepository(session)
        answers = await repo.list_answers(question_id)
        if answers is None:
            raise NotFoundError(EntityKind.QUESTION.value, question_id)
        data = [AnswerResponse(**format_answer(a)) for a in answers]
    return AnswerListEnvelope(
        message="Successfully retrieved the answers.", data=data
    )


@router.post(
    "/{question_id}/answers", response_model=AnswerEnvelope, status_code=201
)
async def create_answer(
    question_id: str, body: AnswerCreate, request: Request
) -> AnswerEnvelope:
    async with request.app.state.db_factory() as session:
        repo = EntityRepository(session)
        answer = await repo.create(
            EntityKind.ANSWER, {**body.model_dump(), "question_id": question_id}
        )
        data = AnswerResponse(**format_answer(answer))
        await commit(session)
    return AnswerEnvelope(message="Answer created successfully.", data=data)


# -- Votes ---------------------------------------------------------------------


async def _vote(request: Request, question_id: str, value: int) -> dict[str, object]:
    async with request.app.state.db_factory() as session:
        return await VoteService(session).cast_vote(
            EntityKind.QUESTION, question_id, value
        )


@router.post("/{question_id}/upvote", response_model=VotedQuestionEnvelope)
async def upvote_question(question_id: str, request: Request) -> VotedQuestionEnvelope:
    data = await _vote(request, question_id, UPVOTE)
    return VotedQuestionEnvelope(
        message="Successfully upvoted the question.",
        data=VotedQuestionResponse(**data),
    )


@router.post("/{question_id}/downvote", response_model=VotedQuestionEnvelope)
async def downvote_question(
    question_id: str, request: Request
) -> VotedQuestionEnvelope:
    data = await _vote(request, question_id, DOWNVOTE)
    return VotedQuestionEnvelope(
        message="Successfully downvoted the question.",
        data=VotedQuestionResponse(**data),
    )
