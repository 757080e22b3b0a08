"""
Fake Stack Overflow Backend — Question Route Handlers
=======================================================

What:  Every /api/questions endpoint: posting, listings, detail, answers of a
       question, and view counting.
How:   Extracts path/query/body data, delegates to QuestionService or
       AnswerService, returns JSON.
Who:   Called by the React client's home page, tag page and question detail page.

Route order:
    Fixed paths (/newest, /unanswered, /active, /tags, /tag/{tid},
    /questionwithtags/{order}) are declared before /{qid}; otherwise the
    path converter would try to read "newest" as a question id.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fakeso.database import get_db_session
from fakeso.schemas.answer import AnswerResponse
from fakeso.schemas.common import ErrorResponse
from fakeso.schemas.question import (
    QuestionCreate,
    QuestionResponse,
    QuestionWithTags,
    ViewCountResponse,
)
from fakeso.services.answer_service import answer_service
from fakeso.services.question_service import question_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/questions", tags=["Questions"])


@router.get(
    "",
    response_model=List[QuestionResponse],
    summary="List all questions",
)
async def list_questions(
    db: AsyncSession = Depends(get_db_session),
) -> List[QuestionResponse]:
    return await question_service.list_questions(db)


@router.post(
    "",
    status_code=201,
    response_model=QuestionResponse,
    responses={
        201: {"description": "Question posted", "model": QuestionResponse},
        400: {"description": "Form fields rejected", "model": ErrorResponse},
    },
    summary="Post a new question",
    description=(
        "Creates a question. Tags are matched to existing tags ignoring case and "
        "created when new. Title at most 100 characters, 1-5 tags of at most 20 "
        "characters each, hyperlinks must be [label](http...) form."
    ),
)
async def add_question(
    payload: QuestionCreate,
    db: AsyncSession = Depends(get_db_session),
) -> QuestionResponse:
    return await question_service.add_question(db, payload)


@router.get(
    "/newest",
    response_model=List[QuestionResponse],
    summary="Questions, newest first",
)
async def newest_questions(
    db: AsyncSession = Depends(get_db_session),
) -> List[QuestionResponse]:
    return await question_service.newest(db)


@router.get(
    "/unanswered",
    response_model=List[QuestionResponse],
    summary="Unanswered questions, newest first",
)
async def unanswered_questions(
    db: AsyncSession = Depends(get_db_session),
) -> List[QuestionResponse]:
    return await question_service.unanswered(db)


@router.get(
    "/active",
    response_model=List[QuestionResponse],
    summary="Questions by most recent answer",
)
async def active_questions(
    db: AsyncSession = Depends(get_db_session),
) -> List[QuestionResponse]:
    return await question_service.active(db)


@router.get(
    "/tags",
    response_model=List[QuestionWithTags],
    responses={400: {"description": "Unknown order", "model": ErrorResponse}},
    summary="Questions with their tags",
)
async def questions_with_tags(
    order: str = Query(
        default="newest",
        description="Listing order: newest, unanswered or active",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[QuestionWithTags]:
    return await question_service.questions_with_tags(db, order)


@router.get(
    "/questionwithtags/{order}",
    response_model=List[QuestionWithTags],
    responses={400: {"description": "Unknown order", "model": ErrorResponse}},
    summary="Questions with their tags, in the given order",
)
async def questions_with_tags_by_order(
    order: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[QuestionWithTags]:
    return await question_service.questions_with_tags(db, order)


@router.get(
    "/tag/{tid}",
    response_model=List[QuestionWithTags],
    summary="Questions carrying a tag, newest first",
)
async def questions_by_tag(
    tid: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> List[QuestionWithTags]:
    return await question_service.get_questions_by_tag(db, tid)


@router.get(
    "/{qid}",
    response_model=QuestionResponse,
    responses={404: {"description": "Question not found", "model": ErrorResponse}},
    summary="Get a single question",
)
async def get_question(
    qid: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> QuestionResponse:
    return await question_service.get_question(db, qid)


@router.get(
    "/{qid}/answers",
    response_model=List[AnswerResponse],
    summary="Answers of a question, newest first",
)
async def answers_for_question(
    qid: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> List[AnswerResponse]:
    return await answer_service.answers_for_question(db, qid)


@router.put(
    "/{qid}/views",
    response_model=ViewCountResponse,
    responses={404: {"description": "Question not found", "model": ErrorResponse}},
    summary="Count one view of a question",
)
async def increment_view_count(
    qid: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ViewCountResponse:
    return await question_service.increment_view_count(db, qid)
