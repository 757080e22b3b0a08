"""
Fake Stack Overflow Backend — Answer Route Handlers
=====================================================

What:  POST /api/answers (post an answer) and GET /api/answers (all answers).
Who:   Called by the client's new-answer page.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fakeso.database import get_db_session
from fakeso.schemas.answer import AnswerCreate, AnswerResponse
from fakeso.schemas.common import ErrorResponse
from fakeso.services.answer_service import answer_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/answers", tags=["Answers"])


@router.get(
    "",
    response_model=List[AnswerResponse],
    summary="List all answers",
)
async def list_answers(
    db: AsyncSession = Depends(get_db_session),
) -> List[AnswerResponse]:
    return await answer_service.list_answers(db)


@router.post(
    "",
    status_code=201,
    response_model=AnswerResponse,
    responses={
        201: {"description": "Answer posted", "model": AnswerResponse},
        400: {"description": "Form fields rejected", "model": ErrorResponse},
        404: {"description": "Question not found", "model": ErrorResponse},
    },
    summary="Answer a question",
)
async def add_answer(
    payload: AnswerCreate,
    db: AsyncSession = Depends(get_db_session),
) -> AnswerResponse:
    return await answer_service.add_answer(db, payload)
