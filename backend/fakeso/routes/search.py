"""
Fake Stack Overflow Backend — Search Route Handler
====================================================

What:  GET /api/search?q=... for the header search box.

Query syntax:
    [tag]   exact tag match (case-insensitive)
    word    whole-word match in title or body (case-insensitive)
    All terms are OR-ed; results are newest first with their tags.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fakeso.database import get_db_session
from fakeso.schemas.question import QuestionWithTags
from fakeso.services.question_service import question_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Search"])


@router.get(
    "/search",
    response_model=List[QuestionWithTags],
    summary="Search questions by tags and words",
)
async def search_questions(
    q: str = Query(
        default="",
        max_length=500,
        description="Search string, e.g. '[javascript] loop'",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[QuestionWithTags]:
    return await question_service.search_questions(db, q)
