"""
Fake Stack Overflow Backend — Tag Route Handlers
==================================================

What:  GET /api/tags (tags with question counts) and POST /api/tags/ids
       (resolve a list of tag ids).
Who:   Called by the client's tags page and question cards.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fakeso.database import get_db_session
from fakeso.schemas.tag import TagCountResponse, TagIdsRequest, TagResponse
from fakeso.services.tag_service import tag_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tags", tags=["Tags"])


@router.get(
    "",
    response_model=List[TagCountResponse],
    summary="Tags with per-tag question counts",
)
async def tags_with_counts(
    db: AsyncSession = Depends(get_db_session),
) -> List[TagCountResponse]:
    return await tag_service.tags_with_counts(db)


@router.post(
    "/ids",
    response_model=List[TagResponse],
    summary="Look up tags by id",
    description="Returns the tags among the given ids that exist, in request order.",
)
async def tags_by_ids(
    payload: TagIdsRequest,
    db: AsyncSession = Depends(get_db_session),
) -> List[TagResponse]:
    return await tag_service.get_tags_by_ids(db, payload.tag_ids)
