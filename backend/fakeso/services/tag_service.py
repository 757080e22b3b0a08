"""
Fake Stack Overflow Backend — Tag Service
===========================================

What:  Data access for tags: case-insensitive lookup and creation, per-tag
       question counts, lookup by ids.
Who:   Called by the tags router and by QuestionService when a question is
       posted or searched.

Case-insensitive identity:
    A tag is identified by lower(name). Looking up "JavaScript" finds the
    existing "javascript" row. The unique index on lower(name) backs this up
    at the database level; an insert that loses a race against a concurrent
    request is rolled back to its savepoint and the existing row is reused.
"""

import logging
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fakeso.exceptions import DatabaseError
from fakeso.models.question import question_tags
from fakeso.models.tag import Tag
from fakeso.schemas.tag import TagCountResponse, TagResponse

logger = logging.getLogger(__name__)


def dedupe_tag_names(names: Iterable[str]) -> List[str]:
    """Drop names that repeat ignoring case; the first spelling wins."""
    seen = set()
    unique: List[str] = []
    for name in names:
        key = name.lower()
        if key not in seen:
            seen.add(key)
            unique.append(name)
    return unique


def tag_response(tag: Tag) -> TagResponse:
    return TagResponse(id=tag.id, name=tag.name, url=tag.url)


class TagService:
    """Stateless tag operations; every method receives the request's session."""

    async def list_tags(self, db: AsyncSession) -> List[TagResponse]:
        try:
            result = await db.execute(select(Tag).order_by(func.lower(Tag.name)))
            return [tag_response(tag) for tag in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing tags: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve tags. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

    async def find_by_names(self, db: AsyncSession, names: Iterable[str]) -> List[Tag]:
        """Tags whose name equals any of `names`, ignoring case."""
        keys = {name.lower() for name in names if name}
        if not keys:
            return []
        result = await db.execute(select(Tag).where(func.lower(Tag.name).in_(sorted(keys))))
        return list(result.scalars().all())

    async def _find_one(self, db: AsyncSession, name: str) -> Optional[Tag]:
        result = await db.execute(
            select(Tag).where(func.lower(Tag.name) == name.lower())
        )
        return result.scalar_one_or_none()

    async def _get_or_create(self, db: AsyncSession, name: str) -> Tag:
        """
        Existing tag matching `name` ignoring case, or a newly inserted one.

        The insert runs in a SAVEPOINT. When a concurrent request created the
        same tag after our lookup, the unique index on lower(name) rejects it;
        only the savepoint is rolled back and the winner's row is returned.
        """
        tag = await self._find_one(db, name)
        if tag is not None:
            return tag

        try:
            # Leaving the block flushes, so later lookups in this transaction see the row
            async with db.begin_nested():
                tag = Tag(name=name)
                db.add(tag)
        except IntegrityError:
            existing = await self._find_one(db, name)
            if existing is None:
                raise
            logger.info("Tag '%s' was created concurrently; reusing %s", name, existing.id)
            return existing

        logger.info("Created tag '%s' (%s)", tag.name, tag.id)
        return tag

    async def resolve_tags(self, db: AsyncSession, names: Iterable[str]) -> List[Tag]:
        """
        Map submitted tag names to Tag rows, creating the missing ones.

        Names are deduplicated case-insensitively first, so "React react"
        yields a single tag. The returned list follows submission order.
        """
        return [await self._get_or_create(db, name) for name in dedupe_tag_names(names)]

    async def add_tag(self, db: AsyncSession, name: str) -> TagResponse:
        """Return the existing tag matching `name` ignoring case, or create it."""
        try:
            return tag_response(await self._get_or_create(db, name.strip()))
        except SQLAlchemyError as e:
            logger.error("Database error adding tag %r: %s", name, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the tag. Please try again.",
                context={"tag": name, "error_type": type(e).__name__},
            ) from e

    async def tags_with_counts(self, db: AsyncSession) -> List[TagCountResponse]:
        """
        Every tag with the number of questions carrying it.

        Query plan:
            SELECT tags.id, tags.name, count(question_tags.question_id)
            FROM tags LEFT OUTER JOIN question_tags ON question_tags.tag_id = tags.id
            GROUP BY tags.id, tags.name
        """
        try:
            query = (
                select(Tag.id, Tag.name, func.count(question_tags.c.question_id))
                .outerjoin(question_tags, question_tags.c.tag_id == Tag.id)
                .group_by(Tag.id, Tag.name)
                .order_by(func.lower(Tag.name))
            )
            result = await db.execute(query)
            return [
                TagCountResponse(tid=tid, name=name, count=count)
                for tid, name, count in result.all()
            ]
        except SQLAlchemyError as e:
            logger.error("Database error counting tags: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve tags. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

    async def get_tags_by_ids(self, db: AsyncSession, tag_ids: Iterable[UUID]) -> List[TagResponse]:
        """Tags whose id is in `tag_ids`, in the order the ids were given."""
        ids = list(dict.fromkeys(tag_ids))
        if not ids:
            return []
        try:
            result = await db.execute(select(Tag).where(Tag.id.in_(ids)))
            by_id: Dict[UUID, Tag] = {tag.id: tag for tag in result.scalars().all()}
            return [tag_response(by_id[tid]) for tid in ids if tid in by_id]
        except SQLAlchemyError as e:
            logger.error("Database error fetching tags by id: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve tags. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e


tag_service = TagService()
