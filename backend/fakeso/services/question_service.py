"""
Fake Stack Overflow Backend — Question Service
================================================

What:  Data access for questions: posting, the three listing orders, tag
       filtering, search, and view counting.
Who:   Called by the questions and search routers.

Listing orders:
    newest      ask_date_time DESC
    unanswered  questions without answers, ask_date_time DESC
    active      most recent answer time DESC; unanswered questions last,
                ties broken by ask_date_time DESC

Search (see services/search.py for the query syntax):
    1. Parse the query into tag names and words
    2. Resolve tag names to tag ids (case-insensitive exact match)
    3. SQL prefilter: tagged with any resolved tag OR title/text contains any
       word (ILIKE '%word%')
    4. Python filter: keep rows whose tag matched, or where a word occurs as
       a whole word (not adjacent to other word characters, case-insensitive)
    5. Newest first, each annotated with its tags

Error Handling:
    NotFoundError and ValidationError propagate unchanged. SQLAlchemy errors
    are logged and wrapped in DatabaseError (generic message to the client).
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Set
from uuid import UUID

from sqlalchemy import Select, desc, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fakeso.exceptions import DatabaseError, NotFoundError, ValidationError
from fakeso.models.answer import Answer
from fakeso.models.question import Question
from fakeso.models.tag import Tag
from fakeso.schemas.question import (
    QuestionCreate,
    QuestionResponse,
    QuestionWithTags,
    ViewCountResponse,
)
from fakeso.services.search import (
    like_contains,
    matches_any_word,
    parse_search_query,
)
from fakeso.services.tag_service import tag_response, tag_service
from fakeso.services.validation import ensure_valid, split_tags, validate_question_form

logger = logging.getLogger(__name__)

ORDERS = ("newest", "unanswered", "active")


def as_utc(value: Optional[datetime]) -> datetime:
    """Timestamp to store: now if missing, naive values taken as UTC."""
    if value is None:
        return datetime.now(timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def question_response(question: Question) -> QuestionResponse:
    return QuestionResponse(
        id=question.id,
        title=question.title,
        text=question.text,
        asked_by=question.asked_by,
        ask_date_time=question.ask_date_time,
        views=question.views,
        answers=[answer.id for answer in question.answers],
        tags=[tag.id for tag in question.tags],
        url=question.url,
    )


def with_tags(questions: Iterable[Question]) -> List[QuestionWithTags]:
    """Pair each question with its resolved tag set."""
    return [
        QuestionWithTags(
            question=question_response(question),
            tags=[tag_response(tag) for tag in question.tags],
        )
        for question in questions
    ]


class QuestionService:
    """Stateless question operations; every method receives the request's session."""

    async def _fetch(self, db: AsyncSession, query: Select, operation: str) -> List[Question]:
        try:
            result = await db.execute(query)
            return list(result.scalars().unique().all())
        except SQLAlchemyError as e:
            logger.error("Database error in %s: %s", operation, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve questions. Please try again.",
                context={"operation": operation, "error_type": type(e).__name__},
            ) from e

    # ── Posting ───────────────────────────────────────────────────────────

    async def add_question(self, db: AsyncSession, payload: QuestionCreate) -> QuestionResponse:
        """
        Validate and store a new question.

        Workflow:
            1. Normalize tag input (list or whitespace-separated string)
            2. Apply the ask-question form rules (ValidationError with field messages)
            3. Resolve tags: reuse existing ones ignoring case, create the rest
            4. Insert the question with zero views and no answers
        """
        tag_names = split_tags(payload.tags)
        ensure_valid(
            validate_question_form(payload.title, payload.text, tag_names, payload.asked_by),
            "Question",
        )

        try:
            tags = await tag_service.resolve_tags(db, tag_names)
            question = Question(
                title=payload.title.strip(),
                text=payload.text.strip(),
                asked_by=payload.asked_by.strip(),
                ask_date_time=as_utc(payload.ask_date_time),
                views=0,
                tags=tags,
                answers=[],
            )
            db.add(question)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error adding question: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save your question. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info(
            "Question %s posted by %s with tags %s",
            question.id,
            question.asked_by,
            [tag.name for tag in tags],
        )
        return question_response(question)

    # ── Single question ───────────────────────────────────────────────────

    async def _get_model(self, db: AsyncSession, qid: UUID) -> Question:
        questions = await self._fetch(
            db, select(Question).where(Question.id == qid), "get_question"
        )
        if not questions:
            raise NotFoundError(resource="question", resource_id=str(qid))
        return questions[0]

    async def get_question(self, db: AsyncSession, qid: UUID) -> QuestionResponse:
        return question_response(await self._get_model(db, qid))

    async def increment_view_count(self, db: AsyncSession, qid: UUID) -> ViewCountResponse:
        """
        Add one view to a question.

        Issued as a single UPDATE ... SET views = views + 1, so concurrent
        increments never overwrite each other and the counter only grows.
        """
        views_query = select(Question.views).where(Question.id == qid)
        try:
            if (await db.execute(views_query)).scalar_one_or_none() is None:
                raise NotFoundError(resource="question", resource_id=str(qid))
            await db.execute(
                update(Question)
                .where(Question.id == qid)
                .values(views=Question.views + 1)
                .execution_options(synchronize_session="fetch")
            )
            views = (await db.execute(views_query)).scalar_one()
        except SQLAlchemyError as e:
            logger.error("Database error incrementing views of %s: %s", qid, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the view count. Please try again.",
                context={"question_id": str(qid), "error_type": type(e).__name__},
            ) from e

        logger.debug("Question %s now has %d views", qid, views)
        return ViewCountResponse(qid=qid, views=views)

    # ── Listings ──────────────────────────────────────────────────────────

    async def list_questions(self, db: AsyncSession) -> List[QuestionResponse]:
        questions = await self._fetch(
            db, select(Question).order_by(Question.ask_date_time), "list_questions"
        )
        return [question_response(q) for q in questions]

    async def _newest(self, db: AsyncSession) -> List[Question]:
        return await self._fetch(
            db,
            select(Question).order_by(desc(Question.ask_date_time)),
            "newest",
        )

    async def _unanswered(self, db: AsyncSession) -> List[Question]:
        return await self._fetch(
            db,
            select(Question)
            .where(~Question.answers.any())
            .order_by(desc(Question.ask_date_time)),
            "unanswered",
        )

    async def _active(self, db: AsyncSession) -> List[Question]:
        last_activity = (
            select(
                Answer.question_id.label("question_id"),
                func.max(Answer.ans_date_time).label("last_activity"),
            )
            .group_by(Answer.question_id)
            .subquery()
        )
        query = (
            select(Question)
            .outerjoin(last_activity, last_activity.c.question_id == Question.id)
            .order_by(
                last_activity.c.last_activity.is_(None),
                desc(last_activity.c.last_activity),
                desc(Question.ask_date_time),
            )
        )
        return await self._fetch(db, query, "active")

    async def newest(self, db: AsyncSession) -> List[QuestionResponse]:
        return [question_response(q) for q in await self._newest(db)]

    async def unanswered(self, db: AsyncSession) -> List[QuestionResponse]:
        return [question_response(q) for q in await self._unanswered(db)]

    async def active(self, db: AsyncSession) -> List[QuestionResponse]:
        return [question_response(q) for q in await self._active(db)]

    async def questions_with_tags(self, db: AsyncSession, order: str) -> List[QuestionWithTags]:
        """
        One of the three listings, each question annotated with its tags.

        Raises:
            ValidationError: `order` is not newest, unanswered or active (→ 400)
        """
        key = (order or "").lower()
        if key == "newest":
            questions = await self._newest(db)
        elif key == "unanswered":
            questions = await self._unanswered(db)
        elif key == "active":
            questions = await self._active(db)
        else:
            logger.warning("Invalid question order requested: %r", order)
            raise ValidationError(
                message=f"Invalid order '{order}'. Must be one of: {', '.join(ORDERS)}",
                field="order",
            )
        return with_tags(questions)

    async def get_questions_by_tag(self, db: AsyncSession, tid: UUID) -> List[QuestionWithTags]:
        """Questions carrying tag `tid`, newest first, with their tags."""
        questions = await self._fetch(
            db,
            select(Question)
            .where(Question.tags.any(Tag.id == tid))
            .order_by(desc(Question.ask_date_time)),
            "questions_by_tag",
        )
        return with_tags(questions)

    # ── Search ────────────────────────────────────────────────────────────

    async def search_questions(self, db: AsyncSession, query: str) -> List[QuestionWithTags]:
        """
        Union of every tag and word condition in `query`, newest first.

        A blank query returns the full newest-first listing. A query whose
        tags are all unknown and that has no words returns [].
        """
        parsed = parse_search_query(query)
        if parsed.is_empty:
            return with_tags(await self._newest(db))

        try:
            tags = await tag_service.find_by_names(db, parsed.tag_names)
        except SQLAlchemyError as e:
            logger.error("Database error resolving search tags: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not run the search. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e
        tag_ids: Set[UUID] = {tag.id for tag in tags}

        conditions = []
        if tag_ids:
            conditions.append(Question.tags.any(Tag.id.in_(list(tag_ids))))
        for word in parsed.words:
            pattern = like_contains(word)
            conditions.append(
                or_(
                    Question.title.ilike(pattern, escape="\\"),
                    Question.text.ilike(pattern, escape="\\"),
                )
            )

        if not conditions:
            logger.info("Search %r matched no known tags and has no words", query)
            return []

        candidates = await self._fetch(
            db,
            select(Question).where(or_(*conditions)).order_by(desc(Question.ask_date_time)),
            "search",
        )
        matches = [
            question
            for question in candidates
            if any(tag.id in tag_ids for tag in question.tags)
            or matches_any_word(question.title, question.text, parsed.words)
        ]
        logger.info(
            "Search %r: tags=%s words=%s → %d questions",
            query,
            list(parsed.tag_names),
            list(parsed.words),
            len(matches),
        )
        return with_tags(matches)


question_service = QuestionService()
