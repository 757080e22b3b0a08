"""
Fake Stack Overflow Backend — Answer Service
==============================================

What:  Posting answers and listing a question's answers.
Who:   Called by the answers router and the question-detail endpoint.

Posting appends to the question's answer list; the new answer time also
moves the question up the "active" listing.
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fakeso.exceptions import DatabaseError, NotFoundError
from fakeso.models.answer import Answer
from fakeso.models.question import Question
from fakeso.schemas.answer import AnswerCreate, AnswerResponse
from fakeso.services.question_service import as_utc
from fakeso.services.validation import ensure_valid, validate_answer_form

logger = logging.getLogger(__name__)


def answer_response(answer: Answer) -> AnswerResponse:
    return AnswerResponse(
        id=answer.id,
        text=answer.text,
        ans_by=answer.ans_by,
        ans_date_time=answer.ans_date_time,
        url=answer.url,
    )


class AnswerService:
    """Stateless answer operations; every method receives the request's session."""

    async def add_answer(self, db: AsyncSession, payload: AnswerCreate) -> AnswerResponse:
        """
        Validate an answer and append it to its question.

        Raises:
            ValidationError: empty text, bad hyperlink, or missing username (→ 400)
            NotFoundError: the question does not exist (→ 404)
            DatabaseError: the insert failed (→ 500)
        """
        ensure_valid(validate_answer_form(payload.text, payload.ans_by), "Answer")

        try:
            question = await db.get(Question, payload.qid)
            if question is None:
                raise NotFoundError(resource="question", resource_id=str(payload.qid))

            answer = Answer(
                text=payload.text.strip(),
                ans_by=payload.ans_by.strip(),
                ans_date_time=as_utc(payload.ans_date_time),
            )
            question.answers.append(answer)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error(
                "Database error adding answer to %s: %s", payload.qid, str(e), exc_info=True
            )
            raise DatabaseError(
                message="Could not save your answer. Please try again.",
                context={"question_id": str(payload.qid), "error_type": type(e).__name__},
            ) from e

        logger.info("Answer %s posted by %s on question %s", answer.id, answer.ans_by, payload.qid)
        return answer_response(answer)

    async def answers_for_question(self, db: AsyncSession, qid: UUID) -> List[AnswerResponse]:
        """A question's answers, newest first. Unknown questions have no answers."""
        try:
            result = await db.execute(
                select(Answer)
                .where(Answer.question_id == qid)
                .order_by(desc(Answer.ans_date_time))
            )
            return [answer_response(a) for a in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing answers of %s: %s", qid, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve answers. Please try again.",
                context={"question_id": str(qid), "error_type": type(e).__name__},
            ) from e

    async def list_answers(self, db: AsyncSession) -> List[AnswerResponse]:
        try:
            result = await db.execute(select(Answer).order_by(Answer.ans_date_time))
            return [answer_response(a) for a in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing answers: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve answers. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e


answer_service = AnswerService()
