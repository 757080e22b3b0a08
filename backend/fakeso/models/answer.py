"""
Fake Stack Overflow Backend — Answer SQLAlchemy Model
=======================================================

What:  ORM model for the `answers` table.
How:   Each answer references the question it was posted to; the question's
       `answers` relationship is the ordered answer list (by answer time).
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fakeso.database import Base

if TYPE_CHECKING:
    from fakeso.models.question import Question


class Answer(Base):
    """
    An answer to a question.

    Lifecycle:
        Created by POST /api/answers and appended to its question's answer list.
        Never edited or deleted.
    """

    __tablename__ = "answers"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    text: Mapped[str] = mapped_column(Text, nullable=False)

    ans_by: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Username of the author",
    )

    ans_date_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        comment="When the answer was posted (UTC); drives 'active' ordering",
    )

    question_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("questions.id"),
        nullable=False,
    )

    question: Mapped["Question"] = relationship(back_populates="answers")

    __table_args__ = (
        Index("idx_answers_question_id", "question_id"),
    )

    @property
    def url(self) -> str:
        return f"posts/answer/{self.id}"

    def __repr__(self) -> str:
        return f"<Answer(id={self.id}, ans_by='{self.ans_by}')>"
