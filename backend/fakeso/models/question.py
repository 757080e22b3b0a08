"""
Fake Stack Overflow Backend — Question SQLAlchemy Model
=========================================================

What:  ORM model for the `questions` table and the `question_tags`
       association table.
Who:   Used by QuestionService for every listing, search and mutation.

Relationships:
    Question 1—N Answer      (answers.question_id, ordered by answer time)
    Question N—N Tag         (question_tags)

    Both collections load with `selectin`, so a query for questions brings
    their answers and tags along in two extra SELECTs instead of lazy loads
    (lazy loading is unavailable on an AsyncSession).

Invariants:
    - at least one tag at creation (enforced by the service/validation layer)
    - views only ever changes through `views = views + 1`
    - rows are never deleted
"""

import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fakeso.database import Base
from fakeso.models.answer import Answer
from fakeso.models.tag import Tag


question_tags = Table(
    "question_tags",
    Base.metadata,
    Column("question_id", Uuid, ForeignKey("questions.id"), primary_key=True),
    Column("tag_id", Uuid, ForeignKey("tags.id"), primary_key=True),
    Index("idx_question_tags_tag_id", "tag_id"),
)


class Question(Base):
    """A question posted to the forum."""

    __tablename__ = "questions"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    text: Mapped[str] = mapped_column(Text, nullable=False)

    asked_by: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Username of the asker",
    )

    ask_date_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        comment="When the question was asked (UTC); drives 'newest' ordering",
    )

    views: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
    )

    answers: Mapped[List[Answer]] = relationship(
        back_populates="question",
        order_by=Answer.ans_date_time,
        lazy="selectin",
    )

    tags: Mapped[List[Tag]] = relationship(
        secondary=question_tags,
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_questions_ask_date_time", "ask_date_time"),
    )

    @property
    def url(self) -> str:
        return f"posts/question/{self.id}"

    def __repr__(self) -> str:
        return (
            f"<Question(id={self.id}, title='{self.title}', "
            f"ask_date_time='{self.ask_date_time}')>"
        )
