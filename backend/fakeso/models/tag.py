"""
Fake Stack Overflow Backend — Tag SQLAlchemy Model
====================================================

What:  ORM model for the `tags` table: keyword labels attached to questions.
Who:   Used by TagService (lookup/creation, counts) and QuestionService.

Table Design:
    - UUID primary key, shared convention across all forum tables
    - name keeps the spelling of the first submission ("JavaScript")
    - uniqueness is case-insensitive: a unique index on lower(name), so
      "javascript" and "JavaScript" can never both exist
"""

import uuid

from sqlalchemy import Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from fakeso.database import Base


class Tag(Base):
    """A keyword label. Never deleted; created on first use by a question."""

    __tablename__ = "tags"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Tag name as first submitted; unique ignoring case",
    )

    @property
    def url(self) -> str:
        return f"posts/tag/{self.id}"

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"


# Case-insensitive uniqueness
Index("uq_tags_name_lower", func.lower(Tag.name), unique=True)
