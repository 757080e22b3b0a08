"""
Fake Stack Overflow Backend — Question Schemas
================================================

What:  API contracts for questions: creation, the stored question with its
       answer/tag references, the "question with resolved tags" pair every
       listing returns, and the view-count result.

Listing shape:
    The home page, tag page and search results all render a question next to
    its tag names, so listings return
        [{"question": {...}, "tags": [{"id": ..., "name": ...}, ...]}, ...]
"""

import uuid
from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from fakeso.schemas.tag import TagResponse


class QuestionCreate(BaseModel):
    """
    Body of POST /api/questions.

    `tags` accepts either a list of names or the raw whitespace-separated
    string typed into the form.
    """
    title: Optional[str] = Field(default=None, description="Question title (max 100 chars)")
    text: Optional[str] = Field(default=None, description="Question body")
    tags: Union[List[str], str, None] = Field(
        default=None,
        description="1-5 tag names, each at most 20 characters",
    )
    asked_by: Optional[str] = Field(default=None, description="Asker username")
    ask_date_time: Optional[datetime] = Field(
        default=None,
        description="Ask time (UTC ISO 8601); defaults to now",
    )


class QuestionResponse(BaseModel):
    """A stored question with references to its answers and tags."""
    id: uuid.UUID = Field(description="Unique question identifier")
    title: str
    text: str
    asked_by: str
    ask_date_time: datetime
    views: int = Field(description="View counter, never decreases")
    answers: List[uuid.UUID] = Field(description="Answer ids, in answer order")
    tags: List[uuid.UUID] = Field(description="Tag ids")
    url: str = Field(description="Client route for the question, posts/question/<id>")


class QuestionWithTags(BaseModel):
    """A question annotated with its resolved tag set."""
    question: QuestionResponse
    tags: List[TagResponse]


class ViewCountResponse(BaseModel):
    qid: uuid.UUID = Field(description="Question identifier")
    views: int = Field(description="View counter after the increment")
