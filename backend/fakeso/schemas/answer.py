"""
Fake Stack Overflow Backend — Answer Schemas
==============================================

What:  API contracts for posting and listing answers.

Request fields are optional at the schema level:
missing values reach the form validation rules and come back as field
messages ("Username cannot be empty") instead of a bare 422.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class AnswerCreate(BaseModel):
    """Body of POST /api/answers."""
    qid: uuid.UUID = Field(description="Question being answered")
    text: Optional[str] = Field(default=None, description="Answer body")
    ans_by: Optional[str] = Field(default=None, description="Author username")
    ans_date_time: Optional[datetime] = Field(
        default=None,
        description="Answer time (UTC ISO 8601); defaults to now",
    )


class AnswerResponse(BaseModel):
    id: uuid.UUID = Field(description="Unique answer identifier")
    text: str = Field(description="Answer body")
    ans_by: str = Field(description="Author username")
    ans_date_time: datetime = Field(description="When the answer was posted")
    url: str = Field(description="Client route for the answer, posts/answer/<id>")

    model_config = {"from_attributes": True}
