"""
Fake Stack Overflow Backend — Tag Schemas
===========================================

What:  API contracts for tags: plain tag, tag with question count, and the
       id-list lookup request.
"""

import uuid
from typing import List

from pydantic import BaseModel, Field


class TagResponse(BaseModel):
    id: uuid.UUID = Field(description="Unique tag identifier")
    name: str = Field(description="Tag name as first submitted")
    url: str = Field(description="Client route for the tag, posts/tag/<id>")

    model_config = {"from_attributes": True}


class TagCountResponse(BaseModel):
    """One card on the tags page: a tag and how many questions carry it."""
    tid: uuid.UUID = Field(description="Tag identifier")
    name: str = Field(description="Tag name")
    count: int = Field(description="Number of questions carrying this tag")


class TagIdsRequest(BaseModel):
    tag_ids: List[uuid.UUID] = Field(
        default_factory=list,
        description="Tag identifiers to resolve",
    )
