"""Pydantic schemas for tags.

Tags have no storage of their own: a tag exists while at least one todo
carries it.
"""

from pydantic import BaseModel, ConfigDict, Field


class TagCreate(BaseModel):
    """Body of a request attaching a tag to a todo."""

    model_config = ConfigDict(extra="forbid")

    tag: str = Field(..., min_length=1, description="Tag to attach")


class TagRead(BaseModel):
    tag: str
