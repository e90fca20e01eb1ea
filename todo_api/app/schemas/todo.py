"""
Pydantic schemas for todos.

Todos are stored as documents; the store assigns the ``_id``.  The
``url`` field is never persisted: it is computed at response time from
the server's base URI and the id.  Request schemas reject unknown keys,
explicit ``null`` values, empty strings and loosely typed booleans, so
malformed payloads fail validation before reaching a handler.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, constr, field_validator

NonEmptyStr = constr(min_length=1)


class TodoCreate(BaseModel):
    """Schema for creating a todo.

    Only ``title`` is required; ``order``, ``completed`` and ``tags``
    default to 0, ``False`` and an empty list.  A client-supplied ``url``
    is accepted and ignored.
    """

    model_config = ConfigDict(extra="forbid")

    title: NonEmptyStr = Field(..., description="Short description of the task")
    order: int = Field(0, description="Ordering weight; lower values are listed first")
    completed: StrictBool = Field(False, description="Whether the task is done")
    tags: List[NonEmptyStr] = Field(default_factory=list, description="Labels attached to the todo")
    url: Optional[str] = None

    @field_validator("url")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class TodoUpdate(BaseModel):
    """Schema for updating a todo.

    All fields are optional; only provided values are written.  ``_id``
    and ``url`` may be echoed back by clients and are ignored.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id")
    title: Optional[NonEmptyStr] = None
    order: Optional[int] = None
    completed: Optional[StrictBool] = None
    tags: Optional[List[NonEmptyStr]] = None
    url: Optional[str] = None

    @field_validator("id", "title", "order", "completed", "tags", "url")
    @classmethod
    def reject_null(cls, value):
        # Defaults are not validated, so this only fires for an explicit null.
        if value is None:
            raise ValueError("may not be null")
        return value

    def changes(self) -> dict:
        """Return the fields the client actually set, minus read-only ones."""
        return self.model_dump(exclude_unset=True, exclude={"id", "url"})


class TodoRead(BaseModel):
    """Schema for a todo returned by the API."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    title: str
    order: int = 0
    completed: bool = False
    tags: List[str] = Field(default_factory=list)
    url: str
