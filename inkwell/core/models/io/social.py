"""Social I/O models: comments and plain acknowledgements."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CommentCreate(BaseModel):
    content: str = Field(description="Comment text; surrounding whitespace is trimmed")


class Acknowledgement(BaseModel):
    """A user-facing confirmation message."""

    detail: str
