"""
Profile I/O models for API requests.

Author profile edits and reader settings edits. All fields are optional so
that clients send only what the user touched.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class AuthorProfileUpdate(BaseModel):
    """Schema for editing the current author's profile."""

    author_name: Optional[str] = Field(default=None, min_length=1, description="Public author name")
    bio: Optional[str] = Field(default=None, description="Free-text biography")
    achievements: Optional[List[str]] = Field(default=None, description="Achievement labels shown on the profile")
    avatar_url: Optional[str] = Field(default=None, description="Public URL of an already uploaded avatar")


class UserProfileUpdate(BaseModel):
    """Schema for editing the current user's settings."""

    full_name: str = Field(min_length=1)
    avatar_url: Optional[str] = None


class UploadResult(BaseModel):
    """Where an uploaded file can be fetched from."""

    url: str
