"""
Content I/O models for API requests.

Schemas for creating and editing posts, books and videos.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class PostCreate(BaseModel):
    """Schema for publishing a post."""

    title: str = Field(default="", description="Post title")
    content: str = Field(default="", description="Post body (rich-text HTML)")
    is_paid: bool = Field(default=False, description="Whether the post is behind a paywall")
    poster_url: Optional[str] = Field(default=None, description="Public URL of an uploaded poster image")


class PostUpdate(BaseModel):
    """Fields to change on a post; title and content cannot be cleared."""

    title: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = Field(default=None, min_length=1)
    poster_url: Optional[str] = None


class BookCreate(BaseModel):
    """Schema for publishing a book; the file must be uploaded first."""

    title: str = Field(min_length=1)
    description: str = ""
    cover_url: Optional[str] = None
    file_url: Optional[str] = Field(default=None, description="Public URL of the uploaded book file")
    is_paid: bool = False
    price: Optional[float] = Field(default=None, ge=0, description="Ignored (stored as 0) unless is_paid")


class BookUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    cover_url: Optional[str] = None
    is_paid: Optional[bool] = None
    price: Optional[float] = Field(default=None, ge=0)


class MediaCreate(BaseModel):
    """Schema for publishing a video."""

    title: str = Field(min_length=1)
    description: str = ""
    cover_url: Optional[str] = None
    youtube_url: str = Field(min_length=1, description="Link to the hosted video")
    is_paid: bool = False
    price: Optional[float] = Field(default=None, ge=0)


class MediaUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    youtube_url: Optional[str] = Field(default=None, min_length=1)
    cover_url: Optional[str] = None
