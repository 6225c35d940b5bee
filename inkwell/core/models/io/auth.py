"""
Auth I/O models for API requests.

These models define the contract between the API and clients for signing up
and signing in.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from inkwell.core.models.domain.enums import Role


class SignUpRequest(BaseModel):
    """Schema for registering a new account."""

    email: str = Field(min_length=3, description="Account e-mail address")
    password: str = Field(min_length=6, description="Account password")
    full_name: str = Field(min_length=1, description="Display name; also the author name for authors")
    role: Role = Field(description="Account role: 'author' or 'reader'")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "writer@example.com",
                "password": "s3cret-pass",
                "full_name": "Anna Writer",
                "role": "author",
            }
        }
    )


class SignInRequest(BaseModel):
    """Schema for password sign-in."""

    email: str = Field(min_length=3)
    password: str = Field(min_length=1)
