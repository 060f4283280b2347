"""
User domain models and schemas.

Account document kept in the users collection, plus the
request/response schemas of the user API.

Dependencies: pydantic, flowshare.core.roles
System role: User data model and API contracts
"""

from datetime import datetime

from pydantic import BaseModel, Field

from flowshare.core.roles import Role


class UserDocument(BaseModel):
    """Registered account. Role is fixed for the account lifetime."""

    id: str
    email: str
    role: Role
    display_name: str | None = None
    created_at: datetime


class RegisterUserRequest(BaseModel):
    """Request schema for registering the calling identity as an account."""

    email: str = Field(..., min_length=3, max_length=320, description="Account email")
    role: Role = Field(default=Role.EDITOR, description="Account role")
    display_name: str | None = Field(None, max_length=255, description="Optional display name")


class UpdateProfileRequest(BaseModel):
    """Request schema for changing the display name."""

    display_name: str | None = Field(None, max_length=255)


class UserResponse(UserDocument):
    """Response schema for user operations."""
