"""Response schemas for the LMS backend.

List endpoints return a bare JSON array of items. Every response body is
validated against these models at the client boundary.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict

from core.resources.types import Module, Topic


class TokenResponse(BaseModel):
    """Body of the login and refresh endpoints."""

    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    user_id: str | int | None = None


class Domain(BaseModel):
    id: int
    name: str
    description: str | None = None


class User(BaseModel):
    """A user as listed by the admin endpoints."""

    model_config = ConfigDict(extra="allow")

    id: int | str
    email: str
    role: str
    first_name: str | None = None
    last_name: str | None = None
    is_active: bool = True
    domain_id: int | None = None


class Profile(BaseModel):
    """Student, trainer or admin profile. Role-specific fields pass through."""

    model_config = ConfigDict(extra="allow")

    id: int | str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    bio: str | None = None
    profile_image_url: str | None = None
    date_of_birth: date | None = None


class ProfileUpdate(BaseModel):
    """Editable profile fields; unset fields are not sent."""

    model_config = ConfigDict(extra="allow")

    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    bio: str | None = None
    profile_image_url: str | None = None
    date_of_birth: date | None = None


__all__ = [
    "TokenResponse",
    "Domain",
    "User",
    "Profile",
    "ProfileUpdate",
    "Module",
    "Topic",
]
