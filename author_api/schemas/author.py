"""
Author API: Pydantic Request/Response Schemas
===============================================

What:  Pydantic models defining the wire contract of the /authors endpoints.
How:   FastAPI validates request bodies against these models before the route
       body runs, and serializes responses through ``AuthorResponse``.

Field rules:
    name: 1..32 characters, required on create/replace, optional on patch
    bio:  non-empty, required on create/replace, optional on patch

``AuthorPatch`` keeps both fields ``Optional`` so that an omitted field can be
told apart from a supplied one through ``model_fields_set``.
"""

from typing import Optional

from pydantic import BaseModel, Field

from author_api.models.author import NAME_MAX_LENGTH


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class AuthorCreate(BaseModel):
    """Body of ``POST /authors``."""

    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH, description="Author name")
    bio: str = Field(min_length=1, description="Author biography")


class AuthorReplace(AuthorCreate):
    """Body of ``PUT /authors/{id}``. Both fields are overwritten."""


class AuthorPatch(BaseModel):
    """
    Body of ``PATCH /authors/{id}``.

    Only fields present in the JSON body (and not ``null``) are applied.
    ``{}`` is a valid body and leaves the row unchanged.
    """

    name: Optional[str] = Field(
        default=None, min_length=1, max_length=NAME_MAX_LENGTH,
        description="New author name",
    )
    bio: Optional[str] = Field(default=None, min_length=1, description="New author biography")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class AuthorResponse(BaseModel):
    id: int = Field(description="Storage-assigned identifier")
    name: str
    bio: str

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """
    Error body shared by every endpoint.

    Example:
        {"error": "author with ID '7' was not found"}
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since the application was created")
