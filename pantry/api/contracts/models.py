"""Pydantic API response models used in OpenAPI contracts."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ApiErrorResponse(BaseModel):
    """Stable error envelope for API responses."""

    error_code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")


class HealthResponse(BaseModel):
    """Health check response payload."""

    status: Literal["ok"]


class SessionUserResponse(BaseModel):
    """Session identity returned by login/authenticate/session endpoints."""

    id: str
    username: str
    role: str


class UsernameAvailabilityResponse(BaseModel):
    """Username availability check payload."""

    model_config = ConfigDict(populate_by_name=True)

    username_taken: bool = Field(alias="usernameTaken")


class TodoResponse(BaseModel):
    """Todo item payload."""

    id: str
    text: str


class IngredientResponse(BaseModel):
    """Single recipe ingredient line."""

    amount: str = ""
    unit: str = ""
    name: str = ""


class RecipeResponse(BaseModel):
    """Recipe record payload."""

    id: str
    title: str = ""
    tags: list[str] = Field(default_factory=list)
    rating: float | None = None
    creator: str = ""
    description: str = ""
    ingredients: list[IngredientResponse] = Field(default_factory=list)
    directions: list[str] = Field(default_factory=list)
