"""Pydantic models for recipe records."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

RECIPE_FIELDS = (
    "title",
    "tags",
    "rating",
    "creator",
    "description",
    "ingredients",
    "directions",
)


class Ingredient(BaseModel):
    amount: str = ""
    unit: str = ""
    name: str = ""


class RecipeFields(BaseModel):
    """Editable recipe fields shared by create/update payloads and storage."""

    title: str = ""
    tags: list[str] = Field(default_factory=list)
    rating: float | None = None
    creator: str = ""
    description: str = ""
    ingredients: list[Ingredient] = Field(default_factory=list)
    directions: list[str] = Field(default_factory=list)


class Recipe(RecipeFields):
    """Persisted recipe record."""

    id: str


class RecipeCreateRequest(RecipeFields):
    """Recipe creation payload."""


class RecipeUpdateRequest(BaseModel):
    """Recipe update payload; only truthy fields overwrite stored values."""

    title: str | None = None
    tags: list[str] | None = None
    rating: float | None = None
    creator: str | None = None
    description: str | None = None
    ingredients: list[Ingredient] | None = None
    directions: list[str] | None = None

    def changes(self) -> dict[str, Any]:
        payload = self.model_dump()
        return {key: payload[key] for key in RECIPE_FIELDS if payload.get(key)}
