"""Pydantic models for todo items."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Todo(BaseModel):
    """Persisted todo item."""

    id: str
    text: str


class TodoCreateRequest(BaseModel):
    """Todo creation payload."""

    text: str = Field(min_length=1)


class TodoUpdateRequest(BaseModel):
    """Todo update payload; empty or missing text leaves the item unchanged."""

    text: str | None = None
