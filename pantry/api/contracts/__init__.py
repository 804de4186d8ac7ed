"""Public API response contracts."""

from pantry.api.contracts.models import (
    ApiErrorResponse,
    HealthResponse,
    IngredientResponse,
    RecipeResponse,
    SessionUserResponse,
    TodoResponse,
    UsernameAvailabilityResponse,
)

__all__ = [
    "ApiErrorResponse",
    "HealthResponse",
    "IngredientResponse",
    "RecipeResponse",
    "SessionUserResponse",
    "TodoResponse",
    "UsernameAvailabilityResponse",
]
