"""FastAPI router for recipe endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Response

from pantry.api.contracts import ApiErrorResponse, RecipeResponse
from pantry.api.errors import ApiError, ApiErrorCode
from pantry.recipes.models import Recipe, RecipeCreateRequest, RecipeUpdateRequest
from pantry.recipes.repository import RecipeRepository


def _not_found(recipe_id: str) -> ApiError:
    return ApiError(
        status_code=404,
        error_code=ApiErrorCode.RECIPE_NOT_FOUND,
        message=f"Recipe not found: {recipe_id}",
    )


def _to_response(recipe: Recipe) -> RecipeResponse:
    return RecipeResponse(**recipe.model_dump())


class RecipeRouter:
    """Factory wrapper that builds recipe API router from a repository."""

    def __init__(self, repo: RecipeRepository) -> None:
        self._repo = repo

    def build(self) -> APIRouter:
        """Create and return configured recipe router."""
        router = APIRouter(tags=["recipe"])

        @router.get("/api/recipe", response_model=list[RecipeResponse])
        def list_recipes() -> list[RecipeResponse]:
            """List all recipes."""
            return [_to_response(recipe) for recipe in self._repo.list_recipes()]

        @router.post("/api/recipe", response_model=RecipeResponse)
        def create_recipe(req: RecipeCreateRequest) -> RecipeResponse:
            """Store a new recipe."""
            return _to_response(self._repo.create_recipe(req))

        @router.get(
            "/api/recipe/{recipe_id}",
            response_model=RecipeResponse,
            responses={404: {"model": ApiErrorResponse}},
        )
        def get_recipe(recipe_id: str) -> RecipeResponse:
            """Get a recipe by id."""
            recipe = self._repo.get_recipe(recipe_id)
            if recipe is None:
                raise _not_found(recipe_id)
            return _to_response(recipe)

        @router.put(
            "/api/recipe/{recipe_id}",
            response_model=RecipeResponse,
            responses={404: {"model": ApiErrorResponse}},
        )
        def update_recipe(recipe_id: str, req: RecipeUpdateRequest) -> RecipeResponse:
            """Overwrite the supplied non-empty fields of a recipe."""
            recipe = self._repo.update_recipe(recipe_id, req.changes())
            if recipe is None:
                raise _not_found(recipe_id)
            return _to_response(recipe)

        @router.delete(
            "/api/recipe/{recipe_id}", status_code=204, response_class=Response
        )
        def delete_recipe(recipe_id: str) -> Response:
            """Delete a recipe; unknown ids are ignored."""
            self._repo.delete_recipe(recipe_id)
            return Response(status_code=204)

        return router


def create_recipe_router(repo: RecipeRepository) -> APIRouter:
    """Create recipe router using provided repository."""
    return RecipeRouter(repo=repo).build()
