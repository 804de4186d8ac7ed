"""Repository for recipe records."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from bson import ObjectId

from pantry.core.json_store import JsonListFile
from pantry.recipes.models import Recipe, RecipeFields


def _object_id(recipe_id: str) -> ObjectId | None:
    return ObjectId(recipe_id) if ObjectId.is_valid(recipe_id) else None


def _from_mongo(doc: dict[str, Any]) -> Recipe:
    fields = {key: value for key, value in doc.items() if key != "_id"}
    return Recipe(id=str(doc["_id"]), **fields)


class RecipeRepository:
    """Recipe repository with MongoDB primary and file-store fallback."""

    def __init__(self, app_root: Path, db: Any = None) -> None:
        self._file = JsonListFile(
            app_root / "runtime" / "recipe_store" / "recipes.json"
        )
        self._mongo_recipes = db["recipes"] if db is not None else None

    def list_recipes(self) -> list[Recipe]:
        if self._mongo_recipes is not None:
            return [_from_mongo(doc) for doc in self._mongo_recipes.find()]
        return [Recipe.model_validate(row) for row in self._file.read()]

    def create_recipe(self, fields: RecipeFields) -> Recipe:
        recipe = Recipe(id=str(ObjectId()), **fields.model_dump())
        if self._mongo_recipes is not None:
            doc = recipe.model_dump(exclude={"id"})
            doc["_id"] = ObjectId(recipe.id)
            self._mongo_recipes.insert_one(doc)
            return recipe

        with self._file.lock:
            items = self._file.read()
            items.append(recipe.model_dump())
            self._file.write(items)
        return recipe

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        if self._mongo_recipes is not None:
            oid = _object_id(recipe_id)
            if oid is None:
                return None
            doc = self._mongo_recipes.find_one({"_id": oid})
            return _from_mongo(doc) if doc else None

        for row in self._file.read():
            if row.get("id") == recipe_id:
                return Recipe.model_validate(row)
        return None

    def update_recipe(self, recipe_id: str, changes: dict[str, Any]) -> Recipe | None:
        """Apply ``changes`` and return the updated record, or ``None`` if missing."""
        if self._mongo_recipes is not None:
            oid = _object_id(recipe_id)
            if oid is None:
                return None
            if changes:
                self._mongo_recipes.update_one({"_id": oid}, {"$set": changes})
            doc = self._mongo_recipes.find_one({"_id": oid})
            return _from_mongo(doc) if doc else None

        with self._file.lock:
            items = self._file.read()
            for row in items:
                if row.get("id") == recipe_id:
                    row.update(changes)
                    self._file.write(items)
                    return Recipe.model_validate(row)
        return None

    def delete_recipe(self, recipe_id: str) -> None:
        if self._mongo_recipes is not None:
            oid = _object_id(recipe_id)
            if oid is not None:
                self._mongo_recipes.delete_one({"_id": oid})
            return

        with self._file.lock:
            items = self._file.read()
            self._file.write([row for row in items if row.get("id") != recipe_id])
