import json
import logging
from typing import Any, Mapping

from app.core.exceptions import InvalidInputError, NotFoundError, StorageError
from app.repositories.recipe_repository import RecipeRepository
from app.schemas.recipe_record import MAX_RECIPE_ID, SEQUENCE_FIELDS, WRITABLE_FIELDS, is_sequence

logger = logging.getLogger(__name__)


def parse_recipe_id(raw_id: Any) -> int:
    """
    Accept an int or a string of digits naming a positive id that fits the
    primary key column.
    Anything else is rejected before storage is touched.
    """
    if isinstance(raw_id, bool):
        raise InvalidInputError(f"Invalid recipe ID: {raw_id!r}")

    if isinstance(raw_id, int):
        recipe_id = raw_id
    elif isinstance(raw_id, str) and raw_id.strip().isascii() and raw_id.strip().isdigit():
        recipe_id = int(raw_id.strip())
    else:
        raise InvalidInputError(f"Invalid recipe ID: {raw_id!r}")

    if recipe_id <= 0 or recipe_id > MAX_RECIPE_ID:
        raise InvalidInputError(f"Invalid recipe ID: {raw_id!r}")
    return recipe_id


def normalize_sequence(value: Any) -> Any:
    """
    Sequence fields arrive either as a list of strings or as a JSON-encoded
    string holding that list. Both collapse to a list here; a string that
    does not decode to a list is passed through for the model to reject.
    """
    if is_sequence(value):
        return list(value)
    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except ValueError:
            return value
        if isinstance(decoded, list):
            return decoded
    return value


def normalize_recipe_input(data: Mapping[str, Any]) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for field in WRITABLE_FIELDS:
        if field not in data:
            continue
        value = data[field]
        if field in SEQUENCE_FIELDS:
            value = normalize_sequence(value)
        elif isinstance(value, str):
            value = value.strip()
        cleaned[field] = value

    if cleaned.get("description") == "":
        cleaned["description"] = None
    return cleaned


def _envelope(message: str, data: Any) -> dict[str, Any]:
    return {"success": True, "message": message, "data": data}


class RecipeService:
    def __init__(self, repository: RecipeRepository) -> None:
        self.repository = repository

    async def get_all_recipes(self) -> dict[str, Any]:
        recipes = await self.repository.find_all()
        return _envelope("Recipes retrieved successfully", [r.to_json() for r in recipes])

    async def get_recipe_by_id(self, raw_id: Any) -> dict[str, Any]:
        recipe_id = parse_recipe_id(raw_id)
        recipe = await self.repository.find_by_id(recipe_id)
        if recipe is None:
            raise NotFoundError(f"Recipe with id {recipe_id} not found")
        return _envelope("Recipe retrieved successfully", recipe.to_json())

    async def create_recipe(self, data: Mapping[str, Any]) -> dict[str, Any]:
        recipe = await self.repository.create(normalize_recipe_input(data))
        if recipe is None:
            raise StorageError("Failed to load created recipe")

        logger.info(f"Created recipe {recipe.id}")
        return _envelope("Recipe created successfully", recipe.to_json())

    async def update_recipe(self, raw_id: Any, data: Mapping[str, Any]) -> dict[str, Any]:
        recipe_id = parse_recipe_id(raw_id)
        recipe = await self.repository.update(recipe_id, normalize_recipe_input(data))
        if recipe is None:
            raise NotFoundError(f"Recipe with id {recipe_id} not found")

        logger.info(f"Updated recipe {recipe_id}")
        return _envelope("Recipe updated successfully", recipe.to_json())

    async def delete_recipe(self, raw_id: Any) -> dict[str, Any]:
        recipe_id = parse_recipe_id(raw_id)
        recipe = await self.repository.delete(recipe_id)
        if recipe is None:
            raise NotFoundError(f"Recipe with id {recipe_id} not found")

        logger.info(f"Deleted recipe {recipe_id}")
        return _envelope("Recipe deleted successfully", recipe.to_json())
