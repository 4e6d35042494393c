from fastapi import APIRouter, Depends
from typing import Any

from app.api.deps import get_recipe_service
from app.schemas import RecipeCreate, RecipeListResponse, RecipeResponse, RecipeUpdate
from app.services.recipe_service import RecipeService

router = APIRouter()


@router.get("/", response_model=RecipeListResponse)
async def read_recipes(*, service: RecipeService = Depends(get_recipe_service)) -> Any:
    return await service.get_all_recipes()


@router.get("/{recipe_id}", response_model=RecipeResponse)
async def read_recipe_by_id(*, service: RecipeService = Depends(get_recipe_service), recipe_id: str) -> Any:
    return await service.get_recipe_by_id(recipe_id)


@router.post("/", response_model=RecipeResponse, status_code=201)
async def create_new_recipe(*, service: RecipeService = Depends(get_recipe_service), recipe_in: RecipeCreate) -> Any:
    return await service.create_recipe(recipe_in.model_dump(exclude_unset=True))


@router.put("/{recipe_id}", response_model=RecipeResponse)
@router.patch("/{recipe_id}", response_model=RecipeResponse)
async def update_existing_recipe(
    *, service: RecipeService = Depends(get_recipe_service), recipe_id: str, recipe_in: RecipeUpdate
) -> Any:
    return await service.update_recipe(recipe_id, recipe_in.model_dump(exclude_unset=True))


@router.delete("/{recipe_id}", response_model=RecipeResponse)
async def delete_existing_recipe(*, service: RecipeService = Depends(get_recipe_service), recipe_id: str) -> Any:
    return await service.delete_recipe(recipe_id)
