from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.db.session import get_sessionmaker
from app.repositories.recipe_repository import RecipeRepository
from app.services.recipe_service import RecipeService


def get_recipe_repository(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker),
) -> RecipeRepository:
    return RecipeRepository(session_factory)


def get_recipe_service(repository: RecipeRepository = Depends(get_recipe_repository)) -> RecipeService:
    return RecipeService(repository)
