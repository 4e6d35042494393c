import asyncio
import json
import sys
import os
from pathlib import Path
from sqlalchemy import delete

sys.path.append(os.getcwd())

from app.db.session import AsyncSessionLocal, init_db
from app.models.recipe import Recipe
from app.repositories.recipe_repository import RecipeRepository
from app.services.recipe_service import RecipeService

BASE_DIR = Path(__file__).parents[1]
RECIPES_PATH = BASE_DIR / "datasets" / "recipe_samples.json"

async def seed():
    print("Seeding database...")

    await init_db()

    async with AsyncSessionLocal() as db:
        print(" - Cleaning old data...")
        await db.execute(delete(Recipe))
        await db.commit()

    print(" - Loading recipes...")
    with open(RECIPES_PATH) as f:
        recipes_data = json.load(f)

    service = RecipeService(RecipeRepository(AsyncSessionLocal))
    for r_data in recipes_data:
        result = await service.create_recipe(r_data)
        print(f"   + {result['data']['id']}: {result['data']['title']}")

    print(f"Successfully inserted {len(recipes_data)} recipes.")

if __name__ == "__main__":
    asyncio.run(seed())
