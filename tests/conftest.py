import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
import httpx
from httpx import ASGITransport
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.models import Base
from app.repositories.recipe_repository import RecipeRepository

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture(scope="function")
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    # StaticPool keeps one connection so every session sees the same in-memory database
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=db_engine, expire_on_commit=False)


@pytest.fixture(scope="function")
def repository(session_factory) -> RecipeRepository:
    return RecipeRepository(session_factory)


@pytest.fixture(scope="function")
async def async_client(session_factory) -> AsyncGenerator[httpx.AsyncClient, None]:
    from app.main import app
    from app.db.session import get_sessionmaker

    app.dependency_overrides[get_sessionmaker] = lambda: session_factory

    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def recipe_data() -> dict:
    return {
        "title": "Soto Ayam",
        "description": "Soto ayam tradisional",
        "ingredients": ["ayam", "kentang"],
        "instructions": ["rebus", "sajikan"],
    }
