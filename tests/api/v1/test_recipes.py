import logging
import pytest
import json
from httpx import AsyncClient
from pathlib import Path

from app.core.config import settings

RECIPES_SOURCE_PATH = Path(__file__).parents[3] / "datasets" / "recipe_samples.json"

with open(RECIPES_SOURCE_PATH) as f:
    recipes_sample = json.load(f)


@pytest.mark.asyncio
class TestRecipeOperations:
    BASE_RECIPE_DATA = {
        "title": "Soto Ayam",
        "description": "Soto ayam tradisional",
        "ingredients": ["ayam", "kentang"],
        "instructions": ["rebus", "sajikan"],
    }

    @pytest.fixture
    async def existing_recipe(self, async_client: AsyncClient):
        response = await async_client.post("/api/v1/recipes/", json=self.BASE_RECIPE_DATA)
        assert response.status_code == 201
        return response.json()["data"]

    async def test_create_recipe(self, async_client: AsyncClient):
        response = await async_client.post("/api/v1/recipes/", json=self.BASE_RECIPE_DATA)
        assert response.status_code == 201
        body = response.json()

        assert body["success"] is True
        assert body["message"] == "Recipe created successfully"
        assert isinstance(body["data"]["id"], int) and body["data"]["id"] > 0
        assert body["data"]["ingredients"] == ["ayam", "kentang"]
        assert body["data"]["instructions"] == ["rebus", "sajikan"]
        assert body["data"]["created_at"] is not None

    async def test_create_recipe_with_json_encoded_sequences(self, async_client: AsyncClient):
        payload = {**self.BASE_RECIPE_DATA, "ingredients": '["ayam", "kentang"]'}

        response = await async_client.post("/api/v1/recipes/", json=payload)
        assert response.status_code == 201
        assert response.json()["data"]["ingredients"] == ["ayam", "kentang"]

    async def test_create_recipe_validation_errors(self, async_client: AsyncClient):
        response = await async_client.post("/api/v1/recipes/", json={})
        assert response.status_code == 400
        body = response.json()

        assert body["success"] is False
        assert "title is required" in body["message"]
        assert "ingredients is required" in body["message"]
        assert "instructions is required" in body["message"]
        assert body["path"] == "/api/v1/recipes/"
        assert body["timestamp"]

    async def test_create_recipe_non_array_ingredients(self, async_client: AsyncClient):
        payload = {**self.BASE_RECIPE_DATA, "ingredients": "ayam, kentang"}

        response = await async_client.post("/api/v1/recipes/", json=payload)
        assert response.status_code == 400
        assert "Ingredients must be an array" in response.json()["message"]

    async def test_create_recipe_non_text_items_keeps_table_readable(
        self, async_client: AsyncClient, existing_recipe
    ):
        payload = {**self.BASE_RECIPE_DATA, "ingredients": "[1, 2]"}

        response = await async_client.post("/api/v1/recipes/", json=payload)
        assert response.status_code == 400
        assert "Ingredients must be an array" in response.json()["message"]

        list_response = await async_client.get("/api/v1/recipes/")
        assert list_response.status_code == 200
        assert [r["id"] for r in list_response.json()["data"]] == [existing_recipe["id"]]

    async def test_create_recipe_malformed_json(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/v1/recipes/",
            content="{ invalid json }",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Invalid JSON format"

    async def test_get_recipes_list(self, async_client: AsyncClient, existing_recipe):
        response = await async_client.get("/api/v1/recipes/")
        assert response.status_code == 200
        body = response.json()

        assert body["message"] == "Recipes retrieved successfully"
        assert [r["id"] for r in body["data"]] == [existing_recipe["id"]]

    async def test_get_recipes_newest_first(self, async_client: AsyncClient):
        for recipe in recipes_sample:
            await async_client.post("/api/v1/recipes/", json=recipe)

        response = await async_client.get("/api/v1/recipes/")
        titles = [r["title"] for r in response.json()["data"]]
        assert titles == [r["title"] for r in reversed(recipes_sample)]

    async def test_get_recipe_by_id(self, async_client: AsyncClient, existing_recipe):
        response = await async_client.get(f"/api/v1/recipes/{existing_recipe['id']}")
        assert response.status_code == 200
        assert response.json()["data"] == existing_recipe

    async def test_get_recipe_not_found(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/recipes/999999")
        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert "999999" in body["message"]

    async def test_get_recipe_invalid_id(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/recipes/invalid")
        assert response.status_code == 400
        assert "Invalid" in response.json()["message"]

    async def test_get_recipe_id_out_of_range(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/recipes/99999999999999999999")
        assert response.status_code == 400
        assert "Invalid recipe ID" in response.json()["message"]

    async def test_update_recipe_partial(self, async_client: AsyncClient, existing_recipe):
        recipe_id = existing_recipe["id"]

        response = await async_client.put(f"/api/v1/recipes/{recipe_id}", json={"title": "Soto Betawi"})
        assert response.status_code == 200
        data = response.json()["data"]

        assert data["title"] == "Soto Betawi"
        assert data["ingredients"] == existing_recipe["ingredients"]
        assert data["description"] == existing_recipe["description"]

    async def test_patch_recipe_ingredients(self, async_client: AsyncClient, existing_recipe):
        recipe_id = existing_recipe["id"]

        response = await async_client.patch(
            f"/api/v1/recipes/{recipe_id}", json={"ingredients": ["new_ing1", "new_ing2"]}
        )
        assert response.status_code == 200
        assert response.json()["data"]["ingredients"] == ["new_ing1", "new_ing2"]

    async def test_update_recipe_validation_error(self, async_client: AsyncClient, existing_recipe):
        response = await async_client.put(f"/api/v1/recipes/{existing_recipe['id']}", json={"title": "AB"})
        assert response.status_code == 400
        assert "Title must be at least 3 characters" in response.json()["message"]

    async def test_update_recipe_not_found(self, async_client: AsyncClient):
        response = await async_client.put("/api/v1/recipes/999999", json={"title": "Ghost Recipe"})
        assert response.status_code == 404

    async def test_delete_recipe(self, async_client: AsyncClient, existing_recipe):
        recipe_id = existing_recipe["id"]
        response = await async_client.delete(f"/api/v1/recipes/{recipe_id}")
        assert response.status_code == 200
        assert response.json()["message"] == "Recipe deleted successfully"
        assert response.json()["data"]["id"] == recipe_id

        get_response = await async_client.get(f"/api/v1/recipes/{recipe_id}")
        assert get_response.status_code == 404

    async def test_delete_recipe_not_found(self, async_client: AsyncClient):
        response = await async_client.delete("/api/v1/recipes/999999")
        assert response.status_code == 404


@pytest.mark.asyncio
class TestApplicationRoutes:
    async def test_health(self, async_client: AsyncClient):
        response = await async_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Recipe API is running!"
        assert body["timestamp"]

    async def test_root(self, async_client: AsyncClient):
        response = await async_client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    async def test_unknown_route(self, async_client: AsyncClient):
        response = await async_client.get("/unknown-route")
        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Route not found"
        assert body["path"] == "/unknown-route"

    async def test_cors_preflight(self, async_client: AsyncClient):
        response = await async_client.options(
            "/api/v1/recipes/",
            headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "DELETE" in response.headers["access-control-allow-methods"]

    async def test_storage_error_detail_only_in_development(self, async_client: AsyncClient, monkeypatch):
        from app.repositories.recipe_repository import RecipeRepository
        from app.core.exceptions import StorageError

        async def failing_find_all(self):
            raise StorageError("Failed to fetch recipes", detail="connection refused")

        monkeypatch.setattr(RecipeRepository, "find_all", failing_find_all)

        response = await async_client.get("/api/v1/recipes/")
        assert response.status_code == 500
        assert response.json()["error"] == "Failed to fetch recipes"

        monkeypatch.setattr(settings, "ENVIRONMENT", "development")
        response = await async_client.get("/api/v1/recipes/")
        assert response.status_code == 500
        assert response.json()["error"] == "connection refused"


@pytest.mark.asyncio
async def test_request_log_written_when_handler_raises(caplog):
    from starlette.requests import Request
    from app.main import log_requests

    request = Request({"type": "http", "method": "GET", "path": "/boom", "headers": [], "query_string": b""})

    async def call_next(_request):
        raise RuntimeError("boom")

    caplog.set_level(logging.INFO, logger="app.main")
    with pytest.raises(RuntimeError):
        await log_requests(request, call_next)

    assert any("GET /boom - 500" in record.getMessage() for record in caplog.records)
