from .recipe_base import RecipeBase
from .recipe_create import RecipeCreate
from .recipe_update import RecipeUpdate
from .recipe import Recipe
from .recipe_record import RecipeRecord
from .envelope import ErrorResponse, HealthResponse, RecipeListResponse, RecipeResponse

__all__ = [
    "RecipeBase",
    "RecipeCreate",
    "RecipeUpdate",
    "Recipe",
    "RecipeRecord",
    "RecipeResponse",
    "RecipeListResponse",
    "ErrorResponse",
    "HealthResponse",
]
