from pydantic import ConfigDict

from .recipe_base import RecipeBase


class RecipeCreate(RecipeBase):
    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "title": "Soto Ayam",
                "description": "Traditional chicken soup",
                "ingredients": ["ayam", "kentang", "tauge", "telur"],
                "instructions": ["Rebus ayam", "Tumis bumbu", "Campur semua"],
            }
        },
    )
