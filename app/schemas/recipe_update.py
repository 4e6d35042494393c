from .recipe_base import RecipeBase


class RecipeUpdate(RecipeBase):
    """Fields left unset keep their stored values."""
