from datetime import datetime

from pydantic import BaseModel

from .recipe import Recipe


class RecipeResponse(BaseModel):
    success: bool = True
    message: str
    data: Recipe


class RecipeListResponse(BaseModel):
    success: bool = True
    message: str
    data: list[Recipe]


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: str
    timestamp: datetime
    path: str


class HealthResponse(BaseModel):
    success: bool
    message: str
    timestamp: datetime
