from datetime import datetime

from pydantic import BaseModel, Field


class Recipe(BaseModel):
    id: int | None = None
    title: str
    description: str | None = None
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
