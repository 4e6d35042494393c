from typing import Annotated, Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

StringSequence = Annotated[
    list[Annotated[str, StringConstraints(max_length=1000)]], Field(max_length=100)
]
# A JSON array serialized into a string, e.g. '["rice", "egg"]'
JsonEncodedString = str


class RecipeBase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=50000)
    ingredients: Union[StringSequence, JsonEncodedString, None] = None
    instructions: Union[StringSequence, JsonEncodedString, None] = None
