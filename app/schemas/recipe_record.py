from datetime import datetime
from typing import Any, Mapping

REQUIRED_FIELDS = ("title", "ingredients", "instructions")
SEQUENCE_FIELDS = ("ingredients", "instructions")
WRITABLE_FIELDS = ("title", "description", "ingredients", "instructions")
MIN_TITLE_LENGTH = 3
# Upper bound of the INTEGER primary key column
MAX_RECIPE_ID = 2_147_483_647


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


class RecipeRecord:
    """
    In-memory recipe: the single place that knows the recipe's shape,
    its structural rules and its two boundary projections (API and storage).

    Construction never fails and never validates, call `validate()` explicitly.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        data = data or {}
        self.id: int | None = data.get("id")
        self.title: Any = data.get("title", "")
        self.description: str | None = data.get("description")
        self.ingredients: Any = data.get("ingredients", [])
        self.instructions: Any = data.get("instructions", [])
        self.created_at: datetime | None = data.get("created_at")
        self.updated_at: datetime | None = data.get("updated_at")

    @staticmethod
    def get_schema() -> dict[str, str]:
        return {
            "id": "number",
            "title": "string",
            "description": "string|null",
            "ingredients": "array",
            "instructions": "array",
            "created_at": "datetime",
            "updated_at": "datetime",
        }

    @staticmethod
    def get_required_fields() -> list[str]:
        return list(REQUIRED_FIELDS)

    def validate(self) -> list[str]:
        errors: list[str] = []

        title = _clean_text(self.title)
        if not title:
            errors.append("title is required")
        elif len(title) < MIN_TITLE_LENGTH:
            errors.append(f"Title must be at least {MIN_TITLE_LENGTH} characters")

        for field in SEQUENCE_FIELDS:
            value = getattr(self, field)
            if value is None or ((is_sequence(value) or isinstance(value, str)) and len(value) == 0):
                errors.append(f"{field} is required")
            elif not is_sequence(value) or not all(isinstance(item, str) for item in value):
                errors.append(f"{field.capitalize()} must be an array")

        return errors

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "ingredients": list(self.ingredients) if is_sequence(self.ingredients) else self.ingredients,
            "instructions": list(self.instructions) if is_sequence(self.instructions) else self.instructions,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def to_database(self) -> dict[str, Any]:
        description = _clean_text(self.description) or None
        return {
            "id": self.id,
            "title": _clean_text(self.title),
            "description": description,
            "ingredients": _as_list(self.ingredients),
            "instructions": _as_list(self.instructions),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def __repr__(self) -> str:
        return f"RecipeRecord(id={self.id!r}, title={self.title!r})"


def _as_list(value: Any) -> list[Any]:
    if not is_sequence(value):
        return []
    return list(value)

