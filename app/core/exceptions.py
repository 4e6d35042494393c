from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    STORAGE = "storage"


class RecipeAPIError(Exception):
    """
    Base class for errors raised by the recipe pipeline.
    `kind` selects the HTTP status the error maps to.
    """

    kind: ErrorKind

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(RecipeAPIError):
    kind = ErrorKind.VALIDATION

    def __init__(self, errors: list[str], prefix: str = "Data validation failed") -> None:
        self.errors = list(errors)
        super().__init__(f"{prefix}: {', '.join(self.errors)}")


class InvalidInputError(RecipeAPIError):
    kind = ErrorKind.INVALID_INPUT


class NotFoundError(RecipeAPIError):
    kind = ErrorKind.NOT_FOUND


class StorageError(RecipeAPIError):
    kind = ErrorKind.STORAGE
