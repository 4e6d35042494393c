import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Mapping

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.exceptions import InvalidInputError, StorageError, ValidationError
from app.models import Recipe as RecipeRow
from app.schemas.recipe_record import MAX_RECIPE_ID, SEQUENCE_FIELDS, WRITABLE_FIELDS, RecipeRecord

logger = logging.getLogger(__name__)


def encode_sequence(values: list[str]) -> str:
    return json.dumps(list(values), ensure_ascii=False)


def decode_sequence(raw: str, *, field: str, recipe_id: int) -> list[str]:
    """
    Parse a JSON-text column back into a list of strings.
    A column that does not hold a JSON array of strings is a storage defect.
    """
    try:
        values = json.loads(raw)
    except (TypeError, ValueError) as ex:
        raise StorageError(
            "Stored recipe data is corrupted",
            detail=f"Column '{field}' of recipe {recipe_id} is not valid JSON: {ex}",
        ) from ex

    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise StorageError(
            "Stored recipe data is corrupted",
            detail=f"Column '{field}' of recipe {recipe_id} is not a JSON array of strings",
        )
    return values


class RecipeRepository:
    """
    Owns every query against the `recipes` table.

    Each public method opens and closes its own session, so a connection is
    never held across two logical operations. Methods accept and return
    `RecipeRecord` instances (or None), never raw rows.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def _session(self, action: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self.session_factory() as session:
                yield session
        except (SQLAlchemyError, OSError) as ex:
            logger.error(f"Recipe storage failed to {action}: {ex}")
            raise StorageError(f"Failed to {action}", detail=str(ex)) from ex

    @staticmethod
    def _require_id(recipe_id: Any) -> int:
        if (
            isinstance(recipe_id, bool)
            or not isinstance(recipe_id, int)
            or not 0 < recipe_id <= MAX_RECIPE_ID
        ):
            raise InvalidInputError(f"Invalid recipe ID: {recipe_id!r}")
        return recipe_id

    @staticmethod
    def _to_record(row: RecipeRow) -> RecipeRecord:
        data: dict[str, Any] = {
            "id": row.id,
            "title": row.title,
            "description": row.description,
            "created_at": row.created_at,
            "updated_at": row.updated_at,
        }
        for field in SEQUENCE_FIELDS:
            data[field] = decode_sequence(getattr(row, field), field=field, recipe_id=row.id)
        return RecipeRecord(data)

    @staticmethod
    def _to_columns(record: RecipeRecord) -> dict[str, Any]:
        values = record.to_database()
        columns = {field: values[field] for field in WRITABLE_FIELDS}
        for field in SEQUENCE_FIELDS:
            columns[field] = encode_sequence(columns[field])
        return columns

    def validate_with_model(self, data: Mapping[str, Any]) -> RecipeRecord:
        record = RecipeRecord(data)
        errors = record.validate()
        if errors:
            raise ValidationError(errors)
        return record

    async def find_all(self) -> list[RecipeRecord]:
        query = select(RecipeRow).order_by(RecipeRow.created_at.desc(), RecipeRow.id.desc())
        async with self._session("fetch recipes") as session:
            result = await session.execute(query)
            rows = result.scalars().all()
        return [self._to_record(row) for row in rows]

    async def find_by_id(self, recipe_id: int) -> RecipeRecord | None:
        recipe_id = self._require_id(recipe_id)
        query = select(RecipeRow).where(RecipeRow.id == recipe_id)
        async with self._session("fetch recipe") as session:
            result = await session.execute(query)
            row = result.scalar_one_or_none()
        if row is None:
            return None
        return self._to_record(row)

    async def create(self, data: Mapping[str, Any]) -> RecipeRecord | None:
        record = self.validate_with_model(data)
        row = RecipeRow(**self._to_columns(record))
        async with self._session("create recipe") as session:
            session.add(row)
            await session.flush()
            recipe_id = row.id
            await session.commit()

        logger.debug(f"Inserted recipe {recipe_id}")
        return await self.find_by_id(recipe_id)

    async def update(self, recipe_id: int, data: Mapping[str, Any]) -> RecipeRecord | None:
        """
        Merge `data` over the stored recipe, validate the result and write it.
        Returns None when no recipe has this id.
        """
        existing = await self.find_by_id(recipe_id)
        if existing is None:
            return None

        merged = existing.to_json()
        merged.update({k: v for k, v in data.items() if k in WRITABLE_FIELDS})
        record = self.validate_with_model(merged)

        statement = (
            update(RecipeRow)
            .where(RecipeRow.id == existing.id)
            .values(**self._to_columns(record), updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        async with self._session("update recipe") as session:
            result = await session.execute(statement)
            await session.commit()
            affected = result.rowcount

        if not affected:
            return None
        return await self.find_by_id(existing.id)

    async def delete(self, recipe_id: int) -> RecipeRecord | None:
        existing = await self.find_by_id(recipe_id)
        if existing is None:
            return None

        async with self._session("delete recipe") as session:
            statement = (
                delete(RecipeRow)
                .where(RecipeRow.id == existing.id)
                .execution_options(synchronize_session=False)
            )
            result = await session.execute(statement)
            await session.commit()
            affected = result.rowcount

        if not affected:
            return None
        return existing
