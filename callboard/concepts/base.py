"""Shared plumbing for concepts: session access and id-list conversion."""

from typing import Any, Iterable, TypeVar
from uuid import UUID

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from callboard.models import Base

ModelT = TypeVar("ModelT", bound=Base)


def id_strings(ids: Iterable[UUID | str]) -> list[str]:
    """Identifier lists are persisted as JSON arrays of strings."""
    return [str(i) for i in ids]


def to_uuids(values: Iterable[UUID | str]) -> list[UUID]:
    return [v if isinstance(v, UUID) else UUID(v) for v in values]


class BaseConcept:
    """A concept owns its tables and only ever flushes; the caller commits."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _create(self, model: type[ModelT], **kwargs: Any) -> ModelT:
        row = model(**kwargs)
        self.session.add(row)
        await self.session.flush()
        await self.session.refresh(row)
        return row

    async def _first(self, query: Select) -> Any:
        result = await self.session.execute(query)
        return result.scalars().first()

    async def _all(self, query: Select) -> list[Any]:
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def _delete(self, row: Base) -> None:
        await self.session.delete(row)
        await self.session.flush()
