from __future__ import annotations

from typing import Any, Generic, Iterable, List, Optional, Type, TypeVar

from sqlalchemy import Executable, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository:
    """
    Base class for repositories providing common helpers.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def execute(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute a SQLAlchemy statement."""
        return await self.session.execute(statement, params or {})

    async def scalars(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute and return scalars."""
        result = await self.execute(statement, params)
        return result.scalars()

    async def scalar_one_or_none(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute and return a single scalar or None."""
        result = await self.execute(statement, params)
        return result.scalar_one_or_none()

    async def commit(self) -> None:
        """Commit current transaction."""
        await self.session.commit()

    async def add_all(self, entities: Iterable[Any]) -> None:
        """Add multiple entities to session."""
        self.session.add_all(list(entities))

    async def add(self, entity: Any) -> None:
        """Add a single entity to session."""
        self.session.add(entity)


class CrudRepository(BaseRepository, Generic[ModelT]):
    """
    Repository with get/create/update/delete for a single mapped class.

    Subclasses set `model` and add their own list/filter queries.
    """

    model: Type[ModelT]

    async def get(self, entity_id: int) -> Optional[ModelT]:
        stmt = select(self.model).where(self.model.id == entity_id)
        return await self.scalar_one_or_none(stmt)

    async def create(self, values: dict[str, Any]) -> ModelT:
        row = self.model(**values)
        await self.add(row)
        await self.commit()
        await self.session.refresh(row)
        return row

    async def update(self, row: ModelT, values: dict[str, Any]) -> ModelT:
        for key, value in values.items():
            setattr(row, key, value)
        await self.commit()
        await self.session.refresh(row)
        return row

    async def delete(self, entity_id: int) -> bool:
        row = await self.get(entity_id)
        if row is None:
            return False
        await self.session.delete(row)
        await self.commit()
        return True

    async def _list(self, stmt, limit: int, offset: int) -> List[ModelT]:
        res = await self.scalars(stmt.offset(offset).limit(limit))
        return list(res)
