from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select

from src.db.models.master_data import Facility
from .base import CrudRepository


class FacilityRepository(CrudRepository[Facility]):
    """Repository for facilities."""

    model = Facility

    async def list_facilities(
        self, *, is_active: Optional[bool], limit: int, offset: int
    ) -> List[Facility]:
        stmt = select(Facility)
        if is_active is not None:
            stmt = stmt.where(Facility.is_active == is_active)
        stmt = stmt.order_by(Facility.code)
        return await self._list(stmt, limit, offset)

    async def get_by_code(self, code: str) -> Optional[Facility]:
        stmt = select(Facility).where(Facility.code == code)
        return await self.scalar_one_or_none(stmt)
