from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select

from src.db.models.enums import EquipmentStatus
from src.db.models.equipment import Equipment
from .base import CrudRepository


class EquipmentRepository(CrudRepository[Equipment]):
    """Repository for facility equipment."""

    model = Equipment

    async def list_equipment(
        self,
        *,
        facility_id: Optional[int],
        status: Optional[EquipmentStatus],
        limit: int,
        offset: int,
    ) -> List[Equipment]:
        stmt = select(Equipment)
        if facility_id is not None:
            stmt = stmt.where(Equipment.facility_id == facility_id)
        if status is not None:
            stmt = stmt.where(Equipment.status == status)
        stmt = stmt.order_by(Equipment.equipment_number)
        return await self._list(stmt, limit, offset)
