from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select

from src.db.models.enums import InspectionStatus
from src.db.models.quality import QualityDocument, QualityInspection
from .base import CrudRepository


class QualityInspectionRepository(CrudRepository[QualityInspection]):
    """Repository for quality inspections."""

    model = QualityInspection

    async def list_inspections(
        self,
        *,
        production_order_id: Optional[int],
        facility_id: Optional[int],
        status: Optional[InspectionStatus],
        limit: int,
        offset: int,
    ) -> List[QualityInspection]:
        stmt = select(QualityInspection)
        if production_order_id is not None:
            stmt = stmt.where(QualityInspection.production_order_id == production_order_id)
        if facility_id is not None:
            stmt = stmt.where(QualityInspection.facility_id == facility_id)
        if status is not None:
            stmt = stmt.where(QualityInspection.status == status)
        stmt = stmt.order_by(QualityInspection.created_date.desc(), QualityInspection.id.desc())
        return await self._list(stmt, limit, offset)


class QualityDocumentRepository(CrudRepository[QualityDocument]):
    """Repository for documents attached to inspections."""

    model = QualityDocument

    async def list_documents(
        self, *, quality_inspection_id: Optional[int], limit: int, offset: int
    ) -> List[QualityDocument]:
        stmt = select(QualityDocument)
        if quality_inspection_id is not None:
            stmt = stmt.where(QualityDocument.quality_inspection_id == quality_inspection_id)
        stmt = stmt.order_by(QualityDocument.created_date.desc(), QualityDocument.id.desc())
        return await self._list(stmt, limit, offset)
