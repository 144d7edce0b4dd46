from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, or_, select

from src.db.models.enums import MetricType, Priority, ProductionStatus
from src.db.models.production import ProductionMetric, ProductionOrder
from .base import CrudRepository


class ProductionOrderRepository(CrudRepository[ProductionOrder]):
    """Repository for production orders."""

    model = ProductionOrder

    async def list_orders(self) -> List[ProductionOrder]:
        stmt = select(ProductionOrder).order_by(
            ProductionOrder.created_date.desc(), ProductionOrder.id.desc()
        )
        res = await self.scalars(stmt)
        return list(res)

    async def get_by_number(self, order_number: str) -> Optional[ProductionOrder]:
        stmt = select(ProductionOrder).where(ProductionOrder.order_number == order_number)
        return await self.scalar_one_or_none(stmt)

    async def list_by_facility(self, facility_id: int) -> List[ProductionOrder]:
        stmt = (
            select(ProductionOrder)
            .where(ProductionOrder.facility_id == facility_id)
            .order_by(ProductionOrder.scheduled_start_date.asc())
        )
        res = await self.scalars(stmt)
        return list(res)

    async def list_by_status(self, status: ProductionStatus) -> List[ProductionOrder]:
        stmt = (
            select(ProductionOrder)
            .where(ProductionOrder.status == status)
            .order_by(ProductionOrder.scheduled_start_date.asc())
        )
        res = await self.scalars(stmt)
        return list(res)

    async def list_scheduled_within(self, start: datetime, end: datetime) -> List[ProductionOrder]:
        """Orders whose whole scheduled window lies inside [start, end]."""
        stmt = (
            select(ProductionOrder)
            .where(
                ProductionOrder.scheduled_start_date >= start,
                ProductionOrder.scheduled_end_date <= end,
            )
            .order_by(ProductionOrder.scheduled_start_date.asc())
        )
        res = await self.scalars(stmt)
        return list(res)

    async def list_created_within(
        self, facility_id: int, start: datetime, end: datetime
    ) -> List[ProductionOrder]:
        stmt = select(ProductionOrder).where(
            ProductionOrder.facility_id == facility_id,
            ProductionOrder.created_date >= start,
            ProductionOrder.created_date <= end,
        )
        res = await self.scalars(stmt)
        return list(res)

    async def count_created_between(
        self, facility_id: int, start: datetime, end: datetime
    ) -> int:
        """Count a facility's orders with start <= created_date < end."""
        stmt = select(func.count(ProductionOrder.id)).where(
            ProductionOrder.facility_id == facility_id,
            ProductionOrder.created_date >= start,
            ProductionOrder.created_date < end,
        )
        result = await self.execute(stmt)
        return int(result.scalar_one())

    async def list_critical(self, due_before: datetime) -> List[ProductionOrder]:
        stmt = (
            select(ProductionOrder)
            .where(
                or_(
                    ProductionOrder.priority == Priority.Critical,
                    (ProductionOrder.status != ProductionStatus.Completed)
                    & (ProductionOrder.scheduled_end_date <= due_before),
                )
            )
            .order_by(ProductionOrder.scheduled_end_date.asc())
        )
        res = await self.scalars(stmt)
        return list(res)

    async def list_overdue(self, now: datetime) -> List[ProductionOrder]:
        stmt = (
            select(ProductionOrder)
            .where(
                ProductionOrder.status != ProductionStatus.Completed,
                ProductionOrder.scheduled_end_date < now,
            )
            .order_by(ProductionOrder.scheduled_end_date.asc())
        )
        res = await self.scalars(stmt)
        return list(res)

    async def list_planned_for_facility(self, facility_id: int) -> List[ProductionOrder]:
        stmt = (
            select(ProductionOrder)
            .where(
                ProductionOrder.facility_id == facility_id,
                ProductionOrder.status == ProductionStatus.Planned,
            )
            .order_by(
                ProductionOrder.priority.asc(),
                ProductionOrder.scheduled_start_date.asc(),
            )
        )
        res = await self.scalars(stmt)
        return list(res)


class ProductionMetricRepository(CrudRepository[ProductionMetric]):
    """Repository for production metrics."""

    model = ProductionMetric

    async def list_metrics(
        self,
        *,
        production_order_id: Optional[int],
        metric_type: Optional[MetricType],
        limit: int,
        offset: int,
    ) -> List[ProductionMetric]:
        stmt = select(ProductionMetric)
        if production_order_id is not None:
            stmt = stmt.where(ProductionMetric.production_order_id == production_order_id)
        if metric_type is not None:
            stmt = stmt.where(ProductionMetric.type == metric_type)
        stmt = stmt.order_by(ProductionMetric.measured_date.desc(), ProductionMetric.id.desc())
        return await self._list(stmt, limit, offset)
