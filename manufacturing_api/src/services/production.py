from __future__ import annotations

import logging
from collections import Counter, defaultdict
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.db.base import utcnow
from src.db.models.enums import ProductionStatus
from src.db.models.production import ProductionOrder
from src.repositories.master_data import FacilityRepository
from src.repositories.production import ProductionOrderRepository
from src.schemas.production import (
    ProductionAnalyticsRead,
    ProductionOrderCreate,
    ProductionOrderUpdate,
)
from src.services.base import BaseService

logger = logging.getLogger(__name__)

DEFAULT_FACILITY_CODE = "FAC"


# PUBLIC_INTERFACE
def efficiency_rating(order: ProductionOrder) -> float:
    """
    Unweighted mean of time, quantity and cost efficiency, each as a percentage.

      - time: scheduled duration / actual duration * 100
      - quantity: completed / target quantity * 100
      - cost: estimated cost / max(actual cost, 1) * 100

    Returns 0 when either actual date is missing. Results are not clamped, so a
    short actual duration or a small actual cost can push the rating well past 100.
    Raises ZeroDivisionError for a zero actual duration or a zero target quantity.
    """
    if order.actual_start_date is None or order.actual_end_date is None:
        return 0.0

    scheduled_hours = (order.scheduled_end_date - order.scheduled_start_date).total_seconds() / 3600
    actual_hours = (order.actual_end_date - order.actual_start_date).total_seconds() / 3600

    time_efficiency = scheduled_hours / actual_hours * 100
    quantity_efficiency = order.quantity_completed / order.quantity * 100
    cost_efficiency = float(order.estimated_cost) / max(float(order.actual_cost), 1.0) * 100

    return (time_efficiency + quantity_efficiency + cost_efficiency) / 3


class ProductionOrderService(BaseService):
    """
    Domain service for production orders.

    Owns the order lifecycle (creation with numbering, status side effects) and the
    derived figures: efficiency, facility analytics, critical/delayed lists and the
    greedy schedule repacking.
    """

    def __init__(
        self,
        session: AsyncSession,
        *,
        critical_window_days: int = 7,
        schedule_buffer_hours: float = 12.0,
    ) -> None:
        super().__init__(session)
        self.orders = ProductionOrderRepository(session)
        self.facilities = FacilityRepository(session)
        self.critical_window = timedelta(days=critical_window_days)
        self.schedule_buffer = timedelta(hours=schedule_buffer_hours)

    # Queries

    async def list_orders(self) -> List[ProductionOrder]:
        return await self.orders.list_orders()

    async def get_order(self, order_id: int) -> Optional[ProductionOrder]:
        return await self.orders.get(order_id)

    async def get_order_by_number(self, order_number: str) -> Optional[ProductionOrder]:
        return await self.orders.get_by_number(order_number)

    async def list_orders_by_facility(self, facility_id: int) -> List[ProductionOrder]:
        return await self.orders.list_by_facility(facility_id)

    async def list_orders_by_status(self, status: ProductionStatus) -> List[ProductionOrder]:
        return await self.orders.list_by_status(status)

    async def list_orders_by_date_range(self, start: datetime, end: datetime) -> List[ProductionOrder]:
        return await self.orders.list_scheduled_within(start, end)

    # Lifecycle

    # PUBLIC_INTERFACE
    async def create_order(self, payload: ProductionOrderCreate) -> ProductionOrder:
        """
        Persist a new order, stamping its creation time.

        When no order number is supplied one is generated as
        {facilityCode}-{yyyyMMdd}-{sequence:03d}.
        """
        order = ProductionOrder(**payload.model_dump(exclude={"order_number"}))
        order.created_date = utcnow()

        order_number = (payload.order_number or "").strip()
        if not order_number:
            order_number = await self._generate_order_number(payload.facility_id, order.created_date)
        order.order_number = order_number

        await self.orders.add(order)
        await self.orders.commit()
        await self.session.refresh(order)
        logger.info("Created production order %s (id=%s)", order.order_number, order.id)
        return order

    async def update_order(self, order: ProductionOrder, payload: ProductionOrderUpdate) -> ProductionOrder:
        """Replace the mutable fields of an existing order."""
        values = payload.model_dump(exclude={"id", "order_number"})
        order_number = (payload.order_number or "").strip()
        if order_number:
            values["order_number"] = order_number
        return await self.orders.update(order, values)

    async def delete_order(self, order_id: int) -> bool:
        deleted = await self.orders.delete(order_id)
        if deleted:
            logger.info("Deleted production order id=%s", order_id)
        return deleted

    # PUBLIC_INTERFACE
    async def update_order_status(self, order_id: int, status: ProductionStatus) -> bool:
        """
        Set an order's status. Any transition is allowed.

        Side effects:
          - InProgress: stamps actual_start_date when it is not set yet
          - Completed: stamps actual_end_date and sets quantity_completed to quantity

        Returns False when the order does not exist.
        """
        order = await self.orders.get(order_id)
        if order is None:
            return False

        previous = order.status
        order.status = status
        if status == ProductionStatus.InProgress and order.actual_start_date is None:
            order.actual_start_date = utcnow()
        elif status == ProductionStatus.Completed:
            order.actual_end_date = utcnow()
            order.quantity_completed = order.quantity

        await self.orders.commit()
        logger.info(
            "Order %s status %s -> %s", order.order_number, previous.name, status.name
        )
        return True

    # Derived figures

    # PUBLIC_INTERFACE
    async def calculate_efficiency_rating(self, order_id: int) -> float:
        """Efficiency rating of one order; 0 when the order is missing or not started/finished."""
        order = await self.orders.get(order_id)
        if order is None:
            return 0.0
        return efficiency_rating(order)

    # PUBLIC_INTERFACE
    async def get_production_analytics(
        self, facility_id: int, start: datetime, end: datetime
    ) -> ProductionAnalyticsRead:
        """
        Aggregate the facility's orders created within [start, end].

        The on-time delivery rate is (completed - delayed) / total * 100 and goes
        negative when delayed orders outnumber completed ones.
        """
        orders = await self.orders.list_created_within(facility_id, start, end)

        total = len(orders)
        completed = sum(1 for o in orders if o.status == ProductionStatus.Completed)
        delayed = sum(
            1
            for o in orders
            if o.actual_end_date is not None and o.actual_end_date > o.scheduled_end_date
        )
        total_cost = sum(float(o.actual_cost) for o in orders)
        total_estimated = sum(float(o.estimated_cost) for o in orders)

        ratings: List[float] = []
        by_part: Dict[str, List[float]] = defaultdict(list)
        for o in orders:
            if o.actual_start_date is None or o.actual_end_date is None:
                continue
            try:
                rating = efficiency_rating(o)
            except ZeroDivisionError:
                logger.warning("Skipping order %s in efficiency averages: zero duration or quantity", o.order_number)
                continue
            ratings.append(rating)
            by_part[o.part_number].append(rating)

        return ProductionAnalyticsRead(
            total_orders=total,
            completed_orders=completed,
            delayed_orders=delayed,
            on_time_delivery_rate=((completed - delayed) / total * 100) if total else 0.0,
            average_efficiency=(sum(ratings) / len(ratings)) if ratings else 0.0,
            total_production_cost=total_cost,
            cost_variance=total_cost - total_estimated,
            orders_by_status=dict(Counter(o.status.name for o in orders)),
            efficiency_by_part_type={part: sum(vals) / len(vals) for part, vals in by_part.items()},
        )

    # PUBLIC_INTERFACE
    async def get_critical_orders(self) -> List[ProductionOrder]:
        """Critical-priority orders plus non-completed orders due within the critical window."""
        return await self.orders.list_critical(utcnow() + self.critical_window)

    # PUBLIC_INTERFACE
    async def get_delayed_orders(self) -> List[ProductionOrder]:
        """Non-completed orders whose scheduled end is already past."""
        return await self.orders.list_overdue(utcnow())

    # PUBLIC_INTERFACE
    async def optimize_production_schedule(self, facility_id: int) -> bool:
        """
        Repack the facility's Planned orders back-to-back starting now.

        Orders are taken by priority (enum value ascending) then original scheduled
        start. Each keeps its original duration; consecutive orders are separated by
        the schedule buffer. Single resource, no conflict detection.

        Always returns True, including when the facility has no Planned orders.
        """
        orders = await self.orders.list_planned_for_facility(facility_id)

        current = utcnow()
        for order in orders:
            duration = order.scheduled_end_date - order.scheduled_start_date
            order.scheduled_start_date = current
            order.scheduled_end_date = current + duration
            current = order.scheduled_end_date + self.schedule_buffer

        await self.orders.commit()
        logger.info("Rescheduled %d planned orders for facility %s", len(orders), facility_id)
        return True

    async def _generate_order_number(self, facility_id: int, created: datetime) -> str:
        facility = await self.facilities.get(facility_id)
        facility_code = facility.code if facility is not None else DEFAULT_FACILITY_CODE

        day_start = created.replace(hour=0, minute=0, second=0, microsecond=0)
        count = await self.orders.count_created_between(
            facility_id, day_start, day_start + timedelta(days=1)
        )
        return f"{facility_code}-{created:%Y%m%d}-{count + 1:03d}"
