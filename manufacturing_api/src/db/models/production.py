from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, CreatedDateMixin, IntEnumType, IntPkMixin, utcnow
from src.db.models.enums import MaterialType, MetricType, Priority, ProductionStatus


class ProductionOrder(IntPkMixin, CreatedDateMixin, Base):
    """Production order: a quantity of a part tracked through the status lifecycle."""
    __tablename__ = "production_orders"

    order_number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    part_number: Mapped[str] = mapped_column(String(100), nullable=False)
    part_description: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    quantity_completed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[ProductionStatus] = mapped_column(
        IntEnumType(ProductionStatus), nullable=False, default=ProductionStatus.Planned, index=True
    )
    priority: Mapped[Priority] = mapped_column(
        IntEnumType(Priority), nullable=False, default=Priority.Medium
    )
    scheduled_start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    scheduled_end_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    actual_start_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    actual_end_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    facility_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("facilities.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    customer_name: Mapped[str] = mapped_column(String(100), nullable=False)
    customer_order_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    material_type: Mapped[MaterialType] = mapped_column(
        IntEnumType(MaterialType), nullable=False, default=MaterialType.InconelAlloy
    )
    estimated_cost: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    actual_cost: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)


class ProductionMetric(IntPkMixin, CreatedDateMixin, Base):
    """Measured value for an order compared against its target/min/max."""
    __tablename__ = "production_metrics"

    production_order_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("production_orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type: Mapped[MetricType] = mapped_column(IntEnumType(MetricType), nullable=False)
    metric_name: Mapped[str] = mapped_column(String(100), nullable=False)
    value: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False, default=Decimal("0"))
    unit: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    target_value: Mapped[Optional[Decimal]] = mapped_column(Numeric(18, 4), nullable=True)
    min_value: Mapped[Optional[Decimal]] = mapped_column(Numeric(18, 4), nullable=True)
    max_value: Mapped[Optional[Decimal]] = mapped_column(Numeric(18, 4), nullable=True)
    is_within_tolerance: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    measured_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    measured_by: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
