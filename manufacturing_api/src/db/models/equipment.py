from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, CreatedDateMixin, IntEnumType, IntPkMixin
from src.db.models.enums import EquipmentStatus, EquipmentType


class Equipment(IntPkMixin, CreatedDateMixin, Base):
    """Machine or furnace installed at a facility, with maintenance tracking."""
    __tablename__ = "equipment"

    equipment_number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    type: Mapped[EquipmentType] = mapped_column(IntEnumType(EquipmentType), nullable=False)
    manufacturer: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    model: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    serial_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    installation_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    last_maintenance_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    next_maintenance_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    status: Mapped[EquipmentStatus] = mapped_column(
        IntEnumType(EquipmentStatus), nullable=False, default=EquipmentStatus.Available
    )
    facility_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("facilities.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    purchase_cost: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    operating_hours: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    maintenance_hours: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    efficiency_rating: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False, default=Decimal("100.0"))
    maintenance_notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
