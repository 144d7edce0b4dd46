from __future__ import annotations

from typing import Optional
from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, CreatedDateMixin, IntEnumType, IntPkMixin
from src.db.models.enums import FacilityType


class Facility(IntPkMixin, CreatedDateMixin, Base):
    """Physical manufacturing site; owns production orders, inspections and equipment."""
    __tablename__ = "facilities"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    code: Mapped[str] = mapped_column(String(10), nullable=False, unique=True)
    address: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    type: Mapped[FacilityType] = mapped_column(
        IntEnumType(FacilityType), nullable=False, default=FacilityType.InvestmentCasting
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
