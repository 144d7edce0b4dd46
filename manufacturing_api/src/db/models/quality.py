from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, CreatedDateMixin, IntEnumType, IntPkMixin
from src.db.models.enums import DocumentType, InspectionStatus, InspectionType


class QualityInspection(IntPkMixin, CreatedDateMixin, Base):
    """Quality inspection of a production order at a facility."""
    __tablename__ = "quality_inspections"

    inspection_number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    production_order_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("production_orders.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    facility_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("facilities.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    type: Mapped[InspectionType] = mapped_column(IntEnumType(InspectionType), nullable=False)
    status: Mapped[InspectionStatus] = mapped_column(
        IntEnumType(InspectionStatus), nullable=False, default=InspectionStatus.Pending
    )
    scheduled_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    actual_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    inspector_name: Mapped[str] = mapped_column(String(100), nullable=False)
    inspector_badge: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    passed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    results: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    non_conformance_notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    corrective_actions: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    dimension_tolerance: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 4), nullable=True)
    measured_dimension: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 4), nullable=True)
    measurement_unit: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    defect_count: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    certification_required: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    certification_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    completed_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)


class QualityDocument(IntPkMixin, CreatedDateMixin, Base):
    """File metadata attached to an inspection (reports, certificates, etc.)."""
    __tablename__ = "quality_documents"

    quality_inspection_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("quality_inspections.id", ondelete="CASCADE"), nullable=False, index=True
    )
    document_name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[DocumentType] = mapped_column(IntEnumType(DocumentType), nullable=False)
    file_path: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    file_extension: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    description: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    created_by: Mapped[str] = mapped_column(String(100), nullable=False)
    approved_by: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    approved_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    is_approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    version: Mapped[str] = mapped_column(String(50), nullable=False, default="1.0")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
