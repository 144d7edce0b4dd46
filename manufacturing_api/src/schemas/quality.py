from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from src.db.models.enums import DocumentType, InspectionStatus, InspectionType
from src.schemas.common import APIModel, UtcDateTime, lookup_enum

InspectionTypeField = lookup_enum(InspectionType)
InspectionStatusField = lookup_enum(InspectionStatus)
DocumentTypeField = lookup_enum(DocumentType)


class QualityInspectionCreate(APIModel):
    """Create/replace quality inspection payload."""
    inspection_number: str = Field(..., min_length=1, max_length=50)
    production_order_id: int
    facility_id: int
    type: InspectionTypeField
    status: InspectionStatusField = Field(InspectionStatus.Pending)
    scheduled_date: UtcDateTime
    actual_date: Optional[UtcDateTime] = None
    inspector_name: str = Field(..., min_length=1, max_length=100)
    inspector_badge: Optional[str] = Field(None, max_length=50)
    passed: bool = False
    results: Optional[str] = Field(None, max_length=1000)
    non_conformance_notes: Optional[str] = Field(None, max_length=500)
    corrective_actions: Optional[str] = Field(None, max_length=500)
    dimension_tolerance: Optional[float] = None
    measured_dimension: Optional[float] = None
    measurement_unit: Optional[str] = Field(None, max_length=100)
    defect_count: Optional[int] = Field(None, ge=0)
    certification_required: Optional[str] = Field(None, max_length=200)
    certification_completed: bool = False
    completed_date: Optional[UtcDateTime] = None


class QualityInspectionRead(APIModel):
    """Quality inspection read model."""
    id: int
    inspection_number: str
    production_order_id: int
    facility_id: int
    type: InspectionType
    status: InspectionStatus
    scheduled_date: datetime
    actual_date: Optional[datetime] = None
    inspector_name: str
    inspector_badge: Optional[str] = None
    passed: bool
    results: Optional[str] = None
    non_conformance_notes: Optional[str] = None
    corrective_actions: Optional[str] = None
    dimension_tolerance: Optional[float] = None
    measured_dimension: Optional[float] = None
    measurement_unit: Optional[str] = None
    defect_count: Optional[int] = None
    certification_required: Optional[str] = None
    certification_completed: bool
    created_date: datetime
    completed_date: Optional[datetime] = None


class QualityDocumentCreate(APIModel):
    """Create/replace quality document payload."""
    quality_inspection_id: int
    document_name: str = Field(..., min_length=1, max_length=200)
    type: DocumentTypeField
    file_path: Optional[str] = Field(None, max_length=500)
    file_extension: Optional[str] = Field(None, max_length=100)
    file_size: int = Field(0, ge=0)
    description: Optional[str] = Field(None, max_length=1000)
    created_by: str = Field(..., min_length=1, max_length=100)
    approved_by: Optional[str] = Field(None, max_length=100)
    approved_date: Optional[UtcDateTime] = None
    is_approved: bool = False
    version: str = Field("1.0", max_length=50)
    is_active: bool = True


class QualityDocumentRead(APIModel):
    """Quality document read model."""
    id: int
    quality_inspection_id: int
    document_name: str
    type: DocumentType
    file_path: Optional[str] = None
    file_extension: Optional[str] = None
    file_size: int
    description: Optional[str] = None
    created_by: str
    created_date: datetime
    approved_by: Optional[str] = None
    approved_date: Optional[datetime] = None
    is_approved: bool
    version: str
    is_active: bool
