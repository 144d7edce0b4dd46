from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from src.db.models.enums import EquipmentStatus, EquipmentType
from src.schemas.common import APIModel, UtcDateTime, lookup_enum

EquipmentTypeField = lookup_enum(EquipmentType)
EquipmentStatusField = lookup_enum(EquipmentStatus)


class EquipmentCreate(APIModel):
    """Create/replace equipment payload."""
    equipment_number: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=200)
    type: EquipmentTypeField
    manufacturer: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    serial_number: Optional[str] = Field(None, max_length=50)
    installation_date: UtcDateTime
    last_maintenance_date: Optional[UtcDateTime] = None
    next_maintenance_date: Optional[UtcDateTime] = None
    status: EquipmentStatusField = Field(EquipmentStatus.Available)
    facility_id: int
    purchase_cost: float = 0.0
    operating_hours: float = Field(0.0, ge=0)
    maintenance_hours: float = Field(0.0, ge=0)
    efficiency_rating: float = 100.0
    maintenance_notes: Optional[str] = Field(None, max_length=500)
    is_active: bool = True


class EquipmentRead(APIModel):
    """Equipment read model."""
    id: int
    equipment_number: str
    name: str
    description: Optional[str] = None
    type: EquipmentType
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    installation_date: datetime
    last_maintenance_date: Optional[datetime] = None
    next_maintenance_date: Optional[datetime] = None
    status: EquipmentStatus
    facility_id: int
    purchase_cost: float
    operating_hours: float
    maintenance_hours: float
    efficiency_rating: float
    maintenance_notes: Optional[str] = None
    is_active: bool
    created_date: datetime
