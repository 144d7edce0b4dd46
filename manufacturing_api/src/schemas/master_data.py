from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from src.db.models.enums import FacilityType
from src.schemas.common import APIModel, lookup_enum

FacilityTypeField = lookup_enum(FacilityType)


class FacilityCreate(APIModel):
    """Create/replace facility payload."""
    name: str = Field(..., min_length=1, max_length=100)
    code: str = Field(..., min_length=1, max_length=10, description="Unique short code")
    address: Optional[str] = Field(None, max_length=200)
    city: Optional[str] = Field(None, max_length=50)
    state: Optional[str] = Field(None, max_length=50)
    country: Optional[str] = Field(None, max_length=20)
    type: FacilityTypeField = Field(FacilityType.InvestmentCasting)
    is_active: bool = True


class FacilityRead(APIModel):
    """Facility read model."""
    id: int
    name: str
    code: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    type: FacilityType
    is_active: bool
    created_date: datetime
