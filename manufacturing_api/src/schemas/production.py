from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional

from pydantic import Field, model_validator

from src.db.models.enums import MaterialType, MetricType, Priority, ProductionStatus
from src.schemas.common import APIModel, UtcDateTime, lookup_enum

ProductionStatusField = lookup_enum(ProductionStatus)
PriorityField = lookup_enum(Priority)
MaterialTypeField = lookup_enum(MaterialType)
MetricTypeField = lookup_enum(MetricType)


class ProductionOrderCreate(APIModel):
    """Create production order payload. A blank order number is generated server-side."""
    order_number: Optional[str] = Field(None, max_length=50, description="Order number")
    part_number: str = Field(..., min_length=1, max_length=100)
    part_description: Optional[str] = Field(None, max_length=200)
    quantity: int = Field(..., ge=0)
    quantity_completed: int = Field(0, ge=0)
    status: ProductionStatusField = Field(ProductionStatus.Planned)
    priority: PriorityField = Field(Priority.Medium)
    scheduled_start_date: UtcDateTime = Field(...)
    scheduled_end_date: UtcDateTime = Field(...)
    actual_start_date: Optional[UtcDateTime] = Field(None)
    actual_end_date: Optional[UtcDateTime] = Field(None)
    facility_id: int = Field(..., description="Owning facility id")
    customer_name: str = Field(..., min_length=1, max_length=100)
    customer_order_number: Optional[str] = Field(None, max_length=50)
    material_type: MaterialTypeField = Field(MaterialType.InconelAlloy)
    estimated_cost: float = Field(0.0)
    actual_cost: float = Field(0.0)
    notes: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def _check_schedule(self):
        if self.scheduled_end_date < self.scheduled_start_date:
            raise ValueError("scheduledEndDate cannot be earlier than scheduledStartDate")
        return self


class ProductionOrderUpdate(ProductionOrderCreate):
    """Full replacement payload; `id` must match the id in the path."""
    id: int = Field(..., description="Production order id")


class ProductionOrderRead(APIModel):
    """Production order read model."""
    id: int
    order_number: str
    part_number: str
    part_description: Optional[str] = None
    quantity: int
    quantity_completed: int
    status: ProductionStatus
    priority: Priority
    scheduled_start_date: datetime
    scheduled_end_date: datetime
    actual_start_date: Optional[datetime] = None
    actual_end_date: Optional[datetime] = None
    facility_id: int
    customer_name: str
    customer_order_number: Optional[str] = None
    material_type: MaterialType
    estimated_cost: float
    actual_cost: float
    created_date: datetime
    notes: Optional[str] = None


class OrderStatusUpdate(APIModel):
    """Status change payload."""
    status: ProductionStatusField = Field(..., description="New status (value or name)")


class EfficiencyRead(APIModel):
    """Efficiency rating of a single order."""
    order_id: int
    efficiency_rating: float


class ProductionAnalyticsRead(APIModel):
    """Aggregated production figures for a facility over a creation-date window."""
    total_orders: int = 0
    completed_orders: int = 0
    delayed_orders: int = 0
    on_time_delivery_rate: float = 0.0
    average_efficiency: float = 0.0
    total_production_cost: float = 0.0
    cost_variance: float = 0.0
    orders_by_status: Dict[str, int] = Field(default_factory=dict)
    efficiency_by_part_type: Dict[str, float] = Field(default_factory=dict)


class ProductionMetricCreate(APIModel):
    """Create/replace production metric payload."""
    production_order_id: int
    type: MetricTypeField
    metric_name: str = Field(..., min_length=1, max_length=100)
    value: float = 0.0
    unit: Optional[str] = Field(None, max_length=50)
    target_value: Optional[float] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    is_within_tolerance: bool = True
    measured_date: Optional[UtcDateTime] = None
    measured_by: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=500)


class ProductionMetricRead(APIModel):
    """Production metric read model."""
    id: int
    production_order_id: int
    type: MetricType
    metric_name: str
    value: float
    unit: Optional[str] = None
    target_value: Optional[float] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    is_within_tolerance: bool
    measured_date: datetime
    measured_by: Optional[str] = None
    notes: Optional[str] = None
    created_date: datetime
