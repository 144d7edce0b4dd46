from __future__ import annotations

from typing import List, Optional, Union

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.deps import get_db_session, get_order_service
from src.db.models.enums import ProductionStatus
from src.repositories.production import ProductionMetricRepository
from src.schemas.common import MessageResponse, UtcDateTime
from src.schemas.production import (
    EfficiencyRead,
    MetricTypeField,
    OrderStatusUpdate,
    ProductionAnalyticsRead,
    ProductionMetricCreate,
    ProductionMetricRead,
    ProductionOrderCreate,
    ProductionOrderRead,
    ProductionOrderUpdate,
    ProductionStatusField,
)
from src.services.production import ProductionOrderService

router = APIRouter(prefix="/productionorders", tags=["Production Orders"])
metrics_router = APIRouter(prefix="/productionmetrics", tags=["Production Metrics"])


def _check_range(start, end) -> None:
    if start > end:
        raise HTTPException(status_code=400, detail="Start date cannot be later than end date")


def _order_not_found(order_id) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Production order with ID {order_id} not found")


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[ProductionOrderRead],
    summary="List production orders",
    description="List all production orders, newest first.",
)
async def list_orders(
    service: ProductionOrderService = Depends(get_order_service),
) -> List[ProductionOrderRead]:
    orders = await service.list_orders()
    return [ProductionOrderRead.model_validate(x) for x in orders]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=ProductionOrderRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create production order",
    description="Create an order; a blank orderNumber is generated as {facilityCode}-{yyyyMMdd}-{seq}.",
)
async def create_order(
    payload: ProductionOrderCreate,
    request: Request,
    response: Response,
    service: ProductionOrderService = Depends(get_order_service),
) -> ProductionOrderRead:
    created = await service.create_order(payload)
    response.headers["Location"] = str(request.url_for("get_order", order_id=created.id))
    return ProductionOrderRead.model_validate(created)


# PUBLIC_INTERFACE
@router.get(
    "/by-number/{order_number}",
    response_model=ProductionOrderRead,
    summary="Get production order by number",
)
async def get_order_by_number(
    order_number: str = Path(...),
    service: ProductionOrderService = Depends(get_order_service),
) -> ProductionOrderRead:
    order = await service.get_order_by_number(order_number)
    if not order:
        raise HTTPException(
            status_code=404, detail=f"Production order with number {order_number} not found"
        )
    return ProductionOrderRead.model_validate(order)


# PUBLIC_INTERFACE
@router.get(
    "/facility/{facility_id}",
    response_model=List[ProductionOrderRead],
    summary="List facility orders",
    description="Orders of one facility ordered by scheduled start.",
)
async def list_orders_by_facility(
    facility_id: int = Path(...),
    service: ProductionOrderService = Depends(get_order_service),
) -> List[ProductionOrderRead]:
    orders = await service.list_orders_by_facility(facility_id)
    return [ProductionOrderRead.model_validate(x) for x in orders]


# PUBLIC_INTERFACE
@router.get(
    "/status/{order_status}",
    response_model=List[ProductionOrderRead],
    summary="List orders by status",
    description="Status may be given as its numeric value or its name (e.g. 3 or InProgress).",
)
async def list_orders_by_status(
    order_status: str = Path(...),
    service: ProductionOrderService = Depends(get_order_service),
) -> List[ProductionOrderRead]:
    try:
        parsed = ProductionStatus.parse(order_status)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown production status '{order_status}'")
    orders = await service.list_orders_by_status(parsed)
    return [ProductionOrderRead.model_validate(x) for x in orders]


# PUBLIC_INTERFACE
@router.get(
    "/date-range",
    response_model=List[ProductionOrderRead],
    summary="List orders scheduled within a date range",
    description="Orders whose scheduled start and end both fall inside [startDate, endDate].",
)
async def list_orders_by_date_range(
    start_date: UtcDateTime = Query(..., alias="startDate"),
    end_date: UtcDateTime = Query(..., alias="endDate"),
    service: ProductionOrderService = Depends(get_order_service),
) -> List[ProductionOrderRead]:
    _check_range(start_date, end_date)
    orders = await service.list_orders_by_date_range(start_date, end_date)
    return [ProductionOrderRead.model_validate(x) for x in orders]


# PUBLIC_INTERFACE
@router.get(
    "/analytics",
    response_model=ProductionAnalyticsRead,
    summary="Facility production analytics",
    description="Aggregates orders of a facility created between startDate and endDate.",
)
async def get_production_analytics(
    facility_id: int = Query(..., alias="facilityId"),
    start_date: UtcDateTime = Query(..., alias="startDate"),
    end_date: UtcDateTime = Query(..., alias="endDate"),
    service: ProductionOrderService = Depends(get_order_service),
) -> ProductionAnalyticsRead:
    _check_range(start_date, end_date)
    return await service.get_production_analytics(facility_id, start_date, end_date)


# PUBLIC_INTERFACE
@router.get(
    "/critical",
    response_model=List[ProductionOrderRead],
    summary="Critical orders",
    description="Critical-priority orders and non-completed orders due within the critical window.",
)
async def list_critical_orders(
    service: ProductionOrderService = Depends(get_order_service),
) -> List[ProductionOrderRead]:
    orders = await service.get_critical_orders()
    return [ProductionOrderRead.model_validate(x) for x in orders]


# PUBLIC_INTERFACE
@router.get(
    "/delayed",
    response_model=List[ProductionOrderRead],
    summary="Delayed orders",
    description="Non-completed orders past their scheduled end date.",
)
async def list_delayed_orders(
    service: ProductionOrderService = Depends(get_order_service),
) -> List[ProductionOrderRead]:
    orders = await service.get_delayed_orders()
    return [ProductionOrderRead.model_validate(x) for x in orders]


# PUBLIC_INTERFACE
@router.post(
    "/facility/{facility_id}/optimize-schedule",
    response_model=MessageResponse,
    summary="Optimize facility schedule",
    description="Repack the facility's Planned orders back-to-back from now, preserving durations.",
)
async def optimize_production_schedule(
    facility_id: int = Path(...),
    service: ProductionOrderService = Depends(get_order_service),
) -> MessageResponse:
    if not await service.optimize_production_schedule(facility_id):
        raise HTTPException(status_code=400, detail="Failed to optimize production schedule")
    return MessageResponse(message="Production schedule optimized successfully")


# PUBLIC_INTERFACE
@router.get(
    "/{order_id}",
    response_model=ProductionOrderRead,
    summary="Get production order",
)
async def get_order(
    order_id: int = Path(...),
    service: ProductionOrderService = Depends(get_order_service),
) -> ProductionOrderRead:
    order = await service.get_order(order_id)
    if not order:
        raise _order_not_found(order_id)
    return ProductionOrderRead.model_validate(order)


# PUBLIC_INTERFACE
@router.put(
    "/{order_id}",
    response_model=ProductionOrderRead,
    summary="Replace production order",
    description="Full replacement; the body id must match the path id.",
)
async def update_order(
    payload: ProductionOrderUpdate,
    order_id: int = Path(...),
    service: ProductionOrderService = Depends(get_order_service),
) -> ProductionOrderRead:
    if payload.id != order_id:
        raise HTTPException(status_code=400, detail="Order ID mismatch")
    existing = await service.get_order(order_id)
    if not existing:
        raise _order_not_found(order_id)
    updated = await service.update_order(existing, payload)
    return ProductionOrderRead.model_validate(updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete production order",
)
async def delete_order(
    order_id: int = Path(...),
    service: ProductionOrderService = Depends(get_order_service),
) -> Response:
    if not await service.delete_order(order_id):
        raise _order_not_found(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# PUBLIC_INTERFACE
@router.patch(
    "/{order_id}/status",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Change order status",
    description=(
        "Body is either a bare status (value or name) or {\"status\": ...}. "
        "InProgress stamps the actual start; Completed stamps the actual end and "
        "sets quantityCompleted to quantity."
    ),
)
async def update_order_status(
    body: Union[OrderStatusUpdate, ProductionStatusField] = Body(...),
    order_id: int = Path(...),
    service: ProductionOrderService = Depends(get_order_service),
) -> Response:
    new_status = body.status if isinstance(body, OrderStatusUpdate) else body
    if not await service.update_order_status(order_id, new_status):
        raise _order_not_found(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# PUBLIC_INTERFACE
@router.get(
    "/{order_id}/efficiency",
    response_model=EfficiencyRead,
    summary="Order efficiency rating",
    description="Mean of time, quantity and cost efficiency; 0 when the order has no actual start or end.",
)
async def get_order_efficiency(
    order_id: int = Path(...),
    service: ProductionOrderService = Depends(get_order_service),
) -> EfficiencyRead:
    rating = await service.calculate_efficiency_rating(order_id)
    return EfficiencyRead(order_id=order_id, efficiency_rating=rating)


# PUBLIC_INTERFACE
@metrics_router.get(
    "",
    response_model=List[ProductionMetricRead],
    summary="List production metrics",
    description="List metrics, most recently measured first.",
)
async def list_metrics(
    session: AsyncSession = Depends(get_db_session),
    production_order_id: Optional[int] = Query(None, alias="productionOrderId"),
    metric_type: Optional[MetricTypeField] = Query(None, alias="type"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[ProductionMetricRead]:
    repo = ProductionMetricRepository(session)
    rows = await repo.list_metrics(
        production_order_id=production_order_id, metric_type=metric_type, limit=limit, offset=offset
    )
    return [ProductionMetricRead.model_validate(x) for x in rows]


# PUBLIC_INTERFACE
@metrics_router.post(
    "",
    response_model=ProductionMetricRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record production metric",
)
async def create_metric(
    payload: ProductionMetricCreate,
    session: AsyncSession = Depends(get_db_session),
) -> ProductionMetricRead:
    repo = ProductionMetricRepository(session)
    created = await repo.create(payload.model_dump(exclude_none=True))
    return ProductionMetricRead.model_validate(created)


# PUBLIC_INTERFACE
@metrics_router.get("/{metric_id}", response_model=ProductionMetricRead, summary="Get production metric")
async def get_metric(
    metric_id: int = Path(...),
    session: AsyncSession = Depends(get_db_session),
) -> ProductionMetricRead:
    row = await ProductionMetricRepository(session).get(metric_id)
    if not row:
        raise HTTPException(status_code=404, detail=f"Production metric with ID {metric_id} not found")
    return ProductionMetricRead.model_validate(row)


# PUBLIC_INTERFACE
@metrics_router.put("/{metric_id}", response_model=ProductionMetricRead, summary="Replace production metric")
async def update_metric(
    payload: ProductionMetricCreate,
    metric_id: int = Path(...),
    session: AsyncSession = Depends(get_db_session),
) -> ProductionMetricRead:
    repo = ProductionMetricRepository(session)
    row = await repo.get(metric_id)
    if not row:
        raise HTTPException(status_code=404, detail=f"Production metric with ID {metric_id} not found")
    values = payload.model_dump()
    if values["measured_date"] is None:
        values.pop("measured_date")
    updated = await repo.update(row, values)
    return ProductionMetricRead.model_validate(updated)


# PUBLIC_INTERFACE
@metrics_router.delete(
    "/{metric_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete production metric"
)
async def delete_metric(
    metric_id: int = Path(...),
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    if not await ProductionMetricRepository(session).delete(metric_id):
        raise HTTPException(status_code=404, detail=f"Production metric with ID {metric_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
