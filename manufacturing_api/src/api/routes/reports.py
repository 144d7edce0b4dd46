from __future__ import annotations

import io
from typing import Optional, Sequence

import pandas as pd
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.deps import get_db_session, get_order_service
from src.db.base import utcnow
from src.db.models.master_data import Facility
from src.db.models.production import ProductionOrder
from src.schemas.common import UtcDateTime
from src.schemas.production import ProductionStatusField
from src.services.production import ProductionOrderService

# PUBLIC_INTERFACE
router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
)

EXPORT_FORMATS = ("csv", "xlsx", "pdf")


def _export_dataframe(
    df: pd.DataFrame,
    filename_base: str,
    export_format: str,
) -> StreamingResponse:
    """
    Convert DataFrame to the requested format and return a StreamingResponse.

    Supported formats:
      - csv: text/csv
      - xlsx: application/vnd.openxmlformats-officedocument.spreadsheetml.sheet
      - pdf: application/pdf (simple tabular rendering)
    """
    export_format = (export_format or "csv").lower()
    if export_format not in EXPORT_FORMATS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported export format '{export_format}'. Use one of: {', '.join(EXPORT_FORMATS)}",
        )

    if export_format == "xlsx":
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="Report")
        buffer.seek(0)
        headers = {"Content-Disposition": f'attachment; filename="{filename_base}.xlsx"'}
        return StreamingResponse(
            buffer,
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers=headers,
        )

    if export_format == "pdf":
        from reportlab.lib import colors
        from reportlab.lib.pagesizes import landscape, letter
        from reportlab.lib.styles import getSampleStyleSheet
        from reportlab.platypus import Paragraph, SimpleDocTemplate, Table, TableStyle

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer, pagesize=landscape(letter), leftMargin=18, rightMargin=18, topMargin=18, bottomMargin=18
        )
        styles = getSampleStyleSheet()
        title = Paragraph(
            f"{filename_base.replace('_', ' ').title()} ({utcnow().strftime('%Y-%m-%d %H:%M UTC')})",
            styles["Title"],
        )
        data = [list(df.columns)] + df.astype(str).values.tolist()
        table = Table(data, repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
                    ("ALIGN", (0, 0), (-1, -1), "LEFT"),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 8),
                    ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
                    ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ]
            )
        )
        doc.build([title, table])
        buffer.seek(0)
        headers = {"Content-Disposition": f'attachment; filename="{filename_base}.pdf"'}
        return StreamingResponse(buffer, media_type="application/pdf", headers=headers)

    buffer = io.StringIO()
    df.to_csv(buffer, index=False)
    buffer.seek(0)
    headers = {"Content-Disposition": f'attachment; filename="{filename_base}.csv"'}
    return StreamingResponse(buffer, media_type="text/csv", headers=headers)


async def _fetch_all(session: AsyncSession, stmt: Select) -> Sequence:
    """Execute a select and return list of row tuples."""
    res = await session.execute(stmt)
    return list(res.all())


# PUBLIC_INTERFACE
@router.get(
    "/production-orders",
    summary="Production orders report",
    description="Exports production orders with facility code, schedule, progress and cost.",
    response_description="File stream (CSV/XLSX/PDF)",
)
async def production_orders_report(
    session: AsyncSession = Depends(get_db_session),
    facility_id: Optional[int] = Query(None, alias="facilityId", description="Filter by facility"),
    order_status: Optional[ProductionStatusField] = Query(None, alias="status", description="Filter by status"),
    format: str = Query("csv", description="Export format: csv | xlsx | pdf"),
):
    """
    Generate a Production Orders report.

    One row per order, ordered by scheduled start. Completion percent is
    quantity_completed / quantity and is left empty for zero-quantity orders.
    """
    stmt = (
        select(
            ProductionOrder.order_number,
            Facility.code,
            ProductionOrder.part_number,
            ProductionOrder.customer_name,
            ProductionOrder.status,
            ProductionOrder.priority,
            ProductionOrder.quantity,
            ProductionOrder.quantity_completed,
            ProductionOrder.scheduled_start_date,
            ProductionOrder.scheduled_end_date,
            ProductionOrder.actual_end_date,
            ProductionOrder.estimated_cost,
            ProductionOrder.actual_cost,
        )
        .join(Facility, Facility.id == ProductionOrder.facility_id)
        .order_by(ProductionOrder.scheduled_start_date.asc(), ProductionOrder.id.asc())
    )
    if facility_id is not None:
        stmt = stmt.where(ProductionOrder.facility_id == facility_id)
    if order_status is not None:
        stmt = stmt.where(ProductionOrder.status == order_status)

    rows = await _fetch_all(session, stmt)
    records = []
    for r in rows:
        records.append(
            {
                "order_number": r[0],
                "facility": r[1],
                "part_number": r[2],
                "customer": r[3],
                "status": r[4].name,
                "priority": r[5].name,
                "quantity": r[6],
                "quantity_completed": r[7],
                "completion_pct": round(r[7] / r[6] * 100, 1) if r[6] else None,
                "scheduled_start": r[8],
                "scheduled_end": r[9],
                "actual_end": r[10],
                "estimated_cost": float(r[11] or 0),
                "actual_cost": float(r[12] or 0),
            }
        )

    df = pd.DataFrame.from_records(
        records,
        columns=[
            "order_number",
            "facility",
            "part_number",
            "customer",
            "status",
            "priority",
            "quantity",
            "quantity_completed",
            "completion_pct",
            "scheduled_start",
            "scheduled_end",
            "actual_end",
            "estimated_cost",
            "actual_cost",
        ],
    )
    filename = f"production_orders_{utcnow().strftime('%Y%m%d')}"
    return _export_dataframe(df, filename, format)


# PUBLIC_INTERFACE
@router.get(
    "/production-analytics",
    summary="Production analytics report",
    description="Exports the facility analytics for a creation-date window as metric/value rows.",
    response_description="File stream (CSV/XLSX/PDF)",
)
async def production_analytics_report(
    facility_id: int = Query(..., alias="facilityId"),
    start_date: UtcDateTime = Query(..., alias="startDate"),
    end_date: UtcDateTime = Query(..., alias="endDate"),
    format: str = Query("csv", description="Export format: csv | xlsx | pdf"),
    service: ProductionOrderService = Depends(get_order_service),
):
    """
    Generate a Production Analytics report.

    Scalar figures come first, followed by one row per status and one row per
    part number efficiency average.
    """
    if start_date > end_date:
        raise HTTPException(status_code=400, detail="Start date cannot be later than end date")

    analytics = await service.get_production_analytics(facility_id, start_date, end_date)
    records = [
        {"metric": "total_orders", "value": analytics.total_orders},
        {"metric": "completed_orders", "value": analytics.completed_orders},
        {"metric": "delayed_orders", "value": analytics.delayed_orders},
        {"metric": "on_time_delivery_rate", "value": round(analytics.on_time_delivery_rate, 2)},
        {"metric": "average_efficiency", "value": round(analytics.average_efficiency, 2)},
        {"metric": "total_production_cost", "value": round(analytics.total_production_cost, 2)},
        {"metric": "cost_variance", "value": round(analytics.cost_variance, 2)},
    ]
    for status_name, count in sorted(analytics.orders_by_status.items()):
        records.append({"metric": f"status:{status_name}", "value": count})
    for part, rating in sorted(analytics.efficiency_by_part_type.items()):
        records.append({"metric": f"efficiency:{part}", "value": round(rating, 2)})

    df = pd.DataFrame.from_records(records, columns=["metric", "value"])
    filename = f"production_analytics_{facility_id}_{utcnow().strftime('%Y%m%d')}"
    return _export_dataframe(df, filename, format)
