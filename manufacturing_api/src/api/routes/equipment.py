from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.deps import get_db_session
from src.repositories.equipment import EquipmentRepository
from src.schemas.equipment import EquipmentCreate, EquipmentRead, EquipmentStatusField

router = APIRouter(prefix="/equipment", tags=["Equipment"])


def _not_found(equipment_id: int) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Equipment with ID {equipment_id} not found")


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[EquipmentRead],
    summary="List equipment",
    description="List equipment ordered by equipment number.",
)
async def list_equipment(
    session: AsyncSession = Depends(get_db_session),
    facility_id: Optional[int] = Query(None, alias="facilityId", description="Filter by facility"),
    equipment_status: Optional[EquipmentStatusField] = Query(None, alias="status", description="Filter by status"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[EquipmentRead]:
    repo = EquipmentRepository(session)
    rows = await repo.list_equipment(
        facility_id=facility_id, status=equipment_status, limit=limit, offset=offset
    )
    return [EquipmentRead.model_validate(x) for x in rows]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=EquipmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register equipment",
)
async def create_equipment(
    payload: EquipmentCreate,
    session: AsyncSession = Depends(get_db_session),
) -> EquipmentRead:
    created = await EquipmentRepository(session).create(payload.model_dump())
    return EquipmentRead.model_validate(created)


# PUBLIC_INTERFACE
@router.get("/{equipment_id}", response_model=EquipmentRead, summary="Get equipment")
async def get_equipment(
    equipment_id: int = Path(...),
    session: AsyncSession = Depends(get_db_session),
) -> EquipmentRead:
    row = await EquipmentRepository(session).get(equipment_id)
    if not row:
        raise _not_found(equipment_id)
    return EquipmentRead.model_validate(row)


# PUBLIC_INTERFACE
@router.put("/{equipment_id}", response_model=EquipmentRead, summary="Replace equipment")
async def update_equipment(
    payload: EquipmentCreate,
    equipment_id: int = Path(...),
    session: AsyncSession = Depends(get_db_session),
) -> EquipmentRead:
    repo = EquipmentRepository(session)
    row = await repo.get(equipment_id)
    if not row:
        raise _not_found(equipment_id)
    updated = await repo.update(row, payload.model_dump())
    return EquipmentRead.model_validate(updated)


# PUBLIC_INTERFACE
@router.delete("/{equipment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete equipment")
async def delete_equipment(
    equipment_id: int = Path(...),
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    if not await EquipmentRepository(session).delete(equipment_id):
        raise _not_found(equipment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
