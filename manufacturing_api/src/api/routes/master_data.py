from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.deps import get_db_session
from src.repositories.master_data import FacilityRepository
from src.schemas.master_data import FacilityCreate, FacilityRead

router = APIRouter(prefix="/facilities", tags=["Facilities"])


def _not_found(facility_id: int) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Facility with ID {facility_id} not found")


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[FacilityRead],
    summary="List facilities",
    description="List facilities ordered by code, optionally filtered by active flag.",
)
async def list_facilities(
    session: AsyncSession = Depends(get_db_session),
    is_active: Optional[bool] = Query(None, alias="isActive", description="Filter by active flag"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[FacilityRead]:
    repo = FacilityRepository(session)
    rows = await repo.list_facilities(is_active=is_active, limit=limit, offset=offset)
    return [FacilityRead.model_validate(x) for x in rows]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=FacilityRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create facility",
)
async def create_facility(
    payload: FacilityCreate,
    session: AsyncSession = Depends(get_db_session),
) -> FacilityRead:
    created = await FacilityRepository(session).create(payload.model_dump())
    return FacilityRead.model_validate(created)


# PUBLIC_INTERFACE
@router.get("/{facility_id}", response_model=FacilityRead, summary="Get facility")
async def get_facility(
    facility_id: int = Path(...),
    session: AsyncSession = Depends(get_db_session),
) -> FacilityRead:
    row = await FacilityRepository(session).get(facility_id)
    if not row:
        raise _not_found(facility_id)
    return FacilityRead.model_validate(row)


# PUBLIC_INTERFACE
@router.put("/{facility_id}", response_model=FacilityRead, summary="Replace facility")
async def update_facility(
    payload: FacilityCreate,
    facility_id: int = Path(...),
    session: AsyncSession = Depends(get_db_session),
) -> FacilityRead:
    repo = FacilityRepository(session)
    row = await repo.get(facility_id)
    if not row:
        raise _not_found(facility_id)
    updated = await repo.update(row, payload.model_dump())
    return FacilityRead.model_validate(updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{facility_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete facility",
    description="Hard delete. Fails while orders, inspections or equipment still reference the facility.",
)
async def delete_facility(
    facility_id: int = Path(...),
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    if not await FacilityRepository(session).delete(facility_id):
        raise _not_found(facility_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
