from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.deps import get_db_session
from src.repositories.qual import QualityDocumentRepository, QualityInspectionRepository
from src.schemas.quality import (
    InspectionStatusField,
    QualityDocumentCreate,
    QualityDocumentRead,
    QualityInspectionCreate,
    QualityInspectionRead,
)

router = APIRouter(prefix="/qualityinspections", tags=["Quality"])
documents_router = APIRouter(prefix="/qualitydocuments", tags=["Quality"])


def _inspection_not_found(inspection_id: int) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Quality inspection with ID {inspection_id} not found")


def _document_not_found(document_id: int) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Quality document with ID {document_id} not found")


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[QualityInspectionRead],
    summary="List inspections",
    description="List quality inspections, newest first.",
)
async def list_inspections(
    session: AsyncSession = Depends(get_db_session),
    production_order_id: Optional[int] = Query(None, alias="productionOrderId", description="Filter by order"),
    facility_id: Optional[int] = Query(None, alias="facilityId", description="Filter by facility"),
    inspection_status: Optional[InspectionStatusField] = Query(None, alias="status", description="Filter by status"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[QualityInspectionRead]:
    repo = QualityInspectionRepository(session)
    rows = await repo.list_inspections(
        production_order_id=production_order_id,
        facility_id=facility_id,
        status=inspection_status,
        limit=limit,
        offset=offset,
    )
    return [QualityInspectionRead.model_validate(x) for x in rows]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=QualityInspectionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create inspection",
)
async def create_inspection(
    payload: QualityInspectionCreate,
    session: AsyncSession = Depends(get_db_session),
) -> QualityInspectionRead:
    created = await QualityInspectionRepository(session).create(payload.model_dump())
    return QualityInspectionRead.model_validate(created)


# PUBLIC_INTERFACE
@router.get("/{inspection_id}", response_model=QualityInspectionRead, summary="Get inspection")
async def get_inspection(
    inspection_id: int = Path(...),
    session: AsyncSession = Depends(get_db_session),
) -> QualityInspectionRead:
    row = await QualityInspectionRepository(session).get(inspection_id)
    if not row:
        raise _inspection_not_found(inspection_id)
    return QualityInspectionRead.model_validate(row)


# PUBLIC_INTERFACE
@router.put("/{inspection_id}", response_model=QualityInspectionRead, summary="Replace inspection")
async def update_inspection(
    payload: QualityInspectionCreate,
    inspection_id: int = Path(...),
    session: AsyncSession = Depends(get_db_session),
) -> QualityInspectionRead:
    repo = QualityInspectionRepository(session)
    row = await repo.get(inspection_id)
    if not row:
        raise _inspection_not_found(inspection_id)
    updated = await repo.update(row, payload.model_dump())
    return QualityInspectionRead.model_validate(updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{inspection_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete inspection",
    description="Hard delete; attached documents are removed with it.",
)
async def delete_inspection(
    inspection_id: int = Path(...),
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    if not await QualityInspectionRepository(session).delete(inspection_id):
        raise _inspection_not_found(inspection_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# PUBLIC_INTERFACE
@documents_router.get(
    "",
    response_model=List[QualityDocumentRead],
    summary="List quality documents",
)
async def list_documents(
    session: AsyncSession = Depends(get_db_session),
    quality_inspection_id: Optional[int] = Query(None, alias="qualityInspectionId"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[QualityDocumentRead]:
    repo = QualityDocumentRepository(session)
    rows = await repo.list_documents(
        quality_inspection_id=quality_inspection_id, limit=limit, offset=offset
    )
    return [QualityDocumentRead.model_validate(x) for x in rows]


# PUBLIC_INTERFACE
@documents_router.post(
    "",
    response_model=QualityDocumentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Attach quality document",
)
async def create_document(
    payload: QualityDocumentCreate,
    session: AsyncSession = Depends(get_db_session),
) -> QualityDocumentRead:
    created = await QualityDocumentRepository(session).create(payload.model_dump())
    return QualityDocumentRead.model_validate(created)


# PUBLIC_INTERFACE
@documents_router.get("/{document_id}", response_model=QualityDocumentRead, summary="Get quality document")
async def get_document(
    document_id: int = Path(...),
    session: AsyncSession = Depends(get_db_session),
) -> QualityDocumentRead:
    row = await QualityDocumentRepository(session).get(document_id)
    if not row:
        raise _document_not_found(document_id)
    return QualityDocumentRead.model_validate(row)


# PUBLIC_INTERFACE
@documents_router.put("/{document_id}", response_model=QualityDocumentRead, summary="Replace quality document")
async def update_document(
    payload: QualityDocumentCreate,
    document_id: int = Path(...),
    session: AsyncSession = Depends(get_db_session),
) -> QualityDocumentRead:
    repo = QualityDocumentRepository(session)
    row = await repo.get(document_id)
    if not row:
        raise _document_not_found(document_id)
    updated = await repo.update(row, payload.model_dump())
    return QualityDocumentRead.model_validate(updated)


# PUBLIC_INTERFACE
@documents_router.delete(
    "/{document_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete quality document"
)
async def delete_document(
    document_id: int = Path(...),
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    if not await QualityDocumentRepository(session).delete(document_id):
        raise _document_not_found(document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
