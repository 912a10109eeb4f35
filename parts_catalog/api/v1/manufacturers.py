"""
Manufacturer API endpoints
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from parts_catalog.api.deps import ActorIdDep, ManufacturerServiceDep, RequestIdDep
from parts_catalog.core.exceptions import NotFoundError
from parts_catalog.core.logging import log
from parts_catalog.schemas.manufacturer import (
    BatchStatusResult,
    ManufacturerBatchStatusUpdate,
    ManufacturerCreate,
    ManufacturerDetailRead,
    ManufacturerListQuery,
    ManufacturerListResponse,
    ManufacturerRead,
    ManufacturerStatus,
    ManufacturerStatusUpdate,
    ManufacturerUpdate,
)


router = APIRouter()

NOT_FOUND = "Manufacturer not found"


@router.get(
    "",
    response_model=ManufacturerListResponse,
    summary="List manufacturers",
    description="Get paginated list of manufacturers with filters and sorting",
)
async def list_manufacturers(
    manufacturer_service: ManufacturerServiceDep,
    request_id: RequestIdDep,
    search: Optional[str] = Query(None, description="Search by name or display name"),
    status_filter: Optional[ManufacturerStatus] = Query(None, alias="status", description="Filter by status"),
    verified: Optional[bool] = Query(None, description="Filter by verified status"),
    is_active: Optional[bool] = Query(None, alias="isActive", description="Filter by active status"),
    country: Optional[str] = Query(None, max_length=2, description="Filter by 2-letter country code"),
    sort: Optional[str] = Query(None, description="name, created_at or model_count"),
    order: Optional[str] = Query(None, description="asc or desc"),
    page: Optional[int] = Query(None, ge=1, description="Page number"),
    limit: Optional[int] = Query(None, ge=1, description="Items per page (max 100)"),
) -> ManufacturerListResponse:
    """
    List manufacturers.

    - **search**: case-insensitive match on name or display name
    - **status**: active, inactive or all
    - **sort** / **order**: unknown sort keys fall back to name
    - **page** / **limit**: limit is capped at 100
    """
    log.info("Listing manufacturers", request_id=request_id, search=search, page=page, limit=limit)

    query = ManufacturerListQuery(
        search=search,
        status=status_filter,
        verified=verified,
        is_active=is_active,
        country=country,
        sort=sort,
        order=order,
        page=page,
        limit=limit,
    )
    return await manufacturer_service.list_manufacturers(query)


@router.get(
    "/search",
    response_model=List[ManufacturerRead],
    summary="Search manufacturers",
)
async def search_manufacturers(
    manufacturer_service: ManufacturerServiceDep,
    q: str = Query(..., min_length=1, description="Search query"),
    limit: int = Query(10, ge=1, description="Number of results (max 50)"),
) -> List[ManufacturerRead]:
    """Quick name search, ordered by name"""
    return await manufacturer_service.search_manufacturers(q, limit)


@router.get(
    "/slug/{slug}",
    response_model=ManufacturerDetailRead,
    summary="Get manufacturer by slug",
)
async def get_manufacturer_by_slug(slug: str, manufacturer_service: ManufacturerServiceDep) -> ManufacturerDetailRead:
    manufacturer = await manufacturer_service.get_manufacturer_by_slug(slug)
    if not manufacturer:
        raise NotFoundError(NOT_FOUND)
    return manufacturer


@router.post(
    "/batch/status",
    response_model=BatchStatusResult,
    summary="Batch update status",
    description="Activate or deactivate several manufacturers; failures do not abort the batch",
)
async def batch_update_status(
    body: ManufacturerBatchStatusUpdate,
    manufacturer_service: ManufacturerServiceDep,
    actor_id: ActorIdDep,
) -> BatchStatusResult:
    return await manufacturer_service.batch_update_status(body.ids, body.is_active, actor_id)


@router.get(
    "/{manufacturer_id}",
    response_model=ManufacturerDetailRead,
    summary="Get manufacturer",
    description="Get manufacturer details by public ID",
)
async def get_manufacturer(manufacturer_id: UUID, manufacturer_service: ManufacturerServiceDep) -> ManufacturerDetailRead:
    manufacturer = await manufacturer_service.get_manufacturer(manufacturer_id)
    if not manufacturer:
        raise NotFoundError(NOT_FOUND)
    return manufacturer


@router.post(
    "",
    response_model=ManufacturerRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create manufacturer",
)
async def create_manufacturer(
    manufacturer_in: ManufacturerCreate,
    manufacturer_service: ManufacturerServiceDep,
    request_id: RequestIdDep,
    actor_id: ActorIdDep,
) -> ManufacturerRead:
    """
    Create a new manufacturer.

    The slug is derived from the name and the country code is uppercased.
    """
    log.info("Creating manufacturer", request_id=request_id, name=manufacturer_in.name)
    return await manufacturer_service.create_manufacturer(manufacturer_in, actor_id)


@router.put(
    "/{manufacturer_id}",
    response_model=ManufacturerDetailRead,
    summary="Update manufacturer",
)
async def update_manufacturer(
    manufacturer_id: UUID,
    manufacturer_update: ManufacturerUpdate,
    manufacturer_service: ManufacturerServiceDep,
    actor_id: ActorIdDep,
) -> ManufacturerDetailRead:
    """Only provided fields will be updated"""
    manufacturer = await manufacturer_service.update_manufacturer(manufacturer_id, manufacturer_update, actor_id)
    if not manufacturer:
        raise NotFoundError(NOT_FOUND)
    return manufacturer


@router.patch(
    "/{manufacturer_id}/status",
    response_model=ManufacturerRead,
    summary="Toggle manufacturer status",
)
async def toggle_manufacturer_status(
    manufacturer_id: UUID,
    body: ManufacturerStatusUpdate,
    manufacturer_service: ManufacturerServiceDep,
    actor_id: ActorIdDep,
) -> ManufacturerRead:
    manufacturer = await manufacturer_service.toggle_status(manufacturer_id, body.is_active, actor_id)
    if not manufacturer:
        raise NotFoundError(NOT_FOUND)
    return manufacturer


@router.post(
    "/{manufacturer_id}/verify",
    response_model=ManufacturerRead,
    summary="Verify manufacturer",
)
async def verify_manufacturer(
    manufacturer_id: UUID,
    manufacturer_service: ManufacturerServiceDep,
    actor_id: ActorIdDep,
) -> ManufacturerRead:
    manufacturer = await manufacturer_service.verify_manufacturer(manufacturer_id, actor_id)
    if not manufacturer:
        raise NotFoundError(NOT_FOUND)
    return manufacturer


@router.delete(
    "/{manufacturer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete manufacturer",
    description="Soft delete when models exist, hard delete otherwise; missing IDs are not an error",
)
async def delete_manufacturer(
    manufacturer_id: UUID,
    manufacturer_service: ManufacturerServiceDep,
    request_id: RequestIdDep,
) -> Response:
    result = await manufacturer_service.delete_manufacturer(manufacturer_id)
    log.info("Delete requested", request_id=request_id, manufacturer_id=str(manufacturer_id), soft=result.soft)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
