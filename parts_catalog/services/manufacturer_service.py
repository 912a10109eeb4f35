"""
Manufacturer service with business logic
"""

from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from parts_catalog.core.config import settings
from parts_catalog.core.exceptions import BadRequestError, DuplicateManufacturerError, InvalidCountryCodeError
from parts_catalog.core.logging import log
from parts_catalog.repositories.manufacturer import ManufacturerRepository, ManufacturerRow
from parts_catalog.schemas.common import PaginationParams
from parts_catalog.schemas.manufacturer import (
    BatchStatusResult,
    ManufacturerCreate,
    ManufacturerDeleteResult,
    ManufacturerDetailRead,
    ManufacturerFilters,
    ManufacturerListQuery,
    ManufacturerListResponse,
    ManufacturerRead,
    ManufacturerSort,
    ManufacturerSortField,
    ManufacturerStatus,
    ManufacturerUpdate,
    SortOrder,
)
from parts_catalog.utils.normalization import clean_text, is_valid_country_code, normalize_country_code


def to_manufacturer_read(row: ManufacturerRow) -> ManufacturerRead:
    """Convert a repository row to the list/summary DTO"""
    manufacturer = row.manufacturer
    updated_at = manufacturer.updated_at or manufacturer.created_at
    return ManufacturerRead(
        id=manufacturer.public_id,
        name=manufacturer.name,
        display_name=manufacturer.display_name,
        slug=manufacturer.slug,
        logo_image_id=str(row.logo_image_public_id) if row.logo_image_public_id else None,
        country_code=manufacturer.country_code or None,
        description=manufacturer.description or None,
        is_active=manufacturer.is_active,
        is_verified=manufacturer.is_verified,
        model_count=row.model_count,
        created_at=manufacturer.created_at.isoformat(),
        updated_at=updated_at.isoformat(),
    )


def to_manufacturer_detail(row: ManufacturerRow) -> ManufacturerDetailRead:
    """Convert a repository row to the detail DTO (adds audit fields)"""
    manufacturer = row.manufacturer
    return ManufacturerDetailRead(
        **to_manufacturer_read(row).model_dump(),
        created_by=str(manufacturer.created_by) if manufacturer.created_by else None,
        updated_by=str(manufacturer.updated_by) if manufacturer.updated_by else None,
    )


def _validated_country_code(code: Optional[str]) -> Optional[str]:
    normalized = normalize_country_code(code)
    if normalized is not None and not is_valid_country_code(normalized):
        raise InvalidCountryCodeError(country_code=code)
    return normalized


class ManufacturerService:
    """Service layer for manufacturer operations"""

    def __init__(self, repository: ManufacturerRepository):
        self.repository = repository

    async def list_manufacturers(self, query: ManufacturerListQuery) -> ManufacturerListResponse:
        """List manufacturers with filtering, sorting, and pagination"""
        filters = ManufacturerFilters(
            search=clean_text(query.search),
            status=query.status or ManufacturerStatus.ALL,
            verified=query.verified,
            is_active=query.is_active,
            country=normalize_country_code(query.country),
        )
        sort = ManufacturerSort(
            sort=query.sort or ManufacturerSortField.NAME.value,
            order=query.order or SortOrder.ASC.value,
        )
        pagination = PaginationParams(
            page=query.page or 1,
            limit=min(query.limit or settings.default_page_size, settings.max_page_size),
        )

        rows, meta = await self.repository.find_all(filters, sort, pagination)

        return ManufacturerListResponse(data=[to_manufacturer_read(row) for row in rows], pagination=meta)

    async def get_manufacturer(self, public_id: Union[UUID, str]) -> Optional[ManufacturerDetailRead]:
        """Get a manufacturer by public ID; None when it does not exist"""
        row = await self.repository.find_by_public_id(public_id)
        return to_manufacturer_detail(row) if row else None

    async def get_manufacturer_by_name(self, name: str) -> Optional[ManufacturerRead]:
        """Exact-name lookup used for uniqueness checks"""
        manufacturer = await self.repository.find_by_name(name)
        if manufacturer is None:
            return None
        return to_manufacturer_read(ManufacturerRow(manufacturer, None, 0))

    async def get_manufacturer_by_slug(self, slug: str) -> Optional[ManufacturerDetailRead]:
        row = await self.repository.find_by_slug(slug)
        return to_manufacturer_detail(row) if row else None

    async def create_manufacturer(
        self, data: ManufacturerCreate, created_by: Optional[UUID] = None
    ) -> ManufacturerRead:
        """
        Create a new manufacturer.

        The duplicate-name check is a best-effort pre-check; the unique
        constraint on the table decides concurrent races.
        """
        name = data.name.strip()
        display_name = data.display_name.strip()
        if not name or not display_name:
            raise BadRequestError("Manufacturer name and display name must not be blank")

        existing = await self.repository.find_by_name(name)
        if existing:
            raise DuplicateManufacturerError(name)

        country_code = _validated_country_code(data.country_code)

        row = await self.repository.create(
            {
                "name": name,
                "display_name": display_name,
                "logo_image_id": data.logo_image_id,
                "country_code": country_code,
                "description": clean_text(data.description),
                "is_active": True if data.is_active is None else data.is_active,
                "is_verified": False if data.is_verified is None else data.is_verified,
                "created_by": created_by,
            }
        )

        log.info("Created manufacturer", public_id=str(row.manufacturer.public_id), name=name)
        return to_manufacturer_read(row)

    async def update_manufacturer(
        self,
        public_id: Union[UUID, str],
        data: ManufacturerUpdate,
        updated_by: Optional[UUID] = None,
    ) -> Optional[ManufacturerDetailRead]:
        """Update a manufacturer; only supplied fields are written"""
        country_code = _validated_country_code(data.country_code)

        update_data: Dict[str, Any] = {
            "display_name": clean_text(data.display_name),
            "logo_image_id": data.logo_image_id,
            "country_code": country_code,
            "description": clean_text(data.description),
            "is_active": data.is_active,
            "is_verified": data.is_verified,
            "updated_by": updated_by,
        }
        # Missing values must not overwrite stored ones
        update_data = {key: value for key, value in update_data.items() if value is not None}

        row = await self.repository.update_by_public_id(public_id, update_data)
        return to_manufacturer_detail(row) if row else None

    async def toggle_status(
        self, public_id: Union[UUID, str], is_active: bool, updated_by: Optional[UUID] = None
    ) -> Optional[ManufacturerRead]:
        """Activate or deactivate a manufacturer"""
        row = await self.repository.find_by_public_id(public_id)
        if row is None:
            return None

        updated = await self.repository.toggle_status(row.manufacturer.id, is_active, updated_by)
        return to_manufacturer_read(updated) if updated else None

    async def delete_manufacturer(self, public_id: Union[UUID, str]) -> ManufacturerDeleteResult:
        """Delete a manufacturer (soft when models reference it, hard otherwise)"""
        result = await self.repository.delete_by_public_id(public_id)

        reason = None
        if not result["deleted"]:
            reason = "Manufacturer not found"
        elif result["soft"]:
            reason = "Manufacturer has associated models; marked inactive"

        log.info("Deleted manufacturer", public_id=str(public_id), **result)
        return ManufacturerDeleteResult(deleted=result["deleted"], soft=result["soft"], reason=reason)

    async def verify_manufacturer(
        self, public_id: Union[UUID, str], updated_by: Optional[UUID] = None
    ) -> Optional[ManufacturerRead]:
        """Mark a manufacturer as verified (admin only)"""
        update_data: Dict[str, Any] = {"is_verified": True}
        if updated_by:
            update_data["updated_by"] = updated_by

        row = await self.repository.update_by_public_id(public_id, update_data)
        return to_manufacturer_read(row) if row else None

    async def batch_update_status(
        self, public_ids: List[str], is_active: bool, updated_by: Optional[UUID] = None
    ) -> BatchStatusResult:
        """
        Toggle the active flag for several manufacturers.

        Ids are processed one after another without a surrounding transaction;
        a failing id is recorded and the loop moves on.
        """
        result = BatchStatusResult()

        for public_id in public_ids:
            try:
                updated = await self.toggle_status(public_id, is_active, updated_by)
            except Exception as e:
                log.warning("Batch status update failed", public_id=public_id, error=str(e))
                result.failed.append(public_id)
                continue

            if updated:
                result.success.append(public_id)
            else:
                result.failed.append(public_id)

        log.info("Batch status update finished", succeeded=len(result.success), failed=len(result.failed))
        return result

    async def search_manufacturers(self, query: str, limit: int = 10) -> List[ManufacturerRead]:
        """Search manufacturers by name or display name"""
        response = await self.list_manufacturers(
            ManufacturerListQuery(
                search=query.strip(),
                sort=ManufacturerSortField.NAME.value,
                order=SortOrder.ASC.value,
                page=1,
                limit=min(limit, settings.max_search_limit),
            )
        )
        return response.data
