"""
Manufacturer repository: filtered listings, lookups and the delete policy
"""
import asyncio

from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Union
from uuid import UUID, uuid4

from sqlalchemy import and_, asc, delete, desc, insert, or_, update
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from parts_catalog.models import File, Manufacturer, VehicleModel
from parts_catalog.models.base import utcnow
from parts_catalog.repositories.base import BaseRepository
from parts_catalog.schemas.common import PaginationMeta, PaginationParams
from parts_catalog.schemas.manufacturer import (
    ManufacturerFilters,
    ManufacturerSort,
    ManufacturerSortField,
    ManufacturerStatus,
    SortOrder,
)
from parts_catalog.utils.normalization import slugify


class ManufacturerRow(NamedTuple):
    """A manufacturer joined with its logo public ID and model count"""
    manufacturer: Manufacturer
    logo_image_public_id: Optional[UUID]
    model_count: int


def _as_uuid(value: Union[UUID, str]) -> UUID:
    return value if isinstance(value, UUID) else UUID(str(value))


class ManufacturerRepository(BaseRepository[Manufacturer]):
    """Repository for manufacturer operations"""

    def __init__(self, session_factory: async_sessionmaker):
        super().__init__(Manufacturer, session_factory)

    # Query building

    @staticmethod
    def _model_count():
        return func.count(VehicleModel.id)

    def _detail_query(self):
        """Manufacturer columns plus logo public ID and aggregated model count"""
        return (
            select(
                Manufacturer,
                File.public_id.label("logo_image_public_id"),
                self._model_count().label("model_count"),
            )
            .select_from(Manufacturer)
            .outerjoin(VehicleModel, VehicleModel.manufacturer_id == Manufacturer.id)
            .outerjoin(File, Manufacturer.logo_image_id == File.id)
            .group_by(*Manufacturer.__table__.columns, File.public_id)
        )

    @staticmethod
    def _filter_conditions(filters: ManufacturerFilters) -> List[Any]:
        conditions = []

        if filters.search:
            search_term = f"%{filters.search}%"
            conditions.append(
                or_(
                    Manufacturer.name.ilike(search_term),
                    Manufacturer.display_name.ilike(search_term),
                )
            )

        if filters.status != ManufacturerStatus.ALL:
            conditions.append(Manufacturer.is_active == (filters.status == ManufacturerStatus.ACTIVE))

        if filters.verified is not None:
            conditions.append(Manufacturer.is_verified == filters.verified)

        if filters.country:
            conditions.append(Manufacturer.country_code == filters.country)

        if filters.is_active is not None:
            conditions.append(Manufacturer.is_active == filters.is_active)

        return conditions

    def _order_by(self, sort: ManufacturerSort):
        if sort.sort == ManufacturerSortField.MODEL_COUNT.value:
            column = self._model_count()
        elif sort.sort == ManufacturerSortField.CREATED_AT.value:
            column = Manufacturer.created_at
        else:
            column = Manufacturer.name

        direction = desc if sort.order == SortOrder.DESC.value else asc
        return direction(column)

    @staticmethod
    def _file_id_subquery(logo_public_id: Optional[Union[UUID, str]]):
        """
        Resolve a file public ID to its internal ID inside the write statement.

        An unknown ID resolves to NULL; a malformed one raises ValueError.
        """
        if logo_public_id is None:
            return None
        public_id = _as_uuid(logo_public_id)
        return select(File.id).where(File.public_id == public_id).scalar_subquery()

    async def _find_one(self, session: AsyncSession, condition) -> Optional[ManufacturerRow]:
        result = await session.exec(self._detail_query().where(condition))
        row = result.first()
        if row is None:
            return None
        manufacturer, logo_public_id, model_count = row
        return ManufacturerRow(manufacturer, logo_public_id, int(model_count or 0))

    # Reads

    async def find_all(
        self,
        filters: ManufacturerFilters,
        sort: ManufacturerSort,
        pagination: PaginationParams,
    ) -> Tuple[List[ManufacturerRow], PaginationMeta]:
        """Find manufacturers with filters, sorting and pagination"""
        conditions = self._filter_conditions(filters)

        query = self._detail_query()
        count_query = select(func.count(Manufacturer.id))
        if conditions:
            query = query.where(and_(*conditions))
            count_query = count_query.where(and_(*conditions))

        query = query.order_by(self._order_by(sort), Manufacturer.id).offset(pagination.offset).limit(pagination.limit)

        # Data and total are fetched on separate sessions, concurrently
        rows, total = await asyncio.gather(self._fetch_rows(query), self._fetch_count(count_query))

        return rows, PaginationMeta.build(page=pagination.page, limit=pagination.limit, total=total)

    async def _fetch_rows(self, query) -> List[ManufacturerRow]:
        async with self.session("find_all", "SELECT") as session:
            result = await session.exec(query)
            return [
                ManufacturerRow(manufacturer, logo_public_id, int(model_count or 0))
                for manufacturer, logo_public_id, model_count in result.all()
            ]

    async def _fetch_count(self, count_query) -> int:
        async with self.session("find_all", "COUNT") as session:
            result = await session.exec(count_query)
            return int(result.one() or 0)

    async def find_by_id(self, id: int) -> Optional[ManufacturerRow]:
        """Find a manufacturer by internal ID"""
        async with self.session("find_by_id", "SELECT") as session:
            return await self._find_one(session, Manufacturer.id == id)

    async def find_by_public_id(self, public_id: Union[UUID, str]) -> Optional[ManufacturerRow]:
        """Find a manufacturer by public ID"""
        public_id = _as_uuid(public_id)
        async with self.session("find_by_public_id", "SELECT") as session:
            return await self._find_one(session, Manufacturer.public_id == public_id)

    async def find_by_slug(self, slug: str) -> Optional[ManufacturerRow]:
        """Find a manufacturer by slug"""
        async with self.session("find_by_slug", "SELECT") as session:
            return await self._find_one(session, Manufacturer.slug == slug)

    async def find_by_name(self, name: str) -> Optional[Manufacturer]:
        """Find a manufacturer by exact (case-sensitive) name"""
        async with self.session("find_by_name", "SELECT") as session:
            result = await session.exec(select(Manufacturer).where(Manufacturer.name == name))
            return result.first()

    # Writes

    async def create(self, data: Dict[str, Any]) -> ManufacturerRow:
        """Create a manufacturer; slug and public ID are generated here"""
        now = utcnow()
        public_id = uuid4()
        values = {
            "public_id": public_id,
            "name": data["name"],
            "display_name": data["display_name"],
            "slug": slugify(data["name"]),
            "logo_image_id": self._file_id_subquery(data.get("logo_image_id")),
            "country_code": data.get("country_code"),
            "description": data.get("description"),
            "is_active": data.get("is_active", True),
            "is_verified": data.get("is_verified", False),
            "created_at": now,
            "updated_at": now,
            "created_by": data.get("created_by"),
            "updated_by": data.get("created_by"),
        }

        async with self.session("create", "INSERT") as session:
            await session.execute(insert(Manufacturer).values(**values))
            await session.commit()
            return await self._find_one(session, Manufacturer.public_id == public_id)

    async def _update_where(self, method: str, condition, data: Dict[str, Any]) -> Optional[ManufacturerRow]:
        values = dict(data)
        if "logo_image_id" in values:
            values["logo_image_id"] = self._file_id_subquery(values["logo_image_id"])
        values["updated_at"] = utcnow()

        async with self.session(method, "UPDATE") as session:
            statement = (
                update(Manufacturer)
                .where(condition)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            result = await session.execute(statement)
            await session.commit()
            if result.rowcount == 0:
                return None
            return await self._find_one(session, condition)

    async def update(self, id: int, data: Dict[str, Any]) -> Optional[ManufacturerRow]:
        """Update only the supplied fields of a manufacturer by internal ID"""
        return await self._update_where("update", Manufacturer.id == id, data)

    async def update_by_public_id(self, public_id: Union[UUID, str], data: Dict[str, Any]) -> Optional[ManufacturerRow]:
        """Update only the supplied fields of a manufacturer by public ID"""
        return await self._update_where("update_by_public_id", Manufacturer.public_id == _as_uuid(public_id), data)

    async def toggle_status(self, id: int, is_active: bool, updated_by: Optional[UUID] = None) -> Optional[ManufacturerRow]:
        """Set the active flag of a manufacturer"""
        return await self._update_where(
            "toggle_status", Manufacturer.id == id, {"is_active": is_active, "updated_by": updated_by}
        )

    # Delete policy

    async def delete(self, id: int) -> Dict[str, bool]:
        """Soft delete when models reference the manufacturer, hard delete otherwise"""
        return await self._delete_where("delete", Manufacturer.id == id)

    async def delete_by_public_id(self, public_id: Union[UUID, str]) -> Dict[str, bool]:
        """Delete by public ID; a missing manufacturer is not an error"""
        return await self._delete_where("delete_by_public_id", Manufacturer.public_id == _as_uuid(public_id))

    async def _delete_where(self, method: str, condition) -> Dict[str, bool]:
        model_count = (
            select(func.count(VehicleModel.id))
            .where(VehicleModel.manufacturer_id == Manufacturer.id)
            .correlate(Manufacturer)
            .scalar_subquery()
        )
        lookup = select(Manufacturer.id, model_count).where(condition).with_for_update(of=Manufacturer)

        # Lookup and action share one transaction; the row lock blocks new models meanwhile
        async with self.session(method, "DELETE") as session:
            row = (await session.exec(lookup)).first()
            if row is None:
                return {"deleted": False, "soft": False}

            manufacturer_id, count = row
            if count and count > 0:
                statement = (
                    update(Manufacturer)
                    .where(Manufacturer.id == manufacturer_id)
                    .values(is_active=False, updated_at=utcnow())
                    .execution_options(synchronize_session=False)
                )
                soft = True
            else:
                statement = (
                    delete(Manufacturer)
                    .where(Manufacturer.id == manufacturer_id)
                    .execution_options(synchronize_session=False)
                )
                soft = False

            result = await session.execute(statement)
            await session.commit()
            return {"deleted": result.rowcount > 0, "soft": soft}
