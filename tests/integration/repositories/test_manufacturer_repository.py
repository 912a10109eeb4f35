"""
Test the manufacturer repository against a real database
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from sqlmodel import select

from parts_catalog.core.exceptions import ConflictError
from parts_catalog.models import Manufacturer, VehicleModel
from parts_catalog.schemas.common import PaginationParams
from parts_catalog.schemas.manufacturer import ManufacturerFilters, ManufacturerSort, ManufacturerStatus


def names(rows):
    return [row.manufacturer.name for row in rows]


@pytest.fixture
def catalog(insert_manufacturer, insert_models):
    """Five manufacturers with a spread of flags, countries and model counts"""

    async def _build():
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        tesla = await insert_manufacturer(
            "Tesla", display_name="Tesla Inc.", country_code="US", is_verified=True, created_at=base
        )
        toyota = await insert_manufacturer(
            "Toyota", display_name="Toyota Motor", country_code="JP", created_at=base + timedelta(days=1)
        )
        await insert_manufacturer(
            "Skoda", display_name="Skoda Auto", country_code="CZ", is_active=False, created_at=base + timedelta(days=2)
        )
        await insert_manufacturer("BMW", display_name="Bayerische Motoren Werke", country_code="DE", created_at=base + timedelta(days=3))
        await insert_manufacturer("Lexus", display_name="Lexus (Toyota)", country_code="JP", created_at=base + timedelta(days=4))

        await insert_models(tesla, ["Model S", "Model 3", "Model Y"])
        await insert_models(toyota, ["Corolla"])

    return _build


async def find(repository, page=1, limit=20, sort="name", order="asc", **filters):
    return await repository.find_all(
        ManufacturerFilters(**filters),
        ManufacturerSort(sort=sort, order=order),
        PaginationParams(page=page, limit=limit),
    )


class TestFindAll:
    @pytest.mark.asyncio
    async def test_default_listing(self, repository, catalog):
        await catalog()

        rows, meta = await find(repository)

        assert names(rows) == ["BMW", "Lexus", "Skoda", "Tesla", "Toyota"]
        assert meta.total == 5
        counts = {row.manufacturer.name: row.model_count for row in rows}
        assert counts == {"BMW": 0, "Lexus": 0, "Skoda": 0, "Tesla": 3, "Toyota": 1}

    @pytest.mark.asyncio
    async def test_search_matches_name_or_display_name(self, repository, catalog):
        await catalog()

        rows, meta = await find(repository, search="toyota")

        assert names(rows) == ["Lexus", "Toyota"]
        assert meta.total == 2

    @pytest.mark.asyncio
    async def test_status_filter(self, repository, catalog):
        await catalog()

        active, _ = await find(repository, status=ManufacturerStatus.ACTIVE)
        inactive, _ = await find(repository, status=ManufacturerStatus.INACTIVE)

        assert "Skoda" not in names(active)
        assert names(inactive) == ["Skoda"]

    @pytest.mark.asyncio
    async def test_is_active_is_combined_with_status(self, repository, catalog):
        await catalog()

        rows, meta = await find(repository, status=ManufacturerStatus.ACTIVE, is_active=False)

        assert rows == []
        assert meta.total == 0

    @pytest.mark.asyncio
    async def test_verified_and_country_filters(self, repository, catalog):
        await catalog()

        verified, _ = await find(repository, verified=True)
        japanese, _ = await find(repository, country="JP")

        assert names(verified) == ["Tesla"]
        assert names(japanese) == ["Lexus", "Toyota"]

    @pytest.mark.asyncio
    async def test_sort_by_model_count(self, repository, catalog):
        await catalog()

        rows, _ = await find(repository, sort="model_count", order="desc")

        assert names(rows)[:2] == ["Tesla", "Toyota"]

    @pytest.mark.asyncio
    async def test_sort_by_created_at(self, repository, catalog):
        await catalog()

        newest_first, _ = await find(repository, sort="created_at", order="desc")

        assert names(newest_first) == ["Lexus", "BMW", "Skoda", "Toyota", "Tesla"]

    @pytest.mark.asyncio
    async def test_unknown_sort_falls_back_to_name(self, repository, catalog):
        await catalog()

        rows, _ = await find(repository, sort="popularity", order="sideways")

        assert names(rows) == ["BMW", "Lexus", "Skoda", "Tesla", "Toyota"]

    @pytest.mark.asyncio
    async def test_total_counts_all_matches_not_page(self, repository, catalog):
        await catalog()

        rows, meta = await find(repository, page=2, limit=3)

        assert names(rows) == ["Tesla", "Toyota"]
        assert meta.total == 5
        assert meta.total_pages == 2
        assert meta.has_next is False
        assert meta.has_prev is True


class TestLookups:
    @pytest.mark.asyncio
    async def test_find_by_public_id_and_slug(self, repository, insert_manufacturer, insert_models):
        tesla = await insert_manufacturer("Tesla")
        await insert_models(tesla, ["Model S"])

        by_id = await repository.find_by_public_id(tesla.public_id)
        by_slug = await repository.find_by_slug("tesla")
        by_internal_id = await repository.find_by_id(tesla.id)

        assert by_id.manufacturer.name == "Tesla"
        assert by_id.model_count == 1
        assert by_slug.manufacturer.public_id == tesla.public_id
        assert by_internal_id.manufacturer.public_id == tesla.public_id

    @pytest.mark.asyncio
    async def test_missing_lookups_return_none(self, repository):
        assert await repository.find_by_public_id(uuid4()) is None
        assert await repository.find_by_slug("nope") is None
        assert await repository.find_by_name("Nope") is None

    @pytest.mark.asyncio
    async def test_find_by_name_is_case_sensitive(self, repository, insert_manufacturer):
        await insert_manufacturer("Tesla")

        assert (await repository.find_by_name("Tesla")).name == "Tesla"
        assert await repository.find_by_name("tesla") is None


class TestWrites:
    @pytest.mark.asyncio
    async def test_create_derives_slug_and_resolves_logo(self, repository, insert_file):
        logo = await insert_file()

        row = await repository.create(
            {"name": "Aston Martin", "display_name": "Aston Martin Lagonda", "logo_image_id": str(logo.public_id)}
        )

        assert row.manufacturer.slug == "aston-martin"
        assert row.manufacturer.logo_image_id == logo.id
        assert row.logo_image_public_id == logo.public_id
        assert row.manufacturer.is_active is True
        assert row.manufacturer.is_verified is False
        assert row.model_count == 0

    @pytest.mark.asyncio
    async def test_create_then_update_sets_timestamps(self, repository):
        created = await repository.create({"name": "Polestar", "display_name": "Polestar"})

        updated = await repository.update_by_public_id(created.manufacturer.public_id, {"description": "EV maker"})

        assert created.manufacturer.created_at is not None
        assert updated.manufacturer.description == "EV maker"
        assert updated.manufacturer.created_at == created.manufacturer.created_at
        assert updated.manufacturer.updated_at >= created.manufacturer.updated_at

    @pytest.mark.asyncio
    async def test_unknown_logo_is_stored_as_null(self, repository):
        row = await repository.create({"name": "Rivian", "display_name": "Rivian", "logo_image_id": str(uuid4())})

        assert row.manufacturer.logo_image_id is None
        assert row.logo_image_public_id is None

    @pytest.mark.asyncio
    async def test_malformed_logo_id_leaves_stored_logo(self, repository, insert_file):
        logo = await insert_file()
        created = await repository.create({"name": "Volvo", "display_name": "Volvo", "logo_image_id": logo.public_id})

        with pytest.raises(ValueError):
            await repository.update_by_public_id(created.manufacturer.public_id, {"logo_image_id": "not-a-uuid"})

        row = await repository.find_by_public_id(created.manufacturer.public_id)
        assert row.logo_image_public_id == logo.public_id

    @pytest.mark.asyncio
    async def test_slug_collision_raises_conflict(self, repository):
        await repository.create({"name": "Tesla", "display_name": "Tesla"})

        with pytest.raises(ConflictError):
            await repository.create({"name": "tesla", "display_name": "Tesla lowercase"})

    @pytest.mark.asyncio
    async def test_update_changes_only_supplied_fields(self, repository, insert_manufacturer, insert_file):
        toyota = await insert_manufacturer("Toyota", display_name="Toyota Motor", country_code="JP")
        logo = await insert_file("toyota.png")

        row = await repository.update_by_public_id(
            toyota.public_id, {"description": "new", "logo_image_id": str(logo.public_id)}
        )

        assert row.manufacturer.description == "new"
        assert row.manufacturer.display_name == "Toyota Motor"
        assert row.manufacturer.country_code == "JP"
        assert row.logo_image_public_id == logo.public_id
        assert row.manufacturer.updated_at >= toyota.updated_at

    @pytest.mark.asyncio
    async def test_update_by_internal_id(self, repository, insert_manufacturer):
        bmw = await insert_manufacturer("BMW")

        row = await repository.update(bmw.id, {"is_verified": True})

        assert row.manufacturer.is_verified is True
        assert row.manufacturer.name == "BMW"

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, repository):
        assert await repository.update_by_public_id(uuid4(), {"description": "new"}) is None
        assert await repository.update(999, {"description": "new"}) is None

    @pytest.mark.asyncio
    async def test_toggle_status(self, repository, insert_manufacturer):
        skoda = await insert_manufacturer("Skoda")
        actor = uuid4()

        row = await repository.toggle_status(skoda.id, False, actor)

        assert row.manufacturer.is_active is False
        assert row.manufacturer.updated_by == actor


class TestDeletePolicy:
    @pytest.mark.asyncio
    async def test_soft_delete_when_models_exist(self, repository, session_factory, insert_manufacturer, insert_models):
        tesla = await insert_manufacturer("Tesla")
        await insert_models(tesla, ["Model S"])

        result = await repository.delete_by_public_id(tesla.public_id)

        assert result == {"deleted": True, "soft": True}
        row = await repository.find_by_public_id(tesla.public_id)
        assert row.manufacturer.is_active is False
        assert row.model_count == 1

    @pytest.mark.asyncio
    async def test_hard_delete_without_models(self, repository, session_factory, insert_manufacturer):
        rivian = await insert_manufacturer("Rivian")

        result = await repository.delete(rivian.id)

        assert result == {"deleted": True, "soft": False}
        async with session_factory() as session:
            remaining = (await session.exec(select(Manufacturer).where(Manufacturer.id == rivian.id))).first()
        assert remaining is None

    @pytest.mark.asyncio
    async def test_delete_missing(self, repository):
        assert await repository.delete_by_public_id(uuid4()) == {"deleted": False, "soft": False}

    @pytest.mark.asyncio
    async def test_soft_delete_keeps_models(self, repository, session_factory, insert_manufacturer, insert_models):
        toyota = await insert_manufacturer("Toyota")
        await insert_models(toyota, ["Corolla", "Camry"])

        await repository.delete_by_public_id(toyota.public_id)

        async with session_factory() as session:
            models = (
                await session.exec(select(VehicleModel).where(VehicleModel.manufacturer_id == toyota.id))
            ).all()
        assert len(models) == 2
