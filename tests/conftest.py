"""
Test configuration and fixtures
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")

from typing import List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from parts_catalog.core.database import get_async_session, get_session_factory
from parts_catalog.main import app
from parts_catalog.models import File, Manufacturer, VehicleModel
from parts_catalog.repositories import ManufacturerRepository
from parts_catalog.services import ManufacturerService
from parts_catalog.utils.normalization import slugify


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """On-disk SQLite database so concurrent sessions get separate connections"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog_test.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    yield factory

    await engine.dispose()


@pytest_asyncio.fixture
async def client(session_factory):
    """Create test client with database override"""

    async def get_test_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_async_session] = get_test_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def repository(session_factory) -> ManufacturerRepository:
    return ManufacturerRepository(session_factory)


@pytest.fixture
def service(repository) -> ManufacturerService:
    return ManufacturerService(repository)


@pytest.fixture
def insert_manufacturer(session_factory):
    """Insert a manufacturer row directly, bypassing the service"""

    async def _insert(name: str, **fields) -> Manufacturer:
        fields.setdefault("display_name", f"{name} Group")
        manufacturer = Manufacturer(name=name, slug=slugify(name), **fields)
        async with session_factory() as session:
            session.add(manufacturer)
            await session.commit()
            await session.refresh(manufacturer)
        return manufacturer

    return _insert


@pytest.fixture
def insert_models(session_factory):
    """Attach model rows to a manufacturer"""

    async def _insert(manufacturer: Manufacturer, names: List[str]) -> None:
        async with session_factory() as session:
            for name in names:
                session.add(VehicleModel(manufacturer_id=manufacturer.id, name=name))
            await session.commit()

    return _insert


@pytest.fixture
def insert_file(session_factory):
    """Insert a logo file record"""

    async def _insert(file_name: Optional[str] = "logo.png") -> File:
        file = File(
            file_name=file_name,
            original_name=file_name,
            mime_type="image/png",
            file_size=2048,
            file_path=f"logos/{file_name}",
            bucket="catalog-assets",
            provider="gcp",
        )
        async with session_factory() as session:
            session.add(file)
            await session.commit()
            await session.refresh(file)
        return file

    return _insert


@pytest.fixture
def sample_manufacturer_payload():
    """Sample create payload"""
    return {
        "name": "Tesla",
        "displayName": "Tesla Inc.",
        "countryCode": "us",
        "description": "Electric vehicle manufacturer",
    }
