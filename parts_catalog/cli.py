"""
CLI commands for database management and catalog inspection
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from alembic import command
from alembic.config import Config
from rich.console import Console
from rich.table import Table

from parts_catalog.core.database import db_manager, init_db
from parts_catalog.core.exceptions import ConflictError
from parts_catalog.core.logging import log
from parts_catalog.models import VehicleModel
from parts_catalog.repositories import ManufacturerRepository
from parts_catalog.schemas.manufacturer import ManufacturerCreate, ManufacturerListQuery
from parts_catalog.services import ManufacturerService

app = typer.Typer(help="Parts catalog management")
console = Console()

SEED_MANUFACTURERS = [
    {"name": "Tesla", "display_name": "Tesla, Inc.", "country_code": "US", "models": ["Model S", "Model 3"]},
    {"name": "Toyota", "display_name": "Toyota Motor Corporation", "country_code": "JP", "models": ["Corolla"]},
    {"name": "BMW", "display_name": "Bayerische Motoren Werke AG", "country_code": "DE", "models": ["3 Series"]},
    {"name": "Skoda", "display_name": "Skoda Auto", "country_code": "CZ", "models": []},
]


def _service() -> ManufacturerService:
    return ManufacturerService(ManufacturerRepository(db_manager.sessionmaker))


@app.command()
def migrate(revision: str = typer.Argument("head", help="Target revision")):
    """Apply Alembic migrations"""
    config = Config(str(Path(__file__).resolve().parent.parent / "alembic.ini"))
    command.upgrade(config, revision)
    console.print(f"[green]Database upgraded to {revision}[/green]")


@app.command("init-db")
def init_database():
    """Create tables directly from the models (development only)"""

    async def run():
        await init_db()
        await db_manager.close()

    asyncio.run(run())
    console.print("[green]Tables created[/green]")


@app.command()
def seed():
    """Insert sample manufacturers and models"""

    async def run():
        service = _service()
        created = 0
        for entry in SEED_MANUFACTURERS:
            try:
                manufacturer = await service.create_manufacturer(
                    ManufacturerCreate(
                        name=entry["name"],
                        display_name=entry["display_name"],
                        country_code=entry["country_code"],
                    )
                )
            except ConflictError:
                log.info("Skipping existing manufacturer", name=entry["name"])
                continue

            row = await service.repository.find_by_public_id(manufacturer.id)
            async with db_manager.session() as session:
                for model_name in entry["models"]:
                    session.add(VehicleModel(manufacturer_id=row.manufacturer.id, name=model_name))
                await session.commit()
            created += 1

        await db_manager.close()
        return created

    created = asyncio.run(run())
    console.print(f"[green]Seeded {created} manufacturers[/green]")


@app.command("list")
def list_manufacturers(
    search: Optional[str] = typer.Option(None, help="Filter by name"),
    sort: str = typer.Option("name", help="name, created_at or model_count"),
    order: str = typer.Option("asc", help="asc or desc"),
    page: int = typer.Option(1, min=1),
    limit: int = typer.Option(20, min=1),
):
    """Show manufacturers as a table"""

    async def run():
        response = await _service().list_manufacturers(
            ManufacturerListQuery(search=search, sort=sort, order=order, page=page, limit=limit)
        )
        await db_manager.close()
        return response

    response = asyncio.run(run())

    table = Table(title=f"Manufacturers (page {response.pagination.page}/{response.pagination.total_pages})")
    table.add_column("Name", style="cyan")
    table.add_column("Slug")
    table.add_column("Country", style="yellow")
    table.add_column("Models", justify="right")
    table.add_column("Active")
    table.add_column("Verified")

    for manufacturer in response.data:
        table.add_row(
            manufacturer.name,
            manufacturer.slug,
            manufacturer.country_code or "-",
            str(manufacturer.model_count),
            "yes" if manufacturer.is_active else "no",
            "yes" if manufacturer.is_verified else "no",
        )

    console.print(table)
    console.print(f"Total: {response.pagination.total}")


if __name__ == "__main__":
    app()
