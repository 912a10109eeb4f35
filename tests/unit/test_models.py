"""
Test table model defaults
"""

from datetime import timezone

import pytest

from parts_catalog.models import File, Manufacturer, User, VehicleModel


def test_timestamps_default_to_aware_utc():
    manufacturer = Manufacturer(name="Tesla", display_name="Tesla", slug="tesla")

    assert manufacturer.created_at.tzinfo is not None
    assert manufacturer.created_at.utcoffset() == timezone.utc.utcoffset(None)
    assert manufacturer.updated_at.tzinfo is not None


@pytest.mark.parametrize("model", [File, Manufacturer, User, VehicleModel])
def test_timestamp_columns_store_timezone(model):
    columns = model.__table__.columns

    assert columns["created_at"].type.timezone is True
    assert columns["updated_at"].type.timezone is True
