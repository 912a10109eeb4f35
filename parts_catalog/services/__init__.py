"""
Service layer for business logic
"""

from .manufacturer_service import ManufacturerService

__all__ = ["ManufacturerService"]
