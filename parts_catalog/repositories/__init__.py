"""
Repository implementations
"""

from .base import BaseRepository
from .manufacturer import ManufacturerRepository, ManufacturerRow

__all__ = [
    "BaseRepository",
    "ManufacturerRepository",
    "ManufacturerRow",
]
