"""
SQLModel database models
"""

from .file import File
from .manufacturer import Manufacturer
from .user import User
from .vehicle_model import VehicleModel

__all__ = [
    "File",
    "Manufacturer",
    "User",
    "VehicleModel",
]
