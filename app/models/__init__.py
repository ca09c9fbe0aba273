# app/models/__init__.py
"""
SQLAlchemy models for the firmware server.
"""
from .base import Base
from .user import User
from .device import Device
from .firmware import Firmware, FirmwareStatus

__all__ = [
    "Base",
    "User",
    "Device",
    "Firmware",
    "FirmwareStatus",
]
