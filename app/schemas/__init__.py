"""
Pydantic schemas for request/response validation.
"""
from .user import UserRead, UserCreate
from .device import DeviceCreate, DeviceRegistered
from .firmware import (
    FirmwareSummary,
    FirmwareUploadResponse,
    FirmwareRead,
    FirmwareDeliveryInfo,
)

__all__ = [
    # User schemas
    "UserRead",
    "UserCreate",
    # Device schemas
    "DeviceCreate",
    "DeviceRegistered",
    # Firmware schemas
    "FirmwareSummary",
    "FirmwareUploadResponse",
    "FirmwareRead",
    "FirmwareDeliveryInfo",
]
