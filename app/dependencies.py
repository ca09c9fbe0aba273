# app/dependencies.py
"""
Common dependency functions for FastAPI routes.
"""
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import FIRMWARE_STORAGE_DIR, MAX_FIRMWARE_SIZE
from app.core.database import get_db
from app.models import Device
from app.services.blob_store import BlobStore
from app.services.device_directory import DeviceDirectory
from app.services.firmware_lifecycle import FirmwareLifecycleManager
from app.services.firmware_records import FirmwareRecordStore


@lru_cache()
def get_blob_store() -> BlobStore:
    """One blob store per process, created (with its directory) on first use."""
    return BlobStore(FIRMWARE_STORAGE_DIR, max_size=MAX_FIRMWARE_SIZE)


def get_device_directory(session: AsyncSession = Depends(get_db)) -> DeviceDirectory:
    return DeviceDirectory(session)


def get_record_store(session: AsyncSession = Depends(get_db)) -> FirmwareRecordStore:
    return FirmwareRecordStore(session)


def get_lifecycle_manager(
    records: FirmwareRecordStore = Depends(get_record_store),
    blob_store: BlobStore = Depends(get_blob_store),
    devices: DeviceDirectory = Depends(get_device_directory),
) -> FirmwareLifecycleManager:
    return FirmwareLifecycleManager(records, blob_store, devices)


async def get_authenticated_device(
    device_id: str,
    api_key: Optional[str] = Header(None, alias="X-API-Key"),
    devices: DeviceDirectory = Depends(get_device_directory),
) -> Device:
    """
    Device authentication for device-facing routes.
    Raises 401 if the device is unknown or the API key doesn't match.
    """
    device = await devices.authenticate(device_id, api_key)
    if not device:
        raise HTTPException(401, "Invalid device ID or API key")
    return device
