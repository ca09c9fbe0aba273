# app/routers/firmware.py
"""
Firmware management endpoints for OTA updates.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import FileResponse

from app.auth import current_admin
from app.core.config import SERVER_URL
from app.core.exceptions import NotFoundError
from app.dependencies import (
    get_authenticated_device,
    get_blob_store,
    get_lifecycle_manager,
    get_record_store,
)
from app.models import Device, User
from app.schemas import FirmwareDeliveryInfo, FirmwareRead, FirmwareSummary, FirmwareUploadResponse
from app.services.blob_store import BlobStore
from app.services.firmware_lifecycle import FirmwareDelivery, FirmwareLifecycleManager
from app.services.firmware_records import FirmwareRecordStore

router = APIRouter(prefix="/api/devices/{device_id}/firmware", tags=["firmware"])
download_router = APIRouter(tags=["firmware"])


def firmware_url(request: Request, filename: str) -> str:
    """Public URL a device can fetch a firmware file from."""
    if SERVER_URL:
        return f"{SERVER_URL.rstrip('/')}/firmware/{filename}"
    return str(request.url_for("download_firmware", filename=filename))


def delivery_info(request: Request, delivery: FirmwareDelivery) -> FirmwareDeliveryInfo:
    if not delivery.available:
        return FirmwareDeliveryInfo(available=False)
    return FirmwareDeliveryInfo(
        version=delivery.version,
        url=firmware_url(request, delivery.filename),
        available=True,
        size=delivery.size,
        checksum=delivery.checksum,
    )


# Operator endpoints

@router.post("/upload", response_model=FirmwareUploadResponse)
async def upload_firmware(
    device_id: str,
    firmware: UploadFile = File(...),
    version: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    admin: User = Depends(current_admin),
    manager: FirmwareLifecycleManager = Depends(get_lifecycle_manager),
):
    """
    Upload a firmware binary for a device.

    The upload becomes the device's current firmware; the old current one is kept
    as the rollback target and anything older is deleted.
    """
    # Read one byte past the limit so oversized files are caught without reading them whole
    content = await firmware.read(manager.blob_store.max_size + 1)
    record = await manager.upload(device_id, version, description, content, firmware.filename)
    return FirmwareUploadResponse(firmware=FirmwareSummary.model_validate(record))


@router.get("", response_model=List[FirmwareRead])
async def list_firmware(
    device_id: str,
    admin: User = Depends(current_admin),
    manager: FirmwareLifecycleManager = Depends(get_lifecycle_manager),
):
    """List firmware for a device, newest first"""
    return await manager.list_firmware(device_id)


@router.delete("/{firmware_id}")
async def delete_firmware(
    device_id: str,
    firmware_id: int,
    admin: User = Depends(current_admin),
    manager: FirmwareLifecycleManager = Depends(get_lifecycle_manager),
):
    """Delete a firmware version (removes file and database record)"""
    await manager.delete(device_id, firmware_id)
    return {"success": True}


# Device endpoints

@router.get("/latest", response_model=FirmwareDeliveryInfo)
async def get_latest_firmware(
    device_id: str,
    request: Request,
    device: Device = Depends(get_authenticated_device),
    manager: FirmwareLifecycleManager = Depends(get_lifecycle_manager),
):
    """Current firmware for the device (polled to check for updates)"""
    return delivery_info(request, await manager.get_latest(device_id))


@router.get("/current", response_model=FirmwareDeliveryInfo)
@router.get("/rollback", response_model=FirmwareDeliveryInfo)
async def get_rollback_firmware(
    device_id: str,
    request: Request,
    device: Device = Depends(get_authenticated_device),
    manager: FirmwareLifecycleManager = Depends(get_lifecycle_manager),
):
    """
    Previous firmware for the device, used for rollback.

    Devices in the field call this as ``/current``: it is the image they were
    running before the latest upload.
    """
    return delivery_info(request, await manager.get_rollback_target(device_id))


# Public endpoint for firmware download (called by devices)

@download_router.get("/firmware/{filename}", name="download_firmware")
async def download_firmware(
    filename: str,
    blob_store: BlobStore = Depends(get_blob_store),
    records: FirmwareRecordStore = Depends(get_record_store),
):
    """
    Download a firmware binary.

    No authentication required - the file name is random and only handed out
    through the authenticated latest/current endpoints.
    """
    if not blob_store.exists(filename):
        raise NotFoundError("Firmware file not found")

    # Files without a record are orphans waiting for cleanup
    firmware = await records.find_by_filename(filename)
    if not firmware:
        raise NotFoundError("Firmware file not found")

    return FileResponse(
        blob_store.path(filename),
        media_type="application/octet-stream",
        filename=filename,
        headers={
            "X-Firmware-Version": firmware.version,
            "X-Firmware-Checksum": firmware.checksum or "",
            "X-Firmware-Size": str(firmware.size or 0),
        },
    )
