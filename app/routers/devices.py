# app/routers/devices.py
"""
Device registration endpoint.
"""
from fastapi import APIRouter, Depends

from app.auth import current_admin
from app.dependencies import get_device_directory
from app.models import User
from app.schemas import DeviceCreate, DeviceRegistered
from app.services.device_directory import DeviceDirectory

router = APIRouter(prefix="/api/devices", tags=["devices"])


@router.post("", response_model=DeviceRegistered, status_code=201)
async def register_device(
    device: DeviceCreate,
    admin: User = Depends(current_admin),
    devices: DeviceDirectory = Depends(get_device_directory),
):
    """Register a device so it can receive firmware"""
    new_device, api_key = await devices.register(
        device.device_id,
        name=device.name,
        mac=device.mac,
        ip=device.ip,
        service_id=device.service_id,
    )
    return DeviceRegistered(device_id=new_device.device_id, api_key=api_key)
