"""
Device-related Pydantic schemas.
"""
from typing import Optional
from pydantic import BaseModel, Field


class DeviceCreate(BaseModel):
    device_id: str = Field(..., min_length=1, max_length=36)
    name: Optional[str] = None
    mac: Optional[str] = None
    ip: Optional[str] = None
    service_id: Optional[int] = None


class DeviceRegistered(BaseModel):
    device_id: str
    api_key: str
    message: str = "Device registered. Copy API key to device settings."
