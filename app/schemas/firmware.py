"""
Firmware-related Pydantic schemas.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel


class FirmwareSummary(BaseModel):
    """Returned after a successful upload. Blob location is not exposed."""
    id: int
    version: str
    description: str
    size: int
    uploaded_at: datetime

    class Config:
        from_attributes = True


class FirmwareUploadResponse(BaseModel):
    success: bool = True
    firmware: FirmwareSummary


class FirmwareRead(BaseModel):
    """Schema for reading a firmware record."""
    id: int
    device_id: str
    version: str
    description: str
    filename: str
    size: int
    checksum: Optional[str]
    uploaded_at: datetime
    status: str

    class Config:
        from_attributes = True


class FirmwareDeliveryInfo(BaseModel):
    """
    What a device polls to learn whether an image is available.

    ``available`` is False (and the other fields None) when the slot is empty.
    """
    version: Optional[str] = None
    url: Optional[str] = None
    available: bool = False
    size: Optional[int] = None
    checksum: Optional[str] = None
