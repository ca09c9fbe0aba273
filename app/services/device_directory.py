# app/services/device_directory.py
"""
Registry of known devices.
"""
import secrets
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ValidationError
from app.models import Device


class DeviceDirectory:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, device_id: str) -> Optional[Device]:
        result = await self.session.execute(
            select(Device).where(Device.device_id == device_id)
        )
        return result.scalars().first()

    async def exists(self, device_id: str) -> bool:
        return await self.get(device_id) is not None

    async def authenticate(self, device_id: str, api_key: Optional[str]) -> Optional[Device]:
        """Return the device if ``api_key`` is its key, else None."""
        device = await self.get(device_id)
        if not device or not api_key:
            return None
        if not secrets.compare_digest(device.api_key, api_key):
            return None
        return device

    async def register(
        self,
        device_id: str,
        name: Optional[str] = None,
        mac: Optional[str] = None,
        ip: Optional[str] = None,
        service_id: Optional[int] = None,
    ) -> Tuple[Device, str]:
        """Add a device and return it with its freshly generated API key."""
        if await self.exists(device_id):
            raise ValidationError(f"Device {device_id} is already registered")

        api_key = secrets.token_hex(32)
        device = Device(
            device_id=device_id,
            api_key=api_key,
            name=name,
            mac=mac,
            ip=ip,
            service_id=service_id,
        )
        self.session.add(device)
        await self.session.commit()
        await self.session.refresh(device)
        return device, api_key
