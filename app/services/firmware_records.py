# app/services/firmware_records.py
"""
CRUD over firmware records, keyed by device and slot.

Every write commits on its own. The store never spans several records with one
transaction, so callers must be ready for a sequence of writes to stop partway.
"""
from typing import List, Optional
from datetime import datetime

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Firmware, FirmwareStatus


class FirmwareRecordStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _find_in_slot(self, device_id: str, status: FirmwareStatus) -> Optional[Firmware]:
        result = await self.session.execute(
            select(Firmware)
            .where(Firmware.device_id == device_id, Firmware.status == status.value)
            .order_by(Firmware.uploaded_at.desc(), Firmware.id.desc())
        )
        return result.scalars().first()

    async def find_current(self, device_id: str) -> Optional[Firmware]:
        return await self._find_in_slot(device_id, FirmwareStatus.CURRENT)

    async def find_previous(self, device_id: str) -> Optional[Firmware]:
        return await self._find_in_slot(device_id, FirmwareStatus.PREVIOUS)

    async def find_by_id(self, firmware_id: int, device_id: str) -> Optional[Firmware]:
        """Look up a record only if it belongs to ``device_id``."""
        result = await self.session.execute(
            select(Firmware).where(Firmware.id == firmware_id, Firmware.device_id == device_id)
        )
        return result.scalars().first()

    async def find_by_filename(self, filename: str) -> Optional[Firmware]:
        result = await self.session.execute(
            select(Firmware).where(Firmware.filename == filename)
        )
        return result.scalars().first()

    async def start_fresh_read(self):
        """
        End whatever transaction the session has open.

        Under REPEATABLE READ (InnoDB) the first SELECT of a transaction fixes its
        snapshot; committing here makes the next read see every write committed
        by whoever held the device lock before us.
        """
        await self.session.commit()

    async def list_by_device(self, device_id: str) -> List[Firmware]:
        """All records for a device, newest first."""
        result = await self.session.execute(
            select(Firmware)
            .where(Firmware.device_id == device_id)
            .order_by(Firmware.uploaded_at.desc(), Firmware.id.desc())
        )
        return list(result.scalars().all())

    async def create(
        self,
        device_id: str,
        version: str,
        description: str,
        filename: str,
        size: int,
        checksum: Optional[str],
        uploaded_at: datetime,
        status: FirmwareStatus = FirmwareStatus.CURRENT,
    ) -> Firmware:
        firmware = Firmware(
            device_id=device_id,
            version=version,
            description=description,
            filename=filename,
            size=size,
            checksum=checksum,
            uploaded_at=uploaded_at,
            status=status.value,
        )
        self.session.add(firmware)
        await self.session.commit()
        return firmware

    async def update_status(self, firmware_id: int, status: FirmwareStatus):
        await self.session.execute(
            update(Firmware)
            .where(Firmware.id == firmware_id)
            .values(status=status.value)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.commit()

    async def delete(self, firmware_id: int):
        await self.session.execute(
            delete(Firmware)
            .where(Firmware.id == firmware_id)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.commit()
