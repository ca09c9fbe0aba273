# app/services/firmware_lifecycle.py
"""
Firmware lifecycle for OTA updates.

Each device keeps at most two firmware records:

- "current": the image the device should be running
- "previous": the image it was running before, kept as a rollback target

Uploading a new image evicts the old "previous" (record and file), demotes
"current" to "previous" and installs the upload as the new "current". The
sequence runs under a per-device lock so two uploads can never both see an
empty "current" slot.

Writes are not wrapped in one transaction. If a step fails midway the completed
steps stay done; the failure is logged and reported to the caller.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import BlobStorageError, NotFoundError, ValidationError
from app.models import Firmware, FirmwareStatus
from app.services.blob_store import BlobStore, StoredBlob
from app.services.device_directory import DeviceDirectory
from app.services.device_locks import DeviceLockRegistry, device_locks
from app.services.firmware_records import FirmwareRecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FirmwareDelivery:
    """What a device needs to fetch one slot's image. The URL is built by the transport."""
    available: bool
    version: Optional[str] = None
    filename: Optional[str] = None
    size: Optional[int] = None
    checksum: Optional[str] = None

    @classmethod
    def from_record(cls, firmware: Optional[Firmware]) -> "FirmwareDelivery":
        if firmware is None:
            return cls(available=False)
        return cls(
            available=True,
            version=firmware.version,
            filename=firmware.filename,
            size=firmware.size,
            checksum=firmware.checksum,
        )


class FirmwareLifecycleManager:
    def __init__(
        self,
        records: FirmwareRecordStore,
        blob_store: BlobStore,
        devices: DeviceDirectory,
        locks: DeviceLockRegistry = device_locks,
    ):
        self.records = records
        self.blob_store = blob_store
        self.devices = devices
        self.locks = locks

    async def upload(
        self,
        device_id: str,
        version: Optional[str],
        description: Optional[str],
        content: bytes,
        original_filename: Optional[str],
    ) -> Firmware:
        """
        Store a new firmware image for a device and make it "current".

        Raises:
            ValidationError: missing version, wrong file type, empty or oversized file
            NotFoundError: unknown device
            BlobStorageError: the file or the records could not be written
        """
        version = (version or "").strip()
        if not version:
            raise ValidationError("Version is required")
        self.blob_store.validate(original_filename, len(content or b""))

        if not await self.devices.exists(device_id):
            raise NotFoundError("Device not found")

        # The new file has a unique name, so it is written before taking the lock
        blob = self.blob_store.put(content, original_filename)

        try:
            async with self.locks.hold(device_id):
                firmware = await self._install(device_id, version, description or "", blob)
        except SQLAlchemyError as e:
            logger.exception(
                "Firmware upload for device %s (v%s) failed while updating records; "
                "firmware history for this device may be incomplete", device_id, version
            )
            self._release_blob(blob.name)
            await self.records.session.rollback()
            raise BlobStorageError("Failed to save firmware record") from e
        except Exception:
            self._release_blob(blob.name)
            raise

        logger.info(
            "Installed firmware v%s for device %s (id=%s, %d bytes)",
            firmware.version, device_id, firmware.id, firmware.size
        )
        return firmware

    async def _install(
        self, device_id: str, version: str, description: str, blob: StoredBlob
    ) -> Firmware:
        await self.records.start_fresh_read()
        current = await self.records.find_current(device_id)
        previous = await self.records.find_previous(device_id)

        # Vacate the oldest slot first so a device never holds three records
        if previous:
            self._release_blob(previous.filename)
            await self.records.delete(previous.id)
            logger.info(
                "Evicted previous firmware v%s for device %s (id=%s)",
                previous.version, device_id, previous.id
            )

        uploaded_at = datetime.utcnow()
        if current:
            await self.records.update_status(current.id, FirmwareStatus.PREVIOUS)
            logger.info(
                "Demoted firmware v%s for device %s to previous (id=%s)",
                current.version, device_id, current.id
            )
            # "current" must be strictly newer than "previous"
            if current.uploaded_at >= uploaded_at:
                uploaded_at = current.uploaded_at + timedelta(microseconds=1)

        return await self.records.create(
            device_id=device_id,
            version=version,
            description=description,
            filename=blob.name,
            size=blob.size,
            checksum=blob.checksum,
            uploaded_at=uploaded_at,
            status=FirmwareStatus.CURRENT,
        )

    async def get_latest(self, device_id: str) -> FirmwareDelivery:
        """The "current" image, or ``available=False`` if the device has none."""
        return FirmwareDelivery.from_record(await self.records.find_current(device_id))

    async def get_rollback_target(self, device_id: str) -> FirmwareDelivery:
        """The "previous" image, or ``available=False`` if there is nothing to roll back to."""
        return FirmwareDelivery.from_record(await self.records.find_previous(device_id))

    async def list_firmware(self, device_id: str) -> List[Firmware]:
        return await self.records.list_by_device(device_id)

    async def delete(self, device_id: str, firmware_id: int):
        """
        Delete one firmware record and its file.

        The record must belong to ``device_id``. Deleting "current" leaves the
        device without a current image; "previous" is not promoted.
        """
        async with self.locks.hold(device_id):
            await self.records.start_fresh_read()
            firmware = await self.records.find_by_id(firmware_id, device_id)
            if not firmware:
                raise NotFoundError("Firmware not found")

            self._release_blob(firmware.filename)
            try:
                await self.records.delete(firmware.id)
            except SQLAlchemyError as e:
                logger.exception(
                    "Deleting firmware record %s for device %s failed after its file was "
                    "removed; the record now points at a missing file", firmware_id, device_id
                )
                await self.records.session.rollback()
                raise BlobStorageError("Failed to delete firmware record") from e

        logger.info(
            "Deleted %s firmware v%s for device %s (id=%s)",
            firmware.status, firmware.version, device_id, firmware_id
        )

    def _release_blob(self, name: str):
        """Best-effort delete; a failure leaves an orphaned file for a later cleanup."""
        try:
            removed = self.blob_store.delete(name)
        except (BlobStorageError, ValidationError) as e:
            logger.warning("Could not delete firmware file %s: %s", name, e)
            return
        if not removed:
            logger.warning("Firmware file %s was already missing", name)
