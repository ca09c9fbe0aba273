# app/services/__init__.py
"""
Business logic services.
"""
from .blob_store import BlobStore, StoredBlob
from .device_directory import DeviceDirectory
from .device_locks import DeviceLockRegistry, device_locks
from .firmware_records import FirmwareRecordStore
from .firmware_lifecycle import FirmwareDelivery, FirmwareLifecycleManager

__all__ = [
    "BlobStore",
    "StoredBlob",
    "DeviceDirectory",
    "DeviceLockRegistry",
    "device_locks",
    "FirmwareRecordStore",
    "FirmwareDelivery",
    "FirmwareLifecycleManager",
]
