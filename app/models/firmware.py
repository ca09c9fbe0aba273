# app/models/firmware.py
"""
Firmware models for OTA updates.
"""
import enum

from sqlalchemy import Column, Integer, String, DateTime, Text, BigInteger, ForeignKey
from sqlalchemy.dialects import mysql
from datetime import datetime
from .base import Base


class FirmwareStatus(str, enum.Enum):
    """The two slots a device's firmware can occupy."""
    CURRENT = "current"
    PREVIOUS = "previous"


# MySQL/MariaDB DATETIME drops fractions of a second unless fsp is given
UploadTimestamp = DateTime().with_variant(mysql.DATETIME(fsp=6), "mysql", "mariadb")


class Firmware(Base):
    """
    A firmware binary held for one device.

    A device has at most one "current" record (what it should be running) and at
    most one "previous" record (the rollback target). The binary itself lives in
    the blob store under ``filename``.
    """
    __tablename__ = "firmware"
    id = Column(Integer, primary_key=True, index=True)

    device_id = Column(String(36), ForeignKey("devices.device_id"), nullable=False, index=True)

    # Operator-supplied label, not parsed
    version = Column(String(64), nullable=False)
    description = Column(Text, nullable=False, default="")

    # Blob store name, e.g. "9f86d081884c7d659a2feaa0c55ad015.bin"
    filename = Column(String(64), nullable=False, unique=True)

    # File size in bytes (for download progress)
    size = Column(BigInteger, nullable=False)

    # SHA256 checksum for integrity verification
    checksum = Column(String(64), nullable=True)

    uploaded_at = Column(UploadTimestamp, default=datetime.utcnow, nullable=False)

    # FirmwareStatus value
    status = Column(String(16), nullable=False, default=FirmwareStatus.CURRENT.value, index=True)
