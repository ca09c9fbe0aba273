# app/models/device.py
"""
Device model backing the device directory.
"""
from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime
from .base import Base


class Device(Base):
    __tablename__ = "devices"
    id = Column(Integer, primary_key=True, index=True)
    device_id = Column(String(36), unique=True, index=True, nullable=False)
    api_key = Column(String(64), nullable=False)
    name = Column(String(255), nullable=True)
    mac = Column(String(17), nullable=True)  # e.g. "24:6F:28:AA:BB:CC"
    ip = Column(String(45), nullable=True)  # IPv4 or IPv6
    service_id = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
