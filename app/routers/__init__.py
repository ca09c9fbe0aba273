# app/routers/__init__.py
"""
API route handlers organized by domain.
"""
from .devices import router as devices_router
from .firmware import router as firmware_router, download_router as firmware_download_router

__all__ = [
    "devices_router",
    "firmware_router",
    "firmware_download_router",
]
