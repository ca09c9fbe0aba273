"""Authentication module."""
from .database import get_user_db
from .manager import UserManager, get_user_manager
from .backend import fastapi_users, auth_backend, current_admin

__all__ = [
    "get_user_db",
    "UserManager",
    "get_user_manager",
    "fastapi_users",
    "auth_backend",
    "current_admin",
]
