"""Operator user model."""
from sqlalchemy import Column, Integer, String, Boolean
from .base import Base


class User(Base):
    """Operator account, managed by fastapi-users."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(1024), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    is_superuser = Column(Boolean, default=False, nullable=False)  # For admin
    is_verified = Column(Boolean, default=False, nullable=False)
