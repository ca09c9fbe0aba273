"""SQLAlchemy user database."""
from fastapi import Depends
from fastapi_users.db import SQLAlchemyUserDatabase
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.models.user import User


async def get_user_db(session: AsyncSession = Depends(get_db)):
    """Get user database dependency."""
    yield SQLAlchemyUserDatabase(session, User)
