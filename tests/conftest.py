"""Pytest configuration and shared fixtures."""
import os

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.auth import current_admin
from app.core.database import get_db
from app.dependencies import get_blob_store
from app.main import app
from app.models import Base, Device, Firmware, User
from app.services import (
    BlobStore,
    DeviceDirectory,
    DeviceLockRegistry,
    FirmwareLifecycleManager,
    FirmwareRecordStore,
)

# Test database setup
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

DEVICE_ID = "esp32-cam-01"
DEVICE_API_KEY = "a" * 64


@pytest.fixture
async def db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Create test database session."""
    session_maker = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with session_maker() as session:
        yield session


@pytest.fixture
def blob_store(tmp_path):
    """Blob store rooted in a per-test directory."""
    return BlobStore(str(tmp_path / "firmware"))


@pytest.fixture
async def device(db_session):
    """A registered device with a known API key."""
    device = Device(device_id=DEVICE_ID, api_key=DEVICE_API_KEY, name="Front door camera")
    db_session.add(device)
    await db_session.commit()
    return device


@pytest.fixture
def records(db_session):
    return FirmwareRecordStore(db_session)


@pytest.fixture
def manager(db_session, records, blob_store):
    return FirmwareLifecycleManager(
        records, blob_store, DeviceDirectory(db_session), locks=DeviceLockRegistry()
    )


@pytest.fixture
def admin_user():
    return User(
        id=1,
        email="admin@example.com",
        hashed_password="not-used",
        is_active=True,
        is_superuser=True,
        is_verified=True,
    )


@pytest.fixture
async def client(db_session, blob_store, admin_user):
    """Create test HTTP client with database, storage and operator overrides."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    app.dependency_overrides[current_admin] = lambda: admin_user

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def storage_snapshot(session, blob_store):
    """Files on disk plus every firmware row, for before/after comparisons."""
    result = await session.execute(
        select(
            Firmware.id,
            Firmware.device_id,
            Firmware.version,
            Firmware.filename,
            Firmware.status,
            Firmware.uploaded_at,
        ).order_by(Firmware.id)
    )
    return sorted(os.listdir(blob_store.root)), [tuple(row) for row in result.all()]
