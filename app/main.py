# app/main.py - Firmware server (FastAPI + async SQLAlchemy)
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.auth import auth_backend, fastapi_users
from app.core.config import LOG_LEVEL
from app.core.database import create_db_and_tables
from app.core.exceptions import FirmwareServiceError
from app.dependencies import get_blob_store
from app.routers import devices_router, firmware_router, firmware_download_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_db_and_tables()
    blob_store = get_blob_store()
    logger.info("Firmware storage ready at %s", blob_store.root)
    yield


app = FastAPI(title="Firmware Server", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FirmwareServiceError)
async def firmware_service_error_handler(request: Request, exc: FirmwareServiceError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.error},
    )


# Routes for auth
app.include_router(
    fastapi_users.get_auth_router(auth_backend),
    prefix="/auth/jwt",
    tags=["auth"],
)

app.include_router(devices_router)
app.include_router(firmware_router)
app.include_router(firmware_download_router)
