"""Configuration and environment variables."""
from dotenv import load_dotenv
import os

load_dotenv()

# Database
DATABASE_URL = os.getenv("DATABASE_URL") or "sqlite+aiosqlite:///./firmware_server.db"
DATABASE_URL = DATABASE_URL.replace("mariadb+mariadbconnector", "mariadb+aiomysql")

# Security
SECRET = os.getenv("SECRET_KEY") or "secret"
SERVER_URL = os.getenv("SERVER_URL")

# Firmware storage
FIRMWARE_STORAGE_DIR = os.getenv("FIRMWARE_STORAGE_DIR") or "firmware"
MAX_FIRMWARE_SIZE = int(os.getenv("MAX_FIRMWARE_SIZE") or 10 * 1024 * 1024)  # 10MB

# Logging
LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").upper()
