from __future__ import annotations

import os


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Empty/unset means "no database configured": run on the fallback store
DATABASE_URL = os.getenv("DATABASE_URL") or os.getenv("MONGODB_URI") or None

FALLBACK_STORE = os.getenv("FALLBACK_STORE", "memory").strip().lower()  # memory | file
DATA_DIR = os.getenv("DATA_DIR", "./data")
DB_AUTO_CREATE = _flag("DB_AUTO_CREATE", "true")

PORT = int(os.getenv("PORT", "8080"))
APP_ENV = os.getenv("APP_ENV", "development").strip().lower()
STATIC_DIR = os.getenv("STATIC_DIR", "./dist/spa")

API_PREFIX = os.getenv("API_PREFIX", "/api")
PING_MESSAGE = os.getenv("PING_MESSAGE", "ping")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
