from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

import config
from db import make_engine, ping
from storage.base import Storage, StorageError
from storage.database import DatabaseStorage
from storage.json_file import JsonFileStorage
from storage.memory import MemoryStorage

logger = logging.getLogger(__name__)


def fallback_storage(kind: Optional[str] = None, data_dir: Optional[str] = None) -> Storage:
    kind = (kind or config.FALLBACK_STORE).lower()
    if kind == "file":
        return JsonFileStorage(data_dir or config.DATA_DIR)
    if kind != "memory":
        logger.warning("Unknown FALLBACK_STORE=%r, using memory", kind)
    return MemoryStorage()


def select_storage(
    database_url: Optional[str] = None,
    fallback: Optional[str] = None,
    data_dir: Optional[str] = None,
    create_tables: Optional[bool] = None,
) -> Storage:
    """
    Pick the backend once, at startup. The database wins if it answers `SELECT 1`;
    anything else (no URL, bad URL, unreachable server) lands on the fallback.
    """
    url = database_url if database_url is not None else config.DATABASE_URL
    auto_create = config.DB_AUTO_CREATE if create_tables is None else create_tables

    if url:
        engine = None
        try:
            engine = make_engine(url)
            ping(engine)
            store: Storage = DatabaseStorage(engine, create_tables=auto_create)
            logger.info("Storage: database (%s)", engine.url.render_as_string(hide_password=True))
            return store
        except (SQLAlchemyError, StorageError, ImportError, ValueError) as e:
            logger.warning("Database unavailable, using fallback storage: %s: %s", type(e).__name__, e)
            if engine is not None:
                engine.dispose()
    else:
        logger.info("No database URL configured, using fallback storage")

    store = fallback_storage(fallback, data_dir)
    logger.info("Storage: %s", store.backend)
    return store
