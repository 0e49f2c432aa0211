# routers/health.py
from pathlib import Path

from fastapi import APIRouter, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from alembic.util import CommandError
from deps.storage import StorageDep
from storage.base import StorageError
from storage.database import DatabaseStorage

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/storage")
def health_storage(storage: StorageDep):
    try:
        storage.list_forms()
    except StorageError as e:
        raise HTTPException(status_code=500, detail=f"storage_error: {e}")
    return {"ok": True, "backend": storage.backend}


def _alembic_heads() -> list[str]:
    script = ScriptDirectory.from_config(Config(str(ALEMBIC_INI)))
    return list(script.get_heads())


@router.get("/migrations")
def health_migrations(storage: StorageDep):
    """
    Compare the revision stamped in the database with the heads in alembic/versions.
    Fallback stores have no schema, so there is nothing to compare.
    """
    if not isinstance(storage, DatabaseStorage):
        return {"ok": True, "backend": storage.backend, "code_heads": [], "db_version": None}

    errors: list[str] = []
    heads: list[str] = []
    db_ver = None

    try:
        heads = _alembic_heads()
    except (CommandError, OSError) as e:
        errors.append(f"heads_lookup_failed: {e}")

    try:
        with storage.engine.connect() as conn:
            # None when the database was never stamped (e.g. tables from create_all)
            db_ver = MigrationContext.configure(conn).get_current_revision()
    except SQLAlchemyError as e:
        errors.append(f"db_connect_failed: {type(e).__name__}: {e}")

    synced = not errors and db_ver in heads
    return {
        "ok": synced,
        "synced": synced,
        "backend": storage.backend,
        "db_version": db_ver,
        "code_heads": heads,
        "errors": errors,
    }
