from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from db import make_engine
from main import create_app
from storage.database import DatabaseStorage
from storage.json_file import JsonFileStorage
from storage.memory import MemoryStorage

BACKENDS = ["memory", "json-file", "database"]


class TickingClock:
    """Each call is one second after the previous one."""

    def __init__(self, start=datetime(2026, 1, 1, tzinfo=UTC)):
        self.now = start

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


def make_store(kind, tmp_path, clock=None):
    if kind == "memory":
        return MemoryStorage(clock=clock)
    if kind == "json-file":
        return JsonFileStorage(tmp_path / "data", clock=clock)
    if kind == "database":
        engine = make_engine(f"sqlite:///{tmp_path / 'formcraft.db'}")
        return DatabaseStorage(engine, clock=clock)
    raise ValueError(kind)


@pytest.fixture(params=BACKENDS)
def store(request, tmp_path):
    s = make_store(request.param, tmp_path, TickingClock())
    yield s
    s.close()


@pytest.fixture
def client(store):
    return TestClient(create_app(store))
