"""Pytest configuration for the check-in test suite."""

import json
import os
from datetime import datetime

import pytest

os.environ.setdefault("FLASK_ENV", "testing")
os.environ.setdefault("SEED_DEMO_PEOPLE", "false")

from checkin import create_app  # noqa: E402
from checkin.errors import PersistenceError  # noqa: E402
from checkin.services.access_log import AccessLog  # noqa: E402
from checkin.services.blob_store import MemoryBlobStore  # noqa: E402
from checkin.services.directory import DirectoryStore  # noqa: E402

FIXED_MILLIS = 1700000123456
FIXED_NOW = datetime(2026, 10, 19, 9, 30, 0)


def people_blob(*people):
    """Serialized 'users' array for seeding a MemoryBlobStore."""
    records = []
    for index, (name, code, active) in enumerate(people, start=1):
        records.append({
            'id': str(index),
            'name': name,
            'email': '',
            'qrCode': code,
            'createdAt': FIXED_NOW.isoformat(),
            'active': active,
        })
    return json.dumps(records)


class FailingBlobStore(MemoryBlobStore):
    """Memory store whose writes fail once failing is switched on."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.failing = False

    def set(self, key, value):
        if self.failing:
            raise PersistenceError(f"Write to '{key}' failed", key=key)
        super().set(key, value)


@pytest.fixture
def blob_store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def directory(blob_store: MemoryBlobStore) -> DirectoryStore:
    store = DirectoryStore(blob_store, clock=lambda: FIXED_MILLIS)
    store.load()
    return store


@pytest.fixture
def access_log(blob_store: MemoryBlobStore) -> AccessLog:
    log = AccessLog(blob_store, retention=500)
    log.load()
    return log


@pytest.fixture
def app(blob_store: MemoryBlobStore):
    app = create_app('testing', blob_store=blob_store)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()
