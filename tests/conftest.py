"""
Shared fixtures: a fresh storage and app per test, never a process-wide store.
"""
import os

# importing storefront.main builds a module-level app; keep it off the database
os.environ.setdefault("STORAGE_BACKEND", "memory")

import httpx
import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from storefront.config import Settings
from storefront.main import create_app
from storefront.seed import seed_demo_data
from storefront.sql_storage import SqlStorage
from storefront.storage import MemoryStorage

PNG_DATA_URL = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="


def make_sqlite_storage(path=None) -> SqlStorage:
    """In-memory sqlite on one shared connection, or a file database with a real pool."""
    if path is None:
        engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    else:
        engine = create_async_engine(f"sqlite+aiosqlite:///{path}", connect_args={"timeout": 30})
    return SqlStorage(engine)


@pytest.fixture
def settings():
    return Settings(storage_backend="memory", log_level="WARNING")


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
async def seeded(storage, settings):
    await seed_demo_data(storage, settings)
    return storage


@pytest.fixture
def app(storage, settings):
    return create_app(settings=settings, storage=storage)


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def service_named(storage, name):
    for service in await storage.list_services():
        if service.name == name:
            return service
    raise AssertionError(f"no seeded service named {name!r}")
