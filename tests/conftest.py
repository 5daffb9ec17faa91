# tests/conftest.py
import os

# Keep the developer's environment from leaking into the settings under test
for _name in (
    "CARGO_FILE_PATH",
    "CARGO_URL_SUBDIR",
    "CARGO_STAGING_DIR",
    "CARGO_KEY_LENGTH",
    "CARGO_TABLE_NAME",
    "CARGO_LOG_LEVEL",
    "CARGO_LOG_FORMAT",
):
    os.environ.pop(_name, None)

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from cargo.core import config
from cargo.core.config import Settings
from cargo.models import Base
from cargo.services import PathResolver
from tests.models import Document, Image  # noqa: F401  (registers the tables)

SNAIL_BYTES = {
    "jpg": b"\xff\xd8\xff\xe0 fake jpeg snail",
    "png": b"\x89PNG\r\n\x1a\n fake png snail",
    "pdf": b"%PDF-1.4 fake pdf snail",
    "txt": b"a snail, in plain text",
}


@pytest.fixture
def storage_root(tmp_path, monkeypatch):
    """Point the settings at a fresh storage root and url prefix."""
    root = tmp_path / "files"
    monkeypatch.setattr(config, "settings", Settings(file_path=root, url_subdir="/files"))
    return root


@pytest.fixture
def resolver(storage_root):
    """Path resolver reading the test settings."""
    return PathResolver()


@pytest.fixture
def snail(tmp_path):
    """Return a function writing a sample file in the given format."""
    fixtures_dir = tmp_path / "fixtures"
    fixtures_dir.mkdir(exist_ok=True)

    def make(file_format: str = "jpg"):
        path = fixtures_dir / f"snail.{file_format}"
        path.write_bytes(SNAIL_BYTES.get(file_format, b"snail"))
        return path

    return make


@pytest_asyncio.fixture
async def test_db(tmp_path, storage_root):
    """Create a test database session."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    TestSessionLocal = async_sessionmaker(engine, expire_on_commit=False)
    async with TestSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()

    await engine.dispose()

