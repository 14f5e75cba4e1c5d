"""Root conftest: shared test configuration and database fixtures.

Invariants:
    - Environment is pinned before any gallery module reads settings
    - Uploads and sample images live in throwaway temp directories
    - Every test gets a fresh in-memory SQLite database
"""

import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="gallery-uploads-"))
os.environ.setdefault(
    "SAMPLE_IMAGES_DIR", tempfile.mkdtemp(prefix="gallery-samples-"),
)
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from gallery.db.base import Base  # noqa: E402
import gallery.models  # noqa: E402, F401


@pytest.fixture
def png_bytes() -> bytes:
    """Minimal PNG-signed payload; content is never decoded."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session
