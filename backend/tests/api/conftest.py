"""API test fixtures: FastAPI client over the test DB, fresh session store, temp uploads.

Invariants:
    - get_db overridden to use the per-test engine
    - get_image_store overridden to a per-test upload directory
    - db_manager patched so readiness checks hit the test engine
    - admin_client is the same client after a successful login
"""

import pytest
from httpx import ASGITransport, AsyncClient

from gallery.api.dependencies import get_image_store
from gallery.config import get_settings
from gallery.core.passwords import hash_password
from gallery.infrastructure.database import get_db, DatabaseSessionManager
from gallery.infrastructure.image_store import ImageStore
from gallery.infrastructure.session_store import init_session_store
from gallery.models.admin_user import AdminUser
import gallery.infrastructure.database as db_module
import gallery.infrastructure.session_store as session_module
from gallery.main import app

ADMIN_CREDENTIALS = {"username": "admin", "password": "correct-horse"}


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def image_store(upload_dir):
    settings = get_settings()
    return ImageStore(upload_dir, settings.upload_url_prefix, settings.max_upload_bytes)


@pytest.fixture
async def client(test_engine, test_session_factory, image_store):
    """FastAPI test client with DB and upload dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_store] = lambda: image_store

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    original_store = session_module.session_store
    init_session_store(get_settings().session_ttl_seconds)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
    session_module.session_store = original_store


@pytest.fixture
async def admin_user(test_db):
    user = AdminUser(
        username=ADMIN_CREDENTIALS["username"],
        password=hash_password(ADMIN_CREDENTIALS["password"]),
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest.fixture
def admin_credentials() -> dict:
    return dict(ADMIN_CREDENTIALS)


@pytest.fixture
async def admin_client(client, admin_user, admin_credentials):
    res = await client.post("/api/admin/login", json=admin_credentials)
    assert res.status_code == 200
    return client
