"""API test fixtures — FastAPI client with DB, geocoder and file store overridden.

Invariants:
    - get_db overridden to hand out sessions from the in-memory test engine
    - Geocoder is a fake; file store is a real LocalFileStore under tmp_path
    - auth_header(user_id) mints tokens with the same key the app verifies with
"""

import jwt
import pytest
from httpx import ASGITransport, AsyncClient

from lessonmap.api.dependencies import get_file_store, get_geocoder
from lessonmap.config import get_settings
from lessonmap.infrastructure.database import get_db
from lessonmap.infrastructure.file_store import LocalFileStore
from lessonmap.main import app


@pytest.fixture
def upload_store(tmp_path):
    return LocalFileStore(str(tmp_path / "images"))


@pytest.fixture
async def client(test_session_factory, geocoder, upload_store):
    """FastAPI test client with collaborators overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_geocoder] = lambda: geocoder
    app.dependency_overrides[get_file_store] = lambda: upload_store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def auth_header():
    def _make(user_id) -> dict:
        settings = get_settings()
        token = jwt.encode(
            {"userId": str(user_id), "email": "someone@example.com"},
            settings.jwt_key, algorithm=settings.jwt_algorithm,
        )
        return {"Authorization": f"Bearer {token}"}
    return _make
