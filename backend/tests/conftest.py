import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from unittest.mock import patch

from voice_capture.db.base import Base, get_db
from voice_capture.main import app
from voice_capture.services import identity

# 1. In-Memory Database Setup
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


@pytest.fixture(scope="function")
def test_db():
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        # Drop tables after test
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(test_db):
    # Override the dependency
    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    # Reset overrides
    app.dependency_overrides.clear()


@pytest.fixture(scope="function", autouse=True)
def mock_uploads_dir(tmp_path):
    """
    Automatically patch UPLOADS_DIR so stored audio lands in a temporary directory.
    """
    temp_dir = tmp_path / "uploads"
    temp_dir.mkdir(exist_ok=True)

    with patch("voice_capture.services.storage.UPLOADS_DIR", temp_dir):
        yield temp_dir


@pytest.fixture
def signup(client):
    """Register a user through the API and return (user, auth headers)."""

    def _signup(email="asha@x.com", password="secret-pw", full_name="Asha Rao", **profile):
        resp = client.post(
            "/auth/signup",
            json={"email": email, "password": password, "full_name": full_name, **profile},
        )
        assert resp.status_code == 200, resp.text
        data = resp.json()
        return data["user"], {"Authorization": f"Bearer {data['token']}"}

    return _signup


@pytest.fixture
def admin_headers(client, test_db):
    identity.provision_admin(test_db, ADMIN_USERNAME, ADMIN_PASSWORD)
    resp = client.post(
        "/admin/auth", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
    )
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def make_user(test_db):
    """Create a user row directly, bypassing the HTTP layer."""

    def _make_user(email="asha@x.com", full_name="Asha Rao", password="secret-pw"):
        user, _ = identity.register(test_db, email, password, full_name=full_name)
        return user

    return _make_user
