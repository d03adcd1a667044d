"""
Test configuration for the hospital management API.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from hms.config import Settings
from hms.database import Base, Store
from hms.main import create_app


@pytest.fixture(scope="function")
def settings():
    """
    Settings pointing at an in-memory database.
    """
    return Settings(
        database_url="sqlite://",
        app_url="http://testserver",
        create_tables=True,
        static_dir=None,
    )


@pytest.fixture(scope="function")
def store():
    """
    Create a fresh in-memory database for each test.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    store = Store(engine)
    store.create_all()
    yield store
    # Drop tables after test
    Base.metadata.drop_all(bind=engine)
    store.dispose()


@pytest.fixture(scope="function")
def db(store):
    """
    Session on the test database for seeding and inspecting rows.
    """
    db = store.session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def client(settings, store):
    """
    Create a test client bound to the test database.
    """
    app = create_app(settings, store=store)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def make_patient(client):
    """
    Create a patient through the API and return its id.
    """
    def _make(**overrides):
        payload = {
            "name": "Jane Doe",
            "email": "jane@example.com",
            "phone": "5551234567",
            "dob": "1990-05-20",
        }
        payload.update(overrides)
        response = client.post("/api/patients", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["patientId"]
    return _make
