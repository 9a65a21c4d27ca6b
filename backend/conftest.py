# backend/conftest.py
import os

import pytest

# Must be set before backend.core.config builds its Settings
os.environ.setdefault("ENV", "test")
os.environ.setdefault("TEST_DATABASE_URL", "sqlite://")


@pytest.fixture(scope="function")
def db():
    """
    Fresh in-memory database per test.

    Re-initializes the engine so no rows leak between tests.
    """
    from backend.core.database import init_engine, create_all_tables, dispose_engine

    engine = init_engine(os.environ["TEST_DATABASE_URL"])
    create_all_tables()
    yield engine
    dispose_engine()


@pytest.fixture(scope="function")
def client(db):
    """TestClient bound to the app with an empty todos table."""
    from fastapi.testclient import TestClient
    from backend.main import app

    return TestClient(app)
