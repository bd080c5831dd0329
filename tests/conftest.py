import os

# Point the application at throwaway resources before it is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("UPLOAD_DIR", "test-uploads")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from catalog_admin.main import app
from catalog_admin.database import Base, get_db
from catalog_admin.services.product_service import ProductService
from catalog_admin.utils.storage import LocalImageStorage, get_storage


# Create test database (SQLite in-memory for testing)
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """Override database dependency for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# Override the dependency
app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function")
def storage(tmp_path):
    """Image storage rooted in a per-test temporary directory."""
    return LocalImageStorage(tmp_path / "uploads")


@pytest.fixture(scope="function")
def client(storage):
    """Create test client with fresh database and upload directory for each test."""
    # Create tables
    Base.metadata.create_all(bind=engine)
    app.dependency_overrides[get_storage] = lambda: storage

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.pop(get_storage, None)
    # Drop tables after test
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create database session for direct database access in tests."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def service(db_session, storage):
    """Product service wired to the test session and storage."""
    return ProductService(db_session, storage)
