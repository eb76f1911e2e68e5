"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

# Set test environment before importing app modules
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STORAGE_PROVIDER"] = "memory"
os.environ["S3_BUCKET_NAME"] = "test-bucket"
os.environ["PROCESSOR_TRIGGER"] = "stub"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"
os.environ["LOG_LEVEL"] = "WARNING"


@pytest.fixture(autouse=True)
def database() -> Generator[None, None, None]:
    """Create a fresh schema in the shared in-memory database for each test."""
    from vidhost.db.models import Base
    from vidhost.db.session import engine

    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture
def db_session(database):
    """Get a database session."""
    from vidhost.db.session import SessionLocal

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def object_store():
    """Get an in-memory object store."""
    from vidhost.adapters.storage.stub import InMemoryObjectStore

    return InMemoryObjectStore(bucket="test-bucket")


@pytest.fixture
def processor_trigger():
    """Get a stub processor trigger."""
    from vidhost.adapters.processor.stub import StubProcessorTrigger

    return StubProcessorTrigger()


@pytest.fixture
def upload_pipeline(object_store, processor_trigger):
    """Get an upload pipeline wired to the stub adapters."""
    from vidhost.services.upload import UploadPipeline

    return UploadPipeline(store=object_store, trigger=processor_trigger)


@pytest.fixture
def test_client(upload_pipeline, object_store) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app."""
    from vidhost.api.deps import get_store, get_upload_pipeline
    from vidhost.main import app

    app.dependency_overrides[get_store] = lambda: object_store
    app.dependency_overrides[get_upload_pipeline] = lambda: upload_pipeline

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def upload_file():
    """Post a video to the upload endpoint."""

    def _upload(client: TestClient, title: str = "My Video", **data: str):
        return client.post(
            "/api/upload",
            data={"title": title, **data},
            files={"video": ("clip.mp4", b"fake video bytes", "video/mp4")},
        )

    return _upload
