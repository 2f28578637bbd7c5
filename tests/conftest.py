import os

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')
os.environ.setdefault('JWT_SECRET_KEY', 'test-secret')
os.environ.setdefault('BCRYPT_ROUNDS', '4')

from edu_api.core.errors import UploadError  # noqa: E402
from edu_api.database import Base, get_db, init_db  # noqa: E402
from edu_api.services.blob_store import get_blob_store  # noqa: E402


class FakeBlobStore:
    def __init__(self):
        self.objects: dict[str, bytes] = {}

    def upload(self, key: str, data: bytes, content_type: str | None = None) -> str:
        self.objects[key] = data
        return f'https://blobs.example.test/{key}'


class FailingBlobStore:
    def upload(self, key: str, data: bytes, content_type: str | None = None) -> str:
        raise UploadError('Failed to upload file to S3.')


@pytest.fixture
def db():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def blob_store():
    return FakeBlobStore()


@pytest.fixture
def failing_blob_store():
    return FailingBlobStore()


@pytest.fixture
def client(db, blob_store):
    from fastapi.testclient import TestClient

    from edu_api.main import app

    def _get_test_db():
        yield db

    app.dependency_overrides[get_db] = _get_test_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
