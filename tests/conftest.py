import os

# In-memory record store for the whole test run; must be set before app imports.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AWS_URL_FILE", "https://files.test/certificates")
os.environ.setdefault("AWS_BUCKET_NAME", "certificates-test")
os.environ.setdefault("IS_OFFLINE", "false")

from datetime import date
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_certificate_service
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.services.certificate_service import CertificateService
from app.services.record_store import CertificateRecordStore
from app.services.storage_service import StorageService, get_storage_service

BASE_URL = "https://files.test/certificates"
FIXED_TODAY = date(2024, 3, 5)

# -----------------------------------------------------------------------------
# Database Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(scope="function")
def db_engine():
    """
    Creates a fresh in-memory SQLite engine per test.
    StaticPool keeps a single connection so every session sees the same DB.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, autocommit=False, autoflush=False)


@pytest.fixture(scope="function")
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


# -----------------------------------------------------------------------------
# Collaborator Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(scope="function")
def s3_client():
    """boto3 S3 client double; put_object calls are recorded."""
    return MagicMock(name="s3_client")


@pytest.fixture(scope="function")
def storage(s3_client):
    return StorageService(
        bucket="certificates-test",
        public_url_base=BASE_URL,
        client=s3_client,
    )


@pytest.fixture(scope="function")
def composer():
    """Stands in for WeasyPrint: the 'PDF' carries the markup it was given."""
    calls = []

    def _compose(markup, options):
        calls.append((markup, options))
        return b"%PDF-1.7\n" + markup.encode("utf-8")

    _compose.calls = calls
    return _compose


@pytest.fixture(scope="function")
def certificate_service(db_session, storage, composer):
    return CertificateService(
        store=CertificateRecordStore(db_session),
        storage=storage,
        base_url=BASE_URL,
        composer=composer,
        today=lambda: FIXED_TODAY,
    )


# -----------------------------------------------------------------------------
# Client Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(scope="function")
def client(db_session, storage, certificate_service):
    """
    TestClient with the DB session, artifact store and workflow overridden.
    """

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage_service] = lambda: storage
    app.dependency_overrides[get_certificate_service] = lambda: certificate_service

    # Using 'with' context manager to trigger lifespan events (startup/shutdown)
    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
