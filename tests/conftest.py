# tests/conftest.py
"""
Shared fixtures: an in-memory SQLite database, fake SMS providers and a
recording mailer wired into the FastAPI app through dependency overrides.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OPS_ALERT_EMAIL"] = "ops@roktodao.org"
os.environ["SITE_NAME"] = "RoktoDao"
os.environ["ADMIN_PASSWORD"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from roktodao.core.exceptions import ProviderError
from roktodao.domain.models.donor import Donor
from roktodao.infrastructure.database import Base, get_db
from roktodao.interfaces.deps import get_mailer, get_sms_providers
from roktodao.main import app

REGISTERED_PHONE = "01700000000"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeSmsProvider:
    """Stands in for an SMS gateway and records every send."""

    def __init__(self, name, succeed=True, configured=True, error=None):
        self.name = name
        self.succeed = succeed
        self.is_configured = configured
        self.error = error
        self.calls = []

    async def send(self, destination, body):
        self.calls.append((destination, body))
        if self.error is not None:
            raise self.error
        if not self.succeed:
            raise ProviderError(f"{self.name} rejected the message")


class FakeMailer:
    """Records outgoing emails; optionally fails every send."""

    def __init__(self, error=None):
        self.error = error
        self.sent = []

    async def send(self, to, subject, html):
        self.sent.append({"to": to, "subject": subject, "html": html})
        if self.error is not None:
            raise self.error


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def donor(db):
    record = Donor(full_name="Rahim Uddin", phone_number=REGISTERED_PHONE, blood_group="O+")
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


@pytest.fixture()
def primary():
    return FakeSmsProvider("gateway")


@pytest.fixture()
def fallback():
    return FakeSmsProvider("bulksmsbd")


@pytest.fixture()
def mailer():
    return FakeMailer()


@pytest.fixture()
def client(db, primary, fallback, mailer):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_sms_providers] = lambda: [primary, fallback]
    app.dependency_overrides[get_mailer] = lambda: mailer
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
