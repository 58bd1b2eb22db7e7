"""Pytest configuration and fixtures."""

import os

# Settings are read once on import of the application, so the environment has
# to be in place before anything from src is imported.
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-long-enough-for-tests")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("BASE_URL", "http://testserver")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src.api.dependencies import get_mailer  # noqa: E402
from src.database import Base, get_db  # noqa: E402
from src.main import app  # noqa: E402
from src.services.exceptions import MailDeliveryError  # noqa: E402
from src.services.mailer import Mailer  # noqa: E402

SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class RecordingMailer(Mailer):
    """Mailer that keeps sent messages in memory, optionally failing every send."""

    def __init__(self) -> None:
        self.sent: list[dict] = []
        self.fail = False

    def send(self, to: str, subject: str, text: str, html: str) -> None:
        if self.fail:
            raise MailDeliveryError("SMTP server unavailable")
        self.sent.append({"to": to, "subject": subject, "text": text, "html": html})

    def last_link(self) -> str:
        """Return the link from the most recent message body."""
        text = self.sent[-1]["text"]
        return next(line for line in text.splitlines() if line.startswith("http"))


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture(scope="function")
def client(db, mailer):
    """Create a test client with database and mailer overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


ALICE = {"name": "Alice", "email": "a@x.com", "password": "pw123!", "phone": "555-0100"}


@pytest.fixture
def registered_user(client, mailer):
    """Register Alice and return the verification token from her email."""
    response = client.post("/api/v1/users/register", json=ALICE)
    assert response.status_code == 201
    return mailer.last_link().rsplit("/", 1)[-1]


@pytest.fixture
def verified_user(client, registered_user):
    """Register and verify Alice."""
    response = client.get(f"/api/v1/users/verify/{registered_user}")
    assert response.status_code == 200
    return ALICE


@pytest.fixture
def logged_in_client(client, verified_user):
    """Client holding Alice's session cookie."""
    response = client.post(
        "/api/v1/users/login",
        json={"email": verified_user["email"], "password": verified_user["password"]},
    )
    assert response.status_code == 200
    return client
