"""Test configuration and fixtures"""

from datetime import datetime
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base, get_db
from app.api.deps import get_clock, get_email_sender
from app.models.table import Table, TableStatus
from app.models.user import User, UserRole
from app.services.clock import FixedClock
from app.services.reservations import ReservationService


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Monday lunchtime; most bookings in the tests are for dinner the same day
NOW = datetime(2026, 10, 19, 12, 0)


class RecordingEmailSender:
    """Collects outgoing mail instead of talking to SMTP"""

    def __init__(self):
        self.sent = []
        self.fail = False

    async def send(self, to_address: str, subject: str, html_body: str) -> bool:
        if self.fail:
            raise RuntimeError("SMTP relay unreachable")
        self.sent.append({"to": to_address, "subject": subject, "body": html_body})
        return True


@pytest.fixture
async def test_db():
    """Create test database"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest.fixture
def service(test_db, clock, email_sender):
    return ReservationService(test_db, clock=clock, email_sender=email_sender)


@pytest.fixture
async def table_ids(test_db):
    """Three patio tables and five in the main room, 40 seats in total.

    Returns table ids keyed by table number; ids stay readable after the
    session expires its objects.
    """
    layout = [
        (1, 2, "Patio"),
        (2, 4, "Patio"),
        (3, 4, "Patio"),
        (4, 6, "Main"),
        (5, 2, "Main"),
        (6, 4, "Main"),
        (7, 8, "Main"),
        (8, 10, "Main"),
    ]
    tables = {}
    for number, capacity, location in layout:
        table = Table(
            id=uuid4(),
            table_number=number,
            capacity=capacity,
            location=location,
            status=TableStatus.AVAILABLE.value,
            is_active=True,
        )
        test_db.add(table)
        tables[number] = table.id
    await test_db.commit()
    return tables


def _make_user(email: str, role: UserRole) -> User:
    return User(
        id=uuid4(),
        email=email,
        hashed_password="not-a-real-hash",
        full_name=email.split("@")[0].title(),
        role=role,
        is_active=True,
    )


@pytest.fixture
async def test_staff(test_db):
    """Create a floor staff user"""
    user = _make_user("host@example.com", UserRole.STAFF)
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
async def test_manager(test_db):
    """Create a manager user"""
    user = _make_user("manager@example.com", UserRole.MANAGER)
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
async def client(test_db, clock, email_sender):
    """Create test client with overridden database, clock and mailer"""
    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_email_sender] = lambda: email_sender

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def staff_client(client, test_staff):
    """Create staff authenticated test client"""
    from app.api.auth import create_access_token

    token = create_access_token(test_staff)
    client.headers["Authorization"] = f"Bearer {token}"

    return client


@pytest.fixture
async def manager_client(client, test_manager):
    """Create manager authenticated test client"""
    from app.api.auth import create_access_token

    token = create_access_token(test_manager)
    client.headers["Authorization"] = f"Bearer {token}"

    return client
