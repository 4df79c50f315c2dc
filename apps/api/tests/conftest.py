"""
Shared test fixtures.

Integration tests run against a throwaway SQLite database (aiosqlite) created
per test from the ORM metadata. The environment is pinned before any
wil_api module is imported so settings never point at a real database or
email provider.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["PYTHON_ENV"] = "test"
os.environ.pop("RESEND_API_KEY", None)

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from wil_api.core import rate_limit  # noqa: E402
from wil_api.core.database import get_db, get_session_factory  # noqa: E402
from wil_api.main import app  # noqa: E402
from wil_api.models import Base  # noqa: E402
from wil_api.modules.applications.models import Application, ApplicationStatus  # noqa: E402


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start every test with an empty in-memory rate limit window."""
    rate_limit._memory_store.clear()
    yield
    rate_limit._memory_store.clear()


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.flush = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


# ============================================
# SQLite-backed database
# ============================================


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'wil_test.db'}",
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """HTTP client for the app, wired to the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def application_payload():
    """A complete application form as the frontend submits it."""
    return {
        "province": "KwaZulu-Natal",
        "title": "Mr",
        "initials": "T",
        "surname": "Mkhize",
        "first_names": "Thabo",
        "student_number": "22012345",
        "level_of_study": "3rd Year",
        "race": "African",
        "gender": "Male",
        "email_address": "thabo@students.mut.ac.za",
        "physical_address": "12 Umlazi Road",
        "home_town": "Durban",
        "cell_phone_number": "0821234567",
        "municipality_name": "eThekwini",
        "town_situated": "Durban",
        "contact_person": "Ms Naidoo",
        "contact_email": "naidoo@ethekwini.gov.za",
        "telephone_number": "0311234567",
        "contact_cell_phone": "0837654321",
        "declaration_info_1": "yes",
        "declaration_info_2": "yes",
        "declaration_info_3": "yes",
    }


@pytest.fixture
def make_application(session_factory):
    """Insert an application row directly and return it."""

    async def _make(
        student_number: str = "22012345",
        email_address: str = "thabo@students.mut.ac.za",
        status: ApplicationStatus = ApplicationStatus.PENDING,
        first_names: str = "Thabo",
    ) -> Application:
        async with session_factory() as session:
            application = Application(
                surname="Mkhize",
                first_names=first_names,
                student_number=student_number,
                level_of_study="3rd Year",
                email_address=email_address,
                status=status,
            )
            session.add(application)
            await session.commit()
            return application

    return _make
