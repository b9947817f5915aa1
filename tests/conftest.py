from datetime import datetime, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from services.readiness_engine.loader import load_catalog_data, load_catalog_from_file
from src.db.models import Base
from src.schemas.readiness import AnswerDetail, AnswerGroup, ReportData, UserInfo
from services.readiness_engine.models import ReadinessMetric

# Use in-memory SQLite for testing; StaticPool keeps one connection so every
# session sees the same database.
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

SMALL_CATALOG = {
    "version": "test-1",
    "released_at": "2025-01-01",
    "categories": [
        {
            "id": 1,
            "name": "Alpha",
            "themes": [
                {"title": "A1", "left": "Alpha left one", "right": "Alpha right one"},
                {"title": "A2", "left": "Alpha left two", "right": "Alpha right two"},
                {"title": "A3", "left": "Alpha left three", "right": "Alpha right three"},
            ],
        },
        {
            "id": 2,
            "name": "Beta",
            "themes": [
                {"title": "B1", "left": "Beta left one", "right": "Beta right one"},
                {"title": "B2", "left": "Beta left two", "right": "Beta right two"},
            ],
        },
    ],
}


@pytest.fixture(scope="session")
def catalog():
    """The bundled production catalog."""
    return load_catalog_from_file()


@pytest.fixture
def small_catalog():
    return load_catalog_data(SMALL_CATALOG)


@pytest.fixture
def report_data():
    """A complete report payload with respondent details and answer summaries."""
    return ReportData(
        totals=[
            ReadinessMetric(name="Strategic Vision & Value", sum=4, readiness=83, status="Leading"),
            ReadinessMetric(name="Leadership & Accountability", sum=-2, readiness=33, status="At Risk"),
            ReadinessMetric(name="Governance & Compliance (AIMS)", sum=-6, readiness=0, status="Critical"),
        ],
        avg=39,
        user_info=UserInfo(first_name="Ada", last_name="Lovelace", email="ada@example.com", company="Analytical Engines Ltd"),
        created_at=datetime(2025, 3, 4, 9, 7, tzinfo=timezone.utc),
        answers=[
            AnswerGroup(
                enabler_name="Strategic Vision & Value",
                questions=[
                    AnswerDetail(
                        title="Purpose & Alignment",
                        left="AI initiatives are tied to defined business outcomes and approved KPIs.",
                        right="AI initiatives are launched without clear purpose or success criteria.",
                        selection_label="Closer to the left-hand statement — Always true",
                        selection_text="AI initiatives are tied to defined business outcomes and approved KPIs.",
                    )
                ],
            )
        ],
    )


@pytest.fixture
def minimal_report_data():
    """Totals and average only; every optional section is left out."""
    return ReportData(
        totals=[ReadinessMetric(name="Strategic Vision & Value", sum=0, readiness=50, status="Established")],
        avg=50,
    )


# --- Database fixtures ---

@pytest_asyncio.fixture
async def test_engine():
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(test_session_factory):
    """Provides a clean database session for each test function."""
    async with test_session_factory() as session:
        yield session
