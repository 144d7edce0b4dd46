"""
Pytest configuration and fixtures for the order management API test suite.

Every test gets a fresh in-memory SQLite database seeded with facility TST and
three production orders (TST-001 completed, TST-002 in progress, TST-003 in
progress and past due).
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from src.api.main import app
from src.core.deps import get_db_session
from src.db.base import Base, utcnow
from src.db.models.enums import FacilityType, MaterialType, Priority, ProductionStatus
from src.db.models.master_data import Facility
from src.db.models.production import ProductionOrder
from src.db.session import enable_sqlite_foreign_keys, make_session_maker
from src.services.production import ProductionOrderService


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
async def engine():
    """In-memory SQLite engine with foreign keys enforced and the schema created."""
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(eng)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_maker(engine):
    return make_session_maker(engine)


@pytest.fixture
def now():
    """Reference time the seed data is laid out around."""
    return utcnow()


@pytest.fixture
async def seeded(session_maker, now):
    """Seed facility TST and orders TST-001..003."""
    async with session_maker() as s:
        s.add(
            Facility(
                id=1,
                name="Test Facility",
                code="TST",
                type=FacilityType.InvestmentCasting,
                is_active=True,
            )
        )
        await s.flush()
        s.add_all(
            [
                ProductionOrder(
                    id=1,
                    order_number="TST-001",
                    part_number="TEST-PART-001",
                    part_description="Test Aerospace Component",
                    quantity=10,
                    quantity_completed=10,
                    status=ProductionStatus.Completed,
                    priority=Priority.Medium,
                    scheduled_start_date=now - timedelta(days=10),
                    scheduled_end_date=now - timedelta(days=5),
                    actual_start_date=now - timedelta(days=10),
                    actual_end_date=now - timedelta(days=6),
                    facility_id=1,
                    customer_name="Test Customer",
                    material_type=MaterialType.InconelAlloy,
                    estimated_cost=Decimal("50000"),
                    actual_cost=Decimal("48000"),
                    created_date=now - timedelta(days=15),
                ),
                ProductionOrder(
                    id=2,
                    order_number="TST-002",
                    part_number="TEST-PART-002",
                    part_description="Test Engine Component",
                    quantity=5,
                    quantity_completed=0,
                    status=ProductionStatus.InProgress,
                    priority=Priority.High,
                    scheduled_start_date=now - timedelta(days=2),
                    scheduled_end_date=now + timedelta(days=3),
                    actual_start_date=now - timedelta(days=2),
                    facility_id=1,
                    customer_name="Test Customer 2",
                    material_type=MaterialType.TitaniumAlloy,
                    estimated_cost=Decimal("75000"),
                    actual_cost=Decimal("0"),
                    created_date=now - timedelta(days=7),
                ),
                ProductionOrder(
                    id=3,
                    order_number="TST-003",
                    part_number="TEST-PART-003",
                    part_description="Test Delayed Component",
                    quantity=8,
                    quantity_completed=6,
                    status=ProductionStatus.InProgress,
                    priority=Priority.Critical,
                    scheduled_start_date=now - timedelta(days=8),
                    scheduled_end_date=now - timedelta(days=2),
                    actual_start_date=now - timedelta(days=8),
                    facility_id=1,
                    customer_name="Test Customer 3",
                    material_type=MaterialType.NickelAlloy,
                    estimated_cost=Decimal("60000"),
                    actual_cost=Decimal("65000"),
                    created_date=now - timedelta(days=12),
                ),
            ]
        )
        await s.commit()


@pytest.fixture
async def session(session_maker, seeded):
    async with session_maker() as s:
        yield s


@pytest.fixture
def service(session):
    """Production order service with default window/buffer settings."""
    return ProductionOrderService(session, critical_window_days=7, schedule_buffer_hours=12)


# ============================================================================
# HTTP Fixtures
# ============================================================================

@pytest.fixture
async def client(session_maker, seeded):
    """HTTP client against the app with one fresh session per request."""

    async def _override_session():
        async with session_maker() as s:
            yield s

    app.dependency_overrides[get_db_session] = _override_session
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def order_payload(now):
    """Valid create payload (camelCase) for facility 1 without an order number."""
    return {
        "partNumber": "NEW-PART-001",
        "partDescription": "New Test Component",
        "quantity": 15,
        "status": "Planned",
        "priority": "Medium",
        "scheduledStartDate": (now + timedelta(days=1)).isoformat(),
        "scheduledEndDate": (now + timedelta(days=10)).isoformat(),
        "facilityId": 1,
        "customerName": "New Customer",
        "materialType": "SteelAlloy",
        "estimatedCost": 85000,
    }
