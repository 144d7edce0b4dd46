"""
Database seeding utilities for demo data.

Seeds:
- Facility PCC (investment casting plant)
- Three production orders in different lifecycle states
- Two pieces of equipment at the facility

Seeding is idempotent: nothing is inserted when the facility code already exists.

Usage:
  python -m src.db.run_migrations upgrade head
  python -m src.db.seed
"""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.db.base import utcnow
from src.db.models.enums import (
    EquipmentStatus,
    EquipmentType,
    FacilityType,
    MaterialType,
    Priority,
    ProductionStatus,
)
from src.db.models.equipment import Equipment
from src.db.models.master_data import Facility
from src.db.models.production import ProductionOrder
from src.db.session import get_async_session
from src.repositories.master_data import FacilityRepository

logger = logging.getLogger(__name__)

SEED_FACILITY_CODE = "PCC"


# PUBLIC_INTERFACE
async def seed_all() -> None:
    """
    Seed the database with a demo facility, its orders and its equipment.
    """
    async for session in get_async_session():
        await seed_session(session)


# PUBLIC_INTERFACE
async def seed_session(session: AsyncSession) -> bool:
    """Seed using an existing session. Returns False when the data is already present."""
    repo = FacilityRepository(session)
    if await repo.get_by_code(SEED_FACILITY_CODE) is not None:
        logger.info("Seed facility %s already present; skipping", SEED_FACILITY_CODE)
        return False

    facility = Facility(
        name="Precision Castparts Plant",
        code=SEED_FACILITY_CODE,
        address="4650 SW Macadam Ave",
        city="Portland",
        state="OR",
        country="USA",
        type=FacilityType.InvestmentCasting,
        is_active=True,
    )
    await repo.add(facility)
    await session.flush()

    now = utcnow()
    stamp = f"{now:%Y%m%d}"
    orders = [
        ProductionOrder(
            order_number=f"{SEED_FACILITY_CODE}-{stamp}-001",
            part_number="TB-1001",
            part_description="HPT turbine blade, single crystal",
            quantity=250,
            quantity_completed=0,
            status=ProductionStatus.Planned,
            priority=Priority.High,
            scheduled_start_date=now + timedelta(days=2),
            scheduled_end_date=now + timedelta(days=9),
            facility_id=facility.id,
            customer_name="Aero Engines Inc.",
            customer_order_number="AEI-55012",
            material_type=MaterialType.NickelAlloy,
            estimated_cost=Decimal("125000.00"),
            actual_cost=Decimal("0"),
        ),
        ProductionOrder(
            order_number=f"{SEED_FACILITY_CODE}-{stamp}-002",
            part_number="VN-2040",
            part_description="Nozzle guide vane segment",
            quantity=120,
            quantity_completed=45,
            status=ProductionStatus.InProgress,
            priority=Priority.Critical,
            scheduled_start_date=now - timedelta(days=3),
            scheduled_end_date=now + timedelta(days=4),
            actual_start_date=now - timedelta(days=3),
            facility_id=facility.id,
            customer_name="Rotor Dynamics",
            material_type=MaterialType.SuperAlloy,
            estimated_cost=Decimal("88000.00"),
            actual_cost=Decimal("41000.00"),
        ),
        ProductionOrder(
            order_number=f"{SEED_FACILITY_CODE}-{stamp}-003",
            part_number="CS-0310",
            part_description="Structural casing",
            quantity=40,
            quantity_completed=40,
            status=ProductionStatus.Completed,
            priority=Priority.Medium,
            scheduled_start_date=now - timedelta(days=20),
            scheduled_end_date=now - timedelta(days=12),
            actual_start_date=now - timedelta(days=20),
            actual_end_date=now - timedelta(days=11),
            facility_id=facility.id,
            customer_name="Aero Engines Inc.",
            material_type=MaterialType.TitaniumAlloy,
            estimated_cost=Decimal("56000.00"),
            actual_cost=Decimal("59250.00"),
        ),
    ]
    equipment = [
        Equipment(
            equipment_number=f"{SEED_FACILITY_CODE}-VIM-01",
            name="Vacuum induction furnace 1",
            type=EquipmentType.VacuumFurnace,
            manufacturer="ALD",
            installation_date=now - timedelta(days=3 * 365),
            last_maintenance_date=now - timedelta(days=30),
            next_maintenance_date=now + timedelta(days=60),
            status=EquipmentStatus.InUse,
            facility_id=facility.id,
            purchase_cost=Decimal("2400000.00"),
        ),
        Equipment(
            equipment_number=f"{SEED_FACILITY_CODE}-CMM-01",
            name="Coordinate measuring machine",
            type=EquipmentType.CoordinateMeasuringMachine,
            manufacturer="Zeiss",
            installation_date=now - timedelta(days=400),
            status=EquipmentStatus.Available,
            facility_id=facility.id,
            purchase_cost=Decimal("310000.00"),
        ),
    ]
    await repo.add_all(orders + equipment)
    await repo.commit()
    logger.info(
        "Seeded facility %s with %d orders and %d equipment", SEED_FACILITY_CODE, len(orders), len(equipment)
    )
    return True


if __name__ == "__main__":
    from src.core.logging import configure_logging

    configure_logging()
    asyncio.run(seed_all())
