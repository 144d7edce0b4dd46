"""
Tests for the Alembic schema revision and the demo data seed.
"""

from alembic.autogenerate import compare_metadata
from alembic.migration import MigrationContext
from sqlalchemy import create_engine, func, inspect, select

from src.db import run_migrations
from src.db.base import Base
from src.db.models.equipment import Equipment
from src.db.models.production import ProductionOrder
from src.db.seed import SEED_FACILITY_CODE, seed_session


# ============================================================================
# Migrations
# ============================================================================

class TestMigrations:
    def test_upgrade_head_matches_models(self, tmp_path, monkeypatch):
        db_file = tmp_path / "oms.db"
        monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")

        run_migrations.main(["upgrade", "head"])

        engine = create_engine(f"sqlite:///{db_file}")
        try:
            with engine.connect() as conn:
                ctx = MigrationContext.configure(conn, opts={"compare_type": True})
                assert compare_metadata(ctx, Base.metadata) == []

                fks = {
                    fk["referred_table"]: fk["options"].get("ondelete")
                    for fk in inspect(conn).get_foreign_keys("quality_inspections")
                }
                assert fks == {"production_orders": "RESTRICT", "facilities": "RESTRICT"}
                cascade = inspect(conn).get_foreign_keys("quality_documents")
                assert [fk["options"].get("ondelete") for fk in cascade] == ["CASCADE"]
        finally:
            engine.dispose()

    def test_downgrade_base_drops_tables(self, tmp_path, monkeypatch):
        db_file = tmp_path / "oms.db"
        monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")

        run_migrations.main(["upgrade", "head"])
        run_migrations.main(["downgrade", "base"])

        engine = create_engine(f"sqlite:///{db_file}")
        try:
            with engine.connect() as conn:
                assert set(inspect(conn).get_table_names()) <= {"alembic_version"}
        finally:
            engine.dispose()


# ============================================================================
# Seed
# ============================================================================

class TestSeed:
    async def test_seed_is_idempotent(self, session_maker):
        async with session_maker() as s:
            assert await seed_session(s) is True
        async with session_maker() as s:
            assert await seed_session(s) is False

        async with session_maker() as s:
            orders = await s.scalar(
                select(func.count(ProductionOrder.id)).where(
                    ProductionOrder.order_number.like(f"{SEED_FACILITY_CODE}-%")
                )
            )
            equipment = await s.scalar(select(func.count(Equipment.id)))
        assert orders == 3
        assert equipment == 2
