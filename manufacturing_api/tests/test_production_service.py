"""
Tests for ProductionOrderService: lifecycle side effects, order numbering,
efficiency, analytics, critical/delayed filters and schedule repacking.
"""

from datetime import timedelta

import pytest

from src.db.base import utcnow
from src.db.models.enums import MaterialType, Priority, ProductionStatus
from src.schemas.production import ProductionOrderCreate, ProductionOrderUpdate
from src.services.production import efficiency_rating


def _new_order(now, **overrides) -> ProductionOrderCreate:
    values = dict(
        part_number="NEW-PART-001",
        part_description="New Test Component",
        quantity=15,
        status=ProductionStatus.Planned,
        priority=Priority.Medium,
        scheduled_start_date=now + timedelta(days=1),
        scheduled_end_date=now + timedelta(days=10),
        facility_id=1,
        customer_name="New Customer",
        material_type=MaterialType.SteelAlloy,
        estimated_cost=85000,
    )
    values.update(overrides)
    return ProductionOrderCreate(**values)


class TestQueries:
    async def test_list_orders_returns_all(self, service):
        orders = await service.list_orders()
        assert len(orders) == 3

    async def test_list_orders_newest_first(self, service):
        orders = await service.list_orders()
        assert [o.order_number for o in orders] == ["TST-002", "TST-003", "TST-001"]

    async def test_get_order_by_id(self, service):
        order = await service.get_order(1)
        assert order is not None
        assert order.order_number == "TST-001"
        assert order.part_number == "TEST-PART-001"

    async def test_get_order_unknown_id(self, service):
        assert await service.get_order(999) is None

    async def test_get_order_by_number(self, service):
        order = await service.get_order_by_number("TST-002")
        assert order is not None
        assert order.id == 2
        assert order.part_number == "TEST-PART-002"

    async def test_list_by_status(self, service):
        orders = await service.list_orders_by_status(ProductionStatus.InProgress)
        assert len(orders) == 2
        assert all(o.status == ProductionStatus.InProgress for o in orders)

    async def test_list_by_facility_ordered_by_scheduled_start(self, service):
        orders = await service.list_orders_by_facility(1)
        assert [o.order_number for o in orders] == ["TST-001", "TST-003", "TST-002"]
        assert await service.list_orders_by_facility(42) == []

    async def test_date_range_requires_whole_window_inside(self, service, now):
        orders = await service.list_orders_by_date_range(now - timedelta(days=9), now + timedelta(days=5))
        assert [o.order_number for o in orders] == ["TST-003", "TST-002"]


class TestCreateAndUpdate:
    async def test_generated_order_number_uses_facility_code(self, service, now):
        created = await service.create_order(_new_order(now))
        assert created.id > 3
        assert created.order_number == f"TST-{utcnow():%Y%m%d}-001"
        assert created.status == ProductionStatus.Planned

    async def test_generated_sequence_counts_todays_orders(self, service, now):
        first = await service.create_order(_new_order(now))
        second = await service.create_order(_new_order(now, part_number="NEW-PART-002"))
        assert first.order_number.endswith("-001")
        assert second.order_number.endswith("-002")

    async def test_supplied_order_number_is_kept(self, service, now):
        created = await service.create_order(_new_order(now, order_number="CUSTOM-42"))
        assert created.order_number == "CUSTOM-42"

    async def test_blank_order_number_is_generated(self, service, now):
        created = await service.create_order(_new_order(now, order_number="   "))
        assert created.order_number.startswith("TST-")

    async def test_update_replaces_fields(self, service, now):
        order = await service.get_order(2)
        payload = ProductionOrderUpdate(
            id=2,
            order_number="TST-002",
            part_number="TEST-PART-002B",
            quantity=7,
            priority=Priority.Low,
            scheduled_start_date=now,
            scheduled_end_date=now + timedelta(days=1),
            facility_id=1,
            customer_name="Renamed Customer",
        )
        updated = await service.update_order(order, payload)
        assert updated.part_number == "TEST-PART-002B"
        assert updated.quantity == 7
        assert updated.priority == Priority.Low
        assert updated.order_number == "TST-002"

    async def test_delete(self, service):
        assert await service.delete_order(1) is True
        assert await service.get_order(1) is None

    async def test_delete_unknown(self, service):
        assert await service.delete_order(999) is False


class TestStatusTransitions:
    async def test_completed_sets_end_date_and_quantity(self, service):
        assert await service.update_order_status(2, ProductionStatus.Completed) is True
        order = await service.get_order(2)
        assert order.status == ProductionStatus.Completed
        assert order.actual_end_date is not None
        assert order.quantity_completed == order.quantity

    async def test_in_progress_keeps_existing_actual_start(self, service, now):
        before = (await service.get_order(2)).actual_start_date
        assert await service.update_order_status(2, ProductionStatus.InProgress) is True
        assert (await service.get_order(2)).actual_start_date == before

    async def test_in_progress_stamps_missing_actual_start(self, service, now):
        created = await service.create_order(_new_order(now))
        assert created.actual_start_date is None
        await service.update_order_status(created.id, ProductionStatus.InProgress)
        order = await service.get_order(created.id)
        assert order.actual_start_date is not None
        assert order.actual_start_date >= now

    @pytest.mark.parametrize(
        "status",
        [
            ProductionStatus.Planned,
            ProductionStatus.InProgress,
            ProductionStatus.OnHold,
            ProductionStatus.Completed,
            ProductionStatus.Shipped,
        ],
    )
    async def test_any_transition_is_allowed(self, service, status):
        assert await service.update_order_status(2, status) is True
        assert (await service.get_order(2)).status == status

    async def test_unknown_order(self, service):
        assert await service.update_order_status(999, ProductionStatus.Completed) is False


class TestEfficiency:
    async def test_completed_order_example(self, service):
        rating = await service.calculate_efficiency_rating(1)
        # time 125%, quantity 100%, cost 50000/48000
        expected = (125.0 + 100.0 + 50000 / 48000 * 100) / 3
        assert rating == pytest.approx(expected, rel=1e-6)
        assert rating == pytest.approx(109.72, abs=0.01)

    async def test_zero_when_actual_end_missing(self, service):
        assert await service.calculate_efficiency_rating(2) == 0

    async def test_zero_for_unknown_order(self, service):
        assert await service.calculate_efficiency_rating(999) == 0

    async def test_zero_actual_duration_raises(self, service):
        order = await service.get_order(2)
        order.actual_end_date = order.actual_start_date
        with pytest.raises(ZeroDivisionError):
            efficiency_rating(order)

    async def test_cost_efficiency_floors_actual_cost_at_one(self, service):
        order = await service.get_order(1)
        order.actual_cost = 0
        order.estimated_cost = 1
        assert efficiency_rating(order) == pytest.approx((125.0 + 100.0 + 100.0) / 3)


class TestAnalytics:
    async def test_counts_and_costs(self, service, now):
        result = await service.get_production_analytics(1, now - timedelta(days=20), now)
        assert result.total_orders == 3
        assert result.completed_orders == 1
        assert result.delayed_orders == 0
        assert result.on_time_delivery_rate == pytest.approx(100 / 3)
        assert result.total_production_cost == pytest.approx(113000)
        assert result.cost_variance == pytest.approx(113000 - 185000)
        assert result.orders_by_status == {"Completed": 1, "InProgress": 2}

    async def test_efficiency_aggregates_only_finished_orders(self, service, now):
        result = await service.get_production_analytics(1, now - timedelta(days=20), now)
        assert result.average_efficiency == pytest.approx(109.72, abs=0.01)
        assert list(result.efficiency_by_part_type) == ["TEST-PART-001"]

    async def test_window_filters_on_creation_date(self, service, now):
        result = await service.get_production_analytics(1, now - timedelta(days=10), now)
        assert result.total_orders == 1
        assert result.orders_by_status == {"InProgress": 1}

    async def test_empty_window(self, service, now):
        result = await service.get_production_analytics(1, now + timedelta(days=1), now + timedelta(days=2))
        assert result.total_orders == 0
        assert result.on_time_delivery_rate == 0
        assert result.orders_by_status == {}

    async def test_on_time_rate_can_go_negative(self, service, session, now):
        for order_id in (2, 3):
            order = await service.get_order(order_id)
            order.actual_end_date = order.scheduled_end_date + timedelta(days=1)
        await session.commit()

        result = await service.get_production_analytics(1, now - timedelta(days=20), now)
        assert result.delayed_orders == 2
        assert result.completed_orders == 1
        assert result.on_time_delivery_rate == pytest.approx(-100 / 3)

    async def test_zero_quantity_order_is_skipped_in_averages(self, service, session, now):
        order = await service.get_order(2)
        order.quantity = 0
        order.actual_end_date = now
        await session.commit()

        result = await service.get_production_analytics(1, now - timedelta(days=20), now)
        assert set(result.efficiency_by_part_type) == {"TEST-PART-001"}


class TestCriticalAndDelayed:
    async def test_critical_includes_every_critical_priority_order(self, service, session, now):
        far = await service.create_order(
            _new_order(
                now,
                priority=Priority.Critical,
                scheduled_start_date=now + timedelta(days=30),
                scheduled_end_date=now + timedelta(days=60),
            )
        )
        critical = await service.get_critical_orders()
        numbers = [o.order_number for o in critical]
        assert "TST-003" in numbers
        assert far.order_number in numbers

    async def test_critical_includes_orders_due_soon(self, service):
        critical = await service.get_critical_orders()
        assert [o.order_number for o in critical] == ["TST-003", "TST-002"]

    async def test_completed_orders_are_not_critical_by_date(self, service):
        critical = await service.get_critical_orders()
        assert all(o.order_number != "TST-001" for o in critical)

    async def test_delayed(self, service):
        delayed = await service.get_delayed_orders()
        assert [o.order_number for o in delayed] == ["TST-003"]
        current = utcnow()
        for order in delayed:
            assert order.status != ProductionStatus.Completed
            assert order.scheduled_end_date < current


class TestScheduleOptimization:
    async def test_repacks_planned_orders(self, service):
        await service.update_order_status(2, ProductionStatus.Planned)
        await service.update_order_status(3, ProductionStatus.Planned)
        durations = {
            o.id: o.scheduled_end_date - o.scheduled_start_date
            for o in await service.list_orders_by_facility(1)
        }
        start = utcnow()

        assert await service.optimize_production_schedule(1) is True

        high = await service.get_order(2)
        critical = await service.get_order(3)
        for order in (high, critical):
            assert order.scheduled_end_date - order.scheduled_start_date == durations[order.id]

        # priority ascending, then a twelve hour gap
        assert high.scheduled_start_date >= start
        assert critical.scheduled_start_date == high.scheduled_end_date + timedelta(hours=12)

    async def test_starts_non_decreasing_by_priority_then_start(self, service, now):
        await service.update_order_status(2, ProductionStatus.Planned)
        await service.update_order_status(3, ProductionStatus.Planned)
        for priority in (Priority.Low, Priority.Critical, Priority.Low):
            await service.create_order(_new_order(now, priority=priority))

        await service.optimize_production_schedule(1)

        planned = await service.list_orders_by_status(ProductionStatus.Planned)
        assert len(planned) == 5
        keys = [(int(o.priority), o.scheduled_start_date) for o in planned]
        assert keys == sorted(keys)

    async def test_non_planned_orders_untouched(self, service):
        before = (await service.get_order(1)).scheduled_start_date
        await service.optimize_production_schedule(1)
        assert (await service.get_order(1)).scheduled_start_date == before

    async def test_facility_without_planned_orders(self, service):
        assert await service.optimize_production_schedule(42) is True
