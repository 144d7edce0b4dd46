"""
HTTP tests for /api/productionorders and /api/productionmetrics, including the
error envelope produced by the global exception handlers.
"""

from datetime import datetime, timedelta

import pytest

from src.db.base import utcnow

BASE = "/api/productionorders"


def _q(dt):
    return dt.isoformat()


class TestHealth:
    async def test_health(self, client):
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json()["message"] == "Healthy"
        assert resp.headers["X-Correlation-ID"]

    async def test_correlation_id_is_echoed(self, client):
        resp = await client.get("/api/health", headers={"X-Correlation-ID": "abc-123"})
        assert resp.headers["X-Correlation-ID"] == "abc-123"


class TestOrderReads:
    async def test_list(self, client):
        resp = await client.get(BASE)
        assert resp.status_code == 200
        assert len(resp.json()) == 3

    async def test_get_uses_camel_case_and_enum_values(self, client):
        resp = await client.get(f"{BASE}/1")
        assert resp.status_code == 200
        body = resp.json()
        assert body["orderNumber"] == "TST-001"
        assert body["status"] == 5
        assert body["priority"] == 2
        assert body["quantityCompleted"] == 10

    async def test_get_missing_is_404_envelope(self, client):
        resp = await client.get(f"{BASE}/999")
        assert resp.status_code == 404
        body = resp.json()
        assert body["status"] == 404
        assert body["error"]["type"] == "http_error"
        assert "999" in body["error"]["message"]
        assert body["path"] == f"{BASE}/999"
        assert body["method"] == "GET"

    async def test_by_number(self, client):
        resp = await client.get(f"{BASE}/by-number/TST-002")
        assert resp.status_code == 200
        assert resp.json()["id"] == 2
        assert (await client.get(f"{BASE}/by-number/NOPE")).status_code == 404

    async def test_by_facility(self, client):
        resp = await client.get(f"{BASE}/facility/1")
        assert [o["orderNumber"] for o in resp.json()] == ["TST-001", "TST-003", "TST-002"]

    @pytest.mark.parametrize("value", ["3", "InProgress", "inprogress"])
    async def test_by_status_value_or_name(self, client, value):
        resp = await client.get(f"{BASE}/status/{value}")
        assert resp.status_code == 200
        assert {o["orderNumber"] for o in resp.json()} == {"TST-002", "TST-003"}

    async def test_by_status_unknown_is_400(self, client):
        resp = await client.get(f"{BASE}/status/Exploded")
        assert resp.status_code == 400

    async def test_date_range(self, client, now):
        resp = await client.get(
            f"{BASE}/date-range",
            params={"startDate": _q(now - timedelta(days=9)), "endDate": _q(now + timedelta(days=5))},
        )
        assert resp.status_code == 200
        assert [o["orderNumber"] for o in resp.json()] == ["TST-003", "TST-002"]

    async def test_date_range_inverted_is_400(self, client, now):
        resp = await client.get(
            f"{BASE}/date-range",
            params={"startDate": _q(now), "endDate": _q(now - timedelta(days=1))},
        )
        assert resp.status_code == 400

    async def test_date_range_missing_param_is_400(self, client):
        resp = await client.get(f"{BASE}/date-range")
        assert resp.status_code == 400
        assert resp.json()["error"]["type"] == "validation_error"

    async def test_critical_and_delayed(self, client):
        critical = await client.get(f"{BASE}/critical")
        delayed = await client.get(f"{BASE}/delayed")
        assert [o["orderNumber"] for o in critical.json()] == ["TST-003", "TST-002"]
        assert [o["orderNumber"] for o in delayed.json()] == ["TST-003"]

    async def test_efficiency(self, client):
        resp = await client.get(f"{BASE}/1/efficiency")
        assert resp.status_code == 200
        assert resp.json()["efficiencyRating"] == pytest.approx(109.72, abs=0.01)
        assert (await client.get(f"{BASE}/999/efficiency")).json()["efficiencyRating"] == 0

    async def test_analytics(self, client, now):
        resp = await client.get(
            f"{BASE}/analytics",
            params={
                "facilityId": 1,
                "startDate": _q(now - timedelta(days=20)),
                "endDate": _q(now),
            },
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["totalOrders"] == 3
        assert body["completedOrders"] == 1
        assert body["totalProductionCost"] == pytest.approx(113000)
        assert body["ordersByStatus"] == {"Completed": 1, "InProgress": 2}

    async def test_analytics_inverted_range_is_400(self, client, now):
        resp = await client.get(
            f"{BASE}/analytics",
            params={"facilityId": 1, "startDate": _q(now), "endDate": _q(now - timedelta(days=3))},
        )
        assert resp.status_code == 400


class TestOrderWrites:
    async def test_create_generates_number(self, client, order_payload):
        resp = await client.post(BASE, json=order_payload)
        assert resp.status_code == 201
        body = resp.json()
        assert body["orderNumber"] == f"TST-{utcnow():%Y%m%d}-001"
        assert body["materialType"] == 4
        assert resp.headers["Location"].endswith(f"/api/productionorders/{body['id']}")

    async def test_create_accepts_snake_case_and_aware_dates(self, client, now):
        payload = {
            "part_number": "SNAKE-1",
            "quantity": 2,
            "scheduled_start_date": "2030-01-01T10:00:00+02:00",
            "scheduled_end_date": "2030-01-02T10:00:00+02:00",
            "facility_id": 1,
            "customer_name": "Snake Co",
        }
        resp = await client.post(BASE, json=payload)
        assert resp.status_code == 201
        assert resp.json()["scheduledStartDate"] == "2030-01-01T08:00:00"

    async def test_create_missing_fields_is_400(self, client):
        resp = await client.post(BASE, json={"partNumber": "X"})
        assert resp.status_code == 400
        body = resp.json()
        assert body["error"]["type"] == "validation_error"
        assert body["error"]["details"]

    async def test_create_inverted_schedule_is_400(self, client, order_payload):
        order_payload["scheduledEndDate"], order_payload["scheduledStartDate"] = (
            order_payload["scheduledStartDate"],
            order_payload["scheduledEndDate"],
        )
        resp = await client.post(BASE, json=order_payload)
        assert resp.status_code == 400

    async def test_create_unknown_enum_name_is_400(self, client, order_payload):
        order_payload["priority"] = "Urgent"
        resp = await client.post(BASE, json=order_payload)
        assert resp.status_code == 400

    async def test_create_duplicate_number_is_500(self, client, order_payload):
        order_payload["orderNumber"] = "TST-001"
        resp = await client.post(BASE, json=order_payload)
        assert resp.status_code == 500
        body = resp.json()
        assert body["error"]["type"] == "internal_error"
        assert "TST-001" not in body["error"]["message"]

    async def test_create_unknown_facility_is_500(self, client, order_payload):
        order_payload["facilityId"] = 77
        resp = await client.post(BASE, json=order_payload)
        assert resp.status_code == 500

    async def test_update(self, client, order_payload):
        payload = dict(order_payload, id=2, orderNumber="TST-002", quantity=9)
        resp = await client.put(f"{BASE}/2", json=payload)
        assert resp.status_code == 200
        assert resp.json()["quantity"] == 9
        assert resp.json()["orderNumber"] == "TST-002"

    async def test_update_id_mismatch_is_400(self, client, order_payload):
        resp = await client.put(f"{BASE}/2", json=dict(order_payload, id=3))
        assert resp.status_code == 400

    async def test_update_missing_is_404(self, client, order_payload):
        resp = await client.put(f"{BASE}/999", json=dict(order_payload, id=999))
        assert resp.status_code == 404

    async def test_delete(self, client):
        assert (await client.delete(f"{BASE}/1")).status_code == 204
        assert (await client.get(f"{BASE}/1")).status_code == 404
        assert (await client.delete(f"{BASE}/1")).status_code == 404


class TestStatusPatch:
    @pytest.mark.parametrize("body", [5, "Completed", {"status": "completed"}, {"status": 5}])
    async def test_completed_variants(self, client, body):
        resp = await client.patch(f"{BASE}/2/status", json=body)
        assert resp.status_code == 204
        order = (await client.get(f"{BASE}/2")).json()
        assert order["status"] == 5
        assert order["actualEndDate"] is not None
        assert order["quantityCompleted"] == order["quantity"]

    async def test_missing_order_is_404(self, client):
        resp = await client.patch(f"{BASE}/999/status", json="OnHold")
        assert resp.status_code == 404

    async def test_bad_status_is_400(self, client):
        resp = await client.patch(f"{BASE}/2/status", json={"status": "Exploded"})
        assert resp.status_code == 400


class TestOptimize:
    async def test_optimize_reports_success(self, client):
        await client.patch(f"{BASE}/2/status", json="Planned")
        await client.patch(f"{BASE}/3/status", json="Planned")
        resp = await client.post(f"{BASE}/facility/1/optimize-schedule")
        assert resp.status_code == 200
        assert resp.json()["message"] == "Production schedule optimized successfully"

        high = (await client.get(f"{BASE}/2")).json()
        critical = (await client.get(f"{BASE}/3")).json()
        assert datetime.fromisoformat(high["scheduledStartDate"]) < datetime.fromisoformat(
            critical["scheduledStartDate"]
        )


class TestMetrics:
    async def _create(self, client, **overrides):
        payload = {
            "productionOrderId": 1,
            "type": "CycleTime",
            "metricName": "Pour cycle",
            "value": 42.5,
            "unit": "min",
            "targetValue": 40,
            "minValue": 35,
            "maxValue": 45,
        }
        payload.update(overrides)
        return await client.post("/api/productionmetrics", json=payload)

    async def test_crud(self, client):
        created = await self._create(client)
        assert created.status_code == 201
        metric = created.json()
        assert metric["type"] == 1
        assert metric["measuredDate"]

        listed = await client.get("/api/productionmetrics", params={"productionOrderId": 1})
        assert [m["id"] for m in listed.json()] == [metric["id"]]

        replaced = await client.put(
            f"/api/productionmetrics/{metric['id']}",
            json={"productionOrderId": 1, "type": 2, "metricName": "Yield", "value": 97},
        )
        assert replaced.status_code == 200
        assert replaced.json()["metricName"] == "Yield"
        assert replaced.json()["measuredDate"] == metric["measuredDate"]

        assert (await client.delete(f"/api/productionmetrics/{metric['id']}")).status_code == 204
        assert (await client.get(f"/api/productionmetrics/{metric['id']}")).status_code == 404

    async def test_filter_by_type(self, client):
        await self._create(client)
        await self._create(client, type="ScrapRate", metricName="Scrap")
        resp = await client.get("/api/productionmetrics", params={"type": "ScrapRate"})
        assert [m["metricName"] for m in resp.json()] == ["Scrap"]

    async def test_metrics_removed_with_order(self, client):
        metric = (await self._create(client)).json()
        assert (await client.delete(f"{BASE}/1")).status_code == 204
        assert (await client.get(f"/api/productionmetrics/{metric['id']}")).status_code == 404
