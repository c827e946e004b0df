"""API tests for the availability, rate and pricing routes."""

import pytest

from config import Settings, get_settings
from dependencies import get_availability_service
from main import app
from services.availability_service import AvailabilityService
from tests.conftest import AVAILABILITY_RANGE, LOG_RANGE, FakeReferences, FakeSheets, make_token


class TestAvailabilityRoutes:
     """GET /api/availability and unit lookup."""

     def test_full_catalog(self, client) -> None:
          response = client.get("/api/availability")

          assert response.status_code == 200
          body = response.json()
          assert body["success"] is True
          assert body["total"] == 5
          assert len(body["data"]) == 5
          assert body["data"][0]["unit_id"] == "AGP__AGP-00A__C-Amina_1204"
          # No sort parameter: sheet order
          assert [u["building_unit"] for u in body["data"]] == [
               "C-Amina 1204", "C-Amina 1805", "M 101", "C-Bayani 0301", "C-Amina 0902",
          ]
          assert body["latestLog"] == {
               "date": "August 26, 2025",
               "time": "12:52:09",
               "source_file": "inventory_0826.xlsx",
          }

     def test_filter_and_sort(self, client) -> None:
          response = client.get("/api/availability", params={"unit_type": "2BR", "sort": "priceDesc"})

          labels = [unit["building_unit"] for unit in response.json()["data"]]
          assert labels == ["C-Amina 1204", "C-Bayani 0301"]

     def test_pagination(self, client) -> None:
          body = client.get("/api/availability", params={"page": 2, "page_size": 2}).json()

          assert body["total"] == 5
          assert body["page"] == 2
          assert [u["building_unit"] for u in body["data"]] == ["M 101", "C-Bayani 0301"]

     def test_invalid_sort_is_bad_request(self, client) -> None:
          response = client.get("/api/availability", params={"sort": "cheapest"})

          assert response.status_code == 400
          assert response.json()["success"] is False

     def test_upstream_failure(self, client, sheet_values, fake_references) -> None:
          failing = AvailabilityService(
               FakeSheets(sheet_values, failing=[AVAILABILITY_RANGE]),
               fake_references,
               AVAILABILITY_RANGE,
               LOG_RANGE,
          )
          app.dependency_overrides[get_availability_service] = lambda: failing

          response = client.get("/api/availability")

          assert response.status_code == 500
          assert response.json() == {"success": False, "error": "Failed to fetch data"}

     def test_unit_by_label(self, client) -> None:
          response = client.get("/api/availability/c-amina 1204")

          assert response.status_code == 200
          assert response.json()["data"]["unit_id"] == "AGP__AGP-00A__C-Amina_1204"

     def test_unit_not_found(self, client) -> None:
          response = client.get("/api/availability/Z-9999")

          assert response.status_code == 404
          assert response.json() == {"success": False, "error": "Unit not found"}


class TestSummaryRoute:
     """GET /api/availability/summary (staff only)."""

     def test_requires_token(self, client) -> None:
          response = client.get("/api/availability/summary")

          assert response.status_code == 401
          assert response.json() == {"success": False, "error": "Missing token"}

     def test_rejects_non_staff(self, client) -> None:
          headers = {"Authorization": f"Bearer {make_token('BUYER')}"}
          assert client.get("/api/availability/summary", headers=headers).status_code == 403

     def test_rejects_bad_signature(self, client) -> None:
          headers = {"Authorization": f"Bearer {make_token('AGENT', secret='other')}"}
          assert client.get("/api/availability/summary", headers=headers).status_code == 403

     def test_summary(self, client, staff_headers) -> None:
          response = client.get(
               "/api/availability/summary",
               params={"discount_pct": 5},
               headers=staff_headers,
          )

          assert response.status_code == 200
          body = response.json()
          assert [g["code"] for g in body["groups"]] == ["AGP"]
          items = body["groups"][0]["items"]
          assert [(i["tower_code"], i["unit_type"]) for i in items] == [
               ("AGP-00A", "1BR"),
               ("AGP-00A", "2BR"),
               ("AGP-00B", "2BR"),
          ]
          assert items[1]["sample"]["total_contract_price"] == pytest.approx(2_850_000)
          assert body["latestLog"]["date"] == "August 26, 2025"

     def test_summary_validates_pricing_params(self, client, staff_headers) -> None:
          response = client.get("/api/availability/summary", params={"months_to_pay": 0}, headers=staff_headers)
          assert response.status_code == 400


class TestRateRoute:
     """GET /api/rto-rate."""

     def test_match(self, client, rate_rows) -> None:
          response = client.get("/api/rto-rate", params={"project_code": "agp", "unit_type": "2br", "area": "55"})

          assert response.status_code == 200
          assert response.json() == {
               "eligible": True,
               "project_code": "AGP",
               "unit_type": "2BR",
               "area": 55.0,
               "monthly_rate": 18500.0,
               "memo_ref": "MEMO-2025-014",
               "match": {"area_min": 50.0, "area_max": 60.0},
          }

     def test_not_eligible(self, client, rate_rows) -> None:
          response = client.get("/api/rto-rate", params={"project_code": "AGP", "unit_type": "2BR", "area": 200})

          assert response.status_code == 200
          assert response.json() == {"eligible": False}

     @pytest.mark.parametrize("params", [
          {"unit_type": "2BR", "area": "55"},
          {"project_code": "AGP", "area": "55"},
          {"project_code": "AGP", "unit_type": "2BR"},
          {"project_code": "AGP", "unit_type": "2BR", "area": "fifty"},
     ])
     def test_missing_or_invalid_params(self, client, params) -> None:
          response = client.get("/api/rto-rate", params=params)

          assert response.status_code == 400
          body = response.json()
          assert body["success"] is False
          assert "project_code, unit_type, area" in body["error"]


class TestPricingRoutes:
     """POST /api/pricing and POST /api/pricing/{unit_id}."""

     def test_requires_staff(self, client) -> None:
          assert client.post("/api/pricing", json={"list_price": 1_000_000}).status_code == 401

     def test_rejects_tokens_without_configured_secret(self, client) -> None:
          app.dependency_overrides[get_settings] = lambda: Settings(jwt_secret="")
          headers = {"Authorization": f"Bearer {make_token('MANAGER', secret='')}"}

          response = client.post("/api/pricing", json={"list_price": 1_000_000}, headers=headers)

          assert response.status_code == 403
          assert response.json() == {"success": False, "error": "Invalid token"}
          assert client.get("/api/availability/summary", headers=headers).status_code == 403

     def test_compute(self, client, staff_headers) -> None:
          payload = {
               "list_price": 3_000_000,
               "inputs": {
                    "discount_pct": 5,
                    "down_payment_pct": 20,
                    "months_to_pay": 36,
                    "reservation_fee": 20_000,
                    "closing_fee_pct": 10.5,
                    "rate_15yr": 6,
                    "rate_20yr": 6,
               },
          }
          response = client.post("/api/pricing", json=payload, headers=staff_headers)

          assert response.status_code == 200
          body = response.json()
          assert body["result"]["total_contract_price"] == pytest.approx(2_850_000)
          assert body["result"]["net_down_payment"] == pytest.approx(550_000)
          assert body["result"]["bank_financed_balance"] == pytest.approx(2_280_000)
          assert body["valid_until"].startswith("VALID UNTIL: ")

     def test_compute_with_default_inputs(self, client, staff_headers) -> None:
          body = client.post("/api/pricing", json={"list_price": 1_000_000}, headers=staff_headers).json()

          assert body["inputs"]["months_to_pay"] == 36
          assert body["result"]["down_payment_monthly"] == pytest.approx(5_000)

     def test_rejects_invalid_inputs(self, client, staff_headers) -> None:
          payload = {"list_price": 1_000_000, "inputs": {"months_to_pay": 0}}
          response = client.post("/api/pricing", json=payload, headers=staff_headers)

          assert response.status_code == 400
          assert response.json() == {"success": False, "error": "Invalid request parameters"}

     def test_unit_by_canonical_id(self, client, staff_headers) -> None:
          response = client.post(
               "/api/pricing/AGP__AGP-00A__C-Amina_1204",
               json={"discount_pct": 5},
               headers=staff_headers,
          )

          assert response.status_code == 200
          body = response.json()
          assert body["unit"]["building_unit"] == "C-Amina 1204"
          assert body["list_price"] == 3_000_000
          assert body["result"]["total_contract_price"] == pytest.approx(2_850_000)

     def test_unit_by_legacy_id_without_body(self, client, staff_headers) -> None:
          response = client.post("/api/pricing/AGP-C-Amina_1805", headers=staff_headers)

          assert response.status_code == 200
          assert response.json()["inputs"]["down_payment_pct"] == 20

     def test_unknown_unit(self, client, staff_headers) -> None:
          response = client.post("/api/pricing/AGP__AGP-00A__C-Amina_9999", headers=staff_headers)

          assert response.status_code == 404
          assert response.json() == {"success": False, "error": "Unit not found"}


def test_unknown_route(client) -> None:
     response = client.get("/api/nothing-here")

     assert response.status_code == 404
     assert response.json() == {"success": False, "error": "Route not found"}
