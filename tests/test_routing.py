from __future__ import annotations

import unittest
from datetime import date, timedelta
from typing import Any

import httpx
from fastapi.testclient import TestClient

from lavon.api.dependencies import get_api_client
from lavon.finance.amortization import compute_monthly_installment
from lavon.main import app


def build_sale_payload(*, sale_id: int = 1, paid: float = 50_000_000, sale_date: date | None = None) -> dict:
    """Create a dictionary shaped like a sale returned by the sales API."""
    return {
        "id": sale_id,
        "price": 500_000_000,
        "payment_amount": paid,
        "cicilan_count": 60,
        "interest_rate": 0,
        "monthly_installment": 7_500_000,
        "sale_date": (sale_date or date.today()).isoformat(),
        "booking_date": (sale_date or date.today()).isoformat(),
        "status": "Process",
        "customer": {"name": "Dewi"},
        "cluster": {"type": "Tipe 45"},
    }


def _status_error(code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "http://sales.test/api/resource")
    return httpx.HTTPStatusError(
        "error", request=request, response=httpx.Response(code, request=request)
    )


class FakeSalesApiClient:
    """Async-friendly stand-in for the remote sales API client."""

    def __init__(self) -> None:
        self.user: dict[str, Any] = {"id": 1, "name": "Admin", "role": "admin"}
        self.sales: dict[int, dict] = {}
        self.payments: list[tuple[int, float, float | None]] = []
        self.error: Exception | None = None

    async def get_current_user(self) -> dict[str, Any]:
        if self.error:
            raise self.error
        return self.user

    async def get_sale(self, sale_id: int) -> dict:
        if self.error:
            raise self.error
        if sale_id not in self.sales:
            raise _status_error(404)
        return self.sales[sale_id]

    async def list_sales(self, *, page: int = 1, search=None, status=None) -> dict:
        return {"data": list(self.sales.values()), "last_page": 1}

    async def add_payment(self, sale_id: int, *, amount: float, price: float | None = None) -> dict:
        self.payments.append((sale_id, amount, price))
        sale = dict(self.sales[sale_id])
        sale["payment_amount"] += amount
        return sale


class RoutingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.fake = FakeSalesApiClient()
        app.dependency_overrides[get_api_client] = lambda: self.fake
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def test_healthcheck(self) -> None:
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok"})

    def test_quote_cash_bertahap(self) -> None:
        response = self.client.post(
            "/api/installments/quote",
            json={"price": 500_000_000, "deposit": 50_000_000, "installment_count": 60},
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["method"], "cash_bertahap")
        self.assertAlmostEqual(body["monthly_installment"], 7_500_000)
        self.assertEqual(body["monthly_installment_display"], "Rp 7.500.000")
        self.assertEqual(body["remaining_balance_display"], "Rp 450.000.000")

    def test_quote_kpr_uses_configured_booking_fee(self) -> None:
        response = self.client.post(
            "/api/installments/quote",
            json={"price": 500_000_000, "payment_method": "kpr"},
        )

        body = response.json()
        self.assertEqual(body["booking_fee"], 10_000_000)
        self.assertAlmostEqual(body["down_payment"], 50_000_000)
        self.assertAlmostEqual(body["bank_loan"], 450_000_000)
        self.assertEqual(body["monthly_installment"], 0)

    def test_quote_accepts_rate_close_to_zero(self) -> None:
        response = self.client.post(
            "/api/installments/quote",
            json={
                "price": 500_000_000,
                "deposit": 50_000_000,
                "installment_count": 60,
                "interest_rate": 1e-13,
            },
        )

        self.assertEqual(response.status_code, 200)
        self.assertGreaterEqual(response.json()["monthly_installment"], 7_500_000)
        self.assertEqual(response.json()["monthly_installment_display"], "Rp 7.500.000")

    def test_quote_rejects_negative_price(self) -> None:
        response = self.client.post("/api/installments/quote", json={"price": -1})
        self.assertEqual(response.status_code, 422)

    def test_schedule_and_principal_recovery(self) -> None:
        schedule = self.client.post(
            "/api/installments/schedule",
            json={"price": 500_000_000, "deposit": 50_000_000, "installment_count": 60, "interest_rate": 10},
        ).json()
        self.assertEqual(len(schedule["rows"]), 60)
        self.assertEqual(schedule["rows"][-1]["balance"], 0)

        recovered = self.client.post(
            "/api/installments/principal",
            json={
                "monthly_installment": schedule["monthly_installment"],
                "installment_count": 60,
                "interest_rate": 10,
            },
        ).json()
        self.assertAlmostEqual(recovered["initial_principal"], 450_000_000, places=2)

    def test_sale_status_overdue(self) -> None:
        response = self.client.post(
            "/api/sales/status",
            json={
                "price": 1_200_000,
                "payment_amount": 100_000,
                "cicilan_count": 12,
                "monthly_installment": 100_000,
                "sale_date": "2025-01-31",
                "today": "2025-05-01",
            },
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "Overdue")
        self.assertEqual(body["next_due_date"], "2025-03-31")
        self.assertEqual(body["overdue_installments"], 2)

    def test_sale_status_paid(self) -> None:
        body = self.client.post(
            "/api/sales/status",
            json={"price": 1_000, "payment_amount": 1_000, "today": "2030-01-01"},
        ).json()
        self.assertEqual(body["status"], "Paid")

    def test_payment_preview(self) -> None:
        response = self.client.post(
            "/api/sales/payment-preview",
            json={
                "price": 500_000_000,
                "payment_amount": 495_000_000,
                "cicilan_count": 60,
                "monthly_installment": 7_500_000,
                "add_payment": 7_500_000,
            },
        )

        body = response.json()
        self.assertTrue(body["paid_off"])
        self.assertEqual(body["remaining_balance"], 0)
        self.assertEqual(body["remaining_balance_display"], "PAID OFF")
        self.assertEqual(body["total_paid"], 502_500_000)

    def test_payment_preview_requires_positive_amount(self) -> None:
        response = self.client.post(
            "/api/sales/payment-preview", json={"price": 1_000, "add_payment": 0}
        )
        self.assertEqual(response.status_code, 422)

    def test_menu_for_role(self) -> None:
        body = self.client.get("/api/menu/finance").json()

        self.assertEqual(body["role"], "finance")
        self.assertFalse(body["can_create_sales"])
        titles = [item["title"] for section in body["sections"] for item in section["items"]]
        self.assertIn("History Payment", titles)
        self.assertNotIn("Create New Sales", titles)

    def test_menu_for_current_user(self) -> None:
        self.fake.user = {"id": 4, "name": "Sari", "role": "sales"}

        body = self.client.get("/api/menu").json()

        self.assertEqual(body["role"], "sales")
        self.assertTrue(body["can_create_sales"])

    def test_menu_rejected_token(self) -> None:
        self.fake.error = _status_error(401)

        response = self.client.get("/api/menu")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.headers["www-authenticate"], "Bearer")

    def test_menu_requires_token(self) -> None:
        app.dependency_overrides.clear()
        response = self.client.get("/api/menu")
        self.assertEqual(response.status_code, 401)

    def test_sale_summary(self) -> None:
        start = date.today() - timedelta(days=100)
        self.fake.sales[1] = build_sale_payload(sale_date=start)

        response = self.client.get("/api/sales/1/summary")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["customer_name"], "Dewi")
        self.assertEqual(body["cluster_type"], "Tipe 45")
        self.assertEqual(body["remaining_balance"], 450_000_000)
        self.assertAlmostEqual(
            body["monthly_installment"], compute_monthly_installment(500_000_000, 50_000_000, 60, 0)
        )
        self.assertEqual(body["payment_status_info"]["status"], "Overdue")

    def test_sale_summary_not_found(self) -> None:
        response = self.client.get("/api/sales/42/summary")
        self.assertEqual(response.status_code, 404)

    def test_sale_summary_remote_unavailable(self) -> None:
        self.fake.error = httpx.ConnectError("boom")
        response = self.client.get("/api/sales/1/summary")
        self.assertEqual(response.status_code, 502)

    def test_add_payment_forwards_to_sales_api(self) -> None:
        self.fake.sales[1] = build_sale_payload(paid=492_500_000)

        response = self.client.post("/api/sales/1/payments", json={"amount": 7_500_000})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.fake.payments, [(1, 7_500_000, None)])
        body = response.json()
        self.assertTrue(body["paid_off"])
        self.assertEqual(body["status"], "Paid")

    def test_list_sales(self) -> None:
        self.fake.sales[1] = build_sale_payload(sale_id=1)
        self.fake.sales[2] = build_sale_payload(sale_id=2, paid=500_000_000)

        body = self.client.get("/api/sales").json()

        self.assertEqual([sale["id"] for sale in body], [1, 2])
        self.assertEqual(body[1]["payment_status_info"]["status"], "Paid")

    def test_commission_report(self) -> None:
        response = self.client.post(
            "/api/reports/commissions",
            json={
                "year": 2025,
                "month": 3,
                "sales": [
                    {"marketer_id": 1, "marketer_name": "Ayu", "price": 500_000_000, "sale_date": "2025-03-02"},
                    {"marketer_id": 1, "marketer_name": "Ayu", "price": 100_000_000, "sale_date": "2025-04-02"},
                ],
            },
        )

        rows = response.json()
        self.assertEqual(len(rows), 1)
        self.assertAlmostEqual(rows[0]["commission"], 6_000_000)

    def test_rankings_and_summary(self) -> None:
        sales = [
            {"marketer_id": 1, "marketer_name": "Ayu", "price": 100, "sale_date": "2025-03-02", "customer_id": 5},
            {"marketer_id": 2, "marketer_name": "Budi", "price": 300, "sale_date": "2025-02-02", "customer_id": 6},
        ]
        rankings = self.client.post("/api/reports/rankings", json={"sales": sales}).json()
        self.assertEqual(rankings[0]["name"], "Budi")

        summary = self.client.post(
            "/api/reports/summary", json={"sales": sales, "today": "2025-03-10"}
        ).json()
        self.assertEqual(summary["total_customers"], 2)
        self.assertAlmostEqual(summary["monthly_growth_rate"], -66.66666666666667)
