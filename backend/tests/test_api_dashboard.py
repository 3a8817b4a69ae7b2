"""Tests for dashboard API endpoints."""

import pytest
from datetime import date
from decimal import Decimal

from app.models import TransactionType, TransactionCategory
from app.schemas.transaction import TransactionCreate


@pytest.fixture
def january(transaction_store, sample_transaction, sample_template):
    """A January with one expense, one salary and a December expense before it."""
    transaction_store.add(TransactionCreate(
        date=date(2025, 1, 1),
        type=TransactionType.income,
        category=TransactionCategory.salary,
        amount=Decimal("3000"),
        description="Salary",
    ))
    transaction_store.add(TransactionCreate(
        date=date(2024, 12, 20),
        type=TransactionType.expense,
        category=TransactionCategory.groceries,
        amount=Decimal("100"),
        description="Market",
    ))


class TestDashboardAPI:
    """Test dashboard endpoints."""

    def test_summary(self, client, january):
        """Totals exclude templates and compare against the previous month."""
        response = client.get("/api/v1/dashboard/summary", params={"month": "2025-01"})
        assert response.status_code == 200
        data = response.json()
        assert data["month"] == "2025-01"
        assert data["total_income"] == 3000.0
        assert data["total_expenses"] == 50.0
        assert data["net"] == 2950.0
        assert data["expenses_by_category"] == [{"category": "Groceries", "amount": 50.0, "percent": 100.0}]
        assert data["income_by_category"][0]["category"] == "Salary"
        assert data["vs_last_month"]["expense_change_pct"] == -50.0
        assert data["vs_last_month"]["income_change_pct"] == 0

    @pytest.mark.parametrize("month", ["2025-13", "January", "2025"])
    def test_summary_bad_month(self, client, month):
        response = client.get("/api/v1/dashboard/summary", params={"month": month})
        assert response.status_code == 422

    def test_yearly(self, client, january):
        """Twelve months, January first."""
        response = client.get("/api/v1/dashboard/yearly", params={"year": 2025})
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 12
        assert data[0] == {"month": "2025-01", "income": 3000.0, "expenses": 50.0, "net": 2950.0}
        assert data[1]["net"] == 0.0

    def test_recent_transactions(self, client, january):
        """Newest first, templates left out."""
        response = client.get("/api/v1/dashboard/recent-transactions", params={"limit": 2})
        assert response.status_code == 200
        data = response.json()
        assert [t["date"] for t in data] == ["2025-01-15", "2025-01-01"]
        assert all(t["description"] != "Monthly salary" for t in data)
