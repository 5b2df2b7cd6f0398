"""
API tests for snapshot and price-history endpoints.

Tests cover:
- Create / list / get / delete monthly snapshots
- Refreshing prices before a snapshot
- Net worth change against the previous snapshot
- Price-history table with filters and totals
"""

from decimal import Decimal

from fastapi.testclient import TestClient

from tests.conftest import USER_ID


def _snapshot(client: TestClient, year: int, month: int, **extra) -> dict:
    response = client.post("/snapshots", json={"user_id": USER_ID, "year": year, "month": month, **extra})
    assert response.status_code == 201, response.text
    return response.json()


def _set_price(client: TestClient, asset_id: str, price: str) -> None:
    response = client.put(f"/assets/{asset_id}", json={"current_price": price})
    assert response.status_code == 200


# =============================================================================
# SNAPSHOT TESTS
# =============================================================================


class TestSnapshotsAPI:
    """Tests for /snapshots endpoints."""

    def test_create_snapshot(self, client: TestClient, asset_factory):
        asset_factory(ticker="VWCE.DE", quantity=Decimal("10"), current_price=Decimal("100"))

        data = _snapshot(client, 2025, 3, note="March close")

        assert data["snapshot_id"] == f"{USER_ID}-2025-3"
        assert Decimal(data["total_net_worth"]) == Decimal("1000")
        assert data["by_asset"][0]["ticker"] == "VWCE.DE"
        assert data["note"] == "March close"

    def test_create_snapshot_with_price_refresh(self, client: TestClient, asset_factory):
        asset_factory(ticker="SWDA.MI", quantity=Decimal("2"), current_price=Decimal("90"))

        data = _snapshot(client, 2025, 3, refresh_prices=True)

        assert Decimal(data["by_asset"][0]["price"]) == Decimal("98.15")
        assert Decimal(data["total_net_worth"]) == Decimal("196.30")

    def test_invalid_month_returns_422(self, client: TestClient):
        response = client.post("/snapshots", json={"user_id": USER_ID, "year": 2025, "month": 13})

        assert response.status_code == 422

    def test_list_get_and_delete(self, client: TestClient):
        _snapshot(client, 2025, 2)
        _snapshot(client, 2025, 1)

        listed = client.get("/snapshots", params={"user_id": USER_ID}).json()
        fetched = client.get("/snapshots/2025/2", params={"user_id": USER_ID})
        deleted = client.delete("/snapshots/2025/2", params={"user_id": USER_ID})

        assert [(s["year"], s["month"]) for s in listed["snapshots"]] == [(2025, 1), (2025, 2)]
        assert fetched.status_code == 200
        assert deleted.status_code == 204
        assert client.get("/snapshots/2025/2", params={"user_id": USER_ID}).status_code == 404

    def test_snapshot_reports_monthly_change(self, client: TestClient, asset_factory):
        """
        GIVEN a January snapshot worth 1000
        WHEN the price rises 10% and I snapshot February
        THEN February reports a change of 100 (10%) and January none
        """
        asset = asset_factory(ticker="VWCE.DE", quantity=Decimal("10"), current_price=Decimal("100"))
        january = _snapshot(client, 2025, 1)
        _set_price(client, asset.asset_id, "110")

        february = _snapshot(client, 2025, 2)
        fetched = client.get("/snapshots/2025/2", params={"user_id": USER_ID}).json()

        assert Decimal(january["monthly_change"]["value"]) == Decimal("0")
        assert Decimal(february["monthly_change"]["value"]) == Decimal("100.00")
        assert Decimal(february["monthly_change"]["percentage"]) == Decimal("10.00")
        assert fetched["monthly_change"] == february["monthly_change"]


# =============================================================================
# PRICE HISTORY TESTS
# =============================================================================


class TestPriceHistoryAPI:
    """Tests for GET /history/prices."""

    def test_price_history_table(self, client: TestClient, asset_factory):
        """
        GIVEN snapshots where an ETF goes 100 -> 120 -> 90
        WHEN I GET /history/prices
        THEN cells are colored green then red with percentage changes
        """
        etf = asset_factory(ticker="VWCE.DE", quantity=Decimal("1"), current_price=Decimal("100"))
        _snapshot(client, 2024, 12)
        _set_price(client, etf.asset_id, "120")
        _snapshot(client, 2025, 1)
        _set_price(client, etf.asset_id, "90")
        _snapshot(client, 2025, 2)

        response = client.get("/history/prices", params={"user_id": USER_ID, "include_total": True})

        assert response.status_code == 200
        data = response.json()
        assert [c["label"] for c in data["month_columns"]] == ["12/24", "01/25", "02/25"]
        row = data["assets"][0]
        assert row["months"]["2024-12"]["color"] == "neutral"
        assert row["months"]["2025-1"]["color"] == "green"
        assert Decimal(row["months"]["2025-1"]["change"]) == Decimal("20.00")
        assert row["months"]["2025-2"]["color"] == "red"
        assert Decimal(row["from_start_change"]) == Decimal("-10.00")
        assert data["total_row"]["months"]["2025-2"]["color"] == "red"

    def test_deleted_asset_is_flagged(self, client: TestClient, asset_factory):
        etf = asset_factory(ticker="VWCE.DE", current_price=Decimal("100"))
        _snapshot(client, 2025, 1)
        client.delete(f"/assets/{etf.asset_id}")

        data = client.get("/history/prices", params={"user_id": USER_ID}).json()

        assert data["assets"][0]["is_deleted"] is True
        assert data["total_row"] is None

    def test_year_filter(self, client: TestClient):
        _snapshot(client, 2024, 12)
        _snapshot(client, 2025, 1)

        data = client.get("/history/prices", params={"user_id": USER_ID, "year": 2025}).json()

        assert [c["key"] for c in data["month_columns"]] == ["2025-1"]

    def test_start_filter_needs_both_parts(self, client: TestClient):
        response = client.get("/history/prices", params={"user_id": USER_ID, "start_year": 2025})

        assert response.status_code == 400

    def test_total_value_mode(self, client: TestClient, asset_factory):
        asset_factory(ticker="AAPL", quantity=Decimal("3"), current_price=Decimal("10"))
        _snapshot(client, 2025, 1)

        data = client.get(
            "/history/prices",
            params={"user_id": USER_ID, "mode": "total_value"},
        ).json()

        assert Decimal(data["assets"][0]["months"]["2025-1"]["value"]) == Decimal("30")
