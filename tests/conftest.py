"""
Pytest configuration and fixtures for finboard tests.

This module provides:
- In-memory SQLite database fixtures
- Factory helpers for categories, entries and assets
- Deterministic market data providers
- Builders for domain objects used by the pure calculation tests
- Service and repository fixtures
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from finboard.main import app
from finboard.api.deps import get_market_data_service, reset_market_data_service
from finboard.config.settings import Settings, set_settings, reset_settings
from finboard.core.timezone import LOCAL_TZ
from finboard.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from finboard.repositories.sqlalchemy import orm_models  # noqa: F401
from finboard.repositories.sqlalchemy import (
    SqlAlchemyEntryRepository,
    SqlAlchemyCategoryRepository,
    SqlAlchemyAssetRepository,
    SqlAlchemySnapshotRepository,
    SqlAlchemyAllocationRepository,
)
from finboard.services import (
    LedgerService,
    AssetService,
    AssetCreate,
    MarketDataService,
    SnapshotService,
    ReportingService,
    AllocationService,
    EntryCreate,
)
from finboard.domain.models import (
    Asset,
    AssetClass,
    AssetComposition,
    AssetSnapshot,
    AssetType,
    EntryType,
    ExpenseCategory,
    LedgerEntry,
    MonthlySnapshot,
)
from finboard.domain.views import Quote

USER_ID = "user-1"


# =============================================================================
# TIME HELPERS
# =============================================================================


def local_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
) -> datetime:
    """Create a localized datetime in the app's local timezone."""
    return LOCAL_TZ.localize(datetime(year, month, day, hour, minute))


@pytest.fixture
def fixed_today() -> date:
    """Fixed 'today' for deterministic month-over-month tests."""
    return date(2025, 3, 15)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()
    reset_database()
    set_settings(Settings(database_url="sqlite://", market_data_provider="stub"))

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    reset_market_data_service()
    reset_database()
    reset_settings()


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def entry_repo(test_session) -> SqlAlchemyEntryRepository:
    """Provide test EntryRepository."""
    return SqlAlchemyEntryRepository(test_session)


@pytest.fixture
def category_repo(test_session) -> SqlAlchemyCategoryRepository:
    """Provide test CategoryRepository."""
    return SqlAlchemyCategoryRepository(test_session)


@pytest.fixture
def asset_repo(test_session) -> SqlAlchemyAssetRepository:
    """Provide test AssetRepository."""
    return SqlAlchemyAssetRepository(test_session)


@pytest.fixture
def snapshot_repo(test_session) -> SqlAlchemySnapshotRepository:
    """Provide test SnapshotRepository."""
    return SqlAlchemySnapshotRepository(test_session)


@pytest.fixture
def allocation_repo(test_session) -> SqlAlchemyAllocationRepository:
    """Provide test AllocationRepository."""
    return SqlAlchemyAllocationRepository(test_session)


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class DeterministicMarketProvider:
    """
    Deterministic market data provider for testing.

    Known tickers get fixed prices; "ZERO.MI" quotes a price of 0 and
    anything else is omitted. Every call is recorded in `calls`.
    """

    FIXED_QUOTES = {
        "AAPL": (Decimal("185.50"), "USD"),
        "VWCE.DE": (Decimal("112.40"), "EUR"),
        "SWDA.MI": (Decimal("98.15"), "EUR"),
        "BTC-EUR": (Decimal("58250.00"), "EUR"),
        "ZERO.MI": (Decimal("0"), "EUR"),
    }

    def __init__(self, as_of: Optional[datetime] = None):
        self._as_of = as_of or local_datetime(2025, 3, 15, 17, 30)
        self.calls: list[list[str]] = []

    def get_quotes(self, tickers: list[str]) -> dict[str, Quote]:
        """Return deterministic quotes for requested tickers."""
        self.calls.append(list(tickers))
        result = {}
        for ticker in tickers:
            upper_ticker = ticker.upper()
            if upper_ticker in self.FIXED_QUOTES:
                price, currency = self.FIXED_QUOTES[upper_ticker]
                result[upper_ticker] = Quote(
                    ticker=upper_ticker,
                    price=price,
                    currency=currency,
                    as_of=self._as_of,
                )
        return result


class FailingMarketProvider:
    """Market provider that always raises an exception."""

    def get_quotes(self, tickers: list[str]) -> dict[str, Quote]:
        raise ConnectionError("Network unavailable")


@pytest.fixture
def deterministic_provider() -> DeterministicMarketProvider:
    """Provide deterministic market data provider."""
    return DeterministicMarketProvider()


@pytest.fixture
def failing_provider() -> FailingMarketProvider:
    """Provide a market provider that always fails."""
    return FailingMarketProvider()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def ledger_service(entry_repo, category_repo) -> LedgerService:
    """Provide test LedgerService."""
    return LedgerService(entry_repo=entry_repo, category_repo=category_repo)


@pytest.fixture
def market_data_service(deterministic_provider) -> MarketDataService:
    """Provide test MarketDataService with deterministic provider."""
    return MarketDataService(provider=deterministic_provider, cache_ttl_seconds=60)


@pytest.fixture
def asset_service(asset_repo, market_data_service) -> AssetService:
    """Provide test AssetService."""
    return AssetService(asset_repo=asset_repo, market_data_service=market_data_service)


@pytest.fixture
def snapshot_service(asset_repo, snapshot_repo) -> SnapshotService:
    """Provide test SnapshotService."""
    return SnapshotService(asset_repo=asset_repo, snapshot_repo=snapshot_repo)


@pytest.fixture
def reporting_service(ledger_service, asset_repo, snapshot_repo) -> ReportingService:
    """Provide test ReportingService."""
    return ReportingService(
        ledger_service=ledger_service,
        asset_repo=asset_repo,
        snapshot_repo=snapshot_repo,
    )


@pytest.fixture
def allocation_service(asset_repo, allocation_repo) -> AllocationService:
    """Provide test AllocationService."""
    return AllocationService(asset_repo=asset_repo, allocation_repo=allocation_repo)

# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def category_factory(ledger_service) -> Callable[..., ExpenseCategory]:
    """Factory for creating test categories."""

    def _create_category(
        name: Optional[str] = None,
        entry_type: EntryType = EntryType.VARIABLE,
        subcategories: Optional[list[str]] = None,
        user_id: str = USER_ID,
    ) -> ExpenseCategory:
        if name is None:
            name = f"Category {uuid.uuid4().hex[:8]}"
        return ledger_service.create_category(
            user_id=user_id,
            name=name,
            entry_type=entry_type,
            subcategories=subcategories,
        )

    return _create_category


@pytest.fixture
def entry_factory(ledger_service) -> Callable[..., LedgerEntry]:
    """Factory for creating a single test entry."""

    def _create_entry(
        category: ExpenseCategory,
        amount: Decimal,
        entry_date: date = date(2025, 3, 10),
        subcategory_id: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> LedgerEntry:
        data = EntryCreate(
            user_id=category.user_id,
            entry_type=category.entry_type,
            category_id=category.category_id,
            subcategory_id=subcategory_id,
            amount=amount,
            entry_date=entry_date,
            notes=notes,
        )
        return ledger_service.create_entry(data)[0]

    return _create_entry


@pytest.fixture
def asset_factory(asset_service) -> Callable[..., Asset]:
    """Factory for creating test assets with an explicit price."""

    def _create_asset(
        ticker: str = "VWCE.DE",
        quantity: Decimal = Decimal("10"),
        current_price: Optional[Decimal] = Decimal("100"),
        asset_type: AssetType = AssetType.ETF,
        asset_class: AssetClass = AssetClass.EQUITY,
        name: Optional[str] = None,
        user_id: str = USER_ID,
        **kwargs,
    ) -> Asset:
        asset, _ = asset_service.create_asset(
            AssetCreate(
                user_id=user_id,
                ticker=ticker,
                name=name or ticker,
                asset_type=asset_type,
                asset_class=asset_class,
                quantity=quantity,
                current_price=current_price,
                **kwargs,
            )
        )
        return asset

    return _create_asset


# =============================================================================
# PRESET DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_categories(category_factory) -> dict[str, ExpenseCategory]:
    """One category per entry type, two of them with subcategories."""
    return {
        "salary": category_factory("Salary", EntryType.INCOME),
        "housing": category_factory("Housing", EntryType.FIXED, ["Rent", "Utilities"]),
        "food": category_factory("Food", EntryType.VARIABLE, ["Groceries", "Restaurants"]),
        "loan": category_factory("Car loan", EntryType.DEBT),
    }


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine, deterministic_provider) -> TestClient:
    """Provide FastAPI test client with test database and deterministic quotes."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    market_data = MarketDataService(provider=deterministic_provider, cache_ttl_seconds=60)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_market_data_service] = lambda: market_data
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(Decimal(str(actual)) - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"


def make_entry(
    entry_type: EntryType,
    category: str,
    amount: str,
    entry_date: date = date(2025, 3, 10),
    subcategory: Optional[str] = None,
    user_id: str = USER_ID,
) -> LedgerEntry:
    """
    Build an in-memory entry for the pure calculation tests.

    Ids are derived from names ("cat-Food", "sub-Groceries") and the amount
    sign follows the entry type.
    """
    value = abs(Decimal(amount))
    return LedgerEntry(
        entry_id=str(uuid.uuid4()),
        user_id=user_id,
        entry_type=entry_type,
        category_id=f"cat-{category}",
        category_name=category,
        subcategory_id=f"sub-{subcategory}" if subcategory else None,
        subcategory_name=subcategory,
        amount=value if EntryType(entry_type).is_income else -value,
        entry_date=entry_date,
    )


def make_holding(
    asset_id: str,
    price: Optional[str],
    quantity: str = "1",
    ticker: Optional[str] = None,
    is_cash_equivalent: Optional[bool] = False,
) -> AssetSnapshot:
    """Build a snapshot holding; total value is quantity * price."""
    qty = Decimal(quantity)
    unit = Decimal(price) if price is not None else None
    return AssetSnapshot(
        asset_id=asset_id,
        ticker=ticker or asset_id.upper(),
        name=f"{(ticker or asset_id).upper()} name",
        quantity=qty,
        price=unit,
        total_value=qty * unit if unit is not None else Decimal("0"),
        is_cash_equivalent=is_cash_equivalent,
    )


def make_snapshot(
    year: int,
    month: int,
    holdings: list[AssetSnapshot],
    user_id: str = USER_ID,
) -> MonthlySnapshot:
    """Build a monthly snapshot from holdings."""
    return MonthlySnapshot(
        user_id=user_id,
        year=year,
        month=month,
        total_net_worth=sum((h.total_value for h in holdings), Decimal("0")),
        by_asset=holdings,
    )


def make_asset(
    asset_id: str,
    ticker: Optional[str] = None,
    price: str = "100",
    quantity: str = "1",
    asset_type: AssetType = AssetType.ETF,
    user_id: str = USER_ID,
    asset_class: Optional[AssetClass] = None,
    sub_category: Optional[str] = None,
    composition: Optional[list[AssetComposition]] = None,
) -> Asset:
    """Build an in-memory asset."""
    if asset_class is None:
        asset_class = AssetClass.CASH if asset_type == AssetType.CASH else AssetClass.EQUITY
    return Asset(
        asset_id=asset_id,
        user_id=user_id,
        ticker=ticker or asset_id.upper(),
        name=f"{(ticker or asset_id).upper()} name",
        asset_type=asset_type,
        asset_class=asset_class,
        quantity=Decimal(quantity),
        current_price=Decimal(price),
        sub_category=sub_category,
        composition=composition or [],
    )
