"""
Unit tests for the allocation service.

Tests cover:
- Current allocation by asset class and sub-category
- Composite assets split by their composition
- Comparison against targets and the rebalancing threshold
- Target validation and the default targets
"""

import pytest
from decimal import Decimal

from finboard.core.exceptions import ValidationError
from finboard.domain.models import (
    AllocationTarget,
    AssetClass,
    AssetComposition,
    AssetType,
    RebalanceAction,
)
from finboard.services import AllocationService
from finboard.services.allocation_service import (
    compare_allocations,
    current_allocation,
    default_targets,
    rebalance_action,
    validate_targets,
)

from tests.conftest import USER_ID, make_asset


@pytest.fixture
def portfolio():
    """An All-World ETF (6000), a bond ETF (2000) and a half-equity pension fund (2000)."""
    return [
        make_asset("vwce", price="100", quantity="60", sub_category="All-World"),
        make_asset(
            "agg", price="50", quantity="40",
            asset_type=AssetType.BOND, asset_class=AssetClass.BONDS,
        ),
        make_asset(
            "pension", price="2000", quantity="1",
            composition=[
                AssetComposition(AssetClass.EQUITY, Decimal("50"), "Pension"),
                AssetComposition(AssetClass.BONDS, Decimal("50")),
            ],
        ),
    ]


@pytest.fixture
def targets():
    return [
        AllocationTarget(
            AssetClass.EQUITY,
            Decimal("70"),
            {"All-World": Decimal("80"), "Pension": Decimal("20")},
        ),
        AllocationTarget(AssetClass.BONDS, Decimal("20")),
        AllocationTarget(AssetClass.CASH, Decimal("10")),
    ]


# =============================================================================
# CURRENT ALLOCATION TESTS
# =============================================================================


class TestCurrentAllocation:
    """Tests for summing the portfolio by class and sub-category."""

    def test_composite_asset_is_split_by_composition(self, portfolio):
        """
        GIVEN a pension fund that is half equity, half bonds
        WHEN I compute the current allocation
        THEN its value counts half towards each class
        AND its equity half towards the Pension sub-category
        """
        current = current_allocation(portfolio)

        assert current.total_value == Decimal("10000.00")
        assert current.by_asset_class == {"equity": Decimal("7000.00"), "bonds": Decimal("3000.00")}
        assert current.by_sub_category == {"All-World": Decimal("6000.00"), "Pension": Decimal("1000.00")}

    def test_class_totals_add_up_to_portfolio(self, portfolio):
        current = current_allocation(portfolio)

        assert sum(current.by_asset_class.values()) == current.total_value

    def test_empty_portfolio(self):
        current = current_allocation([make_asset("flat", price="0")])

        assert current.total_value == Decimal("0")
        assert current.by_asset_class == {}
        assert current.by_sub_category == {}


# =============================================================================
# COMPARISON TESTS
# =============================================================================


class TestCompareAllocations:
    """Tests for current vs. target comparisons."""

    def test_asset_class_lines(self, portfolio, targets):
        comparison = compare_allocations(portfolio, targets)
        equity = comparison.by_asset_class["equity"]
        bonds = comparison.by_asset_class["bonds"]
        cash = comparison.by_asset_class["cash"]

        assert equity.current_percentage == Decimal("70.00")
        assert equity.action == RebalanceAction.OK
        assert bonds.difference == Decimal("10.00")
        assert bonds.target_value == Decimal("2000.00")
        assert bonds.difference_value == Decimal("1000.00")
        assert bonds.action == RebalanceAction.SELL
        assert cash.current_value == Decimal("0")
        assert cash.difference_value == Decimal("-1000.00")
        assert cash.action == RebalanceAction.BUY

    def test_sub_categories_are_relative_to_their_class(self, portfolio, targets):
        """
        GIVEN 7000 of equity of which 6000 is All-World
        WHEN I compare against an 80/20 All-World/Pension split
        THEN All-World is 85.71% of equity and should be sold down to 5600
        """
        comparison = compare_allocations(portfolio, targets)
        world = comparison.by_sub_category["All-World"]
        pension = comparison.by_sub_category["Pension"]

        assert world.current_percentage == Decimal("85.71")
        assert world.target_value == Decimal("5600.00")
        assert world.difference_value == Decimal("400.00")
        assert world.action == RebalanceAction.SELL
        assert pension.current_percentage == Decimal("14.29")
        assert pension.action == RebalanceAction.BUY

    def test_untargeted_classes_are_not_reported(self, portfolio):
        comparison = compare_allocations(portfolio, [AllocationTarget(AssetClass.EQUITY, Decimal("100"))])

        assert list(comparison.by_asset_class) == ["equity"]
        assert comparison.by_sub_category == {}

    def test_nothing_to_compare(self, portfolio, targets):
        assert compare_allocations(portfolio, []).by_asset_class == {}
        assert compare_allocations([], targets).by_asset_class == {}

    @pytest.mark.parametrize(
        "difference, expected",
        [
            ("1.01", RebalanceAction.SELL),
            ("1", RebalanceAction.OK),
            ("0", RebalanceAction.OK),
            ("-1", RebalanceAction.OK),
            ("-1.01", RebalanceAction.BUY),
        ],
    )
    def test_rebalance_threshold(self, difference, expected):
        assert rebalance_action(Decimal(difference)) == expected


# =============================================================================
# TARGET TESTS
# =============================================================================


class TestTargets:
    """Tests for target validation and storage."""

    def test_default_targets_are_valid(self):
        defaults = default_targets()

        validate_targets(defaults)
        assert defaults[0].asset_class == AssetClass.EQUITY
        assert defaults[0].sub_targets["All-World"] == Decimal("40")

    @pytest.mark.parametrize(
        "targets",
        [
            [AllocationTarget(AssetClass.EQUITY, Decimal("99"))],
            [AllocationTarget(AssetClass.EQUITY, Decimal("50")), AllocationTarget(AssetClass.EQUITY, Decimal("50"))],
            [AllocationTarget(AssetClass.EQUITY, Decimal("110")), AllocationTarget(AssetClass.CASH, Decimal("-10"))],
            [AllocationTarget(AssetClass.EQUITY, Decimal("100"), {"All-World": Decimal("90")})],
            [],
        ],
        ids=["sum-not-100", "duplicate-class", "out-of-range", "sub-targets-not-100", "empty"],
    )
    def test_invalid_targets_rejected(self, targets):
        with pytest.raises(ValidationError):
            validate_targets(targets)

    def test_tolerance_of_one_hundredth(self):
        validate_targets([
            AllocationTarget(AssetClass.EQUITY, Decimal("66.67")),
            AllocationTarget(AssetClass.BONDS, Decimal("33.33")),
            AllocationTarget(AssetClass.CASH, Decimal("0.005")),
        ])

    def test_defaults_until_targets_are_saved(self, allocation_service: AllocationService, targets):
        """
        GIVEN a user without saved targets
        WHEN I read their targets, save my own and read again
        THEN the defaults are returned first and the saved targets after
        """
        assert allocation_service.get_targets(USER_ID) == default_targets()

        allocation_service.set_targets(USER_ID, targets)

        saved = allocation_service.get_targets(USER_ID)
        assert [t.asset_class for t in saved] == [AssetClass.EQUITY, AssetClass.BONDS, AssetClass.CASH]

    def test_invalid_targets_are_not_saved(self, allocation_service: AllocationService):
        with pytest.raises(ValidationError):
            allocation_service.set_targets(USER_ID, [AllocationTarget(AssetClass.CASH, Decimal("50"))])

        assert allocation_service.get_targets(USER_ID) == default_targets()

    def test_compare_uses_stored_assets(self, allocation_service: AllocationService, asset_factory):
        asset_factory(ticker="VWCE.DE", quantity=Decimal("10"), current_price=Decimal("100"))

        comparison = allocation_service.compare(USER_ID)

        assert comparison.total_value == Decimal("1000.00")
        # Default targets: 70% equity
        assert comparison.by_asset_class["equity"].difference == Decimal("30.00")
        assert comparison.by_asset_class["equity"].action == RebalanceAction.SELL
