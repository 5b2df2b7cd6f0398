"""Current asset allocation and rebalancing against targets."""

import logging
from decimal import Decimal

from finboard.core.exceptions import ValidationError
from finboard.domain.models import AllocationTarget, Asset, AssetClass, RebalanceAction
from finboard.domain.views import AllocationComparison, AllocationLine, CurrentAllocation
from finboard.repositories.protocols import AllocationRepository, AssetRepository

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")
TARGET_TOLERANCE = Decimal("0.01")
# Percentage points of drift tolerated before an action is suggested
REBALANCE_THRESHOLD = Decimal("1")

DEFAULT_EQUITY_SUB_TARGETS: dict[str, Decimal] = {
    "All-World": Decimal("40"),
    "Momentum": Decimal("10"),
    "Quality": Decimal("10"),
    "Value": Decimal("10"),
    "Pension": Decimal("15"),
    "Private Equity": Decimal("5"),
    "High Risk": Decimal("5"),
    "Single Stocks": Decimal("5"),
}


def default_targets() -> list[AllocationTarget]:
    """Targets offered to a user who has not saved any."""
    return [
        AllocationTarget(AssetClass.EQUITY, Decimal("70"), dict(DEFAULT_EQUITY_SUB_TARGETS)),
        AllocationTarget(AssetClass.BONDS, Decimal("20")),
        AllocationTarget(AssetClass.CRYPTO, Decimal("3")),
        AllocationTarget(AssetClass.REALESTATE, Decimal("5")),
        AllocationTarget(AssetClass.CASH, Decimal("2")),
        AllocationTarget(AssetClass.COMMODITY, Decimal("0")),
    ]


def _add(totals: dict[str, Decimal], key: str, value: Decimal) -> None:
    totals[key] = totals.get(key, ZERO) + value


def current_allocation(assets: list[Asset]) -> CurrentAllocation:
    """
    Sum asset values by asset class and by sub-category.

    A composite asset (e.g. a pension fund) is split across the asset
    classes and sub-categories of its composition by percentage. Assets
    without a sub-category only count towards their asset class.
    """
    by_asset_class: dict[str, Decimal] = {}
    by_sub_category: dict[str, Decimal] = {}
    total = ZERO

    for asset in assets:
        value = asset.total_value
        total += value
        if not asset.composition:
            _add(by_asset_class, asset.asset_class.value, value)
            if asset.sub_category:
                _add(by_sub_category, asset.sub_category, value)
            continue
        for part in asset.composition:
            share = value * part.percentage / HUNDRED
            _add(by_asset_class, part.asset_class.value, share)
            if part.sub_category:
                _add(by_sub_category, part.sub_category, share)

    if total == ZERO:
        return CurrentAllocation(total_value=ZERO)

    return CurrentAllocation(
        total_value=total.quantize(CENT),
        by_asset_class={k: v.quantize(CENT) for k, v in by_asset_class.items()},
        by_sub_category={k: v.quantize(CENT) for k, v in by_sub_category.items()},
    )


def rebalance_action(difference: Decimal) -> RebalanceAction:
    """Overweight beyond the threshold sells, underweight buys."""
    if difference > REBALANCE_THRESHOLD:
        return RebalanceAction.SELL
    if difference < -REBALANCE_THRESHOLD:
        return RebalanceAction.BUY
    return RebalanceAction.OK


def _line(current_value: Decimal, base: Decimal, target_percentage: Decimal) -> AllocationLine:
    current_percentage = current_value / base * HUNDRED if base > ZERO else ZERO
    target_value = base * target_percentage / HUNDRED
    difference = current_percentage - target_percentage
    return AllocationLine(
        current_value=current_value,
        current_percentage=current_percentage.quantize(CENT),
        target_percentage=target_percentage,
        target_value=target_value.quantize(CENT),
        difference=difference.quantize(CENT),
        difference_value=(current_value - target_value).quantize(CENT),
        action=rebalance_action(difference),
    )


def compare_allocations(assets: list[Asset], targets: list[AllocationTarget]) -> AllocationComparison:
    """
    Compare the current allocation with the targets.

    Only targeted asset classes and sub-categories are reported. A
    sub-category's percentages are relative to its asset class total.
    Nothing is compared when there are no targets or the portfolio is empty.
    """
    current = current_allocation(assets)
    if not targets or current.total_value == ZERO:
        return AllocationComparison(total_value=current.total_value)

    by_asset_class: dict[str, AllocationLine] = {}
    by_sub_category: dict[str, AllocationLine] = {}
    for target in targets:
        class_value = current.by_asset_class.get(target.asset_class.value, ZERO)
        by_asset_class[target.asset_class.value] = _line(
            class_value, current.total_value, target.target_percentage
        )
        for sub_category, percentage in target.sub_targets.items():
            by_sub_category[sub_category] = _line(
                current.by_sub_category.get(sub_category, ZERO), class_value, percentage
            )

    return AllocationComparison(
        total_value=current.total_value,
        by_asset_class=by_asset_class,
        by_sub_category=by_sub_category,
    )


def validate_targets(targets: list[AllocationTarget]) -> None:
    """Class targets must sum to 100, as must any class's sub-targets."""
    seen: set[AssetClass] = set()
    for target in targets:
        if target.asset_class in seen:
            raise ValidationError(f"Duplicate target for asset class {target.asset_class.value}")
        seen.add(target.asset_class)

        percentages = [target.target_percentage, *target.sub_targets.values()]
        if any(not ZERO <= p <= HUNDRED for p in percentages):
            raise ValidationError("Target percentages must be between 0 and 100")

        if target.sub_targets:
            sub_total = sum(target.sub_targets.values(), ZERO)
            if abs(sub_total - HUNDRED) > TARGET_TOLERANCE:
                raise ValidationError(
                    f"Sub-targets of {target.asset_class.value} must sum to 100, got {sub_total}"
                )

    total = sum((t.target_percentage for t in targets), ZERO)
    if abs(total - HUNDRED) > TARGET_TOLERANCE:
        raise ValidationError(f"Allocation targets must sum to 100, got {total}")


class AllocationService:
    """Reads and stores a user's allocation targets and compares them with the portfolio."""

    def __init__(
        self,
        asset_repo: AssetRepository,
        allocation_repo: AllocationRepository,
    ):
        self._asset_repo = asset_repo
        self._allocation_repo = allocation_repo

    def get_targets(self, user_id: str) -> list[AllocationTarget]:
        """Saved targets, or the defaults if the user has none."""
        return self._allocation_repo.get_targets(user_id) or default_targets()

    def set_targets(self, user_id: str, targets: list[AllocationTarget]) -> list[AllocationTarget]:
        validate_targets(targets)
        saved = self._allocation_repo.replace_targets(user_id, targets)
        logger.info("Saved %d allocation targets for %s", len(saved), user_id)
        return saved

    def current(self, user_id: str) -> CurrentAllocation:
        return current_allocation(self._asset_repo.list_by_user(user_id))

    def compare(self, user_id: str) -> AllocationComparison:
        return compare_allocations(
            self._asset_repo.list_by_user(user_id),
            self.get_targets(user_id),
        )
