"""View models for asset allocation and rebalancing."""

from dataclasses import dataclass, field
from decimal import Decimal

from finboard.domain.models.enums import RebalanceAction


@dataclass
class CurrentAllocation:
    """Portfolio value split by asset class and by sub-category."""

    total_value: Decimal
    by_asset_class: dict[str, Decimal] = field(default_factory=dict)
    by_sub_category: dict[str, Decimal] = field(default_factory=dict)


@dataclass
class AllocationLine:
    """Current vs. target share of one asset class or sub-category."""

    current_value: Decimal
    current_percentage: Decimal
    target_percentage: Decimal
    target_value: Decimal
    difference: Decimal  # percentage points, current - target
    difference_value: Decimal
    action: RebalanceAction


@dataclass
class AllocationComparison:
    total_value: Decimal
    by_asset_class: dict[str, AllocationLine] = field(default_factory=dict)
    by_sub_category: dict[str, AllocationLine] = field(default_factory=dict)


@dataclass
class NetWorthChange:
    """Net worth change of a snapshot against the previous one."""

    value: Decimal
    percentage: Decimal
