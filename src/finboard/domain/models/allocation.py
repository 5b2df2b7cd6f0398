"""Asset allocation target model."""

from dataclasses import dataclass, field
from decimal import Decimal

from finboard.domain.models.enums import AssetClass


@dataclass
class AllocationTarget:
    """
    Target share of the portfolio for one asset class.

    `sub_targets` split the class further by sub-category; their
    percentages are relative to the asset class, not to the portfolio.
    """

    asset_class: AssetClass
    target_percentage: Decimal
    sub_targets: dict[str, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.asset_class, str):
            self.asset_class = AssetClass(self.asset_class)
