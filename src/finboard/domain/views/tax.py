"""View model for tax-gain simulation output."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class TaxGainResult:
    """Outcome of selling part of a position."""

    quantity: Decimal
    requested_quantity: Decimal
    exceeds_owned: bool
    current_price: Decimal
    average_cost: Decimal
    tax_rate: Decimal
    sale_value: Decimal
    cost_basis: Decimal
    gain_loss: Decimal
    gain_loss_pct: Decimal
    tax: Decimal
    net_proceeds: Decimal

    @property
    def is_gain(self) -> bool:
        return self.gain_loss > 0

    @property
    def is_loss(self) -> bool:
        return self.gain_loss < 0
