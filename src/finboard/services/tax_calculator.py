"""Capital gains tax simulation for selling part of a position."""

from decimal import Decimal
from typing import Optional

from finboard.domain.models import Asset
from finboard.domain.views import TaxGainResult

ZERO = Decimal("0")
CENT = Decimal("0.01")


def calculate_tax_gain(
    owned_quantity: Decimal,
    current_price: Decimal,
    average_cost: Optional[Decimal] = None,
    tax_rate: Optional[Decimal] = None,
    quantity: Optional[Decimal] = None,
    target_value: Optional[Decimal] = None,
) -> TaxGainResult:
    """
    Simulate selling a position.

    The quantity is either given directly or derived from a target gross
    sale value divided by the current price. It is clamped to the owned
    quantity; the clamp is reported through `exceeds_owned`, never raised.

    Formula:
        sale_value   = quantity * current_price
        cost_basis   = quantity * average_cost
        gain_loss    = sale_value - cost_basis
        tax          = gain_loss * tax_rate / 100   (only when gain_loss > 0)
        net_proceeds = sale_value - tax
    """
    average_cost = average_cost or ZERO
    tax_rate = tax_rate or ZERO

    if quantity is not None:
        requested = quantity
    elif target_value is not None and current_price > ZERO:
        requested = target_value / current_price
    else:
        requested = ZERO

    requested = max(ZERO, requested)
    exceeds_owned = requested > owned_quantity
    clamped = min(requested, max(ZERO, owned_quantity))

    sale_value = clamped * current_price
    cost_basis = clamped * average_cost
    gain_loss = sale_value - cost_basis
    gain_loss_pct = (gain_loss / cost_basis * 100).quantize(CENT) if cost_basis > ZERO else ZERO

    # Losses never produce a negative tax
    tax = gain_loss * tax_rate / 100 if gain_loss > ZERO else ZERO

    return TaxGainResult(
        quantity=clamped,
        requested_quantity=requested,
        exceeds_owned=exceeds_owned,
        current_price=current_price,
        average_cost=average_cost,
        tax_rate=tax_rate,
        sale_value=sale_value,
        cost_basis=cost_basis,
        gain_loss=gain_loss,
        gain_loss_pct=gain_loss_pct,
        tax=tax,
        net_proceeds=sale_value - tax,
    )


def simulate_sale(
    asset: Asset,
    quantity: Optional[Decimal] = None,
    target_value: Optional[Decimal] = None,
) -> TaxGainResult:
    """Run the tax calculator against an asset's holdings and settings."""
    return calculate_tax_gain(
        owned_quantity=asset.quantity,
        current_price=asset.current_price,
        average_cost=asset.average_cost,
        tax_rate=asset.tax_rate,
        quantity=quantity,
        target_value=target_value,
    )
