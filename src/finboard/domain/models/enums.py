"""Enumerations for domain models."""

from enum import Enum


class EntryType(str, Enum):
    """Ledger entry types. Income is positive; the others are expenses."""

    INCOME = "income"
    FIXED = "fixed"
    VARIABLE = "variable"
    DEBT = "debt"

    @property
    def is_income(self) -> bool:
        return self is EntryType.INCOME


EXPENSE_TYPES: tuple[EntryType, ...] = (EntryType.FIXED, EntryType.VARIABLE, EntryType.DEBT)

ENTRY_TYPE_LABELS: dict[EntryType, str] = {
    EntryType.INCOME: "Income",
    EntryType.FIXED: "Fixed expenses",
    EntryType.VARIABLE: "Variable expenses",
    EntryType.DEBT: "Debt",
}


class AssetType(str, Enum):
    """Granular asset classification."""

    STOCK = "stock"
    ETF = "etf"
    BOND = "bond"
    CRYPTO = "crypto"
    COMMODITY = "commodity"
    CASH = "cash"
    REALESTATE = "realestate"


class AssetClass(str, Enum):
    """Broad asset classes used for allocation."""

    EQUITY = "equity"
    BONDS = "bonds"
    CRYPTO = "crypto"
    REALESTATE = "realestate"
    CASH = "cash"
    COMMODITY = "commodity"


class DeleteScope(str, Enum):
    """How far a ledger entry deletion reaches."""

    SINGLE = "single"
    SERIES = "series"  # every entry of the recurring series
    INSTALLMENT = "installment"  # every installment of the purchase


class InstallmentMode(str, Enum):
    """How installment amounts are determined."""

    AUTO = "auto"
    MANUAL = "manual"


class DisplayMode(str, Enum):
    """Value shown in price-history cells."""

    PRICE = "price"
    TOTAL_VALUE = "total_value"


class CellColor(str, Enum):
    """Month-over-month color code of a price-history cell."""

    GREEN = "green"
    RED = "red"
    NEUTRAL = "neutral"


class RebalanceAction(str, Enum):
    """Suggested move for an allocation that drifted from its target."""

    BUY = "buy"
    SELL = "sell"
    OK = "ok"
