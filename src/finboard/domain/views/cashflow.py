"""View models for cashflow aggregation and Sankey output."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from finboard.domain.models import LedgerEntry


@dataclass
class CashflowSummary:
    """Filtered entries plus the four headline scalars."""

    entries: list[LedgerEntry] = field(default_factory=list)
    total_income: Decimal = field(default_factory=lambda: Decimal("0"))
    total_expenses: Decimal = field(default_factory=lambda: Decimal("0"))
    net_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    income_expense_ratio: Optional[Decimal] = None


@dataclass
class GroupTotal:
    """Aggregated amount for one grouping key."""

    key: str
    label: str
    total: Decimal
    count: int
    share: Optional[Decimal] = None  # percentage of the grouped total


@dataclass
class TypeTotal:
    """Total and count for one entry type."""

    total: Decimal = field(default_factory=lambda: Decimal("0"))
    count: int = 0


@dataclass
class MonthlySummary:
    """Totals of a single month with by-type and by-category breakdowns."""

    year: int
    month: int
    total_income: Decimal = field(default_factory=lambda: Decimal("0"))
    total_expenses: Decimal = field(default_factory=lambda: Decimal("0"))
    net_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    by_type: dict[str, TypeTotal] = field(default_factory=dict)
    by_category: list[GroupTotal] = field(default_factory=list)


@dataclass
class PeriodTotals:
    """Income, expenses and net for one period."""

    income: Decimal = field(default_factory=lambda: Decimal("0"))
    expenses: Decimal = field(default_factory=lambda: Decimal("0"))
    net: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class ExpenseStats:
    """Current month versus previous month, with percentage deltas."""

    current_month: PeriodTotals
    previous_month: PeriodTotals
    delta: PeriodTotals


@dataclass
class SankeyNode:
    """Vertex of a Sankey diagram."""

    id: str
    label: str
    color: str
    kind: str  # income | budget | type | category | subcategory | savings
    entry_type: Optional[str] = None


@dataclass
class SankeyLink:
    """Weighted edge of a Sankey diagram."""

    source: str
    target: str
    value: Decimal


@dataclass
class SankeyGraph:
    """Nodes and links of a Sankey view."""

    nodes: list[SankeyNode] = field(default_factory=list)
    links: list[SankeyLink] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.nodes or not self.links

    def node(self, node_id: str) -> Optional[SankeyNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None
