"""Cashflow Sankey graphs with drill-down.

Three views, selected by the drill-down state:

- RootView: income categories -> Budget -> expense types -> expense categories,
  plus a Savings node when income exceeds expenses.
- TypeDrill: one expense type -> its categories.
- CategoryDrill: one category -> its subcategories ("Other" for entries
  without a subcategory).
"""

from collections import defaultdict
from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Union

from finboard.domain.models import EntryType, ENTRY_TYPE_LABELS, LedgerEntry
from finboard.domain.views import SankeyGraph, SankeyLink, SankeyNode

PALETTE: tuple[str, ...] = (
    "#3b82f6",  # blue
    "#ef4444",  # red
    "#10b981",  # green
    "#f59e0b",  # amber
    "#8b5cf6",  # violet
    "#ec4899",  # pink
    "#06b6d4",  # cyan
    "#f97316",  # orange
    "#6366f1",  # indigo
    "#14b8a6",  # teal
)
BUDGET_COLOR = "#10b981"
SAVINGS_COLOR = "#3b82f6"

BUDGET_NODE_ID = "Budget"
SAVINGS_NODE_ID = "Savings"
OTHER_LABEL = "Other"

_DECAY_STEP = Decimal("0.15")
ZERO = Decimal("0")


def palette_color(index: int) -> str:
    """Palette color for a top-level node, cycling past the end."""
    return PALETTE[index % len(PALETTE)]


def derive_color(base_color: str, index: int) -> str:
    """
    Color of the index-th child of a node colored `base_color`.

    Every RGB channel is scaled by (1 - index * 0.15), rounded half up and
    clamped to [0, 255]; index 0 returns the base color itself.
    """
    hex_value = base_color.lstrip("#")
    channels = [int(hex_value[i:i + 2], 16) for i in (0, 2, 4)]
    factor = Decimal(1) - Decimal(index) * _DECAY_STEP

    scaled = []
    for channel in channels:
        value = int((Decimal(channel) * factor).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        scaled.append(max(0, min(255, value)))
    return "#" + "".join(f"{c:02x}" for c in scaled)


def derive_colors(base_color: str, count: int) -> list[str]:
    return [derive_color(base_color, i) for i in range(count)]


# Drill-down state


@dataclass(frozen=True)
class RootView:
    """Full budget view."""


@dataclass(frozen=True)
class TypeDrill:
    """One expense type and its categories."""

    entry_type: EntryType
    color: Optional[str] = None


@dataclass(frozen=True)
class CategoryDrill:
    """One category and its subcategories."""

    category: str
    entry_type: EntryType
    color: Optional[str] = None


DrillState = Union[RootView, TypeDrill, CategoryDrill]

_AGGREGATE_KINDS = ("budget", "savings")


class SankeyNavigator:
    """
    Drill-down state machine driven by node clicks and back actions.

    Clicking a type or category node in the root view drills into it.
    Clicks on aggregate nodes, and any click while drilled down, are ignored.
    """

    def __init__(self, state: Optional[DrillState] = None):
        self.state: DrillState = state or RootView()

    @property
    def is_root(self) -> bool:
        return isinstance(self.state, RootView)

    def click(self, node: SankeyNode) -> DrillState:
        if not self.is_root or node.kind in _AGGREGATE_KINDS or node.entry_type is None:
            return self.state

        if node.kind == "type":
            self.state = TypeDrill(entry_type=EntryType(node.entry_type), color=node.color)
        elif node.kind in ("income", "category"):
            self.state = CategoryDrill(
                category=node.label,
                entry_type=EntryType(node.entry_type),
                color=node.color,
            )
        return self.state

    def back(self) -> DrillState:
        self.state = RootView()
        return self.state

    def build(self, entries: Iterable[LedgerEntry], limit: Optional[int] = None) -> SankeyGraph:
        return build_sankey(entries, self.state, limit=limit)


# Node ids


def _income_id(category: str) -> str:
    return f"income:{category}"


def _type_id(entry_type: EntryType) -> str:
    return f"type:{entry_type.value}"


def _category_id(entry_type: EntryType, category: str) -> str:
    return f"category:{entry_type.value}:{category}"


def _subcategory_id(name: str) -> str:
    return f"subcategory:{name}"


def _ranked(totals: dict[str, Decimal], limit: Optional[int]) -> list[tuple[str, Decimal]]:
    """
    Sort by amount descending (name breaks ties) and keep the top `limit`.

    The truncated tail is folded into an "Other" item placed last, so the
    layer total is unchanged and flows still balance.
    """
    ranked = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    if limit is None or len(ranked) <= limit:
        return ranked

    kept = dict(ranked[:limit])
    tail = sum((value for _, value in ranked[limit:]), ZERO)
    if OTHER_LABEL in kept:
        kept[OTHER_LABEL] += tail
        return sorted(kept.items(), key=lambda item: (-item[1], item[0]))
    return list(kept.items()) + [(OTHER_LABEL, tail)]


def _drill_type(name: str, totals: dict[str, Decimal], entry_type: EntryType) -> Optional[str]:
    # A folded tail has no single category to drill into
    return entry_type.value if name in totals else None


def build_sankey(
    entries: Iterable[LedgerEntry],
    state: Optional[DrillState] = None,
    limit: Optional[int] = None,
) -> SankeyGraph:
    """
    Build the graph for the given drill-down state.

    `limit` caps the named nodes per layer; the remainder of a truncated
    layer is shown as one "Other" node.
    """
    entries = list(entries)
    state = resolve_drill_color(entries, state or RootView(), limit)

    if isinstance(state, TypeDrill):
        return _build_type_view(entries, state, limit)
    if isinstance(state, CategoryDrill):
        return _build_category_view(entries, state, limit)
    return _build_budget_view(entries, limit)


def _build_budget_view(entries: list[LedgerEntry], limit: Optional[int]) -> SankeyGraph:
    income_by_category: dict[str, Decimal] = defaultdict(lambda: ZERO)
    expense_by_type: dict[EntryType, Decimal] = defaultdict(lambda: ZERO)
    expense_by_category: dict[EntryType, dict[str, Decimal]] = defaultdict(
        lambda: defaultdict(lambda: ZERO)
    )
    total_income = ZERO
    total_expenses = ZERO

    for entry in entries:
        amount = entry.absolute_amount
        if entry.is_income:
            income_by_category[entry.category_name] += amount
            total_income += amount
        else:
            expense_by_type[entry.entry_type] += amount
            expense_by_category[entry.entry_type][entry.category_name] += amount
            total_expenses += amount

    if total_income == ZERO and total_expenses == ZERO:
        return SankeyGraph()

    graph = SankeyGraph()
    income_categories = _ranked(income_by_category, limit)
    for index, (name, value) in enumerate(income_categories):
        graph.nodes.append(
            SankeyNode(
                id=_income_id(name),
                label=name,
                color=palette_color(index),
                kind="income",
                entry_type=_drill_type(name, income_by_category, EntryType.INCOME),
            )
        )
        graph.links.append(SankeyLink(source=_income_id(name), target=BUDGET_NODE_ID, value=value))

    graph.nodes.append(
        SankeyNode(id=BUDGET_NODE_ID, label=BUDGET_NODE_ID, color=BUDGET_COLOR, kind="budget")
    )

    types = sorted(expense_by_type.items(), key=lambda item: (-item[1], item[0].value))
    for offset, (entry_type, type_total) in enumerate(types):
        type_color = palette_color(len(income_categories) + offset)
        graph.nodes.append(
            SankeyNode(
                id=_type_id(entry_type),
                label=ENTRY_TYPE_LABELS[entry_type],
                color=type_color,
                kind="type",
                entry_type=entry_type.value,
            )
        )
        graph.links.append(
            SankeyLink(source=BUDGET_NODE_ID, target=_type_id(entry_type), value=type_total)
        )

        for index, (name, value) in enumerate(_ranked(expense_by_category[entry_type], limit)):
            graph.nodes.append(
                SankeyNode(
                    id=_category_id(entry_type, name),
                    label=name,
                    color=derive_color(type_color, index),
                    kind="category",
                    entry_type=_drill_type(name, expense_by_category[entry_type], entry_type),
                )
            )
            graph.links.append(
                SankeyLink(
                    source=_type_id(entry_type),
                    target=_category_id(entry_type, name),
                    value=value,
                )
            )

    # A deficit is not drawn: only positive savings get a node
    savings = total_income - total_expenses
    if savings > ZERO:
        graph.nodes.append(
            SankeyNode(id=SAVINGS_NODE_ID, label=SAVINGS_NODE_ID, color=SAVINGS_COLOR, kind="savings")
        )
        graph.links.append(SankeyLink(source=BUDGET_NODE_ID, target=SAVINGS_NODE_ID, value=savings))

    return graph


def _build_type_view(
    entries: list[LedgerEntry],
    state: TypeDrill,
    limit: Optional[int],
) -> SankeyGraph:
    by_category: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for entry in entries:
        if entry.entry_type == state.entry_type:
            by_category[entry.category_name] += entry.absolute_amount

    if not by_category:
        return SankeyGraph()

    type_node_id = _type_id(state.entry_type)
    graph = SankeyGraph(
        nodes=[
            SankeyNode(
                id=type_node_id,
                label=ENTRY_TYPE_LABELS[state.entry_type],
                color=state.color,
                kind="type",
                entry_type=state.entry_type.value,
            )
        ]
    )
    for index, (name, value) in enumerate(_ranked(by_category, limit)):
        node_id = _category_id(state.entry_type, name)
        graph.nodes.append(
            SankeyNode(
                id=node_id,
                label=name,
                color=derive_color(state.color, index),
                kind="category",
                entry_type=state.entry_type.value,
            )
        )
        graph.links.append(SankeyLink(source=type_node_id, target=node_id, value=value))
    return graph


def _build_category_view(
    entries: list[LedgerEntry],
    state: CategoryDrill,
    limit: Optional[int],
) -> SankeyGraph:
    by_subcategory: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for entry in entries:
        if entry.category_name == state.category and entry.entry_type == state.entry_type:
            name = entry.subcategory_name or OTHER_LABEL
            by_subcategory[name] += entry.absolute_amount

    if not by_subcategory:
        return SankeyGraph()

    category_node_id = _category_id(state.entry_type, state.category)
    graph = SankeyGraph(
        nodes=[
            SankeyNode(
                id=category_node_id,
                label=state.category,
                color=state.color,
                kind="category",
                entry_type=state.entry_type.value,
            )
        ]
    )
    for index, (name, value) in enumerate(_ranked(by_subcategory, limit)):
        node_id = _subcategory_id(name)
        graph.nodes.append(
            SankeyNode(
                id=node_id,
                label=name,
                color=derive_color(state.color, index),
                kind="subcategory",
                entry_type=state.entry_type.value,
            )
        )
        graph.links.append(SankeyLink(source=category_node_id, target=node_id, value=value))
    return graph


def _root_node_id(state: Union[TypeDrill, CategoryDrill]) -> str:
    if isinstance(state, TypeDrill):
        return _type_id(state.entry_type)
    if state.entry_type == EntryType.INCOME:
        return _income_id(state.category)
    return _category_id(state.entry_type, state.category)


def resolve_drill_color(
    entries: Iterable[LedgerEntry],
    state: DrillState,
    limit: Optional[int] = None,
) -> DrillState:
    """
    Fill in a drill-down state's missing color.

    The color is the one the drilled node has in the budget view built from
    the same entries and `limit`, so child colors match across views. A
    category folded out of the budget view takes its type's color.
    """
    if isinstance(state, RootView) or state.color:
        return state

    budget = _build_budget_view(list(entries), limit)
    node = budget.node(_root_node_id(state))
    if node is None and isinstance(state, CategoryDrill) and not state.entry_type.is_income:
        node = budget.node(_type_id(state.entry_type))
    return replace(state, color=node.color if node else palette_color(0))
