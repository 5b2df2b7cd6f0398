"""
Unit tests for the cashflow Sankey builder.

Tests cover:
- Color palette and brightness-decay derivation
- Budget view structure, savings edge and flow conservation
- Type and category drill-down views
- Drill-down navigation state machine
- Per-layer truncation
"""

import pytest
from datetime import date
from decimal import Decimal

from finboard.domain.models import EntryType
from finboard.domain.views import SankeyNode
from finboard.services.sankey_builder import (
    BUDGET_NODE_ID,
    PALETTE,
    SAVINGS_NODE_ID,
    CategoryDrill,
    RootView,
    SankeyNavigator,
    TypeDrill,
    build_sankey,
    derive_color,
    derive_colors,
    palette_color,
    resolve_drill_color,
)

from tests.conftest import make_entry


@pytest.fixture
def example_entries():
    return [
        make_entry(EntryType.INCOME, "Salary", "1000"),
        make_entry(EntryType.FIXED, "Rent", "400"),
        make_entry(EntryType.VARIABLE, "Groceries", "100"),
    ]


@pytest.fixture
def household_entries():
    return [
        make_entry(EntryType.INCOME, "Salary", "2500"),
        make_entry(EntryType.INCOME, "Freelance", "600"),
        make_entry(EntryType.FIXED, "Housing", "900", subcategory="Rent"),
        make_entry(EntryType.FIXED, "Housing", "120", subcategory="Utilities"),
        make_entry(EntryType.FIXED, "Insurance", "80"),
        make_entry(EntryType.VARIABLE, "Food", "300", subcategory="Groceries"),
        make_entry(EntryType.VARIABLE, "Food", "90", subcategory="Restaurants"),
        make_entry(EntryType.VARIABLE, "Food", "25"),
        make_entry(EntryType.VARIABLE, "Leisure", "150"),
        make_entry(EntryType.DEBT, "Car loan", "250"),
    ]


def _link_value(graph, source, target):
    for link in graph.links:
        if link.source == source and link.target == target:
            return link.value
    return None


# =============================================================================
# COLOR TESTS
# =============================================================================


class TestColors:
    """Tests for palette cycling and derived child colors."""

    def test_palette_cycles(self):
        assert palette_color(0) == PALETTE[0]
        assert palette_color(len(PALETTE)) == PALETTE[0]
        assert palette_color(len(PALETTE) + 3) == PALETTE[3]

    def test_first_child_keeps_parent_color(self):
        assert derive_color("#ef4444", 0) == "#ef4444"

    def test_each_sibling_is_darker(self):
        """
        GIVEN a parent color
        WHEN I derive the colors of its second and third children
        THEN channels are scaled by 0.85 and 0.70
        """
        assert derive_color("#ef4444", 1) == "#cb3a3a"
        assert derive_color("#3b82f6", 2) == "#295bac"

    def test_rounds_half_up(self):
        assert derive_color("#0a0a0a", 1) == "#090909"

    def test_clamps_at_black(self):
        assert derive_color("#ffffff", 7) == "#000000"
        assert derive_color("#ffffff", 12) == "#000000"

    def test_derive_colors_is_deterministic(self):
        assert derive_colors("#10b981", 3) == derive_colors("#10b981", 3)
        assert len(derive_colors("#10b981", 3)) == 3


# =============================================================================
# BUDGET VIEW TESTS
# =============================================================================


class TestBudgetView:
    """Tests for the root (full budget) view."""

    def test_example_scenario_savings_edge(self, example_entries):
        """
        GIVEN income 1000 and expenses 400 + 100
        WHEN I build the budget view
        THEN a Savings node receives 500 from Budget
        """
        graph = build_sankey(example_entries)

        assert graph.node(SAVINGS_NODE_ID) is not None
        assert _link_value(graph, BUDGET_NODE_ID, SAVINGS_NODE_ID) == Decimal("500")
        assert _link_value(graph, "income:Salary", BUDGET_NODE_ID) == Decimal("1000")
        assert _link_value(graph, BUDGET_NODE_ID, "type:fixed") == Decimal("400")
        assert _link_value(graph, "type:variable", "category:variable:Groceries") == Decimal("100")

    def test_flow_into_budget_equals_flow_out(self, household_entries):
        """
        GIVEN income larger than expenses
        WHEN I build the budget view
        THEN income edges into Budget equal type edges plus the savings edge
        """
        graph = build_sankey(household_entries)

        inflow = sum(l.value for l in graph.links if l.target == BUDGET_NODE_ID)
        outflow = sum(l.value for l in graph.links if l.source == BUDGET_NODE_ID)

        assert inflow == Decimal("3100")
        assert outflow == inflow

    def test_category_edges_sum_to_type_edge(self, household_entries):
        graph = build_sankey(household_entries)

        fixed_categories = [l for l in graph.links if l.source == "type:fixed"]

        assert sum(l.value for l in fixed_categories) == _link_value(graph, BUDGET_NODE_ID, "type:fixed")

    def test_no_savings_node_on_deficit(self):
        """
        GIVEN expenses larger than income
        WHEN I build the budget view
        THEN no Savings node or edge is emitted
        """
        entries = [
            make_entry(EntryType.INCOME, "Salary", "500"),
            make_entry(EntryType.VARIABLE, "Food", "800"),
        ]

        graph = build_sankey(entries)

        assert graph.node(SAVINGS_NODE_ID) is None
        assert _link_value(graph, BUDGET_NODE_ID, SAVINGS_NODE_ID) is None

    def test_no_savings_node_when_balanced(self):
        entries = [
            make_entry(EntryType.INCOME, "Salary", "500"),
            make_entry(EntryType.VARIABLE, "Food", "500"),
        ]

        assert build_sankey(entries).node(SAVINGS_NODE_ID) is None

    def test_node_colors(self, example_entries):
        graph = build_sankey(example_entries)

        assert graph.node("income:Salary").color == PALETTE[0]
        assert graph.node("type:fixed").color == PALETTE[1]
        assert graph.node("type:variable").color == PALETTE[2]
        assert graph.node("category:fixed:Rent").color == PALETTE[1]

    def test_income_sorted_descending(self, household_entries):
        graph = build_sankey(household_entries)

        income_nodes = [n.label for n in graph.nodes if n.kind == "income"]

        assert income_nodes == ["Salary", "Freelance"]

    def test_limit_truncates_each_layer(self, household_entries):
        graph = build_sankey(household_entries, limit=1)

        assert [n.label for n in graph.nodes if n.kind == "income"] == ["Salary", "Other"]
        variable_categories = [l.target for l in graph.links if l.source == "type:variable"]
        assert variable_categories == ["category:variable:Food", "category:variable:Other"]
        assert _link_value(graph, "income:Other", BUDGET_NODE_ID) == Decimal("600")
        assert _link_value(graph, "type:variable", "category:variable:Other") == Decimal("150")

    def test_limit_keeps_flow_balanced(self):
        """
        GIVEN two income categories and one expense
        WHEN I build the budget view limited to one node per layer
        THEN income into Budget still equals the type edges plus savings
        """
        entries = [
            make_entry(EntryType.INCOME, "Salary", "1000"),
            make_entry(EntryType.INCOME, "Bonus", "500"),
            make_entry(EntryType.FIXED, "Rent", "400"),
        ]

        graph = build_sankey(entries, limit=1)

        inflow = sum(l.value for l in graph.links if l.target == BUDGET_NODE_ID)
        outflow = sum(l.value for l in graph.links if l.source == BUDGET_NODE_ID)
        assert inflow == Decimal("1500")
        assert outflow == inflow
        assert _link_value(graph, BUDGET_NODE_ID, SAVINGS_NODE_ID) == Decimal("1100")

    def test_limit_keeps_category_edges_summing_to_type(self, household_entries):
        graph = build_sankey(household_entries, limit=1)

        fixed_categories = [l for l in graph.links if l.source == "type:fixed"]

        assert len(fixed_categories) == 2
        assert sum(l.value for l in fixed_categories) == _link_value(graph, BUDGET_NODE_ID, "type:fixed")

    def test_folded_node_is_not_drillable(self, household_entries):
        graph = build_sankey(household_entries, limit=1)
        navigator = SankeyNavigator()

        state = navigator.click(graph.node("income:Other"))

        assert isinstance(state, RootView)

    def test_limit_merges_tail_into_existing_other_bucket(self):
        """
        GIVEN a category drill whose entries partly lack a subcategory
        WHEN the subcategory layer is truncated
        THEN the tail joins the existing "Other" bucket
        """
        entries = [
            make_entry(EntryType.VARIABLE, "Food", "300", subcategory="Groceries"),
            make_entry(EntryType.VARIABLE, "Food", "200"),
            make_entry(EntryType.VARIABLE, "Food", "90", subcategory="Restaurants"),
            make_entry(EntryType.VARIABLE, "Food", "40", subcategory="Bars"),
        ]
        state = CategoryDrill(category="Food", entry_type=EntryType.VARIABLE, color="#ef4444")

        graph = build_sankey(entries, state, limit=2)

        assert [n.label for n in graph.nodes[1:]] == ["Other", "Groceries"]
        assert _link_value(graph, "category:variable:Food", "subcategory:Other") == Decimal("330")
        assert sum(l.value for l in graph.links) == Decimal("630")

    def test_empty_input_gives_empty_graph(self):
        graph = build_sankey([])

        assert graph.is_empty
        assert graph.links == []


# =============================================================================
# DRILL-DOWN VIEW TESTS
# =============================================================================


class TestDrillDownViews:
    """Tests for type and category drill-down views."""

    def test_type_drill_shows_categories(self, household_entries):
        state = TypeDrill(entry_type=EntryType.VARIABLE, color="#ef4444")

        graph = build_sankey(household_entries, state)

        targets = [l.target for l in graph.links]
        assert targets == ["category:variable:Food", "category:variable:Leisure"]
        assert graph.node("category:variable:Food").color == "#ef4444"
        assert graph.node("category:variable:Leisure").color == "#cb3a3a"

    def test_drill_without_color_uses_budget_view_color(self, household_entries):
        """
        GIVEN a budget view where the variable type is the fourth top-level node
        WHEN I drill into it without a color
        THEN the type node keeps its budget-view color
        """
        root = build_sankey(household_entries)

        graph = build_sankey(household_entries, TypeDrill(entry_type=EntryType.VARIABLE))

        assert graph.node("type:variable").color == root.node("type:variable").color == PALETTE[3]
        assert graph.node("category:variable:Leisure").color == derive_color(PALETTE[3], 1)

    def test_resolve_drill_color(self, household_entries):
        income = resolve_drill_color(
            household_entries, CategoryDrill(category="Freelance", entry_type=EntryType.INCOME)
        )
        explicit = resolve_drill_color(
            household_entries, TypeDrill(entry_type=EntryType.DEBT, color="#000000")
        )

        assert income.color == PALETTE[1]
        assert explicit.color == "#000000"

    def test_folded_category_takes_type_color(self, household_entries):
        state = resolve_drill_color(
            household_entries,
            CategoryDrill(category="Leisure", entry_type=EntryType.VARIABLE),
            limit=1,
        )

        assert state.color == PALETTE[3]

    def test_category_drill_collapses_missing_subcategory_into_other(self, household_entries):
        """
        GIVEN Food entries with and without a subcategory
        WHEN I drill into Food
        THEN entries without a subcategory land in "Other"
        AND subcategory edges add up to the Food total
        """
        state = CategoryDrill(category="Food", entry_type=EntryType.VARIABLE, color="#10b981")

        graph = build_sankey(household_entries, state)

        labels = [n.label for n in graph.nodes if n.kind == "subcategory"]
        assert labels == ["Groceries", "Restaurants", "Other"]
        assert sum(l.value for l in graph.links) == Decimal("415")

    def test_category_drill_for_income_category(self, household_entries):
        state = CategoryDrill(category="Salary", entry_type=EntryType.INCOME, color=PALETTE[0])

        graph = build_sankey(household_entries, state)

        assert [n.label for n in graph.nodes] == ["Salary", "Other"]

    def test_drill_into_unknown_category_is_empty(self, household_entries):
        state = CategoryDrill(category="Travel", entry_type=EntryType.VARIABLE, color=PALETTE[0])

        assert build_sankey(household_entries, state).is_empty


# =============================================================================
# NAVIGATION TESTS
# =============================================================================


class TestSankeyNavigator:
    """Tests for the drill-down state machine."""

    def test_click_type_node_drills_into_type(self, household_entries):
        navigator = SankeyNavigator()
        graph = navigator.build(household_entries)

        state = navigator.click(graph.node("type:variable"))

        assert state == TypeDrill(entry_type=EntryType.VARIABLE, color=graph.node("type:variable").color)
        assert not navigator.is_root

    def test_click_category_node_drills_into_category(self, household_entries):
        navigator = SankeyNavigator()
        graph = navigator.build(household_entries)

        state = navigator.click(graph.node("category:variable:Food"))

        assert isinstance(state, CategoryDrill)
        assert state.category == "Food"
        assert navigator.build(household_entries).node("subcategory:Groceries") is not None

    def test_click_income_node_drills_into_category(self, household_entries):
        navigator = SankeyNavigator()
        graph = navigator.build(household_entries)

        state = navigator.click(graph.node("income:Salary"))

        assert state == CategoryDrill(category="Salary", entry_type=EntryType.INCOME, color=PALETTE[0])

    @pytest.mark.parametrize("node_id", [BUDGET_NODE_ID, SAVINGS_NODE_ID])
    def test_click_aggregate_node_is_noop(self, household_entries, node_id):
        navigator = SankeyNavigator()
        graph = navigator.build(household_entries)

        state = navigator.click(graph.node(node_id))

        assert state == RootView()
        assert navigator.is_root

    def test_click_while_drilled_down_is_noop(self, household_entries):
        navigator = SankeyNavigator()
        graph = navigator.build(household_entries)
        drilled = navigator.click(graph.node("type:fixed"))

        child = navigator.build(household_entries).nodes[1]
        assert navigator.click(child) == drilled

    def test_back_returns_to_root(self):
        navigator = SankeyNavigator(TypeDrill(entry_type=EntryType.DEBT, color=PALETTE[0]))

        assert navigator.back() == RootView()
        assert navigator.is_root

    def test_click_unknown_kind_without_type_is_noop(self):
        navigator = SankeyNavigator()
        node = SankeyNode(id="x", label="x", color="#000000", kind="category")

        assert navigator.click(node) == RootView()
