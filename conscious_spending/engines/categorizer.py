"""Expense categorization against the conscious-spending targets."""

from decimal import Decimal

from conscious_spending.engines.brackets import CATEGORY_TARGETS
from conscious_spending.models.enums import Assignee
from conscious_spending.models.results import (
    CategoryBreakdown,
    CategoryTotals,
    SpendingBreakdown,
    TargetRange,
)
from conscious_spending.models.scenario import ExpenseCategoryTree, ExpenseGroup, ExpenseItem

ZERO = Decimal("0")
TWO = Decimal("2")
HUNDRED = Decimal("100")


def category_total(
    node: ExpenseGroup | ExpenseItem | None, person: Assignee | str | None = None
) -> Decimal:
    """Sum the monthly amounts of every expense item under ``node``.

    With a ``person`` filter, items assigned to that person count in full,
    shared items count half, and items assigned to the other person are
    skipped.
    """
    if node is None:
        return ZERO
    if isinstance(node, ExpenseItem):
        if person is None or node.assigned_to == person:
            return node.amount
        if node.assigned_to == Assignee.SHARED:
            return node.amount / TWO
        return ZERO
    return sum((category_total(child, person) for _, child in node.items()), ZERO)


def category_totals(
    tree: ExpenseCategoryTree, person: Assignee | str | None = None
) -> CategoryTotals:
    return CategoryTotals(
        fixed_costs=category_total(tree.fixed_costs, person),
        investments=category_total(tree.investments, person),
        savings=category_total(tree.savings, person),
        guilt_free_spending=category_total(tree.guilt_free_spending, person),
    )


def is_within_target(breakdown: CategoryBreakdown) -> bool:
    return breakdown.target.min <= breakdown.percentage <= breakdown.target.max


def build_breakdown(totals: CategoryTotals, monthly_net: Decimal) -> SpendingBreakdown:
    """Express each category total as a percentage of monthly net income."""

    def _line(category: str, amount: Decimal) -> CategoryBreakdown:
        low, high = CATEGORY_TARGETS[category]
        percentage = amount / monthly_net * HUNDRED if monthly_net > ZERO else ZERO
        return CategoryBreakdown(
            amount=amount, percentage=percentage, target=TargetRange(min=low, max=high)
        )

    return SpendingBreakdown(
        fixed_costs=_line("fixedCosts", totals.fixed_costs),
        investments=_line("investments", totals.investments),
        savings=_line("savings", totals.savings),
        guilt_free_spending=_line("guiltFreeSpending", totals.guilt_free_spending),
    )
