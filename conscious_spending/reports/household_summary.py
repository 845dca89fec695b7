"""Household cash-flow summary report generator."""

from decimal import Decimal
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from conscious_spending.engines.categorizer import is_within_target
from conscious_spending.models.results import HouseholdResult
from conscious_spending.models.scenario import Scenario

TEMPLATE_DIR = Path(__file__).parent / "templates"

CATEGORY_LABELS = {
    "fixedCosts": "Fixed Costs",
    "investments": "Investments",
    "savings": "Savings",
    "guiltFreeSpending": "Guilt-Free Spending",
}


def format_money(value: Decimal, precision: int = 0) -> str:
    amount = f"{abs(value):,.{precision}f}"
    return f"-${amount}" if value < 0 else f"${amount}"


def format_percent(value: Decimal, precision: int = 1) -> str:
    return f"{value:.{precision}f}%"


class HouseholdSummaryGenerator:
    """Renders a plain-text household summary for one scenario."""

    def __init__(self) -> None:
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["money"] = format_money
        self.env.filters["pct"] = format_percent

    def render(self, name: str, scenario: Scenario, result: HouseholdResult) -> str:
        """Render the household summary report."""
        categories = [
            {
                "label": CATEGORY_LABELS[key],
                "line": line,
                "on_target": is_within_target(line),
            }
            for key, line in result.spending_breakdown.by_category().items()
        ]
        template = self.env.get_template("household_summary.txt")
        return template.render(
            name=name,
            scenario=scenario,
            result=result,
            people=[result.person1, result.person2],
            categories=categories,
        )
