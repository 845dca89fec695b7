"""Tax and cash-flow computation engines."""

from conscious_spending.engines.categorizer import category_total, is_within_target
from conscious_spending.engines.household import HouseholdCalculator
from conscious_spending.engines.tax import TaxEngine

__all__ = [
    "HouseholdCalculator",
    "TaxEngine",
    "category_total",
    "is_within_target",
]
