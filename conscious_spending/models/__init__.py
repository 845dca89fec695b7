"""Data models for the Conscious Spending Planner."""

from conscious_spending.models.enums import (
    Assignee,
    FilingStatus,
    PayFrequency,
    SpendingCategory,
    StateRuleType,
)
from conscious_spending.models.results import (
    CategoryBreakdown,
    CategoryTotals,
    ExpenseSummary,
    FICABreakdown,
    HouseholdResult,
    HouseholdTotals,
    PersonResult,
    PersonView,
    ScenarioComparison,
    ScenarioDifferences,
    SpendingBreakdown,
    SummaryMetrics,
    TargetRange,
    TaxResult,
)
from conscious_spending.models.scenario import (
    ExpenseCategoryTree,
    ExpenseGroup,
    ExpenseItem,
    Household,
    Income,
    Location,
    PersonIncome,
    PreTaxDeductions,
    Scenario,
    ScenarioMetadata,
)
from conscious_spending.models.updates import (
    ExpenseUpdate,
    HouseholdUpdate,
    PersonIncomeUpdate,
    PreTaxDeductionsUpdate,
    ScenarioUpdate,
)

__all__ = [
    "Assignee",
    "CategoryBreakdown",
    "CategoryTotals",
    "ExpenseCategoryTree",
    "ExpenseGroup",
    "ExpenseItem",
    "ExpenseSummary",
    "ExpenseUpdate",
    "FICABreakdown",
    "FilingStatus",
    "Household",
    "HouseholdResult",
    "HouseholdTotals",
    "HouseholdUpdate",
    "Income",
    "Location",
    "PayFrequency",
    "PersonIncome",
    "PersonIncomeUpdate",
    "PersonResult",
    "PersonView",
    "PreTaxDeductions",
    "PreTaxDeductionsUpdate",
    "Scenario",
    "ScenarioComparison",
    "ScenarioDifferences",
    "ScenarioMetadata",
    "ScenarioUpdate",
    "SpendingBreakdown",
    "SpendingCategory",
    "StateRuleType",
    "SummaryMetrics",
    "TargetRange",
    "TaxResult",
]
