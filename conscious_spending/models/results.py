"""Derived calculation result models. Never persisted."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ZERO = Decimal("0")


class _ResultModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FICABreakdown(_ResultModel):
    social_security: Decimal = ZERO
    medicare: Decimal = ZERO
    additional_medicare: Decimal = ZERO
    total: Decimal = ZERO


class TaxResult(_ResultModel):
    gross_income: Decimal
    pre_tax_deductions: Decimal
    standard_deduction: Decimal
    taxable_income: Decimal
    federal_tax: Decimal
    state_tax: Decimal
    fica: FICABreakdown
    total_tax: Decimal
    # May be negative; never clamped.
    net_income: Decimal
    effective_rate: Decimal
    marginal_rate: Decimal


class PersonResult(_ResultModel):
    name: str = ""
    gross: Decimal = ZERO
    pre_tax_deductions: Decimal = ZERO
    taxable_income: Decimal = ZERO
    federal_tax: Decimal = ZERO
    state_tax: Decimal = ZERO
    fica: FICABreakdown = Field(default_factory=FICABreakdown)
    total_tax: Decimal = ZERO
    net_annual: Decimal = ZERO
    monthly_net: Decimal = ZERO
    effective_rate: Decimal = ZERO
    marginal_rate: Decimal = ZERO
    per_paycheck_net: Decimal = ZERO


class HouseholdTotals(_ResultModel):
    gross_income: Decimal
    net_income: Decimal
    monthly_net_income: Decimal
    total_taxes: Decimal
    effective_rate: Decimal
    marginal_rate: Decimal


class TargetRange(_ResultModel):
    min: Decimal
    max: Decimal


class CategoryBreakdown(_ResultModel):
    amount: Decimal
    percentage: Decimal
    target: TargetRange


class SpendingBreakdown(_ResultModel):
    fixed_costs: CategoryBreakdown
    investments: CategoryBreakdown
    savings: CategoryBreakdown
    guilt_free_spending: CategoryBreakdown

    def by_category(self) -> dict[str, CategoryBreakdown]:
        return {
            "fixedCosts": self.fixed_costs,
            "investments": self.investments,
            "savings": self.savings,
            "guiltFreeSpending": self.guilt_free_spending,
        }


class CategoryTotals(_ResultModel):
    fixed_costs: Decimal = ZERO
    investments: Decimal = ZERO
    savings: Decimal = ZERO
    guilt_free_spending: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.fixed_costs + self.investments + self.savings + self.guilt_free_spending


class ExpenseSummary(_ResultModel):
    breakdown: CategoryTotals
    total: Decimal
    monthly: Decimal
    annual: Decimal


class SummaryMetrics(_ResultModel):
    monthly_net_income: Decimal
    monthly_expenses: Decimal
    monthly_surplus: Decimal
    annual_surplus: Decimal
    savings_rate: Decimal
    recommended_emergency_fund: Decimal


class HouseholdResult(_ResultModel):
    person1: PersonResult
    person2: PersonResult
    household: HouseholdTotals
    expenses: ExpenseSummary
    spending_breakdown: SpendingBreakdown
    summary: SummaryMetrics


class PersonView(_ResultModel):
    person: str
    income: PersonResult
    expenses: CategoryTotals
    total_expenses: Decimal
    surplus: Decimal
    spending_breakdown: SpendingBreakdown


class ScenarioDifferences(_ResultModel):
    net_income: Decimal
    expenses: Decimal
    surplus: Decimal
    savings_rate: Decimal


class ScenarioComparison(_ResultModel):
    first: str
    second: str
    first_result: HouseholdResult
    second_result: HouseholdResult
    differences: ScenarioDifferences
