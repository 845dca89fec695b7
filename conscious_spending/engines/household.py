"""Household cash-flow calculator.

Runs the tax engine once per household member, aggregates expenses through
the categorizer, and assembles the consolidated household result. Every call
works on its own snapshot and returns fresh result objects; nothing is cached.

Partial input degrades to zero figures: a missing member is an all-zero
earner and a missing expense tree has no expenses.
"""

import logging
from decimal import Decimal
from typing import Any

from conscious_spending.engines.brackets import (
    DEFAULT_PAY_PERIODS,
    EMERGENCY_FUND_MONTHS,
    PAY_PERIODS_PER_YEAR,
)
from conscious_spending.engines.categorizer import build_breakdown, category_totals
from conscious_spending.engines.tax import TaxEngine, as_decimal
from conscious_spending.models.enums import Assignee
from conscious_spending.models.results import (
    ExpenseSummary,
    HouseholdResult,
    HouseholdTotals,
    PersonResult,
    PersonView,
    ScenarioComparison,
    ScenarioDifferences,
    SpendingBreakdown,
    SummaryMetrics,
)
from conscious_spending.models.scenario import (
    ExpenseCategoryTree,
    PersonIncome,
    Scenario,
)
from conscious_spending.models.updates import ScenarioUpdate

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
TWELVE = Decimal("12")
HUNDRED = Decimal("100")


class HouseholdCalculator:
    """Computes household income, taxes, expenses, and summary metrics."""

    def __init__(self, tax_engine: TaxEngine | None = None) -> None:
        self.tax_engine = tax_engine or TaxEngine()

    def calculate_scenario(self, scenario: Scenario | dict[str, Any]) -> HouseholdResult:
        """Compute the full household snapshot for one scenario."""
        scenario = self._coerce(scenario)

        person1 = self.calculate_person_income(scenario.income.person1, scenario)
        person2 = self.calculate_person_income(scenario.income.person2, scenario)

        gross = person1.gross + person2.gross
        net = person1.net_annual + person2.net_annual
        total_taxes = person1.total_tax + person2.total_tax

        expenses = self.household_expenses(scenario.expenses)

        return HouseholdResult(
            person1=person1,
            person2=person2,
            household=HouseholdTotals(
                gross_income=gross,
                net_income=net,
                monthly_net_income=net / TWELVE,
                total_taxes=total_taxes,
                effective_rate=self.tax_engine.effective_rate(total_taxes, gross),
                marginal_rate=self.tax_engine.marginal_rate(
                    person1.taxable_income + person2.taxable_income,
                    scenario.household.filing_status,
                    scenario.household.location.state,
                ),
            ),
            expenses=expenses,
            spending_breakdown=self.spending_breakdown(scenario.expenses, net),
            summary=self.summary_metrics(person1, person2, expenses.total),
        )

    def calculate_person_income(
        self, person: PersonIncome | None, scenario: Scenario
    ) -> PersonResult:
        """Compute one member's take-home pay."""
        if person is None:
            return PersonResult()

        result = self.tax_engine.calculate_all_taxes(
            person.gross,
            person.pre_tax_deductions.total,
            scenario.household.filing_status,
            scenario.household.location.state,
        )
        return PersonResult(
            name=person.name,
            gross=result.gross_income,
            pre_tax_deductions=result.pre_tax_deductions,
            taxable_income=result.taxable_income,
            federal_tax=result.federal_tax,
            state_tax=result.state_tax,
            fica=result.fica,
            total_tax=result.total_tax,
            net_annual=result.net_income,
            monthly_net=result.net_income / TWELVE,
            effective_rate=result.effective_rate,
            marginal_rate=result.marginal_rate,
            per_paycheck_net=self.per_paycheck(result.net_income, person.pay_frequency),
        )

    @staticmethod
    def per_paycheck(annual_net: Decimal, pay_frequency: str | None) -> Decimal:
        """Net pay per paycheck. Unrecognized frequencies are treated as biweekly."""
        periods = PAY_PERIODS_PER_YEAR.get(pay_frequency or "", DEFAULT_PAY_PERIODS)
        return as_decimal(annual_net) / periods

    # ------------------------------------------------------------------
    # Expenses
    # ------------------------------------------------------------------

    @staticmethod
    def expenses_total(tree: ExpenseCategoryTree | None) -> Decimal:
        if tree is None:
            return ZERO
        return category_totals(tree).total

    def household_expenses(self, tree: ExpenseCategoryTree | None) -> ExpenseSummary:
        totals = category_totals(tree or ExpenseCategoryTree())
        total = totals.total
        return ExpenseSummary(
            breakdown=totals, total=total, monthly=total, annual=total * TWELVE
        )

    @staticmethod
    def spending_breakdown(
        tree: ExpenseCategoryTree | None, annual_net_income: Decimal
    ) -> SpendingBreakdown:
        """Category amounts as a share of monthly household net income."""
        totals = category_totals(tree or ExpenseCategoryTree())
        return build_breakdown(totals, as_decimal(annual_net_income) / TWELVE)

    @staticmethod
    def summary_metrics(
        person1: PersonResult, person2: PersonResult, monthly_expenses: Decimal
    ) -> SummaryMetrics:
        monthly_net = (person1.net_annual + person2.net_annual) / TWELVE
        monthly_expenses = as_decimal(monthly_expenses)
        monthly_surplus = monthly_net - monthly_expenses
        savings_rate = (
            monthly_surplus / monthly_net * HUNDRED if monthly_net > ZERO else ZERO
        )
        return SummaryMetrics(
            monthly_net_income=monthly_net,
            monthly_expenses=monthly_expenses,
            monthly_surplus=monthly_surplus,
            annual_surplus=monthly_surplus * TWELVE,
            savings_rate=savings_rate,
            recommended_emergency_fund=monthly_expenses * EMERGENCY_FUND_MONTHS,
        )

    # ------------------------------------------------------------------
    # Individual view
    # ------------------------------------------------------------------

    def person_view(
        self,
        person: Assignee | str,
        scenario: Scenario | dict[str, Any],
        result: HouseholdResult | None = None,
    ) -> PersonView:
        """One member's income against their share of household expenses.

        Shared expenses are split evenly. Pass ``result`` to reuse an
        existing household calculation instead of recomputing taxes.
        """
        person = Assignee(person)
        scenario = self._coerce(scenario)
        if result is not None:
            income = result.person2 if person == Assignee.PERSON2 else result.person1
        else:
            income = self.calculate_person_income(
                scenario.income.for_person(person), scenario
            )

        expenses = category_totals(scenario.expenses, person)
        total_expenses = expenses.total
        return PersonView(
            person=person.value,
            income=income,
            expenses=expenses,
            total_expenses=total_expenses,
            surplus=income.monthly_net - total_expenses,
            spending_breakdown=build_breakdown(expenses, income.monthly_net),
        )

    # ------------------------------------------------------------------
    # What-if and comparison
    # ------------------------------------------------------------------

    def what_if(self, scenario: Scenario, update: ScenarioUpdate) -> HouseholdResult:
        """Compute the result of ``update`` applied to a copy of ``scenario``."""
        return self.calculate_scenario(update.apply_to(scenario))

    def compare(
        self,
        first: Scenario,
        second: Scenario,
    ) -> ScenarioComparison:
        """Compare two scenarios; differences are second minus first."""
        a = self.calculate_scenario(first)
        b = self.calculate_scenario(second)
        return ScenarioComparison(
            first=first.metadata.name,
            second=second.metadata.name,
            first_result=a,
            second_result=b,
            differences=ScenarioDifferences(
                net_income=b.household.net_income - a.household.net_income,
                expenses=b.expenses.total - a.expenses.total,
                surplus=b.summary.monthly_surplus - a.summary.monthly_surplus,
                savings_rate=b.summary.savings_rate - a.summary.savings_rate,
            ),
        )

    @staticmethod
    def _coerce(scenario: Scenario | dict[str, Any]) -> Scenario:
        if isinstance(scenario, Scenario):
            return scenario
        logger.debug("Validating raw scenario mapping")
        return Scenario.model_validate(scenario or {})

