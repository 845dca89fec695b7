"""Tests for HouseholdCalculator: end-to-end household snapshots."""

from decimal import Decimal

import pytest

from conscious_spending.exceptions import InvalidFilingStatusError
from conscious_spending.models.enums import Assignee
from conscious_spending.models.updates import (
    ExpenseUpdate,
    PersonIncomeUpdate,
    ScenarioUpdate,
)
from conscious_spending.scenarios.defaults import conservative_scenario, optimistic_scenario

TWELVE = Decimal("12")


class TestTwoEarnerBaseline:
    """Baseline: two earners filing jointly in California."""

    def test_person_results(self, calculator, baseline):
        r = calculator.calculate_scenario(baseline)
        assert r.person1.name == "Partner 1"
        assert r.person1.gross == Decimal("137000")
        assert r.person1.pre_tax_deductions == Decimal("25900")
        assert r.person1.net_annual == Decimal("89035.07")
        assert r.person2.gross == Decimal("90000")
        assert r.person2.net_annual == Decimal("65190.59")

    def test_household_totals(self, calculator, baseline):
        r = calculator.calculate_scenario(baseline)
        assert r.household.gross_income == Decimal("227000")
        assert r.household.net_income == Decimal("154225.66")
        assert r.household.total_taxes == Decimal("34874.34")
        assert r.household.monthly_net_income == Decimal("154225.66") / TWELVE
        assert r.household.effective_rate == Decimal("34874.34") / Decimal("227000") * 100

    def test_household_marginal_rate_uses_combined_taxable_income(self, calculator, baseline):
        # 81100 + 48000 = 129100 sits in the 22% MFJ bracket and 9.3% CA bracket.
        r = calculator.calculate_scenario(baseline)
        assert r.household.marginal_rate == Decimal("31.3")

    def test_expenses(self, calculator, baseline):
        r = calculator.calculate_scenario(baseline)
        assert r.expenses.total == Decimal("11070")
        assert r.expenses.monthly == Decimal("11070")
        assert r.expenses.annual == Decimal("132840")
        assert r.expenses.breakdown.fixed_costs == Decimal("5720")

    def test_expenses_total(self, calculator, baseline):
        assert calculator.expenses_total(baseline.expenses) == Decimal("11070")
        assert calculator.expenses_total(None) == Decimal("0")

    def test_summary(self, calculator, baseline):
        r = calculator.calculate_scenario(baseline)
        monthly_net = Decimal("154225.66") / TWELVE
        assert r.summary.monthly_net_income == monthly_net
        assert r.summary.monthly_expenses == Decimal("11070")
        assert r.summary.monthly_surplus == monthly_net - Decimal("11070")
        assert r.summary.annual_surplus == r.summary.monthly_surplus * TWELVE
        assert r.summary.recommended_emergency_fund == Decimal("66420")
        assert Decimal("13") < r.summary.savings_rate < Decimal("14")

    def test_spending_breakdown(self, calculator, baseline):
        r = calculator.calculate_scenario(baseline)
        monthly_net = Decimal("154225.66") / TWELVE
        fixed = r.spending_breakdown.fixed_costs
        assert fixed.amount == Decimal("5720")
        assert fixed.percentage == Decimal("5720") / monthly_net * 100
        assert fixed.target.min == Decimal("50")

    def test_per_paycheck(self, calculator, baseline):
        r = calculator.calculate_scenario(baseline)
        assert r.person1.per_paycheck_net == Decimal("89035.07") / 26
        assert r.person2.per_paycheck_net == Decimal("65190.59") / 12

    def test_repeatable(self, calculator, baseline):
        assert calculator.calculate_scenario(baseline) == calculator.calculate_scenario(baseline)

    def test_does_not_mutate_input(self, calculator, baseline):
        before = baseline.clone()
        calculator.calculate_scenario(baseline)
        assert baseline == before


class TestSingleEarner:
    def test_missing_member_is_zero(self, calculator, simple_scenario):
        r = calculator.calculate_scenario(simple_scenario)
        assert r.person2.gross == Decimal("0")
        assert r.person2.net_annual == Decimal("0")
        assert r.household.gross_income == Decimal("60000")

    def test_texas_has_no_state_tax(self, calculator, simple_scenario):
        r = calculator.calculate_scenario(simple_scenario)
        assert r.person1.state_tax == Decimal("0")
        # 60000 - 5000 - 15000 = 40000 taxable
        assert r.person1.taxable_income == Decimal("40000")
        assert r.person1.federal_tax == Decimal("4569.00")


class TestMalformedInput:
    def test_empty_mapping(self, calculator):
        r = calculator.calculate_scenario({})
        assert r.household.gross_income == Decimal("0")
        assert r.household.net_income == Decimal("0")
        assert r.summary.savings_rate == Decimal("0")
        assert r.expenses.total == Decimal("0")
        assert r.household.effective_rate == Decimal("0")

    def test_null_sections(self, calculator):
        r = calculator.calculate_scenario({"income": None, "expenses": None, "household": None})
        assert r.household.total_taxes == Decimal("0")
        assert r.spending_breakdown.fixed_costs.percentage == Decimal("0")

    @pytest.mark.parametrize(
        "data,gross,expenses",
        [
            ({"expenses": {"fixedCosts": None}}, "0", "0"),
            ({"expenses": {"ramitCategories": None}}, "0", "0"),
            ({"expenses": {"fixedCosts": {"rent": {"amount": None}}}}, "0", "0"),
            ({"expenses": {"fixedCosts": {"rent": None, "car": {"amount": 300}}}}, "0", "300"),
            ({"income": {"person1": None}}, "0", "0"),
            ({"income": {"person1": {"salary": None}}}, "0", "0"),
            ({"income": {"person1": {"salary": 50000, "preTaxDeductions": None}}}, "50000", "0"),
            ({"household": {"location": None, "filingStatus": None}}, "0", "0"),
        ],
    )
    def test_nested_nulls_load_as_defaults(self, calculator, data, gross, expenses):
        r = calculator.calculate_scenario(data)
        assert r.household.gross_income == Decimal(gross)
        assert r.person1.pre_tax_deductions == Decimal("0")
        assert r.expenses.total == Decimal(expenses)

    def test_raw_mapping_with_camel_keys(self, calculator):
        r = calculator.calculate_scenario({
            "household": {"filingStatus": "single", "location": {"state": "TX"}},
            "income": {"person1": {"salary": 60000, "preTaxDeductions": {"retirement401k": 5000}}},
        })
        assert r.person1.taxable_income == Decimal("40000")

    def test_expenses_without_income(self, calculator):
        r = calculator.calculate_scenario({
            "expenses": {"fixedCosts": {"rent": {"amount": 1000}}},
        })
        assert r.summary.monthly_surplus == Decimal("-1000")
        assert r.summary.savings_rate == Decimal("0")

    def test_invalid_filing_status_propagates(self, calculator):
        with pytest.raises(InvalidFilingStatusError):
            calculator.calculate_scenario({"household": {"filingStatus": "widowed"}})


class TestPerPaycheck:
    @pytest.mark.parametrize(
        "frequency,periods",
        [("weekly", 52), ("biweekly", 26), ("semimonthly", 24), ("monthly", 12)],
    )
    def test_known_frequencies(self, calculator, frequency, periods):
        assert calculator.per_paycheck(Decimal("62400"), frequency) == Decimal("62400") / periods

    def test_unknown_frequency_is_biweekly(self, calculator):
        assert calculator.per_paycheck(Decimal("26000"), "fortnightly") == Decimal("1000")
        assert calculator.per_paycheck(Decimal("26000"), None) == Decimal("1000")


class TestPersonView:
    def test_person1_view(self, calculator, baseline):
        view = calculator.person_view(Assignee.PERSON1, baseline)
        assert view.person == "person1"
        assert view.income.net_annual == Decimal("89035.07")
        assert view.expenses.fixed_costs == Decimal("2650")
        assert view.expenses.investments == Decimal("750")
        assert view.expenses.savings == Decimal("1100")
        assert view.expenses.guilt_free_spending == Decimal("825")
        assert view.total_expenses == Decimal("5325")
        assert view.surplus == Decimal("89035.07") / TWELVE - Decimal("5325")

    def test_person2_view_reuses_result(self, calculator, baseline):
        result = calculator.calculate_scenario(baseline)
        view = calculator.person_view("person2", baseline, result)
        assert view.income == result.person2
        assert view.expenses.fixed_costs == Decimal("3070")

    def test_person_percentages_use_own_income(self, calculator, baseline):
        view = calculator.person_view(Assignee.PERSON2, baseline)
        monthly = Decimal("65190.59") / TWELVE
        assert view.spending_breakdown.fixed_costs.percentage == Decimal("3070") / monthly * 100


class TestWhatIf:
    def test_raise_increases_net(self, calculator, baseline):
        base = calculator.calculate_scenario(baseline)
        update = ScenarioUpdate(person1=PersonIncomeUpdate(salary=Decimal("150000")))
        result = calculator.what_if(baseline, update)
        assert result.household.net_income > base.household.net_income
        assert result.person2 == base.person2

    def test_input_scenario_untouched(self, calculator, baseline):
        update = ScenarioUpdate(
            expenses=[ExpenseUpdate(path=["fixedCosts", "housing", "rent"], amount=Decimal("0"))]
        )
        result = calculator.what_if(baseline, update)
        assert result.expenses.breakdown.fixed_costs == Decimal("2220")
        assert baseline.expenses.fixed_costs["housing"]["rent"].amount == Decimal("3500")


class TestCompare:
    def test_differences_are_second_minus_first(self, calculator):
        first = conservative_scenario()
        second = optimistic_scenario()
        comparison = calculator.compare(first, second)
        a, b = comparison.first_result, comparison.second_result
        assert comparison.first == "Conservative"
        assert comparison.second == "Optimistic"
        assert comparison.differences.net_income == b.household.net_income - a.household.net_income
        assert comparison.differences.expenses == b.expenses.total - a.expenses.total
        assert comparison.differences.surplus == b.summary.monthly_surplus - a.summary.monthly_surplus
        assert comparison.differences.net_income > 0

    def test_compare_with_self(self, calculator, baseline):
        comparison = calculator.compare(baseline, baseline.clone())
        assert comparison.differences.net_income == Decimal("0")
        assert comparison.differences.savings_rate == Decimal("0")
