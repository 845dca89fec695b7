"""Built-in scenarios seeded on first run."""

from datetime import datetime
from decimal import Decimal

from conscious_spending.models.enums import Assignee as A
from conscious_spending.models.enums import FilingStatus
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

BASELINE = "baseline"
OPTIMISTIC = "optimistic"
CONSERVATIVE = "conservative"

OPTIMISTIC_SALARY_FACTOR = Decimal("1.20")
CONSERVATIVE_SALARY_FACTOR = Decimal("0.85")


def _item(amount: int, assigned_to: A = A.SHARED) -> ExpenseItem:
    return ExpenseItem(amount=Decimal(amount), assigned_to=assigned_to)


def _scale(value: Decimal, factor: Decimal) -> Decimal:
    return (value * factor).quantize(Decimal("1"))


def baseline_scenario(now: datetime | None = None) -> Scenario:
    """Reference figures for a two-earner household filing jointly in CA."""
    metadata = ScenarioMetadata(
        name="Baseline 2025",
        description="Current income and spending patterns",
    )
    if now is not None:
        metadata.created = metadata.last_modified = now

    return Scenario(
        metadata=metadata,
        household=Household(
            location=Location(state="CA", locality="San Francisco"),
            filing_status=FilingStatus.MFJ,
            members=["person1", "person2"],
        ),
        income=Income(
            person1=PersonIncome(
                name="Partner 1",
                salary=Decimal("120000"),
                bonus=Decimal("15000"),
                other_income=Decimal("2000"),
                pay_frequency="biweekly",
                pre_tax_deductions=PreTaxDeductions(
                    retirement_401k=Decimal("18000"),
                    health_insurance=Decimal("3600"),
                    hsa=Decimal("4300"),
                ),
            ),
            person2=PersonIncome(
                name="Partner 2",
                salary=Decimal("85000"),
                bonus=Decimal("5000"),
                pay_frequency="monthly",
                pre_tax_deductions=PreTaxDeductions(retirement_401k=Decimal("12000")),
            ),
        ),
        expenses=ExpenseCategoryTree(
            fixed_costs=ExpenseGroup({
                "housing": ExpenseGroup({
                    "rent": _item(3500),
                    "utilities": _item(200),
                    "insurance": _item(150, A.PERSON1),
                }),
                "transportation": ExpenseGroup({
                    "carPayment": _item(450, A.PERSON2),
                    "carInsurance": _item(120, A.PERSON2),
                    "gasAndMaintenance": _item(300),
                }),
                "essentials": ExpenseGroup({
                    "groceries": _item(800),
                    "cellPhone": _item(120),
                    "internet": _item(80),
                }),
            }),
            investments=ExpenseGroup({
                "retirement": _item(1000),
                "brokerage": _item(500),
            }),
            savings=ExpenseGroup({
                "emergency": _item(800),
                "vacation": _item(400),
                "houseDownPayment": _item(1000),
            }),
            guilt_free_spending=ExpenseGroup({
                "dining": _item(800),
                "entertainment": _item(300),
                "hobbies": _item(200, A.PERSON1),
                "personalShopping": _item(200, A.PERSON2),
                "subscriptions": _item(150),
            }),
        ),
    )


def optimistic_scenario(now: datetime | None = None) -> Scenario:
    """Baseline with 20% salary growth, larger bonuses, and more saved."""
    scenario = baseline_scenario(now)
    p1, p2 = scenario.income.person1, scenario.income.person2
    p1.salary = _scale(p1.salary, OPTIMISTIC_SALARY_FACTOR)
    p2.salary = _scale(p2.salary, OPTIMISTIC_SALARY_FACTOR)
    p1.bonus = Decimal("20000")
    p2.bonus = Decimal("8000")
    p1.pre_tax_deductions.retirement_401k = Decimal("23500")
    p2.pre_tax_deductions.retirement_401k = Decimal("15000")

    expenses = scenario.expenses
    expenses.investments["retirement"].amount = Decimal("1500")
    expenses.investments["brokerage"].amount = Decimal("800")
    expenses.savings["emergency"].amount = Decimal("1000")
    expenses.savings["houseDownPayment"].amount = Decimal("1500")

    scenario.metadata.name = "Optimistic"
    scenario.metadata.description = "Higher income growth with increased savings"
    return scenario


def conservative_scenario(now: datetime | None = None) -> Scenario:
    """Baseline with 15% lower salaries and tighter discretionary spending."""
    scenario = baseline_scenario(now)
    p1, p2 = scenario.income.person1, scenario.income.person2
    p1.salary = _scale(p1.salary, CONSERVATIVE_SALARY_FACTOR)
    p2.salary = _scale(p2.salary, CONSERVATIVE_SALARY_FACTOR)
    p1.bonus = Decimal("8000")
    p2.bonus = Decimal("2000")

    expenses = scenario.expenses
    expenses.fixed_costs["housing"]["rent"].amount = Decimal("3000")
    expenses.guilt_free_spending["dining"].amount = Decimal("600")
    expenses.guilt_free_spending["entertainment"].amount = Decimal("200")
    expenses.savings["vacation"].amount = Decimal("200")

    scenario.metadata.name = "Conservative"
    scenario.metadata.description = "Reduced income with tighter spending"
    return scenario


def default_scenarios(now: datetime | None = None) -> dict[str, Scenario]:
    return {
        BASELINE: baseline_scenario(now),
        OPTIMISTIC: optimistic_scenario(now),
        CONSERVATIVE: conservative_scenario(now),
    }
