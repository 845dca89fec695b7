"""Shared test fixtures for the Conscious Spending Planner."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from conscious_spending.db.repository import ScenarioRepository
from conscious_spending.db.schema import create_schema
from conscious_spending.engines.household import HouseholdCalculator
from conscious_spending.engines.tax import TaxEngine
from conscious_spending.models.enums import Assignee, FilingStatus
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
from conscious_spending.scenarios.defaults import baseline_scenario
from conscious_spending.scenarios.store import ScenarioStore

FIXED_NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine() -> TaxEngine:
    return TaxEngine()


@pytest.fixture
def calculator() -> HouseholdCalculator:
    return HouseholdCalculator()


@pytest.fixture
def baseline() -> Scenario:
    return baseline_scenario(FIXED_NOW)


@pytest.fixture
def simple_scenario() -> Scenario:
    """Single earner in Texas with a flat expense list."""
    return Scenario(
        metadata=ScenarioMetadata(name="Simple", created=FIXED_NOW, last_modified=FIXED_NOW),
        household=Household(
            location=Location(state="TX"),
            filing_status=FilingStatus.SINGLE,
            members=["person1"],
        ),
        income=Income(
            person1=PersonIncome(
                name="Solo",
                salary=Decimal("60000"),
                pay_frequency="monthly",
                pre_tax_deductions=PreTaxDeductions(retirement_401k=Decimal("5000")),
            ),
        ),
        expenses=ExpenseCategoryTree(
            fixed_costs=ExpenseGroup({"rent": ExpenseItem(amount=Decimal("1500"))}),
            investments=ExpenseGroup({
                "brokerage": ExpenseItem(amount=Decimal("300"), assigned_to=Assignee.PERSON1),
            }),
            savings=ExpenseGroup({"emergency": ExpenseItem(amount=Decimal("200"))}),
            guilt_free_spending=ExpenseGroup({"dining": ExpenseItem(amount=Decimal("400"))}),
        ),
    )


@pytest.fixture
def repo(tmp_path) -> ScenarioRepository:
    conn = create_schema(tmp_path / "test.db")
    yield ScenarioRepository(conn)
    conn.close()


@pytest.fixture
def store(repo) -> ScenarioStore:
    return ScenarioStore(repo, clock=lambda: FIXED_NOW)


@pytest.fixture
def memory_store() -> ScenarioStore:
    return ScenarioStore(clock=lambda: FIXED_NOW)
