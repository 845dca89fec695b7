"""Typed partial updates for scenarios.

Every update model forbids unknown keys, so a partial update can only ever
touch fields that exist on the scenario.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from conscious_spending.exceptions import ScenarioUpdateError
from conscious_spending.models.enums import Assignee, FilingStatus, SpendingCategory
from conscious_spending.models.scenario import (
    ExpenseGroup,
    ExpenseItem,
    Money,
    PersonIncome,
    Scenario,
)


class _UpdateModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )


class PreTaxDeductionsUpdate(_UpdateModel):
    retirement_401k: Money | None = Field(default=None, alias="retirement401k")
    health_insurance: Money | None = None
    hsa: Money | None = None
    other: Money | None = None


class PersonIncomeUpdate(_UpdateModel):
    name: str | None = None
    salary: Money | None = None
    bonus: Money | None = None
    other_income: Money | None = None
    pay_frequency: str | None = None
    pre_tax_deductions: PreTaxDeductionsUpdate | None = None


class HouseholdUpdate(_UpdateModel):
    state: str | None = None
    locality: str | None = None
    filing_status: FilingStatus | None = None

    @field_validator("filing_status", mode="before")
    @classmethod
    def _parse_filing_status(cls, value: Any) -> FilingStatus | None:
        return None if value is None else FilingStatus.parse(value)


class ExpenseUpdate(_UpdateModel):
    """Set the amount and/or assignee of the leaf at ``path``.

    ``path`` starts with a category name (e.g. ``["fixedCosts", "housing",
    "rent"]``). Missing intermediate groups and the leaf itself are created.
    """

    path: list[str] = Field(min_length=2)
    amount: Money | None = None
    assigned_to: Assignee | None = None


class ScenarioUpdate(_UpdateModel):
    name: str | None = None
    description: str | None = None
    household: HouseholdUpdate | None = None
    person1: PersonIncomeUpdate | None = None
    person2: PersonIncomeUpdate | None = None
    expenses: list[ExpenseUpdate] = Field(default_factory=list)

    def apply_to(self, scenario: Scenario) -> Scenario:
        """Return a copy of ``scenario`` with this update applied."""
        updated = scenario.clone()

        if self.name is not None:
            updated.metadata.name = self.name
        if self.description is not None:
            updated.metadata.description = self.description

        if self.household is not None:
            hh = self.household
            if hh.state is not None:
                updated.household.location.state = hh.state
            if hh.locality is not None:
                updated.household.location.locality = hh.locality
            if hh.filing_status is not None:
                updated.household.filing_status = hh.filing_status

        if self.person1 is not None:
            updated.income.person1 = _apply_person(updated.income.person1, self.person1)
        if self.person2 is not None:
            updated.income.person2 = _apply_person(updated.income.person2, self.person2)

        for change in self.expenses:
            _apply_expense(updated, change)

        return updated


def _apply_person(
    person: PersonIncome | None, change: PersonIncomeUpdate
) -> PersonIncome:
    person = person if person is not None else PersonIncome()
    fields = change.model_dump(exclude_none=True, exclude={"pre_tax_deductions"})
    for field, value in fields.items():
        setattr(person, field, value)
    if change.pre_tax_deductions is not None:
        deductions = change.pre_tax_deductions.model_dump(exclude_none=True)
        for field, value in deductions.items():
            setattr(person.pre_tax_deductions, field, value)
    return person


def _apply_expense(scenario: Scenario, change: ExpenseUpdate) -> None:
    category, *groups, leaf_name = change.path
    try:
        SpendingCategory(category)
    except ValueError:
        raise ScenarioUpdateError(change.path, f"unknown category '{category}'") from None

    node = scenario.expenses.category(category)
    for name in groups:
        child = node.root.get(name)
        if child is None:
            child = ExpenseGroup()
            node.root[name] = child
        elif isinstance(child, ExpenseItem):
            raise ScenarioUpdateError(change.path, f"'{name}' is an expense item, not a group")
        node = child

    leaf = node.root.get(leaf_name)
    if isinstance(leaf, ExpenseGroup):
        raise ScenarioUpdateError(change.path, f"'{leaf_name}' is a group, not an expense item")
    if leaf is None:
        leaf = ExpenseItem()
        node.root[leaf_name] = leaf
    if change.amount is not None:
        leaf.amount = change.amount
    if change.assigned_to is not None:
        leaf.assigned_to = change.assigned_to
