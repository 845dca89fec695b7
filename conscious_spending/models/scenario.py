"""Scenario input models: household, income, and the expense category tree.

The JSON shape produced by these models (camelCase keys, ISO 8601 timestamps,
plain decimal numbers) is the persisted scenario format.
"""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, Any, Union

from pydantic import (
    AfterValidator,
    AliasChoices,
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    PlainSerializer,
    RootModel,
    Tag,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from conscious_spending.models.enums import Assignee, FilingStatus, PayFrequency


def _decimal_to_number(value: Decimal) -> int | float:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


CENT = Decimal("0.01")

# Fifteen significant digits survive the float conversion in JSON exports.
MAX_MONEY = Decimal("9999999999999.99")


def _to_cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


# Non-negative money amount held to the cent, serialized to JSON as a plain number.
Money = Annotated[
    Decimal,
    Field(ge=0, le=MAX_MONEY, allow_inf_nan=False),
    AfterValidator(_to_cents),
    PlainSerializer(_decimal_to_number, when_used="json"),
]

ZERO = Decimal("0")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _without_nulls(data: Any) -> Any:
    if isinstance(data, dict):
        return {key: value for key, value in data.items() if value is not None}
    return data


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # Null fields load as their defaults so partial input still computes.
        return _without_nulls(data)


# ---------------------------------------------------------------------------
# Metadata and household
# ---------------------------------------------------------------------------


class ScenarioMetadata(_CamelModel):
    name: str = ""
    description: str = ""
    created: datetime = Field(default_factory=_utcnow)
    last_modified: datetime = Field(default_factory=_utcnow)


class Location(_CamelModel):
    state: str = "CA"
    locality: str = ""


class Household(_CamelModel):
    location: Location = Field(default_factory=Location)
    filing_status: FilingStatus = FilingStatus.MFJ
    members: list[str] = Field(default_factory=lambda: ["person1", "person2"])

    @field_validator("filing_status", mode="before")
    @classmethod
    def _parse_filing_status(cls, value: Any) -> FilingStatus:
        # InvalidFilingStatusError is not a ValueError, so it propagates as-is.
        return FilingStatus.parse(value)


# ---------------------------------------------------------------------------
# Income
# ---------------------------------------------------------------------------


class PreTaxDeductions(_CamelModel):
    retirement_401k: Money = Field(default=ZERO, alias="retirement401k")
    health_insurance: Money = ZERO
    hsa: Money = ZERO
    other: Money = ZERO

    @property
    def total(self) -> Decimal:
        return self.retirement_401k + self.health_insurance + self.hsa + self.other


class PersonIncome(_CamelModel):
    name: str = ""
    salary: Money = ZERO
    bonus: Money = ZERO
    other_income: Money = ZERO
    # Kept as a plain string: unrecognized frequencies fall back to biweekly.
    pay_frequency: str = PayFrequency.BIWEEKLY.value
    pre_tax_deductions: PreTaxDeductions = Field(
        default_factory=PreTaxDeductions,
        alias="preTaxDeductions",
        validation_alias=AliasChoices(
            "preTaxDeductions", "preTexDeductions", "pre_tax_deductions"
        ),
    )

    @property
    def gross(self) -> Decimal:
        return self.salary + self.bonus + self.other_income


class Income(_CamelModel):
    person1: PersonIncome | None = None
    person2: PersonIncome | None = None

    def for_person(self, person: Assignee | str) -> PersonIncome | None:
        return self.person2 if Assignee(person) == Assignee.PERSON2 else self.person1


# ---------------------------------------------------------------------------
# Expense category tree
# ---------------------------------------------------------------------------


class ExpenseItem(_CamelModel):
    """A monthly expense leaf."""

    amount: Money = ZERO
    assigned_to: Assignee = Assignee.SHARED


def _node_kind(value: Any) -> str:
    if isinstance(value, ExpenseItem):
        return "item"
    if isinstance(value, dict) and "amount" in value:
        return "item"
    return "group"


ExpenseNode = Annotated[
    Union[
        Annotated[ExpenseItem, Tag("item")],
        Annotated["ExpenseGroup", Tag("group")],
    ],
    Discriminator(_node_kind),
]


class ExpenseGroup(RootModel[dict[str, ExpenseNode]]):
    """A named mapping of expense items and nested groups."""

    root: dict[str, ExpenseNode] = Field(default_factory=dict)

    def __getitem__(self, key: str) -> "ExpenseItem | ExpenseGroup":
        return self.root[key]

    def __contains__(self, key: object) -> bool:
        return key in self.root

    @model_validator(mode="before")
    @classmethod
    def _drop_non_nodes(cls, data: Any) -> Any:
        if data is None:
            return {}
        if isinstance(data, dict):
            return {
                key: value
                for key, value in data.items()
                if isinstance(value, (dict, BaseModel))
            }
        return data

    def items(self):
        return self.root.items()


ExpenseGroup.model_rebuild()


class ExpenseCategoryTree(_CamelModel):
    fixed_costs: ExpenseGroup = Field(default_factory=ExpenseGroup)
    investments: ExpenseGroup = Field(default_factory=ExpenseGroup)
    savings: ExpenseGroup = Field(default_factory=ExpenseGroup)
    guilt_free_spending: ExpenseGroup = Field(default_factory=ExpenseGroup)

    @model_validator(mode="before")
    @classmethod
    def _unwrap_legacy(cls, data: Any) -> Any:
        # Older exports nest the four categories under "ramitCategories".
        if isinstance(data, dict) and "ramitCategories" in data:
            data = data["ramitCategories"] or {}
        return _without_nulls(data)

    def category(self, name: str) -> ExpenseGroup:
        return getattr(self, _CATEGORY_FIELDS[name])


_CATEGORY_FIELDS = {
    "fixedCosts": "fixed_costs",
    "investments": "investments",
    "savings": "savings",
    "guiltFreeSpending": "guilt_free_spending",
}


# ---------------------------------------------------------------------------
# Scenario
# ---------------------------------------------------------------------------


class Scenario(_CamelModel):
    metadata: ScenarioMetadata = Field(default_factory=ScenarioMetadata)
    household: Household = Field(default_factory=Household)
    income: Income = Field(default_factory=Income)
    expenses: ExpenseCategoryTree = Field(default_factory=ExpenseCategoryTree)

    def clone(self) -> "Scenario":
        """Return a deep copy sharing no mutable state with this scenario."""
        return self.model_copy(deep=True)

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
