"""Enumerations for the Conscious Spending Planner."""

from enum import StrEnum

from conscious_spending.exceptions import InvalidFilingStatusError


class FilingStatus(StrEnum):
    SINGLE = "single"
    MFJ = "marriedFilingJointly"
    MFS = "marriedFilingSeparately"
    HOH = "headOfHousehold"

    @classmethod
    def parse(cls, value: "str | FilingStatus") -> "FilingStatus":
        """Resolve a filing status from its value or a short CLI code."""
        if isinstance(value, FilingStatus):
            return value
        if isinstance(value, str):
            key = value.strip()
            if key.upper() in cls.__members__:
                return cls[key.upper()]
            for status in cls:
                if status.value.lower() == key.lower():
                    return status
        raise InvalidFilingStatusError(value)


class PayFrequency(StrEnum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    SEMIMONTHLY = "semimonthly"
    MONTHLY = "monthly"


class Assignee(StrEnum):
    PERSON1 = "person1"
    PERSON2 = "person2"
    SHARED = "shared"


class SpendingCategory(StrEnum):
    FIXED_COSTS = "fixedCosts"
    INVESTMENTS = "investments"
    SAVINGS = "savings"
    GUILT_FREE_SPENDING = "guiltFreeSpending"


class StateRuleType(StrEnum):
    NONE = "none"
    FLAT = "flat"
    PROGRESSIVE = "progressive"
