"""Tax bracket and policy configuration.

Federal brackets, standard deductions, FICA constants, state rules, and the
conscious-spending category targets, all for tax year 2025.
Never hardcode these in computation functions.

Brackets are (lower_bound, upper_bound, rate) with an upper bound of None for
the unbounded top bracket.
"""

from dataclasses import dataclass
from decimal import Decimal

from conscious_spending.models.enums import FilingStatus, StateRuleType

Bracket = tuple[Decimal, Decimal | None, Decimal]

# ---------------------------------------------------------------------------
# Federal ordinary income brackets: {filing_status: [(lower, upper, rate), ...]}
# ---------------------------------------------------------------------------
FEDERAL_BRACKETS: dict[FilingStatus, list[Bracket]] = {
    FilingStatus.SINGLE: [
        (Decimal("0"), Decimal("11550"), Decimal("0.10")),
        (Decimal("11550"), Decimal("46650"), Decimal("0.12")),
        (Decimal("46650"), Decimal("100525"), Decimal("0.22")),
        (Decimal("100525"), Decimal("191950"), Decimal("0.24")),
        (Decimal("191950"), Decimal("243725"), Decimal("0.32")),
        (Decimal("243725"), Decimal("609350"), Decimal("0.35")),
        (Decimal("609350"), None, Decimal("0.37")),
    ],
    FilingStatus.MFJ: [
        (Decimal("0"), Decimal("23100"), Decimal("0.10")),
        (Decimal("23100"), Decimal("93300"), Decimal("0.12")),
        (Decimal("93300"), Decimal("201050"), Decimal("0.22")),
        (Decimal("201050"), Decimal("383900"), Decimal("0.24")),
        (Decimal("383900"), Decimal("487450"), Decimal("0.32")),
        (Decimal("487450"), Decimal("731200"), Decimal("0.35")),
        (Decimal("731200"), None, Decimal("0.37")),
    ],
    FilingStatus.MFS: [
        (Decimal("0"), Decimal("11550"), Decimal("0.10")),
        (Decimal("11550"), Decimal("46650"), Decimal("0.12")),
        (Decimal("46650"), Decimal("100525"), Decimal("0.22")),
        (Decimal("100525"), Decimal("191950"), Decimal("0.24")),
        (Decimal("191950"), Decimal("243725"), Decimal("0.32")),
        (Decimal("243725"), Decimal("365600"), Decimal("0.35")),
        (Decimal("365600"), None, Decimal("0.37")),
    ],
    FilingStatus.HOH: [
        (Decimal("0"), Decimal("16550"), Decimal("0.10")),
        (Decimal("16550"), Decimal("63100"), Decimal("0.12")),
        (Decimal("63100"), Decimal("100500"), Decimal("0.22")),
        (Decimal("100500"), Decimal("191950"), Decimal("0.24")),
        (Decimal("191950"), Decimal("243700"), Decimal("0.32")),
        (Decimal("243700"), Decimal("609350"), Decimal("0.35")),
        (Decimal("609350"), None, Decimal("0.37")),
    ],
}

# ---------------------------------------------------------------------------
# Federal standard deduction
# ---------------------------------------------------------------------------
FEDERAL_STANDARD_DEDUCTION: dict[FilingStatus, Decimal] = {
    FilingStatus.SINGLE: Decimal("15000"),
    FilingStatus.MFJ: Decimal("30000"),
    FilingStatus.MFS: Decimal("15000"),
    FilingStatus.HOH: Decimal("22500"),
}

# ---------------------------------------------------------------------------
# FICA (Social Security + Medicare)
# Additional Medicare threshold is applied per earner, not per filing status.
# ---------------------------------------------------------------------------
SOCIAL_SECURITY_RATE = Decimal("0.062")
SOCIAL_SECURITY_WAGE_BASE = Decimal("176100")
MEDICARE_RATE = Decimal("0.0145")
ADDITIONAL_MEDICARE_RATE = Decimal("0.009")
ADDITIONAL_MEDICARE_THRESHOLD = Decimal("200000")


# ---------------------------------------------------------------------------
# State income tax rules
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class StateTaxRule:
    kind: StateRuleType
    rate: Decimal = Decimal("0")
    brackets: tuple[Bracket, ...] = ()


NO_INCOME_TAX = StateTaxRule(StateRuleType.NONE)

# Applied to jurisdictions missing from STATE_TAX_RULES.
UNKNOWN_STATE_RATE = Decimal("0.05")


def _flat(rate: str) -> StateTaxRule:
    return StateTaxRule(StateRuleType.FLAT, rate=Decimal(rate))


def _progressive(*brackets: tuple[str, str | None, str]) -> StateTaxRule:
    return StateTaxRule(
        StateRuleType.PROGRESSIVE,
        brackets=tuple(
            (Decimal(lower), Decimal(upper) if upper is not None else None, Decimal(rate))
            for lower, upper, rate in brackets
        ),
    )


STATE_TAX_RULES: dict[str, StateTaxRule] = {
    "AK": NO_INCOME_TAX,
    "FL": NO_INCOME_TAX,
    "NV": NO_INCOME_TAX,
    "NH": NO_INCOME_TAX,  # interest/dividends tax repealed for 2025
    "SD": NO_INCOME_TAX,
    "TN": NO_INCOME_TAX,
    "TX": NO_INCOME_TAX,
    "WA": NO_INCOME_TAX,
    "WY": NO_INCOME_TAX,
    "CO": _flat("0.044"),
    "IL": _flat("0.0495"),
    "IN": _flat("0.030"),
    "IA": _flat("0.038"),
    "KY": _flat("0.045"),
    "MI": _flat("0.0425"),
    "NC": _flat("0.045"),
    "PA": _flat("0.0307"),
    "UT": _flat("0.0485"),
    "CA": _progressive(
        ("0", "10099", "0.01"),
        ("10099", "23942", "0.02"),
        ("23942", "37788", "0.04"),
        ("37788", "52455", "0.06"),
        ("52455", "66295", "0.08"),
        ("66295", "338639", "0.093"),
        ("338639", "406364", "0.103"),
        ("406364", "677278", "0.113"),
        ("677278", None, "0.123"),
    ),
    "NY": _progressive(
        ("0", "8500", "0.04"),
        ("8500", "11700", "0.045"),
        ("11700", "13900", "0.0525"),
        ("13900", "80650", "0.0585"),
        ("80650", "215400", "0.0625"),
        ("215400", "1077550", "0.0685"),
        ("1077550", "5000000", "0.0965"),
        ("5000000", "25000000", "0.103"),
        ("25000000", None, "0.109"),
    ),
}

# ---------------------------------------------------------------------------
# Conscious-spending category targets, as % of monthly net income: (min, max)
# ---------------------------------------------------------------------------
CATEGORY_TARGETS: dict[str, tuple[Decimal, Decimal]] = {
    "fixedCosts": (Decimal("50"), Decimal("60")),
    "investments": (Decimal("10"), Decimal("10")),
    "savings": (Decimal("5"), Decimal("10")),
    "guiltFreeSpending": (Decimal("20"), Decimal("35")),
}

# ---------------------------------------------------------------------------
# Paychecks per year
# ---------------------------------------------------------------------------
PAY_PERIODS_PER_YEAR: dict[str, int] = {
    "weekly": 52,
    "biweekly": 26,
    "semimonthly": 24,
    "monthly": 12,
}
DEFAULT_PAY_PERIODS = 26

EMERGENCY_FUND_MONTHS = 6
