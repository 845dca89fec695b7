"""Federal, state, and FICA tax engine.

Implements:
  - Progressive federal income tax by filing status
  - State income tax (none / flat / progressive rules, flat 5% for unknown states)
  - FICA: Social Security up to the wage base, Medicare, Additional Medicare
  - Effective and combined federal + state marginal rates

All methods are pure: they read the bracket tables and their arguments only.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from conscious_spending.engines.brackets import (
    ADDITIONAL_MEDICARE_RATE,
    ADDITIONAL_MEDICARE_THRESHOLD,
    FEDERAL_BRACKETS,
    FEDERAL_STANDARD_DEDUCTION,
    MEDICARE_RATE,
    SOCIAL_SECURITY_RATE,
    SOCIAL_SECURITY_WAGE_BASE,
    STATE_TAX_RULES,
    UNKNOWN_STATE_RATE,
    Bracket,
)
from conscious_spending.exceptions import InvalidFilingStatusError
from conscious_spending.models.enums import FilingStatus, StateRuleType
from conscious_spending.models.results import FICABreakdown, TaxResult

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def to_cents(amount: Decimal) -> Decimal:
    """Round to the cent, half-up."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def as_decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class TaxEngine:
    """Computes the per-person tax breakdown."""

    def federal_tax(
        self, taxable_income: Decimal, filing_status: FilingStatus | str
    ) -> Decimal:
        """Compute federal income tax using progressive brackets."""
        brackets = self._federal_brackets(filing_status)
        return to_cents(self._apply_brackets(as_decimal(taxable_income), brackets))

    def state_tax(self, taxable_income: Decimal, state: str) -> Decimal:
        """Compute state income tax. Unknown states fall back to a flat 5%."""
        taxable_income = as_decimal(taxable_income)
        rule = STATE_TAX_RULES.get(state)
        if rule is None:
            logger.debug("No tax rule for state %r, using flat %s", state, UNKNOWN_STATE_RATE)
            return to_cents(taxable_income * UNKNOWN_STATE_RATE)

        if rule.kind == StateRuleType.FLAT:
            return to_cents(taxable_income * rule.rate)
        if rule.kind == StateRuleType.PROGRESSIVE:
            return to_cents(self._apply_brackets(taxable_income, rule.brackets))
        return ZERO

    def fica(self, gross_wages: Decimal) -> FICABreakdown:
        """Compute Social Security, Medicare, and Additional Medicare tax.

        Each component is rounded to the cent before summing into the total.
        """
        gross_wages = as_decimal(gross_wages)
        social_security = to_cents(
            min(gross_wages, SOCIAL_SECURITY_WAGE_BASE) * SOCIAL_SECURITY_RATE
        )
        medicare = to_cents(gross_wages * MEDICARE_RATE)
        additional_medicare = to_cents(
            max(gross_wages - ADDITIONAL_MEDICARE_THRESHOLD, ZERO)
            * ADDITIONAL_MEDICARE_RATE
        )
        return FICABreakdown(
            social_security=social_security,
            medicare=medicare,
            additional_medicare=additional_medicare,
            total=to_cents(social_security + medicare + additional_medicare),
        )

    def standard_deduction(self, filing_status: FilingStatus | str) -> Decimal:
        """Look up the standard deduction. Unknown statuses get the single amount."""
        try:
            status = FilingStatus.parse(filing_status)
        except InvalidFilingStatusError:
            status = FilingStatus.SINGLE
        return FEDERAL_STANDARD_DEDUCTION.get(
            status, FEDERAL_STANDARD_DEDUCTION[FilingStatus.SINGLE]
        )

    @staticmethod
    def effective_rate(total_tax: Decimal, gross_income: Decimal) -> Decimal:
        gross_income = as_decimal(gross_income)
        if gross_income <= ZERO:
            return ZERO
        return as_decimal(total_tax) / gross_income * HUNDRED

    def marginal_rate(
        self,
        taxable_income: Decimal,
        filing_status: FilingStatus | str,
        state: str,
    ) -> Decimal:
        """Combined federal + state marginal rate, as a percentage."""
        taxable_income = as_decimal(taxable_income)
        federal_rate = self._top_rate(
            taxable_income, self._federal_brackets(filing_status)
        )

        state_rate = ZERO
        rule = STATE_TAX_RULES.get(state)
        if rule is not None:
            if rule.kind == StateRuleType.FLAT:
                state_rate = rule.rate
            elif rule.kind == StateRuleType.PROGRESSIVE:
                state_rate = self._top_rate(taxable_income, rule.brackets)

        return (federal_rate + state_rate) * HUNDRED

    def calculate_all_taxes(
        self,
        gross_income: Decimal,
        pre_tax_deductions: Decimal,
        filing_status: FilingStatus | str,
        state: str,
    ) -> TaxResult:
        """Compute the full tax breakdown for one earner.

        FICA applies to wages after pre-tax deductions (never below zero), not
        to taxable income.
        Net income is gross minus pre-tax deductions minus total tax and is
        passed through unclamped.
        """
        gross_income = as_decimal(gross_income)
        pre_tax_deductions = as_decimal(pre_tax_deductions)

        standard_deduction = self.standard_deduction(filing_status)
        taxable_income = max(gross_income - pre_tax_deductions - standard_deduction, ZERO)

        federal = self.federal_tax(taxable_income, filing_status)
        state_tax = self.state_tax(taxable_income, state)
        fica = self.fica(max(gross_income - pre_tax_deductions, ZERO))

        total_tax = federal + state_tax + fica.total
        net_income = gross_income - pre_tax_deductions - total_tax

        return TaxResult(
            gross_income=gross_income,
            pre_tax_deductions=pre_tax_deductions,
            standard_deduction=standard_deduction,
            taxable_income=taxable_income,
            federal_tax=federal,
            state_tax=state_tax,
            fica=fica,
            total_tax=total_tax,
            net_income=net_income,
            effective_rate=self.effective_rate(total_tax, gross_income),
            marginal_rate=self.marginal_rate(taxable_income, filing_status, state),
        )

    # ------------------------------------------------------------------
    # Bracket helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _federal_brackets(filing_status: FilingStatus | str) -> list[Bracket]:
        status = FilingStatus.parse(filing_status)
        return FEDERAL_BRACKETS[status]

    @staticmethod
    def _apply_brackets(income: Decimal, brackets: "list[Bracket] | tuple[Bracket, ...]") -> Decimal:
        """Apply progressive tax brackets to income."""
        tax = ZERO
        for lower, upper, rate in brackets:
            if income <= lower:
                break
            top = income if upper is None else min(income, upper)
            tax += (top - lower) * rate
        return tax

    @staticmethod
    def _top_rate(income: Decimal, brackets: "list[Bracket] | tuple[Bracket, ...]") -> Decimal:
        """Rate of the highest bracket whose lower bound income exceeds."""
        rate = ZERO
        for lower, _upper, bracket_rate in brackets:
            if income > lower:
                rate = bracket_rate
        return rate
