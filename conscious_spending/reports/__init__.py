"""Report generators."""

from conscious_spending.reports.household_summary import HouseholdSummaryGenerator

__all__ = ["HouseholdSummaryGenerator"]
