"""Conscious Spending Planner: household tax and cash-flow calculations."""

__version__ = "0.1.0"
