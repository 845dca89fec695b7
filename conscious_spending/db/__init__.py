"""Database layer for the Conscious Spending Planner."""

from conscious_spending.db.repository import ScenarioRepository
from conscious_spending.db.schema import create_schema

__all__ = ["ScenarioRepository", "create_schema"]
