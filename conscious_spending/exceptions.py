"""Custom exceptions for the Conscious Spending Planner."""


class PlannerError(Exception):
    """Base exception for planner errors."""


class InvalidFilingStatusError(PlannerError):
    """Raised when a filing status has no federal bracket table."""

    def __init__(self, filing_status: object):
        self.filing_status = filing_status
        super().__init__(f"Invalid filing status: {filing_status}")


class ScenarioError(PlannerError):
    """Base exception for scenario store operations."""


class DuplicateScenarioError(ScenarioError):
    """Raised when a scenario name is already taken."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Scenario already exists: {name}")


class ScenarioNotFoundError(ScenarioError):
    """Raised when a scenario name does not exist in the store."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Scenario not found: {name}")


class ProtectedScenarioError(ScenarioError):
    """Raised when attempting to delete the protected baseline scenario."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Cannot delete protected scenario: {name}")


class ScenarioUpdateError(ScenarioError):
    """Raised when a partial update targets an invalid expense path."""

    def __init__(self, path: list[str], message: str):
        self.path = path
        super().__init__(f"Invalid update for '{'.'.join(path)}': {message}")


class ScenarioImportError(PlannerError):
    """Raised when scenario import data cannot be parsed."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Import error from {source}: {message}")
