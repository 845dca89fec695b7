"""Scenario storage and built-in defaults."""

from conscious_spending.scenarios.defaults import (
    BASELINE,
    CONSERVATIVE,
    OPTIMISTIC,
    baseline_scenario,
    default_scenarios,
)
from conscious_spending.scenarios.store import ScenarioObserver, ScenarioStore

__all__ = [
    "BASELINE",
    "CONSERVATIVE",
    "OPTIMISTIC",
    "ScenarioObserver",
    "ScenarioStore",
    "baseline_scenario",
    "default_scenarios",
]
