"""Named scenario collection with an explicit current-scenario pointer.

The store owns the scenarios and which one is current. It performs no tax
math. When constructed with a repository it loads from it on start and writes
every change through to it.
"""

import json
import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any, Protocol

from pydantic import ValidationError

from conscious_spending.exceptions import (
    DuplicateScenarioError,
    InvalidFilingStatusError,
    ProtectedScenarioError,
    ScenarioImportError,
    ScenarioNotFoundError,
)
from conscious_spending.models.scenario import Scenario, ScenarioMetadata
from conscious_spending.models.updates import ScenarioUpdate
from conscious_spending.scenarios.defaults import BASELINE, baseline_scenario, default_scenarios

logger = logging.getLogger(__name__)


class ScenarioObserver(Protocol):
    """Receives notifications about store changes."""

    def on_scenario_change(self, name: str, scenario: Scenario) -> None: ...

    def on_scenario_save(self, name: str, scenario: Scenario) -> None: ...

    def on_scenario_delete(self, name: str) -> None: ...


class ScenarioBackend(Protocol):
    """Persistence used by the store. See ``ScenarioRepository``."""

    def get_all_scenarios(self) -> dict[str, Scenario]: ...

    def save_scenario(self, name: str, scenario: Scenario) -> None: ...

    def delete_scenario(self, name: str) -> bool: ...

    def get_setting(self, key: str) -> str | None: ...

    def set_setting(self, key: str, value: str) -> None: ...


CURRENT_SCENARIO_KEY = "current_scenario"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ScenarioStore:
    """Create, copy, edit, delete, and select named scenarios."""

    def __init__(
        self,
        backend: ScenarioBackend | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.backend = backend
        self.clock = clock
        self.scenarios: dict[str, Scenario] = {}
        self.current_name: str | None = None
        self._observers: list[ScenarioObserver] = []
        self._load()

    # --- Loading ---

    def _load(self) -> None:
        if self.backend is not None:
            self.scenarios = self.backend.get_all_scenarios()

        if not self.scenarios:
            logger.info("No stored scenarios, seeding defaults")
            for name, scenario in default_scenarios(self.clock()).items():
                self._put(name, scenario)
        elif BASELINE not in self.scenarios:
            logger.warning("Baseline scenario missing from storage, recreating it")
            self._put(BASELINE, baseline_scenario(self.clock()))

        stored_current = (
            self.backend.get_setting(CURRENT_SCENARIO_KEY) if self.backend else None
        )
        self.current_name = stored_current if stored_current in self.scenarios else BASELINE

    # --- Observers ---

    def add_observer(self, observer: ScenarioObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: ScenarioObserver) -> None:
        self._observers.remove(observer)

    # --- Queries ---

    def names(self) -> list[str]:
        return list(self.scenarios)

    def get(self, name: str) -> Scenario:
        try:
            return self.scenarios[name]
        except KeyError:
            raise ScenarioNotFoundError(name) from None

    def metadata(self, name: str) -> ScenarioMetadata | None:
        scenario = self.scenarios.get(name)
        return scenario.metadata if scenario is not None else None

    def __contains__(self, name: object) -> bool:
        return name in self.scenarios

    # --- Current scenario ---

    def get_current(self) -> Scenario | None:
        if self.current_name is None:
            return None
        return self.scenarios.get(self.current_name)

    def set_current(self, name: str) -> bool:
        """Make ``name`` the current scenario. Returns False if it is unknown."""
        scenario = self.scenarios.get(name)
        if scenario is None:
            return False
        self.current_name = name
        if self.backend is not None:
            self.backend.set_setting(CURRENT_SCENARIO_KEY, name)
        for observer in list(self._observers):
            observer.on_scenario_change(name, scenario)
        return True

    # --- Mutations ---

    def save_scenario(self, name: str, scenario: Scenario) -> Scenario:
        """Store ``scenario`` under ``name``, stamping its modification time."""
        scenario.metadata.last_modified = self.clock()
        self._put(name, scenario)
        for observer in list(self._observers):
            observer.on_scenario_save(name, scenario)
        return scenario

    def create_scenario(
        self, name: str, description: str = "", base_name: str = BASELINE
    ) -> Scenario:
        """Create ``name`` as a copy of ``base_name`` (or the built-in baseline)."""
        if name in self.scenarios:
            raise DuplicateScenarioError(name)

        base = self.scenarios.get(base_name)
        scenario = base.clone() if base is not None else baseline_scenario()
        now = self.clock()
        scenario.metadata = ScenarioMetadata(
            name=name, description=description, created=now, last_modified=now
        )
        logger.info("Creating scenario %r from %r", name, base_name)
        return self.save_scenario(name, scenario)

    def duplicate_scenario(self, source_name: str, new_name: str) -> Scenario:
        source = self.get(source_name)
        if new_name in self.scenarios:
            raise DuplicateScenarioError(new_name)

        scenario = source.clone()
        now = self.clock()
        scenario.metadata.name = new_name
        scenario.metadata.description = f"Copy of {source.metadata.description}"
        scenario.metadata.created = now
        logger.info("Duplicating scenario %r as %r", source_name, new_name)
        return self.save_scenario(new_name, scenario)

    def update_scenario(self, name: str, update: ScenarioUpdate) -> Scenario:
        """Apply a typed partial update to ``name``."""
        updated = update.apply_to(self.get(name))
        return self.save_scenario(name, updated)

    def delete_scenario(self, name: str) -> None:
        if name == BASELINE:
            raise ProtectedScenarioError(name)
        if name not in self.scenarios:
            raise ScenarioNotFoundError(name)

        del self.scenarios[name]
        if self.backend is not None:
            self.backend.delete_scenario(name)
        logger.info("Deleted scenario %r", name)

        if self.current_name == name:
            self.set_current(BASELINE)
        for observer in list(self._observers):
            observer.on_scenario_delete(name)

    # --- Import / export ---

    def import_scenarios(self, data: Mapping[str, Scenario | Mapping[str, Any]]) -> list[str]:
        """Merge scenarios into the store; same-named scenarios are overwritten.

        All entries are validated before any of them is stored. Imported
        scenarios keep their own metadata and are reported to observers as saves.
        """
        validated = {
            name: value if isinstance(value, Scenario) else Scenario.model_validate(value)
            for name, value in data.items()
        }
        for name, scenario in validated.items():
            stored = scenario.clone()
            self._put(name, stored)
            for observer in list(self._observers):
                observer.on_scenario_save(name, stored)
        logger.info("Imported %d scenario(s)", len(validated))
        return list(validated)

    def import_json(self, text: str, source: str = "<string>") -> list[str]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ScenarioImportError(source, str(exc)) from exc
        if not isinstance(data, dict):
            raise ScenarioImportError(source, "expected an object keyed by scenario name")
        try:
            return self.import_scenarios(data)
        except (ValidationError, InvalidFilingStatusError) as exc:
            raise ScenarioImportError(source, str(exc)) from exc

    def export_scenarios(self, names: list[str] | None = None) -> dict[str, dict[str, Any]]:
        selected = names if names is not None else self.names()
        return {name: self.get(name).to_json_dict() for name in selected}

    def export_json(self, names: list[str] | None = None) -> str:
        return json.dumps(self.export_scenarios(names), indent=2, allow_nan=False)

    # --- Internal ---

    def _put(self, name: str, scenario: Scenario) -> None:
        self.scenarios[name] = scenario
        if self.backend is not None:
            self.backend.save_scenario(name, scenario)
