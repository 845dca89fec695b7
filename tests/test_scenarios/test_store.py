"""Tests for ScenarioStore: lifecycle, current pointer, observers, import/export."""

import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from conscious_spending.db.repository import ScenarioRepository
from conscious_spending.db.schema import create_schema
from conscious_spending.exceptions import (
    DuplicateScenarioError,
    ProtectedScenarioError,
    ScenarioImportError,
    ScenarioNotFoundError,
)
from conscious_spending.models.updates import PersonIncomeUpdate, ScenarioUpdate
from conscious_spending.scenarios.defaults import baseline_scenario
from conscious_spending.scenarios.store import CURRENT_SCENARIO_KEY, ScenarioStore


class RecordingObserver:
    def __init__(self):
        self.events = []

    def on_scenario_change(self, name, scenario):
        self.events.append(("change", name))

    def on_scenario_save(self, name, scenario):
        self.events.append(("save", name))

    def on_scenario_delete(self, name):
        self.events.append(("delete", name))


class TestSeeding:
    def test_defaults_seeded(self, memory_store):
        assert memory_store.names() == ["baseline", "optimistic", "conservative"]
        assert memory_store.current_name == "baseline"
        assert memory_store.get_current().metadata.name == "Baseline 2025"

    def test_metadata(self, memory_store):
        meta = memory_store.metadata("optimistic")
        assert meta.name == "Optimistic"
        assert memory_store.metadata("missing") is None

    def test_contains(self, memory_store):
        assert "conservative" in memory_store
        assert "missing" not in memory_store

    def test_get_missing(self, memory_store):
        with pytest.raises(ScenarioNotFoundError) as exc_info:
            memory_store.get("missing")
        assert exc_info.value.name == "missing"


class TestCreateAndDuplicate:
    def test_create_copies_baseline(self, memory_store):
        scenario = memory_store.create_scenario("plan-b", "Moving to Austin")
        assert "plan-b" in memory_store
        assert scenario.metadata.name == "plan-b"
        assert scenario.metadata.description == "Moving to Austin"
        assert scenario.income == memory_store.get("baseline").income
        assert scenario.income is not memory_store.get("baseline").income

    def test_create_from_other_base(self, memory_store):
        scenario = memory_store.create_scenario("lean", base_name="conservative")
        assert scenario.income.person1.salary == Decimal("102000")

    def test_create_from_missing_base_uses_builtin(self, memory_store):
        scenario = memory_store.create_scenario("fresh", base_name="nope")
        assert scenario.income.person1.salary == Decimal("120000")

    def test_create_duplicate_name(self, memory_store):
        with pytest.raises(DuplicateScenarioError):
            memory_store.create_scenario("optimistic")

    def test_duplicate(self, memory_store):
        copy = memory_store.duplicate_scenario("baseline", "baseline-copy")
        assert copy.metadata.name == "baseline-copy"
        assert copy.metadata.description == "Copy of Current income and spending patterns"
        assert copy.expenses == memory_store.get("baseline").expenses

    def test_duplicate_is_independent(self, memory_store):
        copy = memory_store.duplicate_scenario("baseline", "copy")
        copy.income.person1.salary = Decimal("1")
        assert memory_store.get("baseline").income.person1.salary == Decimal("120000")

    def test_duplicate_missing_source(self, memory_store):
        with pytest.raises(ScenarioNotFoundError):
            memory_store.duplicate_scenario("missing", "copy")

    def test_duplicate_to_existing_name(self, memory_store):
        with pytest.raises(DuplicateScenarioError):
            memory_store.duplicate_scenario("baseline", "optimistic")


class TestUpdateAndSave:
    def test_update_stamps_last_modified(self):
        times = iter([
            datetime(2025, 1, 1, tzinfo=timezone.utc),
            datetime(2025, 3, 1, tzinfo=timezone.utc),
        ])
        store = ScenarioStore(clock=lambda: next(times))
        update = ScenarioUpdate(person1=PersonIncomeUpdate(bonus=Decimal("0")))
        updated = store.update_scenario("baseline", update)
        assert updated.income.person1.bonus == Decimal("0")
        assert updated.metadata.last_modified == datetime(2025, 3, 1, tzinfo=timezone.utc)
        assert store.get("baseline").income.person1.bonus == Decimal("0")

    def test_update_missing(self, memory_store):
        with pytest.raises(ScenarioNotFoundError):
            memory_store.update_scenario("missing", ScenarioUpdate(name="x"))


class TestDelete:
    def test_baseline_is_protected(self, memory_store):
        with pytest.raises(ProtectedScenarioError):
            memory_store.delete_scenario("baseline")
        assert "baseline" in memory_store

    def test_delete(self, memory_store):
        memory_store.delete_scenario("optimistic")
        assert "optimistic" not in memory_store

    def test_delete_missing(self, memory_store):
        with pytest.raises(ScenarioNotFoundError):
            memory_store.delete_scenario("missing")

    def test_delete_current_falls_back_to_baseline(self, memory_store):
        memory_store.set_current("conservative")
        memory_store.delete_scenario("conservative")
        assert memory_store.current_name == "baseline"


class TestCurrent:
    def test_set_current(self, memory_store):
        assert memory_store.set_current("optimistic") is True
        assert memory_store.current_name == "optimistic"
        assert memory_store.get_current().metadata.name == "Optimistic"

    def test_set_current_unknown(self, memory_store):
        assert memory_store.set_current("missing") is False
        assert memory_store.current_name == "baseline"


class TestObservers:
    def test_events(self, memory_store):
        observer = RecordingObserver()
        memory_store.add_observer(observer)
        memory_store.create_scenario("x")
        memory_store.set_current("x")
        memory_store.delete_scenario("x")
        assert observer.events == [
            ("save", "x"),
            ("change", "x"),
            ("change", "baseline"),
            ("delete", "x"),
        ]

    def test_failed_set_current_not_notified(self, memory_store):
        observer = RecordingObserver()
        memory_store.add_observer(observer)
        memory_store.set_current("missing")
        assert observer.events == []

    def test_remove_observer(self, memory_store):
        observer = RecordingObserver()
        memory_store.add_observer(observer)
        memory_store.remove_observer(observer)
        memory_store.create_scenario("x")
        assert observer.events == []


class TestImportExport:
    def test_export_all(self, memory_store):
        data = json.loads(memory_store.export_json())
        assert list(data) == ["baseline", "optimistic", "conservative"]
        assert data["baseline"]["income"]["person1"]["salary"] == 120000

    def test_export_selected(self, memory_store):
        data = memory_store.export_scenarios(["optimistic"])
        assert list(data) == ["optimistic"]

    def test_round_trip_into_new_store(self, memory_store):
        memory_store.create_scenario("custom", "Mine")
        text = memory_store.export_json()

        other = ScenarioStore()
        imported = other.import_json(text)
        assert imported == ["baseline", "optimistic", "conservative", "custom"]
        for name in imported:
            assert other.get(name) == memory_store.get(name)

    def test_import_overwrites(self, memory_store):
        replacement = baseline_scenario().to_json_dict()
        replacement["income"]["person1"]["salary"] = 1000
        memory_store.import_scenarios({"optimistic": replacement})
        assert memory_store.get("optimistic").income.person1.salary == Decimal("1000")

    def test_import_legacy_format(self, memory_store):
        legacy = {
            "legacy": {
                "metadata": {"name": "Old", "description": "From the old app"},
                "income": {
                    "person1": {"salary": 80000, "preTexDeductions": {"retirement401k": 4000}},
                },
                "expenses": {"ramitCategories": {"fixedCosts": {"rent": {"amount": 1800}}}},
            }
        }
        memory_store.import_json(json.dumps(legacy))
        scenario = memory_store.get("legacy")
        assert scenario.income.person1.pre_tax_deductions.retirement_401k == Decimal("4000")
        assert scenario.expenses.fixed_costs["rent"].amount == Decimal("1800")

    def test_import_invalid_json(self, memory_store):
        with pytest.raises(ScenarioImportError) as exc_info:
            memory_store.import_json("{not json", source="bad.json")
        assert exc_info.value.source == "bad.json"

    def test_import_non_object(self, memory_store):
        with pytest.raises(ScenarioImportError):
            memory_store.import_json("[1, 2, 3]")

    def test_import_is_all_or_nothing(self, memory_store):
        payload = {
            "good": baseline_scenario().to_json_dict(),
            "bad": {"income": {"person1": {"salary": -5}}},
        }
        with pytest.raises(ScenarioImportError):
            memory_store.import_json(json.dumps(payload))
        assert "good" not in memory_store

    def test_import_unknown_filing_status(self, memory_store):
        payload = {"odd": {"household": {"filingStatus": "widowed"}}}
        with pytest.raises(ScenarioImportError) as exc_info:
            memory_store.import_json(json.dumps(payload), source="odd.json")
        assert exc_info.value.source == "odd.json"
        assert "odd" not in memory_store

    def test_import_notifies_saves(self, memory_store):
        observer = RecordingObserver()
        memory_store.add_observer(observer)
        payload = {
            "first": baseline_scenario().to_json_dict(),
            "second": {"income": {"person1": {"salary": 1000}}},
        }
        memory_store.import_json(json.dumps(payload))
        assert observer.events == [("save", "first"), ("save", "second")]


class TestPersistence:
    def test_seeds_repository(self, store, repo):
        assert [row["name"] for row in repo.list_scenarios()] == [
            "baseline", "optimistic", "conservative",
        ]

    def test_changes_survive_reload(self, store, repo):
        store.create_scenario("saved", "Persisted")
        store.set_current("saved")
        store.delete_scenario("optimistic")

        reloaded = ScenarioStore(repo)
        assert reloaded.names() == ["baseline", "conservative", "saved"]
        assert reloaded.current_name == "saved"
        assert reloaded.get("saved") == store.get("saved")

    def test_current_setting_persisted(self, store, repo):
        store.set_current("optimistic")
        assert repo.get_setting(CURRENT_SCENARIO_KEY) == "optimistic"

    def test_stale_current_falls_back(self, store, repo):
        repo.set_setting(CURRENT_SCENARIO_KEY, "gone")
        assert ScenarioStore(repo).current_name == "baseline"

    def test_missing_baseline_recreated(self, tmp_path):
        conn = create_schema(tmp_path / "partial.db")
        repo = ScenarioRepository(conn)
        repo.save_scenario("custom", baseline_scenario())

        store = ScenarioStore(repo)
        assert store.names() == ["custom", "baseline"]
        assert repo.get_scenario("baseline") is not None
        conn.close()
