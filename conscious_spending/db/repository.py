"""Data access layer for stored scenarios."""

import logging
import sqlite3

from conscious_spending.models.scenario import Scenario

logger = logging.getLogger(__name__)


class ScenarioRepository:
    """CRUD operations for scenarios and settings."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    # --- Scenarios ---

    def save_scenario(self, name: str, scenario: Scenario) -> None:
        """Insert or replace a scenario under ``name``."""
        self.conn.execute(
            """INSERT INTO scenarios
               (name, description, payload, created_at, modified_at)
               VALUES (?, ?, ?, ?, ?)
               ON CONFLICT(name) DO UPDATE SET
               description = excluded.description,
               payload = excluded.payload,
               created_at = excluded.created_at,
               modified_at = excluded.modified_at""",
            (
                name,
                scenario.metadata.description,
                scenario.model_dump_json(by_alias=True),
                scenario.metadata.created.isoformat(),
                scenario.metadata.last_modified.isoformat(),
            ),
        )
        self.conn.commit()
        logger.debug("Saved scenario %r", name)

    def get_scenario(self, name: str) -> Scenario | None:
        cursor = self.conn.execute(
            "SELECT payload FROM scenarios WHERE name = ?", (name,)
        )
        row = cursor.fetchone()
        return Scenario.model_validate_json(row[0]) if row else None

    def get_all_scenarios(self) -> dict[str, Scenario]:
        """Retrieve every stored scenario, keyed by name, in insertion order."""
        cursor = self.conn.execute("SELECT name, payload FROM scenarios ORDER BY rowid")
        return {
            name: Scenario.model_validate_json(payload)
            for name, payload in cursor.fetchall()
        }

    def list_scenarios(self) -> list[dict]:
        """Scenario names with description and timestamps, without payloads."""
        cursor = self.conn.execute(
            "SELECT name, description, created_at, modified_at FROM scenarios ORDER BY rowid"
        )
        columns = [desc[0] for desc in cursor.description]
        return [dict(zip(columns, row)) for row in cursor.fetchall()]

    def delete_scenario(self, name: str) -> bool:
        """Delete a scenario. Returns True if a row was removed."""
        cursor = self.conn.execute("DELETE FROM scenarios WHERE name = ?", (name,))
        self.conn.commit()
        return cursor.rowcount > 0

    def clear(self) -> int:
        """Delete all scenarios and settings. Returns the scenario count removed."""
        cursor = self.conn.execute("DELETE FROM scenarios")
        self.conn.execute("DELETE FROM settings")
        self.conn.commit()
        return cursor.rowcount

    # --- Settings ---

    def get_setting(self, key: str) -> str | None:
        cursor = self.conn.execute("SELECT value FROM settings WHERE key = ?", (key,))
        row = cursor.fetchone()
        return row[0] if row else None

    def set_setting(self, key: str, value: str) -> None:
        self.conn.execute(
            """INSERT INTO settings (key, value) VALUES (?, ?)
               ON CONFLICT(key) DO UPDATE SET value = excluded.value,
               updated_at = datetime('now')""",
            (key, value),
        )
        self.conn.commit()
