from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest


class FakeQuery:
    """Mimics the chained ``table().select()/insert()/delete().eq().execute()`` calls."""

    def __init__(self, client: "FakeSupabase", table: str) -> None:
        self.client = client
        self.table = table
        self.operation = "select"
        self.payload: Any = None
        self.filters: list[tuple[str, Any]] = []

    def select(self, *columns: str, **kwargs: Any) -> "FakeQuery":
        self.operation = "select"
        return self

    def insert(self, payload: dict) -> "FakeQuery":
        self.operation = "insert"
        self.payload = payload
        return self

    def delete(self) -> "FakeQuery":
        self.operation = "delete"
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append((column, value))
        return self

    def limit(self, count: int) -> "FakeQuery":
        return self

    def execute(self) -> SimpleNamespace:
        if self.table in self.client.failing:
            raise RuntimeError(f"{self.table} unavailable")
        rows = self.client.tables.setdefault(self.table, [])
        if self.operation == "insert":
            rows.append(dict(self.payload))
            return SimpleNamespace(data=[self.payload])
        matching = [row for row in rows if all(row.get(column) == value for column, value in self.filters)]
        if self.operation == "delete":
            self.client.tables[self.table] = [row for row in rows if row not in matching]
            return SimpleNamespace(data=matching)
        return SimpleNamespace(data=[dict(row) for row in matching])


class FakeSupabase:
    def __init__(self, tables: dict[str, list[dict]] | None = None) -> None:
        self.tables: dict[str, list[dict]] = {name: list(rows) for name, rows in (tables or {}).items()}
        self.failing: set[str] = set()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()
