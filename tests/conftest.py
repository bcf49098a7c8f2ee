from __future__ import annotations

from typing import Dict, List

import pytest


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, client: "FakeSupabase", table: str):
        self.client = client
        self.table = table
        self.action = "select"
        self.payload = None
        self.on_conflict = None
        self.filters: List = []
        self.order_by = None
        self.limit_to = None

    def select(self, *columns):
        self.action = "select"
        return self

    def insert(self, payload):
        self.action = "insert"
        self.payload = payload
        return self

    def upsert(self, payload, on_conflict=None):
        self.action = "upsert"
        self.payload = payload
        self.on_conflict = on_conflict
        return self

    def update(self, payload):
        self.action = "update"
        self.payload = payload
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, count):
        self.limit_to = count
        return self

    def _matches(self, row) -> bool:
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self):
        self.client.calls.append((self.table, self.action, self.payload, list(self.filters)))
        if self.client.fail:
            raise RuntimeError("connection refused")
        rows = self.client.tables.setdefault(self.table, [])

        if self.action == "insert":
            row = dict(self.payload)
            row.setdefault("id", f"{self.table}_{len(rows) + 1}")
            rows.append(row)
            return FakeResponse([row])
        if self.action == "upsert":
            row = dict(self.payload)
            for existing in rows:
                if self.on_conflict and existing.get(self.on_conflict) == row.get(self.on_conflict):
                    existing.update(row)
                    return FakeResponse([existing])
            rows.append(row)
            return FakeResponse([row])
        if self.action == "update":
            matched = [row for row in rows if self._matches(row)]
            for row in matched:
                row.update(self.payload)
            return FakeResponse(matched)
        if self.action == "delete":
            matched = [row for row in rows if self._matches(row)]
            self.client.tables[self.table] = [row for row in rows if not self._matches(row)]
            return FakeResponse(matched)

        result = [dict(row) for row in rows if self._matches(row)]
        if self.order_by:
            column, desc = self.order_by
            result.sort(key=lambda row: str(row.get(column) or ""), reverse=desc)
        if self.limit_to is not None:
            result = result[: self.limit_to]
        return FakeResponse(result)


class FakeSupabase:
    def __init__(self, tables: Dict[str, List[dict]] = None, fail: bool = False):
        self.tables = tables or {}
        self.fail = fail
        self.calls: List = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def broken_supabase():
    return FakeSupabase(fail=True)


@pytest.fixture
def make_supabase():
    return FakeSupabase
