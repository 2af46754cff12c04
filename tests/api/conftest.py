# tests/api/conftest.py
import os
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

# Set test environment variables
os.environ["DEBUG"] = "true"
os.environ["API_KEY"] = "dev_key"
os.environ.pop("SUPABASE_URL", None)

class FakeQuery:
    """Chainable stand-in for a Supabase query builder over a list of rows."""

    def __init__(self, rows: List[Dict[str, Any]], operation: str, payload: Any = None):
        self.rows = rows
        self.operation = operation
        self.payload = payload
        self.filters: List[tuple] = []
        self.order_by = None
        self.row_limit = None

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, count):
        self.row_limit = count
        return self

    def _matches(self, row):
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self):
        if self.operation == "insert":
            row = dict(self.payload)
            self.rows.append(row)
            return SimpleNamespace(data=[dict(row)], count=None)

        matched = [row for row in self.rows if self._matches(row)]

        if self.operation == "update":
            for row in matched:
                row.update(self.payload)
            return SimpleNamespace(data=[dict(row) for row in matched], count=None)

        if self.operation == "delete":
            for row in matched:
                self.rows.remove(row)
            return SimpleNamespace(data=matched, count=None)

        if self.order_by:
            column, desc = self.order_by
            matched.sort(key=lambda row: row.get(column) or "", reverse=desc)
        count = len(matched)
        if self.row_limit is not None:
            matched = matched[:self.row_limit]
        return SimpleNamespace(data=[dict(row) for row in matched], count=count)

class FakeTable:
    def __init__(self, rows):
        self.rows = rows

    def select(self, *columns, count=None):
        return FakeQuery(self.rows, "select")

    def insert(self, data):
        return FakeQuery(self.rows, "insert", data)

    def update(self, data):
        return FakeQuery(self.rows, "update", data)

    def delete(self):
        return FakeQuery(self.rows, "delete")

class FakeSupabase:
    """In-memory Supabase client keeping rows per table."""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}

    def table(self, name):
        return FakeTable(self.tables.setdefault(name, []))

@pytest.fixture
def mock_supabase():
    """Create an in-memory Supabase client for testing."""
    return FakeSupabase()

@pytest.fixture(autouse=True)
def patch_supabase(monkeypatch, mock_supabase):
    """Patch the Supabase client with our fake."""
    monkeypatch.setattr("api.utils.db.supabase", mock_supabase)

@pytest.fixture
def api_headers():
    """Fixture for API headers with authentication."""
    return {"X-API-Key": "dev_key"}

@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from api.main import app
    return TestClient(app)
