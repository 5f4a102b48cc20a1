"""
Configuración de fixtures para pytest.

Incluye dobles en memoria de los dos almacenes externos:
- FakeSupabaseClient: imita el query builder de supabase-py y registra
  cada consulta para poder verificarla.
- make_record: construye registros como los devuelve Airtable.
"""
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest

from app.infrastructure.external.airtable.types import AirtableRecord


class FakeQuery:
    """Query encadenable que guarda las llamadas y devuelve datos preparados."""

    def __init__(self, client: "FakeSupabaseClient", table: str):
        self._client = client
        self.table = table
        self.calls: List[tuple] = []

    def _record(self, name: str, *args: Any, **kwargs: Any) -> "FakeQuery":
        self.calls.append((name, args, kwargs))
        return self

    def select(self, *args, **kwargs):
        return self._record("select", *args, **kwargs)

    def in_(self, *args):
        return self._record("in_", *args)

    def eq(self, *args):
        return self._record("eq", *args)

    def is_(self, *args):
        return self._record("is_", *args)

    def gte(self, *args):
        return self._record("gte", *args)

    def order(self, *args, **kwargs):
        return self._record("order", *args, **kwargs)

    def limit(self, *args):
        return self._record("limit", *args)

    def insert(self, rows):
        return self._record("insert", rows)

    def update(self, *args):
        return self._record("update", *args)

    @property
    def not_(self):
        return self._record("not_")

    def call(self, name: str) -> Optional[tuple]:
        """Primera llamada con ese nombre (args, kwargs) o None."""
        for call_name, args, kwargs in self.calls:
            if call_name == name:
                return args, kwargs
        return None

    def execute(self):
        if self._client.error is not None:
            raise self._client.error
        queue = self._client.responses.get(self.table, [])
        data = queue.pop(0) if queue else []
        return SimpleNamespace(data=data)


class FakeSupabaseClient:
    """
    Cliente Supabase en memoria.

    responses[tabla] es una cola: cada execute() sobre la tabla consume
    el siguiente resultado (lista de filas).
    """

    def __init__(self, responses: Optional[Dict[str, List[list]]] = None):
        self.responses = responses or {}
        self.queries: List[FakeQuery] = []
        self.error: Optional[Exception] = None

    def table(self, name: str) -> FakeQuery:
        query = FakeQuery(self, name)
        self.queries.append(query)
        return query

    def queries_with(self, name: str) -> List[FakeQuery]:
        return [q for q in self.queries if q.call(name) is not None]


def airtable_record(
    record_id: str, fields: Optional[Dict[str, Any]] = None, created: Optional[str] = None
) -> AirtableRecord:
    return AirtableRecord(
        record_id=record_id,
        fields=dict(fields or {}),
        created_time=datetime.fromisoformat(created) if created else None,
    )


@pytest.fixture
def fake_supabase() -> FakeSupabaseClient:
    return FakeSupabaseClient()


@pytest.fixture
def fixed_now() -> datetime:
    """Miercoles 15/01/2025 12:00 UTC."""
    return datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_record():
    """Factory de AirtableRecord: make_record("rec1", {"Estado": "Enviado"})."""
    return airtable_record
