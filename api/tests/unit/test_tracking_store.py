"""
Tests unitarios para SupabaseTrackingStore con un cliente en memoria.
"""
from datetime import datetime, timezone
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest

from app.infrastructure.external.supabase_tracking.tracking_store import (
    SupabaseTrackingStore,
    build_tracking_store,
)


MADRID = ZoneInfo("Europe/Madrid")


@pytest.fixture
def store(fake_supabase, fixed_now):
    return SupabaseTrackingStore(fake_supabase, tz=MADRID, clock=lambda: fixed_now)


class TestEnsureRecogidas:

    def test_inserts_only_missing_numbers(self, store, fake_supabase):
        fake_supabase.responses["recogidas"] = [[{"número": "100"}], []]

        created = store.ensure_recogidas(["100", "200", "200", " 300 "])

        assert created == ["200", "300"]
        select_args, _ = fake_supabase.queries[0].call("in_")
        assert select_args == ("número", ["100", "200", "300"])
        assert fake_supabase.queries[0].call("is_") == (("tramitado", "null"), {})

        insert_args, insert_kwargs = fake_supabase.queries[1].call("insert")
        assert [row["número"] for row in insert_args[0]] == ["200", "300"]
        assert insert_kwargs == {}

    def test_no_insert_when_all_have_pending_row(self, store, fake_supabase):
        fake_supabase.responses["recogidas"] = [[{"número": "100"}, {"número": "200"}]]

        assert store.ensure_recogidas(["100", "200"]) == []
        assert fake_supabase.queries_with("insert") == []

    def test_second_call_is_idempotent(self, store, fake_supabase):
        fake_supabase.responses["recogidas"] = [[], [], [{"número": "100"}]]

        assert store.ensure_recogidas(["100"]) == ["100"]
        assert store.ensure_recogidas(["100"]) == []
        assert len(fake_supabase.queries_with("insert")) == 1

    def test_new_row_is_opened_when_previous_is_tramitado(self, store, fake_supabase):
        # La fila anterior del 100 ya esta tramitada: el select de pendientes no la devuelve
        fake_supabase.responses["recogidas"] = [[], []]

        assert store.ensure_recogidas(["100"]) == ["100"]
        insert_args, _ = fake_supabase.queries[1].call("insert")
        assert insert_args[0] == [{"número": "100", "tramitado": None}]

    def test_empty_batch_does_not_query(self, store, fake_supabase):
        assert store.ensure_recogidas([]) == []
        assert fake_supabase.queries == []


class TestCompleteRecogida:

    def test_marks_most_recent_pending_row(self, store, fake_supabase):
        fake_supabase.responses["recogidas"] = [[{"id": 7}], []]

        assert store.complete_recogida("100") is True

        pending = fake_supabase.queries[0]
        assert pending.call("eq") == (("número", "100"), {})
        assert pending.call("is_") == (("tramitado", "null"), {})
        assert pending.call("order") == (("creación",), {"desc": True})
        assert pending.call("limit") == ((1,), {})

        update = fake_supabase.queries[1]
        # 12:00 UTC en enero son las 13:00 en Madrid
        assert update.call("update") == (({"tramitado": "2025-01-15T13:00:00"},), {})
        assert update.call("eq") == (("id", 7), {})
        assert update.call("is_") == (("tramitado", "null"), {})

    def test_without_pending_row_is_noop(self, store, fake_supabase):
        fake_supabase.responses["recogidas"] = [[]]

        assert store.complete_recogida("100") is False
        assert fake_supabase.queries_with("update") == []

    def test_complete_tracking_uses_its_own_column(self, store, fake_supabase):
        fake_supabase.responses["recogidas"] = [[{"id": 3}], []]

        assert store.complete_tracking("100") is True
        assert fake_supabase.queries[0].call("is_") == (("entregado", "null"), {})
        assert fake_supabase.queries[1].call("update") == (({"entregado": "2025-01-15T13:00:00"},), {})

    def test_errors_propagate(self, store, fake_supabase):
        fake_supabase.error = RuntimeError("timeout")
        with pytest.raises(RuntimeError):
            store.complete_recogida("100")


class TestDisabledStore:

    def test_every_operation_is_noop(self):
        store = SupabaseTrackingStore(None)
        assert store.enabled is False
        assert store.ensure_recogidas(["1"]) == []
        assert store.complete_recogida("1") is False
        assert store.complete_tracking("1") is False
        assert store.get_casos_gestionados_24h() == []
        assert store.get_recogida_stats() == []

    def test_build_without_credentials_returns_disabled_store(self):
        settings = SimpleNamespace(
            supabase_enabled=False, SUPABASE_URL="", SUPABASE_KEY="", timezone=timezone.utc
        )
        assert build_tracking_store(settings).enabled is False


class TestStatsQueries:

    def test_recogida_stats_filters_null_durations(self, store, fake_supabase):
        fake_supabase.responses["recogidas"] = [[
            {"creación": "2025-01-14T10:00:00", "duracion_decimal": 10},
            {"creación": "2025-01-14T15:00:00", "duracion_decimal": 20},
        ]]

        assert store.get_recogida_stats() == [{"date": "2025-01-14", "avgHours": 15.0, "count": 2}]
        query = fake_supabase.queries[0]
        assert query.call("not_") is not None
        assert query.call("is_") == (("duracion_decimal", "null"), {})

    def test_casos_gestionados_reads_resoluciones(self, store, fake_supabase):
        now = datetime(2026, 1, 14, 12, tzinfo=timezone.utc)
        fake_supabase.responses["resoluciones_remotas"] = [[
            {"número": "1", "creación": "2026-01-05T09:00:00", "resolución": "2026-01-05T20:00:00"},
        ]]

        result = store.get_casos_gestionados_24h(now)

        assert result[0] == {"week": "2026-01-05", "percentage24h": 100, "totalCases": 1}
        assert fake_supabase.queries[0].call("gte") == (("creación", "2026-01-05"), {})
