"""
Tests unitarios para la clasificacion SLA de envios.

Referencia: ahora = miercoles 15/01/2025 12:00 UTC.
"""
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from app.application.services.sla_bucketer import (
    SlaPolicy,
    clasificar_envio,
    contar_requiere_accion,
    filtrar_por_busqueda,
    listar_bucket,
    natural_sort_key,
    ordenar_por_numero,
)
from app.domain.entities.envio import Envio
from app.shared.constants.sla_constants import SlaBucket


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class TestClasificarEnvio:
    """Reglas de clasificacion, en orden."""

    def test_old_envio_requires_action(self, fixed_now):
        # Viernes 12:00 -> miercoles 12:00 = 72 horas laborables
        envio = Envio(id="rec1", estado="Enviado", fecha_envio=_utc(2025, 1, 10, 12))
        assert clasificar_envio(envio, fixed_now) == SlaBucket.REQUIERE_ACCION

    def test_exactly_threshold_stays_waiting(self, fixed_now):
        # Lunes 12:00 -> miercoles 12:00 = 48 horas exactas
        envio = Envio(id="rec1", fecha_envio=_utc(2025, 1, 13, 12))
        assert clasificar_envio(envio, fixed_now) == SlaBucket.EN_ESPERA

    def test_one_hour_over_threshold_requires_action(self, fixed_now):
        envio = Envio(id="rec1", fecha_envio=_utc(2025, 1, 13, 11))
        assert clasificar_envio(envio, fixed_now) == SlaBucket.REQUIERE_ACCION

    @pytest.mark.parametrize("estado", ["Entregado", "Devuelto", "Recogida hecha"])
    def test_terminal_states_are_in_no_tab(self, fixed_now, estado):
        envio = Envio(id="rec1", estado=estado, fecha_envio=_utc(2024, 12, 1))
        assert clasificar_envio(envio, fixed_now) == SlaBucket.NINGUNO

    def test_tracking_ack_waits_regardless_of_age(self, fixed_now):
        envio = Envio(id="rec1", seguimiento="Email enviado", fecha_envio=_utc(2024, 12, 1))
        assert clasificar_envio(envio, fixed_now) == SlaBucket.EN_ESPERA

    def test_terminal_state_wins_over_tracking_ack(self, fixed_now):
        envio = Envio(id="rec1", estado="Entregado", seguimiento="Email enviado")
        assert clasificar_envio(envio, fixed_now) == SlaBucket.NINGUNO

    def test_without_fecha_envio_waits(self, fixed_now):
        assert clasificar_envio(Envio(id="rec1"), fixed_now) == SlaBucket.EN_ESPERA

    def test_policy_threshold_is_configurable(self, fixed_now):
        envio = Envio(id="rec1", fecha_envio=_utc(2025, 1, 15, 2))
        policy = SlaPolicy(threshold_hours=8)
        assert clasificar_envio(envio, fixed_now, policy) == SlaBucket.REQUIERE_ACCION

    def test_policy_from_settings(self):
        settings = SimpleNamespace(
            SLA_BUSINESS_HOURS_THRESHOLD=24,
            SLA_TRACKING_ACK_VALUE="Aviso enviado",
            timezone=timezone.utc,
        )
        policy = SlaPolicy.from_settings(settings)
        assert policy.threshold_hours == 24
        assert policy.tracking_ack_value == "Aviso enviado"
        assert policy.tz is timezone.utc
        assert "Entregado" in policy.terminal_states


class TestListarBucket:
    """Busqueda, orden y particion de pestañas."""

    @pytest.fixture
    def envios(self):
        return [
            Envio(id="a", numero="10", producto="Caldera X", fecha_envio=_utc(2025, 1, 6)),
            Envio(id="b", numero="9", seguimiento="ABC123", fecha_envio=_utc(2025, 1, 6)),
            Envio(id="c", numero="2", producto="Termo", fecha_envio=_utc(2025, 1, 6)),
            Envio(id="d", numero="5", fecha_envio=_utc(2025, 1, 15, 9)),
            Envio(id="e", numero="7", estado="Entregado", fecha_envio=_utc(2025, 1, 6)),
            Envio(id="f", numero="3", seguimiento="Email enviado", fecha_envio=_utc(2025, 1, 6)),
        ]

    def test_requiere_accion_sorted_naturally(self, envios, fixed_now):
        result = listar_bucket(envios, SlaBucket.REQUIERE_ACCION, fixed_now)
        assert [e.numero for e in result] == ["2", "9", "10"]

    def test_en_espera_contains_recent_and_acknowledged(self, envios, fixed_now):
        result = listar_bucket(envios, SlaBucket.EN_ESPERA, fixed_now)
        assert [e.id for e in result] == ["f", "d"]

    def test_tabs_are_disjoint_and_exclude_terminal(self, envios, fixed_now):
        requiere = {e.id for e in listar_bucket(envios, SlaBucket.REQUIERE_ACCION, fixed_now)}
        espera = {e.id for e in listar_bucket(envios, SlaBucket.EN_ESPERA, fixed_now)}
        assert not requiere & espera
        assert "e" not in requiere | espera
        assert requiere | espera == {"a", "b", "c", "d", "f"}

    def test_search_is_case_insensitive_over_three_fields(self, envios, fixed_now):
        assert [e.id for e in listar_bucket(envios, SlaBucket.REQUIERE_ACCION, fixed_now, "abc")] == ["b"]
        assert [e.id for e in listar_bucket(envios, SlaBucket.REQUIERE_ACCION, fixed_now, "CALDERA")] == ["a"]
        assert [e.id for e in listar_bucket(envios, SlaBucket.REQUIERE_ACCION, fixed_now, "10")] == ["a"]

    def test_empty_search_returns_everything(self, envios):
        assert filtrar_por_busqueda(envios, "") == envios

    def test_search_never_adds_items(self, envios, fixed_now):
        full = listar_bucket(envios, SlaBucket.REQUIERE_ACCION, fixed_now)
        filtered = listar_bucket(envios, SlaBucket.REQUIERE_ACCION, fixed_now, "t")
        assert {e.id for e in filtered} <= {e.id for e in full}

    def test_contar_matches_listado(self, envios, fixed_now):
        assert contar_requiere_accion(envios, fixed_now) == len(
            listar_bucket(envios, SlaBucket.REQUIERE_ACCION, fixed_now)
        )


class TestNaturalSort:

    def test_numbers_inside_text_compare_numerically(self):
        numeros = ["A10", "a9", "A1", None, "b2"]
        ordered = ordenar_por_numero(Envio(id=str(i), numero=n) for i, n in enumerate(numeros))
        assert [e.numero for e in ordered] == [None, "A1", "a9", "A10", "b2"]

    def test_accents_are_ignored(self):
        assert natural_sort_key("Éxito 2") == natural_sort_key("exito 2")
