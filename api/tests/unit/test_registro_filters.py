"""
Tests unitarios para los filtros de asesoramientos y reparaciones.
"""
from datetime import datetime, timedelta, timezone

import pytest

from app.application.services.registro_filters import (
    contar_reparaciones_pendientes,
    filtrar_registros,
    registro_visible,
)
from app.domain.entities.registro import Registro, Reparacion


PDF = [{"url": "https://example.com/informe.pdf"}]


class TestRegistroVisible:

    def test_pending_registro_is_visible(self):
        assert registro_visible(Registro(id="r1", estado="Llamar"))

    def test_tramitado_is_hidden(self):
        assert not registro_visible(Registro(id="r1", estado="Llamar", tramitado=True))

    @pytest.mark.parametrize("ipartner", ["No interesado", "Ilocalizable", "Facturado", "Cancelado"])
    def test_closed_ipartner_is_hidden(self, ipartner):
        assert not registro_visible(Registro(id="r1", ipartner=ipartner))

    @pytest.mark.parametrize("estado", ["Citado", "Informe"])
    def test_waiting_for_pdf_is_hidden(self, estado):
        assert not registro_visible(Registro(id="r1", estado=estado))
        assert registro_visible(Registro(id="r1", estado=estado, pdf=PDF))

    def test_informe_with_recent_citado_ipartner_without_pdf_is_hidden(self):
        registro = Registro(
            id="r1",
            estado="Informe",
            ipartner="Citado",
            fecha_ipartner=datetime.now(timezone.utc) - timedelta(days=2),
        )
        assert not registro_visible(registro)


class TestFiltrarRegistros:

    @pytest.fixture
    def registros(self):
        return [
            Registro(id="r1", nombre="María López", telefono="600111222", contrato=4512),
            Registro(id="r2", nombre="Juan Pérez", email="JUAN@correo.es", direccion="Calle Mayor 1"),
            Registro(id="r3", nombre="María Ruiz", tramitado=True),
        ]

    def test_empty_search_returns_visible_only(self, registros):
        assert [r.id for r in filtrar_registros(registros)] == ["r1", "r2"]

    def test_search_by_name_is_case_insensitive(self, registros):
        assert [r.id for r in filtrar_registros(registros, "maría")] == ["r1"]

    def test_search_by_phone_email_address_and_contract(self, registros):
        assert [r.id for r in filtrar_registros(registros, "111")] == ["r1"]
        assert [r.id for r in filtrar_registros(registros, "juan@")] == ["r2"]
        assert [r.id for r in filtrar_registros(registros, "mayor")] == ["r2"]
        assert [r.id for r in filtrar_registros(registros, "451")] == ["r1"]


class TestReparacionesPendientes:

    def test_counts_only_stale_open_reparaciones(self, fixed_now):
        reparaciones = [
            Reparacion(id="p1", estado="Asignado", fecha_estado=fixed_now - timedelta(hours=49)),
            Reparacion(id="p2", estado="Aceptado", fecha_estado=fixed_now - timedelta(hours=47)),
            Reparacion(
                id="p3",
                estado="Citado",
                fecha_estado=fixed_now - timedelta(days=5),
                cita=fixed_now + timedelta(days=1),
            ),
            Reparacion(
                id="p4",
                estado="Citado",
                fecha_estado=fixed_now - timedelta(days=5),
                cita=fixed_now - timedelta(days=1),
            ),
            Reparacion(id="p5", estado="Finalizado", fecha_estado=fixed_now - timedelta(days=5)),
            Reparacion(id="p6", estado="Asignado"),
        ]

        assert contar_reparaciones_pendientes(reparaciones, fixed_now) == 2
