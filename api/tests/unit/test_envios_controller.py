"""
Tests unitarios para EnviosController.

Airtable se sustituye por un Mock del cliente y Supabase por un Mock del
store; TrackingSync es el real.
"""
import asyncio
from unittest.mock import Mock

import pytest

from app.application.services.tracking_sync import TrackingSync
from app.application.use_cases.envio_use_cases import CREATE_ERROR_MESSAGE, EnviosController
from app.infrastructure.external.airtable.airtable_client import AirtableApiError, AirtableClient
from app.shared.constants.sla_constants import SlaBucket
from app.shared.exceptions.domain import ExternalServiceException


OLD = "2025-01-06T08:00:00.000Z"
RECENT = "2025-01-15T10:00:00.000Z"


@pytest.fixture
def store():
    return Mock()


@pytest.fixture
def airtable(make_record):
    client = Mock(spec=AirtableClient)
    client.list_records.return_value = [
        make_record("rec1", {"Número": 100, "Estado": "Enviado", "Fecha de envío": OLD}),
        make_record("rec2", {"Numero": "20", "Estado": "Enviado", "Fecha Envío": RECENT}),
        make_record("rec3", {"Número": "ENV-3", "Estado": "Enviado", "Fecha envio": OLD}),
        make_record("rec4", {"Número": "4", "Estado": "Entregado", "Fecha de envío": OLD}),
    ]
    client.update_record.side_effect = lambda table_name, record_id, fields: make_record(
        record_id, {"Número": "100", **fields}
    )
    return client


@pytest.fixture
def controller(airtable, store, fixed_now):
    return EnviosController(
        airtable,
        TrackingSync(store),
        table_name="Envíos",
        view="Portal",
        clock=lambda: fixed_now,
    )


class TestRefresh:

    @pytest.mark.asyncio
    async def test_loads_envios_and_ensures_recogidas(self, controller, airtable, store):
        envios = await controller.refresh()

        airtable.list_records.assert_called_once_with(table_name="Envíos", view="Portal")
        assert [e.id for e in envios] == ["rec1", "rec2", "rec3", "rec4"]
        assert controller.envios[0].numero == "100"
        store.ensure_recogidas.assert_called_once_with(["100"])
        assert controller.loading is False

    @pytest.mark.asyncio
    async def test_refresh_after_close_does_not_touch_state(self, controller, store):
        await controller.close()

        await controller.refresh()

        assert controller.envios == []
        store.ensure_recogidas.assert_not_called()

    @pytest.mark.asyncio
    async def test_airtable_failure_raises_external_service_error(self, controller, airtable):
        airtable.list_records.side_effect = AirtableApiError("503", status_code=503)

        with pytest.raises(ExternalServiceException):
            await controller.refresh()
        assert controller.loading is False

    @pytest.mark.asyncio
    async def test_listar_and_contar(self, controller):
        await controller.refresh()

        assert [e.id for e in controller.listar(SlaBucket.REQUIERE_ACCION)] == ["rec1", "rec3"]
        assert [e.id for e in controller.listar(SlaBucket.EN_ESPERA)] == ["rec2"]
        assert [e.id for e in controller.listar(SlaBucket.REQUIERE_ACCION, "env")] == ["rec3"]
        assert controller.contar() == {"requiere-accion": 2, "en-espera": 1}


class TestActualizar:

    @pytest.mark.asyncio
    async def test_entregado_completes_tracking_once(self, controller, airtable, store):
        await controller.refresh()

        first = await controller.actualizar("rec1", {"estado": "Entregado"})
        second = await controller.actualizar("rec1", {"estado": "Entregado"})

        assert first and second
        airtable.update_record.assert_called_with(
            table_name="Envíos", record_id="rec1", fields={"Estado": "Entregado"}
        )
        store.complete_tracking.assert_called_once_with("100")
        assert controller.envios[0].estado == "Entregado"

    @pytest.mark.asyncio
    async def test_seguimiento_completes_recogida(self, controller, store):
        await controller.refresh()

        await controller.actualizar("rec1", {"seguimiento": "1Z999"})

        store.complete_recogida.assert_called_once_with("100")

    @pytest.mark.asyncio
    async def test_airtable_failure_skips_side_effects(self, controller, airtable, store):
        await controller.refresh()
        airtable.update_record.side_effect = AirtableApiError("Airtable request falló 422")

        result = await controller.actualizar("rec1", {"estado": "Entregado"})

        assert not result
        assert "422" in result.message
        assert controller.envios[0].estado == "Enviado"
        store.complete_tracking.assert_not_called()

    @pytest.mark.asyncio
    async def test_supabase_failure_does_not_fail_update(self, controller, store):
        await controller.refresh()
        store.complete_recogida.side_effect = RuntimeError("supabase caido")

        result = await controller.actualizar("rec1", {"estado": "Recogida enviada"})

        assert result
        assert controller.envios[0].estado == "Recogida enviada"

    @pytest.mark.asyncio
    async def test_numero_from_remote_record_when_not_loaded(self, controller, store):
        result = await controller.actualizar("rec9", {"estado": "Entregado"})

        assert result
        store.complete_tracking.assert_called_once_with("100")

    @pytest.mark.asyncio
    async def test_non_numeric_numero_skips_store(self, controller, store):
        await controller.refresh()

        await controller.actualizar("rec3", {"numero": "ENV-3B", "estado": "Entregado"})

        store.complete_tracking.assert_not_called()


class TestCrear:

    @pytest.mark.asyncio
    async def test_creates_with_defaults_and_refreshes(self, controller, airtable, make_record):
        airtable.create_record.return_value = make_record("recNEW", {"Estado": "Envío creado"})

        result = await controller.crear({"servicio": "recSERV", "codigo_postal": 28001, "cliente": None})

        assert result and result.record_id == "recNEW"
        airtable.create_record.assert_called_once_with(
            table_name="Envíos",
            fields={
                "Servicio": ["recSERV"],
                "Estado": "Envío creado",
                "Transporte": "Tipsa",
                "Código postal": "28001",
            },
        )
        airtable.list_records.assert_called_once()

    @pytest.mark.asyncio
    async def test_create_failure_returns_message(self, controller, airtable):
        airtable.create_record.side_effect = AirtableApiError("422")

        result = await controller.crear({"servicio": "recSERV"})

        assert not result
        assert result.message == CREATE_ERROR_MESSAGE
        airtable.list_records.assert_not_called()


class TestPolling:

    @pytest.mark.asyncio
    async def test_poller_refreshes_until_closed(self, controller, airtable):
        controller.start_polling(0.01)
        controller.start_polling(0.01)
        await asyncio.sleep(0.05)

        await controller.close()
        calls = airtable.list_records.call_count
        assert calls >= 1

        await asyncio.sleep(0.05)
        assert airtable.list_records.call_count == calls
