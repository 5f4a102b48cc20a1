"""
Endpoints de la pantalla de asesoramientos.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.application.dto.envio_dto import OperationResultDTO
from app.application.dto.registro_dto import (
    AlertaCitaResponseDTO,
    CitaUpdateDTO,
    ComentariosUpdateDTO,
    EstadoUpdateDTO,
    IpartnerUpdateDTO,
    RegistroResponseDTO,
    RegistrosListResponseDTO,
)
from app.application.services.appointment_alert import AppointmentAlertMonitor
from app.application.use_cases.registro_use_cases import RegistrosController
from app.api.v1.dependencies.use_case_deps import get_registros_controller
from app.core.config import settings
from app.domain.entities.registro import Registro
from app.domain.entities.results import PrimaryResult
from app.shared.exceptions.domain import RecordUpdateFailedException
from app.shared.utils.date_utils import format_cita_for_input


router = APIRouter(prefix="/registros", tags=["Registros"])


def _to_response(result: PrimaryResult) -> OperationResultDTO:
    if not result:
        raise RecordUpdateFailedException(result.message, result.record_id)
    return OperationResultDTO(success=True, id=result.record_id)


def _registro_response(registro: Registro) -> RegistroResponseDTO:
    dto = RegistroResponseDTO.model_validate(registro)
    dto.cita_texto = format_cita_for_input(registro.cita, settings.timezone)
    return dto


@router.get(
    "",
    response_model=RegistrosListResponseDTO,
    summary="Listar asesoramientos pendientes"
)
async def list_registros(
    search: str = Query("", description="Busqueda en nombre, telefono, email, direccion y contrato"),
    controller: RegistrosController = Depends(get_registros_controller)
) -> RegistrosListResponseDTO:
    await controller.refresh()
    items = controller.listar(search)
    return RegistrosListResponseDTO(
        total=len(items),
        items=[_registro_response(r) for r in items],
    )


@router.get(
    "/alerta-cita",
    response_model=AlertaCitaResponseDTO,
    summary="Cita en curso (±10 minutos)"
)
async def get_alerta_cita(
    dismissed: Optional[str] = Query(None, description="ID de la alerta descartada por el usuario"),
    controller: RegistrosController = Depends(get_registros_controller)
) -> AlertaCitaResponseDTO:
    """
    Evalua la alerta de cita sobre todos los asesoramientos cargados,
    incluidos los que no aparecen en el listado.

    Args:
        dismissed: ID descartado (no vuelve a alertar)
        controller: Controlador de asesoramientos (inyectado)

    Returns:
        AlertaCitaResponseDTO: Registro citado ahora o null
    """
    await controller.refresh()
    monitor = AppointmentAlertMonitor(lambda: controller.registros, tz=settings.timezone)
    if dismissed:
        monitor.dismiss(dismissed)
    alerta = monitor.evaluate()
    return AlertaCitaResponseDTO(
        alerta=_registro_response(alerta) if alerta else None
    )


@router.patch("/{registro_id}/estado", response_model=OperationResultDTO, summary="Cambiar estado")
async def update_estado(
    registro_id: str,
    dto: EstadoUpdateDTO,
    controller: RegistrosController = Depends(get_registros_controller)
) -> OperationResultDTO:
    return _to_response(await controller.actualizar_estado(registro_id, dto.estado))


@router.patch("/{registro_id}/cita", response_model=OperationResultDTO, summary="Cambiar cita")
async def update_cita(
    registro_id: str,
    dto: CitaUpdateDTO,
    controller: RegistrosController = Depends(get_registros_controller)
) -> OperationResultDTO:
    """La cita llega como DD/MM/YYYY hh:mm; un valor invalido responde 400 sin tocar Airtable."""
    return _to_response(await controller.actualizar_cita(registro_id, dto.cita))


@router.patch("/{registro_id}/comentarios", response_model=OperationResultDTO, summary="Cambiar comentarios")
async def update_comentarios(
    registro_id: str,
    dto: ComentariosUpdateDTO,
    controller: RegistrosController = Depends(get_registros_controller)
) -> OperationResultDTO:
    return _to_response(await controller.actualizar_comentarios(registro_id, dto.comentarios))


@router.patch("/{registro_id}/ipartner", response_model=OperationResultDTO, summary="Cambiar estado iPartner")
async def update_ipartner(
    registro_id: str,
    dto: IpartnerUpdateDTO,
    controller: RegistrosController = Depends(get_registros_controller)
) -> OperationResultDTO:
    return _to_response(await controller.actualizar_ipartner(registro_id, dto.ipartner))


@router.post("/{registro_id}/tramitado", response_model=OperationResultDTO, summary="Marcar como tramitado")
async def mark_tramitado(
    registro_id: str,
    controller: RegistrosController = Depends(get_registros_controller)
) -> OperationResultDTO:
    return _to_response(await controller.marcar_tramitado(registro_id))
