"""
Endpoints de la pantalla de envios.
"""
from fastapi import APIRouter, Depends, Query, status

from app.application.dto.envio_dto import (
    EnvioCreateDTO,
    EnvioResponseDTO,
    EnviosListResponseDTO,
    EnvioUpdateDTO,
    OperationResultDTO,
)
from app.application.use_cases.envio_use_cases import EnviosController
from app.api.v1.dependencies.use_case_deps import get_envios_controller
from app.shared.constants.sla_constants import SlaBucket
from app.shared.exceptions.domain import RecordUpdateFailedException, ValidationException


router = APIRouter(prefix="/envios", tags=["Envios"])


@router.get(
    "",
    response_model=EnviosListResponseDTO,
    summary="Listar envios de una pestaña SLA"
)
async def list_envios(
    tab: SlaBucket = Query(SlaBucket.REQUIERE_ACCION, description="requiere-accion | en-espera"),
    search: str = Query("", description="Busqueda en seguimiento, numero y producto"),
    controller: EnviosController = Depends(get_envios_controller)
) -> EnviosListResponseDTO:
    """
    Recarga los envios de Airtable y devuelve los de la pestaña pedida,
    filtrados y en orden natural por numero.

    Args:
        tab: Pestaña SLA
        search: Termino de busqueda (vacio = sin filtro)
        controller: Controlador de envios (inyectado)

    Returns:
        EnviosListResponseDTO: Envios de la pestaña y conteo por pestaña
    """
    if tab == SlaBucket.NINGUNO:
        raise ValidationException("La pestaña debe ser requiere-accion o en-espera", field="tab")

    await controller.refresh()
    items = controller.listar(tab, search)
    return EnviosListResponseDTO(
        tab=tab,
        total=len(items),
        counts=controller.contar(),
        items=[EnvioResponseDTO.model_validate(e) for e in items],
    )


@router.patch(
    "/{envio_id}",
    response_model=OperationResultDTO,
    summary="Actualizar campos de un envio"
)
async def update_envio(
    envio_id: str,
    dto: EnvioUpdateDTO,
    controller: EnviosController = Depends(get_envios_controller)
) -> OperationResultDTO:
    """
    Guarda el cambio en Airtable. El seguimiento de recogidas en Supabase
    se actualiza despues y nunca hace fallar la peticion.
    """
    patch = dto.model_dump(exclude_unset=True)
    if not patch:
        raise ValidationException("No hay campos que actualizar")

    result = await controller.actualizar(envio_id, patch)
    if not result:
        raise RecordUpdateFailedException(result.message, envio_id)
    return OperationResultDTO(success=True, id=envio_id)


@router.post(
    "",
    response_model=OperationResultDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Crear un envio"
)
async def create_envio(
    dto: EnvioCreateDTO,
    controller: EnviosController = Depends(get_envios_controller)
) -> OperationResultDTO:
    result = await controller.crear(dto.model_dump(exclude_none=True))
    if not result:
        raise RecordUpdateFailedException(result.message, result.record_id)
    return OperationResultDTO(success=True, id=result.record_id)
