"""
Endpoints de metricas para el dashboard.
"""
from fastapi import APIRouter, Depends

from app.application.dto.metrics_dto import (
    AdminStatsDTO,
    CasosGestionadosResponseDTO,
    RecogidasStatsResponseDTO,
)
from app.application.use_cases.dashboard_use_cases import DashboardUseCases
from app.api.v1.dependencies.use_case_deps import get_dashboard_use_cases


router = APIRouter(prefix="/metricas", tags=["Metricas"])


@router.get(
    "/casos-gestionados-24h",
    response_model=CasosGestionadosResponseDTO,
    summary="Porcentaje semanal de casos resueltos en 24 h"
)
async def get_casos_gestionados_24h(
    use_cases: DashboardUseCases = Depends(get_dashboard_use_cases)
) -> CasosGestionadosResponseDTO:
    return CasosGestionadosResponseDTO(weeks=await use_cases.get_casos_gestionados_24h())


@router.get(
    "/recogidas",
    response_model=RecogidasStatsResponseDTO,
    summary="Media diaria de horas de recogida del mes"
)
async def get_recogidas(
    use_cases: DashboardUseCases = Depends(get_dashboard_use_cases)
) -> RecogidasStatsResponseDTO:
    return RecogidasStatsResponseDTO(days=await use_cases.get_recogida_stats())


@router.get(
    "/admin",
    response_model=AdminStatsDTO,
    summary="Contadores del dashboard de administracion"
)
async def get_admin_stats(
    use_cases: DashboardUseCases = Depends(get_dashboard_use_cases)
) -> AdminStatsDTO:
    """
    Envios pendientes (misma regla que la pestaña "Requiere accion"),
    reparaciones abiertas sin cambios en 48 horas y asesoramientos pendientes.
    """
    return AdminStatsDTO(**await use_cases.get_admin_stats())
