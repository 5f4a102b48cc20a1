"""
Dependencias para inyeccion de casos de uso.

Los controladores de pantalla (envios, asesoramientos) son unicos por
proceso: su lista en memoria la comparten las peticiones y el poller de
envios.
"""
from functools import lru_cache

from fastapi import Depends

from app.application.services.sla_bucketer import SlaPolicy
from app.application.services.tracking_sync import TrackingSync
from app.application.use_cases.dashboard_use_cases import DashboardUseCases
from app.application.use_cases.envio_use_cases import EnviosController
from app.application.use_cases.registro_use_cases import RegistrosController
from app.api.v1.dependencies.repository_deps import (
    get_airtable_client,
    get_registros_airtable_client,
    get_tracking_store,
)
from app.core.config import settings


@lru_cache
def get_sla_policy() -> SlaPolicy:
    """Politica SLA unica para listado y dashboard."""
    return SlaPolicy.from_settings(settings)


@lru_cache
def get_envios_controller() -> EnviosController:
    """
    Dependencia para obtener el controlador de envios.

    Returns:
        EnviosController: Instancia compartida del controlador
    """
    policy = get_sla_policy()
    return EnviosController(
        get_airtable_client(),
        TrackingSync(get_tracking_store(), policy),
        table_name=settings.AIRTABLE_ENVIOS_TABLE,
        view=settings.AIRTABLE_ENVIOS_VIEW or None,
        policy=policy,
    )


@lru_cache
def get_registros_controller() -> RegistrosController:
    """
    Dependencia para obtener el controlador de asesoramientos.

    Returns:
        RegistrosController: Instancia compartida del controlador
    """
    return RegistrosController(
        get_registros_airtable_client(),
        table_name=settings.AIRTABLE_REGISTROS_TABLE,
        tz=settings.timezone,
    )


def get_dashboard_use_cases(
    policy: SlaPolicy = Depends(get_sla_policy),
) -> DashboardUseCases:
    """
    Dependencia para obtener los casos de uso del dashboard.

    Args:
        policy: Politica SLA compartida

    Returns:
        DashboardUseCases: Instancia de casos de uso del dashboard
    """
    return DashboardUseCases(
        get_airtable_client(),
        get_registros_airtable_client(),
        get_tracking_store(),
        tables={
            "envios": settings.AIRTABLE_ENVIOS_TABLE,
            "reparaciones": settings.AIRTABLE_REPARACIONES_TABLE,
            "registros": settings.AIRTABLE_REGISTROS_TABLE,
        },
        envios_view=settings.AIRTABLE_ENVIOS_VIEW or None,
        policy=policy,
    )
