"""
Dependencias para los clientes de los almacenes externos.

Los clientes se crean una sola vez por proceso (reutilizan la sesion HTTP
y el cliente de Supabase).
"""
from functools import lru_cache

from app.core.config import settings
from app.infrastructure.external.airtable.airtable_client import AirtableClient, AirtableCredentials
from app.infrastructure.external.supabase_tracking.tracking_store import (
    SupabaseTrackingStore,
    build_tracking_store,
)


def _build_airtable_client(base_id: str) -> AirtableClient:
    return AirtableClient(
        AirtableCredentials(token=settings.AIRTABLE_TOKEN, base_id=base_id),
        timeout_s=settings.AIRTABLE_TIMEOUT_S,
        max_retries=settings.AIRTABLE_MAX_RETRIES,
    )


@lru_cache
def get_airtable_client() -> AirtableClient:
    """
    Cliente de la base principal (envios y reparaciones).

    Returns:
        AirtableClient: Cliente compartido
    """
    return _build_airtable_client(settings.AIRTABLE_BASE_ID)


@lru_cache
def get_registros_airtable_client() -> AirtableClient:
    """Cliente de la base de asesoramientos (puede ser la misma)."""
    return _build_airtable_client(settings.effective_registros_base_id)


@lru_cache
def get_tracking_store() -> SupabaseTrackingStore:
    """
    Store de recogidas en Supabase.
    Si Supabase no esta configurado devuelve un store desactivado.
    """
    return build_tracking_store(settings)
