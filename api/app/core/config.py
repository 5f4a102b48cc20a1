"""
Configuracion central de la aplicacion.
Gestiona variables de entorno y configuraciones globales.
Soporta configuracion dinamica para desarrollo (ENVIRONMENT=development)
y produccion (ENVIRONMENT=production).
"""
import json
from typing import List
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings
from pydantic import Field, computed_field

from app.shared.constants import sla_constants


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno y proporciona valores por defecto.

    Airtable es el almacen principal de envios y asesoramientos.
    Supabase es opcional: sin SUPABASE_URL/SUPABASE_KEY el seguimiento
    de recogidas queda desactivado y las metricas vienen vacias.
    """

    # Configuracion de la aplicacion
    APP_NAME: str = Field(default="Portal de Operaciones")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")

    # Configuracion del servidor
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    # Airtable
    AIRTABLE_TOKEN: str = Field(default="")
    AIRTABLE_BASE_ID: str = Field(default="")
    AIRTABLE_REGISTROS_BASE_ID: str = Field(default="")
    AIRTABLE_ENVIOS_TABLE: str = Field(default="Envíos")
    AIRTABLE_ENVIOS_VIEW: str = Field(default="Portal")
    AIRTABLE_REGISTROS_TABLE: str = Field(default="Registros")
    AIRTABLE_REPARACIONES_TABLE: str = Field(default="Reparaciones")
    AIRTABLE_TIMEOUT_S: int = Field(default=30)
    AIRTABLE_MAX_RETRIES: int = Field(default=6)

    # Supabase (tabla recogidas y resoluciones_remotas)
    SUPABASE_URL: str = Field(default="")
    SUPABASE_KEY: str = Field(default="")

    # SLA
    SLA_BUSINESS_HOURS_THRESHOLD: int = Field(default=sla_constants.SLA_BUSINESS_HOURS_THRESHOLD)
    SLA_TRACKING_ACK_VALUE: str = Field(default=sla_constants.TRACKING_ACK_VALUE)
    APP_TIMEZONE: str = Field(default="Europe/Madrid")

    # Polling de envios en servidor (mantiene las recogidas al dia)
    ENVIOS_POLL_ENABLED: bool = Field(default=False)
    POLL_INTERVAL_SECONDS: float = Field(default=sla_constants.POLL_INTERVAL_SECONDS)

    # CORS (acepta lista JSON o "*" para todos los origenes)
    CORS_ORIGINS: str = Field(default="*")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/app.log")

    @computed_field
    @property
    def effective_registros_base_id(self) -> str:
        """
        Base de Airtable de asesoramientos.
        Si no se define, se usa la misma base que envios.
        """
        return self.AIRTABLE_REGISTROS_BASE_ID or self.AIRTABLE_BASE_ID

    @computed_field
    @property
    def supabase_enabled(self) -> bool:
        """Indica si el seguimiento en Supabase esta configurado."""
        return bool(self.SUPABASE_URL and self.SUPABASE_KEY)

    @computed_field
    @property
    def is_development(self) -> bool:
        """Indica si el entorno es de desarrollo."""
        return self.ENVIRONMENT.lower() == "development"

    @property
    def timezone(self) -> ZoneInfo:
        """Zona horaria de negocio (dia de la semana, marcas en Supabase)."""
        return ZoneInfo(self.APP_TIMEZONE)

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignorar campos extra del .env


def get_cors_origins(cors_string: str) -> List[str]:
    """
    Parsea la configuracion de CORS.
    Acepta "*" para todos los origenes o una lista JSON.
    """
    if cors_string == "*":
        return ["*"]
    try:
        return json.loads(cors_string)
    except json.JSONDecodeError:
        # Si no es JSON valido, retornar como lista simple
        return [origin.strip() for origin in cors_string.split(",")]


# Instancia global de configuracion
settings = Settings()
