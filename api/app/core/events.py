"""
Manejadores de eventos de inicio y cierre de la aplicacion.
"""
from typing import Callable
from fastapi import FastAPI
from loguru import logger

from app.core.config import settings
from app.api.v1.dependencies.use_case_deps import get_envios_controller


def startup_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de inicio de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de inicio
    """
    async def startup() -> None:
        """Inicializa recursos al inicio de la aplicacion."""
        try:
            logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION}")
            logger.info(f"Entorno: {settings.ENVIRONMENT}")

            # Validar configuracion critica
            _validate_config()

            # Configurar logging adicional
            logger.add(
                settings.LOG_FILE,
                rotation="500 MB",
                retention="10 days",
                level=settings.LOG_LEVEL
            )

            # Poller de envios: mantiene las recogidas de Supabase al dia
            # aunque nadie tenga la pantalla abierta
            if settings.ENVIOS_POLL_ENABLED:
                controller = get_envios_controller()
                controller.start_polling(settings.POLL_INTERVAL_SECONDS)
                app.state.envios_controller = controller
                logger.info(f"Poller de envios activo cada {settings.POLL_INTERVAL_SECONDS}s")

            logger.success("Aplicacion iniciada correctamente")

        except Exception as e:
            logger.error(f"Error durante startup: {e}")
            logger.exception("Detalle del error:")
            raise

    return startup


def _validate_config() -> None:
    """Valida que la configuracion critica este presente."""
    warnings = []

    if not settings.AIRTABLE_TOKEN or not settings.AIRTABLE_BASE_ID:
        warnings.append("AIRTABLE_TOKEN/AIRTABLE_BASE_ID no configurados - no se podran leer envios")

    if not settings.supabase_enabled:
        warnings.append("SUPABASE_URL/SUPABASE_KEY no configurados - sin seguimiento de recogidas ni metricas")

    # Mostrar advertencias
    for warning in warnings:
        logger.warning(f"CONFIG: {warning}")


def shutdown_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de cierre de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de cierre
    """
    async def shutdown() -> None:
        """Libera recursos al cerrar la aplicacion."""
        logger.info("Cerrando aplicacion...")

        controller = getattr(app.state, "envios_controller", None)
        if controller is not None:
            await controller.close()
            logger.info("Poller de envios detenido")

        logger.success("Aplicacion cerrada correctamente")

    return shutdown
