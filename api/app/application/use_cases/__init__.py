"""
Casos de uso de la aplicacion.
"""
from .envio_use_cases import EnviosController
from .registro_use_cases import RegistrosController
from .dashboard_use_cases import DashboardUseCases

__all__ = ["EnviosController", "RegistrosController", "DashboardUseCases"]
