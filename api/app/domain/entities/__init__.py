"""
Entidades del dominio.
"""
from app.domain.entities.envio import Envio, is_numeric_identifier
from app.domain.entities.registro import Registro, Reparacion
from app.domain.entities.results import PrimaryResult, SideEffectResult

__all__ = [
    "Envio",
    "is_numeric_identifier",
    "Registro",
    "Reparacion",
    "PrimaryResult",
    "SideEffectResult",
]
