"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .envio_dto import (
    EnvioResponseDTO,
    EnviosListResponseDTO,
    EnvioUpdateDTO,
    EnvioCreateDTO,
    OperationResultDTO,
)
from .registro_dto import (
    RegistroResponseDTO,
    RegistrosListResponseDTO,
    EstadoUpdateDTO,
    CitaUpdateDTO,
    ComentariosUpdateDTO,
    IpartnerUpdateDTO,
    AlertaCitaResponseDTO,
)
from .metrics_dto import (
    AdminStatsDTO,
    CasosSemanaDTO,
    RecogidasDiaDTO,
    CasosGestionadosResponseDTO,
    RecogidasStatsResponseDTO,
)

__all__ = [
    "EnvioResponseDTO",
    "EnviosListResponseDTO",
    "EnvioUpdateDTO",
    "EnvioCreateDTO",
    "OperationResultDTO",
    "RegistroResponseDTO",
    "RegistrosListResponseDTO",
    "EstadoUpdateDTO",
    "CitaUpdateDTO",
    "ComentariosUpdateDTO",
    "IpartnerUpdateDTO",
    "AlertaCitaResponseDTO",
    "AdminStatsDTO",
    "CasosSemanaDTO",
    "RecogidasDiaDTO",
    "CasosGestionadosResponseDTO",
    "RecogidasStatsResponseDTO",
]
