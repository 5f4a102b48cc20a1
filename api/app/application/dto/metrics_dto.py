"""
DTOs para las metricas del dashboard.

Los nombres de campo del JSON (camelCase) se mantienen como alias para
que las graficas existentes no cambien.
"""
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class AdminStatsDTO(BaseModel):
    """Contadores del dashboard de administracion."""
    envios_pendientes: int = Field(0, description="Envios en 'Requiere accion'")
    reparaciones_pendientes: int = Field(0, description="Reparaciones abiertas con mas de 48 h sin cambios")
    registros_pendientes: int = Field(0, description="Asesoramientos pendientes de gestion")


class CasosSemanaDTO(BaseModel):
    """
    Porcentaje de casos resueltos en 24 horas o menos en una semana.
    """
    model_config = ConfigDict(populate_by_name=True)

    week: str = Field(..., description="Lunes de la semana (YYYY-MM-DD)")
    percentage_24h: int = Field(..., alias="percentage24h")
    total_cases: int = Field(..., alias="totalCases")


class RecogidasDiaDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str = Field(..., description="Dia (YYYY-MM-DD)")
    avg_hours: float = Field(..., alias="avgHours")
    count: int


class CasosGestionadosResponseDTO(BaseModel):
    weeks: List[CasosSemanaDTO] = Field(default_factory=list)


class RecogidasStatsResponseDTO(BaseModel):
    days: List[RecogidasDiaDTO] = Field(default_factory=list)
