"""
Servicios de aplicacion.

Contiene la logica de negocio reutilizable que no pertenece
a un caso de uso especifico.
"""
from app.application.services.sla_bucketer import (
    SlaPolicy,
    clasificar_envio,
    listar_bucket,
    contar_requiere_accion,
)
from app.application.services.registro_filters import (
    filtrar_registros,
    contar_reparaciones_pendientes,
)
from app.application.services.tracking_sync import TrackingSync
from app.application.services.record_update_gateway import RecordUpdateGateway
from app.application.services.poller import Poller
from app.application.services.appointment_alert import AppointmentAlertMonitor

__all__ = [
    # SLA de envios
    "SlaPolicy",
    "clasificar_envio",
    "listar_bucket",
    "contar_requiere_accion",
    # Asesoramientos y reparaciones
    "filtrar_registros",
    "contar_reparaciones_pendientes",
    # Coordinacion de almacenes
    "TrackingSync",
    "RecordUpdateGateway",
    # Tareas periodicas
    "Poller",
    "AppointmentAlertMonitor",
]
