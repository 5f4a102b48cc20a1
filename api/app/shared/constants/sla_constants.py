"""
Constantes del SLA de envios y del flujo de asesoramientos.
Define estados terminales, umbrales y valores de seguimiento compartidos
por todos los clasificadores (listado de envios, dashboard admin).
"""
from enum import Enum


class SlaBucket(str, Enum):
    """Pestañas SLA en las que puede caer un envio."""
    NINGUNO = "ninguno"
    REQUIERE_ACCION = "requiere-accion"
    EN_ESPERA = "en-espera"


# Umbral de horas laborables a partir del cual un envio requiere accion (estricto >)
SLA_BUSINESS_HOURS_THRESHOLD = 48

# Valor de "Seguimiento" que indica que ya se comunico el tracking al cliente
TRACKING_ACK_VALUE = "Email enviado"

# Estados de envio que lo sacan de ambas pestañas
ESTADOS_TERMINALES_ENVIO = frozenset({"Entregado", "Devuelto", "Recogida hecha"})

# Estados que cierran la recogida en Supabase (columna tramitado)
ESTADOS_COMPLETAN_RECOGIDA = frozenset({"Recogida enviada", "Recogida hecha"})

# Estado que cierra el tracking de entrega en Supabase (columna entregado)
ESTADO_COMPLETA_TRACKING = "Entregado"

ESTADO_ENVIO_INICIAL = "Envío creado"
TRANSPORTE_POR_DEFECTO = "Tipsa"

ENVIOS_STATUS_OPTIONS = [
    "Envío creado",
    "Listo para enviar",
    "Enviado",
    "Entregado",
    "Devuelto",
    "Reclamado",
    "Recogida hecha",
    "Pendiente recogida",
    "Recogida enviada",
]

ENVIOS_SEGUIMIENTO_OPTIONS = [TRACKING_ACK_VALUE]

# Asesoramientos (Registros)
IPARTNER_EXCLUIDOS = frozenset({"No interesado", "Ilocalizable", "Facturado", "Cancelado"})

# Reparaciones pendientes (dashboard admin): horas de reloj, no laborables
REPARACIONES_ESTADOS_PENDIENTES = frozenset({"Asignado", "Aceptado", "Citado"})
REPARACIONES_PENDIENTE_HORAS = 48

# Alerta de cita: ventana alrededor de la hora citada
ESTADO_CITADO = "Citado"
CITA_ALERTA_VENTANA_MINUTOS = 10

# Intervalo por defecto de los pollers de pantalla
POLL_INTERVAL_SECONDS = 60
