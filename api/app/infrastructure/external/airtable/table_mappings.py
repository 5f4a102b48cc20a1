"""
Mapeos entre campos de Airtable y entidades del portal.

Las tablas tienen nombres de campo historicos distintos segun la base,
por eso cada campo admite alias al leer. Al escribir siempre se usa el
nombre canonico.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from app.domain.entities.envio import Envio
from app.domain.entities.registro import Registro, Reparacion
from app.shared.constants.sla_constants import ESTADO_ENVIO_INICIAL, TRANSPORTE_POR_DEFECTO
from app.shared.utils.datetime_utils import DateTimeUtils

from .types import AirtableRecord, FieldMapping


def _first(value: Any) -> Any:
    """Los linked records llegan como lista de ids; nos quedamos con el primero."""
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _as_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _as_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, list):
        return value
    return [] if value is None else [value]


_date = DateTimeUtils.from_iso_string


ENVIO_MAPPINGS: List[FieldMapping] = [
    FieldMapping("Número", "numero", aliases=("Numero",), transform=_as_str),
    FieldMapping("Número de recogida", "numero_recogida", transform=_as_int),
    FieldMapping("Seguimiento", "seguimiento"),
    FieldMapping("Servicio", "servicio", transform=_first),
    FieldMapping("Estado", "estado"),
    FieldMapping("Fecha de envío", "fecha_envio", aliases=("Fecha Envío", "Fecha envio"), transform=_date),
    FieldMapping("Fecha estado", "fecha_estado", aliases=("Fecha Estado",), transform=_date, writable=False),
    FieldMapping(
        "Fecha seguimiento", "fecha_seguimiento", aliases=("Fecha Seguimiento",), transform=_date, writable=False
    ),
    FieldMapping("Inventario", "material", transform=_first),
    FieldMapping("Producto", "producto", aliases=("Modelo",), writable=False),
    FieldMapping("Creación", "creacion", aliases=("Creacion",), transform=_date, writable=False),
    FieldMapping("Transporte", "transporte"),
    FieldMapping("Catálogo", "catalogo", aliases=("Catalogo",), transform=_first),
    FieldMapping("Comentarios", "comentarios"),
    FieldMapping("Cliente", "cliente"),
    FieldMapping("Dirección", "direccion", aliases=("Direccion",)),
    FieldMapping("Población", "poblacion", aliases=("Poblacion",)),
    FieldMapping("Código postal", "codigo_postal", aliases=("Codigo postal",), transform=_as_str),
    FieldMapping("Provincia", "provincia"),
    FieldMapping("Teléfono", "telefono", aliases=("Telefono",), transform=_as_str),
    FieldMapping("Referencia", "referencia", aliases=("Reference",), transform=_first, writable=False),
]

REGISTRO_MAPPINGS: List[FieldMapping] = [
    FieldMapping("Contrato", "contrato", aliases=("Nº Contrato", "Numero", "Número"), transform=_as_int),
    FieldMapping("Nombre", "nombre", aliases=("Cliente",)),
    FieldMapping("Teléfono", "telefono", aliases=("Telefono", "Tel"), transform=_as_str),
    FieldMapping("Email", "email", aliases=("Correo",)),
    FieldMapping("Dirección", "direccion", aliases=("Direccion", "Address")),
    FieldMapping("Estado", "estado"),
    FieldMapping("Fecha de registro", "fecha", aliases=("Fecha",), transform=_date, writable=False),
    FieldMapping("Asesor", "asesor", aliases=("Advisor",)),
    FieldMapping("Cita", "cita", transform=_date),
    FieldMapping("Comentarios", "comentarios"),
    FieldMapping("Informe", "informe"),
    FieldMapping("Expediente", "expediente", transform=_as_str),
    FieldMapping("Tramitado", "tramitado", transform=bool),
    FieldMapping("Ipartner", "ipartner"),
    FieldMapping("Fecha Ipartner", "fecha_ipartner", transform=_date, writable=False),
    FieldMapping("PDF", "pdf", aliases=("Pdf", "pdf"), transform=_as_list, writable=False),
]

REPARACION_MAPPINGS: List[FieldMapping] = [
    FieldMapping("Estado", "estado"),
    FieldMapping("Fecha estado", "fecha_estado", aliases=("Fecha Estado",), transform=_date),
    FieldMapping("Cita", "cita", transform=_date),
]


def _read_all(mappings: List[FieldMapping], fields: Dict[str, Any]) -> Dict[str, Any]:
    values = {}
    for mapping in mappings:
        value = mapping.read(fields)
        if value is not None:
            values[mapping.attribute] = value
    return values


def _patch_to_fields(mappings: List[FieldMapping], patch: Dict[str, Any]) -> Dict[str, Any]:
    """
    Traduce un patch de atributos a campos Airtable.

    Las claves desconocidas o de solo lectura se descartan. Un valor None
    se conserva para vaciar el campo. Las fechas se envian en ISO 8601.
    """
    by_attribute = {m.attribute: m for m in mappings if m.writable}
    fields: Dict[str, Any] = {}
    for attribute, value in patch.items():
        mapping = by_attribute.get(attribute)
        if mapping is None:
            continue
        if isinstance(value, datetime):
            value = value.isoformat()
        fields[mapping.airtable_field] = value
    return fields


def record_to_envio(record: AirtableRecord) -> Envio:
    values = _read_all(ENVIO_MAPPINGS, record.fields)
    if "creacion" not in values and record.created_time is not None:
        values["creacion"] = record.created_time
    return Envio(id=record.record_id, **values)


def envio_patch_to_fields(patch: Dict[str, Any]) -> Dict[str, Any]:
    fields = _patch_to_fields(ENVIO_MAPPINGS, patch)
    # El catalogo es un linked record: Airtable espera lista de ids
    if "Catálogo" in fields and not isinstance(fields["Catálogo"], list):
        catalogo = fields["Catálogo"]
        fields["Catálogo"] = [catalogo] if catalogo else []
    return fields


def envio_create_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Campos para crear un envio nuevo.

    Estado y transporte tienen valor por defecto; los valores ausentes se
    eliminan porque Airtable responde 422 con claves a null en un alta.
    """
    servicio = data.get("servicio")
    material = data.get("material")
    catalogo = data.get("catalogo")
    codigo_postal = data.get("codigo_postal")

    if catalogo is not None and str(catalogo).startswith("rec"):
        catalogo = [catalogo]

    fields = {
        "Servicio": [servicio] if servicio else None,
        "Estado": data.get("estado") or ESTADO_ENVIO_INICIAL,
        "Fecha de envío": data.get("fecha_envio"),
        "Inventario": [material] if material else None,
        "Transporte": data.get("transporte") or TRANSPORTE_POR_DEFECTO,
        "Catálogo": catalogo,
        "Comentarios": data.get("comentarios"),
        "Destinatario": data.get("cliente"),
        "Dirección": data.get("direccion"),
        "Ciudad": data.get("poblacion"),
        "Código postal": str(codigo_postal) if codigo_postal is not None else None,
        "Provincia": data.get("provincia"),
        "Teléfono": data.get("telefono"),
        "Técnicos": data.get("tecnicos"),
    }
    return {
        k: v.isoformat() if isinstance(v, datetime) else v
        for k, v in fields.items()
        if v is not None
    }


def record_to_registro(record: AirtableRecord) -> Registro:
    return Registro(id=record.record_id, **_read_all(REGISTRO_MAPPINGS, record.fields))


def registro_patch_to_fields(patch: Dict[str, Any]) -> Dict[str, Any]:
    return _patch_to_fields(REGISTRO_MAPPINGS, patch)


def record_to_reparacion(record: AirtableRecord) -> Reparacion:
    return Reparacion(id=record.record_id, **_read_all(REPARACION_MAPPINGS, record.fields))
