"""
Integracion con Airtable (almacen principal de envios y asesoramientos).

Estructura:
- airtable_client.py: Cliente HTTP con paginacion y backoff.
- table_mappings.py: Traduccion campos Airtable <-> entidades.
- types.py: Tipos compartidos y utilidades puras.
"""
