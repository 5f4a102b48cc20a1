"""
Seguimiento SLA en Supabase (tablas recogidas y resoluciones_remotas).

Supabase es un almacen secundario: solo guarda marcas de tiempo para las
metricas de recogidas y casos gestionados. Airtable sigue siendo la fuente
de verdad de los envios.

Objetivos de diseño:
- Idempotencia: ensure/complete se pueden llamar N veces sin duplicar filas
  ni pisar marcas ya escritas.
- Sin dependencia de orden: cada llamada es independiente.
"""
