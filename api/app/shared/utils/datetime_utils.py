"""
Utilidades para manejo de fechas y horas.
"""
from datetime import datetime, timezone
from typing import Any, Optional


class DateTimeUtils:
    """Clase de utilidades para operaciones con fechas y horas."""

    @staticmethod
    def now_utc() -> datetime:
        """
        Obtiene la fecha y hora actual en UTC.

        Returns:
            datetime: Fecha y hora actual en UTC
        """
        return datetime.now(timezone.utc)

    @staticmethod
    def from_iso_string(iso_string: Any) -> Optional[datetime]:
        """
        Convierte un string ISO 8601 a datetime aware en UTC.

        Acepta el sufijo 'Z' que devuelve Airtable. Las fechas sin zona
        se interpretan como UTC.

        Args:
            iso_string: String en formato ISO 8601

        Returns:
            Optional[datetime]: Objeto datetime o None si hay error
        """
        if not iso_string:
            return None
        try:
            dt = datetime.fromisoformat(str(iso_string).replace("Z", "+00:00"))
        except (ValueError, TypeError):
            return None
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
