"""
Cliente mínimo de Airtable REST API (sin SDKs externos).

Cubre:
- requests
- paginación por offset
- rate-limit/backoff (429, 5xx)
- PATCH por id, POST de registros nuevos
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Optional
from urllib.parse import quote

import requests
from loguru import logger

from .types import AirtableRecord, ensure_utc


@dataclass(frozen=True)
class AirtableCredentials:
    token: str
    base_id: str


class AirtableApiError(RuntimeError):
    """Error de integración con Airtable."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _parse_created_time(raw: Any) -> Optional[datetime]:
    if not raw:
        return None
    try:
        return ensure_utc(datetime.fromisoformat(str(raw).replace("Z", "+00:00")))
    except ValueError:
        return None


def _to_record(payload: dict[str, Any]) -> AirtableRecord:
    rec_id = payload.get("id")
    if not rec_id:
        # Caso raro; preferimos fallar temprano y visible.
        raise AirtableApiError("Airtable devolvió un record sin 'id'")
    return AirtableRecord(
        record_id=rec_id,
        fields=payload.get("fields") or {},
        created_time=_parse_created_time(payload.get("createdTime")),
    )


class AirtableClient:
    """
    Cliente HTTP de Airtable para una base.

    Importante:
    - No hace cast de tipos de campos: eso lo decide el mapeo de cada tabla.
    - Los métodos son síncronos; los casos de uso los ejecutan en un thread
      para no bloquear el event loop.
    """

    def __init__(
        self,
        credentials: AirtableCredentials,
        *,
        session: Optional[requests.Session] = None,
        base_url: str = "https://api.airtable.com/v0",
        timeout_s: int = 30,
        max_retries: int = 6,
        min_backoff_s: float = 0.8,
        max_backoff_s: float = 20.0,
    ) -> None:
        self._creds = credentials
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._max_retries = max_retries
        self._min_backoff_s = min_backoff_s
        self._max_backoff_s = max_backoff_s
        self._session = session or requests.Session()

    def _table_url(self, table_name: str, record_id: Optional[str] = None) -> str:
        url = f"{self._base_url}/{self._creds.base_id}/{quote(table_name, safe='')}"
        if record_id:
            url = f"{url}/{record_id}"
        return url

    def iter_records(
        self,
        *,
        table_name: str,
        view: Optional[str] = None,
        fields: Optional[list[str]] = None,
        filter_formula: Optional[str] = None,
        page_size: int = 100,
    ) -> Iterable[AirtableRecord]:
        """
        Itera todos los registros de una tabla siguiendo el 'offset' de Airtable.
        """
        url = self._table_url(table_name)
        offset: Optional[str] = None

        while True:
            query: list[tuple[str, Any]] = [("pageSize", page_size)]
            if view:
                query.append(("view", view))
            if filter_formula:
                query.append(("filterByFormula", filter_formula))
            if offset:
                query.append(("offset", offset))
            # Airtable permite repetir "fields[]" en querystring.
            for f in fields or []:
                query.append(("fields[]", f))

            payload = self._request_json("GET", url, query=query)
            for rec in payload.get("records") or []:
                yield _to_record(rec)

            offset = payload.get("offset")
            if not offset:
                break

    def list_records(self, *, table_name: str, **kwargs: Any) -> list[AirtableRecord]:
        """Todos los registros de la tabla (paginando)."""
        records = list(self.iter_records(table_name=table_name, **kwargs))
        logger.debug(f"Airtable '{table_name}': {len(records)} registros")
        return records

    def get_record(self, *, table_name: str, record_id: str) -> AirtableRecord:
        payload = self._request_json("GET", self._table_url(table_name, record_id))
        return _to_record(payload)

    def update_record(
        self, *, table_name: str, record_id: str, fields: dict[str, Any]
    ) -> AirtableRecord:
        """PATCH de campos sueltos; Airtable devuelve el registro completo."""
        payload = self._request_json(
            "PATCH", self._table_url(table_name, record_id), body={"fields": fields}
        )
        return _to_record(payload)

    def create_record(self, *, table_name: str, fields: dict[str, Any]) -> AirtableRecord:
        payload = self._request_json(
            "POST", self._table_url(table_name), body={"records": [{"fields": fields}]}
        )
        records = payload.get("records") or []
        if not records:
            raise AirtableApiError(f"Airtable no devolvió el registro creado en '{table_name}'")
        return _to_record(records[0])

    def _request_json(
        self,
        method: str,
        url: str,
        *,
        query: Optional[list[tuple[str, Any]]] = None,
        body: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """
        Request HTTP con backoff para 429/5xx.

        Estrategia:
        - 429: respeta Retry-After si existe, si no exponencial con jitter simple.
        - 5xx: exponencial con jitter.
        - 4xx (no 429): error inmediato (config/auth/campo mal).
        """
        headers = {
            "Authorization": f"Bearer {self._creds.token}",
            "Content-Type": "application/json",
        }

        for attempt in range(self._max_retries + 1):
            resp = self._session.request(
                method=method,
                url=url,
                params=query,
                json=body,
                headers=headers,
                timeout=self._timeout_s,
            )

            if 200 <= resp.status_code < 300:
                return resp.json()

            # Errores recuperables
            if resp.status_code == 429 or 500 <= resp.status_code < 600:
                if attempt >= self._max_retries:
                    raise AirtableApiError(
                        f"Airtable error {resp.status_code} tras {attempt} reintentos: {resp.text}",
                        status_code=resp.status_code,
                    )

                retry_after = resp.headers.get("Retry-After")
                if retry_after:
                    try:
                        sleep_s = float(retry_after)
                    except ValueError:
                        sleep_s = self._min_backoff_s
                else:
                    # Exponencial simple + jitter proporcional
                    base = min(self._max_backoff_s, self._min_backoff_s * (2**attempt))
                    sleep_s = base + (0.15 * base)

                logger.warning(
                    f"Airtable {method} respondió {resp.status_code}, reintento {attempt + 1} en {sleep_s:.1f}s"
                )
                time.sleep(sleep_s)
                continue

            # Errores no recuperables
            raise AirtableApiError(
                f"Airtable request falló {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
            )

        raise AirtableApiError("Airtable: reintentos agotados")
