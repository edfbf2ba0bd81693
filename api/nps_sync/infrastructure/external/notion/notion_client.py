"""
Cliente mínimo de la API REST de Notion (sin SDKs externos).

Solo cubre lo que necesita el pipeline:
- requests
- creación de páginas dentro de una base de datos (`POST /pages`)

No hay reintentos: cada página se crea con exactamente una request y
cualquier respuesta no-2xx se reporta como `NotionApiError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import requests
from loguru import logger

from nps_sync.domain.repositories.page_writer import IPageWriter
from nps_sync.shared.exceptions.sync import NotionApiError, SyncConfigError


@dataclass(frozen=True)
class NotionCredentials:
    token: str
    database_id: str


class NotionClient(IPageWriter):
    """
    Cliente HTTP de Notion.

    La sesión de requests se reutiliza entre llamadas; el dueño del
    cliente (startup de la app o el script CLI) la cierra con `close()`.
    """

    def __init__(
        self,
        credentials: NotionCredentials,
        *,
        session: Optional[requests.Session] = None,
        base_url: str = "https://api.notion.com/v1",
        notion_version: str = "2022-06-28",
        timeout_s: int = 30,
    ) -> None:
        self._creds = credentials
        self._base_url = base_url.rstrip("/")
        self._notion_version = notion_version
        self._timeout_s = timeout_s
        self._session = session or requests.Session()

    @property
    def database_id(self) -> str:
        return self._creds.database_id

    def create_page(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Crea una página y retorna el objeto página de Notion.
        """
        return self._request_json("POST", f"{self._base_url}/pages", body=payload)

    def close(self) -> None:
        self._session.close()

    def _request_json(self, method: str, url: str, *, body: dict[str, Any]) -> dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self._creds.token}",
            "Notion-Version": self._notion_version,
            "Content-Type": "application/json",
        }

        try:
            resp = self._session.request(
                method=method,
                url=url,
                json=body,
                headers=headers,
                timeout=self._timeout_s,
            )
        except requests.RequestException as e:
            raise NotionApiError(f"Notion request falló: {e}") from e

        if 200 <= resp.status_code < 300:
            return resp.json()

        # Notion responde {"object": "error", "code": ..., "message": ...}
        try:
            error_body = resp.json()
        except ValueError:
            error_body = {}
        message = error_body.get("message") or resp.text
        logger.debug(f"Notion {method} {url} -> {resp.status_code}: {message}")
        raise NotionApiError(
            f"Notion error {resp.status_code}: {message}",
            http_status=resp.status_code,
            details={"code": error_body.get("code")} if error_body.get("code") else None,
        )


def build_notion_client(
    *,
    token: str,
    database_id: str,
    base_url: str = "https://api.notion.com/v1",
    notion_version: str = "2022-06-28",
    timeout_s: int = 30,
) -> NotionClient:
    """
    Construye el cliente validando que token y database id estén configurados.
    """
    if not token:
        raise SyncConfigError("Falta variable de entorno obligatoria: NOTION_TOKEN")
    if not database_id:
        raise SyncConfigError("Falta variable de entorno obligatoria: NOTION_DATABASE_ID")
    return NotionClient(
        NotionCredentials(token=token, database_id=database_id),
        base_url=base_url,
        notion_version=notion_version,
        timeout_s=timeout_s,
    )
