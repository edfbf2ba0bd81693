"""
Excepciones del pipeline de sincronización Firestore -> Notion.

La infraestructura levanta estas excepciones; los casos de uso las
convierten en `Result` de fallo con su `error_code` como tipo de error.
"""
from typing import Any, Dict, Optional

from nps_sync.shared.exceptions.base import AppException


class SyncConfigError(AppException):
    """Falta configuración obligatoria (token, database id, credenciales)."""

    error_code = "CONFIG_ERROR"


class DocumentStoreError(AppException):
    """Error de lectura en Firestore."""

    error_code = "STORE_ERROR"

    def __init__(self, message: str, collection: Optional[str] = None):
        super().__init__(message, details={"collection": collection})


class NotionApiError(AppException):
    """Error de integración con la API de Notion."""

    error_code = "NOTION_ERROR"
    status_code = 502

    def __init__(
        self,
        message: str,
        http_status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details={**(details or {}), "http_status": http_status})
        self.http_status = http_status


class MappingError(AppException):
    """Un registro de encuesta no se pudo proyectar al esquema de Notion."""

    error_code = "MAPPING_ERROR"
    status_code = 422

    def __init__(self, message: str, survey_id: Optional[str] = None):
        super().__init__(message, details={"survey_id": survey_id})
