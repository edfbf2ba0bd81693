"""
Excepción base del servicio de sincronización.

Cada subclase declara su `error_code` y su `status_code` como atributos
de clase; ese código viaja tal cual al `Result` de fallo y al cuerpo
JSON de la respuesta HTTP.
"""
from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Error conocido del servicio (configuración, Firestore, Notion, mapeo).

    Lo que no hereda de aquí se reporta como error inesperado.
    """

    error_code: str = "INTERNAL_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Args:
            message: Mensaje de error descriptivo
            status_code: Sobrescribe el estado HTTP de la clase
            error_code: Sobrescribe el código de error de la clase
            details: Contexto del error (colección, documento, estado HTTP de Notion)
        """
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if error_code is not None:
            self.error_code = error_code
        self.details = {k: v for k, v in (details or {}).items() if v is not None}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Cuerpo JSON de error, con la misma forma en handler y middleware."""
        return {
            "success": False,
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }
