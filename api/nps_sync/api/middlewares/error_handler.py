"""
Middleware para errores no controlados.

Los `AppException` los resuelve el handler registrado en `main.py`; aquí
solo llega lo inesperado, que se responde con el mismo cuerpo JSON
(`success`, `error`, `message`, `details`) para que quien dispare la
sincronización pueda leerlo igual.
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from loguru import logger

from nps_sync.shared.exceptions.base import AppException


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Convierte excepciones no controladas en un 500 con cuerpo de error."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.opt(exception=exc).error(
                "Fallo no controlado en {} {}: {}", request.method, request.url.path, exc
            )
            error = AppException(
                "Error interno durante la sincronización",
                error_code="INTERNAL_SERVER_ERROR",
                details={"path": request.url.path, "method": request.method},
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=error.to_dict(),
            )
