"""
Tipo de resultado explícito entre capas (lookup, mapper, migrador, listener).

Un `Result` es exitoso (`value`) o fallido (`error_kind` + `message`).
Las excepciones de infraestructura se convierten aquí en fallos para que
cada capa decida qué hacer con ellos sin depender de try/except implícitos.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from nps_sync.shared.exceptions.base import AppException

T = TypeVar("T")
U = TypeVar("U")

UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Resultado de una operación.

    - success: True si la operación terminó bien
    - value: valor producido (solo si success)
    - error_kind: código del error (p.ej. STORE_ERROR, NOTION_ERROR)
    - message: texto del error
    - trace: stack trace formateado, si se capturó
    """

    success: bool
    value: Optional[T] = None
    error_kind: Optional[str] = None
    message: Optional[str] = None
    trace: Optional[str] = None

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error_kind: str, message: str, trace: Optional[str] = None) -> "Result[T]":
        return cls(success=False, error_kind=error_kind, message=message, trace=trace)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "Result[T]":
        """
        Convierte una excepción en un fallo.

        Las `AppException` aportan su `error_code`; cualquier otra queda
        como UNEXPECTED_ERROR.
        """
        kind = exc.error_code if isinstance(exc, AppException) else UNEXPECTED_ERROR
        message = exc.message if isinstance(exc, AppException) else str(exc)
        trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return cls.fail(kind, message, trace=trace)

    @property
    def failed(self) -> bool:
        return not self.success

    def map(self, fn: Callable[[T], U]) -> "Result[U]":
        """Aplica `fn` al valor si es exitoso; propaga el fallo tal cual."""
        if not self.success:
            return Result(
                success=False,
                error_kind=self.error_kind,
                message=self.message,
                trace=self.trace,
            )
        return Result.ok(fn(self.value))

