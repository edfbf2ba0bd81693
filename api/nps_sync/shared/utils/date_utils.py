"""
Utilidades de fechas para el mapeo de encuestas hacia Notion.

Firestore entrega los timestamps como `datetime` aware (UTC); cuando el
documento llega por HTTP como JSON, la fecha viene como string ISO-8601.
"""
from datetime import datetime, timezone
from typing import Any, Optional


def utc_now() -> datetime:
    """Retorna la hora actual en UTC, como datetime aware."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Normaliza datetime a UTC (aware). Los naive se asumen UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def isoformat_z(dt: datetime) -> str:
    """Serializa datetime a ISO8601 en UTC con sufijo 'Z' y milisegundos."""
    return ensure_utc(dt).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Convierte un timestamp almacenado en `datetime` UTC.

    Acepta None, datetime (incluye DatetimeWithNanoseconds de Firestore)
    o string ISO-8601 (con o sin 'Z'). Cualquier otro valor levanta
    ValueError.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        try:
            parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError as e:
            raise ValueError(f"Fecha no valida: {value!r}") from e
        return ensure_utc(parsed)
    raise ValueError(f"Tipo de fecha no soportado: {type(value).__name__}")


def to_iso_date(value: Any) -> Optional[str]:
    """
    Retorna la fecha calendario (UTC) del instante en formato YYYY-MM-DD,
    o None si no hay fecha.
    """
    dt = parse_timestamp(value)
    if dt is None:
        return None
    return dt.date().isoformat()
