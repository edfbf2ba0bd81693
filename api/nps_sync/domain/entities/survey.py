"""
Entidades de dominio: encuesta NPS, casa y usuario.

Los nombres de campo en Firestore son los del proceso de encuestas que
las genera (hid, uid, round, nps, comment, date); estas entidades los
traducen a nombres legibles y son de solo lectura para este servicio.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Union

from nps_sync.shared.utils.date_utils import parse_timestamp


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _as_score(value: Any) -> Union[int, float]:
    if value is None or value == "":
        return 0
    if isinstance(value, (int, float)):
        return value
    return float(value)


@dataclass(frozen=True)
class SurveyRecord:
    """Registro de encuesta de satisfaccion (coleccion `nps`)."""

    survey_id: str
    home_ref: str
    user_ref: str
    round_tag: str
    score: Union[int, float] = 0
    comment: str = ""
    submitted_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "SurveyRecord":
        """
        Construye la entidad desde un documento de Firestore.

        `nps` y `comment` nulos toman sus valores por defecto (`nps` conserva
        decimales; un texto no numerico es ValueError); `date` puede
        ser un timestamp de Firestore o un string ISO.
        """
        return cls(
            survey_id=doc_id,
            home_ref=_as_text(data.get("hid")),
            user_ref=_as_text(data.get("uid")),
            round_tag=_as_text(data.get("round")),
            score=_as_score(data.get("nps")),
            comment=data.get("comment") or "",
            submitted_at=parse_timestamp(data.get("date")),
        )


@dataclass(frozen=True)
class HomeRecord:
    """Casa (coleccion `homes`)."""

    home_ref: str
    display_name: str
    location: Optional[str] = None

    @classmethod
    def from_document(cls, data: Dict[str, Any]) -> "HomeRecord":
        return cls(
            home_ref=_as_text(data.get("hid")),
            display_name=_as_text(data.get("name")),
            location=data.get("location"),
        )


@dataclass(frozen=True)
class UserRecord:
    """Propietario (coleccion `users`)."""

    user_ref: str
    display_name: str

    @classmethod
    def from_document(cls, data: Dict[str, Any]) -> "UserRecord":
        return cls(
            user_ref=_as_text(data.get("uid")),
            display_name=_as_text(data.get("name")),
        )
