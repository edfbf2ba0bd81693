"""
Entidad de dominio: pagina de Notion a crear por cada encuesta.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# Nombres de propiedades de la base de datos de Notion
PROP_TITLE = "Casa"
PROP_SCORE = "NPS"
PROP_COMMENT = "Comentario"
PROP_DATE = "Fecha"
PROP_OWNER = "Propietarios"
PROP_DESTINATION = "Destino"

UNSPECIFIED = "Sin especificar"
NO_DESTINATION = "Sin destino"


@dataclass(frozen=True)
class NotionPage:
    """
    Payload de creacion de una pagina en la base de datos de Notion.

    `properties` ya tiene el formato de la API (title, rich_text, number,
    date, select). Cada migracion crea una pagina nueva: no hay merge.
    """

    parent_database_id: str
    properties: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        """Cuerpo para `POST /v1/pages`."""
        return {
            "parent": {"database_id": self.parent_database_id},
            "properties": self.properties,
        }

    @property
    def has_destination(self) -> bool:
        return PROP_DESTINATION in self.properties

    def flat_properties(self) -> Dict[str, Any]:
        """
        Valores planos de la pagina: title, score, comment, date, owner
        y destination (solo si existe).
        """
        props = self.properties
        flat: Dict[str, Any] = {
            "title": _first_text(props[PROP_TITLE]["title"]),
            "score": props[PROP_SCORE]["number"],
            "comment": _first_text(props[PROP_COMMENT]["rich_text"]),
            "date": props[PROP_DATE]["date"]["start"],
            "owner": _first_text(props[PROP_OWNER]["rich_text"]),
        }
        if self.has_destination:
            flat["destination"] = props[PROP_DESTINATION]["select"]["name"]
        return flat


def _first_text(blocks: list) -> Optional[str]:
    if not blocks:
        return None
    return blocks[0]["text"]["content"]
