"""
Mapper de encuestas NPS hacia paginas de Notion.

Une cada encuesta con su casa y su propietario y proyecta el resultado al
esquema fijo de la base de datos de Notion:

- Casa (title): nombre de la casa, o el hid si la casa no existe
- NPS (number): puntuacion, 0 por defecto
- Comentario (rich_text): comentario, vacio por defecto
- Fecha (date): fecha UTC de la encuesta, o el instante actual
- Propietarios (rich_text): nombre del usuario, o el uid si no existe
- Destino (select): ubicacion de la casa, solo si la casa existe y la tiene

Hay dos estrategias: `enriched` (con lookups) y `flat` (sin lookups,
usa las referencias crudas).
"""
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from loguru import logger

from nps_sync.domain.entities.notion_page import (
    NO_DESTINATION,
    PROP_COMMENT,
    PROP_DATE,
    PROP_DESTINATION,
    PROP_OWNER,
    PROP_SCORE,
    PROP_TITLE,
    UNSPECIFIED,
    NotionPage,
)
from nps_sync.domain.entities.survey import SurveyRecord
from nps_sync.infrastructure.external.notion import properties as prop
from nps_sync.infrastructure.repositories.lookup_repository import LookupRepository
from nps_sync.shared.result import Result
from nps_sync.shared.utils.date_utils import isoformat_z, to_iso_date, utc_now


class MappingStrategy(str, Enum):
    """Estrategia de mapeo de encuestas."""
    ENRICHED = "enriched"
    FLAT = "flat"

    @classmethod
    def parse(cls, value: str) -> "MappingStrategy":
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(f"MAPPING_STRATEGY no valida: '{value}' (opciones: {valid})")


class RecordMapper:
    """
    Construye el payload de creacion de pagina para una encuesta.
    """

    def __init__(
        self,
        lookups: Optional[LookupRepository],
        *,
        database_id: str,
        strategy: MappingStrategy = MappingStrategy.ENRICHED,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if strategy is MappingStrategy.ENRICHED and lookups is None:
            raise ValueError("La estrategia 'enriched' requiere un LookupRepository")
        self._lookups = lookups
        self._database_id = database_id
        self._strategy = strategy
        self._clock = clock

    @property
    def strategy(self) -> MappingStrategy:
        return self._strategy

    def map(self, record: SurveyRecord) -> Result[NotionPage]:
        """
        Mapea una encuesta. Un fallo de lookup corta el mapeo y se
        retorna tal cual; cualquier otro error queda como fallo del mapeo.
        """
        try:
            if self._strategy is MappingStrategy.FLAT:
                return Result.ok(self._build_page(record, record.home_ref, None, record.user_ref))

            home_result = self._lookups.find_home_by_ref(record.home_ref)
            if home_result.failed:
                return home_result.map(lambda _: None)
            home = home_result.value
            home_name = home.display_name if home else record.home_ref
            home_location = home.location if home else None

            user_result = self._lookups.find_user_by_ref(record.user_ref)
            if user_result.failed:
                return user_result.map(lambda _: None)
            user = user_result.value
            user_name = user.display_name if user else record.user_ref

            return Result.ok(self._build_page(record, home_name, home_location, user_name))
        except Exception as e:
            logger.debug(f"Error mapeando encuesta {record.survey_id}: {e}")
            return Result.from_exception(e)

    def _build_page(
        self,
        record: SurveyRecord,
        home_name: Optional[str],
        home_location: Optional[str],
        user_name: Optional[str],
    ) -> NotionPage:
        properties = {
            PROP_TITLE: prop.title(home_name or UNSPECIFIED),
            PROP_SCORE: prop.number(record.score or 0),
            PROP_COMMENT: prop.rich_text(record.comment or ""),
            PROP_DATE: prop.date(to_iso_date(record.submitted_at) or isoformat_z(self._clock())),
            PROP_OWNER: prop.rich_text(user_name or UNSPECIFIED),
        }

        # Solo añadir Destino si la casa tiene ubicación
        if home_location:
            properties[PROP_DESTINATION] = prop.select(home_location or NO_DESTINATION)

        return NotionPage(parent_database_id=self._database_id, properties=properties)
