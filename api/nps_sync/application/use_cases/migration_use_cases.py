"""
Casos de uso para sincronizar encuestas NPS de Firestore hacia Notion.

- MigrateSurveysUseCase: migracion masiva de todas las encuestas de la ronda.
- SyncNewSurveyUseCase: sincroniza una encuesta recien creada.

Cada llamada crea paginas nuevas en Notion: volver a migrar duplica las
paginas de las encuestas ya migradas.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from loguru import logger

from nps_sync.application.dto.migration_dto import MigrationErrorDTO, MigrationSummaryDTO
from nps_sync.application.services.record_mapper import RecordMapper
from nps_sync.domain.entities.survey import SurveyRecord
from nps_sync.domain.repositories.document_store import IDocumentStore
from nps_sync.domain.repositories.page_writer import IPageWriter
from nps_sync.shared.exceptions.sync import DocumentStoreError, MappingError
from nps_sync.shared.result import Result


class _SurveyPageSync:
    """Pasos comunes: documento -> encuesta -> pagina -> Notion."""

    def __init__(self, mapper: RecordMapper, pages: IPageWriter, survey_round: str) -> None:
        self._mapper = mapper
        self._pages = pages
        self._survey_round = survey_round

    def _sync_document(self, doc_id: str, data: Dict[str, Any]) -> Result[Dict[str, Any]]:
        try:
            record = SurveyRecord.from_document(doc_id, data)
        except (ValueError, TypeError) as e:
            return Result.from_exception(MappingError(str(e), survey_id=doc_id))

        mapped = self._mapper.map(record)
        if mapped.failed:
            return mapped.map(lambda _: {})

        try:
            created = self._pages.create_page(mapped.value.to_payload())
        except Exception as e:
            return Result.from_exception(e)
        return Result.ok(created)


class MigrateSurveysUseCase(_SurveyPageSync):
    """
    Migracion masiva: consulta las encuestas con `round == survey_round`
    y crea una pagina por cada una, en orden y sin paralelismo.

    Un error en una encuesta se registra y la corrida continua; un error
    en la consulta inicial aborta la corrida.
    """

    def __init__(
        self,
        store: IDocumentStore,
        mapper: RecordMapper,
        pages: IPageWriter,
        *,
        surveys_collection: str = "nps",
        survey_round: str = "home",
    ) -> None:
        super().__init__(mapper, pages, survey_round)
        self._store = store
        self._surveys_collection = surveys_collection

    def execute(self) -> Result[MigrationSummaryDTO]:
        try:
            docs = self._store.find_equal(self._surveys_collection, "round", self._survey_round)
        except DocumentStoreError as e:
            logger.error(f"Error en la migración: {e.message}")
            return Result.from_exception(e)
        except Exception as e:
            logger.exception(f"Error inesperado consultando '{self._surveys_collection}': {e}")
            return Result.from_exception(e)

        if not docs:
            logger.info(
                f"No hay documentos para migrar en '{self._surveys_collection}' "
                f"(round == '{self._survey_round}')"
            )
            return Result.ok(MigrationSummaryDTO())

        logger.info(f"Migrando {len(docs)} encuesta(s) de '{self._surveys_collection}' a Notion")
        summary = MigrationSummaryDTO(total=len(docs))

        for doc in docs:
            outcome = self._sync_document(doc.doc_id, doc.data)
            if outcome.success:
                summary.migrated += 1
                logger.info(f"Migrado documento {doc.doc_id} correctamente")
            else:
                summary.failed += 1
                summary.errors.append(MigrationErrorDTO(doc_id=doc.doc_id, error=outcome.message or ""))
                logger.error(f"Error migrando documento {doc.doc_id} [{outcome.error_kind}]: {outcome.message}")

        logger.info(
            f"Migración completada: total={summary.total}, "
            f"migrated={summary.migrated}, failed={summary.failed}"
        )
        return Result.ok(summary)


class SyncOutcome(str, Enum):
    """Resultado de procesar un evento de creacion."""
    CREATED = "created"
    SKIPPED_NO_DATA = "skipped_no_data"
    SKIPPED_ROUND = "skipped_round"


@dataclass(frozen=True)
class SyncNewSurveyResult:
    document_id: str
    outcome: SyncOutcome
    page_id: Optional[str] = None


class SyncNewSurveyUseCase(_SurveyPageSync):
    """
    Sincroniza una encuesta recien creada.

    Eventos sin datos o de otra ronda se ignoran (no es un error). Un
    fallo se retorna como Result fallido para que el adaptador lo
    re-señale al runtime que invoco el evento.
    """

    def __init__(
        self,
        mapper: RecordMapper,
        pages: IPageWriter,
        *,
        survey_round: str = "home",
    ) -> None:
        super().__init__(mapper, pages, survey_round)

    def execute(self, document_id: str, data: Optional[Dict[str, Any]]) -> Result[SyncNewSurveyResult]:
        if not data:
            logger.info(f"Evento sin datos para el documento {document_id}, ignorando")
            return Result.ok(SyncNewSurveyResult(document_id, SyncOutcome.SKIPPED_NO_DATA))

        if data.get("round") != self._survey_round:
            logger.info(f"Documento {document_id} no es de tipo {self._survey_round}, ignorando")
            return Result.ok(SyncNewSurveyResult(document_id, SyncOutcome.SKIPPED_ROUND))

        outcome = self._sync_document(document_id, data)
        if outcome.failed:
            logger.error(f"Error sincronizando con Notion el documento {document_id}: {outcome.message}")
            return outcome.map(lambda _: None)

        page_id = outcome.value.get("id")
        logger.info(f"Creado nuevo registro en Notion para documento {document_id} (página {page_id})")
        return Result.ok(SyncNewSurveyResult(document_id, SyncOutcome.CREATED, page_id=page_id))
