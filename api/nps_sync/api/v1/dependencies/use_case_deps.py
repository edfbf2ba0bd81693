"""
Dependencias para inyeccion de casos de uso.

Los clientes externos y la estrategia de mapeo viven en `app.state`
(creados y validados en el startup); aqui
solo se ensamblan el repositorio de lookups, el mapper y los casos de uso.
"""
from fastapi import Request

from nps_sync.application.services.record_mapper import MappingStrategy, RecordMapper
from nps_sync.application.use_cases.migration_use_cases import (
    MigrateSurveysUseCase,
    SyncNewSurveyUseCase,
)
from nps_sync.core.config import settings
from nps_sync.domain.repositories.document_store import IDocumentStore
from nps_sync.domain.repositories.page_writer import IPageWriter
from nps_sync.infrastructure.repositories.lookup_repository import LookupRepository
from nps_sync.shared.exceptions.sync import SyncConfigError


def _get_state_client(request: Request, name: str):
    client = getattr(request.app.state, name, None)
    if client is None:
        raise SyncConfigError(f"Cliente '{name}' no inicializado: revisa la configuracion de arranque")
    return client


def _build_mapper(store: IDocumentStore, strategy: MappingStrategy) -> RecordMapper:
    lookups = LookupRepository(
        store,
        homes_collection=settings.HOMES_COLLECTION,
        users_collection=settings.USERS_COLLECTION,
    )
    return RecordMapper(
        lookups,
        database_id=settings.NOTION_DATABASE_ID,
        strategy=strategy,
    )


def get_migrate_surveys_use_case(request: Request) -> MigrateSurveysUseCase:
    """
    Dependencia para obtener el caso de uso de migracion masiva.

    Returns:
        MigrateSurveysUseCase: Instancia con los clientes de la app
    """
    store: IDocumentStore = _get_state_client(request, "document_store")
    pages: IPageWriter = _get_state_client(request, "notion_client")
    return MigrateSurveysUseCase(
        store,
        _build_mapper(store, _get_state_client(request, "mapping_strategy")),
        pages,
        surveys_collection=settings.SURVEYS_COLLECTION,
        survey_round=settings.SURVEY_ROUND,
    )


def get_sync_new_survey_use_case(request: Request) -> SyncNewSurveyUseCase:
    """
    Dependencia para obtener el caso de uso de sincronizacion por evento.

    Returns:
        SyncNewSurveyUseCase: Instancia con los clientes de la app
    """
    store: IDocumentStore = _get_state_client(request, "document_store")
    pages: IPageWriter = _get_state_client(request, "notion_client")
    return SyncNewSurveyUseCase(
        _build_mapper(store, _get_state_client(request, "mapping_strategy")),
        pages,
        survey_round=settings.SURVEY_ROUND,
    )
