"""
Endpoints para sincronizacion de encuestas NPS hacia Notion.

- POST /sync/notion/migrate: migracion masiva bajo demanda
- POST /sync/notion/events/survey-created: evento de encuesta creada
"""
import asyncio

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse
from loguru import logger

from nps_sync.api.v1.dependencies.use_case_deps import (
    get_migrate_surveys_use_case,
    get_sync_new_survey_use_case,
)
from nps_sync.application.dto.migration_dto import (
    MigrationFailureDTO,
    MigrationResponseDTO,
    SurveyCreatedEventDTO,
)
from nps_sync.application.use_cases.migration_use_cases import (
    MigrateSurveysUseCase,
    SyncNewSurveyUseCase,
)
from nps_sync.core.config import settings


router = APIRouter(prefix="/sync/notion", tags=["Sync"])


@router.post(
    "/migrate",
    response_model=MigrationResponseDTO,
    status_code=status.HTTP_200_OK,
    summary="Migrar encuestas NPS a Notion",
    responses={500: {"model": MigrationFailureDTO}},
)
async def migrate_surveys(
    use_case: MigrateSurveysUseCase = Depends(get_migrate_surveys_use_case),
):
    """
    Migra todas las encuestas de la ronda configurada a Notion.

    Cada encuesta crea una pagina nueva: ejecutar dos veces duplica las
    paginas. Los errores por encuesta se reportan en el resumen.
    """
    logger.info("Iniciando migracion de encuestas a Notion desde API")

    # Firestore y Notion son clientes sincronos: no bloquear el event loop
    result = await asyncio.to_thread(use_case.execute)

    if result.failed:
        failure = MigrationFailureDTO(
            error=result.message or "Error desconocido",
            stack=result.trace if settings.is_development else None,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=failure.model_dump(),
        )

    return MigrationResponseDTO(summary=result.value)


@router.post(
    "/events/survey-created",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Sincronizar una encuesta recien creada",
)
async def survey_created(
    event: SurveyCreatedEventDTO,
    use_case: SyncNewSurveyUseCase = Depends(get_sync_new_survey_use_case),
) -> Response:
    """
    Procesa el evento de creacion de una encuesta.

    Responde 204 si la pagina se creo o si el evento se ignoro. Un fallo
    responde 500 para que el emisor del evento aplique su politica de
    reintentos.
    """
    result = await asyncio.to_thread(use_case.execute, event.document_id, event.data)

    if result.failed:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error sincronizando con Notion: {result.message}",
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
