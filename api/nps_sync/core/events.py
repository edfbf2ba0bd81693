"""
Ciclo de vida de la aplicacion (lifespan de FastAPI).

El startup construye una sola vez los clientes externos (Firestore y
Notion) y los deja en `app.state`; las dependencias de los endpoints
los inyectan en los casos de uso. El shutdown cierra la sesion HTTP de
Notion.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable
from fastapi import FastAPI
from loguru import logger

from nps_sync.application.services.record_mapper import MappingStrategy
from nps_sync.core.config import settings
from nps_sync.infrastructure.external.notion.notion_client import build_notion_client
from nps_sync.infrastructure.firestore.document_store import (
    FirestoreDocumentStore,
    build_firestore_client,
)
from nps_sync.shared.exceptions.sync import SyncConfigError


def startup_handler(app: FastAPI) -> Callable:
    """
    Manejador de inicio de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de inicio
    """
    async def startup() -> None:
        """Inicializa recursos al inicio de la aplicacion."""
        try:
            logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION}")
            logger.info(f"Entorno: {settings.ENVIRONMENT}")

            # Una estrategia invalida es un error de despliegue: no arrancar
            app.state.mapping_strategy = _parse_mapping_strategy()

            # Configurar logging adicional
            logger.add(
                settings.LOG_FILE,
                rotation="500 MB",
                retention="10 days",
                level=settings.LOG_LEVEL
            )

            # Validar configuracion critica
            if not _validate_config():
                logger.warning("Clientes externos no inicializados: los endpoints de sync responderan 500")
                return

            firestore_client = build_firestore_client(
                credentials_path=settings.FIREBASE_CREDENTIALS_PATH,
                project_id=settings.FIREBASE_PROJECT_ID,
            )
            app.state.document_store = FirestoreDocumentStore(firestore_client)
            logger.info("Cliente de Firestore inicializado")

            app.state.notion_client = build_notion_client(
                token=settings.NOTION_TOKEN,
                database_id=settings.NOTION_DATABASE_ID,
                base_url=settings.NOTION_API_URL,
                notion_version=settings.NOTION_VERSION,
                timeout_s=settings.NOTION_TIMEOUT_S,
            )
            logger.info("Cliente de Notion inicializado")

            logger.success("Aplicacion iniciada correctamente")

        except Exception as e:
            logger.error(f"Error durante startup: {e}")
            logger.exception("Detalle del error:")
            raise

    return startup


def _parse_mapping_strategy() -> MappingStrategy:
    try:
        strategy = MappingStrategy.parse(settings.MAPPING_STRATEGY)
    except ValueError as e:
        raise SyncConfigError(str(e)) from e
    logger.info(f"Estrategia de mapeo: {strategy.value}")
    return strategy


def _validate_config() -> bool:
    """Valida que la configuracion critica este presente."""
    warnings = []

    if not settings.NOTION_TOKEN:
        warnings.append("NOTION_TOKEN no configurado - no se pueden crear paginas")
    if not settings.NOTION_DATABASE_ID:
        warnings.append("NOTION_DATABASE_ID no configurado - no hay base de datos destino")

    for warning in warnings:
        logger.warning(f"CONFIG: {warning}")

    return not warnings


def shutdown_handler(app: FastAPI) -> Callable:
    """
    Manejador de cierre de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de cierre
    """
    async def shutdown() -> None:
        """Libera recursos al cerrar la aplicacion."""
        logger.info("Cerrando aplicacion...")

        notion_client = getattr(app.state, "notion_client", None)
        if notion_client is not None:
            notion_client.close()
            logger.info("Sesion HTTP de Notion cerrada")

        logger.success("Aplicacion cerrada correctamente")

    return shutdown


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Ejecuta el startup antes de servir requests y el shutdown al final."""
    await startup_handler(app)()
    try:
        yield
    finally:
        await shutdown_handler(app)()
