"""
DTOs para la migracion y sincronizacion de encuestas hacia Notion.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class MigrationErrorDTO(BaseModel):
    """Fallo de un documento durante la migracion masiva."""

    doc_id: str = Field(..., alias="docId", description="ID del documento en Firestore")
    error: str = Field(..., description="Mensaje del error")

    class Config:
        populate_by_name = True


class MigrationSummaryDTO(BaseModel):
    """Resumen de una corrida de migracion."""

    total: int = Field(0, description="Encuestas consideradas")
    migrated: int = Field(0, description="Paginas creadas en Notion")
    failed: int = Field(0, description="Encuestas con error")
    errors: List[MigrationErrorDTO] = Field(default_factory=list)


class MigrationResponseDTO(BaseModel):
    """Respuesta exitosa del endpoint de migracion."""

    success: bool = True
    summary: MigrationSummaryDTO


class MigrationFailureDTO(BaseModel):
    """Respuesta de error fatal (500) del endpoint de migracion."""

    success: bool = False
    error: str
    stack: Optional[str] = None


class SurveyCreatedEventDTO(BaseModel):
    """
    Evento de creacion de una encuesta.

    `data` puede venir vacio si el evento no trae el documento; en ese
    caso el evento se ignora.
    """

    document_id: str = Field(..., description="ID del documento creado")
    data: Optional[Dict[str, Any]] = Field(None, description="Datos del documento")
