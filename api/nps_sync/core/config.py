"""
Configuracion central de la aplicacion.
Gestiona variables de entorno y configuraciones globales.
Soporta configuracion dinamica para desarrollo (ENVIRONMENT=development)
y produccion (ENVIRONMENT=production).

Las credenciales de Notion y los identificadores de Firebase se leen
siempre del entorno: nunca deben quedar escritos en el codigo.
"""
import json
from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field, computed_field


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno y proporciona valores por defecto.

    Configuracion de desarrollo vs produccion:
    - ENVIRONMENT: 'development' o 'production'
    - En desarrollo las respuestas de error incluyen el stack trace
    """

    # Configuracion de la aplicacion
    APP_NAME: str = Field(default="NPS Notion Sync")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")

    # Configuracion del servidor
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    # CORS (acepta lista JSON o "*" para todos los origenes)
    CORS_ORIGINS: str = Field(default="*")

    # Notion
    NOTION_TOKEN: str = Field(default="")
    NOTION_DATABASE_ID: str = Field(default="")
    NOTION_API_URL: str = Field(default="https://api.notion.com/v1")
    NOTION_VERSION: str = Field(default="2022-06-28")
    NOTION_TIMEOUT_S: int = Field(default=30)

    # Firebase / Firestore
    # Si no hay ruta de credenciales se usan las Application Default Credentials.
    FIREBASE_CREDENTIALS_PATH: Optional[str] = Field(default=None)
    FIREBASE_PROJECT_ID: Optional[str] = Field(default=None)

    # Colecciones de Firestore
    SURVEYS_COLLECTION: str = Field(default="nps")
    HOMES_COLLECTION: str = Field(default="homes")
    USERS_COLLECTION: str = Field(default="users")

    # Filtro de ronda de encuestas que se migran
    SURVEY_ROUND: str = Field(default="home")

    # Estrategia de mapeo: 'enriched' (con lookups de casa/usuario) o 'flat'
    MAPPING_STRATEGY: str = Field(default="enriched")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/app.log")

    @computed_field
    @property
    def is_development(self) -> bool:
        """Indica si el entorno es de desarrollo."""
        return self.ENVIRONMENT.lower() == "development"

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignorar campos extra del .env


def get_cors_origins(cors_string: str) -> List[str]:
    """
    Parsea la configuracion de CORS.
    Acepta "*" para todos los origenes o una lista JSON.
    """
    if cors_string == "*":
        return ["*"]
    try:
        return json.loads(cors_string)
    except json.JSONDecodeError:
        # Si no es JSON valido, retornar como lista simple
        return [origin.strip() for origin in cors_string.split(",")]


# Instancia global de configuracion
settings = Settings()
