"""
CLI: migracion masiva de encuestas NPS (Firestore -> Notion).

Variables de entorno requeridas:
  - NOTION_TOKEN
  - NOTION_DATABASE_ID
  - FIREBASE_CREDENTIALS_PATH (opcional; si falta se usan las
    Application Default Credentials)

Ejecución:
  python scripts/migrate_surveys.py
  python scripts/migrate_surveys.py --dry-run
  python scripts/migrate_surveys.py --collection nps-booking --strategy flat
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from loguru import logger
from dotenv import load_dotenv

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
# La carpeta "api" contiene el paquete raíz `nps_sync/`.
_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

load_dotenv(_API_ROOT / ".env", override=False)
load_dotenv(_API_ROOT.parent / ".env", override=False)

from nps_sync.application.services.record_mapper import MappingStrategy, RecordMapper
from nps_sync.application.use_cases.migration_use_cases import MigrateSurveysUseCase
from nps_sync.core.config import Settings
from nps_sync.domain.repositories.page_writer import IPageWriter
from nps_sync.infrastructure.external.notion.notion_client import build_notion_client
from nps_sync.infrastructure.firestore.document_store import (
    FirestoreDocumentStore,
    build_firestore_client,
)
from nps_sync.infrastructure.repositories.lookup_repository import LookupRepository
from nps_sync.shared.exceptions.base import AppException


class DryRunPageWriter(IPageWriter):
    """No crea páginas: solo registra el payload que se enviaría."""

    def create_page(self, payload: dict[str, Any]) -> dict[str, Any]:
        logger.info(f"[dry-run] {json.dumps(payload, ensure_ascii=False)}")
        return {"id": "dry-run"}


def main() -> int:
    parser = argparse.ArgumentParser(description="Migra encuestas NPS de Firestore a Notion.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Mapea las encuestas sin crear páginas en Notion.",
    )
    parser.add_argument("--collection", default=None, help="Colección de encuestas (override de SURVEYS_COLLECTION).")
    parser.add_argument("--strategy", default=None, choices=[s.value for s in MappingStrategy])
    args = parser.parse_args()

    settings = Settings()
    collection = args.collection or settings.SURVEYS_COLLECTION
    strategy = MappingStrategy.parse(args.strategy or settings.MAPPING_STRATEGY)

    notion_client = None
    try:
        store = FirestoreDocumentStore(
            build_firestore_client(
                credentials_path=settings.FIREBASE_CREDENTIALS_PATH,
                project_id=settings.FIREBASE_PROJECT_ID,
            )
        )

        if args.dry_run:
            pages: IPageWriter = DryRunPageWriter()
            database_id = settings.NOTION_DATABASE_ID or "dry-run"
        else:
            notion_client = build_notion_client(
                token=settings.NOTION_TOKEN,
                database_id=settings.NOTION_DATABASE_ID,
                base_url=settings.NOTION_API_URL,
                notion_version=settings.NOTION_VERSION,
                timeout_s=settings.NOTION_TIMEOUT_S,
            )
            pages = notion_client
            database_id = notion_client.database_id

        lookups = LookupRepository(
            store,
            homes_collection=settings.HOMES_COLLECTION,
            users_collection=settings.USERS_COLLECTION,
        )
        mapper = RecordMapper(lookups, database_id=database_id, strategy=strategy)
        use_case = MigrateSurveysUseCase(
            store,
            mapper,
            pages,
            surveys_collection=collection,
            survey_round=settings.SURVEY_ROUND,
        )
        result = use_case.execute()
    except AppException as e:
        logger.error(f"{e.error_code}: {e.message}")
        return 2
    finally:
        if notion_client is not None:
            notion_client.close()

    if result.failed:
        logger.error(f"Migración abortada [{result.error_kind}]: {result.message}")
        print(json.dumps({"success": False, "error": result.message}, ensure_ascii=False, indent=2))
        return 1

    print(json.dumps(
        {"success": True, "summary": result.value.model_dump(by_alias=True)},
        ensure_ascii=False,
        indent=2,
    ))
    return 0 if result.value.failed == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
