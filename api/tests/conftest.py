"""
Configuración de fixtures para pytest.

Firestore y Notion se reemplazan por dobles en memoria: los casos de uso
reciben sus dependencias por constructor, así que no hace falta parchear
módulos.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import pytest

from nps_sync.application.services.record_mapper import MappingStrategy, RecordMapper
from nps_sync.domain.repositories.document_store import IDocumentStore, StoredDocument
from nps_sync.domain.repositories.page_writer import IPageWriter
from nps_sync.infrastructure.repositories.lookup_repository import LookupRepository
from nps_sync.shared.exceptions.sync import DocumentStoreError, NotionApiError


DATABASE_ID = "test-database-id"
FIXED_NOW = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


class InMemoryDocumentStore(IDocumentStore):
    """Almacén en memoria con el mismo contrato que Firestore."""

    def __init__(self, collections: Optional[Dict[str, List[StoredDocument]]] = None) -> None:
        self.collections: Dict[str, List[StoredDocument]] = collections or {}
        self.failing_collections: set[str] = set()
        self.queries: List[tuple] = []

    def add(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        self.collections.setdefault(collection, []).append(StoredDocument(doc_id=doc_id, data=data))

    def find_equal(self, collection, field_name, value, limit=None):
        self.queries.append((collection, field_name, value))
        if collection in self.failing_collections:
            raise DocumentStoreError(f"Firestore no disponible ({collection})", collection=collection)
        docs = [d for d in self.collections.get(collection, []) if d.data.get(field_name) == value]
        return docs[:limit] if limit is not None else docs


class FakePageWriter(IPageWriter):
    """Registra los payloads recibidos y devuelve ids secuenciales."""

    def __init__(self, fail_when: Optional[Callable[[Dict[str, Any]], bool]] = None) -> None:
        self.created: List[Dict[str, Any]] = []
        self._fail_when = fail_when

    def create_page(self, payload):
        if self._fail_when and self._fail_when(payload):
            raise NotionApiError("Notion error 400: body failed validation", http_status=400)
        self.created.append(payload)
        return {"object": "page", "id": f"page-{len(self.created)}"}


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Almacén con la casa H1 (Villa Azul, Ibiza) y el usuario U1 (Jane Doe)."""
    s = InMemoryDocumentStore()
    s.add("homes", "home-doc-1", {"hid": "H1", "name": "Villa Azul", "location": "Ibiza"})
    s.add("users", "user-doc-1", {"uid": "U1", "name": "Jane Doe"})
    return s


@pytest.fixture
def survey_data() -> Dict[str, Any]:
    return {
        "hid": "H1",
        "uid": "U1",
        "nps": 9,
        "comment": "Great stay",
        "date": datetime(2024, 3, 15, 10, 0, 0, tzinfo=timezone.utc),
        "round": "home",
    }


@pytest.fixture
def pages() -> FakePageWriter:
    return FakePageWriter()


@pytest.fixture
def make_mapper() -> Callable[..., RecordMapper]:
    def _make(store: IDocumentStore, strategy: MappingStrategy = MappingStrategy.ENRICHED) -> RecordMapper:
        return RecordMapper(
            LookupRepository(store),
            database_id=DATABASE_ID,
            strategy=strategy,
            clock=lambda: FIXED_NOW,
        )
    return _make


@pytest.fixture
def page_writer_factory() -> Callable[..., FakePageWriter]:
    return FakePageWriter


@pytest.fixture
def empty_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()
