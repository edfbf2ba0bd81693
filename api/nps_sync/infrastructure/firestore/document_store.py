"""
Almacén de documentos sobre Cloud Firestore (firebase-admin).

La app de Firebase se inicializa una sola vez por proceso; el cliente se
inyecta en los repositorios y casos de uso desde el punto de entrada.
"""

from __future__ import annotations

from typing import Any, List, Optional

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core.exceptions import GoogleAPIError
from google.cloud.firestore_v1.base_query import FieldFilter
from loguru import logger

from nps_sync.domain.repositories.document_store import IDocumentStore, StoredDocument
from nps_sync.shared.exceptions.sync import DocumentStoreError


class FirestoreDocumentStore(IDocumentStore):
    """Implementación de `IDocumentStore` con un cliente de Firestore."""

    def __init__(self, client: Any) -> None:
        self._client = client

    def find_equal(
        self,
        collection: str,
        field_name: str,
        value: Any,
        limit: Optional[int] = None,
    ) -> List[StoredDocument]:
        query = self._client.collection(collection).where(
            filter=FieldFilter(field_name, "==", value)
        )
        if limit is not None:
            query = query.limit(limit)

        try:
            return [
                StoredDocument(doc_id=snapshot.id, data=snapshot.to_dict() or {})
                for snapshot in query.stream()
            ]
        except GoogleAPIError as e:
            raise DocumentStoreError(
                f"Error consultando '{collection}' ({field_name} == {value!r}): {e}",
                collection=collection,
            ) from e


def build_firestore_client(
    *,
    credentials_path: Optional[str] = None,
    project_id: Optional[str] = None,
) -> Any:
    """
    Inicializa (si hace falta) la app de Firebase y retorna el cliente.

    Sin `credentials_path` se usan las Application Default Credentials
    del entorno (Cloud Run, Functions, gcloud auth).
    """
    try:
        app = firebase_admin.get_app()
    except ValueError:
        cred = (
            credentials.Certificate(credentials_path)
            if credentials_path
            else credentials.ApplicationDefault()
        )
        options = {"projectId": project_id} if project_id else None
        app = firebase_admin.initialize_app(cred, options)
        logger.info(f"Firebase inicializado (proyecto: {project_id or 'por defecto'})")
    return firestore.client(app)
