"""
Repositorio de lookups de casas y usuarios.

Cada lookup es una consulta por igualdad que retorna el primer documento
encontrado. "No encontrado" es un resultado exitoso con valor None; un
fallo del almacén es un resultado fallido (sin reintentos).
"""
from typing import Any, Callable, Optional, TypeVar

from nps_sync.domain.entities.survey import HomeRecord, UserRecord
from nps_sync.domain.repositories.document_store import IDocumentStore
from nps_sync.shared.exceptions.sync import DocumentStoreError
from nps_sync.shared.result import Result

T = TypeVar("T")


class LookupRepository:
    """Lookups de `homes` (por hid) y `users` (por uid)."""

    def __init__(
        self,
        store: IDocumentStore,
        *,
        homes_collection: str = "homes",
        users_collection: str = "users",
    ) -> None:
        self._store = store
        self._homes_collection = homes_collection
        self._users_collection = users_collection

    def find_home_by_ref(self, home_ref: str) -> Result[Optional[HomeRecord]]:
        return self._find_first(
            self._homes_collection, "hid", home_ref, HomeRecord.from_document
        )

    def find_user_by_ref(self, user_ref: str) -> Result[Optional[UserRecord]]:
        return self._find_first(
            self._users_collection, "uid", user_ref, UserRecord.from_document
        )

    def _find_first(
        self,
        collection: str,
        field_name: str,
        value: Any,
        build: Callable[[dict], T],
    ) -> Result[Optional[T]]:
        # Si hay varios documentos con la misma referencia gana el primero.
        try:
            docs = self._store.find_equal(collection, field_name, value, limit=1)
        except DocumentStoreError as e:
            return Result.from_exception(e)

        if not docs:
            return Result.ok(None)
        return Result.ok(build(docs[0].data))
