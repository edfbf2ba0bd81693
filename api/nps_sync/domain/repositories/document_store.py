"""
Interfaz del almacén de documentos.
Define el contrato que debe cumplir cualquier implementación (Firestore,
o un almacén en memoria en los tests).
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class StoredDocument:
    """Documento leído del almacén: id + datos."""

    doc_id: str
    data: Dict[str, Any] = field(default_factory=dict)


class IDocumentStore(ABC):
    """
    Interfaz del almacén de documentos.
    Solo expone la consulta por igualdad que usa el pipeline.
    """

    @abstractmethod
    def find_equal(
        self,
        collection: str,
        field_name: str,
        value: Any,
        limit: Optional[int] = None,
    ) -> List[StoredDocument]:
        """
        Retorna los documentos de `collection` cuyo `field_name` == `value`.

        Args:
            collection: Nombre de la colección
            field_name: Campo a filtrar
            value: Valor esperado
            limit: Máximo de documentos a retornar (None = sin límite)

        Returns:
            List[StoredDocument]: Documentos encontrados (puede ser vacía)

        Raises:
            DocumentStoreError: Si el almacén falla
        """
        pass
