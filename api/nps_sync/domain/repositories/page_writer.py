"""
Interfaz del servicio externo de tablas (base de datos de Notion).
"""
from abc import ABC, abstractmethod
from typing import Any, Dict


class IPageWriter(ABC):
    """Crea entidades (páginas) en el servicio externo."""

    @abstractmethod
    def create_page(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Crea una página nueva a partir del payload de creación.

        Returns:
            Dict[str, Any]: Objeto creado (incluye su `id`)

        Raises:
            NotionApiError: Si el servicio rechaza o no responde
        """
        pass
