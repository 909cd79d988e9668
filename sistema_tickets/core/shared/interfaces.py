"""
Interfaces (Ports) compartilhadas entre Core e Adapters.

São os "Ports" da Arquitetura Hexagonal que não pertencem a um
agregado específico.

Princípio: Core define interfaces; Adapters implementam.
O fluxo de dependência sempre aponta para o Core.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class Exportador(ABC):
    """
    Port para gravação de snapshots de coleções.

    O Core entrega apenas o grafo de objetos em memória
    (listas de dicionários); o formato e o destino ficam
    com o adapter.

    Example:
        class JsonExportador(Exportador):
            def exportar(self, nome_arquivo, registros):
                ...
    """

    @abstractmethod
    def exportar(self, nome_arquivo: str, registros: List[Dict[str, Any]]) -> str:
        """
        Grava uma coleção.

        Args:
            nome_arquivo: Nome do arquivo de destino (ex: "tickets.json")
            registros: Registros já convertidos para dicionários

        Returns:
            Caminho do arquivo gravado

        Raises:
            ExportacaoError: Se não for possível gravar
        """
        raise NotImplementedError
