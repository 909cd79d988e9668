"""
Exportador JSON - Implementação do port Exportador.

Grava cada coleção em um arquivo JSON indentado (UTF-8, acentos
preservados) dentro do diretório de exportação configurado
(TICKETS_EXPORT_DIR, padrão "data").
"""

from pathlib import Path
from typing import Any, Dict, List, Union
import json
import logging

from django.core.serializers.json import DjangoJSONEncoder

from sistema_tickets.core.shared.exceptions import ExportacaoError
from sistema_tickets.core.shared.interfaces import Exportador

logger = logging.getLogger(__name__)


class JsonExportador(Exportador):
    """
    Exportador de snapshots para arquivos JSON.

    Example:
        exportador = JsonExportador("data")
        exportador.exportar("tickets.json", [{"id": 1, "titulo": "..."}])
    """

    def __init__(self, diretorio: Union[str, Path] = "data", indent: int = 2):
        self.diretorio = Path(diretorio)
        self.indent = indent

    def exportar(self, nome_arquivo: str, registros: List[Dict[str, Any]]) -> str:
        """
        Grava os registros em <diretorio>/<nome_arquivo>.

        O diretório é criado se não existir.

        Raises:
            ExportacaoError: Se o arquivo não puder ser gravado
        """
        caminho = self.diretorio / nome_arquivo

        try:
            self.diretorio.mkdir(parents=True, exist_ok=True)
            with caminho.open("w", encoding="utf-8") as arquivo:
                json.dump(
                    registros,
                    arquivo,
                    indent=self.indent,
                    ensure_ascii=False,
                    cls=DjangoJSONEncoder,
                )
        except (OSError, TypeError, ValueError) as e:
            raise ExportacaoError(
                f"Não foi possível gravar {caminho}: {e}",
                arquivo=nome_arquivo,
            ) from e

        logger.debug(f"{len(registros)} registro(s) gravados em {caminho}")
        return str(caminho)
