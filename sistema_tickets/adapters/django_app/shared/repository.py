"""
Repository Base - Implementação base de repositórios SQL.

Fornece funcionalidades comuns para todos os repositórios:
- SELECT com lista explícita de colunas
- Filtros compostos por cláusulas parametrizadas
- Escopo de visibilidade (coluna de solicitante)
- Ordenação estável por id

Princípios:
- Repositórios são stateless (fora a referência ao adapter de banco)
- Não contêm lógica de negócio
- Apenas persistência e queries
- Nenhum valor é interpolado no SQL; tudo vai como parâmetro
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar
import logging

from .database import DatabaseAdapter

logger = logging.getLogger(__name__)

# Type variable
T = TypeVar("T")  # Entity type


class BaseSqlRepository(ABC, Generic[T]):
    """
    Classe base abstrata para repositórios SQL.

    Type Parameters:
        T: Tipo da entidade de domínio

    Example:
        class DjangoCategoriaRepository(BaseSqlRepository[CategoriaEntity]):
            tabela = "categorias"
            colunas = ("id", "nome", "descricao", "cor", "ativa")

            def to_entity(self, row):
                return CategoriaMapper.to_entity(row)
    """

    # Tabela e colunas (definir na subclasse)
    tabela: str
    colunas: Tuple[str, ...]

    # Coluna usada para restringir o escopo de visibilidade (se houver)
    coluna_escopo: Optional[str] = None

    ordenacao: str = "id"

    def __init__(self, db: DatabaseAdapter):
        """
        Args:
            db: Adapter de banco compartilhado
        """
        self.db = db

    @abstractmethod
    def to_entity(self, row: Dict[str, Any]) -> T:
        """
        Converte linha (dict coluna → valor) para Entity de domínio.

        Raises:
            RepositoryError: Se a linha tem valores inválidos
        """
        raise NotImplementedError

    @property
    def _select(self) -> str:
        return f"SELECT {', '.join(self.colunas)} FROM {self.tabela}"

    def _obter(self, entity_id: int) -> Optional[T]:
        """Busca entidade por ID (None se não existir)."""
        row = self.db.fetch_one(f"{self._select} WHERE id = %s", [entity_id])
        return self.to_entity(row) if row else None

    def _listar(
        self,
        clausulas: Sequence[str] = (),
        params: Sequence[Any] = (),
        escopo: Optional[int] = None,
    ) -> List[T]:
        """
        Lista entidades aplicando filtros.

        Args:
            clausulas: Condições SQL com placeholders %s (unidas por AND)
            params: Valores dos placeholders, na ordem
            escopo: Valor da coluna de escopo (None = sem restrição)

        Returns:
            Entidades ordenadas por id
        """
        clausulas = list(clausulas)
        params = list(params)

        if escopo is not None and self.coluna_escopo:
            clausulas.append(f"{self.coluna_escopo} = %s")
            params.append(escopo)

        sql = self._select
        if clausulas:
            sql += " WHERE " + " AND ".join(f"({c})" for c in clausulas)
        sql += f" ORDER BY {self.ordenacao}"

        rows = self.db.fetch_all(sql, params)
        logger.debug(f"{self.tabela}: {len(rows)} linha(s)")
        return [self.to_entity(row) for row in rows]

