"""
Repositórios SQL para persistência de Tickets.

Implementam as interfaces (Ports) definidas no Core.
São DRIVEN ADAPTERS - acionados pelo Core em resposta a operações.

Responsabilidades:
- Implementar os Protocols de sistema_tickets/core/tickets/ports.py
- Executar SQL parametrizado pela conexão do Django
- Mapear linhas para entities (mappers.py)

Princípios:
- Repository não contém lógica de negócio
- Nenhum valor do usuário é concatenado no SQL
- Escopo de visibilidade aplicado no próprio WHERE
- Timestamps gerados na aplicação, em UTC
"""

from typing import Dict, List, Optional
import logging

from sistema_tickets.core.tickets.entities import (
    CategoriaEntity,
    ComentarioEntity,
    PrioridadeTicket,
    StatusTicket,
    TicketEntity,
    TipoComentario,
    UsuarioEntity,
    agora,
)

from ..shared.database import DatabaseAdapter
from ..shared.repository import BaseSqlRepository
from .mappers import (
    CategoriaMapper,
    ComentarioMapper,
    TicketMapper,
    UsuarioMapper,
    enum_por_nome,
)

logger = logging.getLogger(__name__)


class DjangoTicketRepository(BaseSqlRepository[TicketEntity]):
    """
    Implementação SQL do TicketRepository.

    Features:
    - Inserção com chave e código gerados pelo banco
    - Listagem, busca e filtros com escopo por solicitante
    - Mudança de status preservando a primeira data de resolução
    - Atribuição com promoção ABERTO → EM_ANDAMENTO na mesma instrução

    Example:
        repo = DjangoTicketRepository(DjangoDatabaseAdapter())

        # Criar
        ticket_id = repo.inserir("Impressora", "Sem toner", 3, 7)

        # Buscar
        ticket = repo.obter_por_id(ticket_id)

        # Listar com escopo
        tickets = repo.listar_por_status(StatusTicket.ABERTO, solicitante_id=7)
    """

    tabela = "tickets"
    colunas = TicketMapper.COLUNAS
    coluna_escopo = "solicitante_id"

    def to_entity(self, row) -> TicketEntity:
        return TicketMapper.to_entity(row)

    def inserir(
        self,
        titulo: str,
        descricao: str,
        categoria_id: int,
        solicitante_id: int,
        prioridade: PrioridadeTicket = PrioridadeTicket.MEDIA,
    ) -> int:
        """
        Insere ticket ABERTO.

        data_criacao e data_atualizacao recebem o mesmo instante.

        Returns:
            ID gerado pelo banco
        """
        instante = self.db.adapt_datetime(agora())

        ticket_id = self.db.insert_returning_id(
            "INSERT INTO tickets "
            "(titulo, descricao, status, prioridade, categoria_id, solicitante_id, "
            "data_criacao, data_atualizacao) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
            [
                titulo,
                descricao,
                StatusTicket.ABERTO.name,
                prioridade.name,
                categoria_id,
                solicitante_id,
                instante,
                instante,
            ],
        )

        logger.debug(f"Ticket inserido: {ticket_id}")
        return ticket_id

    def obter_por_id(self, ticket_id: int) -> Optional[TicketEntity]:
        return self._obter(ticket_id)

    def listar(self, solicitante_id: Optional[int] = None) -> List[TicketEntity]:
        return self._listar(escopo=solicitante_id)

    def buscar(
        self,
        termo: str,
        solicitante_id: Optional[int] = None,
    ) -> List[TicketEntity]:
        """
        Busca por substring em título, descrição e código.

        O termo vai como parâmetro; curingas do LIKE digitados pelo
        usuário ('%', '_') são respeitados como curingas.
        """
        padrao = f"%{termo}%"
        return self._listar(
            [
                "LOWER(titulo) LIKE LOWER(%s) "
                "OR LOWER(descricao) LIKE LOWER(%s) "
                "OR LOWER(COALESCE(codigo, '')) LIKE LOWER(%s)"
            ],
            [padrao, padrao, padrao],
            escopo=solicitante_id,
        )

    def listar_por_status(
        self,
        status: StatusTicket,
        solicitante_id: Optional[int] = None,
    ) -> List[TicketEntity]:
        return self._listar(["status = %s"], [status.name], escopo=solicitante_id)

    def listar_por_prioridade(
        self,
        prioridade: PrioridadeTicket,
        solicitante_id: Optional[int] = None,
    ) -> List[TicketEntity]:
        return self._listar(["prioridade = %s"], [prioridade.name], escopo=solicitante_id)

    def atualizar_status(self, ticket_id: int, status: StatusTicket) -> bool:
        """
        Grava status e data_atualizacao.

        Para RESOLVIDO/FECHADO, data_resolucao só é gravada se ainda
        for nula (COALESCE mantém a primeira resolução).
        """
        instante = self.db.adapt_datetime(agora())

        if status.encerra_atendimento:
            linhas = self.db.execute(
                "UPDATE tickets SET status = %s, data_atualizacao = %s, "
                "data_resolucao = COALESCE(data_resolucao, %s) "
                "WHERE id = %s",
                [status.name, instante, instante, ticket_id],
            )
        else:
            linhas = self.db.execute(
                "UPDATE tickets SET status = %s, data_atualizacao = %s WHERE id = %s",
                [status.name, instante, ticket_id],
            )

        return linhas > 0

    def atribuir_responsavel(self, ticket_id: int, responsavel_id: int) -> bool:
        instante = self.db.adapt_datetime(agora())

        linhas = self.db.execute(
            "UPDATE tickets SET responsavel_id = %s, "
            "status = CASE WHEN status = %s THEN %s ELSE status END, "
            "data_atualizacao = %s "
            "WHERE id = %s",
            [
                responsavel_id,
                StatusTicket.ABERTO.name,
                StatusTicket.EM_ANDAMENTO.name,
                instante,
                ticket_id,
            ],
        )
        return linhas > 0


class DjangoComentarioRepository(BaseSqlRepository[ComentarioEntity]):
    """Implementação SQL do ComentarioRepository."""

    tabela = "comentarios"
    colunas = ComentarioMapper.COLUNAS

    def to_entity(self, row) -> ComentarioEntity:
        return ComentarioMapper.to_entity(row)

    def inserir(
        self,
        ticket_id: int,
        usuario_id: int,
        conteudo: str,
        tipo: TipoComentario = TipoComentario.COMENTARIO,
    ) -> int:
        """
        Insere comentário e atualiza data_atualizacao do ticket.

        As duas instruções rodam na mesma transação e usam o mesmo
        instante.
        """
        instante = self.db.adapt_datetime(agora())

        with self.db.transaction():
            comentario_id = self.db.insert_returning_id(
                "INSERT INTO comentarios (ticket_id, usuario_id, conteudo, tipo, data) "
                "VALUES (%s, %s, %s, %s, %s)",
                [ticket_id, usuario_id, conteudo, tipo.name, instante],
            )
            self.db.execute(
                "UPDATE tickets SET data_atualizacao = %s WHERE id = %s",
                [instante, ticket_id],
            )

        return comentario_id

    def listar_por_ticket(self, ticket_id: int) -> List[ComentarioEntity]:
        return self._listar(["ticket_id = %s"], [ticket_id])


class DjangoUsuarioRepository(BaseSqlRepository[UsuarioEntity]):
    tabela = "usuarios"
    colunas = UsuarioMapper.COLUNAS

    def to_entity(self, row) -> UsuarioEntity:
        return UsuarioMapper.to_entity(row)

    def obter_por_id(self, usuario_id: int) -> Optional[UsuarioEntity]:
        return self._obter(usuario_id)

    def listar_todos(self) -> List[UsuarioEntity]:
        return self._listar()


class DjangoCategoriaRepository(BaseSqlRepository[CategoriaEntity]):
    tabela = "categorias"
    colunas = CategoriaMapper.COLUNAS

    def to_entity(self, row) -> CategoriaEntity:
        return CategoriaMapper.to_entity(row)

    def obter_por_id(self, categoria_id: int) -> Optional[CategoriaEntity]:
        return self._obter(categoria_id)

    def listar_ativas(self) -> List[CategoriaEntity]:
        return self._listar(["ativa = %s"], [True])


class DjangoEstatisticasRepository:
    """
    Implementação SQL do EstatisticasRepository.

    Agregações globais sobre a tabela tickets. A média de resolução
    é calculada na aplicação a partir das datas, para não depender
    de funções de data específicas de cada banco.
    """

    def __init__(self, db: DatabaseAdapter):
        self.db = db

    def contagem_por_status(self) -> Dict[StatusTicket, int]:
        contagem = {status: 0 for status in StatusTicket}
        rows = self.db.fetch_all(
            "SELECT status, COUNT(*) AS total FROM tickets GROUP BY status"
        )
        for row in rows:
            contagem[enum_por_nome(StatusTicket, row["status"], "status")] = int(row["total"])
        return contagem

    def contagem_por_prioridade(self) -> Dict[PrioridadeTicket, int]:
        contagem = {prioridade: 0 for prioridade in PrioridadeTicket}
        rows = self.db.fetch_all(
            "SELECT prioridade, COUNT(*) AS total FROM tickets GROUP BY prioridade"
        )
        for row in rows:
            prioridade = enum_por_nome(PrioridadeTicket, row["prioridade"], "prioridade")
            contagem[prioridade] = int(row["total"])
        return contagem

    def total_tickets(self) -> int:
        row = self.db.fetch_one("SELECT COUNT(*) AS total FROM tickets")
        return int(row["total"]) if row else 0

    def tickets_abertos(self) -> int:
        row = self.db.fetch_one(
            "SELECT COUNT(*) AS total FROM tickets WHERE status <> %s",
            [StatusTicket.FECHADO.name],
        )
        return int(row["total"]) if row else 0

    def tempo_medio_resolucao_horas(self) -> float:
        rows = self.db.fetch_all(
            "SELECT data_criacao, data_resolucao FROM tickets "
            "WHERE data_resolucao IS NOT NULL"
        )
        if not rows:
            return 0.0

        horas = [
            TicketMapper.horas_entre(row["data_criacao"], row["data_resolucao"])
            for row in rows
        ]
        return sum(horas) / len(horas)
