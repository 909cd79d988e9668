"""
Ports (Interfaces) do Domínio de Tickets.

Define os contratos que os Adapters de infraestrutura devem implementar
para persistência e consulta.

Tipos de Ports:
- TicketRepository: Inserção, consultas com escopo e mudanças de estado
- ComentarioRepository: Comentários de um ticket
- UsuarioRepository / CategoriaRepository: Consultas de apoio
- EstatisticasRepository: Agregações para o painel

Convenções:
- Parâmetro solicitante_id=None significa "sem restrição de escopo";
  um inteiro restringe o resultado aos tickets daquele solicitante
- Resultados sempre ordenados por id
- Falhas do banco são lançadas como RepositoryError

Princípio:
    Core define interfaces → Adapters implementam
    Dependências sempre apontam para o Core

Example:
    # No Adapter (Django)
    class DjangoTicketRepository:
        def obter_por_id(self, ticket_id: int) -> Optional[TicketEntity]:
            row = self.db.fetch_one("SELECT * FROM tickets WHERE id = %s", [ticket_id])
            return TicketMapper.to_entity(row) if row else None
"""

from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional, Protocol, runtime_checkable

from .entities import (
    CategoriaEntity,
    ComentarioEntity,
    PrioridadeTicket,
    StatusTicket,
    TicketEntity,
    TipoComentario,
    UsuarioEntity,
    agora,
    como_utc,
)


@runtime_checkable
class TicketRepository(Protocol):
    """
    Interface para persistência de Tickets.

    Implementações:
    - DjangoTicketRepository (SQL parametrizado via conexão do Django)
    - InMemoryTicketRepository (para testes)
    """

    def inserir(
        self,
        titulo: str,
        descricao: str,
        categoria_id: int,
        solicitante_id: int,
        prioridade: PrioridadeTicket = PrioridadeTicket.MEDIA,
    ) -> int:
        """
        Insere ticket novo com status ABERTO.

        O código legível é gerado pelo banco.

        Returns:
            ID atribuído pelo banco

        Raises:
            RepositoryError: Se falha na persistência
        """
        ...

    def obter_por_id(self, ticket_id: int) -> Optional[TicketEntity]:
        """Busca ticket por ID (sem escopo). None se não existir."""
        ...

    def listar(self, solicitante_id: Optional[int] = None) -> List[TicketEntity]:
        ...

    def buscar(
        self,
        termo: str,
        solicitante_id: Optional[int] = None,
    ) -> List[TicketEntity]:
        """
        Busca por substring (sem diferenciar maiúsculas) em título,
        descrição e código.
        """
        ...

    def listar_por_status(
        self,
        status: StatusTicket,
        solicitante_id: Optional[int] = None,
    ) -> List[TicketEntity]:
        ...

    def listar_por_prioridade(
        self,
        prioridade: PrioridadeTicket,
        solicitante_id: Optional[int] = None,
    ) -> List[TicketEntity]:
        ...

    def atualizar_status(self, ticket_id: int, status: StatusTicket) -> bool:
        """
        Grava novo status e data de atualização.

        Se o status for RESOLVIDO ou FECHADO, grava a data de resolução
        apenas se ainda não houver uma.

        Returns:
            True se alguma linha foi alterada
        """
        ...

    def atribuir_responsavel(self, ticket_id: int, responsavel_id: int) -> bool:
        """
        Grava responsável e data de atualização.

        Na mesma instrução, um ticket ABERTO passa para EM_ANDAMENTO;
        os demais status são preservados.
        """
        ...


@runtime_checkable
class ComentarioRepository(Protocol):
    """Interface para comentários de tickets."""

    def inserir(
        self,
        ticket_id: int,
        usuario_id: int,
        conteudo: str,
        tipo: TipoComentario = TipoComentario.COMENTARIO,
    ) -> int:
        """
        Insere comentário e atualiza a data de atualização do ticket
        com o mesmo instante, em uma única transação.

        Returns:
            ID do comentário
        """
        ...

    def listar_por_ticket(self, ticket_id: int) -> List[ComentarioEntity]:
        ...


@runtime_checkable
class UsuarioRepository(Protocol):
    def obter_por_id(self, usuario_id: int) -> Optional[UsuarioEntity]:
        ...

    def listar_todos(self) -> List[UsuarioEntity]:
        ...


@runtime_checkable
class CategoriaRepository(Protocol):
    def obter_por_id(self, categoria_id: int) -> Optional[CategoriaEntity]:
        ...

    def listar_ativas(self) -> List[CategoriaEntity]:
        ...


@runtime_checkable
class EstatisticasRepository(Protocol):
    """
    Interface para agregações do painel.

    Sem escopo: os números são globais, independente do perfil.
    """

    def contagem_por_status(self) -> Dict[StatusTicket, int]:
        """Contagem por status; status sem tickets aparecem com zero."""
        ...

    def contagem_por_prioridade(self) -> Dict[PrioridadeTicket, int]:
        ...

    def total_tickets(self) -> int:
        ...

    def tickets_abertos(self) -> int:
        """Tickets cujo status é diferente de FECHADO."""
        ...

    def tempo_medio_resolucao_horas(self) -> float:
        """
        Média das horas inteiras entre criação e resolução dos tickets
        com data de resolução. 0.0 se não houver nenhum.
        """
        ...


# =============================================================================
# Implementações em memória (testes e prototipagem)
# =============================================================================

def _horas_inteiras(inicio: datetime, fim: datetime) -> int:
    return int((como_utc(fim) - como_utc(inicio)).total_seconds() // 3600)


class InMemoryTicketRepository:
    """
    Implementação em memória do TicketRepository.

    Útil para:
    - Testes unitários
    - Prototipagem

    Não usar em produção!

    Example:
        repo = InMemoryTicketRepository()
        ticket_id = repo.inserir("Impressora", "Sem toner", 1, 7)
        found = repo.obter_por_id(ticket_id)
    """

    def __init__(self):
        self._tickets: Dict[int, TicketEntity] = {}
        self._proximo_id = 1

    def inserir(
        self,
        titulo: str,
        descricao: str,
        categoria_id: int,
        solicitante_id: int,
        prioridade: PrioridadeTicket = PrioridadeTicket.MEDIA,
    ) -> int:
        ticket_id = self._proximo_id
        self._proximo_id += 1

        instante = agora()
        self._tickets[ticket_id] = TicketEntity(
            id=ticket_id,
            codigo=f"TK-{ticket_id:06d}",
            titulo=titulo,
            descricao=descricao,
            categoria_id=categoria_id,
            solicitante_id=solicitante_id,
            prioridade=prioridade,
            data_criacao=instante,
            data_atualizacao=instante,
        )
        return ticket_id

    def adicionar(self, ticket: TicketEntity) -> None:
        """Insere snapshot pronto (útil para montar cenários de teste)."""
        self._tickets[ticket.id] = ticket
        self._proximo_id = max(self._proximo_id, ticket.id + 1)

    def obter_por_id(self, ticket_id: int) -> Optional[TicketEntity]:
        return self._tickets.get(ticket_id)

    def listar(self, solicitante_id: Optional[int] = None) -> List[TicketEntity]:
        return self._filtrar(lambda t: True, solicitante_id)

    def buscar(
        self,
        termo: str,
        solicitante_id: Optional[int] = None,
    ) -> List[TicketEntity]:
        termo_lower = termo.lower()

        def casa(ticket: TicketEntity) -> bool:
            campos = (ticket.titulo, ticket.descricao, ticket.codigo or "")
            return any(termo_lower in campo.lower() for campo in campos)

        return self._filtrar(casa, solicitante_id)

    def listar_por_status(
        self,
        status: StatusTicket,
        solicitante_id: Optional[int] = None,
    ) -> List[TicketEntity]:
        return self._filtrar(lambda t: t.status == status, solicitante_id)

    def listar_por_prioridade(
        self,
        prioridade: PrioridadeTicket,
        solicitante_id: Optional[int] = None,
    ) -> List[TicketEntity]:
        return self._filtrar(lambda t: t.prioridade == prioridade, solicitante_id)

    def atualizar_status(self, ticket_id: int, status: StatusTicket) -> bool:
        ticket = self._tickets.get(ticket_id)
        if ticket is None:
            return False

        instante = agora()
        data_resolucao = ticket.data_resolucao
        if status.encerra_atendimento and data_resolucao is None:
            data_resolucao = instante

        self._tickets[ticket_id] = replace(
            ticket,
            status=status,
            data_atualizacao=instante,
            data_resolucao=data_resolucao,
        )
        return True

    def atribuir_responsavel(self, ticket_id: int, responsavel_id: int) -> bool:
        ticket = self._tickets.get(ticket_id)
        if ticket is None:
            return False

        status = ticket.status
        if status == StatusTicket.ABERTO:
            status = StatusTicket.EM_ANDAMENTO

        self._tickets[ticket_id] = replace(
            ticket,
            responsavel_id=responsavel_id,
            status=status,
            data_atualizacao=agora(),
        )
        return True

    def tocar(self, ticket_id: int, instante: datetime) -> None:
        """Atualiza apenas data_atualizacao."""
        ticket = self._tickets.get(ticket_id)
        if ticket is not None:
            self._tickets[ticket_id] = replace(ticket, data_atualizacao=instante)

    def clear(self) -> None:
        """Limpa todos os dados (útil para testes)."""
        self._tickets.clear()
        self._proximo_id = 1

    def _filtrar(self, predicado, solicitante_id: Optional[int]) -> List[TicketEntity]:
        return [
            ticket
            for _, ticket in sorted(self._tickets.items())
            if predicado(ticket)
            and (solicitante_id is None or ticket.solicitante_id == solicitante_id)
        ]


class InMemoryComentarioRepository:
    """
    Comentários em memória.

    Recebe o repositório de tickets para reproduzir a atualização
    de data_atualizacao feita pelo banco.
    """

    def __init__(self, ticket_repo: InMemoryTicketRepository):
        self.ticket_repo = ticket_repo
        self._comentarios: Dict[int, ComentarioEntity] = {}
        self._proximo_id = 1

    def inserir(
        self,
        ticket_id: int,
        usuario_id: int,
        conteudo: str,
        tipo: TipoComentario = TipoComentario.COMENTARIO,
    ) -> int:
        comentario_id = self._proximo_id
        self._proximo_id += 1

        instante = agora()
        self._comentarios[comentario_id] = ComentarioEntity(
            id=comentario_id,
            ticket_id=ticket_id,
            usuario_id=usuario_id,
            conteudo=conteudo,
            tipo=tipo,
            data=instante,
        )
        self.ticket_repo.tocar(ticket_id, instante)
        return comentario_id

    def listar_por_ticket(self, ticket_id: int) -> List[ComentarioEntity]:
        return [
            comentario
            for _, comentario in sorted(self._comentarios.items())
            if comentario.ticket_id == ticket_id
        ]


class InMemoryUsuarioRepository:
    def __init__(self, usuarios: Optional[List[UsuarioEntity]] = None):
        self._usuarios: Dict[int, UsuarioEntity] = {}
        for usuario in usuarios or []:
            self.adicionar(usuario)

    def adicionar(self, usuario: UsuarioEntity) -> None:
        self._usuarios[usuario.id] = usuario

    def obter_por_id(self, usuario_id: int) -> Optional[UsuarioEntity]:
        return self._usuarios.get(usuario_id)

    def listar_todos(self) -> List[UsuarioEntity]:
        return [u for _, u in sorted(self._usuarios.items())]


class InMemoryCategoriaRepository:
    def __init__(self, categorias: Optional[List[CategoriaEntity]] = None):
        self._categorias: Dict[int, CategoriaEntity] = {}
        for categoria in categorias or []:
            self.adicionar(categoria)

    def adicionar(self, categoria: CategoriaEntity) -> None:
        self._categorias[categoria.id] = categoria

    def obter_por_id(self, categoria_id: int) -> Optional[CategoriaEntity]:
        return self._categorias.get(categoria_id)

    def listar_ativas(self) -> List[CategoriaEntity]:
        return [c for _, c in sorted(self._categorias.items()) if c.ativa]


class InMemoryEstatisticasRepository:
    """Agregações calculadas sobre um InMemoryTicketRepository."""

    def __init__(self, ticket_repo: InMemoryTicketRepository):
        self.ticket_repo = ticket_repo

    def contagem_por_status(self) -> Dict[StatusTicket, int]:
        contagem = {status: 0 for status in StatusTicket}
        for ticket in self.ticket_repo.listar():
            contagem[ticket.status] += 1
        return contagem

    def contagem_por_prioridade(self) -> Dict[PrioridadeTicket, int]:
        contagem = {prioridade: 0 for prioridade in PrioridadeTicket}
        for ticket in self.ticket_repo.listar():
            contagem[ticket.prioridade] += 1
        return contagem

    def total_tickets(self) -> int:
        return len(self.ticket_repo.listar())

    def tickets_abertos(self) -> int:
        return len([
            t for t in self.ticket_repo.listar()
            if t.status != StatusTicket.FECHADO
        ])

    def tempo_medio_resolucao_horas(self) -> float:
        horas = [
            _horas_inteiras(t.data_criacao, t.data_resolucao)
            for t in self.ticket_repo.listar()
            if t.data_resolucao is not None
        ]
        if not horas:
            return 0.0
        return sum(horas) / len(horas)
