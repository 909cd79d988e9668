"""
Data Transfer Objects (DTOs) do Domínio de Tickets.

DTOs são estruturas simples para transportar dados entre camadas,
evitando vazamento de modelos internos (entidades) para camadas externas.

Tipos de DTOs:
- Input DTOs: Recebem dados de entrada crus (strings vindas da interface)
- Output DTOs: Formatam dados para resposta e para a exportação JSON

Os Output DTOs serializam enums pelo nome simbólico e datas em ISO 8601,
acompanhados dos campos de exibição (rótulo, cor, data formatada).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Union

from .entities import (
    CategoriaEntity,
    ComentarioEntity,
    PrioridadeTicket,
    StatusTicket,
    TicketEntity,
    UsuarioEntity,
)


def _iso(valor: Optional[datetime]) -> Optional[str]:
    return valor.isoformat() if valor else None


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class CriarTicketInputDTO:
    """
    DTO de entrada para criar ticket.

    Os campos chegam como texto cru; a validação (campos obrigatórios,
    conversão do ID da categoria) é feita pelo use case.

    Attributes:
        titulo: Título do ticket
        descricao: Descrição detalhada
        categoria_id: ID da categoria (texto, como digitado)
    """

    titulo: str
    descricao: str
    categoria_id: str


@dataclass(frozen=True)
class AtualizarStatusInputDTO:
    """
    DTO de entrada para mudança de status.

    Attributes:
        ticket_id: ID do ticket (texto)
        novo_status: Status desejado (enum, nome ou rótulo)
    """

    ticket_id: str
    novo_status: Union[StatusTicket, str]


@dataclass(frozen=True)
class AtribuirResponsavelInputDTO:
    """
    DTO de entrada para atribuir responsável.

    Attributes:
        ticket_id: ID do ticket (texto)
        responsavel_id: ID do técnico/administrador (texto)
    """

    ticket_id: str
    responsavel_id: str


@dataclass(frozen=True)
class AdicionarComentarioInputDTO:
    ticket_id: str
    conteudo: str
    tipo: str = "COMENTARIO"


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class ComentarioOutputDTO:
    """DTO de saída de comentário."""

    id: int
    ticket_id: int
    usuario_id: int
    conteudo: str
    tipo: str
    data: datetime
    data_formatada: str

    @classmethod
    def from_entity(cls, entity: ComentarioEntity) -> "ComentarioOutputDTO":
        return cls(
            id=entity.id,
            ticket_id=entity.ticket_id,
            usuario_id=entity.usuario_id,
            conteudo=entity.conteudo,
            tipo=entity.tipo.name,
            data=entity.data,
            data_formatada=entity.data_formatada,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "ticket_id": self.ticket_id,
            "usuario_id": self.usuario_id,
            "conteudo": self.conteudo,
            "tipo": self.tipo,
            "data": self.data.isoformat(),
            "data_formatada": self.data_formatada,
        }


@dataclass
class TicketOutputDTO:
    """
    DTO de saída completo com dados do ticket.

    Usado tanto para resposta de um único ticket quanto para a
    exportação (tickets.json).

    Attributes:
        id: Identificador
        codigo: Código legível gerado pelo banco
        titulo: Título do ticket
        descricao: Descrição detalhada
        status: Nome do status (ex: "EM_ANDAMENTO")
        status_rotulo: Rótulo de exibição (ex: "Em Andamento")
        status_cor: Cor de exibição
        prioridade: Nome da prioridade (ex: "ALTA")
        prioridade_rotulo: Rótulo de exibição
        prioridade_nivel: Nível (1 a 4), para ordenação
        categoria_id: Categoria
        solicitante_id: Quem abriu o ticket
        responsavel_id: Técnico responsável (se atribuído)
        data_criacao: Data/hora de abertura
        data_atualizacao: Data/hora da última alteração
        data_resolucao: Primeira resolução
        tempo_aberto_horas: Horas inteiras em aberto
        anexos: Identificadores de anexos
        tags: Lista de tags
        comentarios: Comentários hidratados
    """

    id: int
    codigo: Optional[str]
    titulo: str
    descricao: str
    status: str
    status_rotulo: str
    status_cor: str
    prioridade: str
    prioridade_rotulo: str
    prioridade_nivel: int
    categoria_id: int
    solicitante_id: int
    responsavel_id: Optional[int]
    data_criacao: datetime
    data_atualizacao: datetime
    data_resolucao: Optional[datetime]
    tempo_aberto_horas: int
    anexos: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    comentarios: List[ComentarioOutputDTO] = field(default_factory=list)

    @classmethod
    def from_entity(cls, entity: TicketEntity) -> "TicketOutputDTO":
        """
        Factory method para converter entidade em DTO.

        Args:
            entity: Entidade TicketEntity

        Returns:
            DTO com dados da entidade
        """
        return cls(
            id=entity.id,
            codigo=entity.codigo,
            titulo=entity.titulo,
            descricao=entity.descricao,
            status=entity.status.name,
            status_rotulo=entity.status.rotulo,
            status_cor=entity.status.cor,
            prioridade=entity.prioridade.name,
            prioridade_rotulo=entity.prioridade.rotulo,
            prioridade_nivel=entity.prioridade.nivel,
            categoria_id=entity.categoria_id,
            solicitante_id=entity.solicitante_id,
            responsavel_id=entity.responsavel_id,
            data_criacao=entity.data_criacao,
            data_atualizacao=entity.data_atualizacao,
            data_resolucao=entity.data_resolucao,
            tempo_aberto_horas=entity.tempo_aberto_horas,
            anexos=list(entity.anexos),
            tags=list(entity.tags),
            comentarios=[
                ComentarioOutputDTO.from_entity(c) for c in entity.comentarios
            ],
        )

    def to_dict(self) -> dict:
        """Converte para dicionário (serialização JSON)."""
        return {
            "id": self.id,
            "codigo": self.codigo,
            "titulo": self.titulo,
            "descricao": self.descricao,
            "status": self.status,
            "status_rotulo": self.status_rotulo,
            "status_cor": self.status_cor,
            "prioridade": self.prioridade,
            "prioridade_rotulo": self.prioridade_rotulo,
            "prioridade_nivel": self.prioridade_nivel,
            "categoria_id": self.categoria_id,
            "solicitante_id": self.solicitante_id,
            "responsavel_id": self.responsavel_id,
            "data_criacao": _iso(self.data_criacao),
            "data_atualizacao": _iso(self.data_atualizacao),
            "data_resolucao": _iso(self.data_resolucao),
            "tempo_aberto_horas": self.tempo_aberto_horas,
            "anexos": self.anexos,
            "tags": self.tags,
            "comentarios": [c.to_dict() for c in self.comentarios],
        }


@dataclass
class UsuarioOutputDTO:
    """DTO de saída de usuário (exportado em usuarios.json)."""

    id: int
    nome: str
    email: str
    perfil: str
    perfil_rotulo: str
    departamento_id: Optional[int]
    ativo: bool
    data_criacao: Optional[datetime]

    @classmethod
    def from_entity(cls, entity: UsuarioEntity) -> "UsuarioOutputDTO":
        return cls(
            id=entity.id,
            nome=entity.nome,
            email=entity.email,
            perfil=entity.perfil.name,
            perfil_rotulo=entity.perfil.rotulo,
            departamento_id=entity.departamento_id,
            ativo=entity.ativo,
            data_criacao=entity.data_criacao,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nome": self.nome,
            "email": self.email,
            "perfil": self.perfil,
            "perfil_rotulo": self.perfil_rotulo,
            "departamento_id": self.departamento_id,
            "ativo": self.ativo,
            "data_criacao": _iso(self.data_criacao),
        }


@dataclass
class CategoriaOutputDTO:
    """DTO de saída de categoria (exportado em categorias.json)."""

    id: int
    nome: str
    descricao: str
    cor: str
    ativa: bool

    @classmethod
    def from_entity(cls, entity: CategoriaEntity) -> "CategoriaOutputDTO":
        return cls(
            id=entity.id,
            nome=entity.nome,
            descricao=entity.descricao,
            cor=entity.cor,
            ativa=entity.ativa,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nome": self.nome,
            "descricao": self.descricao,
            "cor": self.cor,
            "ativa": self.ativa,
        }


@dataclass
class EstatisticasOutputDTO:
    """
    DTO com o painel de estatísticas.

    As contagens trazem todas as chaves do enum correspondente;
    valores ausentes no banco aparecem como zero.

    Attributes:
        por_status: Contagem por status
        por_prioridade: Contagem por prioridade
        total: Total de tickets
        abertos: Tickets com status diferente de FECHADO
        tempo_medio_resolucao_horas: Média das horas de resolução
    """

    por_status: Dict[StatusTicket, int]
    por_prioridade: Dict[PrioridadeTicket, int]
    total: int = 0
    abertos: int = 0
    tempo_medio_resolucao_horas: float = 0.0

    @classmethod
    def vazio(cls) -> "EstatisticasOutputDTO":
        """Painel zerado, usado quando o banco falha."""
        return cls(
            por_status={status: 0 for status in StatusTicket},
            por_prioridade={prioridade: 0 for prioridade in PrioridadeTicket},
        )

    def to_dict(self) -> dict:
        return {
            "por_status": {s.name: n for s, n in self.por_status.items()},
            "por_prioridade": {p.name: n for p, n in self.por_prioridade.items()},
            "total": self.total,
            "abertos": self.abertos,
            "tempo_medio_resolucao_horas": self.tempo_medio_resolucao_horas,
        }
