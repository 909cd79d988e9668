"""
Entidades do Domínio de Tickets.

Este módulo define as enumerações e as entidades de domínio do
sistema de suporte.

Enumerações (persistidas pelo nome simbólico, nunca pelo ordinal):
- StatusTicket: Estados possíveis de um ticket (com cor de exibição)
- PrioridadeTicket: Níveis de prioridade (com nível e cor)
- PerfilUsuario: Papéis de acesso (com nível)
- TipoComentario: Natureza de um comentário

Entidades (snapshots imutáveis; mudanças passam pelos repositórios):
- TicketEntity: Agregado principal do domínio
- UsuarioEntity: Usuário do sistema
- ComentarioEntity: Comentário de um ticket
- CategoriaEntity: Categoria de ticket

Regras de Negócio Encapsuladas:
- Máquina de estados do status
- Campos derivados (datas formatadas, horas em aberto)
- Conjunto de tags sem duplicatas, na ordem de inserção
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple

from sistema_tickets.core.shared.exceptions import (
    BusinessRuleViolationError,
    PermissionDeniedError,
)


FORMATO_DATA_HORA = "%d/%m/%Y %H:%M"


def agora() -> datetime:
    """Instante atual em UTC."""
    return datetime.now(timezone.utc)


def como_utc(valor: datetime) -> datetime:
    """Datas sem fuso vindas do banco são interpretadas como UTC."""
    if valor.tzinfo is None:
        return valor.replace(tzinfo=timezone.utc)
    return valor.astimezone(timezone.utc)


def _from_string(enum_cls, value: str, descricao: str):
    # Tenta pelo nome (EM_ANDAMENTO), depois pelo rótulo ("Em Andamento")
    if isinstance(value, enum_cls):
        return value
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{descricao} inválido: {value}")

    texto = (value or "").strip()
    try:
        return enum_cls[texto.upper().replace(" ", "_")]
    except KeyError:
        pass

    for membro in enum_cls:
        if membro.rotulo.lower() == texto.lower():
            return membro

    raise ValueError(f"{descricao} inválido: {value}")


class StatusTicket(Enum):
    """
    Estados possíveis de um ticket.

    Fluxo de Estados:
        ABERTO ⇄ EM_ANDAMENTO → RESOLVIDO → FECHADO
           └──────────┴───────────┴─────────↑
        RESOLVIDO → EM_ANDAMENTO
        FECHADO → ABERTO (reabrir, apenas ADMIN)
    """

    ABERTO = ("Aberto", "#ff6b6b")
    EM_ANDAMENTO = ("Em Andamento", "#4ecdc4")
    RESOLVIDO = ("Resolvido", "#45b7d1")
    FECHADO = ("Fechado", "#96ceb4")

    def __init__(self, rotulo: str, cor: str):
        self.rotulo = rotulo
        self.cor = cor

    @property
    def encerra_atendimento(self) -> bool:
        """RESOLVIDO e FECHADO registram data de resolução."""
        return self in (StatusTicket.RESOLVIDO, StatusTicket.FECHADO)

    @classmethod
    def from_string(cls, value: str) -> "StatusTicket":
        """
        Converte string para enum.

        Aceita o nome simbólico ("RESOLVIDO") ou o rótulo ("Resolvido").

        Raises:
            ValueError: Se valor inválido
        """
        return _from_string(cls, value, "Status")


class PrioridadeTicket(Enum):
    """
    Níveis de prioridade.

    O nível define uma ordem total usada apenas para ordenação
    na exibição.
    """

    BAIXA = ("Baixa", 1, "#96ceb4")
    MEDIA = ("Média", 2, "#feca57")
    ALTA = ("Alta", 3, "#ff9ff3")
    CRITICA = ("Crítica", 4, "#ff6b6b")

    def __init__(self, rotulo: str, nivel: int, cor: str):
        self.rotulo = rotulo
        self.nivel = nivel
        self.cor = cor

    @classmethod
    def from_string(cls, value: str) -> "PrioridadeTicket":
        """Converte nome ("CRITICA") ou rótulo ("Crítica") para enum."""
        return _from_string(cls, value, "Prioridade")


class PerfilUsuario(Enum):
    """Perfis de acesso, do menos ao mais privilegiado."""

    USUARIO = ("Usuário", 1)
    TECNICO = ("Técnico", 2)
    ADMIN = ("Administrador", 3)

    def __init__(self, rotulo: str, nivel: int):
        self.rotulo = rotulo
        self.nivel = nivel

    @classmethod
    def from_string(cls, value: str) -> "PerfilUsuario":
        return _from_string(cls, value, "Perfil")


class TipoComentario(Enum):
    """
    Natureza de um comentário.

    INTERNO é destinado apenas a perfis privilegiados; o filtro
    de visibilidade não é aplicado pelo Core nesta versão.
    """

    COMENTARIO = "Comentário"
    RESOLUCAO = "Resolução"
    INTERNO = "Interno"

    def __init__(self, rotulo: str):
        self.rotulo = rotulo

    @classmethod
    def from_string(cls, value: str) -> "TipoComentario":
        return _from_string(cls, value, "Tipo de comentário")


# Transições permitidas por atualizar_status (além de X -> X)
TRANSICOES_STATUS: Dict[StatusTicket, FrozenSet[StatusTicket]] = {
    StatusTicket.ABERTO: frozenset({
        StatusTicket.EM_ANDAMENTO,
        StatusTicket.RESOLVIDO,
        StatusTicket.FECHADO,
    }),
    StatusTicket.EM_ANDAMENTO: frozenset({
        StatusTicket.ABERTO,
        StatusTicket.RESOLVIDO,
        StatusTicket.FECHADO,
    }),
    StatusTicket.RESOLVIDO: frozenset({
        StatusTicket.EM_ANDAMENTO,
        StatusTicket.FECHADO,
    }),
    StatusTicket.FECHADO: frozenset({
        StatusTicket.ABERTO,  # Reabrir
    }),
}


@dataclass(frozen=True, eq=False)
class UsuarioEntity:
    """
    Entidade de Domínio: Usuário.

    Attributes:
        id: Identificador atribuído pelo banco
        nome: Nome de exibição
        email: E-mail (único por contrato do banco)
        perfil: Perfil de acesso
        departamento_id: Departamento do usuário
        ativo: Exclusão lógica
        data_criacao: Data/hora de cadastro
    """

    id: int
    nome: str
    email: str
    perfil: PerfilUsuario = PerfilUsuario.USUARIO
    departamento_id: Optional[int] = None
    ativo: bool = True
    data_criacao: Optional[datetime] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UsuarioEntity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(("usuario", self.id))


@dataclass(frozen=True, eq=False)
class ComentarioEntity:
    """
    Entidade de Domínio: Comentário.

    Imutável depois de gravado. Um comentário do tipo RESOLUCAO é
    apenas informativo e não altera o status do ticket.
    """

    id: int
    ticket_id: int
    usuario_id: int
    conteudo: str
    tipo: TipoComentario = TipoComentario.COMENTARIO
    data: datetime = field(default_factory=agora)

    @property
    def data_formatada(self) -> str:
        return self.data.strftime(FORMATO_DATA_HORA)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComentarioEntity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(("comentario", self.id))


@dataclass(frozen=True, eq=False)
class CategoriaEntity:
    """Entidade de Domínio: Categoria (apenas ativas recebem tickets novos)."""

    id: int
    nome: str
    descricao: str = ""
    cor: str = "#95a5a6"
    ativa: bool = True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CategoriaEntity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(("categoria", self.id))


@dataclass(frozen=True, eq=False)
class TicketEntity:
    """
    Entidade de Domínio: Ticket.

    Agregado principal do domínio de suporte técnico. É um snapshot
    imutável do que está no banco: alterações de estado são feitas
    pelos repositórios e um novo snapshot é lido em seguida.

    Invariantes (garantidas pelo repositório):
    - data_criacao <= data_atualizacao
    - data_resolucao, se definida, >= data_criacao
    - status RESOLVIDO/FECHADO implica data_resolucao definida
    - solicitante_id nunca muda

    Attributes:
        id: Identificador atribuído pelo banco
        codigo: Código legível gerado pelo banco (opaco para o Core)
        titulo: Título descritivo
        descricao: Descrição detalhada do problema
        categoria_id: Categoria do ticket
        solicitante_id: Usuário que abriu o ticket
        status: Estado atual
        prioridade: Nível de prioridade
        responsavel_id: Técnico responsável (opcional)
        data_criacao: Data/hora de abertura
        data_atualizacao: Data/hora da última alteração
        data_resolucao: Primeira resolução/fechamento
        anexos: Identificadores de anexos
        tags: Tags sem duplicatas, na ordem de inserção
        comentarios: Comentários hidratados sob demanda

    Example:
        ticket = repo.obter_por_id(42)
        ticket.tempo_aberto_horas
        ticket.validar_transicao(StatusTicket.RESOLVIDO, usuario.perfil)
    """

    # Identificação
    id: int
    titulo: str
    descricao: str
    categoria_id: int
    solicitante_id: int
    codigo: Optional[str] = None

    # Estado
    status: StatusTicket = StatusTicket.ABERTO
    prioridade: PrioridadeTicket = PrioridadeTicket.MEDIA
    responsavel_id: Optional[int] = None

    # Timestamps
    data_criacao: datetime = field(default_factory=agora)
    data_atualizacao: datetime = field(default_factory=agora)
    data_resolucao: Optional[datetime] = None

    # Coleções auxiliares
    anexos: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    comentarios: Tuple[ComentarioEntity, ...] = ()

    def validar_transicao(
        self,
        novo_status: StatusTicket,
        perfil: PerfilUsuario,
    ) -> None:
        """
        Valida a mudança de status contra a máquina de estados.

        Regras:
        - Manter o mesmo status é sempre permitido (idempotente)
        - Demais transições seguem TRANSICOES_STATUS
        - FECHADO → ABERTO apenas para ADMIN

        Raises:
            BusinessRuleViolationError: Se transição inválida
            PermissionDeniedError: Se reabertura por perfil não ADMIN
        """
        if novo_status == self.status:
            return

        if novo_status not in TRANSICOES_STATUS[self.status]:
            raise BusinessRuleViolationError(
                f"Transição de {self.status.rotulo} para {novo_status.rotulo} "
                f"não é permitida",
                rule="transicao_status_invalida",
            )

        if self.status == StatusTicket.FECHADO and perfil != PerfilUsuario.ADMIN:
            raise PermissionDeniedError(
                "Apenas administradores podem reabrir tickets fechados",
                acao="reabrir_ticket",
            )

    def com_tag(self, tag: str) -> "TicketEntity":
        """Retorna snapshot com a tag adicionada (ignora duplicatas)."""
        tag_limpa = tag.strip().lower()
        if not tag_limpa or tag_limpa in self.tags:
            return self
        return replace(self, tags=self.tags + (tag_limpa,))

    def com_anexo(self, anexo_id: str) -> "TicketEntity":
        """Retorna snapshot com o identificador de anexo adicionado."""
        return replace(self, anexos=self.anexos + (anexo_id,))

    def com_comentarios(self, comentarios) -> "TicketEntity":
        """Retorna snapshot com os comentários hidratados."""
        return replace(self, comentarios=tuple(comentarios))

    @property
    def esta_atribuido(self) -> bool:
        """Verifica se ticket tem responsável."""
        return self.responsavel_id is not None

    @property
    def esta_resolvido(self) -> bool:
        return self.status.encerra_atendimento

    @property
    def data_criacao_formatada(self) -> str:
        return self.data_criacao.strftime(FORMATO_DATA_HORA)

    @property
    def data_atualizacao_formatada(self) -> str:
        return self.data_atualizacao.strftime(FORMATO_DATA_HORA)

    @property
    def tempo_aberto_horas(self) -> int:
        """
        Horas inteiras desde a abertura.

        Conta até a data de resolução, ou até agora se o ticket
        ainda não foi resolvido.
        """
        fim = self.data_resolucao or agora()
        delta = como_utc(fim) - como_utc(self.data_criacao)
        return int(delta.total_seconds() // 3600)

    def __repr__(self) -> str:
        return (
            f"TicketEntity("
            f"id={self.id}, "
            f"codigo={self.codigo}, "
            f"titulo='{self.titulo[:20]}', "
            f"status={self.status.name}, "
            f"prioridade={self.prioridade.name}"
            f")"
        )

    def __eq__(self, other: object) -> bool:
        """Comparação por ID (identidade de entidade)."""
        if not isinstance(other, TicketEntity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(("ticket", self.id))
