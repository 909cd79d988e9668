"""
Mappers para conversão de linhas do banco em Entities (Core).

Responsabilidades:
- Converter linha de tickets → TicketEntity
- Converter linha de usuarios → UsuarioEntity
- Converter linha de comentarios → ComentarioEntity
- Converter linha de categorias → CategoriaEntity

Uma linha é um dict coluna → valor, como devolvido pelo
DjangoDatabaseAdapter. Os mappers tratam:
- Colunas anuláveis (responsavel_id, data_resolucao, codigo, ...)
- Enums gravados pelo nome simbólico (nome desconhecido = falha do banco)
- Datas que chegam como datetime com ou sem fuso, ou como texto ISO

Princípios:
- Mappers são stateless
- Não contêm lógica de negócio
- Tratam apenas conversão de dados
"""

from datetime import datetime
from typing import Any, Dict, Optional

from django.utils.dateparse import parse_datetime

from sistema_tickets.core.shared.exceptions import RepositoryError
from sistema_tickets.core.tickets.entities import (
    CategoriaEntity,
    ComentarioEntity,
    PerfilUsuario,
    PrioridadeTicket,
    StatusTicket,
    TicketEntity,
    TipoComentario,
    UsuarioEntity,
    como_utc,
)

Row = Dict[str, Any]


def enum_por_nome(enum_cls, valor: Any, coluna: str):
    """Converte nome simbólico gravado no banco para o enum."""
    try:
        return enum_cls[valor]
    except KeyError:
        raise RepositoryError(
            f"Valor desconhecido na coluna {coluna}: {valor}",
            operacao="mapear",
        )


def _datetime(valor: Any, coluna: str) -> Optional[datetime]:
    if valor is None:
        return None

    if isinstance(valor, str):
        convertido = parse_datetime(valor)
        if convertido is None:
            raise RepositoryError(
                f"Data inválida na coluna {coluna}: {valor}",
                operacao="mapear",
            )
        valor = convertido

    return como_utc(valor)


def _int_opcional(valor: Any) -> Optional[int]:
    return int(valor) if valor is not None else None


class TicketMapper:
    """
    Mapper para conversão de linha da tabela tickets em TicketEntity.

    As coleções auxiliares (anexos, tags, comentários) não têm colunas
    e começam vazias; comentários são hidratados sob demanda.
    """

    COLUNAS = (
        "id",
        "codigo",
        "titulo",
        "descricao",
        "status",
        "prioridade",
        "categoria_id",
        "solicitante_id",
        "responsavel_id",
        "data_criacao",
        "data_atualizacao",
        "data_resolucao",
    )

    @staticmethod
    def to_entity(row: Row) -> TicketEntity:
        """
        Converte linha para TicketEntity.

        Args:
            row: Linha da tabela tickets

        Returns:
            Entidade de domínio

        Raises:
            RepositoryError: Se status/prioridade desconhecidos
        """
        return TicketEntity(
            id=int(row["id"]),
            codigo=row.get("codigo"),
            titulo=row["titulo"],
            descricao=row["descricao"],
            status=enum_por_nome(StatusTicket, row["status"], "status"),
            prioridade=enum_por_nome(PrioridadeTicket, row["prioridade"], "prioridade"),
            categoria_id=int(row["categoria_id"]),
            solicitante_id=int(row["solicitante_id"]),
            responsavel_id=_int_opcional(row.get("responsavel_id")),
            data_criacao=_datetime(row["data_criacao"], "data_criacao"),
            data_atualizacao=_datetime(row["data_atualizacao"], "data_atualizacao"),
            data_resolucao=_datetime(row.get("data_resolucao"), "data_resolucao"),
        )

    @staticmethod
    def horas_entre(data_criacao: Any, data_resolucao: Any) -> int:
        """Horas inteiras entre os valores crus de duas colunas de data."""
        delta = (
            _datetime(data_resolucao, "data_resolucao")
            - _datetime(data_criacao, "data_criacao")
        )
        return int(delta.total_seconds() // 3600)


class UsuarioMapper:
    COLUNAS = (
        "id",
        "nome",
        "email",
        "perfil",
        "departamento_id",
        "ativo",
        "data_criacao",
    )

    @staticmethod
    def to_entity(row: Row) -> UsuarioEntity:
        return UsuarioEntity(
            id=int(row["id"]),
            nome=row["nome"],
            email=row["email"],
            perfil=enum_por_nome(PerfilUsuario, row["perfil"], "perfil"),
            departamento_id=_int_opcional(row.get("departamento_id")),
            ativo=bool(row["ativo"]),
            data_criacao=_datetime(row.get("data_criacao"), "data_criacao"),
        )


class ComentarioMapper:
    COLUNAS = ("id", "ticket_id", "usuario_id", "conteudo", "tipo", "data")

    @staticmethod
    def to_entity(row: Row) -> ComentarioEntity:
        return ComentarioEntity(
            id=int(row["id"]),
            ticket_id=int(row["ticket_id"]),
            usuario_id=int(row["usuario_id"]),
            conteudo=row["conteudo"],
            tipo=enum_por_nome(TipoComentario, row["tipo"], "tipo"),
            data=_datetime(row["data"], "data"),
        )


class CategoriaMapper:
    COLUNAS = ("id", "nome", "descricao", "cor", "ativa")

    @staticmethod
    def to_entity(row: Row) -> CategoriaEntity:
        return CategoriaEntity(
            id=int(row["id"]),
            nome=row["nome"],
            descricao=row.get("descricao") or "",
            cor=row.get("cor") or CategoriaEntity.cor,
            ativa=bool(row["ativa"]),
        )
