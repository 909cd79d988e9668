"""
Resultado de Operações de Escrita.

As operações de escrita do domínio nunca lançam exceções para quem
as chama: devolvem um ResultadoOperacao, uma variante com tag
(TipoResultado) que carrega também a mensagem legada em português.

A mensagem é contrato de compatibilidade:
- Falhas começam com "Erro"
- Qualquer outra mensagem indica sucesso

Example:
    resultado = sistema.criar_ticket("Impressora", "Sem toner", "3")
    if resultado.sucesso:
        ticket_id = resultado.valor
    print(resultado)  # "Ticket criado com sucesso! ID: 42"
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .exceptions import (
    DomainException,
    AuthenticationRequiredError,
    ValidationError,
    PermissionDeniedError,
    EntityNotFoundError,
    BusinessRuleViolationError,
    RepositoryError,
)


class TipoResultado(Enum):
    """Tag do resultado de uma operação."""

    OK = "ok"
    INVALIDO = "invalido"
    NAO_AUTENTICADO = "nao_autenticado"
    PROIBIDO = "proibido"
    NAO_ENCONTRADO = "nao_encontrado"
    REGRA_VIOLADA = "regra_violada"
    ERRO_ARMAZENAMENTO = "erro_armazenamento"


_TIPOS_POR_EXCECAO = (
    (AuthenticationRequiredError, TipoResultado.NAO_AUTENTICADO),
    (ValidationError, TipoResultado.INVALIDO),
    (PermissionDeniedError, TipoResultado.PROIBIDO),
    (EntityNotFoundError, TipoResultado.NAO_ENCONTRADO),
    (BusinessRuleViolationError, TipoResultado.REGRA_VIOLADA),
    (RepositoryError, TipoResultado.ERRO_ARMAZENAMENTO),
)


@dataclass(frozen=True)
class ResultadoOperacao:
    """
    Resultado de uma operação de escrita.

    Attributes:
        tipo: Tag do resultado
        mensagem: Mensagem de uma linha, legível por humanos
        valor: Valor produzido em caso de sucesso (ex: ID criado)
    """

    tipo: TipoResultado
    mensagem: str
    valor: Optional[Any] = None

    @classmethod
    def ok(cls, mensagem: str, valor: Any = None) -> "ResultadoOperacao":
        return cls(tipo=TipoResultado.OK, mensagem=mensagem, valor=valor)

    @classmethod
    def de_excecao(
        cls,
        exc: DomainException,
        operacao: str,
    ) -> "ResultadoOperacao":
        """
        Converte exceção de domínio em resultado de falha.

        Falhas de banco mantêm o formato legado "Erro ao <operação>: <msg>";
        as demais usam "Erro: <msg>".

        Args:
            exc: Exceção capturada na fronteira
            operacao: Descrição da operação (ex: "criar ticket")
        """
        tipo = TipoResultado.INVALIDO
        for classe, tipo_mapeado in _TIPOS_POR_EXCECAO:
            if isinstance(exc, classe):
                tipo = tipo_mapeado
                break

        if tipo == TipoResultado.ERRO_ARMAZENAMENTO:
            mensagem = f"Erro ao {operacao}: {exc.message}"
        else:
            mensagem = f"Erro: {exc.message}"

        # Mensagem sempre em uma linha
        return cls(tipo=tipo, mensagem=" ".join(mensagem.split()))

    @property
    def sucesso(self) -> bool:
        return self.tipo == TipoResultado.OK

    def __str__(self) -> str:
        return self.mensagem

    def to_dict(self) -> dict:
        return {
            "tipo": self.tipo.value,
            "mensagem": self.mensagem,
            "valor": self.valor,
        }
