"""
Exceções de Domínio do Sistema de Tickets.

Este módulo define exceções específicas do domínio que permitem
comunicar erros de forma clara e tipada entre as camadas.

Hierarquia:
    DomainException (base)
    ├── AuthenticationRequiredError (sem usuário logado)
    ├── ValidationError (validação de entrada)
    ├── PermissionDeniedError (perfil sem permissão)
    ├── EntityNotFoundError (entidade não existe)
    ├── BusinessRuleViolationError (regra de negócio violada)
    ├── RepositoryError (falha do banco de dados)
    └── ExportacaoError (falha ao gravar arquivo de exportação)

Nenhuma destas exceções atravessa a fachada SistemaTickets: lá elas
são convertidas em ResultadoOperacao (ver results.py).
"""


class DomainException(Exception):
    """
    Exceção base para todos os erros de domínio.

    Todas as exceções específicas do domínio devem herdar desta classe.
    Isso permite capturar qualquer erro de domínio de forma genérica.

    Example:
        try:
            service.execute(...)
        except DomainException as e:
            logger.error(f"Erro de domínio: {e}")
    """

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict:
        """Serializa exceção para dicionário."""
        return {
            "error": self.code,
            "message": self.message,
        }


class AuthenticationRequiredError(DomainException):
    """
    Operação exige um usuário logado e nenhum foi informado.

    Example:
        if usuario is None:
            raise AuthenticationRequiredError()
    """

    def __init__(self, message: str = "Usuário não autenticado"):
        super().__init__(message, "AUTHENTICATION_REQUIRED")


class ValidationError(DomainException):
    """
    Erro de validação de dados de entrada.

    Lançada quando dados fornecidos não atendem aos requisitos
    mínimos para processamento.

    Example:
        if not titulo.strip():
            raise ValidationError("Título e descrição são obrigatórios", field="titulo")
    """

    def __init__(self, message: str, field: str = None):
        self.field = field
        code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class PermissionDeniedError(DomainException):
    """
    Perfil do usuário logado não permite a operação.

    Example:
        if not pode_editar_ticket(usuario, ticket):
            raise PermissionDeniedError(
                "Sem permissão para editar este ticket",
                acao="editar_ticket",
            )
    """

    def __init__(self, message: str, acao: str = None):
        self.acao = acao
        super().__init__(message, "PERMISSION_DENIED")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.acao:
            result["acao"] = self.acao
        return result


class EntityNotFoundError(DomainException):
    """
    Entidade não encontrada no repositório.

    Lançada quando uma busca por ID não retorna resultado.

    Example:
        ticket = repo.obter_por_id(ticket_id)
        if not ticket:
            raise EntityNotFoundError("Ticket não encontrado", "Ticket", ticket_id)
    """

    def __init__(self, message: str, entity_type: str = None, entity_id=None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(message, "ENTITY_NOT_FOUND")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.entity_type:
            result["entity_type"] = self.entity_type
        if self.entity_id is not None:
            result["entity_id"] = self.entity_id
        return result


class BusinessRuleViolationError(DomainException):
    """
    Violação de regra de negócio.

    Lançada quando uma operação viola uma regra de negócio
    estabelecida no domínio, como uma transição de status
    fora da máquina de estados.
    """

    def __init__(self, message: str, rule: str = None):
        self.rule = rule
        super().__init__(message, "BUSINESS_RULE_VIOLATION")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.rule:
            result["rule"] = self.rule
        return result


class RepositoryError(DomainException):
    """
    Falha do banco de dados subjacente.

    A mensagem carrega o texto do driver para diagnóstico. Também é
    usada quando uma linha traz um valor de enum desconhecido.
    """

    def __init__(self, message: str, operacao: str = None):
        self.operacao = operacao
        super().__init__(message, "REPOSITORY_ERROR")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.operacao:
            result["operacao"] = self.operacao
        return result


class ExportacaoError(DomainException):
    """Falha ao gravar um dos arquivos de exportação."""

    def __init__(self, message: str, arquivo: str = None):
        self.arquivo = arquivo
        super().__init__(message, "EXPORT_ERROR")
