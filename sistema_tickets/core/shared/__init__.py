"""
Shared Domain Components.

Contém componentes compartilhados entre todos os domínios:
- Exceções de domínio
- Resultado de operações (variante com tag)
- Interfaces (Ports)
"""

from .exceptions import (
    DomainException,
    AuthenticationRequiredError,
    ValidationError,
    PermissionDeniedError,
    EntityNotFoundError,
    BusinessRuleViolationError,
    RepositoryError,
    ExportacaoError,
)
from .interfaces import Exportador
from .results import ResultadoOperacao, TipoResultado

__all__ = [
    "DomainException",
    "AuthenticationRequiredError",
    "ValidationError",
    "PermissionDeniedError",
    "EntityNotFoundError",
    "BusinessRuleViolationError",
    "RepositoryError",
    "ExportacaoError",
    "Exportador",
    "ResultadoOperacao",
    "TipoResultado",
]
