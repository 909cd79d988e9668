"""Infraestrutura compartilhada entre os repositórios SQL."""

from .database import DatabaseAdapter, DatabaseConfig, DjangoDatabaseAdapter
from .repository import BaseSqlRepository

__all__ = [
    "DatabaseAdapter",
    "DatabaseConfig",
    "DjangoDatabaseAdapter",
    "BaseSqlRepository",
]
