"""
Sistema de Tickets - Suporte Técnico.

Camada de domínio para gestão de tickets de suporte sobre um banco
relacional, em Arquitetura Hexagonal:
- core: Regras de negócio puras (sem Django)
- adapters: Banco (SQL via Django) e exportação JSON
- config: Settings e container de injeção de dependências
"""

__version__ = "1.0.0"
