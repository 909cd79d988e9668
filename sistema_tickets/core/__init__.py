"""
Core - Camada de domínio do Sistema de Tickets.

Regras de negócio puras, sem Django:
- shared: Exceções, ResultadoOperacao e o port de exportação
- tickets: Entidades, políticas, ports, use cases e a fachada

Tudo aqui é testável com os repositórios InMemory de tickets/ports.py.
"""
