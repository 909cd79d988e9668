"""
App Django de Tickets.

Models (esquema), migrations, mappers de linha → entidade e
repositórios SQL que implementam os Ports do Core.
"""
