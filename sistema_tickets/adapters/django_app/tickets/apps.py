"""
Configuração do Django App para Tickets.

Registra o esquema (models e migrations) do sistema de tickets.
"""

from django.apps import AppConfig


class TicketsConfig(AppConfig):
    """Configuração do app Tickets."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'sistema_tickets.adapters.django_app.tickets'
    label = 'tickets'
    verbose_name = 'Sistema de Tickets'
