"""
Configuração do Sistema de Tickets.

Módulos:
- settings: Configurações Django (banco, logging, exportação)
- container: Dependency Injection Container
"""

import os


def configurar(settings_module: str = "sistema_tickets.config.settings") -> None:
    """
    Inicializa o Django com o módulo de settings informado.

    Necessário antes de usar o container fora de um processo Django
    (scripts, shell). Chamadas repetidas não têm efeito.
    """
    import django
    from django.conf import settings

    if settings.configured:
        return

    os.environ.setdefault("DJANGO_SETTINGS_MODULE", settings_module)
    django.setup()


__all__ = ("configurar",)
