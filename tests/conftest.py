"""
Configurações globais do Pytest para o Sistema de Tickets.

Este arquivo é carregado automaticamente pelo pytest e
fornece fixtures e configurações compartilhadas:
- Django configurado com SQLite em memória (pytest-django cria o
  banco de teste e aplica as migrations, incluindo o gerador de código)
- Usuários e categorias de exemplo como entidades de domínio
"""

from datetime import datetime, timezone

import pytest

from sistema_tickets.core.tickets.entities import (
    CategoriaEntity,
    PerfilUsuario,
    UsuarioEntity,
)


def pytest_configure(config):
    """Configura Django antes dos testes."""
    import django
    from django.conf import settings

    config.addinivalue_line(
        "markers", "integration: testes que passam pelo container e pelo banco"
    )

    if not settings.configured:
        settings.configure(
            DEBUG=False,
            SECRET_KEY='testes',
            DATABASES={
                'default': {
                    'ENGINE': 'django.db.backends.sqlite3',
                    'NAME': ':memory:',
                }
            },
            INSTALLED_APPS=[
                'sistema_tickets.adapters.django_app.tickets',
            ],
            DEFAULT_AUTO_FIELD='django.db.models.BigAutoField',
            USE_TZ=True,
            TIME_ZONE='America/Sao_Paulo',
            TICKETS_DB_ALIAS='default',
            TICKETS_EXPORT_DIR='data',
        )
        django.setup()


# =============================================================================
# Entidades de exemplo
# =============================================================================

@pytest.fixture
def admin():
    return UsuarioEntity(
        id=1,
        nome="Ana Administradora",
        email="ana@empresa.com",
        perfil=PerfilUsuario.ADMIN,
    )


@pytest.fixture
def tecnico():
    return UsuarioEntity(
        id=2,
        nome="Bruno Técnico",
        email="bruno@empresa.com",
        perfil=PerfilUsuario.TECNICO,
        departamento_id=1,
    )


@pytest.fixture
def usuario():
    """Usuário comum (solicitante)."""
    return UsuarioEntity(
        id=3,
        nome="Carla Souza",
        email="carla@empresa.com",
        perfil=PerfilUsuario.USUARIO,
        departamento_id=2,
    )


@pytest.fixture
def outro_usuario():
    return UsuarioEntity(
        id=4,
        nome="Diego Lima",
        email="diego@empresa.com",
        perfil=PerfilUsuario.USUARIO,
    )


@pytest.fixture
def tecnico_inativo():
    return UsuarioEntity(
        id=5,
        nome="Elaine Antiga",
        email="elaine@empresa.com",
        perfil=PerfilUsuario.TECNICO,
        ativo=False,
    )


@pytest.fixture
def todos_usuarios(admin, tecnico, usuario, outro_usuario, tecnico_inativo):
    return [admin, tecnico, usuario, outro_usuario, tecnico_inativo]


@pytest.fixture
def categoria():
    return CategoriaEntity(id=1, nome="Hardware", descricao="Equipamentos", cor="#e74c3c")


@pytest.fixture
def categoria_inativa():
    return CategoriaEntity(id=2, nome="Legado", ativa=False)


@pytest.fixture
def instante_fixo():
    return datetime(2026, 1, 5, 8, 0, tzinfo=timezone.utc)
