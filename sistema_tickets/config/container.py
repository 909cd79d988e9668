"""
Dependency Injection Container.

Configura e gerencia todas as dependências da aplicação.
Usa dependency-injector para lazy-loading e injeção automática.

Benefícios:
- Dependências explícitas
- Testabilidade (fácil trocar repositórios por fakes)
- Lazy-loading (criado sob demanda)

Padrões:
- Singleton: Uma instância para toda app (conexão, repositories, exportador)
- Factory: Nova instância por chamada (fachada, que monta seus use cases)
- Configuration: Alias do banco e diretório de exportação
"""

from dependency_injector import containers, providers
from typing import Optional

from sistema_tickets.adapters.django_app.shared.database import DjangoDatabaseAdapter
from sistema_tickets.adapters.django_app.tickets.repositories import (
    DjangoCategoriaRepository,
    DjangoComentarioRepository,
    DjangoEstatisticasRepository,
    DjangoTicketRepository,
    DjangoUsuarioRepository,
)
from sistema_tickets.adapters.exportacao.json_exporter import JsonExportador
from sistema_tickets.core.tickets.ports import (
    InMemoryCategoriaRepository,
    InMemoryComentarioRepository,
    InMemoryEstatisticasRepository,
    InMemoryTicketRepository,
    InMemoryUsuarioRepository,
)
from sistema_tickets.core.tickets.sistema import SistemaTickets

CONFIG_PADRAO = {
    "db_alias": "default",
    "export_dir": "data",
}


class Container(containers.DeclarativeContainer):
    """
    Container principal de Dependency Injection.

    Organização:
    - Configuration: Valores vindos do Django settings
    - Infrastructure: Conexão com o banco, exportador
    - Repositories: Persistência (SQL)
    - Fachada: SistemaTickets

    Example:
        from sistema_tickets.config.container import get_container

        container = get_container()
        sistema = container.sistema_tickets()
        sistema.autenticar(1)
        print(sistema.criar_ticket("Impressora", "Sem toner", "3"))
    """

    # =========================================================================
    # Configuration
    # =========================================================================

    config = providers.Configuration(default=CONFIG_PADRAO)

    # =========================================================================
    # Infrastructure
    # =========================================================================

    database = providers.Singleton(
        DjangoDatabaseAdapter,
        alias=config.db_alias,
    )

    exportador = providers.Singleton(
        JsonExportador,
        diretorio=config.export_dir,
    )

    # =========================================================================
    # Repositories (Singleton - uma instância por app)
    # =========================================================================

    ticket_repository = providers.Singleton(DjangoTicketRepository, db=database)
    comentario_repository = providers.Singleton(DjangoComentarioRepository, db=database)
    usuario_repository = providers.Singleton(DjangoUsuarioRepository, db=database)
    categoria_repository = providers.Singleton(DjangoCategoriaRepository, db=database)
    estatisticas_repository = providers.Singleton(DjangoEstatisticasRepository, db=database)

    # =========================================================================
    # Fachada (Factory - uma sessão por instância)
    # =========================================================================

    sistema_tickets = providers.Factory(
        SistemaTickets,
        ticket_repo=ticket_repository,
        comentario_repo=comentario_repository,
        usuario_repo=usuario_repository,
        categoria_repo=categoria_repository,
        estatisticas_repo=estatisticas_repository,
        exportador=exportador,
    )


# =============================================================================
# Container Global (Singleton)
# =============================================================================

_container: Optional[Container] = None


def get_container() -> Container:
    """
    Retorna instância global do container.

    Cria se não existir (lazy initialization), inicializando o Django
    e lendo TICKETS_DB_ALIAS e TICKETS_EXPORT_DIR do settings.

    Returns:
        Container configurado
    """
    global _container

    if _container is None:
        from django.conf import settings
        from sistema_tickets.config import configurar

        configurar()

        _container = Container()
        _container.config.from_dict({
            "db_alias": getattr(settings, "TICKETS_DB_ALIAS", CONFIG_PADRAO["db_alias"]),
            "export_dir": str(
                getattr(settings, "TICKETS_EXPORT_DIR", CONFIG_PADRAO["export_dir"])
            ),
        })

    return _container


def reset_container() -> None:
    """
    Reset do container (para testes).

    Permite criar novo container limpo.
    """
    global _container
    _container = None


# =============================================================================
# Testing Container
# =============================================================================

class TestingContainer(containers.DeclarativeContainer):
    """
    Container para testes sem banco.

    Usa InMemory implementations para testes rápidos.

    Example:
        container = TestingContainer()
        container.config.export_dir.from_value(str(tmp_path))
        container.usuario_repository().adicionar(admin)
        sistema = container.sistema_tickets(usuario_logado=admin)
    """

    config = providers.Configuration(default=CONFIG_PADRAO)

    exportador = providers.Singleton(
        JsonExportador,
        diretorio=config.export_dir,
    )

    # InMemory implementations
    ticket_repository = providers.Singleton(InMemoryTicketRepository)
    comentario_repository = providers.Singleton(
        InMemoryComentarioRepository,
        ticket_repo=ticket_repository,
    )
    usuario_repository = providers.Singleton(InMemoryUsuarioRepository)
    categoria_repository = providers.Singleton(InMemoryCategoriaRepository)
    estatisticas_repository = providers.Singleton(
        InMemoryEstatisticasRepository,
        ticket_repo=ticket_repository,
    )

    sistema_tickets = providers.Factory(
        SistemaTickets,
        ticket_repo=ticket_repository,
        comentario_repo=comentario_repository,
        usuario_repo=usuario_repository,
        categoria_repo=categoria_repository,
        estatisticas_repo=estatisticas_repository,
        exportador=exportador,
    )
