"""
Domínio de Tickets - Suporte Técnico.

Este módulo contém toda a lógica de negócio relacionada a tickets
de suporte técnico, incluindo:
- Entidades (TicketEntity, UsuarioEntity, ComentarioEntity, CategoriaEntity)
- Enumerações (StatusTicket, PrioridadeTicket, PerfilUsuario, TipoComentario)
- Políticas de autorização por perfil
- Use Cases (CriarTicket, AtualizarStatus, AtribuirResponsavel, ...)
- DTOs (Input/Output Data Transfer Objects)
- Ports (Interfaces para repositórios)
- Fachada SistemaTickets

Características do Domínio:
- Máquina de estados do status validada na entidade
- Escopo de visibilidade por perfil aplicado nas consultas
- Data de resolução registrada uma única vez
"""

from .entities import (
    TicketEntity,
    UsuarioEntity,
    ComentarioEntity,
    CategoriaEntity,
    StatusTicket,
    PrioridadeTicket,
    PerfilUsuario,
    TipoComentario,
)
from .dtos import (
    CriarTicketInputDTO,
    AtualizarStatusInputDTO,
    AtribuirResponsavelInputDTO,
    AdicionarComentarioInputDTO,
    TicketOutputDTO,
    UsuarioOutputDTO,
    CategoriaOutputDTO,
    ComentarioOutputDTO,
    EstatisticasOutputDTO,
)
from .ports import (
    TicketRepository,
    ComentarioRepository,
    UsuarioRepository,
    CategoriaRepository,
    EstatisticasRepository,
)
from .use_cases import (
    CriarTicketService,
    ObterTicketService,
    ListarTicketsService,
    BuscarTicketsService,
    FiltrarTicketsService,
    AtualizarStatusService,
    AtribuirResponsavelService,
    AdicionarComentarioService,
    EstatisticasService,
    ExportarDadosService,
)
from .sistema import SistemaTickets

__all__ = [
    # Entities
    "TicketEntity",
    "UsuarioEntity",
    "ComentarioEntity",
    "CategoriaEntity",
    "StatusTicket",
    "PrioridadeTicket",
    "PerfilUsuario",
    "TipoComentario",
    # DTOs
    "CriarTicketInputDTO",
    "AtualizarStatusInputDTO",
    "AtribuirResponsavelInputDTO",
    "AdicionarComentarioInputDTO",
    "TicketOutputDTO",
    "UsuarioOutputDTO",
    "CategoriaOutputDTO",
    "ComentarioOutputDTO",
    "EstatisticasOutputDTO",
    # Ports
    "TicketRepository",
    "ComentarioRepository",
    "UsuarioRepository",
    "CategoriaRepository",
    "EstatisticasRepository",
    # Use Cases
    "CriarTicketService",
    "ObterTicketService",
    "ListarTicketsService",
    "BuscarTicketsService",
    "FiltrarTicketsService",
    "AtualizarStatusService",
    "AtribuirResponsavelService",
    "AdicionarComentarioService",
    "EstatisticasService",
    "ExportarDadosService",
    # Fachada
    "SistemaTickets",
]
