"""
Políticas de Autorização.

Predicados puros sobre o usuário logado. Não acessam banco e não
lançam exceções: quem decide o que fazer com um "não" é o use case.

Regras:
- ADMIN e TECNICO são perfis privilegiados
- Privilegiados veem e editam qualquer ticket
- USUARIO vê e edita apenas os tickets que abriu
- Apenas privilegiados podem assumir (ou atribuir) tickets
"""

from typing import Optional

from .entities import PerfilUsuario, TicketEntity, UsuarioEntity


PERFIS_PRIVILEGIADOS = frozenset({PerfilUsuario.ADMIN, PerfilUsuario.TECNICO})


def eh_privilegiado(usuario: UsuarioEntity) -> bool:
    return usuario.perfil in PERFIS_PRIVILEGIADOS


def pode_editar_ticket(usuario: UsuarioEntity, ticket: TicketEntity) -> bool:
    """Privilegiados editam qualquer ticket; USUARIO só os próprios."""
    return eh_privilegiado(usuario) or ticket.solicitante_id == usuario.id


def pode_assumir_ticket(usuario: UsuarioEntity) -> bool:
    return eh_privilegiado(usuario)


def escopo_visibilidade(usuario: UsuarioEntity) -> Optional[int]:
    """
    Filtro de solicitante aplicado às listagens.

    Returns:
        None para perfis privilegiados (sem restrição), ou o ID do
        próprio usuário para o perfil USUARIO.
    """
    if eh_privilegiado(usuario):
        return None
    return usuario.id
