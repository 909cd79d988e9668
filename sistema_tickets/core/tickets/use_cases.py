"""
Use Cases (Application Services) do Domínio de Tickets.

Este módulo contém os casos de uso da aplicação, que orquestram
a lógica de negócio coordenando entidades, políticas e repositórios.

Use Cases implementados:
- CriarTicketService: Abre novo ticket
- ObterTicketService: Obtém ticket específico (opcionalmente com comentários)
- ListarTicketsService: Lista tickets visíveis ao usuário
- BuscarTicketsService: Busca textual com escopo
- FiltrarTicketsService: Filtro por status ou prioridade com escopo
- AtualizarStatusService: Muda status respeitando a máquina de estados
- AtribuirResponsavelService: Atribui técnico responsável
- AdicionarComentarioService: Registra comentário
- ListarComentariosService: Comentários de um ticket
- ListarUsuariosService / ListarCategoriasService: Consultas de apoio
- EstatisticasService: Painel de estatísticas
- ExportarDadosService: Exportação das coleções

Ordem das verificações nas operações de escrita:
    autenticação → conversão de IDs → existência → permissão → regra

Use cases lançam DomainException; a conversão para mensagens
é responsabilidade da fachada SistemaTickets.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from sistema_tickets.core.shared.exceptions import (
    AuthenticationRequiredError,
    BusinessRuleViolationError,
    EntityNotFoundError,
    ExportacaoError,
    PermissionDeniedError,
    RepositoryError,
    ValidationError,
)
from sistema_tickets.core.shared.interfaces import Exportador

from .dtos import (
    AdicionarComentarioInputDTO,
    AtribuirResponsavelInputDTO,
    AtualizarStatusInputDTO,
    CategoriaOutputDTO,
    CriarTicketInputDTO,
    EstatisticasOutputDTO,
    TicketOutputDTO,
    UsuarioOutputDTO,
)
from .entities import (
    CategoriaEntity,
    ComentarioEntity,
    PrioridadeTicket,
    StatusTicket,
    TicketEntity,
    TipoComentario,
    UsuarioEntity,
)
from .politicas import escopo_visibilidade, pode_assumir_ticket, pode_editar_ticket
from .ports import (
    CategoriaRepository,
    ComentarioRepository,
    EstatisticasRepository,
    TicketRepository,
    UsuarioRepository,
)

logger = logging.getLogger(__name__)

# Faixa de INTEGER/BIGINT com sinal (64 bits)
ID_MINIMO = -(2 ** 63)
ID_MAXIMO = 2 ** 63 - 1


def exigir_usuario(usuario: Optional[UsuarioEntity]) -> UsuarioEntity:
    """
    Garante que há usuário logado.

    Raises:
        AuthenticationRequiredError: Se usuario é None
    """
    if usuario is None:
        raise AuthenticationRequiredError()
    return usuario


def converter_id(valor: Any, campo: str, rotulo: str) -> int:
    """
    Converte ID recebido como texto para inteiro.

    Args:
        valor: Valor cru (ex: " 42 ")
        campo: Nome do campo para o código do erro (ex: "ticket_id")
        rotulo: Rótulo usado na mensagem (ex: "ID do ticket")

    Raises:
        ValidationError: "<rótulo> inválido: <valor>"
    """
    try:
        convertido = int(str(valor).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{rotulo} inválido: {valor}", field=campo)

    if not ID_MINIMO <= convertido <= ID_MAXIMO:
        raise ValidationError(f"{rotulo} inválido: {valor}", field=campo)
    return convertido


def _obter_ticket(ticket_repo: TicketRepository, ticket_id: int) -> TicketEntity:
    ticket = ticket_repo.obter_por_id(ticket_id)
    if not ticket:
        raise EntityNotFoundError(
            "Ticket não encontrado",
            entity_type="Ticket",
            entity_id=ticket_id,
        )
    return ticket


def _converter_enum(enum_cls, valor, campo: str):
    try:
        return enum_cls.from_string(valor)
    except ValueError as exc:
        raise ValidationError(str(exc), field=campo)


class CriarTicketService:
    """
    Use Case: Abrir um novo ticket.

    Fluxo:
    1. Exigir usuário logado
    2. Validar título e descrição (não vazios após trim)
    3. Validar categoria (ID numérico, existente e ativa)
    4. Inserir ticket ABERTO, prioridade MEDIA, solicitante = usuário logado
    5. Retornar o ID gerado pelo banco

    Título e descrição são gravados como recebidos (sem trim).

    Example:
        service = CriarTicketService(ticket_repo, categoria_repo)
        input_dto = CriarTicketInputDTO(
            titulo="Impressora sem toner",
            descricao="A impressora do 2º andar parou",
            categoria_id="3",
        )
        ticket_id = service.execute(input_dto, usuario_logado)
    """

    def __init__(
        self,
        ticket_repo: TicketRepository,
        categoria_repo: CategoriaRepository,
    ):
        """
        Inicializa service com dependências injetadas.

        Args:
            ticket_repo: Repositório para persistência
            categoria_repo: Repositório para validar a categoria
        """
        self.ticket_repo = ticket_repo
        self.categoria_repo = categoria_repo

    def execute(
        self,
        input_dto: CriarTicketInputDTO,
        usuario: Optional[UsuarioEntity],
    ) -> int:
        """
        Executa abertura do ticket.

        Returns:
            ID do ticket criado

        Raises:
            AuthenticationRequiredError: Sem usuário logado
            ValidationError: Título/descrição vazios ou categoria inválida
            EntityNotFoundError: Categoria inexistente
            BusinessRuleViolationError: Categoria inativa
            RepositoryError: Falha do banco
        """
        usuario = exigir_usuario(usuario)

        if not (input_dto.titulo or "").strip() or not (input_dto.descricao or "").strip():
            raise ValidationError("Título e descrição são obrigatórios", field="titulo")

        categoria_id = converter_id(input_dto.categoria_id, "categoria_id", "ID da categoria")
        categoria = self.categoria_repo.obter_por_id(categoria_id)
        if not categoria:
            raise EntityNotFoundError(
                "Categoria não encontrada",
                entity_type="Categoria",
                entity_id=categoria_id,
            )
        if not categoria.ativa:
            raise BusinessRuleViolationError("Categoria inativa", rule="categoria_inativa")

        ticket_id = self.ticket_repo.inserir(
            titulo=input_dto.titulo,
            descricao=input_dto.descricao,
            categoria_id=categoria_id,
            solicitante_id=usuario.id,
            prioridade=PrioridadeTicket.MEDIA,
        )

        logger.info(f"Ticket {ticket_id} criado por usuário {usuario.id}")
        return ticket_id


class ObterTicketService:
    """
    Use Case: Obter um ticket específico.

    A busca por ID não aplica escopo de visibilidade.
    """

    def __init__(
        self,
        ticket_repo: TicketRepository,
        comentario_repo: Optional[ComentarioRepository] = None,
    ):
        self.ticket_repo = ticket_repo
        self.comentario_repo = comentario_repo

    def execute(self, ticket_id: Any, com_comentarios: bool = False) -> TicketEntity:
        """
        Obtém ticket por ID.

        Args:
            ticket_id: ID do ticket (texto ou inteiro)
            com_comentarios: Hidrata os comentários do ticket

        Raises:
            ValidationError: Se o ID não é numérico
            EntityNotFoundError: Se ticket não existe
        """
        ticket = _obter_ticket(
            self.ticket_repo,
            converter_id(ticket_id, "ticket_id", "ID do ticket"),
        )

        if com_comentarios and self.comentario_repo is not None:
            ticket = ticket.com_comentarios(
                self.comentario_repo.listar_por_ticket(ticket.id)
            )

        return ticket


class ListarTicketsService:
    """
    Use Case: Listar tickets visíveis ao usuário.

    ADMIN e TECNICO veem todos; USUARIO vê apenas os que abriu.
    """

    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    def execute(self, usuario: Optional[UsuarioEntity]) -> List[TicketEntity]:
        usuario = exigir_usuario(usuario)
        return self.ticket_repo.listar(solicitante_id=escopo_visibilidade(usuario))


class BuscarTicketsService:
    """
    Use Case: Busca textual em título, descrição e código.

    Termo vazio ou só com espaços equivale a listar.
    """

    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    def execute(
        self,
        usuario: Optional[UsuarioEntity],
        termo: Optional[str],
    ) -> List[TicketEntity]:
        usuario = exigir_usuario(usuario)
        escopo = escopo_visibilidade(usuario)

        termo = (termo or "").strip()
        if not termo:
            return self.ticket_repo.listar(solicitante_id=escopo)

        logger.debug(f"Buscando tickets por '{termo}' (escopo={escopo})")
        return self.ticket_repo.buscar(termo, solicitante_id=escopo)


class FiltrarTicketsService:
    """
    Use Case: Filtrar tickets por status ou por prioridade.

    Aceita enums ou strings (nome ou rótulo).
    """

    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    def execute(
        self,
        usuario: Optional[UsuarioEntity],
        status: Union[StatusTicket, str, None] = None,
        prioridade: Union[PrioridadeTicket, str, None] = None,
    ) -> List[TicketEntity]:
        """
        Raises:
            ValidationError: Se status/prioridade inválidos ou se nenhum
                filtro foi informado
        """
        usuario = exigir_usuario(usuario)
        escopo = escopo_visibilidade(usuario)

        if status is not None:
            status = _converter_enum(StatusTicket, status, "status")
            return self.ticket_repo.listar_por_status(status, solicitante_id=escopo)

        if prioridade is not None:
            prioridade = _converter_enum(PrioridadeTicket, prioridade, "prioridade")
            return self.ticket_repo.listar_por_prioridade(prioridade, solicitante_id=escopo)

        raise ValidationError("Informe status ou prioridade para filtrar", field="filtro")


class AtualizarStatusService:
    """
    Use Case: Mudar o status de um ticket.

    Fluxo:
    1. Exigir usuário logado
    2. Converter ID e buscar ticket
    3. Verificar permissão de edição
    4. Validar transição na entidade
    5. Persistir (data de resolução preservada se já existir)
    """

    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    def execute(
        self,
        input_dto: AtualizarStatusInputDTO,
        usuario: Optional[UsuarioEntity],
    ) -> None:
        """
        Raises:
            AuthenticationRequiredError: Sem usuário logado
            ValidationError: ID inválido
            EntityNotFoundError: Ticket não existe
            PermissionDeniedError: Usuário não pode editar o ticket
            BusinessRuleViolationError: Transição não permitida
            RepositoryError: Falha do banco
        """
        usuario = exigir_usuario(usuario)
        ticket_id = converter_id(input_dto.ticket_id, "ticket_id", "ID do ticket")
        ticket = _obter_ticket(self.ticket_repo, ticket_id)

        if not pode_editar_ticket(usuario, ticket):
            logger.warning(
                f"Usuário {usuario.id} sem permissão para editar ticket {ticket_id}"
            )
            raise PermissionDeniedError(
                "Sem permissão para editar este ticket",
                acao="editar_ticket",
            )

        novo_status = _converter_enum(StatusTicket, input_dto.novo_status, "status")
        ticket.validar_transicao(novo_status, usuario.perfil)

        if not self.ticket_repo.atualizar_status(ticket_id, novo_status):
            raise EntityNotFoundError(
                "Ticket não encontrado",
                entity_type="Ticket",
                entity_id=ticket_id,
            )

        logger.info(
            f"Ticket {ticket_id}: {ticket.status.name} -> "
            f"{novo_status.name} (usuário {usuario.id})"
        )


class AtribuirResponsavelService:
    """
    Use Case: Atribuir técnico responsável.

    Apenas ADMIN/TECNICO atribuem, e o responsável também precisa ser
    ADMIN/TECNICO ativo. Um ticket ABERTO passa para EM_ANDAMENTO.
    """

    def __init__(
        self,
        ticket_repo: TicketRepository,
        usuario_repo: UsuarioRepository,
    ):
        self.ticket_repo = ticket_repo
        self.usuario_repo = usuario_repo

    def execute(
        self,
        input_dto: AtribuirResponsavelInputDTO,
        usuario: Optional[UsuarioEntity],
    ) -> None:
        """
        Raises:
            AuthenticationRequiredError: Sem usuário logado
            PermissionDeniedError: Usuário logado não pode atribuir
            ValidationError: IDs inválidos
            EntityNotFoundError: Ticket ou usuário não existe
            BusinessRuleViolationError: Responsável inativo ou sem perfil técnico
            RepositoryError: Falha do banco
        """
        usuario = exigir_usuario(usuario)

        if not pode_assumir_ticket(usuario):
            logger.warning(f"Usuário {usuario.id} sem permissão para atribuir responsável")
            raise PermissionDeniedError(
                "Sem permissão para atribuir responsável",
                acao="atribuir_responsavel",
            )

        ticket_id = converter_id(input_dto.ticket_id, "ticket_id", "ID do ticket")
        responsavel_id = converter_id(
            input_dto.responsavel_id, "responsavel_id", "ID do usuário"
        )

        _obter_ticket(self.ticket_repo, ticket_id)

        responsavel = self.usuario_repo.obter_por_id(responsavel_id)
        if not responsavel:
            raise EntityNotFoundError(
                "Usuário não encontrado",
                entity_type="Usuario",
                entity_id=responsavel_id,
            )
        if not responsavel.ativo:
            raise BusinessRuleViolationError("Usuário inativo", rule="responsavel_inativo")
        if not pode_assumir_ticket(responsavel):
            raise BusinessRuleViolationError(
                "Usuário informado não pode ser responsável por tickets",
                rule="responsavel_sem_perfil_tecnico",
            )

        if not self.ticket_repo.atribuir_responsavel(ticket_id, responsavel_id):
            raise EntityNotFoundError(
                "Ticket não encontrado",
                entity_type="Ticket",
                entity_id=ticket_id,
            )

        logger.info(f"Ticket {ticket_id} atribuído ao usuário {responsavel_id}")


class AdicionarComentarioService:
    """
    Use Case: Registrar comentário em um ticket.

    O comentário e a atualização de data_atualizacao do ticket
    acontecem na mesma transação (responsabilidade do repositório).
    Um comentário RESOLUCAO não altera o status.
    """

    def __init__(
        self,
        ticket_repo: TicketRepository,
        comentario_repo: ComentarioRepository,
    ):
        self.ticket_repo = ticket_repo
        self.comentario_repo = comentario_repo

    def execute(
        self,
        input_dto: AdicionarComentarioInputDTO,
        usuario: Optional[UsuarioEntity],
    ) -> int:
        """
        Returns:
            ID do comentário

        Raises:
            AuthenticationRequiredError: Sem usuário logado
            ValidationError: ID inválido, conteúdo vazio ou tipo inválido
            EntityNotFoundError: Ticket não existe
            RepositoryError: Falha do banco
        """
        usuario = exigir_usuario(usuario)
        ticket_id = converter_id(input_dto.ticket_id, "ticket_id", "ID do ticket")

        if not (input_dto.conteudo or "").strip():
            raise ValidationError("Conteúdo do comentário é obrigatório", field="conteudo")

        tipo = _converter_enum(TipoComentario, input_dto.tipo, "tipo")
        _obter_ticket(self.ticket_repo, ticket_id)

        comentario_id = self.comentario_repo.inserir(
            ticket_id=ticket_id,
            usuario_id=usuario.id,
            conteudo=input_dto.conteudo,
            tipo=tipo,
        )

        logger.info(
            f"Comentário {comentario_id} ({tipo.name}) adicionado ao ticket "
            f"{ticket_id} por usuário {usuario.id}"
        )
        return comentario_id


class ListarComentariosService:
    def __init__(self, comentario_repo: ComentarioRepository):
        self.comentario_repo = comentario_repo

    def execute(self, ticket_id: Any) -> List[ComentarioEntity]:
        ticket_id = converter_id(ticket_id, "ticket_id", "ID do ticket")
        return self.comentario_repo.listar_por_ticket(ticket_id)


class ListarUsuariosService:
    def __init__(self, usuario_repo: UsuarioRepository):
        self.usuario_repo = usuario_repo

    def execute(self) -> List[UsuarioEntity]:
        return self.usuario_repo.listar_todos()


class ListarCategoriasService:
    """Use Case: Categorias ativas (as únicas oferecidas para tickets novos)."""

    def __init__(self, categoria_repo: CategoriaRepository):
        self.categoria_repo = categoria_repo

    def execute(self) -> List[CategoriaEntity]:
        return self.categoria_repo.listar_ativas()


class EstatisticasService:
    """
    Use Case: Painel de estatísticas.

    Os números são globais (sem escopo de visibilidade).
    """

    def __init__(self, estatisticas_repo: EstatisticasRepository):
        self.estatisticas_repo = estatisticas_repo

    def execute(self) -> EstatisticasOutputDTO:
        return EstatisticasOutputDTO(
            por_status=self.estatisticas_repo.contagem_por_status(),
            por_prioridade=self.estatisticas_repo.contagem_por_prioridade(),
            total=self.estatisticas_repo.total_tickets(),
            abertos=self.estatisticas_repo.tickets_abertos(),
            tempo_medio_resolucao_horas=self.estatisticas_repo.tempo_medio_resolucao_horas(),
        )


class ExportarDadosService:
    """
    Use Case: Exportar tickets, usuários e categorias.

    Cada arquivo é independente: uma falha é registrada no log e os
    demais arquivos continuam sendo gravados.

    Arquivos:
    - tickets.json: tickets visíveis ao usuário logado (vazio sem login)
    - usuarios.json: todos os usuários
    - categorias.json: categorias ativas
    """

    ARQUIVO_TICKETS = "tickets.json"
    ARQUIVO_USUARIOS = "usuarios.json"
    ARQUIVO_CATEGORIAS = "categorias.json"

    def __init__(
        self,
        ticket_repo: TicketRepository,
        usuario_repo: UsuarioRepository,
        categoria_repo: CategoriaRepository,
        exportador: Exportador,
    ):
        self.ticket_repo = ticket_repo
        self.usuario_repo = usuario_repo
        self.categoria_repo = categoria_repo
        self.exportador = exportador

    def execute(self, usuario: Optional[UsuarioEntity]) -> Dict[str, bool]:
        """
        Returns:
            Dicionário {nome_arquivo: gravado_com_sucesso}
        """
        coletores = (
            (self.ARQUIVO_TICKETS, lambda: self._tickets(usuario)),
            (self.ARQUIVO_USUARIOS, lambda: [
                UsuarioOutputDTO.from_entity(u).to_dict()
                for u in self.usuario_repo.listar_todos()
            ]),
            (self.ARQUIVO_CATEGORIAS, lambda: [
                CategoriaOutputDTO.from_entity(c).to_dict()
                for c in self.categoria_repo.listar_ativas()
            ]),
        )

        resultado = {}
        for nome_arquivo, coletar in coletores:
            try:
                caminho = self.exportador.exportar(nome_arquivo, coletar())
                logger.info(f"Exportado {nome_arquivo} em {caminho}")
                resultado[nome_arquivo] = True
            except (RepositoryError, ExportacaoError) as e:
                logger.error(f"Erro ao exportar {nome_arquivo}: {e.message}")
                resultado[nome_arquivo] = False

        return resultado

    def _tickets(self, usuario: Optional[UsuarioEntity]) -> List[dict]:
        if usuario is None:
            return []
        tickets = self.ticket_repo.listar(solicitante_id=escopo_visibilidade(usuario))
        return [TicketOutputDTO.from_entity(t).to_dict() for t in tickets]
