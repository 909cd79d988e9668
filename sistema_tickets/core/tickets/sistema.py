"""
Fachada do Sistema de Tickets.

SistemaTickets é a fronteira do domínio: guarda o usuário logado,
delega para os use cases e garante que nenhuma exceção de domínio
atravesse para quem chama.

Conversões na fronteira:
- Operações de escrita → ResultadoOperacao (str() = mensagem legada)
- Listagens → lista vazia em caso de falha
- Busca por ID → None em caso de falha
- Estatísticas → zeros em caso de falha

Example:
    sistema = container.sistema_tickets()
    sistema.autenticar(7)
    resultado = sistema.criar_ticket("Impressora", "Sem toner", "3")
    print(resultado)  # "Ticket criado com sucesso! ID: 42"
"""

import logging
from typing import Any, Dict, List, Optional, Union

from sistema_tickets.core.shared.exceptions import DomainException, RepositoryError
from sistema_tickets.core.shared.interfaces import Exportador
from sistema_tickets.core.shared.results import ResultadoOperacao

from .dtos import (
    AdicionarComentarioInputDTO,
    AtribuirResponsavelInputDTO,
    AtualizarStatusInputDTO,
    CriarTicketInputDTO,
    EstatisticasOutputDTO,
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
from .ports import (
    CategoriaRepository,
    ComentarioRepository,
    EstatisticasRepository,
    TicketRepository,
    UsuarioRepository,
)
from .use_cases import (
    AdicionarComentarioService,
    AtribuirResponsavelService,
    AtualizarStatusService,
    BuscarTicketsService,
    CriarTicketService,
    EstatisticasService,
    ExportarDadosService,
    FiltrarTicketsService,
    ListarCategoriasService,
    ListarComentariosService,
    ListarTicketsService,
    ListarUsuariosService,
    ObterTicketService,
)

logger = logging.getLogger(__name__)


def _registrar_falha(operacao: str, exc: DomainException) -> None:
    extra = {"operacao": operacao, "erro": exc.to_dict()}
    if isinstance(exc, RepositoryError):
        logger.error(f"Erro ao {operacao}: {exc.message}", extra=extra)
    else:
        logger.warning(f"{operacao} recusado: {exc}", extra=extra)


class SistemaTickets:
    """
    Fachada do domínio de tickets.

    Attributes:
        usuario_logado: Usuário autenticado (None se ninguém logado)
    """

    def __init__(
        self,
        ticket_repo: TicketRepository,
        comentario_repo: ComentarioRepository,
        usuario_repo: UsuarioRepository,
        categoria_repo: CategoriaRepository,
        estatisticas_repo: EstatisticasRepository,
        exportador: Exportador,
        usuario_logado: Optional[UsuarioEntity] = None,
    ):
        self.usuario_repo = usuario_repo
        self.estatisticas_repo = estatisticas_repo
        self.usuario_logado = usuario_logado

        self._criar = CriarTicketService(ticket_repo, categoria_repo)
        self._obter = ObterTicketService(ticket_repo, comentario_repo)
        self._listar = ListarTicketsService(ticket_repo)
        self._buscar = BuscarTicketsService(ticket_repo)
        self._filtrar = FiltrarTicketsService(ticket_repo)
        self._atualizar_status = AtualizarStatusService(ticket_repo)
        self._atribuir = AtribuirResponsavelService(ticket_repo, usuario_repo)
        self._comentar = AdicionarComentarioService(ticket_repo, comentario_repo)
        self._listar_comentarios = ListarComentariosService(comentario_repo)
        self._listar_usuarios = ListarUsuariosService(usuario_repo)
        self._listar_categorias = ListarCategoriasService(categoria_repo)
        self._estatisticas = EstatisticasService(estatisticas_repo)
        self._exportar = ExportarDadosService(
            ticket_repo, usuario_repo, categoria_repo, exportador
        )

    # =========================================================================
    # Sessão
    # =========================================================================

    def autenticar(self, usuario_id: int) -> bool:
        """
        Define o usuário logado a partir do ID.

        Usuários inexistentes ou inativos não são aceitos; nesse caso
        o usuário logado anterior é mantido.

        Returns:
            True se o usuário foi autenticado
        """
        try:
            usuario = self.usuario_repo.obter_por_id(usuario_id)
        except RepositoryError as e:
            _registrar_falha("autenticar", e)
            return False

        if usuario is None or not usuario.ativo:
            logger.warning(f"Autenticação recusada para usuário {usuario_id}")
            return False

        self.usuario_logado = usuario
        logger.info(f"Usuário {usuario.id} ({usuario.perfil.name}) autenticado")
        return True

    def sair(self) -> None:
        self.usuario_logado = None

    # =========================================================================
    # Operações de escrita
    # =========================================================================

    def criar_ticket(
        self,
        titulo: str,
        descricao: str,
        categoria_id: Union[int, str],
    ) -> ResultadoOperacao:
        try:
            ticket_id = self._criar.execute(
                CriarTicketInputDTO(
                    titulo=titulo,
                    descricao=descricao,
                    categoria_id=categoria_id,
                ),
                self.usuario_logado,
            )
        except DomainException as e:
            _registrar_falha("criar ticket", e)
            return ResultadoOperacao.de_excecao(e, "criar ticket")
        return ResultadoOperacao.ok(f"Ticket criado com sucesso! ID: {ticket_id}", ticket_id)

    def atualizar_status_ticket(
        self,
        ticket_id: Union[int, str],
        novo_status: Union[StatusTicket, str],
    ) -> ResultadoOperacao:
        try:
            self._atualizar_status.execute(
                AtualizarStatusInputDTO(ticket_id=ticket_id, novo_status=novo_status),
                self.usuario_logado,
            )
        except DomainException as e:
            _registrar_falha("atualizar status", e)
            return ResultadoOperacao.de_excecao(e, "atualizar status")
        return ResultadoOperacao.ok("Status atualizado com sucesso")

    def atribuir_responsavel(
        self,
        ticket_id: Union[int, str],
        responsavel_id: Union[int, str],
    ) -> ResultadoOperacao:
        try:
            self._atribuir.execute(
                AtribuirResponsavelInputDTO(
                    ticket_id=ticket_id,
                    responsavel_id=responsavel_id,
                ),
                self.usuario_logado,
            )
        except DomainException as e:
            _registrar_falha("atribuir responsável", e)
            return ResultadoOperacao.de_excecao(e, "atribuir responsável")
        return ResultadoOperacao.ok("Responsável atribuído com sucesso")

    def adicionar_comentario(
        self,
        ticket_id: Union[int, str],
        conteudo: str,
        tipo: Union[TipoComentario, str] = TipoComentario.COMENTARIO,
    ) -> ResultadoOperacao:
        try:
            comentario_id = self._comentar.execute(
                AdicionarComentarioInputDTO(
                    ticket_id=ticket_id,
                    conteudo=conteudo,
                    tipo=tipo,
                ),
                self.usuario_logado,
            )
        except DomainException as e:
            _registrar_falha("adicionar comentário", e)
            return ResultadoOperacao.de_excecao(e, "adicionar comentário")
        return ResultadoOperacao.ok("Comentário adicionado com sucesso", comentario_id)

    # =========================================================================
    # Consultas
    # =========================================================================

    def buscar_ticket_por_id(
        self,
        ticket_id: Union[int, str],
        com_comentarios: bool = False,
    ) -> Optional[TicketEntity]:
        try:
            return self._obter.execute(ticket_id, com_comentarios=com_comentarios)
        except DomainException as e:
            _registrar_falha("buscar ticket", e)
            return None

    def listar_tickets(self) -> List[TicketEntity]:
        return self._consultar("listar tickets", self._listar.execute, self.usuario_logado)

    def buscar_tickets(self, termo: Optional[str]) -> List[TicketEntity]:
        return self._consultar(
            "buscar tickets", self._buscar.execute, self.usuario_logado, termo
        )

    def filtrar_tickets_por_status(
        self,
        status: Union[StatusTicket, str],
    ) -> List[TicketEntity]:
        return self._consultar(
            "filtrar tickets por status",
            self._filtrar.execute,
            self.usuario_logado,
            status=status,
        )

    def filtrar_tickets_por_prioridade(
        self,
        prioridade: Union[PrioridadeTicket, str],
    ) -> List[TicketEntity]:
        return self._consultar(
            "filtrar tickets por prioridade",
            self._filtrar.execute,
            self.usuario_logado,
            prioridade=prioridade,
        )

    def listar_comentarios(self, ticket_id: Union[int, str]) -> List[ComentarioEntity]:
        return self._consultar(
            "listar comentários", self._listar_comentarios.execute, ticket_id
        )

    def listar_usuarios(self) -> List[UsuarioEntity]:
        return self._consultar("listar usuários", self._listar_usuarios.execute)

    def listar_categorias(self) -> List[CategoriaEntity]:
        return self._consultar("listar categorias", self._listar_categorias.execute)

    # =========================================================================
    # Estatísticas
    # =========================================================================

    def obter_estatisticas(self) -> EstatisticasOutputDTO:
        try:
            return self._estatisticas.execute()
        except DomainException as e:
            _registrar_falha("obter estatísticas", e)
            return EstatisticasOutputDTO.vazio()

    def contar_tickets_por_status(self) -> Dict[StatusTicket, int]:
        return self._estatistica(
            self.estatisticas_repo.contagem_por_status,
            lambda: {status: 0 for status in StatusTicket},
        )

    def contar_tickets_por_prioridade(self) -> Dict[PrioridadeTicket, int]:
        return self._estatistica(
            self.estatisticas_repo.contagem_por_prioridade,
            lambda: {prioridade: 0 for prioridade in PrioridadeTicket},
        )

    def total_tickets(self) -> int:
        return self._estatistica(self.estatisticas_repo.total_tickets, lambda: 0)

    def tickets_abertos(self) -> int:
        return self._estatistica(self.estatisticas_repo.tickets_abertos, lambda: 0)

    def tempo_medio_resolucao(self) -> float:
        return self._estatistica(
            self.estatisticas_repo.tempo_medio_resolucao_horas, lambda: 0.0
        )

    # =========================================================================
    # Exportação
    # =========================================================================

    def exportar_dados(self) -> Dict[str, bool]:
        """
        Grava tickets.json, usuarios.json e categorias.json.

        Returns:
            Dicionário {nome_arquivo: gravado_com_sucesso}
        """
        return self._exportar.execute(self.usuario_logado)

    # =========================================================================
    # Auxiliares
    # =========================================================================

    def _consultar(self, operacao: str, funcao, *args, **kwargs) -> List[Any]:
        try:
            return funcao(*args, **kwargs)
        except DomainException as e:
            _registrar_falha(operacao, e)
            return []

    def _estatistica(self, funcao, padrao):
        try:
            return funcao()
        except RepositoryError as e:
            _registrar_falha("calcular estatísticas", e)
            return padrao()
