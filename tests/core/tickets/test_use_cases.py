"""
Testes Unitários para Use Cases do Domínio de Tickets.

Testa os serviços de aplicação (use cases) que orquestram
a lógica de negócio do domínio de tickets.

Estratégia de Teste:
- Usa os repositórios InMemory (fakes) para isolamento
- Verifica a ordem das verificações (autenticação, IDs, existência,
  permissão, regra)
- Testa cenários de sucesso e erro

Coverage:
- CriarTicketService
- ObterTicketService
- ListarTicketsService / BuscarTicketsService / FiltrarTicketsService
- AtualizarStatusService
- AtribuirResponsavelService
- AdicionarComentarioService
- EstatisticasService
- ExportarDadosService
"""

import json
from dataclasses import replace
from datetime import timedelta

import pytest

from sistema_tickets.adapters.exportacao import JsonExportador
from sistema_tickets.core.shared.exceptions import (
    AuthenticationRequiredError,
    BusinessRuleViolationError,
    EntityNotFoundError,
    ExportacaoError,
    PermissionDeniedError,
    ValidationError,
)
from sistema_tickets.core.tickets.dtos import (
    AdicionarComentarioInputDTO,
    AtribuirResponsavelInputDTO,
    AtualizarStatusInputDTO,
    CriarTicketInputDTO,
)
from sistema_tickets.core.tickets.entities import (
    PrioridadeTicket,
    StatusTicket,
    TicketEntity,
    TipoComentario,
)
from sistema_tickets.core.tickets.ports import (
    InMemoryCategoriaRepository,
    InMemoryComentarioRepository,
    InMemoryEstatisticasRepository,
    InMemoryTicketRepository,
    InMemoryUsuarioRepository,
)
from sistema_tickets.core.tickets.use_cases import (
    AdicionarComentarioService,
    AtribuirResponsavelService,
    AtualizarStatusService,
    BuscarTicketsService,
    CriarTicketService,
    EstatisticasService,
    ExportarDadosService,
    FiltrarTicketsService,
    ListarTicketsService,
    ObterTicketService,
)


@pytest.fixture
def ticket_repo():
    """Fixture para repositório em memória."""
    return InMemoryTicketRepository()


@pytest.fixture
def comentario_repo(ticket_repo):
    return InMemoryComentarioRepository(ticket_repo)


@pytest.fixture
def usuario_repo(todos_usuarios):
    return InMemoryUsuarioRepository(todos_usuarios)


@pytest.fixture
def categoria_repo(categoria, categoria_inativa):
    return InMemoryCategoriaRepository([categoria, categoria_inativa])


@pytest.fixture
def ticket_da_carla(ticket_repo, usuario, categoria):
    """Ticket ABERTO aberto pelo usuário comum."""
    ticket_id = ticket_repo.inserir(
        "Impressora não imprime", "A impressora do 2º andar parou", categoria.id, usuario.id
    )
    return ticket_repo.obter_por_id(ticket_id)


@pytest.fixture
def ticket_do_diego(ticket_repo, outro_usuario, categoria):
    ticket_id = ticket_repo.inserir(
        "VPN desconectando", "Cai a cada dez minutos", categoria.id, outro_usuario.id,
        prioridade=PrioridadeTicket.ALTA,
    )
    return ticket_repo.obter_por_id(ticket_id)


class TestCriarTicketService:
    """Testes para CriarTicketService."""

    def test_criar_ticket_sucesso(self, ticket_repo, categoria_repo, usuario, categoria):
        """Deve criar ticket ABERTO, prioridade MEDIA, do usuário logado."""
        service = CriarTicketService(ticket_repo, categoria_repo)

        ticket_id = service.execute(
            CriarTicketInputDTO(
                titulo="Monitor piscando",
                descricao="O monitor pisca ao ligar",
                categoria_id=str(categoria.id),
            ),
            usuario,
        )

        ticket = ticket_repo.obter_por_id(ticket_id)
        assert ticket.status == StatusTicket.ABERTO
        assert ticket.prioridade == PrioridadeTicket.MEDIA
        assert ticket.solicitante_id == usuario.id
        assert ticket.responsavel_id is None
        assert ticket.codigo == f"TK-{ticket_id:06d}"
        assert ticket.data_criacao == ticket.data_atualizacao

    def test_titulo_e_descricao_gravados_como_recebidos(self, ticket_repo, categoria_repo, usuario):
        service = CriarTicketService(ticket_repo, categoria_repo)

        ticket_id = service.execute(
            CriarTicketInputDTO("  Monitor  ", " Pisca ", " 1 "),
            usuario,
        )

        ticket = ticket_repo.obter_por_id(ticket_id)
        assert ticket.titulo == "  Monitor  "
        assert ticket.descricao == " Pisca "
        assert ticket.categoria_id == 1

    def test_sem_usuario_logado(self, ticket_repo, categoria_repo):
        service = CriarTicketService(ticket_repo, categoria_repo)

        # Autenticação é verificada antes dos campos
        with pytest.raises(AuthenticationRequiredError):
            service.execute(CriarTicketInputDTO("", "", "x"), None)

    @pytest.mark.parametrize("titulo,descricao", [("", "Descrição"), ("Título", "   "), (None, "x")])
    def test_campos_obrigatorios(self, ticket_repo, categoria_repo, usuario, titulo, descricao):
        service = CriarTicketService(ticket_repo, categoria_repo)

        with pytest.raises(ValidationError) as exc_info:
            service.execute(CriarTicketInputDTO(titulo, descricao, "1"), usuario)

        assert exc_info.value.message == "Título e descrição são obrigatórios"
        assert ticket_repo.listar() == []

    def test_categoria_nao_numerica(self, ticket_repo, categoria_repo, usuario):
        service = CriarTicketService(ticket_repo, categoria_repo)

        with pytest.raises(ValidationError) as exc_info:
            service.execute(CriarTicketInputDTO("Monitor", "Pisca", "abc"), usuario)

        assert exc_info.value.message == "ID da categoria inválido: abc"

    def test_categoria_inexistente(self, ticket_repo, categoria_repo, usuario):
        service = CriarTicketService(ticket_repo, categoria_repo)

        with pytest.raises(EntityNotFoundError) as exc_info:
            service.execute(CriarTicketInputDTO("Monitor", "Pisca", "99"), usuario)

        assert exc_info.value.message == "Categoria não encontrada"

    def test_categoria_inativa(self, ticket_repo, categoria_repo, usuario, categoria_inativa):
        service = CriarTicketService(ticket_repo, categoria_repo)

        with pytest.raises(BusinessRuleViolationError):
            service.execute(
                CriarTicketInputDTO("Monitor", "Pisca", categoria_inativa.id),
                usuario,
            )


class TestObterTicketService:
    def test_obter_por_id_texto(self, ticket_repo, ticket_da_carla):
        ticket = ObterTicketService(ticket_repo).execute(f" {ticket_da_carla.id} ")

        assert ticket == ticket_da_carla

    def test_obter_inexistente(self, ticket_repo):
        with pytest.raises(EntityNotFoundError):
            ObterTicketService(ticket_repo).execute(404)

    def test_obter_id_invalido(self, ticket_repo):
        with pytest.raises(ValidationError) as exc_info:
            ObterTicketService(ticket_repo).execute("abc")

        assert exc_info.value.message == "ID do ticket inválido: abc"

    def test_obter_com_comentarios(self, ticket_repo, comentario_repo, ticket_da_carla, tecnico):
        comentario_repo.inserir(ticket_da_carla.id, tecnico.id, "Verificando o toner")
        comentario_repo.inserir(ticket_da_carla.id, tecnico.id, "Toner trocado", TipoComentario.RESOLUCAO)

        service = ObterTicketService(ticket_repo, comentario_repo)

        assert service.execute(ticket_da_carla.id).comentarios == ()
        ticket = service.execute(ticket_da_carla.id, com_comentarios=True)
        assert [c.conteudo for c in ticket.comentarios] == ["Verificando o toner", "Toner trocado"]


class TestListagens:
    """Testes para listagem, busca e filtros com escopo."""

    def test_usuario_ve_apenas_os_proprios(self, ticket_repo, usuario, ticket_da_carla, ticket_do_diego):
        tickets = ListarTicketsService(ticket_repo).execute(usuario)

        assert tickets == [ticket_da_carla]

    def test_tecnico_ve_todos_ordenados_por_id(self, ticket_repo, tecnico, ticket_da_carla, ticket_do_diego):
        tickets = ListarTicketsService(ticket_repo).execute(tecnico)

        assert [t.id for t in tickets] == [ticket_da_carla.id, ticket_do_diego.id]

    def test_listar_sem_usuario(self, ticket_repo):
        with pytest.raises(AuthenticationRequiredError):
            ListarTicketsService(ticket_repo).execute(None)

    def test_busca_sem_diferenciar_maiusculas(self, ticket_repo, admin, ticket_da_carla, ticket_do_diego):
        service = BuscarTicketsService(ticket_repo)

        assert service.execute(admin, "IMPRESSORA") == [ticket_da_carla]
        assert service.execute(admin, "dez minutos") == [ticket_do_diego]

    def test_busca_por_codigo(self, ticket_repo, admin, ticket_do_diego):
        tickets = BuscarTicketsService(ticket_repo).execute(admin, ticket_do_diego.codigo.lower())

        assert tickets == [ticket_do_diego]

    def test_busca_respeita_escopo(self, ticket_repo, usuario, ticket_da_carla, ticket_do_diego):
        assert BuscarTicketsService(ticket_repo).execute(usuario, "VPN") == []

    @pytest.mark.parametrize("termo", ["", "   ", None])
    def test_busca_vazia_equivale_a_listar(self, ticket_repo, admin, ticket_da_carla, ticket_do_diego, termo):
        tickets = BuscarTicketsService(ticket_repo).execute(admin, termo)

        assert len(tickets) == 2

    def test_busca_sem_resultado(self, ticket_repo, admin, ticket_da_carla):
        assert BuscarTicketsService(ticket_repo).execute(admin, "teclado") == []

    def test_filtrar_por_status_aceita_rotulo(self, ticket_repo, admin, ticket_da_carla, ticket_do_diego):
        ticket_repo.atualizar_status(ticket_do_diego.id, StatusTicket.EM_ANDAMENTO)
        service = FiltrarTicketsService(ticket_repo)

        tickets = service.execute(admin, status="Em Andamento")

        assert [t.id for t in tickets] == [ticket_do_diego.id]

    def test_filtrar_por_prioridade_com_escopo(self, ticket_repo, usuario, outro_usuario, ticket_da_carla, ticket_do_diego):
        service = FiltrarTicketsService(ticket_repo)

        assert service.execute(usuario, prioridade=PrioridadeTicket.ALTA) == []
        assert service.execute(outro_usuario, prioridade="ALTA") == [ticket_do_diego]

    def test_filtrar_status_invalido(self, ticket_repo, admin):
        with pytest.raises(ValidationError):
            FiltrarTicketsService(ticket_repo).execute(admin, status="PERDIDO")

    def test_filtrar_sem_criterio(self, ticket_repo, admin):
        with pytest.raises(ValidationError):
            FiltrarTicketsService(ticket_repo).execute(admin)


class TestAtualizarStatusService:
    """Testes para AtualizarStatusService."""

    def test_dono_resolve_o_proprio_ticket(self, ticket_repo, usuario, ticket_da_carla):
        AtualizarStatusService(ticket_repo).execute(
            AtualizarStatusInputDTO(str(ticket_da_carla.id), "RESOLVIDO"),
            usuario,
        )

        ticket = ticket_repo.obter_por_id(ticket_da_carla.id)
        assert ticket.status == StatusTicket.RESOLVIDO
        assert ticket.data_resolucao is not None
        assert ticket.data_atualizacao >= ticket_da_carla.data_atualizacao

    def test_usuario_nao_edita_ticket_alheio(self, ticket_repo, outro_usuario, ticket_da_carla):
        with pytest.raises(PermissionDeniedError) as exc_info:
            AtualizarStatusService(ticket_repo).execute(
                AtualizarStatusInputDTO(ticket_da_carla.id, StatusTicket.FECHADO),
                outro_usuario,
            )

        assert exc_info.value.message == "Sem permissão para editar este ticket"
        assert ticket_repo.obter_por_id(ticket_da_carla.id).status == StatusTicket.ABERTO

    def test_permissao_verificada_antes_do_status(self, ticket_repo, outro_usuario, ticket_da_carla):
        with pytest.raises(PermissionDeniedError):
            AtualizarStatusService(ticket_repo).execute(
                AtualizarStatusInputDTO(ticket_da_carla.id, "PERDIDO"),
                outro_usuario,
            )

    def test_existencia_verificada_antes_do_status(self, ticket_repo, admin):
        with pytest.raises(EntityNotFoundError):
            AtualizarStatusService(ticket_repo).execute(
                AtualizarStatusInputDTO("404", "PERDIDO"),
                admin,
            )

    def test_status_invalido(self, ticket_repo, tecnico, ticket_da_carla):
        with pytest.raises(ValidationError):
            AtualizarStatusService(ticket_repo).execute(
                AtualizarStatusInputDTO(ticket_da_carla.id, "PERDIDO"),
                tecnico,
            )

    def test_id_invalido(self, ticket_repo, tecnico):
        with pytest.raises(ValidationError) as exc_info:
            AtualizarStatusService(ticket_repo).execute(
                AtualizarStatusInputDTO("x", "RESOLVIDO"),
                tecnico,
            )

        assert exc_info.value.message == "ID do ticket inválido: x"

    def test_transicao_invalida(self, ticket_repo, tecnico, ticket_da_carla):
        service = AtualizarStatusService(ticket_repo)
        service.execute(AtualizarStatusInputDTO(ticket_da_carla.id, "RESOLVIDO"), tecnico)

        with pytest.raises(BusinessRuleViolationError):
            service.execute(AtualizarStatusInputDTO(ticket_da_carla.id, "ABERTO"), tecnico)

    def test_primeira_resolucao_preservada(self, ticket_repo, tecnico, usuario, instante_fixo):
        ticket_repo.adicionar(TicketEntity(
            id=50,
            titulo="Teclado",
            descricao="Teclas falhando",
            categoria_id=1,
            solicitante_id=usuario.id,
            status=StatusTicket.RESOLVIDO,
            data_criacao=instante_fixo - timedelta(hours=4),
            data_atualizacao=instante_fixo,
            data_resolucao=instante_fixo,
        ))
        service = AtualizarStatusService(ticket_repo)

        service.execute(AtualizarStatusInputDTO(50, "EM_ANDAMENTO"), tecnico)
        service.execute(AtualizarStatusInputDTO(50, "RESOLVIDO"), tecnico)
        service.execute(AtualizarStatusInputDTO(50, "FECHADO"), tecnico)

        ticket = ticket_repo.obter_por_id(50)
        assert ticket.status == StatusTicket.FECHADO
        assert ticket.data_resolucao == instante_fixo

    def test_reabrir_fechado(self, ticket_repo, admin, tecnico, ticket_da_carla):
        service = AtualizarStatusService(ticket_repo)
        service.execute(AtualizarStatusInputDTO(ticket_da_carla.id, "FECHADO"), tecnico)

        with pytest.raises(PermissionDeniedError):
            service.execute(AtualizarStatusInputDTO(ticket_da_carla.id, "ABERTO"), tecnico)

        service.execute(AtualizarStatusInputDTO(ticket_da_carla.id, "ABERTO"), admin)
        assert ticket_repo.obter_por_id(ticket_da_carla.id).status == StatusTicket.ABERTO

    def test_mesmo_status_permitido(self, ticket_repo, usuario, ticket_da_carla):
        AtualizarStatusService(ticket_repo).execute(
            AtualizarStatusInputDTO(ticket_da_carla.id, StatusTicket.ABERTO),
            usuario,
        )

        assert ticket_repo.obter_por_id(ticket_da_carla.id).status == StatusTicket.ABERTO


class TestAtribuirResponsavelService:
    """Testes para AtribuirResponsavelService."""

    def test_atribuir_promove_aberto(self, ticket_repo, usuario_repo, tecnico, ticket_da_carla):
        AtribuirResponsavelService(ticket_repo, usuario_repo).execute(
            AtribuirResponsavelInputDTO(str(ticket_da_carla.id), str(tecnico.id)),
            tecnico,
        )

        ticket = ticket_repo.obter_por_id(ticket_da_carla.id)
        assert ticket.responsavel_id == tecnico.id
        assert ticket.status == StatusTicket.EM_ANDAMENTO

    def test_atribuir_preserva_outros_status(self, ticket_repo, usuario_repo, admin, tecnico, ticket_da_carla):
        ticket_repo.atualizar_status(ticket_da_carla.id, StatusTicket.RESOLVIDO)

        AtribuirResponsavelService(ticket_repo, usuario_repo).execute(
            AtribuirResponsavelInputDTO(ticket_da_carla.id, admin.id),
            tecnico,
        )

        ticket = ticket_repo.obter_por_id(ticket_da_carla.id)
        assert ticket.responsavel_id == admin.id
        assert ticket.status == StatusTicket.RESOLVIDO

    def test_usuario_comum_nao_atribui(self, ticket_repo, usuario_repo, usuario):
        # Permissão é verificada antes dos IDs
        with pytest.raises(PermissionDeniedError) as exc_info:
            AtribuirResponsavelService(ticket_repo, usuario_repo).execute(
                AtribuirResponsavelInputDTO("abc", "xyz"),
                usuario,
            )

        assert exc_info.value.message == "Sem permissão para atribuir responsável"

    def test_responsavel_precisa_ser_tecnico(self, ticket_repo, usuario_repo, admin, outro_usuario, ticket_da_carla):
        with pytest.raises(BusinessRuleViolationError):
            AtribuirResponsavelService(ticket_repo, usuario_repo).execute(
                AtribuirResponsavelInputDTO(ticket_da_carla.id, outro_usuario.id),
                admin,
            )

        assert ticket_repo.obter_por_id(ticket_da_carla.id).responsavel_id is None

    def test_responsavel_inativo(self, ticket_repo, usuario_repo, admin, tecnico_inativo, ticket_da_carla):
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            AtribuirResponsavelService(ticket_repo, usuario_repo).execute(
                AtribuirResponsavelInputDTO(ticket_da_carla.id, tecnico_inativo.id),
                admin,
            )

        assert exc_info.value.message == "Usuário inativo"

    def test_responsavel_inexistente(self, ticket_repo, usuario_repo, admin, ticket_da_carla):
        with pytest.raises(EntityNotFoundError) as exc_info:
            AtribuirResponsavelService(ticket_repo, usuario_repo).execute(
                AtribuirResponsavelInputDTO(ticket_da_carla.id, 999),
                admin,
            )

        assert exc_info.value.message == "Usuário não encontrado"

    def test_ticket_inexistente(self, ticket_repo, usuario_repo, admin, tecnico):
        with pytest.raises(EntityNotFoundError) as exc_info:
            AtribuirResponsavelService(ticket_repo, usuario_repo).execute(
                AtribuirResponsavelInputDTO(404, tecnico.id),
                admin,
            )

        assert exc_info.value.message == "Ticket não encontrado"

    def test_id_do_responsavel_invalido(self, ticket_repo, usuario_repo, admin, ticket_da_carla):
        with pytest.raises(ValidationError) as exc_info:
            AtribuirResponsavelService(ticket_repo, usuario_repo).execute(
                AtribuirResponsavelInputDTO(ticket_da_carla.id, "dois"),
                admin,
            )

        assert exc_info.value.message == "ID do usuário inválido: dois"


class TestAdicionarComentarioService:
    """Testes para AdicionarComentarioService."""

    def test_comentario_atualiza_ticket(self, ticket_repo, comentario_repo, usuario, ticket_da_carla):
        service = AdicionarComentarioService(ticket_repo, comentario_repo)

        comentario_id = service.execute(
            AdicionarComentarioInputDTO(str(ticket_da_carla.id), "Ainda sem imprimir"),
            usuario,
        )

        comentarios = comentario_repo.listar_por_ticket(ticket_da_carla.id)
        assert [c.id for c in comentarios] == [comentario_id]
        assert comentarios[0].usuario_id == usuario.id
        assert comentarios[0].tipo == TipoComentario.COMENTARIO
        assert ticket_repo.obter_por_id(ticket_da_carla.id).data_atualizacao == comentarios[0].data

    def test_comentario_de_resolucao_nao_muda_status(self, ticket_repo, comentario_repo, tecnico, ticket_da_carla):
        AdicionarComentarioService(ticket_repo, comentario_repo).execute(
            AdicionarComentarioInputDTO(ticket_da_carla.id, "Toner trocado", TipoComentario.RESOLUCAO),
            tecnico,
        )

        assert ticket_repo.obter_por_id(ticket_da_carla.id).status == StatusTicket.ABERTO

    def test_tipo_por_rotulo(self, ticket_repo, comentario_repo, tecnico, ticket_da_carla):
        AdicionarComentarioService(ticket_repo, comentario_repo).execute(
            AdicionarComentarioInputDTO(ticket_da_carla.id, "Checar garantia", "Interno"),
            tecnico,
        )

        assert comentario_repo.listar_por_ticket(ticket_da_carla.id)[0].tipo == TipoComentario.INTERNO

    def test_tipo_invalido(self, ticket_repo, comentario_repo, tecnico, ticket_da_carla):
        with pytest.raises(ValidationError):
            AdicionarComentarioService(ticket_repo, comentario_repo).execute(
                AdicionarComentarioInputDTO(ticket_da_carla.id, "Texto", "SECRETO"),
                tecnico,
            )

    def test_conteudo_vazio(self, ticket_repo, comentario_repo, usuario, ticket_da_carla):
        with pytest.raises(ValidationError) as exc_info:
            AdicionarComentarioService(ticket_repo, comentario_repo).execute(
                AdicionarComentarioInputDTO(ticket_da_carla.id, "   "),
                usuario,
            )

        assert exc_info.value.message == "Conteúdo do comentário é obrigatório"

    def test_ticket_inexistente(self, ticket_repo, comentario_repo, usuario):
        with pytest.raises(EntityNotFoundError):
            AdicionarComentarioService(ticket_repo, comentario_repo).execute(
                AdicionarComentarioInputDTO(404, "Olá"),
                usuario,
            )

    def test_sem_usuario(self, ticket_repo, comentario_repo, ticket_da_carla):
        with pytest.raises(AuthenticationRequiredError):
            AdicionarComentarioService(ticket_repo, comentario_repo).execute(
                AdicionarComentarioInputDTO(ticket_da_carla.id, "Olá"),
                None,
            )


class TestEstatisticasService:
    def test_painel_vazio(self, ticket_repo):
        estatisticas = EstatisticasService(InMemoryEstatisticasRepository(ticket_repo)).execute()

        assert estatisticas.total == 0
        assert estatisticas.abertos == 0
        assert estatisticas.tempo_medio_resolucao_horas == 0.0
        assert estatisticas.por_status == {status: 0 for status in StatusTicket}

    def test_contagens_e_media(self, ticket_repo, usuario, instante_fixo):
        base = TicketEntity(
            id=1, titulo="A", descricao="A", categoria_id=1, solicitante_id=usuario.id,
            data_criacao=instante_fixo, data_atualizacao=instante_fixo,
        )
        ticket_repo.adicionar(base)
        ticket_repo.adicionar(replace(
            base, id=2, status=StatusTicket.RESOLVIDO, prioridade=PrioridadeTicket.ALTA,
            data_resolucao=instante_fixo + timedelta(hours=5, minutes=30),
        ))
        ticket_repo.adicionar(replace(
            base, id=3, status=StatusTicket.FECHADO,
            data_resolucao=instante_fixo + timedelta(hours=3),
        ))

        estatisticas = EstatisticasService(InMemoryEstatisticasRepository(ticket_repo)).execute()

        assert estatisticas.total == 3
        assert estatisticas.abertos == 2
        assert estatisticas.por_status[StatusTicket.ABERTO] == 1
        assert estatisticas.por_status[StatusTicket.EM_ANDAMENTO] == 0
        assert estatisticas.por_prioridade[PrioridadeTicket.MEDIA] == 2
        assert estatisticas.por_prioridade[PrioridadeTicket.ALTA] == 1
        assert estatisticas.tempo_medio_resolucao_horas == 4.0
        assert estatisticas.to_dict()["por_status"]["FECHADO"] == 1


class FalhaExportador(JsonExportador):
    """Exportador que falha para um arquivo específico."""

    def __init__(self, diretorio, arquivo_com_falha):
        super().__init__(diretorio)
        self.arquivo_com_falha = arquivo_com_falha

    def exportar(self, nome_arquivo, registros):
        if nome_arquivo == self.arquivo_com_falha:
            raise ExportacaoError("Disco cheio", arquivo=nome_arquivo)
        return super().exportar(nome_arquivo, registros)


class TestExportarDadosService:
    """Testes para ExportarDadosService."""

    @pytest.fixture
    def service_factory(self, ticket_repo, usuario_repo, categoria_repo):
        def criar(exportador):
            return ExportarDadosService(ticket_repo, usuario_repo, categoria_repo, exportador)
        return criar

    def _ler(self, caminho):
        with caminho.open(encoding="utf-8") as arquivo:
            return json.load(arquivo)

    def test_exporta_tres_arquivos(self, service_factory, tmp_path, admin, ticket_da_carla, ticket_do_diego):
        resultado = service_factory(JsonExportador(tmp_path)).execute(admin)

        assert resultado == {
            "tickets.json": True,
            "usuarios.json": True,
            "categorias.json": True,
        }
        tickets = self._ler(tmp_path / "tickets.json")
        assert [t["id"] for t in tickets] == [ticket_da_carla.id, ticket_do_diego.id]
        assert tickets[0]["status"] == "ABERTO"
        assert tickets[0]["status_rotulo"] == "Aberto"
        assert tickets[0]["codigo"] == ticket_da_carla.codigo

    def test_tickets_respeitam_escopo(self, service_factory, tmp_path, usuario, ticket_da_carla, ticket_do_diego):
        service_factory(JsonExportador(tmp_path)).execute(usuario)

        tickets = self._ler(tmp_path / "tickets.json")
        assert [t["id"] for t in tickets] == [ticket_da_carla.id]

    def test_sem_usuario_exporta_tickets_vazio(self, service_factory, tmp_path, ticket_da_carla):
        resultado = service_factory(JsonExportador(tmp_path)).execute(None)

        assert all(resultado.values())
        assert self._ler(tmp_path / "tickets.json") == []
        assert len(self._ler(tmp_path / "usuarios.json")) == 5

    def test_usuarios_e_categorias(self, service_factory, tmp_path, admin):
        service_factory(JsonExportador(tmp_path)).execute(admin)

        usuarios = self._ler(tmp_path / "usuarios.json")
        assert usuarios[0]["perfil"] == "ADMIN"
        assert usuarios[1]["nome"] == "Bruno Técnico"
        categorias = self._ler(tmp_path / "categorias.json")
        assert [c["nome"] for c in categorias] == ["Hardware"]

    def test_falha_em_um_arquivo_nao_interrompe_os_demais(self, service_factory, tmp_path, admin):
        resultado = service_factory(FalhaExportador(tmp_path, "usuarios.json")).execute(admin)

        assert resultado == {
            "tickets.json": True,
            "usuarios.json": False,
            "categorias.json": True,
        }
        assert not (tmp_path / "usuarios.json").exists()
        assert (tmp_path / "categorias.json").exists()
