"""
Django Models para o domínio de Tickets.

Estes models são ADAPTERS: descrevem o esquema relacional usado pelos
repositórios SQL (tabelas tickets, usuarios, comentarios, categorias).

IMPORTANTE:
- Models NÃO contêm lógica de negócio
- Lógica de negócio fica nas Entities do Core
- A leitura e a escrita em tempo de execução são feitas por SQL
  parametrizado (repositories.py); os models servem ao esquema,
  às migrations e à carga de dados de teste

Enumerações são gravadas pelo nome simbólico (ex: 'EM_ANDAMENTO').
"""

from django.db import models
from django.utils import timezone


class StatusChoices(models.TextChoices):
    """Choices para status (espelha StatusTicket do Core)."""
    ABERTO = 'ABERTO', 'Aberto'
    EM_ANDAMENTO = 'EM_ANDAMENTO', 'Em Andamento'
    RESOLVIDO = 'RESOLVIDO', 'Resolvido'
    FECHADO = 'FECHADO', 'Fechado'


class PrioridadeChoices(models.TextChoices):
    """Choices para prioridade (espelha PrioridadeTicket do Core)."""
    BAIXA = 'BAIXA', 'Baixa'
    MEDIA = 'MEDIA', 'Média'
    ALTA = 'ALTA', 'Alta'
    CRITICA = 'CRITICA', 'Crítica'


class PerfilChoices(models.TextChoices):
    USUARIO = 'USUARIO', 'Usuário'
    TECNICO = 'TECNICO', 'Técnico'
    ADMIN = 'ADMIN', 'Administrador'


class TipoComentarioChoices(models.TextChoices):
    COMENTARIO = 'COMENTARIO', 'Comentário'
    RESOLUCAO = 'RESOLUCAO', 'Resolução'
    INTERNO = 'INTERNO', 'Interno'


class CategoriaModel(models.Model):
    """Categoria de ticket. Apenas categorias ativas recebem tickets novos."""

    nome = models.CharField(max_length=100)
    descricao = models.TextField(blank=True, default='')
    cor = models.CharField(max_length=7, default='#95a5a6')
    ativa = models.BooleanField(default=True, db_index=True)

    class Meta:
        db_table = 'categorias'
        ordering = ['id']
        verbose_name = 'Categoria'
        verbose_name_plural = 'Categorias'

    def __str__(self):
        return self.nome


class UsuarioModel(models.Model):
    """
    Usuário do sistema de suporte.

    Fields:
        nome: Nome de exibição
        email: E-mail único
        perfil: USUARIO, TECNICO ou ADMIN
        departamento_id: Departamento (sem tabela própria nesta versão)
        ativo: Exclusão lógica
        data_criacao: Data/hora de cadastro
    """

    nome = models.CharField(max_length=150)
    email = models.EmailField(max_length=254, unique=True)
    perfil = models.CharField(
        max_length=20,
        choices=PerfilChoices.choices,
        default=PerfilChoices.USUARIO,
    )
    departamento_id = models.IntegerField(null=True, blank=True)
    ativo = models.BooleanField(default=True)
    data_criacao = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'usuarios'
        ordering = ['id']
        verbose_name = 'Usuário'
        verbose_name_plural = 'Usuários'

    def __str__(self):
        return f"{self.nome} <{self.email}>"


class TicketModel(models.Model):
    """
    Model Django para persistência de Tickets.

    Fields:
        codigo: Código legível gerado pelo banco (trigger da migration 0001)
        titulo: Título do ticket
        descricao: Descrição detalhada
        status: Estado atual (choices)
        prioridade: Nível de prioridade (choices)
        categoria: Categoria (coluna categoria_id)
        solicitante: Quem abriu o ticket (coluna solicitante_id)
        responsavel: Técnico responsável (coluna responsavel_id)
        data_criacao: Timestamp de abertura
        data_atualizacao: Timestamp da última alteração
        data_resolucao: Primeira resolução/fechamento
    """

    codigo = models.CharField(
        max_length=20,
        unique=True,
        null=True,
        blank=True,
        help_text="Gerado pelo banco na inserção"
    )

    titulo = models.CharField(max_length=200)
    descricao = models.TextField()

    status = models.CharField(
        max_length=20,
        choices=StatusChoices.choices,
        default=StatusChoices.ABERTO,
        db_index=True,
    )

    prioridade = models.CharField(
        max_length=20,
        choices=PrioridadeChoices.choices,
        default=PrioridadeChoices.MEDIA,
        db_index=True,
    )

    # Relacionamentos
    categoria = models.ForeignKey(
        CategoriaModel,
        on_delete=models.PROTECT,
        related_name='tickets',
    )

    solicitante = models.ForeignKey(
        UsuarioModel,
        on_delete=models.PROTECT,
        related_name='tickets_solicitados',
    )

    responsavel = models.ForeignKey(
        UsuarioModel,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='tickets_atribuidos',
    )

    # Timestamps (gravados explicitamente pelos repositórios)
    data_criacao = models.DateTimeField(default=timezone.now, db_index=True)
    data_atualizacao = models.DateTimeField(default=timezone.now)
    data_resolucao = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'tickets'
        ordering = ['id']
        verbose_name = 'Ticket'
        verbose_name_plural = 'Tickets'

    def __str__(self):
        return f"[{self.codigo}] {self.titulo}"


class ComentarioModel(models.Model):
    """Comentário de ticket (imutável depois de gravado)."""

    ticket = models.ForeignKey(
        TicketModel,
        on_delete=models.CASCADE,
        related_name='comentarios',
    )
    usuario = models.ForeignKey(
        UsuarioModel,
        on_delete=models.PROTECT,
        related_name='comentarios',
    )
    conteudo = models.TextField()
    tipo = models.CharField(
        max_length=20,
        choices=TipoComentarioChoices.choices,
        default=TipoComentarioChoices.COMENTARIO,
    )
    data = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'comentarios'
        ordering = ['id']
        verbose_name = 'Comentário'
        verbose_name_plural = 'Comentários'

    def __str__(self):
        return f"Comentário {self.id} do ticket {self.ticket_id}"
