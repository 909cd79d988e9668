"""
Migration inicial para o domínio de Tickets.

Cria as tabelas:
- categorias: Categorias de ticket
- usuarios: Usuários do sistema
- tickets: Tabela principal de tickets
- comentarios: Comentários de tickets

Também instala o gerador do código legível (TK-000042) como trigger
do banco, para SQLite e PostgreSQL.
"""

import logging

from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone

logger = logging.getLogger(__name__)


SQLITE_CRIAR_TRIGGER = """
CREATE TRIGGER IF NOT EXISTS tickets_gerar_codigo
AFTER INSERT ON tickets
FOR EACH ROW WHEN NEW.codigo IS NULL
BEGIN
    UPDATE tickets
    SET codigo = 'TK-' || substr('000000' || NEW.id, -6, 6)
    WHERE id = NEW.id;
END
"""

SQLITE_REMOVER_TRIGGER = "DROP TRIGGER IF EXISTS tickets_gerar_codigo"

POSTGRESQL_CRIAR_TRIGGER = [
    """
    CREATE OR REPLACE FUNCTION tickets_gerar_codigo() RETURNS trigger AS $$
    BEGIN
        IF NEW.codigo IS NULL THEN
            NEW.codigo := 'TK-' || LPAD(NEW.id::text, 6, '0');
        END IF;
        RETURN NEW;
    END;
    $$ LANGUAGE plpgsql
    """,
    """
    CREATE TRIGGER tickets_gerar_codigo
    BEFORE INSERT ON tickets
    FOR EACH ROW EXECUTE FUNCTION tickets_gerar_codigo()
    """,
]

POSTGRESQL_REMOVER_TRIGGER = [
    "DROP TRIGGER IF EXISTS tickets_gerar_codigo ON tickets",
    "DROP FUNCTION IF EXISTS tickets_gerar_codigo()",
]


def _executar(schema_editor, instrucoes):
    with schema_editor.connection.cursor() as cursor:
        for sql in instrucoes:
            cursor.execute(sql)


def criar_trigger_codigo(apps, schema_editor):
    vendor = schema_editor.connection.vendor
    if vendor == 'sqlite':
        _executar(schema_editor, [SQLITE_CRIAR_TRIGGER])
    elif vendor == 'postgresql':
        _executar(schema_editor, POSTGRESQL_CRIAR_TRIGGER)
    else:
        logger.warning(
            f"Gerador de código de ticket não disponível para '{vendor}'; "
            f"a coluna codigo ficará vazia"
        )


def remover_trigger_codigo(apps, schema_editor):
    vendor = schema_editor.connection.vendor
    if vendor == 'sqlite':
        _executar(schema_editor, [SQLITE_REMOVER_TRIGGER])
    elif vendor == 'postgresql':
        _executar(schema_editor, POSTGRESQL_REMOVER_TRIGGER)


class Migration(migrations.Migration):
    """Migration inicial."""

    initial = True

    dependencies = [
    ]

    operations = [
        # =================================================================
        # Tabela: categorias
        # =================================================================
        migrations.CreateModel(
            name='CategoriaModel',
            fields=[
                ('id', models.BigAutoField(
                    auto_created=True,
                    primary_key=True,
                    serialize=False,
                    verbose_name='ID'
                )),
                ('nome', models.CharField(max_length=100)),
                ('descricao', models.TextField(blank=True, default='')),
                ('cor', models.CharField(max_length=7, default='#95a5a6')),
                ('ativa', models.BooleanField(default=True, db_index=True)),
            ],
            options={
                'verbose_name': 'Categoria',
                'verbose_name_plural': 'Categorias',
                'db_table': 'categorias',
                'ordering': ['id'],
            },
        ),

        # =================================================================
        # Tabela: usuarios
        # =================================================================
        migrations.CreateModel(
            name='UsuarioModel',
            fields=[
                ('id', models.BigAutoField(
                    auto_created=True,
                    primary_key=True,
                    serialize=False,
                    verbose_name='ID'
                )),
                ('nome', models.CharField(max_length=150)),
                ('email', models.EmailField(max_length=254, unique=True)),
                ('perfil', models.CharField(
                    max_length=20,
                    choices=[
                        ('USUARIO', 'Usuário'),
                        ('TECNICO', 'Técnico'),
                        ('ADMIN', 'Administrador'),
                    ],
                    default='USUARIO',
                )),
                ('departamento_id', models.IntegerField(null=True, blank=True)),
                ('ativo', models.BooleanField(default=True)),
                ('data_criacao', models.DateTimeField(
                    default=django.utils.timezone.now
                )),
            ],
            options={
                'verbose_name': 'Usuário',
                'verbose_name_plural': 'Usuários',
                'db_table': 'usuarios',
                'ordering': ['id'],
            },
        ),

        # =================================================================
        # Tabela: tickets
        # =================================================================
        migrations.CreateModel(
            name='TicketModel',
            fields=[
                ('id', models.BigAutoField(
                    auto_created=True,
                    primary_key=True,
                    serialize=False,
                    verbose_name='ID'
                )),
                ('codigo', models.CharField(
                    max_length=20,
                    unique=True,
                    null=True,
                    blank=True,
                    help_text='Gerado pelo banco na inserção'
                )),
                ('titulo', models.CharField(max_length=200)),
                ('descricao', models.TextField()),
                ('status', models.CharField(
                    max_length=20,
                    choices=[
                        ('ABERTO', 'Aberto'),
                        ('EM_ANDAMENTO', 'Em Andamento'),
                        ('RESOLVIDO', 'Resolvido'),
                        ('FECHADO', 'Fechado'),
                    ],
                    default='ABERTO',
                    db_index=True,
                )),
                ('prioridade', models.CharField(
                    max_length=20,
                    choices=[
                        ('BAIXA', 'Baixa'),
                        ('MEDIA', 'Média'),
                        ('ALTA', 'Alta'),
                        ('CRITICA', 'Crítica'),
                    ],
                    default='MEDIA',
                    db_index=True,
                )),
                ('categoria', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='tickets',
                    to='tickets.categoriamodel',
                )),
                ('solicitante', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='tickets_solicitados',
                    to='tickets.usuariomodel',
                )),
                ('responsavel', models.ForeignKey(
                    on_delete=django.db.models.deletion.SET_NULL,
                    null=True,
                    blank=True,
                    related_name='tickets_atribuidos',
                    to='tickets.usuariomodel',
                )),
                ('data_criacao', models.DateTimeField(
                    default=django.utils.timezone.now,
                    db_index=True
                )),
                ('data_atualizacao', models.DateTimeField(
                    default=django.utils.timezone.now
                )),
                ('data_resolucao', models.DateTimeField(null=True, blank=True)),
            ],
            options={
                'verbose_name': 'Ticket',
                'verbose_name_plural': 'Tickets',
                'db_table': 'tickets',
                'ordering': ['id'],
            },
        ),

        # =================================================================
        # Tabela: comentarios
        # =================================================================
        migrations.CreateModel(
            name='ComentarioModel',
            fields=[
                ('id', models.BigAutoField(
                    auto_created=True,
                    primary_key=True,
                    serialize=False,
                    verbose_name='ID'
                )),
                ('conteudo', models.TextField()),
                ('tipo', models.CharField(
                    max_length=20,
                    choices=[
                        ('COMENTARIO', 'Comentário'),
                        ('RESOLUCAO', 'Resolução'),
                        ('INTERNO', 'Interno'),
                    ],
                    default='COMENTARIO',
                )),
                ('data', models.DateTimeField(default=django.utils.timezone.now)),
                ('ticket', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='comentarios',
                    to='tickets.ticketmodel',
                )),
                ('usuario', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='comentarios',
                    to='tickets.usuariomodel',
                )),
            ],
            options={
                'verbose_name': 'Comentário',
                'verbose_name_plural': 'Comentários',
                'db_table': 'comentarios',
                'ordering': ['id'],
            },
        ),

        # =================================================================
        # Gerador do código legível
        # =================================================================
        migrations.RunPython(criar_trigger_codigo, remover_trigger_codigo),
    ]
