#!/usr/bin/env python
"""
Setup rápido para desenvolvimento local.

Este script:
1. Configura Django settings
2. Cria banco de dados SQLite
3. Executa migrations (tabelas e gerador de código dos tickets)
4. Cria dados de exemplo (opcional)
5. Mostra estatísticas e exporta os JSON (opcional)

Uso:
    python scripts/quick_setup.py
    python scripts/quick_setup.py --with-sample-data
    python scripts/quick_setup.py --with-sample-data --export
"""

import os
import sys
import argparse

# Adicionar raiz do projeto ao path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def setup_django():
    """Configura Django para uso standalone."""
    # Forçar SQLite para desenvolvimento rápido
    os.environ.setdefault('DATABASE_URL', 'sqlite:///db.sqlite3')

    from sistema_tickets.config import configurar
    configurar()


def run_migrations():
    """Executa migrations."""
    from django.core.management import call_command

    print("📦 Executando migrations...")
    call_command('migrate', verbosity=1)
    print("✅ Migrations concluídas!")


def create_sample_data():
    """Cria usuários, categorias e tickets de exemplo."""
    from sistema_tickets.adapters.django_app.tickets.models import (
        CategoriaModel,
        UsuarioModel,
    )
    from sistema_tickets.config.container import get_container
    from sistema_tickets.core.tickets.entities import StatusTicket, TipoComentario

    print("👤 Criando usuários e categorias...")

    admin, _ = UsuarioModel.objects.get_or_create(
        email='admin@empresa.com',
        defaults={'nome': 'Administrador', 'perfil': 'ADMIN'},
    )
    tecnico, _ = UsuarioModel.objects.get_or_create(
        email='tecnico@empresa.com',
        defaults={'nome': 'Técnico de Suporte', 'perfil': 'TECNICO', 'departamento_id': 1},
    )
    usuario, _ = UsuarioModel.objects.get_or_create(
        email='joao@empresa.com',
        defaults={'nome': 'João Silva', 'perfil': 'USUARIO', 'departamento_id': 2},
    )

    categorias = {}
    for nome, cor in [
        ('Hardware', '#e74c3c'),
        ('Software', '#3498db'),
        ('Rede', '#2ecc71'),
        ('Acesso', '#f39c12'),
    ]:
        categoria, _ = CategoriaModel.objects.get_or_create(
            nome=nome,
            defaults={'descricao': f'Problemas de {nome.lower()}', 'cor': cor},
        )
        categorias[nome] = categoria

    sistema = get_container().sistema_tickets()

    sample_tickets = [
        ('Impressora não imprime', 'A impressora do 2º andar parou de imprimir.', 'Hardware'),
        ('Erro ao abrir o ERP', 'O sistema exibe erro 500 ao fazer login.', 'Software'),
        ('Wi-Fi instável', 'A conexão cai a cada poucos minutos na sala 12.', 'Rede'),
        ('Senha expirada', 'Não consigo trocar a senha do e-mail.', 'Acesso'),
    ]

    print("📝 Criando tickets de exemplo...")

    sistema.autenticar(usuario.id)
    ids = []
    for titulo, descricao, categoria in sample_tickets:
        resultado = sistema.criar_ticket(titulo, descricao, categorias[categoria].id)
        print(f"   ✓ {resultado}")
        if resultado.sucesso:
            ids.append(resultado.valor)

    # Atendimento de alguns tickets
    sistema.autenticar(tecnico.id)
    if len(ids) >= 2:
        print(f"   ✓ {sistema.atribuir_responsavel(ids[0], tecnico.id)}")
        print(f"   ✓ {sistema.adicionar_comentario(ids[0], 'Toner substituído.', TipoComentario.RESOLUCAO)}")
        print(f"   ✓ {sistema.atualizar_status_ticket(ids[0], StatusTicket.RESOLVIDO)}")
        print(f"   ✓ {sistema.atribuir_responsavel(ids[1], tecnico.id)}")

    print(f"✅ {len(ids)} tickets criados!")


def show_statistics():
    """Mostra o painel de estatísticas."""
    from sistema_tickets.config.container import get_container

    estatisticas = get_container().sistema_tickets().obter_estatisticas()

    print("\n📊 Estatísticas")
    print(f"  Total: {estatisticas.total}  |  Em aberto: {estatisticas.abertos}")
    for status, total in estatisticas.por_status.items():
        print(f"  {status.rotulo:<14} {total}")
    print(f"  Tempo médio de resolução: {estatisticas.tempo_medio_resolucao_horas:.1f}h")


def export_data(usuario_email: str):
    """Exporta tickets, usuários e categorias em JSON."""
    from sistema_tickets.adapters.django_app.tickets.models import UsuarioModel
    from sistema_tickets.config.container import get_container

    sistema = get_container().sistema_tickets()
    usuario = UsuarioModel.objects.filter(email=usuario_email).first()
    if usuario is not None:
        sistema.autenticar(usuario.id)

    print("\n💾 Exportando dados...")
    for arquivo, ok in sistema.exportar_dados().items():
        print(f"   {'✓' if ok else '✗'} {arquivo}")


def check_connection():
    """Verifica conexão com o banco."""
    from sistema_tickets.adapters.django_app.shared.database import check_database_connection

    print("🔍 Verificando conexão com o banco...")

    info = check_database_connection()
    if info["healthy"]:
        print(f"✅ Conexão OK! ({info['engine']})")
        return True

    print(f"❌ Erro de conexão: {info.get('error', info['status'])}")
    return False


def show_info():
    """Mostra informações do setup."""
    from django.conf import settings

    print("\n" + "=" * 60)
    print("📊 Informações do Setup")
    print("=" * 60)
    print(f"  Database Engine: {settings.DATABASES['default']['ENGINE']}")
    print(f"  Database Name: {settings.DATABASES['default']['NAME']}")
    print(f"  Export Dir: {settings.TICKETS_EXPORT_DIR}")
    print("=" * 60 + "\n")


def shutdown(database):
    """Libera a conexão do processo."""
    if database.is_connected():
        database.disconnect()
        print("🔌 Conexão encerrada")


def main():
    parser = argparse.ArgumentParser(description='Setup rápido para desenvolvimento')
    parser.add_argument(
        '--with-sample-data',
        action='store_true',
        help='Criar dados de exemplo'
    )
    parser.add_argument(
        '--export',
        action='store_true',
        help='Exportar tickets.json, usuarios.json e categorias.json'
    )
    parser.add_argument(
        '--export-as',
        default='admin@empresa.com',
        help='E-mail do usuário cujo escopo é usado na exportação'
    )
    parser.add_argument(
        '--check-only',
        action='store_true',
        help='Apenas verificar conexão'
    )

    args = parser.parse_args()

    print("\n" + "=" * 60)
    print("🔧 Sistema de Tickets - Quick Setup")
    print("=" * 60 + "\n")

    # Configurar Django
    setup_django()

    if args.check_only:
        check_connection()
        return

    # Verificar conexão
    if not check_connection():
        print("\n⚠️  Certifique-se de que o banco de dados está rodando.")
        print("   Para usar SQLite, defina: DATABASE_URL=sqlite:///db.sqlite3")
        return

    from sistema_tickets.config.container import get_container

    # Conexão única do processo, liberada ao sair
    database = get_container().database()
    database.connect()
    try:
        # Executar migrations
        run_migrations()

        # Criar dados de exemplo
        if args.with_sample_data:
            create_sample_data()

        show_statistics()

        if args.export:
            export_data(args.export_as)

        # Mostrar informações
        show_info()
    finally:
        shutdown(database)


if __name__ == '__main__':
    main()
