"""
Adapters - Implementações de infraestrutura dos Ports do Core.

- django_app: Esquema, migrations e repositórios SQL
- exportacao: Gravação dos snapshots em JSON
"""
