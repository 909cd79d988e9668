"""
Django Settings para o Sistema de Tickets.

O Django é usado como camada de infraestrutura: conexão com o banco,
esquema (models e migrations) e logging. Não há views nem URLs.
Usa variáveis de ambiente (arquivo .env) para configurações sensíveis.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

from sistema_tickets.adapters.django_app.shared.database import DatabaseConfig

# Carregar variáveis de ambiente
load_dotenv()

# =============================================================================
# Caminhos Base
# =============================================================================

# Raiz do projeto (onde fica o pyproject.toml)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# =============================================================================
# Segurança
# =============================================================================

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv(
    'SECRET_KEY',
    'django-insecure-dev-key-change-in-production-please'
)

DEBUG = os.getenv('DEBUG', 'False').lower() in ('true', '1', 'yes')

# =============================================================================
# Aplicações
# =============================================================================

LOCAL_APPS = [
    'sistema_tickets.adapters.django_app.tickets',
]

INSTALLED_APPS = LOCAL_APPS

# =============================================================================
# Banco de Dados
# =============================================================================

# Configuração flexível: suporta DATABASE_URL ou variáveis individuais
DATABASE_CONFIG = DatabaseConfig.from_env()

_database = DATABASE_CONFIG.to_django_config()
if DATABASE_CONFIG.engine == 'sqlite' and _database['NAME'] != ':memory:':
    _database['NAME'] = BASE_DIR / _database['NAME']

DATABASES = {
    'default': _database,
}

# Alias de conexão usado pelos repositórios SQL
TICKETS_DB_ALIAS = os.getenv('TICKETS_DB_ALIAS', 'default')

# =============================================================================
# Internacionalização
# =============================================================================

LANGUAGE_CODE = 'pt-br'
TIME_ZONE = 'America/Sao_Paulo'
USE_I18N = True
USE_TZ = True

# =============================================================================
# Default Primary Key
# =============================================================================

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {asctime} {module} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'sistema_tickets.core': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'sistema_tickets.adapters': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}

# =============================================================================
# Exportação (Domain)
# =============================================================================

# Diretório dos arquivos tickets.json, usuarios.json e categorias.json
TICKETS_EXPORT_DIR = os.getenv('TICKETS_EXPORT_DIR', 'data')
