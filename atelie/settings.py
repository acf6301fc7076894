"""
Configurações para o projeto Ateliê Manager.
"""

import os
from decouple import config, Csv
from pathlib import Path
from django.contrib.messages import constants as messages

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


# ====================================================================
# CONFIGURAÇÕES BÁSICAS
# ====================================================================

# A SECRET_KEY deve ser lida de uma variável de ambiente por segurança.
SECRET_KEY = config('SECRET_KEY', default='django-insecure-default-key-for-development')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config('DEBUG', default=False, cast=bool)

ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1,testserver', cast=Csv())

# Login por e-mail. Requer o app 'infrastructure' em INSTALLED_APPS.
AUTH_USER_MODEL = 'infrastructure.Usuario'


# ====================================================================
# APLICAÇÕES INSTALADAS
# ====================================================================

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Aplicações de Terceiros (Primeiro)
    'rest_framework',
    'drf_spectacular',
    'rest_framework_simplejwt',

    # Nossas Aplicações (Nessa ordem para referências de Models)
    'atelie.core.apps.CoreConfig', # Entidades e Lógica Pura
    'atelie.infrastructure.apps.InfrastructureConfig', # Models e Repositórios
    'atelie.presentation.apps.PresentationConfig', # Views, Forms, Templates
]


# ====================================================================
# MIDDLEWARE E TEMPLATES
# ====================================================================

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'atelie.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'atelie' / 'presentation' / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',

                'atelie.presentation.context_processors.atelie_context',
            ],
        },
    },
]

WSGI_APPLICATION = 'atelie.wsgi.application'


# ====================================================================
# CONFIGURAÇÃO DO BANCO DE DADOS
# ====================================================================
# SQLite por padrão; PostgreSQL (psycopg2) com DB_ENGINE=django.db.backends.postgresql

DB_ENGINE = config('DB_ENGINE', default='django.db.backends.sqlite3')

if DB_ENGINE == 'django.db.backends.sqlite3':
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME': config('DB_NAME', default=str(BASE_DIR / 'db.sqlite3')),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME': config('DB_NAME', default='atelie'),
            'USER': config('DB_USER', default='atelie'),
            'PASSWORD': config('DB_PASSWORD', default=''),
            'HOST': config('DB_HOST', default='localhost'),
            'PORT': config('DB_PORT', default='5432'),
        }
    }


# ====================================================================
# AUTENTICAÇÃO E VALIDAÇÃO DE SENHA
# ====================================================================

AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator',
    },
]

# Configurações de Autenticação
LOGIN_URL = '/login/'
LOGIN_REDIRECT_URL = '/'
LOGOUT_REDIRECT_URL = '/login/'


# ====================================================================
# INTERNACIONALIZAÇÃO
# ====================================================================

LANGUAGE_CODE = 'pt-br'

TIME_ZONE = 'America/Sao_Paulo'

USE_I18N = True

USE_TZ = True


# ====================================================================
# ARQUIVOS ESTÁTICOS (CSS, JavaScript, Imagens)
# ====================================================================

STATIC_URL = '/static/'
STATIC_ROOT = os.path.join(BASE_DIR, 'staticfiles')


# Default primary key field type
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# ====================================================================
# CONFIGURAÇÕES DO DJANGO REST FRAMEWORK (DRF) E DOCS (SPECTACULAR)
# ====================================================================

SPECTACULAR_SETTINGS = {
    'TITLE': 'API do Ateliê Manager',
    'DESCRIPTION': 'Clientes, tabela de preços, pedidos e Pix do ateliê de costura.',
    'VERSION': '1.0.0',
    'SERVE_INCLUDE_SCHEMA': False,
}

REST_FRAMEWORK = {
    # JWT é a autenticação primária para API, SessionAuth para o Admin e Views tradicionais.
    'DEFAULT_AUTHENTICATION_CLASSES': (
        'rest_framework_simplejwt.authentication.JWTAuthentication',
        'rest_framework.authentication.SessionAuthentication',
    ),
    'DEFAULT_PERMISSION_CLASSES': (
        'rest_framework.permissions.IsAuthenticated',
    ),
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
}


# ====================================================================
# CONFIGURAÇÕES DO ATELIÊ E DO PIX
# ====================================================================

NOME_ATELIE = config('NOME_ATELIE', default='Ateliê')

# Usados no BR Code quando a configuração Pix do usuário não informa nome/cidade
PIX_NOME_RECEBEDOR_PADRAO = config('PIX_NOME_RECEBEDOR_PADRAO', default='Atelie')
PIX_CIDADE_RECEBEDOR_PADRAO = config('PIX_CIDADE_RECEBEDOR_PADRAO', default='Sao Paulo')


# ====================================================================
# CONFIGURAÇÕES DE LOGGING
# ====================================================================

LOG_LEVEL = config('LOG_LEVEL', default='INFO')
LOG_FILE = config('LOG_FILE', default=str(BASE_DIR / 'logs' / 'atelie.log'))
os.makedirs(os.path.dirname(LOG_FILE), exist_ok=True)

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'file': {
            'level': LOG_LEVEL,
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': LOG_FILE,
            'maxBytes': 1024 * 1024 * 5,  # 5 MB
            'backupCount': 5,
            'formatter': 'verbose',
        },
        'console': {
            'level': LOG_LEVEL,
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {name} {message}',
            'style': '{',
        },
    },
    'loggers': {
        'django': {
            'handlers': ['file', 'console'],
            'level': 'WARNING',
            'propagate': True,
        },
        'atelie.core': {
            'handlers': ['file', 'console'],
            'level': 'INFO',
            'propagate': False,
        },
        'atelie.infrastructure': {
            'handlers': ['file', 'console'],
            'level': 'INFO',
            'propagate': False,
        },
        'atelie.presentation': {
            'handlers': ['file', 'console'],
            'level': 'INFO',
            'propagate': False,
        },
    },
}

# --- Configurações de Mensagens (Estilo Tailwind) ---
MESSAGE_TAGS = {
    messages.DEBUG: 'bg-gray-800 text-white',
    messages.INFO: 'bg-blue-500 text-white',
    messages.SUCCESS: 'bg-green-500 text-white',
    messages.WARNING: 'bg-yellow-500 text-white',
    messages.ERROR: 'bg-red-500 text-white',
}
