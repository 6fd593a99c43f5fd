"""
Configurações para o projeto Vitrine.
"""

from decouple import config, Csv
from pathlib import Path

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


# ====================================================================
# CONFIGURAÇÕES BÁSICAS
# ====================================================================

# A SECRET_KEY deve ser lida de uma variável de ambiente por segurança.
# Ela também assina o cookie de sessão onde o carrinho fica guardado.
SECRET_KEY = config('SECRET_KEY', default='django-insecure-default-key-for-development')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config('DEBUG', default=False, cast=bool)

ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,testserver', cast=Csv())


# ====================================================================
# APLICAÇÕES INSTALADAS
# ====================================================================

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.staticfiles',

    # Aplicações de Terceiros (Primeiro)
    'rest_framework',
    'drf_spectacular',

    # Nossas Aplicações
    'vitrine.core.apps.CoreConfig', # Carrinho, preços e checkout
    'vitrine.infrastructure.apps.InfrastructureConfig', # Gateways da API remota e sessão
    'vitrine.presentation.apps.PresentationConfig', # API REST
]


# ====================================================================
# MIDDLEWARE E TEMPLATES
# ====================================================================

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'vitrine.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',

                # Badge do carrinho em todos os templates
                'vitrine.presentation.context_processors.carrinho_context',
            ],
        },
    },
]

WSGI_APPLICATION = 'vitrine.wsgi.application'


# ====================================================================
# SESSÃO (ARMAZENAMENTO DURÁVEL DO CARRINHO)
# ====================================================================

# O carrinho fica no cookie assinado: cada navegador guarda o seu, sem banco de dados.
SESSION_ENGINE = 'django.contrib.sessions.backends.signed_cookies'
SESSION_COOKIE_AGE = config('SESSION_COOKIE_AGE', default=60 * 60 * 24 * 30, cast=int)
SESSION_COOKIE_HTTPONLY = True

CART_SESSION_KEY = config('CART_SESSION_KEY', default='carrinho_vitrine')


# ====================================================================
# CACHE (MARCADOR DE CHECKOUT EM ANDAMENTO)
# ====================================================================

# LocMemCache vale por processo; com vários workers use um backend compartilhado
# (ex.: CACHE_BACKEND=django.core.cache.backends.redis.RedisCache).
CACHES = {
    'default': {
        'BACKEND': config('CACHE_BACKEND', default='django.core.cache.backends.locmem.LocMemCache'),
        'LOCATION': config('CACHE_LOCATION', default='vitrine'),
    }
}

# Segundos até o marcador expirar se o envio nunca terminar
CHECKOUT_LOCK_TIMEOUT = config('CHECKOUT_LOCK_TIMEOUT', default=60, cast=int)


# ====================================================================
# CONFIGURAÇÃO DO BANCO DE DADOS
# ====================================================================

# Nenhum modelo local: catálogo, endereços e pedidos vivem na API remota.
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}


# ====================================================================
# INTERNACIONALIZAÇÃO
# ====================================================================

LANGUAGE_CODE = 'pt-br'

TIME_ZONE = 'America/Sao_Paulo'

USE_I18N = True

USE_TZ = True


# ====================================================================
# ARQUIVOS ESTÁTICOS
# ====================================================================

STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

# Default primary key field type
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# ====================================================================
# CONFIGURAÇÕES DO DJANGO REST FRAMEWORK (DRF) E DOCS (SPECTACULAR)
# ====================================================================

SPECTACULAR_SETTINGS = {
    'TITLE': 'API da Vitrine',
    'DESCRIPTION': 'Carrinho de compras, resumo de valores e finalização de pedidos.',
    'VERSION': '1.0.0',
    'SERVE_INCLUDE_SCHEMA': False,
}

REST_FRAMEWORK = {
    # A autenticação é da API remota: o token Bearer é apenas repassado.
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'UNAUTHENTICATED_USER': None,
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
}


# ====================================================================
# CONFIGURAÇÕES DE SERVIÇOS EXTERNOS (API da loja e Logging)
# ====================================================================

# API REST de catálogo, endereços e pedidos
API_BASE_URL = config('API_BASE_URL', default='http://localhost:6154')
API_TIMEOUT = config('API_TIMEOUT', default=15, cast=float)


# Configurações de Logging
LOG_FILE = config('LOG_FILE', default='')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {
            'level': config('LOG_LEVEL', default='INFO'),
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': True,
        },
        'vitrine': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': False,
        },
    },
}

if LOG_FILE:
    LOGGING['handlers']['file'] = {
        'level': config('LOG_LEVEL', default='WARNING'),
        'class': 'logging.handlers.RotatingFileHandler',
        'filename': LOG_FILE,
        'maxBytes': 1024 * 1024 * 5,  # 5 MB
        'backupCount': 5,
        'formatter': 'verbose',
    }
    for logger in LOGGING['loggers'].values():
        logger['handlers'].append('file')
