"""
Django settings for the central de compras project.

Everything that changes between environments comes from environment variables
(optionally loaded from a ``.env`` file at the project root).
"""

import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / '.env')


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'y', 'on')


def _env_csv(name: str) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return []
    return [item.strip() for item in raw.split(',') if item.strip()]


SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'django-insecure-central-de-compras-dev-key')

DEBUG = _env_bool('DEBUG', True)

ENVIRONMENT = (os.getenv('ENVIRONMENT') or '').strip().lower()
if not ENVIRONMENT:
    ENVIRONMENT = 'development' if DEBUG else 'production'

ALLOWED_HOSTS = _env_csv('DJANGO_ALLOWED_HOSTS') or ['127.0.0.1', 'localhost', 'testserver']


INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'core',
    'suppliers',
    'products',
    'users',
    'stores',
    'orders',
    'campaigns',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'central.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
                'core.context_processors.navigation',
            ],
        },
    },
]

WSGI_APPLICATION = 'central.wsgi.application'


# Banco de dados: SQLite por padrão, PostgreSQL quando POSTGRES_DB estiver definido.
if os.getenv('POSTGRES_DB'):
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': os.getenv('POSTGRES_DB'),
            'USER': os.getenv('POSTGRES_USER', 'postgres'),
            'PASSWORD': os.getenv('POSTGRES_PASSWORD', ''),
            'HOST': os.getenv('POSTGRES_HOST', '127.0.0.1'),
            'PORT': os.getenv('POSTGRES_PORT', '5432'),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'db.sqlite3',
            # O ORM também é acessado pelas threads da API durante os testes.
            'TEST': {'NAME': BASE_DIR / 'test_db.sqlite3'},
        }
    }

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]


LANGUAGE_CODE = 'pt-br'
TIME_ZONE = 'America/Sao_Paulo'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'


# -----------------------------------
# API Central de Compras
# -----------------------------------
HUB_STORAGE = (os.getenv('HUB_STORAGE') or 'orm').strip().lower()
HUB_DATA_DIR = Path(os.getenv('HUB_DATA_DIR') or BASE_DIR / 'data')

API_HOST = os.getenv('HOST', '0.0.0.0')
API_PORT = int(os.getenv('PORT') or 3000)
CORS_ALLOWED_ORIGINS = _env_csv('CORS_ALLOWED_ORIGINS') or ['*']
API_EXPOSE_ERRORS = ENVIRONMENT in ('dev', 'development', 'local')

# Camada de serviços do frontend
API_BASE_URL = (os.getenv('API_BASE_URL') or f'http://127.0.0.1:{API_PORT}').rstrip('/')
API_TIMEOUT = int(os.getenv('API_TIMEOUT') or 10)


LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {'format': '%(asctime)s %(levelname)s %(name)s %(message)s'},
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'default',
        },
        'api_file': {
            'class': 'logging.FileHandler',
            'filename': os.getenv('API_LOG_FILE', str(BASE_DIR / 'central_api_debug.log')),
            'formatter': 'default',
            'level': 'INFO',
            'delay': True,
        },
    },
    'loggers': {
        'central_api': {
            'handlers': ['console', 'api_file'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'core': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
}
