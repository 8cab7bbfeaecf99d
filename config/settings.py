"""
Django settings for the task points tracker.

All deployment-specific values come from the environment; see
config/auth.py and config/database.py for the parsing rules.
"""
import os
from pathlib import Path

from .auth import get_auth_config, PRODUCTION
from .database import get_database_config


BASE_DIR = Path(__file__).resolve().parent.parent

# =============================================================================
# Authentication & deployment mode
# =============================================================================

_auth = get_auth_config()

DEPLOYMENT_MODE = _auth['DEPLOYMENT_MODE']
JWT_SECRET = _auth['JWT_SECRET']
JWT_ALGORITHM = _auth['JWT_ALGORITHM']
AUTH_BYPASS = _auth['AUTH_BYPASS']
AUTH_BYPASS_OPERATOR_EMAIL = _auth['AUTH_BYPASS_OPERATOR_EMAIL']

DEBUG = DEPLOYMENT_MODE != PRODUCTION

SECRET_KEY = _auth['SECRET_KEY']

ALLOWED_HOSTS = [h for h in os.getenv('ALLOWED_HOSTS', '').split(',') if h] or (
    ['*'] if DEBUG else []
)

PORT = int(os.getenv('PORT', '4000'))

# =============================================================================
# Applications
# =============================================================================

INSTALLED_APPS = [
    'django.contrib.staticfiles',
    'ninja',
    'apps.core',
    'apps.identity',
    'apps.ledger',
    'apps.tasks',
    'apps.rewards',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'config.urls'
ASGI_APPLICATION = 'config.asgi.application'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {'context_processors': []},
    },
]

STATIC_URL = 'static/'

# =============================================================================
# Database
# =============================================================================

DATABASES = {
    'default': get_database_config(BASE_DIR),
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

USE_TZ = True
TIME_ZONE = 'UTC'
LANGUAGE_CODE = 'en-us'

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'standard',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django.db.backends': {
            'level': 'WARNING',
        },
    },
}
