"""
Authentication configuration for the task points tracker.

Resolves the deployment mode, the credential signing secret and the local
development bypass switch from the environment. Unsafe combinations are
rejected here so they can never reach a running process.
"""
import os
from typing import Mapping, Optional

from django.core.exceptions import ImproperlyConfigured


PRODUCTION = 'production'
DEVELOPMENT = 'development'
DEPLOYMENT_MODES = (PRODUCTION, DEVELOPMENT)

# Only ever used outside production
DEVELOPMENT_JWT_SECRET = 'development-only-insecure-secret'
DEVELOPMENT_SECRET_KEY = 'development-only-insecure-django-key'
DEFAULT_OPERATOR_EMAIL = 'operator@localhost'


def get_auth_config(environ: Optional[Mapping[str, str]] = None) -> dict:
    """
    Returns authentication settings based on environment.

    Supports:
    - DEPLOYMENT_MODE: 'production' or 'development' (default)
    - JWT_SECRET: required in production
    - DJANGO_SECRET_KEY: required in production, and must differ from
      JWT_SECRET
    - AUTH_BYPASS=true: skip credential verification and act as a fixed
      operator account; only accepted in development
    - AUTH_BYPASS_OPERATOR_EMAIL: the operator account used by the bypass

    Raises:
        ImproperlyConfigured: on an unknown mode, a missing production secret,
        a bypass requested in production, or a production Django key that is
        missing or shared with JWT_SECRET.
    """
    env = os.environ if environ is None else environ

    mode = env.get('DEPLOYMENT_MODE', DEVELOPMENT).strip().lower()
    if mode not in DEPLOYMENT_MODES:
        raise ImproperlyConfigured(
            f"DEPLOYMENT_MODE must be one of {', '.join(DEPLOYMENT_MODES)}, got '{mode}'"
        )

    bypass = env.get('AUTH_BYPASS', '').strip().lower() == 'true'
    secret = env.get('JWT_SECRET', '')
    secret_key = env.get('DJANGO_SECRET_KEY', '')

    if mode == PRODUCTION:
        if bypass:
            raise ImproperlyConfigured("AUTH_BYPASS cannot be enabled when DEPLOYMENT_MODE=production")
        if not secret:
            raise ImproperlyConfigured("JWT_SECRET is required when DEPLOYMENT_MODE=production")
        if not secret_key:
            raise ImproperlyConfigured("DJANGO_SECRET_KEY is required when DEPLOYMENT_MODE=production")
        if secret_key == secret:
            raise ImproperlyConfigured("DJANGO_SECRET_KEY must not be the same value as JWT_SECRET")

    return {
        'DEPLOYMENT_MODE': mode,
        'JWT_SECRET': secret or DEVELOPMENT_JWT_SECRET,
        'SECRET_KEY': secret_key or DEVELOPMENT_SECRET_KEY,
        'JWT_ALGORITHM': 'HS256',
        'AUTH_BYPASS': bypass,
        'AUTH_BYPASS_OPERATOR_EMAIL': env.get('AUTH_BYPASS_OPERATOR_EMAIL', DEFAULT_OPERATOR_EMAIL).strip().lower(),
    }
