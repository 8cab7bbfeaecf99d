import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class IdentityConfig(AppConfig):
    name = 'apps.identity'
    label = 'identity'
    default_auto_field = 'django.db.models.BigAutoField'

    def ready(self):
        if settings.AUTH_BYPASS:
            logger.warning(
                "AUTHENTICATION BYPASS IS ENABLED: every request acts as "
                f"'{settings.AUTH_BYPASS_OPERATOR_EMAIL}' without credential checks. "
                "Never use this outside local development."
            )
