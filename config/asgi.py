"""
ASGI config for the task points tracker.

Served by uvicorn (see `manage.py serve`) or any other ASGI server.
"""
import os

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

from django.core.asgi import get_asgi_application

# Initialize Django at import time so the first request does not pay for it
application = get_asgi_application()
