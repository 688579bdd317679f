"""
ASGI config for the central project (web frontend and admin).

The REST API is a separate ASGI app: see ``central_api``.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'central.settings')

application = get_asgi_application()
