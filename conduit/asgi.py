"""
ASGI entry point for Conduit.

The default settings module is the development configuration; set
DJANGO_SETTINGS_MODULE=conduit.settings.prod in deployment.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "conduit.settings.dev")

application = get_asgi_application()
