"""WSGI entry point for Conduit (gunicorn, uwsgi)."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "conduit.settings.dev")

application = get_wsgi_application()
