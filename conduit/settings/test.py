"""
Test settings for Conduit.

Runs against an in-memory SQLite database with a local-memory cache so
the suite needs neither PostgreSQL nor Redis.  Celery tasks execute
eagerly and the inter-mapping sync delay is disabled.
"""
from .base import *  # noqa

DEBUG = False
ALLOWED_HOSTS = ["testserver", "localhost"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    "default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"}
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

CELERY_TASK_ALWAYS_EAGER = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

SLACK_BOT_TOKEN = "xoxb-test"
HUBSPOT_ACCESS_TOKEN = "hubspot-test"
OPENAI_API_KEY = "sk-test"
FIREFLIES_API_KEY = "fireflies-test"
FIREFLIES_WEBHOOK_SECRET = "whsec-test"
CRON_SECRET = ""
SYNC_MAPPING_DELAY_SECONDS = 0
