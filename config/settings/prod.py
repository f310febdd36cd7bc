"""Production settings for the Staybook project.

Sensitive values must be provided via environment variables.
"""

from django.core.exceptions import ImproperlyConfigured  # type: ignore

from .base import *  # noqa: F401,F403

DEBUG = False

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', '')  # noqa: F405
if not SECRET_KEY:
    raise ImproperlyConfigured('Missing required environment variable: DJANGO_SECRET_KEY')

# Allowed hosts should be defined explicitly via environment variable
ALLOWED_HOSTS = os.environ.get('DJANGO_ALLOWED_HOSTS', '').split(',')  # noqa: F405

CSRF_COOKIE_SECURE = True
SESSION_COOKIE_SECURE = True
