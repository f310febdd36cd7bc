"""Top-level package for Django configuration.

This package holds the Staybook settings modules for each environment,
the Celery application and the WSGI entry point.
"""

# Import the Celery application as soon as Django starts so that
# shared tasks are bound to it.
from .celery import app as celery_app  # noqa: F401
