"""WSGI config for the Staybook booking service.

Exposes the WSGI application for Django's runserver and production WSGI
servers, pointing at the project's settings package.
"""

import os
from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.dev')

application = get_wsgi_application()
