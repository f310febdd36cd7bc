"""Development settings for the Staybook project.

Enables debug and verbose application logging. Do not use these settings
in production!
"""

from .base import *  # noqa: F401,F403

DEBUG = True

ALLOWED_HOSTS = ['*']

LOGGING['loggers']['apps']['level'] = 'DEBUG'  # noqa: F405
