"""Test settings: in-memory SQLite, eager Celery, fast password hashing."""

from .base import *  # noqa: F401,F403

DEBUG = False

SECRET_KEY = 'test-secret-key'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

BOOKING_POLICY = {
    'LOCAL_TIME_ZONE': 'Asia/Seoul',
    'FREE_CANCELLATION_DAYS': 3,
    'PENDING_HOLD_HOURS': 24,
    'SETTLEMENT_HOLD_HOURS': 48,
    'PLATFORM_FEE_PERCENT': '0',
    'PLATFORM_FEE_FIXED': '0',
    'FEE_POLICY': 'apps.finances.fees.configured_fee_policy',
}
