import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("staybook")

# Picks up CELERY_* settings, including CELERY_BEAT_SCHEDULE:
#   bookings.expire_pending_bookings   every 5 minutes
#   bookings.complete_finished_bookings hourly at :15
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()
