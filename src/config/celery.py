"""
Celery application for the ordering backend.

``DJANGO_SETTINGS_MODULE`` is set before the app is instantiated so the
worker reads Django settings (``CELERY_`` prefix).  Notification emails
are delivered by tasks discovered from each installed app.
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("kava_ordering")

app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()
