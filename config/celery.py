"""Celery 앱 설정

작업 모듈은 INSTALLED_APPS의 각 앱에서 자동으로 탐색한다.
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("organice")

# CELERY_ 접두사가 붙은 Django 설정을 사용
app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()
