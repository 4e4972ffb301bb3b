# Django 시작 시 Celery 앱을 로드해 shared_task가 이 앱을 사용하도록 함
from .celery import app as celery_app

__all__ = ["celery_app"]
