"""
Django 설정 파일 (config 프로젝트)

Django 'django-admin startproject' 명령으로 생성됨.

이 파일에 대한 자세한 정보:
https://docs.djangoproject.com/en/stable/topics/settings/

전체 설정 목록 및 값:
https://docs.djangoproject.com/en/stable/ref/settings/
"""

import os
from datetime import timedelta
from pathlib import Path

from celery.schedules import crontab
from dotenv import load_dotenv

# 환경 변수 로드
load_dotenv()

# 프로젝트 기본 경로 설정: BASE_DIR / 'subdir' 형태로 사용
BASE_DIR = Path(__file__).resolve().parent.parent


# 개발 환경 빠른 설정 - 프로덕션에는 부적합
# 배포 체크리스트: https://docs.djangoproject.com/en/stable/howto/deployment/checklist/

# 보안 경고: 프로덕션 환경에서는 시크릿 키를 반드시 비밀로 유지할 것!
SECRET_KEY = os.getenv(
    "SECRET_KEY", "django-insecure-7x!q2m#v0l@k9t$e4p8w3s1d6r5u=h0n(f)zj^b2c%a+y-g"
)

# 보안 경고: 프로덕션 환경에서는 DEBUG를 켜지 말 것!
DEBUG = os.getenv("DEBUG", "True") == "True"

ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "*").split(",")


# 애플리케이션 정의

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "drf_spectacular",
    "corsheaders",
    "apps.accounts",
    "apps.jobs",  # 비동기 작업 (outbox + Celery)
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"


# 데이터베이스
# https://docs.djangoproject.com/en/stable/ref/settings/#databases

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("DB_NAME", "organice"),
        "USER": os.getenv("DB_USER", "postgres"),
        "PASSWORD": os.getenv("DB_PASSWORD", "postgres"),
        "HOST": os.getenv("DB_HOST", "localhost"),  # 하이브리드: localhost, Docker: "db"
        "PORT": os.getenv("DB_PORT", "5432"),
    }
}


# 비밀번호 검증
# 커스텀 검증을 Serializer에서 처리하므로 Django 기본 validators는 비활성화

AUTH_PASSWORD_VALIDATORS = []


# 국제화 (i18n)

LANGUAGE_CODE = "ko-kr"

TIME_ZONE = "Asia/Seoul"

USE_I18N = True

USE_TZ = True


# 정적 파일 (CSS, JavaScript, Images)

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# 기본 Primary Key 필드 타입
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Redis
REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))

# CORS 설정
CORS_ALLOW_ALL_ORIGINS = DEBUG
CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:3000").split(",")

# WhiteNoise 설정
STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage",
    },
}

# 인증 설정
AUTH_USER_MODEL = "accounts.User"

# Django REST Framework 설정
REST_FRAMEWORK = {
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.SessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticatedOrReadOnly",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "EXCEPTION_HANDLER": "apps.accounts.exceptions.api_exception_handler",
}

# Swagger/OpenAPI 설정
SPECTACULAR_SETTINGS = {
    "TITLE": "Organice Accounts API",
    "DESCRIPTION": "회원가입, 이메일 인증, 비밀번호 재설정 API",
    "VERSION": "0.1.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "SCHEMA_PATH_PREFIX": r"/api",
}

# 이메일 설정
EMAIL_BACKEND = os.getenv("EMAIL_BACKEND", "django.core.mail.backends.console.EmailBackend")
EMAIL_HOST = os.getenv("EMAIL_HOST", "smtp.gmail.com")
EMAIL_PORT = int(os.getenv("EMAIL_PORT", "587"))
EMAIL_USE_TLS = os.getenv("EMAIL_USE_TLS", "True") == "True"
EMAIL_HOST_USER = os.getenv("EMAIL_HOST_USER", "")
EMAIL_HOST_PASSWORD = os.getenv("EMAIL_HOST_PASSWORD", "")
DEFAULT_FROM_EMAIL = os.getenv("DEFAULT_FROM_EMAIL", "no-reply@organice.app")

# 프론트엔드 URL (이메일 링크용)
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

# 계정 토큰 정책
ACCOUNTS_PASSWORD_RESET_TOKEN_TTL = timedelta(
    minutes=int(os.getenv("PASSWORD_RESET_TOKEN_TTL_MINUTES", "60"))
)
# 새 재설정 토큰 발급 시 기존 미사용 토큰 무효화
ACCOUNTS_INVALIDATE_PREVIOUS_RESET_TOKENS = (
    os.getenv("ACCOUNTS_INVALIDATE_PREVIOUS_RESET_TOKENS", "True") == "True"
)

# Celery 설정 (Redis 브로커)
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", f"redis://{REDIS_HOST}:{REDIS_PORT}/2")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", CELERY_BROKER_URL)
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_TIMEZONE = TIME_ZONE
CELERY_TASK_ACKS_LATE = True
CELERY_BEAT_SCHEDULE = {
    "relay-pending-jobs": {
        "task": "apps.jobs.tasks.relay_pending_jobs",
        "schedule": timedelta(minutes=1),
    },
    "cleanup-finished-jobs": {
        "task": "apps.jobs.tasks.cleanup_finished_jobs",
        "schedule": crontab(hour=4, minute=0),
    },
}

# 작업 디스패처 설정
JOBS_DISPATCHER = os.getenv("JOBS_DISPATCHER", "apps.jobs.dispatcher.OutboxJobDispatcher")
JOBS_MAX_RETRIES = int(os.getenv("JOBS_MAX_RETRIES", "5"))
# 커밋 후 발행이 실패한 pending 작업을 재발행하기까지 대기 시간
JOBS_RELAY_GRACE_SECONDS = int(os.getenv("JOBS_RELAY_GRACE_SECONDS", "60"))
# 완료된 작업 보관 기간
JOBS_RETENTION_DAYS = int(os.getenv("JOBS_RETENTION_DAYS", "7"))

# 로깅
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name} {process:d} {thread:d} {message}",
            "style": "{",
        },
        "simple": {
            "format": "{asctime} {levelname} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "level": LOG_LEVEL,
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "django.db.backends": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
        "apps": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "celery": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}
