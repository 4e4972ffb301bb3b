"""Pytest 설정 및 공통 Fixtures"""

import pytest
from django.contrib.auth import get_user_model
from faker import Faker
from rest_framework.test import APIClient

from apps.accounts.services import AccountService
from apps.jobs.dispatcher import InMemoryJobDispatcher

User = get_user_model()
fake = Faker("ko_KR")

TEST_PASSWORD = "TestPass123!@#"


@pytest.fixture
def api_client():
    """API 클라이언트"""
    return APIClient()


@pytest.fixture
def dispatcher():
    """등록된 작업을 메모리에 보관하는 디스패처"""
    return InMemoryJobDispatcher()


@pytest.fixture
def account_service(dispatcher):
    return AccountService(dispatcher=dispatcher)


@pytest.fixture
def signup_request():
    """가입 요청 데이터"""
    return {
        "email": fake.unique.email(),
        "password": TEST_PASSWORD,
        "nickname": fake.user_name(),
        "bio": "",
    }


@pytest.fixture
def create_user(db):
    """유저 생성 팩토리"""

    def _create_user(**kwargs):
        defaults = {
            "email": fake.unique.email(),
            "nickname": fake.user_name(),
            "password": TEST_PASSWORD,
        }
        defaults.update(kwargs)
        password = defaults.pop("password")
        user = User.objects.create_user(**defaults, password=password)
        user.raw_password = password  # 테스트용으로 저장
        return user

    return _create_user


@pytest.fixture
def verified_user(create_user):
    """이메일 인증 완료된 유저"""
    user = create_user()
    user.mark_email_verified()
    return user
