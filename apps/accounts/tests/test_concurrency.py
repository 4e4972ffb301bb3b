"""동시 요청 테스트

SQLite는 select_for_update를 무시하므로 PostgreSQL(TEST_DB=postgres)에서만 실행한다.
"""

import threading
from unittest import skipUnless

from django.contrib.auth import get_user_model
from django.db import connection, connections
from django.test import TransactionTestCase

from apps.accounts.exceptions import InvalidToken
from apps.accounts.models import PasswordResetToken, VerificationCode
from apps.accounts.services import AccountService
from apps.jobs.dispatcher import InMemoryJobDispatcher

User = get_user_model()


def run_concurrently(*funcs):
    """각 함수를 별도 스레드(별도 DB 연결)에서 동시에 실행하고 결과 또는 예외를 반환"""
    barrier = threading.Barrier(len(funcs))
    results = [None] * len(funcs)

    def worker(index, func):
        try:
            barrier.wait()
            results[index] = func()
        except Exception as exc:
            results[index] = exc
        finally:
            connections.close_all()

    threads = [threading.Thread(target=worker, args=(i, f)) for i, f in enumerate(funcs)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return results


@skipUnless(connection.vendor == "postgresql", "행 잠금은 PostgreSQL에서만 검증 가능")
class ConcurrentTokenUseTest(TransactionTestCase):
    def setUp(self):
        self.service = AccountService(dispatcher=InMemoryJobDispatcher())
        self.user = User.objects.create_user(email="race@test.com", password="OldPass123!")

    def test_same_code_verified_once(self):
        code = VerificationCode.objects.issue(self.user).code

        results = run_concurrently(
            lambda: self.service.verify_email(code),
            lambda: self.service.verify_email(code),
        )

        self.assertEqual(results.count(None), 1)
        self.assertEqual(sum(isinstance(r, InvalidToken) for r in results), 1)
        self.user.refresh_from_db()
        self.assertTrue(self.user.email_verified)

    def test_same_reset_token_used_once(self):
        token = PasswordResetToken.objects.issue(self.user).token

        results = run_concurrently(
            lambda: self.service.reset_password(token, "FirstPass123!"),
            lambda: self.service.reset_password(token, "SecondPass123!"),
        )

        self.assertEqual(results.count(None), 1)
        self.assertEqual(sum(isinstance(r, InvalidToken) for r in results), 1)
        winner = "FirstPass123!" if results[0] is None else "SecondPass123!"
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password(winner))

    def test_concurrent_forgot_password_leaves_one_live_token(self):
        results = run_concurrently(
            lambda: self.service.forgot_password(self.user.email),
            lambda: self.service.forgot_password(self.user.email),
        )

        self.assertTrue(all(isinstance(r, PasswordResetToken) for r in results))
        live_tokens = PasswordResetToken.objects.filter(user=self.user, is_used=False)
        self.assertEqual(live_tokens.count(), 1)
