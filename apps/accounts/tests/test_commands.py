"""관리 커맨드 테스트"""

from datetime import timedelta
from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase, override_settings
from django.utils import timezone

from apps.accounts.models import PasswordResetToken
from apps.jobs.models import OutboxJob, OutboxJobStatus

User = get_user_model()


@override_settings(ACCOUNTS_PASSWORD_RESET_TOKEN_TTL=timedelta(hours=1))
class CleanupExpiredTokensCommandTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(email="cleanup@test.com", password="Pass123!")

    def test_deletes_expired_and_used_reset_tokens(self):
        valid = PasswordResetToken.objects.issue(self.user, invalidate_existing=False)
        used = PasswordResetToken.objects.issue(self.user, invalidate_existing=False)
        used.mark_used()
        PasswordResetToken.objects.create(
            user=self.user,
            token=PasswordResetToken.generate_token(),
            created_at=timezone.now() - timedelta(hours=2),
        )

        out = StringIO()
        call_command("cleanup_expired_tokens", stdout=out)

        self.assertEqual(list(PasswordResetToken.objects.all()), [valid])
        self.assertIn("비밀번호 재설정 토큰: 2개", out.getvalue())

    def test_deletes_finished_jobs_past_retention(self):
        now = timezone.now()
        OutboxJob.objects.create(
            handler="accounts.send_welcome_email",
            status=OutboxJobStatus.SUCCEEDED,
            completed_at=now - timedelta(days=3),
        )
        recent = OutboxJob.objects.create(
            handler="accounts.send_welcome_email",
            status=OutboxJobStatus.SUCCEEDED,
            completed_at=now - timedelta(hours=1),
        )
        failed = OutboxJob.objects.create(
            handler="accounts.send_welcome_email",
            status=OutboxJobStatus.FAILED,
            completed_at=now - timedelta(days=30),
        )

        out = StringIO()
        call_command("cleanup_expired_tokens", "--retention-days=2", stdout=out)

        self.assertEqual(set(OutboxJob.objects.all()), {recent, failed})
        self.assertIn("완료된 작업: 1개", out.getvalue())
