"""만료된 토큰 및 완료된 작업 삭제 커맨드"""

from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.accounts.models import PasswordResetToken
from apps.jobs.models import OutboxJob


class Command(BaseCommand):
    help = "만료/사용된 비밀번호 재설정 토큰 및 보관 기간이 지난 완료 작업 삭제"

    def add_arguments(self, parser):
        parser.add_argument(
            "--retention-days",
            type=int,
            default=settings.JOBS_RETENTION_DAYS,
            help="완료된 작업 보관 기간 (일)",
        )

    def handle(self, *args, **options):
        password_reset_count = PasswordResetToken.objects.delete_expired()

        older_than = timezone.now() - timedelta(days=options["retention_days"])
        job_count = OutboxJob.objects.delete_finished(older_than)

        self.stdout.write(
            self.style.SUCCESS(
                f"✅ 정리 완료\n"
                f"   - 비밀번호 재설정 토큰: {password_reset_count}개\n"
                f"   - 완료된 작업: {job_count}개"
            )
        )
