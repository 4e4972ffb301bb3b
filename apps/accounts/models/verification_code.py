"""이메일 인증 코드 모델"""

import secrets

from django.conf import settings
from django.db import models
from django.utils import timezone


class VerificationCodeManager(models.Manager):
    """이메일 인증 코드 매니저"""

    def issue(self, user):
        """회원가입 시 인증 코드 발급 (유저당 1개)"""
        return self.create(user=user, code=self.model.generate_code())

    def find_by_code(self, code, *, for_update=False):
        """코드로 조회, 없으면 None

        for_update=True면 행 잠금 - 동시 인증 요청을 직렬화
        """
        queryset = self.select_related("user")
        if for_update:
            queryset = queryset.select_for_update()
        return queryset.filter(code=code).first()


class VerificationCode(models.Model):
    """이메일 인증 코드 - 인증 성공 시 삭제"""

    objects = VerificationCodeManager()

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="verification_code",
        help_text="연결된 사용자",
    )

    code = models.CharField(max_length=64, unique=True, db_index=True, help_text="인증 코드")

    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        db_table = "verification_codes"
        verbose_name = "이메일 인증 코드"
        verbose_name_plural = "이메일 인증 코드"

    def __str__(self):
        return f"{self.user.email} - {self.created_at.strftime('%Y-%m-%d %H:%M')}"

    @classmethod
    def generate_code(cls):
        return secrets.token_urlsafe(48)
