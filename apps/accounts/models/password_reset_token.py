"""비밀번호 재설정 토큰 모델"""

import secrets

from django.conf import settings
from django.db import models
from django.utils import timezone


def reset_token_ttl():
    """재설정 토큰 유효 기간 (settings.ACCOUNTS_PASSWORD_RESET_TOKEN_TTL)"""
    return settings.ACCOUNTS_PASSWORD_RESET_TOKEN_TTL


class PasswordResetTokenManager(models.Manager):
    """비밀번호 재설정 토큰 매니저"""

    def issue(self, user, *, invalidate_existing=True):
        """새 토큰 발급

        Args:
            user: 연결된 사용자
            invalidate_existing: 기존 미사용 토큰 무효화 여부
        """
        if invalidate_existing:
            self.invalidate_for_user(user)
        return self.create(user=user, token=self.model.generate_token())

    def invalidate_for_user(self, user) -> int:
        """사용자의 미사용 토큰을 모두 사용 처리"""
        return self.filter(user=user, is_used=False).update(is_used=True, used_at=timezone.now())

    def find_by_token(self, token, *, for_update=False):
        """토큰 문자열로 조회, 없으면 None

        for_update=True면 행 잠금 - 같은 토큰의 동시 사용을 직렬화
        """
        queryset = self.select_related("user")
        if for_update:
            queryset = queryset.select_for_update()
        return queryset.filter(token=token).first()

    def delete_expired(self, now=None):
        """만료된 토큰 삭제 (유효 기간이 지났거나 사용된 토큰)"""
        now = now or timezone.now()
        deleted_count, _ = self.filter(
            models.Q(created_at__lte=now - reset_token_ttl()) | models.Q(is_used=True)
        ).delete()
        return deleted_count


class PasswordResetToken(models.Model):
    """비밀번호 재설정 토큰

    만료 여부는 created_at과 유효 기간만으로 결정된다.
    """

    objects = PasswordResetTokenManager()

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="password_reset_tokens",
        help_text="연결된 사용자",
    )

    token = models.CharField(max_length=64, unique=True, db_index=True, help_text="재설정 토큰")

    created_at = models.DateTimeField(default=timezone.now, editable=False, db_index=True)

    is_used = models.BooleanField(default=False, help_text="사용 여부")
    used_at = models.DateTimeField(null=True, blank=True, help_text="사용 시간")

    class Meta:
        db_table = "password_reset_tokens"
        ordering = ["-created_at"]
        verbose_name = "비밀번호 재설정 토큰"
        verbose_name_plural = "비밀번호 재설정 토큰"
        indexes = [
            models.Index(fields=["user", "is_used"], name="idx_reset_user_is_used"),
        ]

    def __str__(self):
        return f"{self.user.email} - {self.created_at.strftime('%Y-%m-%d %H:%M')}"

    @property
    def expires_at(self):
        return self.created_at + reset_token_ttl()

    def is_expired(self, now=None):
        """now >= created_at + TTL 이면 만료"""
        return (now or timezone.now()) >= self.expires_at

    def is_valid(self, now=None):
        """토큰 유효성 (미사용 + 미만료)"""
        return not self.is_used and not self.is_expired(now)

    def mark_used(self):
        self.is_used = True
        self.used_at = timezone.now()
        self.save(update_fields=["is_used", "used_at"])

    @classmethod
    def generate_token(cls):
        return secrets.token_urlsafe(48)
