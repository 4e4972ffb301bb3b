from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.db.models.functions import Lower
from django.utils import timezone


class UserManager(BaseUserManager):
    """커스텀 유저 매니저"""

    def create_user(self, email, password=None, **extra_fields):
        """일반 유저 생성 - password가 None이면 비밀번호 미설정 상태로 생성"""
        if not email:
            raise ValueError("이메일은 필수입니다")

        email = self.normalize_email(email)

        user = self.model(email=email, **extra_fields)
        if password is None:
            user.password = None
        else:
            user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """슈퍼유저 생성"""
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)
        extra_fields.setdefault("email_verified", True)

        return self.create_user(email, password, **extra_fields)

    def get_by_email(self, email, *, for_update=False):
        """이메일로 유저 조회 (대소문자 무시), 없으면 None

        for_update=True면 행 잠금 - 같은 유저에 대한 토큰 발급을 직렬화
        """
        queryset = self.filter(email__iexact=email.strip())
        if for_update:
            queryset = queryset.select_for_update()
        return queryset.first()

    def email_exists(self, email) -> bool:
        return self.filter(email__iexact=email.strip()).exists()


class User(AbstractBaseUser, PermissionsMixin):
    """커스텀 유저 모델 - 이메일 로그인

    Note:
    - password가 NULL이면 아직 비밀번호를 설정하지 않은 계정
    - 이메일 인증 전에는 email_verified = False
    """

    # NULL 허용: 외부 경로로 생성된 계정은 비밀번호 없이 시작
    password = models.CharField("password", max_length=128, null=True, blank=True)

    email = models.EmailField(
        unique=True,
        db_index=True,
        help_text="이메일 주소 (로그인 ID)",
    )
    nickname = models.CharField(max_length=50, blank=True, help_text="표시 이름")
    bio = models.TextField(blank=True, help_text="자기소개")

    # 이메일 인증
    email_verified = models.BooleanField(default=False, help_text="이메일 인증 완료 여부")
    email_verified_at = models.DateTimeField(
        null=True, blank=True, help_text="이메일 인증 완료 시간"
    )

    # Django Admin용 필드
    is_staff = models.BooleanField(default=False, help_text="관리자 권한")
    is_active = models.BooleanField(default=True, help_text="활성 계정")
    date_joined = models.DateTimeField(default=timezone.now, help_text="가입일")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = []

    # 프로필 수정으로 바꿀 수 있는 필드
    PROFILE_FIELDS = ("nickname", "bio")

    class Meta:
        db_table = "users"
        verbose_name = "사용자"
        verbose_name_plural = "사용자"
        ordering = ["-created_at"]
        constraints = [
            # 대소문자만 다른 이메일 중복 가입 방지
            models.UniqueConstraint(Lower("email"), name="uniq_users_email_lower"),
        ]

    def __str__(self):
        return f"{self.nickname or '-'} ({self.email})"

    def has_usable_password(self):
        return self.password is not None and super().has_usable_password()

    def check_password(self, raw_password):
        if self.password is None:
            return False
        return super().check_password(raw_password)

    def mark_email_verified(self):
        """이메일 인증 완료 처리 (이미 인증된 경우 인증 시간 유지)"""
        if not self.email_verified:
            self.email_verified = True
            self.email_verified_at = timezone.now()
            self.save(update_fields=["email_verified", "email_verified_at", "updated_at"])
