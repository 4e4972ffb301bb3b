import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "last_login",
                    models.DateTimeField(blank=True, null=True, verbose_name="last login"),
                ),
                (
                    "is_superuser",
                    models.BooleanField(
                        default=False,
                        help_text=(
                            "Designates that this user has all permissions without "
                            "explicitly assigning them."
                        ),
                        verbose_name="superuser status",
                    ),
                ),
                (
                    "password",
                    models.CharField(
                        blank=True, max_length=128, null=True, verbose_name="password"
                    ),
                ),
                (
                    "email",
                    models.EmailField(
                        db_index=True,
                        help_text="이메일 주소 (로그인 ID)",
                        max_length=254,
                        unique=True,
                    ),
                ),
                (
                    "nickname",
                    models.CharField(blank=True, help_text="표시 이름", max_length=50),
                ),
                ("bio", models.TextField(blank=True, help_text="자기소개")),
                (
                    "email_verified",
                    models.BooleanField(default=False, help_text="이메일 인증 완료 여부"),
                ),
                (
                    "email_verified_at",
                    models.DateTimeField(
                        blank=True, help_text="이메일 인증 완료 시간", null=True
                    ),
                ),
                ("is_staff", models.BooleanField(default=False, help_text="관리자 권한")),
                ("is_active", models.BooleanField(default=True, help_text="활성 계정")),
                (
                    "date_joined",
                    models.DateTimeField(default=django.utils.timezone.now, help_text="가입일"),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "groups",
                    models.ManyToManyField(
                        blank=True,
                        help_text=(
                            "The groups this user belongs to. A user will get all permissions "
                            "granted to each of their groups."
                        ),
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.group",
                        verbose_name="groups",
                    ),
                ),
                (
                    "user_permissions",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Specific permissions for this user.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.permission",
                        verbose_name="user permissions",
                    ),
                ),
            ],
            options={
                "verbose_name": "사용자",
                "verbose_name_plural": "사용자",
                "db_table": "users",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="VerificationCode",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "code",
                    models.CharField(
                        db_index=True, help_text="인증 코드", max_length=64, unique=True
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(default=django.utils.timezone.now, editable=False),
                ),
                (
                    "user",
                    models.OneToOneField(
                        help_text="연결된 사용자",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="verification_code",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "이메일 인증 코드",
                "verbose_name_plural": "이메일 인증 코드",
                "db_table": "verification_codes",
            },
        ),
        migrations.CreateModel(
            name="PasswordResetToken",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "token",
                    models.CharField(
                        db_index=True, help_text="재설정 토큰", max_length=64, unique=True
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        db_index=True, default=django.utils.timezone.now, editable=False
                    ),
                ),
                ("is_used", models.BooleanField(default=False, help_text="사용 여부")),
                (
                    "used_at",
                    models.DateTimeField(blank=True, help_text="사용 시간", null=True),
                ),
                (
                    "user",
                    models.ForeignKey(
                        help_text="연결된 사용자",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="password_reset_tokens",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "비밀번호 재설정 토큰",
                "verbose_name_plural": "비밀번호 재설정 토큰",
                "db_table": "password_reset_tokens",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["user", "is_used"], name="idx_reset_user_is_used")
                ],
            },
        ),
    ]
