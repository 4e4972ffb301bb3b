from rest_framework import serializers

from apps.accounts.models import User
from apps.accounts.utils.validators import (
    validate_password_confirmation,
    validate_password_strength,
)


class UserSerializer(serializers.ModelSerializer):
    """사용자 정보 응답 (비밀번호 해시 미포함)"""

    verified = serializers.BooleanField(source="email_verified", read_only=True)

    class Meta:
        model = User
        fields = (
            "id",
            "email",
            "nickname",
            "bio",
            "verified",
            "created_at",
        )
        read_only_fields = ("id", "email", "nickname", "bio", "created_at")


class UserSignUpSerializer(serializers.Serializer):
    """회원가입 요청

    이메일 중복은 서비스에서 409로 처리하므로 여기서는 형식만 검사한다.
    """

    email = serializers.EmailField(help_text="이메일 주소")
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
        help_text="비밀번호 (최소 8자, 영문자, 숫자, 특수문자 각 1개 이상)",
    )
    password2 = serializers.CharField(
        write_only=True, style={"input_type": "password"}, help_text="비밀번호 확인"
    )
    nickname = serializers.CharField(
        max_length=50, required=False, allow_blank=True, help_text="표시 이름"
    )
    bio = serializers.CharField(required=False, allow_blank=True, help_text="자기소개")

    def validate_email(self, value):
        return value.strip()

    def validate_password(self, value):
        return validate_password_strength(value)

    def validate(self, attrs):
        attrs = validate_password_confirmation(attrs, "password", "password2")
        attrs.pop("password2")
        return attrs


class ProfileUpdateSerializer(serializers.Serializer):
    """프로필 수정 - 인증 정보/인증 상태는 수정 불가"""

    nickname = serializers.CharField(max_length=50, required=False, allow_blank=True)
    bio = serializers.CharField(required=False, allow_blank=True)


class EmailVerificationSerializer(serializers.Serializer):
    """이메일 인증 확인"""

    code = serializers.CharField(help_text="이메일로 받은 인증 코드")


class PasswordResetRequestSerializer(serializers.Serializer):
    """비밀번호 재설정 요청"""

    email = serializers.EmailField(help_text="가입된 이메일 주소")


class PasswordResetConfirmSerializer(serializers.Serializer):
    """비밀번호 재설정 확인"""

    token = serializers.CharField(help_text="이메일로 받은 토큰")
    new_password = serializers.CharField(
        write_only=True, help_text="새 비밀번호 (최소 8자, 영문자, 숫자, 특수문자 각 1개 이상)"
    )
    new_password2 = serializers.CharField(write_only=True, help_text="비밀번호 확인")

    def validate_new_password(self, value):
        return validate_password_strength(value)

    def validate(self, attrs):
        return validate_password_confirmation(attrs, "new_password", "new_password2")


class PasswordChangeSerializer(serializers.Serializer):
    """비밀번호 변경 (로그인 상태)

    비밀번호가 아직 없는 계정은 current_password 없이 설정할 수 있다.
    """

    current_password = serializers.CharField(
        write_only=True, required=False, allow_blank=True, help_text="현재 비밀번호"
    )
    new_password = serializers.CharField(write_only=True, help_text="새 비밀번호")
    new_password2 = serializers.CharField(write_only=True, help_text="비밀번호 확인")

    def validate_new_password(self, value):
        return validate_password_strength(value)

    def validate(self, attrs):
        return validate_password_confirmation(attrs, "new_password", "new_password2")


class MessageSerializer(serializers.Serializer):
    message = serializers.CharField()
