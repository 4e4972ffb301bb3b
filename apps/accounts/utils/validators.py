"""비밀번호 검증 유틸리티"""

import string

from rest_framework import serializers

PASSWORD_MIN_LENGTH = 8


def validate_password_strength(password: str) -> str:
    """비밀번호 강도 검증

    요구사항:
    - 최소 8자 이상
    - 영문자 1개 이상
    - 숫자 1개 이상
    - 특수문자 1개 이상

    Raises:
        serializers.ValidationError: 비밀번호가 요구사항을 충족하지 않을 때
    """
    if len(password) < PASSWORD_MIN_LENGTH:
        raise serializers.ValidationError(
            f"비밀번호는 최소 {PASSWORD_MIN_LENGTH}자 이상이어야 합니다."
        )

    if not any(c.isalpha() for c in password):
        raise serializers.ValidationError("비밀번호에 영문자가 최소 1개 포함되어야 합니다.")

    if not any(c.isdigit() for c in password):
        raise serializers.ValidationError("비밀번호에 숫자가 최소 1개 포함되어야 합니다.")

    if not any(c in string.punctuation for c in password):
        raise serializers.ValidationError("비밀번호에 특수문자가 최소 1개 포함되어야 합니다.")

    return password


def validate_password_confirmation(attrs: dict, field: str, confirm_field: str) -> dict:
    """비밀번호 확인 필드 일치 검증"""
    if attrs[field] != attrs[confirm_field]:
        raise serializers.ValidationError({field: "비밀번호가 일치하지 않습니다."})
    return attrs
