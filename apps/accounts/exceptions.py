"""계정 API 예외

모든 예외는 DRF APIException 이라 뷰에서 그대로 던지면
status + {"detail", "code"} 응답으로 변환된다.
transaction.atomic 블록 안에서 던지면 해당 작업은 롤백된다.
"""

import logging

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class AccountError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "잘못된 요청입니다."
    default_code = "account_error"


class InvalidToken(AccountError):
    """존재하지 않거나 이미 사용된 토큰/인증 코드 (자격 증명이므로 404가 아닌 400)"""

    default_detail = "유효하지 않은 토큰입니다."
    default_code = "invalid_token"


class ExpiredToken(AccountError):
    default_detail = "만료된 토큰입니다. 비밀번호 재설정을 다시 요청해주세요."
    default_code = "token_expired"


class InvalidCredential(AccountError):
    default_detail = "비밀번호가 일치하지 않습니다."
    default_code = "wrong_password"


class NotFound(AccountError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "대상을 찾을 수 없습니다."
    default_code = "not_found"


class Conflict(AccountError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "이미 사용 중인 이메일입니다."
    default_code = "conflict"


def api_exception_handler(exc, context):
    """DRF 기본 핸들러 + 계정 예외에 code 필드 추가"""
    response = exception_handler(exc, context)

    if response is not None and isinstance(exc, AccountError):
        response.data["code"] = exc.detail.code
        view = context.get("view")
        logger.info(
            "계정 요청 실패: view=%s status=%s code=%s",
            type(view).__name__ if view else None,
            exc.status_code,
            exc.detail.code,
        )

    return response


__all__ = [
    "AccountError",
    "Conflict",
    "ExpiredToken",
    "InvalidCredential",
    "InvalidToken",
    "NotFound",
    "ValidationError",
    "api_exception_handler",
]
