"""계정 이메일 작업

작업 요청에는 원본 토큰이 아닌 id만 담고, 핸들러가 실행 시점에 DB에서 다시 조회한다.
같은 작업이 여러 번 실행될 수 있으므로 핸들러는 상태를 바꾸지 않고 메일만 보낸다.
"""

import logging
from dataclasses import dataclass

from apps.accounts.models import PasswordResetToken, VerificationCode
from apps.accounts.models.password_reset_token import reset_token_ttl
from apps.accounts.utils.email import send_password_reset_email, send_welcome_email
from apps.jobs.registry import register_handler
from apps.jobs.requests import JobRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendWelcomeEmailJob(JobRequest):
    handler = "accounts.send_welcome_email"

    user_id: int


@dataclass(frozen=True)
class SendResetPasswordEmailJob(JobRequest):
    handler = "accounts.send_reset_password_email"

    reset_token_id: int


@register_handler(SendWelcomeEmailJob.handler)
def handle_send_welcome_email(user_id: int) -> None:
    verification_code = (
        VerificationCode.objects.select_related("user").filter(user_id=user_id).first()
    )
    if verification_code is None:
        # 이미 인증을 마쳤거나 탈퇴한 사용자
        logger.warning("인증 코드 없음, 환영 메일 건너뜀: user_id=%s", user_id)
        return

    user = verification_code.user
    send_welcome_email(user.email, verification_code.code, user.nickname)
    logger.info("환영 메일 발송: user_id=%s", user_id)


@register_handler(SendResetPasswordEmailJob.handler)
def handle_send_reset_password_email(reset_token_id: int) -> None:
    reset_token = (
        PasswordResetToken.objects.select_related("user").filter(pk=reset_token_id).first()
    )
    if reset_token is None:
        logger.warning("재설정 토큰 없음, 메일 건너뜀: reset_token_id=%s", reset_token_id)
        return

    if not reset_token.is_valid():
        logger.info("사용/만료된 재설정 토큰, 메일 건너뜀: reset_token_id=%s", reset_token_id)
        return

    valid_minutes = int(reset_token_ttl().total_seconds() // 60)
    send_password_reset_email(reset_token.user.email, reset_token.token, valid_minutes)
    logger.info("비밀번호 재설정 메일 발송: user_id=%s", reset_token.user_id)
