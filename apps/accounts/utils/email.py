"""이메일 전송 유틸리티"""

from django.conf import settings
from django.core.mail import send_mail


def _send_template_email(user_email: str, subject: str, message: str) -> None:
    """공통 이메일 전송 함수

    실패 시 예외를 그대로 던져 작업이 재시도되도록 한다.
    """
    send_mail(
        subject=subject,
        message=message,
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user_email],
        fail_silently=False,
    )


def send_welcome_email(user_email: str, code: str, nickname: str = "") -> None:
    """가입 환영 + 이메일 인증 메일 발송"""
    verification_url = f"{settings.FRONTEND_URL}/email-verification/confirm?code={code}"
    greeting = f"{nickname}님, 안녕하세요" if nickname else "안녕하세요"

    subject = "[Organice] 가입을 환영합니다 - 이메일 인증을 완료해주세요"
    message = f"""
{greeting},

Organice 회원가입을 환영합니다!
아래 링크를 클릭하여 이메일 인증을 완료해주세요.

{verification_url}

Organice 팀
    """

    _send_template_email(user_email, subject, message)


def send_password_reset_email(user_email: str, token: str, valid_minutes: int) -> None:
    """비밀번호 재설정 이메일 발송"""
    reset_url = f"{settings.FRONTEND_URL}/password-reset/confirm?token={token}"

    subject = "[Organice] 비밀번호 재설정 요청"
    message = f"""
안녕하세요,

비밀번호 재설정을 요청하셨습니다.
아래 링크를 클릭하여 비밀번호를 재설정하세요. ({valid_minutes}분 유효)

{reset_url}

요청하지 않으셨다면 이 메일을 무시하세요.

Organice 팀
    """

    _send_template_email(user_email, subject, message)
