"""계정 수명주기 서비스

회원가입, 이메일 인증, 비밀번호 재설정/변경, 프로필 수정.
각 작업은 하나의 트랜잭션으로 실행되며, 예외가 발생하면 작업 등록까지 함께 롤백된다.
"""

import logging

from django.conf import settings
from django.db import IntegrityError, transaction

from apps.accounts.exceptions import (
    Conflict,
    ExpiredToken,
    InvalidCredential,
    InvalidToken,
    NotFound,
)
from apps.accounts.jobs import SendResetPasswordEmailJob, SendWelcomeEmailJob
from apps.accounts.models import PasswordResetToken, User, VerificationCode
from apps.accounts.serializers import UserSerializer
from apps.jobs.dispatcher import JobDispatcher, get_dispatcher

logger = logging.getLogger(__name__)


class AccountService:
    """계정 관련 비즈니스 로직

    Args:
        dispatcher: 이메일 작업을 등록할 디스패처 (기본값: settings.JOBS_DISPATCHER)
    """

    def __init__(self, dispatcher: JobDispatcher | None = None):
        self.dispatcher = dispatcher or get_dispatcher()

    @transaction.atomic
    def create(self, request: dict) -> dict:
        """회원가입 - 유저 + 인증 코드 생성 후 환영 메일 작업 등록

        Args:
            request: 검증된 가입 데이터 (email, password, nickname, bio)

        Returns:
            UserSerializer 응답 데이터

        Raises:
            Conflict: 이미 가입된 이메일
        """
        email = request["email"]
        if User.objects.email_exists(email):
            raise Conflict()

        try:
            # 동시 가입으로 유니크 제약 위반 시 savepoint만 롤백하고 409로 변환
            with transaction.atomic():
                user = User.objects.create_user(
                    email=email,
                    password=request["password"],
                    nickname=request.get("nickname", ""),
                    bio=request.get("bio", ""),
                )
        except IntegrityError:
            raise Conflict() from None

        VerificationCode.objects.issue(user)
        self.dispatcher.enqueue(SendWelcomeEmailJob(user_id=user.pk))

        logger.info("회원가입 완료: user_id=%s", user.pk)
        return UserSerializer(user).data

    @transaction.atomic
    def verify_email(self, code: str) -> None:
        """이메일 인증 - 성공 시 코드를 삭제해 재사용 불가

        Raises:
            InvalidToken: 존재하지 않거나 이미 사용된 코드
        """
        verification_code = VerificationCode.objects.find_by_code(code, for_update=True)
        if verification_code is None:
            raise InvalidToken("유효하지 않은 인증 코드입니다.")

        user = verification_code.user
        user.mark_email_verified()
        verification_code.delete()

        logger.info("이메일 인증 완료: user_id=%s", user.pk)

    @transaction.atomic
    def forgot_password(self, email: str) -> PasswordResetToken:
        """비밀번호 재설정 토큰 발급 후 재설정 메일 작업 등록

        작업에는 토큰 문자열이 아닌 토큰 id만 담는다.
        유저 행을 잠근 뒤 발급하므로 동시 요청에서도 유효한 토큰은 1개만 남는다.

        Raises:
            NotFound: 가입되지 않은 이메일
        """
        user = User.objects.get_by_email(email, for_update=True)
        if user is None:
            raise NotFound("사용자를 찾을 수 없습니다.")

        reset_token = PasswordResetToken.objects.issue(
            user, invalidate_existing=settings.ACCOUNTS_INVALIDATE_PREVIOUS_RESET_TOKENS
        )
        self.dispatcher.enqueue(SendResetPasswordEmailJob(reset_token_id=reset_token.pk))

        logger.info("비밀번호 재설정 토큰 발급: user_id=%s token_id=%s", user.pk, reset_token.pk)
        return reset_token

    @transaction.atomic
    def reset_password(self, token: str, password: str) -> None:
        """토큰으로 비밀번호 재설정 - 토큰은 1회만 사용 가능

        Raises:
            InvalidToken: 존재하지 않거나 이미 사용된 토큰
            ExpiredToken: 유효 기간이 지난 토큰
        """
        reset_token = PasswordResetToken.objects.find_by_token(token, for_update=True)
        if reset_token is None:
            raise InvalidToken()

        if reset_token.is_used:
            raise InvalidToken("이미 사용된 토큰입니다.")

        if reset_token.is_expired():
            raise ExpiredToken()

        user = reset_token.user
        user.set_password(password)
        user.save(update_fields=["password", "updated_at"])
        reset_token.mark_used()

        logger.info("비밀번호 재설정 완료: user_id=%s", user.pk)

    @transaction.atomic
    def update_password(self, user: User, old_password: str | None, password: str) -> dict:
        """비밀번호 변경 (로그인 사용자)

        비밀번호가 아직 없는 계정은 현재 비밀번호 확인 없이 최초 설정한다.

        Args:
            user: 인증된 사용자
            old_password: 현재 비밀번호
            password: 새 비밀번호

        Raises:
            InvalidCredential: 현재 비밀번호 불일치
        """
        user = User.objects.select_for_update().get(pk=user.pk)

        if user.has_usable_password() and not user.check_password(old_password):
            raise InvalidCredential()

        user.set_password(password)
        user.save(update_fields=["password", "updated_at"])

        logger.info("비밀번호 변경: user_id=%s", user.pk)
        return UserSerializer(user).data

    @transaction.atomic
    def update(self, user: User, data: dict) -> dict:
        """프로필 수정 - nickname, bio 외 필드는 무시"""
        user = User.objects.select_for_update().get(pk=user.pk)

        changed = [field for field in User.PROFILE_FIELDS if field in data]
        for field in changed:
            setattr(user, field, data[field])
        if changed:
            user.save(update_fields=[*changed, "updated_at"])

        return UserSerializer(user).data
