from django.contrib.auth import update_session_auth_hash

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.serializers import (
    EmailVerificationSerializer,
    MessageSerializer,
    PasswordChangeSerializer,
    PasswordResetConfirmSerializer,
    PasswordResetRequestSerializer,
    ProfileUpdateSerializer,
    UserSerializer,
    UserSignUpSerializer,
)
from apps.accounts.services import AccountService


class AccountServiceMixin:
    """요청마다 AccountService 생성"""

    service_class = AccountService

    def get_service(self) -> AccountService:
        return self.service_class()


class SignUpView(AccountServiceMixin, APIView):
    """회원가입 - 인증 메일은 비동기로 발송"""

    permission_classes = [AllowAny]

    @extend_schema(
        request=UserSignUpSerializer,
        responses={201: UserSerializer},
        tags=["인증"],
    )
    def post(self, request):
        serializer = UserSignUpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user_data = self.get_service().create(serializer.validated_data)
        return Response(user_data, status=status.HTTP_201_CREATED)


class EmailVerificationConfirmView(AccountServiceMixin, APIView):
    """이메일 인증 확인 - 코드로 이메일 검증"""

    permission_classes = [AllowAny]

    @extend_schema(
        request=EmailVerificationSerializer,
        responses={200: MessageSerializer},
        tags=["인증"],
    )
    def post(self, request):
        serializer = EmailVerificationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        self.get_service().verify_email(serializer.validated_data["code"])
        return Response(
            {"message": "이메일 인증이 완료되었습니다."},
            status=status.HTTP_200_OK,
        )


class PasswordResetRequestView(AccountServiceMixin, APIView):
    """비밀번호 재설정 요청"""

    permission_classes = [AllowAny]

    @extend_schema(
        request=PasswordResetRequestSerializer,
        responses={200: MessageSerializer},
        tags=["비밀번호"],
    )
    def post(self, request):
        serializer = PasswordResetRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        self.get_service().forgot_password(serializer.validated_data["email"])
        return Response(
            {"message": "비밀번호 재설정 링크를 이메일로 전송했습니다."},
            status=status.HTTP_200_OK,
        )


class PasswordResetConfirmView(AccountServiceMixin, APIView):
    """비밀번호 재설정 확인"""

    permission_classes = [AllowAny]

    @extend_schema(
        request=PasswordResetConfirmSerializer,
        responses={200: MessageSerializer},
        tags=["비밀번호"],
    )
    def post(self, request):
        serializer = PasswordResetConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        self.get_service().reset_password(
            serializer.validated_data["token"], serializer.validated_data["new_password"]
        )
        return Response({"message": "비밀번호가 재설정되었습니다."}, status=status.HTTP_200_OK)


class PasswordChangeView(AccountServiceMixin, APIView):
    """비밀번호 변경 (로그인 상태)"""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=PasswordChangeSerializer,
        responses={200: UserSerializer},
        tags=["비밀번호"],
    )
    def post(self, request):
        serializer = PasswordChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user_data = self.get_service().update_password(
            request.user,
            serializer.validated_data.get("current_password"),
            serializer.validated_data["new_password"],
        )

        # 비밀번호 변경 후에도 현재 세션 유지
        request.user.refresh_from_db()
        update_session_auth_hash(request, request.user)

        return Response(user_data, status=status.HTTP_200_OK)


@extend_schema(tags=["프로필"])
class CurrentUserView(APIView):
    """현재 로그인한 유저 정보"""

    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: UserSerializer})
    def get(self, request):
        response = Response(UserSerializer(request.user).data)
        response["Cache-Control"] = "private, max-age=60"
        return response


@extend_schema(tags=["프로필"])
class ProfileUpdateView(AccountServiceMixin, APIView):
    """프로필 수정"""

    permission_classes = [IsAuthenticated]

    @extend_schema(request=ProfileUpdateSerializer, responses={200: UserSerializer})
    def put(self, request):
        return self._update(request, partial=False)

    @extend_schema(request=ProfileUpdateSerializer, responses={200: UserSerializer})
    def patch(self, request):
        return self._update(request, partial=True)

    def _update(self, request, partial):
        serializer = ProfileUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        user_data = self.get_service().update(request.user, serializer.validated_data)
        return Response(user_data, status=status.HTTP_200_OK)
