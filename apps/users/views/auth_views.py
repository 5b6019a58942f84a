"""
User authentication views.
"""
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.throttling import PasswordResetThrottle
from ..serializers import LoginSerializer, ResetRequestSerializer, ResetCompleteSerializer
from ..services import AccountService


class LoginView(APIView):
    """POST /auth/tokens: exchange utorid and password for a bearer token"""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        token, expires_at = AccountService.login(**serializer.validated_data)
        return Response({'token': token, 'expiresAt': expires_at})


class ResetRequestView(APIView):
    """POST /auth/resets: issue a one-hour password reset token"""
    permission_classes = [AllowAny]
    throttle_classes = [PasswordResetThrottle]

    def post(self, request):
        serializer = ResetRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reset_token = AccountService.request_reset(serializer.validated_data['utorid'])
        return Response(
            {'expiresAt': reset_token.expires_at, 'resetToken': str(reset_token.id)},
            status=status.HTTP_202_ACCEPTED,
        )


class ResetCompleteView(APIView):
    """POST /auth/resets/{token}: set a new password with a reset token"""
    permission_classes = [AllowAny]

    def post(self, request, token):
        reset_token = AccountService.get_reset_token(token)
        serializer = ResetCompleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        AccountService.complete_reset(reset_token, **serializer.validated_data)
        return Response({'ok': True})
