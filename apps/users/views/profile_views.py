"""
Views for the authenticated user's own profile.
"""
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from ..serializers import (
    UserDetailSerializer, UserProfileSerializer, ProfileUpdateSerializer, PasswordChangeSerializer,
)
from ..services import AccountService


class UserProfileView(APIView):
    """GET/PATCH /users/me"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserProfileSerializer(request.user).data)

    def patch(self, request):
        serializer = ProfileUpdateSerializer(request.user, data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(UserDetailSerializer(user).data)


class PasswordChangeView(APIView):
    """PATCH /users/me/password"""
    permission_classes = [IsAuthenticated]

    def patch(self, request):
        serializer = PasswordChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        AccountService.change_password(
            request.user, serializer.validated_data['old'], serializer.validated_data['new']
        )
        return Response({'ok': True})
