"""
User management views for cashiers and managers.
"""
import logging

from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.permissions import IsCashier, IsManager, MethodPermissionsMixin
from apps.common.utils import paginated_response, parse_bool, query_param
from ..models import User, Role
from ..serializers import (
    UserDetailSerializer, UserProfileSerializer, UserSummarySerializer,
    UserCreateSerializer, UserAdminUpdateSerializer,
)
from ..services import AccountService

logger = logging.getLogger(__name__)


class UserListCreateView(MethodPermissionsMixin, APIView):
    """GET /users (manager+), POST /users (cashier+)"""
    permission_classes = [IsManager]
    method_permissions = {'post': [IsCashier]}

    def get(self, request):
        users = User.objects.order_by('id')

        name = query_param(request, 'name')
        if name:
            users = users.filter(Q(utorid__contains=name) | Q(name__contains=name))

        role = query_param(request, 'role')
        if role and role.lower() in Role.values:
            users = users.filter(role=role.lower())

        verified = parse_bool(query_param(request, 'verified'))
        if verified is not None:
            users = users.filter(verified=verified)

        activated = parse_bool(query_param(request, 'activated'))
        if activated is not None:
            users = users.filter(last_login__isnull=not activated)

        return paginated_response(users, request, lambda rows: UserDetailSerializer(rows, many=True).data)

    def post(self, request):
        serializer = UserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user, reset_token = AccountService.create_user(created_by=request.user, **serializer.validated_data)
        return Response({
            'id': user.id,
            'utorid': user.utorid,
            'name': user.name,
            'email': user.email,
            'verified': user.verified,
            'expiresAt': reset_token.expires_at,
            'resetToken': str(reset_token.id),
        }, status=status.HTTP_201_CREATED)


class UserDetailView(MethodPermissionsMixin, APIView):
    """GET /users/{id} (cashier+), PATCH /users/{id} (manager+)"""
    permission_classes = [IsCashier]
    method_permissions = {'patch': [IsManager]}

    def get(self, request, user_id):
        user = get_object_or_404(User, pk=user_id)
        if request.user.is_manager:
            return Response(UserProfileSerializer(user).data)
        return Response(UserSummarySerializer(user).data)

    def patch(self, request, user_id):
        user = get_object_or_404(User, pk=user_id)
        serializer = UserAdminUpdateSerializer(user, data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info(f"User {user.utorid} updated by {request.user.utorid}: {sorted(serializer.validated_data)}")
        return Response(serializer.data)
