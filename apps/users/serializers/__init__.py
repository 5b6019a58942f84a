"""
User serializers module.

All serializers are exported from this module to maintain backward compatibility.
"""
from .user_serializers import (
    UserDetailSerializer, UserProfileSerializer, UserSummarySerializer,
    UserCreateSerializer, LoginSerializer, ResetRequestSerializer,
    ResetCompleteSerializer, PasswordChangeSerializer, ProfileUpdateSerializer,
    UserAdminUpdateSerializer,
)

__all__ = [
    'UserDetailSerializer',
    'UserProfileSerializer',
    'UserSummarySerializer',
    'UserCreateSerializer',
    'LoginSerializer',
    'ResetRequestSerializer',
    'ResetCompleteSerializer',
    'PasswordChangeSerializer',
    'ProfileUpdateSerializer',
    'UserAdminUpdateSerializer',
]
