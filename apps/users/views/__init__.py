"""
User views module.

All views are exported from this module to maintain backward compatibility.
"""
from .auth_views import LoginView, ResetRequestView, ResetCompleteView
from .profile_views import UserProfileView, PasswordChangeView
from .admin_views import UserListCreateView, UserDetailView

__all__ = [
    'LoginView',
    'ResetRequestView',
    'ResetCompleteView',
    'UserProfileView',
    'PasswordChangeView',
    'UserListCreateView',
    'UserDetailView',
]
