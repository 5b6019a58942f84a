"""
Role-based permission classes.
"""
from rest_framework.permissions import BasePermission

from apps.users.models import Role


def role_required(min_role):
    """
    Build a permission class admitting authenticated callers whose role ranks
    at least ``min_role``.
    """
    min_role = Role(min_role)

    class RoleRequired(BasePermission):
        message = 'Forbidden'

        def has_permission(self, request, view):
            user = request.user
            if not user or not user.is_authenticated:
                return False
            return Role(user.role).at_least(min_role)

    RoleRequired.__name__ = f'Is{min_role.label.replace(" ", "")}OrAbove'
    return RoleRequired


IsCashier = role_required(Role.CASHIER)
IsManager = role_required(Role.MANAGER)
IsSuperuser = role_required(Role.SUPERUSER)


class MethodPermissionsMixin:
    """
    APIView mixin choosing permission classes per HTTP method.

    ``method_permissions`` maps a lower-case method name to a list of
    permission classes; other methods fall back to ``permission_classes``.
    """
    method_permissions = {}

    def get_permissions(self):
        classes = self.method_permissions.get(self.request.method.lower(), self.permission_classes)
        return [permission() for permission in classes]
