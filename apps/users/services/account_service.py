"""
Account lifecycle: login tokens, activation and password reset, password changes.
"""
import logging
import uuid
from datetime import datetime, timezone as dt_timezone

from django.conf import settings
from django.contrib.auth.hashers import check_password
from django.db import transaction
from django.utils import timezone
from rest_framework_simplejwt.tokens import AccessToken

from apps.common.exceptions import BadRequest, Conflict, Forbidden, Gone, NotFound, Unauthenticated
from apps.common.validators import PASSWORD_PATTERN
from ..models import User, Role, ResetToken

logger = logging.getLogger(__name__)
security_logger = logging.getLogger('security')


class AccountService:
    """Service for account authentication and lifecycle operations"""

    @staticmethod
    def issue_token(user):
        """Return ``(token, expires_at)`` for a signed access token carrying id, utorid and role."""
        token = AccessToken.for_user(user)
        token['utorid'] = user.utorid
        token['role'] = user.role
        expires_at = datetime.fromtimestamp(token['exp'], tz=dt_timezone.utc)
        return str(token), expires_at

    @staticmethod
    def login(utorid, password):
        user = User.objects.filter(utorid=utorid).first()
        if user is None or not user.has_usable_password() or not check_password(password, user.password):
            security_logger.warning(f"LOGIN_FAILED: utorid={utorid}")
            raise Unauthenticated()

        user.last_login = timezone.now()
        user.save(update_fields=['last_login'])
        security_logger.info(f"LOGIN_SUCCESS: utorid={user.utorid} role={user.role}")
        return AccountService.issue_token(user)

    @staticmethod
    @transaction.atomic
    def create_user(utorid, name, email, created_by=None):
        """
        Register an unverified regular account with an activation token.

        The account has no usable password until the token is redeemed.
        """
        if User.objects.filter(utorid=utorid).exists():
            raise Conflict('utorid already exists')
        if User.objects.filter(email__iexact=email).exists():
            raise Conflict('email already exists')

        user = User.objects.create_user(utorid=utorid, email=email, name=name, role=Role.REGULAR, verified=False)
        reset_token = ResetToken.objects.create(
            user=user, expires_at=timezone.now() + settings.ACTIVATION_TOKEN_LIFETIME
        )
        logger.info(f"User {user.utorid} created by {getattr(created_by, 'utorid', None)}")
        return user, reset_token

    @staticmethod
    @transaction.atomic
    def request_reset(utorid):
        """Replace the user's outstanding tokens with a fresh one-hour reset token"""
        user = User.objects.filter(utorid=utorid).first()
        if user is None:
            raise NotFound()

        ResetToken.objects.filter(user=user).delete()
        reset_token = ResetToken.objects.create(
            user=user, expires_at=timezone.now() + settings.PASSWORD_RESET_TOKEN_LIFETIME
        )
        security_logger.info(f"PASSWORD_RESET_REQUESTED: utorid={user.utorid}")
        return reset_token

    @staticmethod
    def get_reset_token(token):
        """Look up an outstanding, unexpired reset token (404 / 410 otherwise)."""
        try:
            token_id = uuid.UUID(str(token))
        except ValueError:
            raise NotFound()

        reset_token = ResetToken.objects.select_related('user').filter(pk=token_id).first()
        if reset_token is None:
            raise NotFound()
        if reset_token.is_expired():
            raise Gone('Reset token has expired')
        return reset_token

    @staticmethod
    @transaction.atomic
    def complete_reset(reset_token, utorid, password):
        user = reset_token.user
        if user.utorid != utorid:
            security_logger.warning(f"PASSWORD_RESET_MISMATCH: token owner={user.utorid} claimed={utorid}")
            raise Unauthenticated()
        if not PASSWORD_PATTERN.match(password):
            raise BadRequest("Password must be 8-20 characters with upper and lower case letters, a digit and a special character.")

        # A token redeemed concurrently is already gone
        deleted, _ = ResetToken.objects.filter(pk=reset_token.pk).delete()
        if not deleted:
            raise NotFound()

        user.set_password(password)
        user.save(update_fields=['password'])
        security_logger.info(f"PASSWORD_RESET_COMPLETED: utorid={user.utorid}")
        return user

    @staticmethod
    def change_password(user, old_password, new_password):
        if not user.has_usable_password() or not user.check_password(old_password):
            security_logger.warning(f"PASSWORD_CHANGE_DENIED: utorid={user.utorid}")
            raise Forbidden('Current password is incorrect')

        user.set_password(new_password)
        user.save(update_fields=['password'])
        security_logger.info(f"PASSWORD_CHANGED: utorid={user.utorid}")
        return user
