"""
Custom authentication classes for handling edge cases
"""
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.settings import api_settings
from django.contrib.auth import get_user_model
import logging

logger = logging.getLogger(__name__)

User = get_user_model()


class SafeJWTAuthentication(JWTAuthentication):
    """
    JWT authentication that treats a token for a deleted user as no credentials.

    The request then proceeds as unauthenticated and protected endpoints
    answer 401 instead of failing during the user lookup.
    """

    def authenticate(self, request):
        result = super().authenticate(request)
        if result is None or result[0] is None:
            return None
        return result

    def get_user(self, validated_token):
        """
        Attempts to find and return a user using the given validated token.
        Returns None if user not found instead of raising an exception.
        """
        user_id = validated_token.get(api_settings.USER_ID_CLAIM)
        if user_id is None:
            return None

        try:
            return User.objects.get(**{api_settings.USER_ID_FIELD: user_id})
        except User.DoesNotExist:
            logger.warning(f'JWT token contains unknown user_id: {user_id}')
            return None
        except (TypeError, ValueError) as e:
            logger.error(f'Invalid token payload: {e}')
            raise InvalidToken(f'Token contained invalid user identification: {e}')
