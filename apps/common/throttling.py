"""
Request throttles backed by Django's cache framework.
"""
from rest_framework.throttling import SimpleRateThrottle

from .utils import get_client_ip


class ClientIPRateThrottle(SimpleRateThrottle):
    """
    Throttle keyed on the client address, authenticated or not.

    Subclasses set ``scope``; the rate comes from ``DEFAULT_THROTTLE_RATES``.
    """

    def get_cache_key(self, request, view):
        return self.cache_format % {
            'scope': self.scope,
            'ident': get_client_ip(request),
        }


class PasswordResetThrottle(ClientIPRateThrottle):
    """One password-reset request per client address per minute"""
    scope = 'password_reset'
