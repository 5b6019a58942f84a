"""
Error handling middleware that keeps unexpected failures from leaking details.
"""

import logging
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin

from .utils import get_client_ip

logger = logging.getLogger(__name__)
security_logger = logging.getLogger('security')


class ErrorHandlingMiddleware(MiddlewareMixin):
    """
    Turn any exception that escaped the API layer into a generic 500 response
    """

    def process_exception(self, request, exception):
        # Log the actual exception for debugging
        logger.error(f"Exception in {request.method} {request.path}: {exception}", exc_info=True)

        if self._is_potential_attack(exception):
            security_logger.warning(
                f"POTENTIAL_ATTACK: {type(exception).__name__} in {request.path} "
                f"from {get_client_ip(request)}"
            )

        return JsonResponse({'error': 'Internal Server Error'}, status=500)

    def _is_potential_attack(self, exception):
        """Detect if exception might indicate an attack"""
        attack_indicators = [
            'SuspiciousOperation',
            'DisallowedHost',
            'PermissionDenied',
        ]

        exception_name = type(exception).__name__
        return any(indicator in exception_name for indicator in attack_indicators)
