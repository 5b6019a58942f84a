"""
User services module.

All services are exported from this module to maintain backward compatibility.
"""
from .account_service import AccountService

__all__ = [
    'AccountService',
]
