"""
User models module.

All models are exported from this module to maintain backward compatibility.
"""
from .user import User, Role, UserManager
from .reset_token import ResetToken

__all__ = [
    'User',
    'Role',
    'UserManager',
    'ResetToken',
]
