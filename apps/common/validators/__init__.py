"""
Common validators module.

All validators are exported from this module to maintain backward compatibility.
"""
from .user_validators import (
    validate_utorid, validate_name, validate_uoft_email, validate_birthday,
    validate_password_strength, PASSWORD_PATTERN, UTORID_PATTERN,
)

__all__ = [
    'validate_utorid',
    'validate_name',
    'validate_uoft_email',
    'validate_birthday',
    'validate_password_strength',
    'PASSWORD_PATTERN',
    'UTORID_PATTERN',
]
