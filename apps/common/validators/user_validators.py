"""
Account validators for utorid, name, email, birthday and password.
"""
import re
from datetime import date

from rest_framework import serializers

UTORID_PATTERN = re.compile(r'^[a-z0-9]{7,8}$', re.IGNORECASE)
PASSWORD_PATTERN = re.compile(r'^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[^A-Za-z0-9]).{8,20}$')
BIRTHDAY_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')
UOFT_EMAIL_DOMAIN = '@mail.utoronto.ca'


def validate_utorid(value):
    """
    Validate utorid format.

    Args:
        value: utorid string

    Raises:
        serializers.ValidationError: If the utorid is not 7-8 alphanumerics

    Returns:
        str: Validated utorid
    """
    if not UTORID_PATTERN.match(value or ''):
        raise serializers.ValidationError("utorid must be 7-8 alphanumeric characters.")
    return value


def validate_name(value):
    if not value or len(value) > 50:
        raise serializers.ValidationError("name must be 1-50 characters.")
    return value


def validate_uoft_email(value):
    """
    Validate that the email is a University of Toronto mail address.

    Args:
        value: Email string

    Raises:
        serializers.ValidationError: If the email is not an @mail.utoronto.ca address

    Returns:
        str: Validated email
    """
    local, _, _ = (value or '').partition('@')
    if not local or not value.lower().endswith(UOFT_EMAIL_DOMAIN):
        raise serializers.ValidationError(f"email must end with {UOFT_EMAIL_DOMAIN}.")
    return value


def validate_birthday(value):
    """Validate a YYYY-MM-DD calendar date and return it as a string."""
    if not isinstance(value, str) or not BIRTHDAY_PATTERN.match(value):
        raise serializers.ValidationError("birthday must be YYYY-MM-DD.")
    try:
        date.fromisoformat(value)
    except ValueError:
        raise serializers.ValidationError("birthday is not a valid date.")
    return value


def validate_password_strength(value):
    """
    Validate password strength.

    Requirements:
    - 8 to 20 characters
    - At least one lowercase letter, one uppercase letter, one digit
      and one special character

    Args:
        value: Password string

    Raises:
        serializers.ValidationError: If password doesn't meet strength requirements

    Returns:
        str: Validated password
    """
    if not value:
        raise serializers.ValidationError("Password cannot be empty.")

    if not PASSWORD_PATTERN.match(value):
        raise serializers.ValidationError(
            "Password must be 8-20 characters with upper and lower case letters, a digit and a special character."
        )

    return value
