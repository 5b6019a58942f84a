"""
Test settings for loyalty_server project.
"""

from .base import *

# Use SQLite for testing
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Disable migrations for faster testing
class DisableMigrations:
    def __contains__(self, item):
        return True

    def __getitem__(self, item):
        return None

MIGRATION_MODULES = DisableMigrations()

# Use faster password hasher for testing
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# Disable logging during tests
LOGGING_CONFIG = None

SIMPLE_JWT = {
    **SIMPLE_JWT,
    'SIGNING_KEY': 'test-signing-key-not-for-production-use-0123456789',
}

# Smaller throttle cache for tests
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'loyalty-server-tests',
        'OPTIONS': {'MAX_ENTRIES': 1000},
    }
}

CSRF_COOKIE_SECURE = False
SESSION_COOKIE_SECURE = False
