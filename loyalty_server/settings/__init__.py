"""
Settings package for loyalty_server.
The active module is chosen by the ENVIRONMENT variable.
"""

from decouple import config

ENVIRONMENT = config('ENVIRONMENT', default='development')

if ENVIRONMENT == 'production':
    from .production import *
elif ENVIRONMENT == 'test':
    from .test import *
else:
    from .development import *
