"""
Event services module.

All services are exported from this module to maintain backward compatibility.
"""
from .event_service import EventService

__all__ = [
    'EventService',
]
