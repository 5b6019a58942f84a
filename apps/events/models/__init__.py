"""
Event models module.

All models are exported from this module to maintain backward compatibility.
"""
from .event import Event, EventQuerySet, EventOrganizer, EventGuest

__all__ = [
    'Event',
    'EventQuerySet',
    'EventOrganizer',
    'EventGuest',
]
