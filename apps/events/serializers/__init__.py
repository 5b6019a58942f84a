"""
Event serializers module.

All serializers are exported from this module to maintain backward compatibility.
"""
from .event_serializers import (
    EventPersonSerializer, EventSerializer, EventPublicSerializer, EventManagerListSerializer,
    EventListSerializer, EventOrganizersSerializer, EventCreateSerializer, EventUpdateSerializer,
)

__all__ = [
    'EventPersonSerializer',
    'EventSerializer',
    'EventPublicSerializer',
    'EventManagerListSerializer',
    'EventListSerializer',
    'EventOrganizersSerializer',
    'EventCreateSerializer',
    'EventUpdateSerializer',
]
