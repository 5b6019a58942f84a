"""
Event views module.

All views are exported from this module to maintain backward compatibility.
"""
from .event_views import EventListCreateView, EventDetailView
from .roster_views import (
    EventOrganizerListView, EventOrganizerDetailView,
    EventGuestListView, EventGuestMeView, EventGuestDetailView,
)

__all__ = [
    'EventListCreateView',
    'EventDetailView',
    'EventOrganizerListView',
    'EventOrganizerDetailView',
    'EventGuestListView',
    'EventGuestMeView',
    'EventGuestDetailView',
]
