from django.urls import path
from . import views

urlpatterns = [
    path('events', views.EventListCreateView.as_view(), name='event-list'),
    path('events/<int:event_id>', views.EventDetailView.as_view(), name='event-detail'),
    path('events/<int:event_id>/organizers', views.EventOrganizerListView.as_view(), name='event-organizers'),
    path('events/<int:event_id>/organizers/<int:user_id>', views.EventOrganizerDetailView.as_view(), name='event-organizer-detail'),
    path('events/<int:event_id>/guests', views.EventGuestListView.as_view(), name='event-guests'),
    path('events/<int:event_id>/guests/me', views.EventGuestMeView.as_view(), name='event-guest-me'),
    path('events/<int:event_id>/guests/<int:user_id>', views.EventGuestDetailView.as_view(), name='event-guest-detail'),
]
