"""
Organizer and guest sub-resources of an event.
"""
from rest_framework import serializers, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.permissions import IsManager
from ..serializers import EventOrganizersSerializer, EventPersonSerializer
from ..services import EventService


class UtoridSerializer(serializers.Serializer):
    utorid = serializers.CharField()


def guest_added_response(event, user):
    return Response({
        'id': event.id,
        'name': event.name,
        'location': event.location,
        'guestAdded': EventPersonSerializer(user).data,
        'numGuests': event.guest_count(),
    }, status=status.HTTP_201_CREATED)


class EventOrganizerListView(APIView):
    """POST /events/{id}/organizers"""
    permission_classes = [IsManager]

    def post(self, request, event_id):
        serializer = UtoridSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = EventService.get_event(event_id)
        EventService.add_organizer(event, serializer.validated_data['utorid'])
        return Response(EventOrganizersSerializer(event).data, status=status.HTTP_201_CREATED)


class EventOrganizerDetailView(APIView):
    """DELETE /events/{id}/organizers/{userId}"""
    permission_classes = [IsManager]

    def delete(self, request, event_id, user_id):
        event = EventService.get_event(event_id)
        EventService.remove_organizer(event, user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class EventGuestListView(APIView):
    """POST /events/{id}/guests (manager or organizer)"""
    permission_classes = [IsAuthenticated]

    def post(self, request, event_id):
        serializer = UtoridSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = EventService.get_event(event_id)
        event, user = EventService.add_guest_by(request.user, event, serializer.validated_data['utorid'])
        return guest_added_response(event, user)


class EventGuestMeView(APIView):
    """POST/DELETE /events/{id}/guests/me"""
    permission_classes = [IsAuthenticated]

    def post(self, request, event_id):
        event = EventService.get_event(event_id)
        event = EventService.rsvp(event, request.user)
        return guest_added_response(event, request.user)

    def delete(self, request, event_id):
        event = EventService.get_event(event_id)
        EventService.cancel_rsvp(event, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class EventGuestDetailView(APIView):
    """DELETE /events/{id}/guests/{userId} (manager+)"""
    permission_classes = [IsManager]

    def delete(self, request, event_id, user_id):
        event = EventService.get_event(event_id)
        EventService.remove_guest(event, user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
