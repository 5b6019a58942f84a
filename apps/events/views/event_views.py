"""
Event CRUD views.
"""
import logging

from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.exceptions import BadRequest, Forbidden, NotFound
from apps.common.permissions import IsManager, MethodPermissionsMixin
from apps.common.utils import paginated_response, parse_bool, query_param
from ..models import Event
from ..serializers import (
    EventSerializer, EventPublicSerializer, EventManagerListSerializer, EventListSerializer,
    EventCreateSerializer, EventUpdateSerializer,
)
from ..services import EventService

logger = logging.getLogger(__name__)


class EventListCreateView(MethodPermissionsMixin, APIView):
    """GET /events (role-aware list), POST /events (manager+)"""
    permission_classes = [IsAuthenticated]
    method_permissions = {'post': [IsManager]}

    def get(self, request):
        now = timezone.now()
        is_manager = request.user.is_manager
        events = Event.objects.with_guest_count().order_by('id')

        name = query_param(request, 'name')
        if name:
            events = events.filter(name__icontains=name)
        location = query_param(request, 'location')
        if location:
            events = events.filter(location__icontains=location)

        started = parse_bool(query_param(request, 'started'))
        ended = parse_bool(query_param(request, 'ended'))
        if started is not None and ended is not None:
            raise BadRequest('started and ended cannot be combined')
        if started is not None:
            events = events.filter(start_time__lte=now) if started else events.filter(start_time__gt=now)
        if ended is not None:
            events = events.filter(end_time__lt=now) if ended else events.filter(end_time__gte=now)

        if is_manager:
            published = parse_bool(query_param(request, 'published'))
            if published is not None:
                events = events.filter(published=published)
        else:
            events = events.published()

        if not parse_bool(query_param(request, 'showFull')):
            events = events.not_full()

        serializer_class = EventManagerListSerializer if is_manager else EventListSerializer
        return paginated_response(events, request, lambda rows: serializer_class(rows, many=True).data)

    def post(self, request):
        serializer = EventCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = serializer.save()
        logger.info(f"Event {event.id} created by {request.user.utorid}")
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class EventDetailView(MethodPermissionsMixin, APIView):
    """GET/PATCH /events/{id} (managers and organizers), DELETE (manager+)"""
    permission_classes = [IsAuthenticated]
    method_permissions = {'delete': [IsManager]}

    def get(self, request, event_id):
        event = EventService.get_event(event_id)
        if EventService.can_manage(event, request.user):
            return Response(EventSerializer(event).data)
        if not event.published:
            raise NotFound()
        return Response(EventPublicSerializer(event).data)

    def patch(self, request, event_id):
        event = EventService.get_event(event_id)
        if not EventService.can_manage(event, request.user):
            raise Forbidden()
        serializer = EventUpdateSerializer(
            event, data=request.data, context={'actor': request.user, 'now': timezone.now()}
        )
        serializer.is_valid(raise_exception=True)
        event = serializer.save()
        logger.info(f"Event {event.id} updated by {request.user.utorid}: {sorted(serializer.validated_data)}")
        return Response(EventSerializer(event).data)

    def delete(self, request, event_id):
        event = EventService.get_event(event_id)
        EventService.delete_event(event)
        return Response(status=status.HTTP_204_NO_CONTENT)
