"""
Event roster management: organizers, guests and deletion.
"""
import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.common.exceptions import BadRequest, Forbidden, Gone, NotFound
from apps.users.models import User
from ..models import Event, EventOrganizer, EventGuest

logger = logging.getLogger(__name__)


class EventService:
    """Service for event lifecycle and roster operations"""

    @staticmethod
    def get_event(event_id):
        event = Event.objects.filter(pk=event_id).first()
        if event is None:
            raise NotFound()
        return event

    @staticmethod
    def get_user(utorid):
        user = User.objects.filter(utorid=utorid).first()
        if user is None:
            raise NotFound()
        return user

    @staticmethod
    def can_manage(event, user):
        """Managers and the event's organizers may edit it and its guest list"""
        return user.is_manager or event.is_organizer(user)

    @staticmethod
    def can_view(event, user):
        return event.published or EventService.can_manage(event, user)

    @staticmethod
    def add_organizer(event, utorid):
        if event.has_ended():
            raise Gone('Event has ended')
        user = EventService.get_user(utorid)
        if event.is_guest(user):
            raise BadRequest('User is already a guest of this event')

        EventOrganizer.objects.get_or_create(event=event, user=user)
        logger.info(f"Organizer {user.utorid} added to event {event.id}")
        return user

    @staticmethod
    def remove_organizer(event, user_id):
        deleted, _ = EventOrganizer.objects.filter(event=event, user_id=user_id).delete()
        if not deleted:
            raise NotFound()
        logger.info(f"Organizer {user_id} removed from event {event.id}")

    @staticmethod
    @transaction.atomic
    def add_guest(event_id, user, now=None):
        """
        Put ``user`` on the guest list.

        The event row is locked while the capacity is checked so concurrent
        RSVPs cannot overfill it.
        """
        now = now or timezone.now()
        event = Event.objects.select_for_update().filter(pk=event_id).first()
        if event is None:
            raise NotFound()
        if event.has_ended(now):
            raise Gone('Event has ended')
        if event.is_organizer(user):
            raise BadRequest('An organizer cannot be a guest')
        if event.is_guest(user):
            raise BadRequest('User is already a guest')
        if event.is_full():
            raise Gone('Event is full')

        EventGuest.objects.create(event=event, user=user)
        logger.info(f"Guest {user.utorid} added to event {event.id}")
        return event

    @staticmethod
    def add_guest_by(actor, event, utorid):
        """Manager or organizer adds a guest by utorid"""
        if not actor.is_manager:
            if not event.is_organizer(actor):
                raise Forbidden()
            if not event.published:
                raise NotFound()
        if event.has_ended():
            raise Gone('Event has ended')
        user = EventService.get_user(utorid)
        return EventService.add_guest(event.id, user), user

    @staticmethod
    def rsvp(event, user):
        if not event.published:
            raise NotFound()
        return EventService.add_guest(event.id, user)

    @staticmethod
    def cancel_rsvp(event, user):
        if event.has_ended():
            raise Gone('Event has ended')
        deleted, _ = EventGuest.objects.filter(event=event, user=user).delete()
        if not deleted:
            raise NotFound()
        logger.info(f"Guest {user.utorid} left event {event.id}")

    @staticmethod
    def remove_guest(event, user_id):
        deleted, _ = EventGuest.objects.filter(event=event, user_id=user_id).delete()
        if not deleted:
            raise NotFound()
        logger.info(f"Guest {user_id} removed from event {event.id}")

    @staticmethod
    @transaction.atomic
    def change_budget(event, points_total):
        """Set a new total budget; the remaining budget moves by the same delta."""
        delta = points_total - event.points_total
        updated = Event.objects.filter(
            pk=event.pk, points_total=event.points_total, points_remain__gte=-delta
        ).update(points_total=F('points_total') + delta, points_remain=F('points_remain') + delta)
        if not updated:
            raise BadRequest('New budget is below the points already awarded')
        event.refresh_from_db()
        return event

    @staticmethod
    @transaction.atomic
    def delete_event(event):
        if event.published:
            raise BadRequest('A published event cannot be deleted')
        if event.points_awarded > 0:
            raise BadRequest('An event that has awarded points cannot be deleted')
        event_id = event.id
        event.delete()
        logger.info(f"Event {event_id} deleted")
