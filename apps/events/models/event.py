from django.conf import settings
from django.db import models
from django.db.models import Count, F, Q
from django.utils import timezone


class EventQuerySet(models.QuerySet):
    def with_guest_count(self):
        return self.annotate(num_guests=Count('guests', distinct=True))

    def published(self):
        return self.filter(published=True)

    def not_full(self):
        """Events with room left (requires ``with_guest_count``)"""
        return self.exclude(capacity__isnull=False, capacity__lte=F('num_guests'))


class Event(models.Model):
    """
    A published or draft event with a points budget.

    ``points_remain`` and ``points_awarded`` always sum to ``points_total``;
    awards move points from the first to the second.
    """
    name = models.CharField(max_length=255)
    description = models.TextField()
    location = models.CharField(max_length=255)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    capacity = models.PositiveIntegerField(null=True, blank=True)
    published = models.BooleanField(default=False)
    points_total = models.PositiveIntegerField()
    points_remain = models.IntegerField()
    points_awarded = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = EventQuerySet.as_manager()

    class Meta:
        db_table = 'events'
        verbose_name = 'Event'
        verbose_name_plural = 'Events'
        ordering = ['id']
        constraints = [
            models.CheckConstraint(condition=Q(points_remain__gte=0), name='event_points_remain_non_negative'),
            models.CheckConstraint(condition=Q(points_awarded__gte=0), name='event_points_awarded_non_negative'),
            models.CheckConstraint(
                condition=Q(points_total=F('points_remain') + F('points_awarded')),
                name='event_points_conserved',
            ),
            models.CheckConstraint(condition=Q(end_time__gt=F('start_time')), name='event_end_after_start'),
        ]

    def __str__(self):
        return self.name

    def has_started(self, now=None):
        return self.start_time <= (now or timezone.now())

    def has_ended(self, now=None):
        return self.end_time < (now or timezone.now())

    def guest_count(self):
        return self.guests.count()

    def is_full(self):
        return self.capacity is not None and self.guest_count() >= self.capacity

    def is_organizer(self, user):
        return self.organizers.filter(user=user).exists()

    def is_guest(self, user):
        return self.guests.filter(user=user).exists()


class EventOrganizer(models.Model):
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name='organizers')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='organized_events')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'event_organizers'
        verbose_name = 'Event Organizer'
        verbose_name_plural = 'Event Organizers'
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(fields=['event', 'user'], name='unique_event_organizer'),
        ]

    def __str__(self):
        return f"{self.user_id} organizes {self.event_id}"


class EventGuest(models.Model):
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name='guests')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='event_rsvps')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'event_guests'
        verbose_name = 'Event Guest'
        verbose_name_plural = 'Event Guests'
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(fields=['event', 'user'], name='unique_event_guest'),
        ]

    def __str__(self):
        return f"{self.user_id} attends {self.event_id}"
