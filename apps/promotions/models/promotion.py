from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone


class PromotionType(models.TextChoices):
    AUTOMATIC = 'automatic', 'Automatic'
    ONE_TIME = 'onetime', 'One-time'

    @classmethod
    def from_api(cls, value):
        """Map the API spelling (``automatic`` / ``one-time``) to a stored value."""
        return {'automatic': cls.AUTOMATIC, 'one-time': cls.ONE_TIME}.get(value)

    @property
    def api_value(self):
        return 'one-time' if self is type(self).ONE_TIME else self.value


class PromotionQuerySet(models.QuerySet):
    def active(self, now=None):
        now = now or timezone.now()
        return self.filter(start_time__lte=now, end_time__gte=now)

    def started(self, now=None):
        return self.filter(start_time__lte=now or timezone.now())

    def ended(self, now=None):
        return self.filter(end_time__lt=now or timezone.now())

    def one_time(self):
        return self.filter(type=PromotionType.ONE_TIME)

    def automatic(self):
        return self.filter(type=PromotionType.AUTOMATIC)

    def unused_by(self, user):
        return self.exclude(usages__user=user)


class Promotion(models.Model):
    """
    A points bonus applied to purchases.

    Automatic promotions apply to every qualifying purchase while active;
    one-time promotions must be selected by the cashier and apply at most
    once per user.
    """
    name = models.CharField(max_length=255)
    description = models.TextField()
    type = models.CharField(max_length=16, choices=PromotionType.choices)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    min_spending = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    rate = models.DecimalField(max_digits=12, decimal_places=6, null=True, blank=True)
    points = models.PositiveIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = PromotionQuerySet.as_manager()

    class Meta:
        db_table = 'promotions'
        verbose_name = 'Promotion'
        verbose_name_plural = 'Promotions'
        ordering = ['id']
        constraints = [
            models.CheckConstraint(condition=Q(end_time__gt=models.F('start_time')), name='promotion_end_after_start'),
        ]

    def __str__(self):
        return f"{self.name} ({self.get_type_display()})"

    @property
    def api_type(self):
        return PromotionType(self.type).api_value

    def is_active(self, now=None):
        now = now or timezone.now()
        return self.start_time <= now <= self.end_time

    def has_started(self, now=None):
        return self.start_time <= (now or timezone.now())

    def has_ended(self, now=None):
        return self.end_time < (now or timezone.now())


class UserPromotionUsage(models.Model):
    """Marks a one-time promotion as used by a user"""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='promotion_usages')
    promotion = models.ForeignKey(Promotion, on_delete=models.CASCADE, related_name='usages')
    used_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'user_promotion_usages'
        verbose_name = 'Promotion Usage'
        verbose_name_plural = 'Promotion Usages'
        constraints = [
            models.UniqueConstraint(fields=['user', 'promotion'], name='unique_user_promotion_usage'),
        ]

    def __str__(self):
        return f"{self.user_id} used {self.promotion_id}"
