import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone


class ResetToken(models.Model):
    """Single-use token for account activation and password reset"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='reset_tokens')
    expires_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'reset_tokens'
        verbose_name = 'Reset Token'
        verbose_name_plural = 'Reset Tokens'

    def __str__(self):
        return f"{self.user_id}: {self.id}"

    def is_expired(self, now=None):
        return (now or timezone.now()) >= self.expires_at
