from django.conf import settings
from django.db import models
from django.db.models import Q


class TransactionType(models.TextChoices):
    PURCHASE = 'purchase', 'Purchase'
    ADJUSTMENT = 'adjustment', 'Adjustment'
    TRANSFER = 'transfer', 'Transfer'
    REDEMPTION = 'redemption', 'Redemption'
    EVENT = 'event', 'Event'


class TransactionQuerySet(models.QuerySet):
    def for_user(self, user):
        return self.filter(user=user)

    def pending_redemptions(self):
        return self.filter(type=TransactionType.REDEMPTION, processed_by__isnull=True)


class Transaction(models.Model):
    """
    One ledger row.

    ``amount`` is signed for transfers (the sender's row is negative) and
    positive for redemptions, which debit the owner only once processed.
    ``related_id`` points at the counterparty user (transfer), the event
    (event) or another transaction (adjustment).
    """
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='transactions')
    type = models.CharField(max_length=16, choices=TransactionType.choices)
    amount = models.IntegerField()
    spent = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    related_id = models.IntegerField(null=True, blank=True)
    suspicious = models.BooleanField(default=False)
    remark = models.TextField(blank=True, default='')
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='created_transactions'
    )
    processed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, null=True, blank=True,
        related_name='processed_transactions'
    )
    promotions = models.ManyToManyField(
        'promotions.Promotion', through='TransactionPromotion', related_name='transactions', blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TransactionQuerySet.as_manager()

    class Meta:
        db_table = 'transactions'
        ordering = ['-id']
        verbose_name = 'Transaction'
        verbose_name_plural = 'Transactions'
        constraints = [
            models.CheckConstraint(
                condition=~Q(type='purchase') | Q(spent__isnull=False),
                name='purchase_has_spent',
            ),
            models.CheckConstraint(
                condition=~Q(type='transfer') | Q(related_id__isnull=False),
                name='transfer_has_related_id',
            ),
        ]

    def __str__(self):
        return f"#{self.id} {self.type} {self.amount} ({self.user_id})"

    @property
    def is_processed(self):
        return self.processed_by_id is not None

    @property
    def balance_effect(self):
        """Change this row makes to its owner's balance when not suspicious"""
        if self.type == TransactionType.REDEMPTION:
            return -self.amount if self.is_processed else 0
        return self.amount

    @property
    def promotion_ids(self):
        return [link.promotion_id for link in self.promotion_links.all()]


class TransactionPromotion(models.Model):
    """Promotions applied to a purchase"""
    transaction = models.ForeignKey(Transaction, on_delete=models.CASCADE, related_name='promotion_links')
    promotion = models.ForeignKey('promotions.Promotion', on_delete=models.PROTECT, related_name='transaction_links')

    class Meta:
        db_table = 'transaction_promotions'
        ordering = ['id']
        verbose_name = 'Transaction Promotion'
        verbose_name_plural = 'Transaction Promotions'
        constraints = [
            models.UniqueConstraint(fields=['transaction', 'promotion'], name='unique_transaction_promotion'),
        ]
