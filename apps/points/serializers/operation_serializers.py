"""
Request bodies of the ledger endpoints.

Each serializer validates one body shape and turns it into a ledger
operation with ``to_operation(actor)``.
"""
from decimal import Decimal, ROUND_HALF_UP

from rest_framework import serializers

from apps.common.serializers import PointsAmountField, StrictBooleanField, StrictDecimalField, StrictIntegerField
from ..models import TransactionType
from ..services import (
    Purchase, Adjustment, Transfer, RedemptionRequest, RedemptionProcessing, EventAward, SuspiciousToggle,
)

CENTS = Decimal('0.01')
# Largest spend the spent column holds
MAX_SPENT = Decimal('9999999999.99')


class LedgerRequestSerializer(serializers.Serializer):
    """Base body: a ``type`` tag fixed per subclass plus an optional remark"""
    expected_type = None

    type = serializers.CharField()
    remark = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_type(self, value):
        if value != self.expected_type:
            raise serializers.ValidationError(f'type must be "{self.expected_type}"')
        return value

    def create(self, validated_data):
        raise NotImplementedError('Ledger requests are applied through LedgerService')

    def to_operation(self, actor):
        raise NotImplementedError


class PurchaseSerializer(LedgerRequestSerializer):
    expected_type = TransactionType.PURCHASE

    utorid = serializers.CharField()
    spent = StrictDecimalField(max_digits=None, decimal_places=None, min_value=0)
    promotionIds = serializers.JSONField(required=False, default=list)
    suspicious = StrictBooleanField(required=False, default=False)

    def validate_spent(self, value):
        """Any non-negative amount, rounded to the cent."""
        spent = value.quantize(CENTS, rounding=ROUND_HALF_UP) if value <= MAX_SPENT else value
        if spent > MAX_SPENT:
            raise serializers.ValidationError('spent is too large.')
        return spent

    def validate_promotionIds(self, value):
        if not isinstance(value, list):
            raise serializers.ValidationError('promotionIds must be a list')
        return value

    def to_operation(self, actor):
        data = self.validated_data
        return Purchase(
            actor=actor,
            utorid=data['utorid'],
            spent=data['spent'],
            promotion_ids=tuple(data['promotionIds']),
            remark=data['remark'],
            suspicious=data['suspicious'],
        )


class AdjustmentSerializer(LedgerRequestSerializer):
    expected_type = TransactionType.ADJUSTMENT

    utorid = serializers.CharField()
    amount = PointsAmountField()
    relatedId = StrictIntegerField(required=False, allow_null=True, default=None)
    suspicious = StrictBooleanField(required=False, default=False)

    def to_operation(self, actor):
        data = self.validated_data
        return Adjustment(
            actor=actor,
            utorid=data['utorid'],
            amount=data['amount'],
            related_id=data['relatedId'],
            remark=data['remark'],
            suspicious=data['suspicious'],
        )


class PositiveAmountMixin:
    """Amount must be positive once truncated to whole points"""

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError('amount must be positive')
        return value


class TransferSerializer(PositiveAmountMixin, LedgerRequestSerializer):
    expected_type = TransactionType.TRANSFER

    amount = PointsAmountField()

    def to_operation(self, actor, recipient_id=None):
        data = self.validated_data
        return Transfer(sender=actor, recipient_id=recipient_id, amount=data['amount'], remark=data['remark'])


class RedemptionSerializer(PositiveAmountMixin, LedgerRequestSerializer):
    expected_type = TransactionType.REDEMPTION

    amount = PointsAmountField()

    def to_operation(self, actor):
        data = self.validated_data
        return RedemptionRequest(user=actor, amount=data['amount'], remark=data['remark'])


class EventAwardSerializer(LedgerRequestSerializer):
    expected_type = TransactionType.EVENT

    utorid = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    amount = StrictIntegerField(min_value=1)

    def to_operation(self, actor, event_id=None):
        data = self.validated_data
        return EventAward(
            actor=actor,
            event_id=event_id,
            amount=data['amount'],
            utorid=data['utorid'] or None,
            remark=data['remark'],
        )


class ProcessedSerializer(serializers.Serializer):
    processed = StrictBooleanField(required=False, default=True)

    def validate_processed(self, value):
        if value is not True:
            raise serializers.ValidationError('processed can only be set to true')
        return value

    def to_operation(self, actor, transaction_id=None):
        return RedemptionProcessing(actor=actor, transaction_id=transaction_id)


class SuspiciousSerializer(serializers.Serializer):
    suspicious = StrictBooleanField()

    def to_operation(self, actor, transaction_id=None):
        return SuspiciousToggle(
            actor=actor, transaction_id=transaction_id, suspicious=self.validated_data['suspicious']
        )
