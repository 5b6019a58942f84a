"""
Transaction read shapes.
"""
from rest_framework import serializers

from ..models import Transaction


class TransactionSerializer(serializers.ModelSerializer):
    """
    Full ledger row.
    Used for: GET /transactions, GET /transactions/{id}, GET /users/me/transactions
    """
    utorid = serializers.CharField(source='user.utorid', read_only=True)
    relatedId = serializers.IntegerField(source='related_id', read_only=True)
    promotionIds = serializers.ListField(source='promotion_ids', child=serializers.IntegerField(), read_only=True)
    createdBy = serializers.CharField(source='created_by.utorid', read_only=True)
    processedBy = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Transaction
        fields = [
            'id', 'utorid', 'type', 'spent', 'amount', 'relatedId', 'promotionIds',
            'suspicious', 'remark', 'createdBy', 'processedBy', 'createdAt',
        ]
        read_only_fields = fields

    def get_processedBy(self, obj):
        return obj.processed_by.utorid if obj.processed_by_id else None


class SuspiciousResultSerializer(TransactionSerializer):
    """Response of PATCH /transactions/{id}/suspicious"""

    class Meta(TransactionSerializer.Meta):
        fields = ['id', 'utorid', 'type', 'spent', 'amount', 'promotionIds', 'suspicious', 'remark', 'createdBy']
        read_only_fields = fields


class PurchaseResultSerializer(TransactionSerializer):
    """Response of a purchase; ``earned`` is 0 while the purchase is suspicious"""
    earned = serializers.SerializerMethodField()

    class Meta(TransactionSerializer.Meta):
        fields = ['id', 'utorid', 'type', 'spent', 'earned', 'remark', 'promotionIds', 'createdBy', 'createdAt']
        read_only_fields = fields

    def get_earned(self, obj):
        return 0 if obj.suspicious else obj.amount


class AdjustmentResultSerializer(TransactionSerializer):

    class Meta(TransactionSerializer.Meta):
        fields = [
            'id', 'utorid', 'type', 'amount', 'spent', 'relatedId', 'remark', 'promotionIds',
            'createdBy', 'createdAt',
        ]
        read_only_fields = fields


class RedemptionResultSerializer(TransactionSerializer):
    """Response of a redemption request or of processing one"""
    redeemed = serializers.SerializerMethodField()

    class Meta(TransactionSerializer.Meta):
        fields = ['id', 'utorid', 'type', 'processedBy', 'amount', 'redeemed', 'remark', 'createdBy']
        read_only_fields = fields

    def get_redeemed(self, obj):
        return obj.amount if obj.is_processed else None


class TransferResultSerializer(serializers.ModelSerializer):
    """Response of a transfer, built from the sender's (debit) row"""
    sender = serializers.CharField(source='user.utorid', read_only=True)
    recipient = serializers.SerializerMethodField()
    sent = serializers.SerializerMethodField()
    createdBy = serializers.CharField(source='created_by.utorid', read_only=True)

    class Meta:
        model = Transaction
        fields = ['id', 'sender', 'recipient', 'type', 'sent', 'remark', 'createdBy']
        read_only_fields = fields

    def get_recipient(self, obj):
        return self.context['recipient'].utorid

    def get_sent(self, obj):
        return -obj.amount


class EventAwardResultSerializer(serializers.ModelSerializer):
    recipient = serializers.CharField(source='user.utorid', read_only=True)
    awarded = serializers.IntegerField(source='amount', read_only=True)
    relatedId = serializers.IntegerField(source='related_id', read_only=True)
    createdBy = serializers.CharField(source='created_by.utorid', read_only=True)

    class Meta:
        model = Transaction
        fields = ['id', 'recipient', 'awarded', 'type', 'relatedId', 'remark', 'createdBy']
        read_only_fields = fields
