"""
Ledger endpoints any authenticated user can reach: own history, redemption
requests, transfers and event awards.
"""
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.exceptions import BadRequest
from apps.common.utils import paginated_response, query_param
from ..models import Transaction, TransactionType
from ..serializers import (
    TransactionSerializer, RedemptionResultSerializer, TransferResultSerializer, EventAwardResultSerializer,
    RedemptionSerializer, TransferSerializer, EventAwardSerializer,
)
from ..services import LedgerService


class MyTransactionListView(APIView):
    """GET/POST /users/me/transactions"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        transactions = (
            Transaction.objects.for_user(request.user)
            .select_related('user', 'created_by', 'processed_by')
            .prefetch_related('promotion_links')
            .order_by('-id')
        )
        tx_type = query_param(request, 'type')
        if tx_type:
            if tx_type not in TransactionType.values:
                raise BadRequest(f'Unknown transaction type: {tx_type}')
            transactions = transactions.filter(type=tx_type)
        return paginated_response(transactions, request, lambda rows: TransactionSerializer(rows, many=True).data)

    def post(self, request):
        serializer = RedemptionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        record = LedgerService.apply(serializer.to_operation(request.user))
        return Response(RedemptionResultSerializer(record).data, status=status.HTTP_201_CREATED)


class UserTransferView(APIView):
    """POST /users/{id}/transactions"""
    permission_classes = [IsAuthenticated]

    def post(self, request, user_id):
        serializer = TransferSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        debit, credit = LedgerService.apply(serializer.to_operation(request.user, user_id))
        data = TransferResultSerializer(debit, context={'recipient': credit.user}).data
        return Response(data, status=status.HTTP_201_CREATED)


class EventTransactionView(APIView):
    """POST /events/{id}/transactions (manager, or organizer of a published event)"""
    permission_classes = [IsAuthenticated]

    def post(self, request, event_id):
        serializer = EventAwardSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        operation = serializer.to_operation(request.user, event_id)
        records = LedgerService.apply(operation)
        if operation.utorid is None:
            return Response(EventAwardResultSerializer(records, many=True).data)
        return Response(EventAwardResultSerializer(records[0]).data, status=status.HTTP_201_CREATED)
