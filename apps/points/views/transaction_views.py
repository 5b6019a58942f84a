"""
Transaction endpoints for cashiers and managers.
"""
import logging

from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.exceptions import BadRequest, Forbidden
from apps.common.permissions import IsCashier, IsManager, MethodPermissionsMixin
from apps.common.utils import paginated_response, parse_bool, query_param
from ..models import Transaction, TransactionType
from ..serializers import (
    TransactionSerializer, SuspiciousResultSerializer, PurchaseResultSerializer,
    AdjustmentResultSerializer, RedemptionResultSerializer,
    PurchaseSerializer, AdjustmentSerializer, ProcessedSerializer, SuspiciousSerializer,
)
from ..services import LedgerService

logger = logging.getLogger(__name__)

AMOUNT_OPERATORS = {'eq': 'amount', 'lt': 'amount__lt', 'lte': 'amount__lte', 'gt': 'amount__gt', 'gte': 'amount__gte'}


def transaction_queryset():
    return Transaction.objects.select_related('user', 'created_by', 'processed_by').prefetch_related('promotion_links')


def filter_transactions(queryset, request):
    """Apply the manager list filters from the query string"""
    name = query_param(request, 'name')
    if name:
        queryset = queryset.filter(Q(user__utorid__contains=name) | Q(user__name__contains=name))

    created_by = query_param(request, 'createdBy')
    if created_by:
        if created_by.isdigit():
            queryset = queryset.filter(created_by_id=int(created_by))
        else:
            queryset = queryset.filter(created_by__utorid=created_by)

    suspicious = parse_bool(query_param(request, 'suspicious'))
    if suspicious is not None:
        queryset = queryset.filter(suspicious=suspicious)

    promotion_id = query_param(request, 'promotionId')
    if promotion_id:
        if not promotion_id.isdigit():
            raise BadRequest('promotionId must be an integer')
        queryset = queryset.filter(promotion_links__promotion_id=int(promotion_id))

    tx_type = query_param(request, 'type')
    if tx_type:
        if tx_type not in TransactionType.values:
            raise BadRequest(f'Unknown transaction type: {tx_type}')
        queryset = queryset.filter(type=tx_type)

    related_id = query_param(request, 'relatedId')
    if related_id:
        try:
            queryset = queryset.filter(related_id=int(related_id))
        except ValueError:
            raise BadRequest('relatedId must be an integer')

    amount = query_param(request, 'amount')
    operator = query_param(request, 'operator') or query_param(request, 'amountOp')
    if amount is not None and operator:
        lookup = AMOUNT_OPERATORS.get(operator)
        if lookup is None:
            raise BadRequest(f'Unknown operator: {operator}')
        try:
            queryset = queryset.filter(**{lookup: int(amount)})
        except ValueError:
            raise BadRequest('amount must be an integer')

    return queryset.distinct()


class TransactionListCreateView(MethodPermissionsMixin, APIView):
    """GET /transactions (manager+), POST /transactions (cashier+ purchase, manager+ adjustment)"""
    permission_classes = [IsManager]
    method_permissions = {'post': [IsCashier]}

    def get(self, request):
        transactions = filter_transactions(transaction_queryset(), request).order_by('-id')
        return paginated_response(transactions, request, lambda rows: TransactionSerializer(rows, many=True).data)

    def post(self, request):
        tx_type = request.data.get('type') if isinstance(request.data, dict) else None
        if tx_type == TransactionType.PURCHASE:
            serializer_class, result_class = PurchaseSerializer, PurchaseResultSerializer
        elif tx_type == TransactionType.ADJUSTMENT:
            if not request.user.is_manager:
                raise Forbidden()
            serializer_class, result_class = AdjustmentSerializer, AdjustmentResultSerializer
        else:
            raise BadRequest('type must be "purchase" or "adjustment"')

        serializer = serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        record = LedgerService.apply(serializer.to_operation(request.user))
        return Response(result_class(record).data, status=status.HTTP_201_CREATED)


class TransactionDetailView(APIView):
    """GET /transactions/{id}"""
    permission_classes = [IsManager]

    def get(self, request, transaction_id):
        record = get_object_or_404(transaction_queryset(), pk=transaction_id)
        return Response(TransactionSerializer(record).data)


class TransactionSuspiciousView(APIView):
    """PATCH /transactions/{id}/suspicious"""
    permission_classes = [IsManager]

    def patch(self, request, transaction_id):
        serializer = SuspiciousSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        record = LedgerService.apply(serializer.to_operation(request.user, transaction_id))
        return Response(SuspiciousResultSerializer(record).data)


class TransactionProcessedView(APIView):
    """PATCH /transactions/{id}/processed"""
    permission_classes = [IsCashier]

    def patch(self, request, transaction_id):
        serializer = ProcessedSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        record = LedgerService.apply(serializer.to_operation(request.user, transaction_id))
        return Response(RedemptionResultSerializer(record).data)
