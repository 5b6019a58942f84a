"""
Promotion CRUD views.
"""
import logging

from django.db.models import Q
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.exceptions import BadRequest, Forbidden, NotFound
from apps.common.permissions import IsManager, MethodPermissionsMixin
from apps.common.utils import paginated_response, parse_bool, query_param
from ..models import Promotion, PromotionType
from ..serializers import (
    PromotionSerializer, PromotionListSerializer, AvailablePromotionSerializer,
    PromotionCreateSerializer, PromotionUpdateSerializer,
)

logger = logging.getLogger(__name__)


def _text_filter(request, name):
    value = query_param(request, name)
    if value is None:
        return None
    value = value.strip()
    if not value or value.lower() == 'null':
        return None
    return value


class PromotionListCreateView(MethodPermissionsMixin, APIView):
    """GET /promotions (role-aware list), POST /promotions (manager+)"""
    permission_classes = [IsAuthenticated]
    method_permissions = {'post': [IsManager]}

    def get(self, request):
        now = timezone.now()
        queryset = Promotion.objects.order_by('id')

        name = _text_filter(request, 'name')
        if name:
            queryset = queryset.filter(name__icontains=name)

        promotion_type = _text_filter(request, 'type')
        if promotion_type:
            stored = PromotionType.from_api(promotion_type)
            if stored is None:
                raise BadRequest("type must be 'automatic' or 'one-time'")
            queryset = queryset.filter(type=stored)

        if not request.user.is_manager:
            queryset = queryset.active(now).unused_by(request.user)
            return paginated_response(
                queryset, request, lambda rows: AvailablePromotionSerializer(rows, many=True).data
            )

        active = parse_bool(query_param(request, 'active'))
        started = parse_bool(query_param(request, 'started'))
        ended = parse_bool(query_param(request, 'ended'))
        if started is not None and ended is not None:
            raise BadRequest('started and ended cannot be combined')

        if active is True:
            queryset = queryset.active(now)
        elif active is False:
            queryset = queryset.exclude(start_time__lte=now, end_time__gte=now)
        if started is True:
            queryset = queryset.started(now)
        elif started is False:
            queryset = queryset.filter(start_time__gt=now)
        if ended is True:
            queryset = queryset.ended(now)
        elif ended is False:
            queryset = queryset.filter(end_time__gte=now)

        return paginated_response(queryset, request, lambda rows: PromotionListSerializer(rows, many=True).data)

    def post(self, request):
        serializer = PromotionCreateSerializer(data=request.data, context={'now': timezone.now()})
        serializer.is_valid(raise_exception=True)
        promotion = serializer.save()
        logger.info(f"Promotion {promotion.id} created by {request.user.utorid}")
        return Response(PromotionSerializer(promotion).data, status=status.HTTP_201_CREATED)


class PromotionDetailView(MethodPermissionsMixin, APIView):
    """GET/PATCH/DELETE /promotions/{id}"""
    permission_classes = [IsAuthenticated]
    method_permissions = {'patch': [IsManager], 'delete': [IsManager]}

    def get(self, request, promotion_id):
        promotion = get_object_or_404(Promotion, pk=promotion_id)
        if not request.user.is_manager and not promotion.is_active():
            raise NotFound()
        return Response(PromotionSerializer(promotion).data)

    def patch(self, request, promotion_id):
        promotion = get_object_or_404(Promotion, pk=promotion_id)
        serializer = PromotionUpdateSerializer(
            promotion, data=request.data, context={'now': timezone.now()}
        )
        serializer.is_valid(raise_exception=True)
        promotion = serializer.save()
        logger.info(f"Promotion {promotion.id} updated by {request.user.utorid}: {sorted(serializer.validated_data)}")
        return Response(PromotionSerializer(promotion).data)

    def delete(self, request, promotion_id):
        promotion = get_object_or_404(Promotion, pk=promotion_id)
        if promotion.has_started():
            raise Forbidden('Promotion has already started')
        promotion.delete()
        logger.info(f"Promotion {promotion_id} deleted by {request.user.utorid}")
        return Response(status=status.HTTP_204_NO_CONTENT)
