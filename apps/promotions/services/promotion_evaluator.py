"""
Promotion evaluation: which promotions apply to a purchase and how many
points it earns.
"""
from decimal import Decimal, ROUND_HALF_UP

from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.common.exceptions import BadRequest
from ..models import Promotion, UserPromotionUsage

# One point per 25 cents spent
SPEND_PER_POINT = Decimal('0.25')
# Rate bonuses are expressed per cent of spend
RATE_SCALE = 100


def round_half_up(value):
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(value).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def to_decimal(value):
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class PromotionEvaluator:
    """Pure point arithmetic plus the queries that pick applicable promotions"""

    @staticmethod
    def active_promotions(now=None):
        return Promotion.objects.active(now or timezone.now())

    @staticmethod
    def eligible_one_time(user, now=None):
        """Active one-time promotions the user has not used yet"""
        return PromotionEvaluator.active_promotions(now).one_time().unused_by(user).order_by('id')

    @staticmethod
    def automatic_promotions(now=None):
        return PromotionEvaluator.active_promotions(now).automatic().order_by('id')

    @staticmethod
    def base_points(spent):
        return round_half_up(to_decimal(spent) / SPEND_PER_POINT)

    @staticmethod
    def bonus_points(promotion, spent):
        """Bonus a single promotion adds to a purchase of ``spent`` (0 below minSpending)."""
        spent = to_decimal(spent)
        if promotion.min_spending is not None and spent < to_decimal(promotion.min_spending):
            return 0
        bonus = 0
        if promotion.rate is not None:
            bonus += round_half_up(spent * RATE_SCALE * to_decimal(promotion.rate))
        if promotion.points is not None:
            bonus += int(promotion.points)
        return bonus

    @staticmethod
    def compute_earned_points(spent, automatic=(), selected_one_time=()):
        """
        Points earned by a purchase.

        base = round(spent / 0.25); each automatic promotion and each selected
        one-time promotion adds its bonus unless spent is below its minimum.
        """
        earned = PromotionEvaluator.base_points(spent)
        for promotion in list(automatic) + list(selected_one_time):
            earned += PromotionEvaluator.bonus_points(promotion, spent)
        return earned

    @staticmethod
    def resolve_one_time_selection(user, promotion_ids, now=None):
        """
        Turn the requested one-time promotion ids into promotions.

        Every id must be a positive integer naming an active one-time
        promotion the user has not used; otherwise the whole selection is
        rejected with 400.
        """
        if promotion_ids is None:
            return []
        if not isinstance(promotion_ids, (list, tuple)):
            raise BadRequest('promotionIds must be a list')

        ids = []
        for raw in promotion_ids:
            if isinstance(raw, bool) or not isinstance(raw, int) or raw <= 0:
                raise BadRequest(f'Invalid promotion id: {raw!r}')
            if raw in ids:
                raise BadRequest(f'Promotion {raw} selected more than once')
            ids.append(raw)

        eligible = {
            promotion.id: promotion
            for promotion in PromotionEvaluator.eligible_one_time(user, now).filter(id__in=ids)
        }
        missing = [pid for pid in ids if pid not in eligible]
        if missing:
            raise BadRequest(f'Promotion {missing[0]} is not available')
        return [eligible[pid] for pid in ids]

    @staticmethod
    def mark_used(user, promotions, now=None):
        """
        Record each one-time promotion as used by ``user``.

        The unique (user, promotion) pair is the final check: a usage recorded
        since the selection was resolved rejects the purchase with 400.
        """
        now = now or timezone.now()
        for promotion in promotions:
            try:
                with transaction.atomic():
                    UserPromotionUsage.objects.create(user=user, promotion=promotion, used_at=now)
            except IntegrityError:
                raise BadRequest(f'Promotion {promotion.id} is not available')
