"""
Tests for purchase point arithmetic and one-time promotion selection.
"""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from hypothesis import given, settings, strategies as st

from apps.common.exceptions import BadRequest
from apps.promotions.models import UserPromotionUsage
from apps.promotions.services import PromotionEvaluator, round_half_up
from tests.factories import OneTimePromotionFactory, PromotionFactory, UserFactory

spend_amounts = st.decimals(min_value=Decimal('0'), max_value=Decimal('100000'), places=2)


class TestPointArithmetic:
    """Point arithmetic needs no database"""

    def test_round_half_up(self):
        assert round_half_up(Decimal('0.5')) == 1
        assert round_half_up(Decimal('1.5')) == 2
        assert round_half_up(Decimal('2.5')) == 3
        assert round_half_up(Decimal('2.49')) == 2

    def test_base_points_without_promotions(self):
        assert PromotionEvaluator.compute_earned_points(Decimal('40.00')) == 160

    def test_base_points_round_half_up(self):
        # 0.125 / 0.25 == 0.5
        assert PromotionEvaluator.base_points(Decimal('0.13')) == 1
        assert PromotionEvaluator.base_points(Decimal('0.12')) == 0

    def test_rate_bonus_scales_with_spend(self):
        promotion = PromotionFactory.build(rate=Decimal('0.05'))
        assert PromotionEvaluator.bonus_points(promotion, Decimal('100.00')) == 500
        assert PromotionEvaluator.compute_earned_points(Decimal('100.00'), [promotion]) == 900

    def test_flat_bonus_and_rate_add_up(self):
        promotion = PromotionFactory.build(rate=Decimal('0.01'), points=25)
        assert PromotionEvaluator.bonus_points(promotion, Decimal('10.00')) == 10 + 25

    def test_min_spending_skips_bonus(self):
        promotion = PromotionFactory.build(min_spending=Decimal('50.00'), points=100)
        assert PromotionEvaluator.bonus_points(promotion, Decimal('49.99')) == 0
        assert PromotionEvaluator.bonus_points(promotion, Decimal('50.00')) == 100

    @given(spent=spend_amounts)
    @settings(max_examples=100, deadline=None)
    def test_earned_is_base_plus_each_bonus(self, spent):
        """Earned points are the base plus the independent bonus of each promotion."""
        automatic = [PromotionFactory.build(rate=Decimal('0.02')), PromotionFactory.build(points=10)]
        one_time = [OneTimePromotionFactory.build(min_spending=Decimal('20.00'), points=30)]
        expected = PromotionEvaluator.base_points(spent) + sum(
            PromotionEvaluator.bonus_points(p, spent) for p in automatic + one_time
        )
        assert PromotionEvaluator.compute_earned_points(spent, automatic, one_time) == expected
        assert expected >= PromotionEvaluator.base_points(spent)


@pytest.mark.django_db
class TestOneTimeSelection:

    def test_resolves_in_requested_order(self):
        user = UserFactory()
        first, second = OneTimePromotionFactory(), OneTimePromotionFactory()
        selected = PromotionEvaluator.resolve_one_time_selection(user, [second.id, first.id])
        assert selected == [second, first]

    def test_empty_and_missing_selection(self):
        user = UserFactory()
        assert PromotionEvaluator.resolve_one_time_selection(user, None) == []
        assert PromotionEvaluator.resolve_one_time_selection(user, []) == []

    @pytest.mark.parametrize('bad_id', [0, -3, '1', 1.5, True, None])
    def test_rejects_malformed_ids(self, bad_id):
        user = UserFactory()
        with pytest.raises(BadRequest):
            PromotionEvaluator.resolve_one_time_selection(user, [bad_id])

    def test_rejects_duplicates(self):
        user = UserFactory()
        promotion = OneTimePromotionFactory()
        with pytest.raises(BadRequest):
            PromotionEvaluator.resolve_one_time_selection(user, [promotion.id, promotion.id])

    def test_rejects_automatic_inactive_and_used(self):
        user = UserFactory()
        automatic = PromotionFactory()
        expired = OneTimePromotionFactory(
            start_time=timezone.now() - timedelta(days=3), end_time=timezone.now() - timedelta(days=1)
        )
        used = OneTimePromotionFactory()
        UserPromotionUsage.objects.create(user=user, promotion=used)

        for promotion in (automatic, expired, used):
            with pytest.raises(BadRequest):
                PromotionEvaluator.resolve_one_time_selection(user, [promotion.id])

    def test_one_bad_id_rejects_whole_selection(self):
        user = UserFactory()
        good = OneTimePromotionFactory()
        with pytest.raises(BadRequest):
            PromotionEvaluator.resolve_one_time_selection(user, [good.id, 999999])

    def test_second_mark_used_is_rejected(self):
        user = UserFactory()
        promotion = OneTimePromotionFactory()
        PromotionEvaluator.mark_used(user, [promotion])
        with pytest.raises(BadRequest):
            PromotionEvaluator.mark_used(user, [promotion])
        assert UserPromotionUsage.objects.filter(user=user, promotion=promotion).count() == 1
        assert list(PromotionEvaluator.eligible_one_time(user)) == []
