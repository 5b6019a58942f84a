"""
Property-based tests for the points ledger.
"""
from decimal import Decimal
from unittest import mock

from hypothesis import given, settings, strategies as st
from hypothesis.extra.django import TestCase

from apps.common.exceptions import BadRequest, Forbidden, Gone
from apps.events.models import Event
from apps.points.models import Transaction, TransactionType
from apps.points.services import (
    LedgerService, Purchase, Adjustment, Transfer, RedemptionRequest, RedemptionProcessing,
    EventAward, SuspiciousToggle,
)
from apps.promotions.models import UserPromotionUsage
from apps.promotions.services import PromotionEvaluator
from apps.users.models import Role
from tests.factories import (
    EventFactory, EventGuestFactory, OneTimePromotionFactory, PurchaseTransactionFactory, UserFactory,
)


def balance(user):
    user.refresh_from_db(fields=['points'])
    return user.points


class TestBalanceNonNegativity(TestCase):
    """Property 1: a user's own debits never take their balance below zero"""

    @given(
        start=st.integers(min_value=0, max_value=500),
        debits=st.lists(
            st.tuples(st.sampled_from(['transfer', 'redemption']), st.integers(min_value=1, max_value=300)),
            min_size=1, max_size=8,
        ),
    )
    @settings(max_examples=40, deadline=None)
    def test_self_initiated_debits_keep_balance_non_negative(self, start, debits):
        sender = UserFactory(points=start)
        recipient = UserFactory()
        cashier = UserFactory(role=Role.CASHIER)

        for kind, amount in debits:
            before = balance(sender)
            try:
                if kind == 'transfer':
                    LedgerService.apply(Transfer(sender=sender, recipient_id=recipient.id, amount=amount))
                else:
                    request = LedgerService.apply(RedemptionRequest(user=sender, amount=amount))
                    LedgerService.apply(RedemptionProcessing(actor=cashier, transaction_id=request.id))
            except BadRequest:
                assert amount > before or kind == 'redemption'
                # a rejected debit changes nothing
                assert balance(sender) == before
            assert balance(sender) >= 0

    def test_processing_rechecks_balance(self):
        user = UserFactory(points=50)
        cashier = UserFactory(role=Role.CASHIER)
        request = LedgerService.apply(RedemptionRequest(user=user, amount=50))
        LedgerService.apply(Transfer(sender=user, recipient_id=cashier.id, amount=20))

        with self.assertRaises(BadRequest):
            LedgerService.apply(RedemptionProcessing(actor=cashier, transaction_id=request.id))
        request.refresh_from_db()
        self.assertIsNone(request.processed_by_id)
        self.assertEqual(balance(user), 30)


class TestTransferPairing(TestCase):
    """Property 2: every transfer writes a debit and a credit that cancel out"""

    @given(start=st.integers(min_value=1, max_value=1000), data=st.data())
    @settings(max_examples=40, deadline=None)
    def test_transfer_pair(self, start, data):
        amount = data.draw(st.integers(min_value=1, max_value=start))
        sender = UserFactory(points=start)
        recipient = UserFactory(points=7)

        debit, credit = LedgerService.apply(Transfer(sender=sender, recipient_id=recipient.id, amount=amount))

        rows = Transaction.objects.filter(type=TransactionType.TRANSFER, id__in=[debit.id, credit.id])
        self.assertEqual(rows.count(), 2)
        self.assertEqual(debit.amount, -amount)
        self.assertEqual(credit.amount, amount)
        self.assertEqual(debit.user_id, sender.id)
        self.assertEqual(debit.related_id, recipient.id)
        self.assertEqual(credit.user_id, recipient.id)
        self.assertEqual(credit.related_id, sender.id)
        self.assertEqual((balance(sender) - start) + (balance(recipient) - 7), 0)

    def test_scenario_transfer_thirty(self):
        sender = UserFactory(points=100)
        recipient = UserFactory(points=10)
        LedgerService.apply(Transfer(sender=sender, recipient_id=recipient.id, amount=30))
        self.assertEqual(balance(sender), 70)
        self.assertEqual(balance(recipient), 40)
        self.assertEqual(Transaction.objects.filter(type=TransactionType.TRANSFER).count(), 2)

    def test_rejected_transfers(self):
        sender = UserFactory(points=10)
        recipient = UserFactory()
        unverified = UserFactory(points=10, verified=False)

        for operation in (
            Transfer(sender=sender, recipient_id=sender.id, amount=1),
            Transfer(sender=sender, recipient_id=recipient.id, amount=11),
            Transfer(sender=unverified, recipient_id=recipient.id, amount=1),
            Transfer(sender=sender, recipient_id=recipient.id, amount=0),
        ):
            with self.assertRaises(BadRequest):
                LedgerService.apply(operation)
        self.assertFalse(Transaction.objects.exists())


class TestOneTimePromotionIdempotence(TestCase):
    """Property 3: a one-time promotion applies once per user"""

    @given(spent=st.decimals(min_value=Decimal('0'), max_value=Decimal('500'), places=2))
    @settings(max_examples=25, deadline=None)
    def test_second_use_is_rejected(self, spent):
        cashier = UserFactory(role=Role.CASHIER)
        customer = UserFactory()
        promotion = OneTimePromotionFactory(points=40)

        first = LedgerService.apply(Purchase(
            actor=cashier, utorid=customer.utorid, spent=spent, promotion_ids=(promotion.id,)
        ))
        after_first = balance(customer)
        with self.assertRaises(BadRequest):
            LedgerService.apply(Purchase(
                actor=cashier, utorid=customer.utorid, spent=spent, promotion_ids=(promotion.id,)
            ))

        self.assertEqual(first.promotion_ids, [promotion.id])
        self.assertEqual(UserPromotionUsage.objects.filter(user=customer, promotion=promotion).count(), 1)
        self.assertEqual(balance(customer), after_first)
        self.assertEqual(Transaction.objects.filter(user=customer).count(), 1)

    def test_use_recorded_after_selection_rejects_purchase(self):
        cashier = UserFactory(role=Role.CASHIER)
        customer = UserFactory()
        promotion = OneTimePromotionFactory(points=100)
        resolve = PromotionEvaluator.resolve_one_time_selection

        def resolve_then_concurrent_use(user, ids, now=None):
            selected = resolve(user, ids, now)
            UserPromotionUsage.objects.create(user=user, promotion=promotion)
            return selected

        with mock.patch.object(
            PromotionEvaluator, 'resolve_one_time_selection', side_effect=resolve_then_concurrent_use
        ):
            with self.assertRaises(BadRequest):
                LedgerService.apply(Purchase(
                    actor=cashier, utorid=customer.utorid, spent=Decimal('10.00'), promotion_ids=(promotion.id,)
                ))

        self.assertEqual(balance(customer), 0)
        self.assertEqual(Transaction.objects.filter(user=customer).count(), 0)


class TestEventBudgetConservation(TestCase):
    """Property 4: remaining plus awarded always equals the event total"""

    @given(
        total=st.integers(min_value=1, max_value=200),
        awards=st.lists(st.integers(min_value=1, max_value=80), min_size=1, max_size=6),
        guest_count=st.integers(min_value=1, max_value=4),
        award_all=st.booleans(),
    )
    @settings(max_examples=40, deadline=None)
    def test_awards_conserve_budget(self, total, awards, guest_count, award_all):
        manager = UserFactory(role=Role.MANAGER)
        event = EventFactory(points_total=total)
        guests = [EventGuestFactory(event=event).user for _ in range(guest_count)]

        for amount in awards:
            before = Event.objects.get(pk=event.pk)
            needed = amount * (guest_count if award_all else 1)
            utorid = None if award_all else guests[0].utorid
            try:
                LedgerService.apply(EventAward(actor=manager, event_id=event.id, amount=amount, utorid=utorid))
            except BadRequest:
                self.assertGreater(needed, before.points_remain)
                after = Event.objects.get(pk=event.pk)
                self.assertEqual(after.points_remain, before.points_remain)
                self.assertEqual(after.points_awarded, before.points_awarded)

            event.refresh_from_db()
            self.assertGreaterEqual(event.points_remain, 0)
            self.assertEqual(event.points_remain + event.points_awarded, event.points_total)

        awarded_rows = sum(Transaction.objects.filter(type=TransactionType.EVENT).values_list('amount', flat=True))
        self.assertEqual(awarded_rows, event.points_awarded)

    def test_award_all_guests(self):
        manager = UserFactory(role=Role.MANAGER)
        event = EventFactory(points_total=100)
        guests = [EventGuestFactory(event=event).user for _ in range(5)]

        records = LedgerService.apply(EventAward(actor=manager, event_id=event.id, amount=10))

        event.refresh_from_db()
        self.assertEqual(len(records), 5)
        self.assertEqual(event.points_remain, 50)
        self.assertEqual(event.points_awarded, 50)
        self.assertEqual(Transaction.objects.filter(type=TransactionType.EVENT, related_id=event.id).count(), 5)
        for guest in guests:
            self.assertEqual(balance(guest), 10)

    def test_award_requires_manager_or_organizer_of_published_event(self):
        event = EventFactory(published=False)
        guest = EventGuestFactory(event=event).user
        organizer = UserFactory()
        event.organizers.create(user=organizer)

        with self.assertRaises(Forbidden):
            LedgerService.apply(EventAward(actor=organizer, event_id=event.id, amount=5, utorid=guest.utorid))
        with self.assertRaises(Forbidden):
            LedgerService.apply(EventAward(actor=UserFactory(), event_id=event.id, amount=5))

        Event.objects.filter(pk=event.pk).update(published=True)
        records = LedgerService.apply(EventAward(actor=organizer, event_id=event.id, amount=5, utorid=guest.utorid))
        self.assertEqual(records[0].user_id, guest.id)

    def test_award_to_non_guest_and_after_end(self):
        from datetime import timedelta
        from django.utils import timezone

        manager = UserFactory(role=Role.MANAGER)
        event = EventFactory()
        with self.assertRaises(BadRequest):
            LedgerService.apply(EventAward(actor=manager, event_id=event.id, amount=5, utorid=UserFactory().utorid))

        ended = EventFactory(
            start_time=timezone.now() - timedelta(days=2), end_time=timezone.now() - timedelta(days=1)
        )
        with self.assertRaises(Gone):
            LedgerService.apply(EventAward(actor=manager, event_id=ended.id, amount=5))


class TestSuspiciousToggleReversibility(TestCase):
    """Property 5: marking then unmarking a transaction restores the balance"""

    @given(
        kind=st.sampled_from(['purchase', 'adjustment', 'transfer', 'redemption']),
        amount=st.integers(min_value=1, max_value=400),
    )
    @settings(max_examples=40, deadline=None)
    def test_mark_then_unmark_is_identity(self, kind, amount):
        manager = UserFactory(role=Role.MANAGER)
        user = UserFactory(points=1000)
        other = UserFactory()

        if kind == 'purchase':
            record = LedgerService.apply(Purchase(actor=manager, utorid=user.utorid, spent=Decimal(amount)))
        elif kind == 'adjustment':
            record = LedgerService.apply(Adjustment(actor=manager, utorid=user.utorid, amount=-amount))
        elif kind == 'transfer':
            record, _ = LedgerService.apply(Transfer(sender=user, recipient_id=other.id, amount=amount))
        else:
            request = LedgerService.apply(RedemptionRequest(user=user, amount=amount))
            record = LedgerService.apply(RedemptionProcessing(actor=manager, transaction_id=request.id))

        before = balance(user)
        marked = LedgerService.apply(SuspiciousToggle(actor=manager, transaction_id=record.id, suspicious=True))
        self.assertTrue(marked.suspicious)
        self.assertEqual(balance(user), before - record.balance_effect)

        LedgerService.apply(SuspiciousToggle(actor=manager, transaction_id=record.id, suspicious=False))
        self.assertEqual(balance(user), before)

    def test_repeated_toggle_is_a_no_op(self):
        manager = UserFactory(role=Role.MANAGER)
        record = PurchaseTransactionFactory(amount=40)
        user = record.user

        LedgerService.apply(SuspiciousToggle(actor=manager, transaction_id=record.id, suspicious=False))
        self.assertEqual(balance(user), 0)
        LedgerService.apply(SuspiciousToggle(actor=manager, transaction_id=record.id, suspicious=True))
        LedgerService.apply(SuspiciousToggle(actor=manager, transaction_id=record.id, suspicious=True))
        self.assertEqual(balance(user), -40)


class TestRedemptions(TestCase):

    def test_single_pending_redemption(self):
        user = UserFactory(points=50)

        pending = LedgerService.apply(RedemptionRequest(user=user, amount=50))
        self.assertIsNone(pending.processed_by_id)
        self.assertEqual(balance(user), 50)

        with self.assertRaises(BadRequest):
            LedgerService.apply(RedemptionRequest(user=user, amount=1))
        self.assertEqual(Transaction.objects.pending_redemptions().count(), 1)

    def test_processing_debits_once(self):
        user = UserFactory(points=80)
        cashier = UserFactory(role=Role.CASHIER)
        pending = LedgerService.apply(RedemptionRequest(user=user, amount=30))

        processed = LedgerService.apply(RedemptionProcessing(actor=cashier, transaction_id=pending.id))
        self.assertEqual(processed.processed_by_id, cashier.id)
        self.assertEqual(balance(user), 50)
        with self.assertRaises(BadRequest):
            LedgerService.apply(RedemptionProcessing(actor=cashier, transaction_id=pending.id))
        self.assertEqual(balance(user), 50)

    def test_unverified_user_cannot_redeem(self):
        user = UserFactory(points=80, verified=False)
        with self.assertRaises(Forbidden):
            LedgerService.apply(RedemptionRequest(user=user, amount=10))


class TestPurchasesAndAdjustments(TestCase):

    def test_purchase_credits_base_points(self):
        cashier = UserFactory(role=Role.CASHIER)
        customer = UserFactory()
        record = LedgerService.apply(Purchase(actor=cashier, utorid=customer.utorid, spent=Decimal('40.00')))
        self.assertEqual(record.amount, 160)
        self.assertEqual(balance(customer), 160)

    def test_suspicious_cashier_purchase_is_held(self):
        cashier = UserFactory(role=Role.CASHIER, suspicious=True)
        customer = UserFactory()
        record = LedgerService.apply(Purchase(actor=cashier, utorid=customer.utorid, spent=Decimal('10.00')))
        self.assertTrue(record.suspicious)
        self.assertEqual(record.amount, 40)
        self.assertEqual(balance(customer), 0)

    def test_regular_user_cannot_record_purchase(self):
        actor = UserFactory()
        with self.assertRaises(Forbidden):
            LedgerService.apply(Purchase(actor=actor, utorid=UserFactory().utorid, spent=Decimal('1')))

    def test_adjustment_related_transaction_must_belong_to_target(self):
        from apps.common.exceptions import NotFound

        manager = UserFactory(role=Role.MANAGER)
        target = UserFactory(points=100)
        foreign = PurchaseTransactionFactory()
        with self.assertRaises(NotFound):
            LedgerService.apply(Adjustment(actor=manager, utorid=target.utorid, amount=-5, related_id=foreign.id))

        own = PurchaseTransactionFactory(user=target)
        record = LedgerService.apply(Adjustment(actor=manager, utorid=target.utorid, amount=-5, related_id=own.id))
        self.assertEqual(record.processed_by_id, manager.id)
        self.assertEqual(balance(target), 95)
