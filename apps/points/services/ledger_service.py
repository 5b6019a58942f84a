"""
Ledger service: the only code that changes point balances.

Every operation runs in one database transaction. Debits are conditional
updates (``UPDATE ... WHERE points >= n``) so a balance or budget check is
repeated at the moment of the write.
"""
import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.common.exceptions import BadRequest, Forbidden, Gone, NotFound
from apps.events.models import Event, EventGuest
from apps.promotions.services import PromotionEvaluator
from apps.users.models import User, Role
from ..models import Transaction, TransactionType, TransactionPromotion
from .operations import (
    Purchase, Adjustment, Transfer, RedemptionRequest, RedemptionProcessing, EventAward, SuspiciousToggle,
)

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger('security.audit')


def _find_user(utorid, for_update=False):
    users = User.objects.select_for_update() if for_update else User.objects.all()
    user = users.filter(utorid=utorid).first()
    if user is None:
        raise NotFound()
    return user


def _credit(user_id, amount):
    if amount:
        User.objects.filter(pk=user_id).update(points=F('points') + amount)


def _debit(user_id, amount):
    """Take ``amount`` from a balance only if it covers it"""
    updated = User.objects.filter(pk=user_id, points__gte=amount).update(points=F('points') - amount)
    if not updated:
        raise BadRequest('Insufficient points')


class LedgerService:
    """Executes ledger operations"""

    @staticmethod
    def apply(operation):
        handler = LedgerService.HANDLERS.get(type(operation))
        if handler is None:
            raise TypeError(f"Unknown ledger operation: {type(operation).__name__}")
        with transaction.atomic():
            return handler(operation)

    @staticmethod
    def purchase(op):
        actor = op.actor
        if not actor.has_role(Role.CASHIER):
            raise Forbidden()
        if op.spent < 0:
            raise BadRequest('spent must not be negative')
        # Locked so concurrent purchases for one customer see each other's promotion usage
        customer = _find_user(op.utorid, for_update=True)

        now = timezone.now()
        selected = PromotionEvaluator.resolve_one_time_selection(customer, list(op.promotion_ids), now)
        PromotionEvaluator.mark_used(customer, selected, now)
        automatic = list(PromotionEvaluator.automatic_promotions(now))
        earned = PromotionEvaluator.compute_earned_points(op.spent, automatic, selected)
        suspicious = op.suspicious or actor.suspicious

        record = Transaction.objects.create(
            user=customer,
            type=TransactionType.PURCHASE,
            amount=earned,
            spent=op.spent,
            suspicious=suspicious,
            remark=op.remark,
            created_by=actor,
            processed_by=actor,
        )
        TransactionPromotion.objects.bulk_create([
            TransactionPromotion(transaction=record, promotion=promotion)
            for promotion in automatic + selected
        ])
        if not suspicious:
            _credit(customer.pk, earned)

        audit_logger.info(
            f"purchase tx={record.id} user={customer.utorid} spent={op.spent} earned={earned} "
            f"suspicious={suspicious} by={actor.utorid}"
        )
        return record

    @staticmethod
    def adjustment(op):
        actor = op.actor
        if not actor.has_role(Role.MANAGER):
            raise Forbidden()
        target = _find_user(op.utorid)
        if op.related_id is not None:
            if not Transaction.objects.filter(pk=op.related_id, user=target).exists():
                raise NotFound()

        suspicious = op.suspicious or actor.suspicious
        record = Transaction.objects.create(
            user=target,
            type=TransactionType.ADJUSTMENT,
            amount=op.amount,
            related_id=op.related_id,
            suspicious=suspicious,
            remark=op.remark,
            created_by=actor,
            processed_by=actor,
        )
        if not suspicious:
            _credit(target.pk, op.amount)

        audit_logger.info(
            f"adjustment tx={record.id} user={target.utorid} amount={op.amount} "
            f"suspicious={suspicious} by={actor.utorid}"
        )
        return record

    @staticmethod
    def transfer(op):
        sender = op.sender
        if op.amount <= 0:
            raise BadRequest('amount must be positive')
        if op.recipient_id == sender.pk:
            raise BadRequest('Cannot transfer points to yourself')
        recipient = User.objects.filter(pk=op.recipient_id).first()
        if recipient is None:
            raise NotFound()
        if not sender.verified:
            raise BadRequest('Only verified users can transfer points')

        _debit(sender.pk, op.amount)
        _credit(recipient.pk, op.amount)
        debit = Transaction.objects.create(
            user=sender,
            type=TransactionType.TRANSFER,
            amount=-op.amount,
            related_id=recipient.pk,
            remark=op.remark,
            created_by=sender,
            processed_by=sender,
        )
        credit = Transaction.objects.create(
            user=recipient,
            type=TransactionType.TRANSFER,
            amount=op.amount,
            related_id=sender.pk,
            remark=op.remark,
            created_by=sender,
            processed_by=sender,
        )

        audit_logger.info(
            f"transfer tx={debit.id}/{credit.id} from={sender.utorid} to={recipient.utorid} amount={op.amount}"
        )
        return debit, credit

    @staticmethod
    def request_redemption(op):
        # Lock the owner so two requests cannot both pass the pending check
        user = User.objects.select_for_update().get(pk=op.user.pk)
        if not user.verified:
            raise Forbidden()
        if op.amount <= 0:
            raise BadRequest('amount must be positive')
        if user.points < op.amount:
            raise BadRequest('Insufficient points')
        if Transaction.objects.for_user(user).pending_redemptions().exists():
            raise BadRequest('A redemption is already pending')

        record = Transaction.objects.create(
            user=user,
            type=TransactionType.REDEMPTION,
            amount=op.amount,
            remark=op.remark,
            created_by=user,
        )
        audit_logger.info(f"redemption requested tx={record.id} user={user.utorid} amount={op.amount}")
        return record

    @staticmethod
    def process_redemption(op):
        record = Transaction.objects.select_related('user', 'created_by').filter(pk=op.transaction_id).first()
        if record is None:
            raise NotFound()
        if record.type != TransactionType.REDEMPTION or record.is_processed:
            raise BadRequest('Not a pending redemption')

        marked = Transaction.objects.filter(
            pk=record.pk, processed_by__isnull=True
        ).update(processed_by=op.actor)
        if not marked:
            raise BadRequest('Redemption already processed')
        if not record.suspicious:
            _debit(record.user_id, record.amount)

        record.refresh_from_db()
        audit_logger.info(
            f"redemption processed tx={record.id} user={record.user.utorid} amount={record.amount} "
            f"by={op.actor.utorid}"
        )
        return record

    @staticmethod
    def award_event_points(op):
        actor = op.actor
        event = Event.objects.filter(pk=op.event_id).first()
        if event is None:
            raise NotFound()
        if not actor.is_manager and not (event.published and event.is_organizer(actor)):
            raise Forbidden()
        if event.has_ended():
            raise Gone('Event has ended')
        if op.amount <= 0:
            raise BadRequest('amount must be positive')

        if op.utorid is None:
            recipients = [guest.user for guest in EventGuest.objects.filter(event=event).select_related('user')]
        else:
            user = _find_user(op.utorid)
            if not event.is_guest(user):
                raise BadRequest('User is not a guest of this event')
            recipients = [user]

        needed = op.amount * len(recipients)
        if not recipients:
            return []
        moved = Event.objects.filter(pk=event.pk, points_remain__gte=needed).update(
            points_remain=F('points_remain') - needed,
            points_awarded=F('points_awarded') + needed,
        )
        if not moved:
            raise BadRequest('Event budget exhausted')

        records = []
        for user in recipients:
            records.append(Transaction.objects.create(
                user=user,
                type=TransactionType.EVENT,
                amount=op.amount,
                related_id=event.pk,
                remark=op.remark,
                created_by=actor,
                processed_by=actor,
            ))
            _credit(user.pk, op.amount)

        audit_logger.info(
            f"event award event={event.id} guests={len(records)} amount={op.amount} by={actor.utorid}"
        )
        return records

    @staticmethod
    def toggle_suspicious(op):
        record = Transaction.objects.select_related('user', 'created_by').filter(pk=op.transaction_id).first()
        if record is None:
            raise NotFound()
        if record.suspicious == op.suspicious:
            return record

        flipped = Transaction.objects.filter(
            pk=record.pk, suspicious=not op.suspicious
        ).update(suspicious=op.suspicious)
        if flipped:
            delta = -record.balance_effect if op.suspicious else record.balance_effect
            _credit(record.user_id, delta)
            audit_logger.info(
                f"suspicious={op.suspicious} tx={record.id} user={record.user.utorid} delta={delta} "
                f"by={op.actor.utorid}"
            )
        record.refresh_from_db()
        return record


LedgerService.HANDLERS = {
    Purchase: LedgerService.purchase,
    Adjustment: LedgerService.adjustment,
    Transfer: LedgerService.transfer,
    RedemptionRequest: LedgerService.request_redemption,
    RedemptionProcessing: LedgerService.process_redemption,
    EventAward: LedgerService.award_event_points,
    SuspiciousToggle: LedgerService.toggle_suspicious,
}
