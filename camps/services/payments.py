"""
Payment recorder: turns a completed card charge into a ledger row and
marks the paid membership.
"""
from __future__ import annotations

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied

from camps.models import Membership, Payment, PaymentStatus
from camps.services import stripe
from camps.services.audit import log_action
from camps.services.pagination import paginate

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')


def from_minor_units(raw_amount) -> Decimal:
    return (Decimal(str(raw_amount)) / 100).quantize(CENT, rounding=ROUND_HALF_UP)


def create_charge_intent(amount) -> stripe.ChargeIntent:
    return stripe.create_payment_intent(amount)


def record_payment(membership_id, payer_email: str, fields: Dict[str, Any]) -> Payment:
    """Mark the membership paid and append the charge to the ledger.

    ``fields['amount']`` is in minor units, as reported by the card
    processor.  Recording twice leaves the membership paid and writes two
    ledger rows.
    """
    with transaction.atomic():
        membership = Membership.objects.select_for_update().filter(id=membership_id).first()
        if not membership:
            raise NotFound('Registration not found')
        if membership.participant_email != payer_email:
            raise PermissionDenied('Forbidden', code='forbidden')
        if membership.payment_status == PaymentStatus.PAID:
            logger.warning("membership %s is already paid; recording another charge", membership.id)
        Membership.objects.filter(id=membership.id).update(payment_status=PaymentStatus.PAID)
        payment = Payment.objects.create(
            membership=membership,
            camp_name=fields.get('camp_name') or membership.camp_name,
            amount=from_minor_units(fields['amount']),
            payment_method=fields.get('payment_method') or '',
            transaction_id=fields['transaction_id'],
            email=payer_email,
            payment_status=PaymentStatus.PAID,
            confirmation_status=membership.confirmation_status,
            paid_at=timezone.now(),
        )
        log_action(actor=payer_email, action='payment_record', object_type='payment', object_id=payment.id,
                   detail={'membershipId': membership.id, 'transactionId': payment.transaction_id,
                           'amount': str(payment.amount)})
    logger.info("payment %s recorded for membership %s", payment.transaction_id, membership.id)
    return payment


def _history(email: str, search: Optional[str] = None):
    qs = Payment.objects.filter(email=email)
    if search:
        qs = qs.filter(camp_name__icontains=search)
    return qs


def payment_history(email: str, *, search: Optional[str] = None,
                    page: Optional[int] = None, size: Optional[int] = None) -> list[Payment]:
    return list(paginate(_history(email, search).order_by('-paid_at', '-id'), page, size))


def count_payments(email: str, *, search: Optional[str] = None) -> int:
    return _history(email, search).count()
