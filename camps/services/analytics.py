"""
Read-side aggregates for the admin and participant dashboards.

Month-over-month figures compare the current month so far,
``[start of this month, now)``, with the whole previous month,
``[start of last month, start of this month)``, in the configured time
zone.
"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import NamedTuple, Optional

from django.db.models import Sum
from django.utils import timezone

from camps.models import Camp, Membership, Payment, PaymentStatus, Role, User


class Window(NamedTuple):
    start: datetime
    end: datetime


def calculate_change(current, previous) -> float:
    """Percentage change from ``previous`` to ``current``, 2 decimals."""
    if previous == 0:
        return 100 if current > 0 else 0
    return round((float(current) - float(previous)) / float(previous) * 100, 2)


def month_windows(now: Optional[datetime] = None) -> tuple[Window, Window]:
    now = timezone.localtime(now or timezone.now())
    tz = now.tzinfo
    start_this = datetime(now.year, now.month, 1, tzinfo=tz)
    if now.month == 1:
        start_last = datetime(now.year - 1, 12, 1, tzinfo=tz)
    else:
        start_last = datetime(now.year, now.month - 1, 1, tzinfo=tz)
    return Window(start_this, now), Window(start_last, start_this)


def _in(field: str, window: Window) -> dict:
    return {f'{field}__gte': window.start, f'{field}__lt': window.end}


def _revenue(qs) -> Decimal:
    return qs.aggregate(total=Sum('amount'))['total'] or Decimal('0.00')


def admin_summary(now: Optional[datetime] = None) -> dict:
    this_month, last_month = month_windows(now)

    participants = User.objects.filter(role=Role.PARTICIPANT)
    paid = Payment.objects.filter(payment_status=PaymentStatus.PAID)

    this_participants = participants.filter(**_in('created_at', this_month)).count()
    last_participants = participants.filter(**_in('created_at', last_month)).count()
    this_camps = Camp.objects.filter(**_in('created_at', this_month)).count()
    last_camps = Camp.objects.filter(**_in('created_at', last_month)).count()
    this_paid = paid.filter(**_in('paid_at', this_month)).count()
    last_paid = paid.filter(**_in('paid_at', last_month)).count()
    this_revenue = _revenue(paid.filter(**_in('paid_at', this_month)))
    last_revenue = _revenue(paid.filter(**_in('paid_at', last_month)))

    return {
        'totalParticipants': participants.count(),
        'participantChange': calculate_change(this_participants, last_participants),
        'totalCamps': Camp.objects.count(),
        'campChange': calculate_change(this_camps, last_camps),
        'totalPaidPayments': paid.count(),
        'thisMonthPaidPayments': this_paid,
        'paidPaymentChange': calculate_change(this_paid, last_paid),
        'totalPendingPayments': Membership.objects.filter(payment_status=PaymentStatus.UNPAID).count(),
        'totalRevenue': _revenue(paid),
        'thisMonthRevenue': this_revenue,
        'revenueChange': calculate_change(this_revenue, last_revenue),
    }


def participant_summary(email: str) -> dict:
    paid = Payment.objects.filter(email=email, payment_status=PaymentStatus.PAID)
    return {
        'totalJoinedCamps': Membership.objects.filter(participant_email=email).count(),
        'totalPaidPayments': paid.count(),
        'totalPendingPayments': Membership.objects.filter(
            participant_email=email, payment_status=PaymentStatus.UNPAID
        ).count(),
        'totalPaidAmount': _revenue(paid),
    }
