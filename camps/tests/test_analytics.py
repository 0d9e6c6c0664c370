from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

import pytest

from camps.models import Camp, Membership, Payment, PaymentStatus, Role, User
from camps.services import analytics, registrations

pytestmark = pytest.mark.django_db

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=dt_timezone.utc)
THIS_MONTH = datetime(2026, 3, 2, 9, 0, tzinfo=dt_timezone.utc)
LAST_MONTH = datetime(2026, 2, 10, 9, 0, tzinfo=dt_timezone.utc)
LONG_AGO = datetime(2025, 11, 5, 9, 0, tzinfo=dt_timezone.utc)


def test_calculate_change():
    assert analytics.calculate_change(0, 0) == 0
    assert analytics.calculate_change(5, 0) == 100
    assert analytics.calculate_change(50, 100) == -50.0
    assert analytics.calculate_change(3, 2) == 50.0
    assert analytics.calculate_change(1, 3) == -66.67
    assert analytics.calculate_change(Decimal('50.00'), Decimal('10.00')) == 400.0


def test_month_windows_mid_year():
    this_month, last_month = analytics.month_windows(NOW)
    assert this_month.start == datetime(2026, 3, 1, tzinfo=dt_timezone.utc)
    assert this_month.end == NOW
    assert last_month.start == datetime(2026, 2, 1, tzinfo=dt_timezone.utc)
    assert last_month.end == this_month.start


def test_month_windows_in_january_reach_into_last_year():
    this_month, last_month = analytics.month_windows(datetime(2026, 1, 20, tzinfo=dt_timezone.utc))
    assert this_month.start == datetime(2026, 1, 1, tzinfo=dt_timezone.utc)
    assert last_month.start == datetime(2025, 12, 1, tzinfo=dt_timezone.utc)
    assert last_month.end == datetime(2026, 1, 1, tzinfo=dt_timezone.utc)


def _participant(email, created_at):
    user = User.objects.create(email=email, role=Role.PARTICIPANT)
    User.objects.filter(id=user.id).update(created_at=created_at)
    return user


def _paid(amount, paid_at, email='payer@medi-ease.test'):
    return Payment.objects.create(
        amount=Decimal(amount), transaction_id=f'pi_{amount}_{paid_at:%m%d}', email=email,
        payment_status=PaymentStatus.PAID, paid_at=paid_at,
    )


def test_admin_summary_over_fixed_months(admin_user):
    _participant('new@medi-ease.test', THIS_MONTH)
    _participant('feb1@medi-ease.test', LAST_MONTH)
    _participant('feb2@medi-ease.test', LAST_MONTH)
    _participant('old@medi-ease.test', LONG_AGO)

    march_camp = Camp.objects.create(name='March camp', created_by=admin_user.email)
    old_camp = Camp.objects.create(name='Old camp', created_by=admin_user.email)
    Camp.objects.filter(id=march_camp.id).update(created_at=THIS_MONTH)
    Camp.objects.filter(id=old_camp.id).update(created_at=LONG_AGO)

    _paid('20.00', THIS_MONTH)
    _paid('30.00', THIS_MONTH)
    _paid('10.00', LAST_MONTH)
    _paid('7.50', LONG_AGO)

    registrations.join(march_camp.id, 'new@medi-ease.test')
    registrations.join(march_camp.id, 'feb1@medi-ease.test')

    summary = analytics.admin_summary(NOW)
    assert summary == {
        'totalParticipants': 4,
        'participantChange': -50.0,
        'totalCamps': 2,
        'campChange': 100,
        'totalPaidPayments': 4,
        'thisMonthPaidPayments': 2,
        'paidPaymentChange': 100.0,
        'totalPendingPayments': 2,
        'totalRevenue': Decimal('67.50'),
        'thisMonthRevenue': Decimal('50.00'),
        'revenueChange': 400.0,
    }


def test_admin_summary_on_empty_platform(admin_user):
    summary = analytics.admin_summary(NOW)
    assert summary['totalParticipants'] == 0
    assert summary['participantChange'] == 0
    assert summary['totalRevenue'] == Decimal('0.00')
    assert summary['revenueChange'] == 0


def test_admin_analytics_endpoint(admin_client, participant_client):
    r = admin_client.get('/admin/analytics')
    assert r.status_code == 200
    assert r.data['totalParticipants'] == 1
    assert participant_client.get('/admin/analytics').status_code == 403


def test_participant_analytics(participant_client, participant, camp):
    paid = registrations.join(camp.id, participant.email)
    registrations.join(camp.id, participant.email)
    Membership.objects.filter(id=paid.id).update(payment_status=PaymentStatus.PAID)
    _paid('20.00', NOW, email=participant.email)
    _paid('99.00', NOW, email='someone@else.test')

    r = participant_client.get('/user/analytics')
    assert r.status_code == 200
    assert r.data == {
        'totalJoinedCamps': 2,
        'totalPaidPayments': 1,
        'totalPendingPayments': 1,
        'totalPaidAmount': Decimal('20.00'),
    }


def test_unexpected_errors_become_500(admin_client, monkeypatch):
    def broken(now=None):
        raise RuntimeError('database on fire')

    monkeypatch.setattr(analytics, 'admin_summary', broken)
    r = admin_client.get('/admin/analytics')
    assert r.status_code == 500
    assert r.data == {'ok': False, 'error': {'code': 'server_error', 'message': 'Internal server error'}}
