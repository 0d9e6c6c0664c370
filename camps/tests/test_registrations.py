import threading

import pytest
from django.core.management import CommandError, call_command
from django.db import DatabaseError, connection
from django.db.models.query import QuerySet

from camps.models import AuditEvent, Camp, ConfirmationStatus, Membership, PaymentStatus, Role, User
from camps.services import camps as camp_service
from camps.services import registrations

from .utils import client_for

pytestmark = pytest.mark.django_db

JOIN_BODY = {
    'participant_name': 'Rahim',
    'age': 34,
    'phone': '+8801700000000',
    'gender': 'male',
    'emergency_contact': '+8801800000000',
}


def _join(client, camp_id, **extra):
    return client.post('/user/join-camp', {'campId': camp_id, **JOIN_BODY, **extra}, format='json')


def test_join_creates_pending_unpaid_membership_and_bumps_counter(participant_client, camp, participant):
    r = _join(participant_client, camp.id, payment_status='paid', confirmation_status='confirmed')
    assert r.status_code == 200
    m = Membership.objects.get(id=r.data['insertedId'])
    assert m.payment_status == PaymentStatus.UNPAID
    assert m.confirmation_status == ConfirmationStatus.PENDING
    assert m.participant_email == participant.email
    assert m.camp_name == 'Eye Care Camp'
    assert m.created_by == 'admin@medi-ease.test'
    assert m.age == 34
    camp.refresh_from_db()
    assert camp.participant_count == 1
    assert AuditEvent.objects.filter(action='camp_join', object_id=str(m.id)).exists()


def test_join_unknown_camp_is_404_and_writes_nothing(participant_client):
    r = _join(participant_client, 31337)
    assert r.status_code == 404
    assert r.data['error']['message'] == 'Camp not found'
    assert not Membership.objects.exists()


def test_join_requires_participant_role(admin_client, camp):
    assert _join(admin_client, camp.id).status_code == 403


def test_duplicate_join_is_permitted(participant_client, camp):
    _join(participant_client, camp.id)
    _join(participant_client, camp.id)
    camp.refresh_from_db()
    assert camp.participant_count == 2
    assert Membership.objects.filter(camp=camp).count() == 2


def test_counter_matches_joins_without_cancellations(camp, participant, other_participant):
    for email in (participant.email, other_participant.email, participant.email):
        registrations.join(camp.id, email)
    camp.refresh_from_db()
    assert camp.participant_count == Membership.objects.filter(camp=camp).count() == 3


def test_increments_are_not_lost_through_stale_instances(camp, participant):
    stale = Camp.objects.get(id=camp.id)
    registrations.join(camp.id, participant.email)
    registrations.join(stale.id, participant.email)
    assert Camp.objects.get(id=camp.id).participant_count == 2


def test_cancel_leaves_counter_by_default(participant_client, camp, participant):
    m = registrations.join(camp.id, participant.email)
    r = participant_client.delete(f'/user/camp-cancel/{m.id}')
    assert r.data == {'acknowledged': True, 'deletedCount': 1}
    camp.refresh_from_db()
    assert camp.participant_count == 1
    assert not Membership.objects.filter(id=m.id).exists()


def test_cancel_decrements_when_configured(participant_client, camp, participant, settings):
    settings.MEDIEASE = {**settings.MEDIEASE, 'DECREMENT_ON_CANCEL': True}
    m = registrations.join(camp.id, participant.email)
    participant_client.delete(f'/user/camp-cancel/{m.id}')
    camp.refresh_from_db()
    assert camp.participant_count == 0


def test_cancel_missing_membership_reports_zero(participant_client):
    assert participant_client.delete('/user/camp-cancel/999').data['deletedCount'] == 0


def test_cannot_cancel_someone_elses_registration(camp, participant, other_participant):
    m = registrations.join(camp.id, other_participant.email)
    r = client_for(participant.email).delete(f'/user/camp-cancel/{m.id}')
    assert r.status_code == 403
    assert Membership.objects.filter(id=m.id).exists()


def test_confirm_is_idempotent(admin_client, camp, participant):
    m = registrations.join(camp.id, participant.email)
    r = admin_client.patch(f'/admin/camp-confirm/{m.id}')
    assert r.data == {'acknowledged': True, 'matchedCount': 1, 'modifiedCount': 1}
    r = admin_client.patch(f'/admin/camp-confirm/{m.id}')
    assert r.data == {'acknowledged': True, 'matchedCount': 1, 'modifiedCount': 0}
    m.refresh_from_db()
    assert m.confirmation_status == ConfirmationStatus.CONFIRMED
    assert m.payment_status == PaymentStatus.UNPAID


def test_confirm_missing_is_404(admin_client):
    assert admin_client.patch('/admin/camp-confirm/404').status_code == 404


def test_participant_cannot_confirm(participant_client, camp, participant):
    m = registrations.join(camp.id, participant.email)
    assert participant_client.patch(f'/admin/camp-confirm/{m.id}').status_code == 403


def test_is_joined(participant_client, camp, participant):
    assert participant_client.get('/user/is-joined', {'campId': camp.id}).data == {'alreadyJoined': False}
    registrations.join(camp.id, participant.email)
    assert participant_client.get('/user/is-joined', {'campId': camp.id}).data == {'alreadyJoined': True}
    assert participant_client.get('/user/is-joined').status_code == 400


def test_registered_camps_are_the_callers_own(participant_client, camp, participant, other_participant):
    registrations.join(camp.id, participant.email)
    registrations.join(camp.id, other_participant.email)
    r = participant_client.get('/user/registeredCamps')
    assert [m['participant_email'] for m in r.data] == [participant.email]
    assert r.data[0]['campId'] == camp.id
    assert participant_client.get('/user/participant-camp-count').data == {'count': 1}


def test_registered_camps_search_and_paging(participant_client, admin_user, participant):
    for name in ('Eye Care', 'Dental', 'Eye Surgery Consult'):
        c = Camp.objects.create(name=name, created_by=admin_user.email)
        registrations.join(c.id, participant.email)
    r = participant_client.get('/user/registeredCamps', {'search': 'eye'})
    assert [m['camp_name'] for m in r.data] == ['Eye Surgery Consult', 'Eye Care']
    assert participant_client.get('/user/participant-camp-count', {'search': 'EYE'}).data == {'count': 2}
    r = participant_client.get('/user/registeredCamps', {'page': 1, 'size': 2})
    assert [m['camp_name'] for m in r.data] == ['Eye Care']


def test_camp_participant_detail(participant_client, camp, participant, other_participant):
    mine = registrations.join(camp.id, participant.email, {'participant_name': 'Rahim'})
    theirs = registrations.join(camp.id, other_participant.email)
    r = participant_client.get(f'/user/camp-participant/{mine.id}')
    assert r.data['participant_name'] == 'Rahim'
    assert participant_client.get(f'/user/camp-participant/{theirs.id}').status_code == 403
    assert participant_client.get('/user/camp-participant/5050').status_code == 404


def test_admin_sees_registrations_of_own_camps(admin_client, camp, participant, other_participant):
    registrations.join(camp.id, participant.email, {'participant_name': 'Rahim'})
    registrations.join(camp.id, other_participant.email, {'participant_name': 'Karim'})
    foreign = Camp.objects.create(name='Elsewhere', created_by='other-admin@medi-ease.test')
    registrations.join(foreign.id, participant.email, {'participant_name': 'Rahim'})

    r = admin_client.get('/admin/get-registered-camps')
    assert sorted(m['participant_name'] for m in r.data) == ['Karim', 'Rahim']
    assert admin_client.get('/admin/registeredCamp/count').data == {'count': 2}
    r = admin_client.get('/admin/get-registered-camps', {'search': 'kar'})
    assert [m['participant_name'] for m in r.data] == ['Karim']
    assert admin_client.get('/admin/registeredCamp/count', {'search': 'kar'}).data == {'count': 1}


def test_admin_delete_registration(admin_client, camp, participant):
    m = registrations.join(camp.id, participant.email)
    Membership.objects.filter(id=m.id).update(payment_status=PaymentStatus.PAID)
    r = admin_client.delete(f'/admin/register-camp-delete/{m.id}')
    assert r.data['deletedCount'] == 1
    assert admin_client.delete(f'/admin/register-camp-delete/{m.id}').data['deletedCount'] == 0
    assert AuditEvent.objects.filter(action='registration_delete').count() == 1


def test_reconcile_command_repairs_drift(camp, participant, capsys):
    keep = registrations.join(camp.id, participant.email)
    gone = registrations.join(camp.id, participant.email)
    registrations.cancel(gone.id, participant.email)
    camp.refresh_from_db()
    assert camp.participant_count == 2

    call_command('reconcile_participant_counts', '--dry-run')
    camp.refresh_from_db()
    assert camp.participant_count == 2
    assert 'would fix 1' in capsys.readouterr().out

    call_command('reconcile_participant_counts')
    camp.refresh_from_db()
    assert camp.participant_count == 1 == Membership.objects.filter(camp=camp).count()
    assert keep.camp_id == camp.id


def test_ensure_admin_command(participant, capsys):
    call_command('ensure_admin', participant.email, '--name', 'Rahim Admin')
    participant.refresh_from_db()
    assert participant.role == Role.ADMIN
    assert participant.name == 'Rahim Admin'
    assert 'ensured' in capsys.readouterr().out

    call_command('ensure_admin', 'fresh@medi-ease.test')
    assert User.objects.get(email='fresh@medi-ease.test').role == Role.ADMIN
    with pytest.raises(CommandError):
        call_command('ensure_admin', 'not-an-email')


def test_reconcile_counts_a_join_that_lands_mid_repair(camp, participant, monkeypatch):
    registrations.join(camp.id, participant.email)
    Camp.objects.filter(id=camp.id).update(participant_count=5)

    real_count = QuerySet.count
    joined = []

    def count_then_join(qs):
        n = real_count(qs)
        if qs.model is Membership and not joined:
            joined.append(registrations.join(camp.id, participant.email))
        return n

    monkeypatch.setattr(QuerySet, 'count', count_then_join)
    drift = camp_service.reconcile_participant_counts()
    monkeypatch.undo()

    assert drift == [{'campId': camp.id, 'stored': 5, 'actual': 1}]
    camp.refresh_from_db()
    assert camp.participant_count == 2 == Membership.objects.filter(camp=camp).count()


@pytest.mark.django_db(transaction=True)
def test_concurrent_joins_keep_counter_in_step(camp, participant):
    outcomes = []

    def worker():
        try:
            registrations.join(camp.id, participant.email)
            outcomes.append('joined')
        except DatabaseError:
            # SQLite may refuse concurrent writers; a refused join must roll back whole.
            outcomes.append('refused')
        finally:
            connection.close()

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(outcomes) == 8
    camp.refresh_from_db()
    memberships = Membership.objects.filter(camp=camp).count()
    assert camp.participant_count == memberships == outcomes.count('joined')
