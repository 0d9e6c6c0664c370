"""
Registration workflow: participants joining camps and the lifecycle of
the resulting memberships.

Joining inserts the membership and bumps the camp counter inside one
transaction.  Cancelling or deleting a membership leaves the counter
alone unless ``MEDIEASE['DECREMENT_ON_CANCEL']`` is set; the
``reconcile_participant_counts`` command repairs the resulting drift.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from django.conf import settings
from django.db import transaction
from rest_framework.exceptions import NotFound, PermissionDenied

from camps.models import Camp, ConfirmationStatus, Membership, PaymentStatus
from camps.services import camps as camp_service
from camps.services.audit import log_action
from camps.services.pagination import paginate

logger = logging.getLogger(__name__)

PARTICIPANT_FIELDS = ('participant_name', 'age', 'phone', 'gender', 'emergency_contact')
LIST_ORDERING = ('-created_at', '-id')


def join(camp_id, participant_email: str, payload: Optional[Dict[str, Any]] = None) -> Membership:
    """Register ``participant_email`` for a camp.

    The membership always starts unpaid/pending, whatever the payload
    says.  The same participant may join a camp more than once.
    """
    payload = payload or {}
    with transaction.atomic():
        camp = Camp.objects.select_for_update().filter(id=camp_id).first()
        if not camp:
            raise NotFound('Camp not found')
        membership = Membership.objects.create(
            camp=camp,
            camp_name=camp.name,
            camp_fee=camp.fee,
            location=camp.location,
            healthcare_professional=camp.healthcare_professional,
            created_by=camp.created_by,
            participant_email=participant_email,
            payment_status=PaymentStatus.UNPAID,
            confirmation_status=ConfirmationStatus.PENDING,
            **{k: v for k, v in payload.items() if k in PARTICIPANT_FIELDS and v is not None},
        )
        camp_service.increment_participant_count(camp.id)
        log_action(actor=participant_email, action='camp_join', object_type='membership', object_id=membership.id,
                   detail={'campId': camp.id})
    logger.info("%s joined camp %s (membership %s)", participant_email, camp.id, membership.id)
    return membership


def get_membership(membership_id, *, participant_email: Optional[str] = None) -> Membership:
    membership = Membership.objects.filter(id=membership_id).first()
    if not membership:
        raise NotFound('Registration not found')
    if participant_email is not None and membership.participant_email != participant_email:
        raise PermissionDenied('Forbidden', code='forbidden')
    return membership


def _remove(membership: Membership, *, actor: str, action: str) -> int:
    camp_id, membership_id = membership.camp_id, membership.pk
    with transaction.atomic():
        membership.delete()
        if camp_id and settings.MEDIEASE['DECREMENT_ON_CANCEL']:
            camp_service.decrement_participant_count(camp_id)
        log_action(actor=actor, action=action, object_type='membership', object_id=membership_id,
                   detail={'campId': camp_id})
    return 1


def cancel(membership_id, participant_email: Optional[str] = None) -> int:
    """Delete a membership; returns the number of deleted rows.

    When ``participant_email`` is given the membership must belong to
    that participant.
    """
    membership = Membership.objects.filter(id=membership_id).first()
    if not membership:
        return 0
    if participant_email is not None and membership.participant_email != participant_email:
        raise PermissionDenied('Forbidden', code='forbidden')
    return _remove(membership, actor=participant_email or '', action='camp_cancel')


def admin_delete(membership_id, *, actor: str) -> int:
    membership = Membership.objects.filter(id=membership_id).first()
    if not membership:
        return 0
    if membership.payment_status == PaymentStatus.PAID:
        logger.warning("admin %s deleting paid membership %s", actor, membership_id)
    return _remove(membership, actor=actor, action='registration_delete')


def confirm(membership_id, *, actor: str) -> tuple[int, int]:
    """Confirm a membership; returns ``(matched, modified)``.  Confirming
    an already confirmed membership changes nothing."""
    membership = get_membership(membership_id)
    if membership.confirmation_status == ConfirmationStatus.CONFIRMED:
        return 1, 0
    with transaction.atomic():
        Membership.objects.filter(id=membership.id).update(confirmation_status=ConfirmationStatus.CONFIRMED)
        log_action(actor=actor, action='registration_confirm', object_type='membership', object_id=membership.id)
    return 1, 1


def is_joined(camp_id, participant_email: str) -> bool:
    return Membership.objects.filter(camp_id=camp_id, participant_email=participant_email).exists()


def _for_participant(email: str, search: Optional[str] = None):
    qs = Membership.objects.filter(participant_email=email)
    if search:
        qs = qs.filter(camp_name__icontains=search)
    return qs


def _for_admin(admin_email: str, search: Optional[str] = None):
    qs = Membership.objects.filter(created_by=admin_email)
    if search:
        qs = qs.filter(participant_name__icontains=search)
    return qs


def registered_camps_for_participant(email: str, *, search: Optional[str] = None,
                                     page: Optional[int] = None, size: Optional[int] = None) -> list[Membership]:
    return list(paginate(_for_participant(email, search).order_by(*LIST_ORDERING), page, size))


def count_for_participant(email: str, *, search: Optional[str] = None) -> int:
    return _for_participant(email, search).count()


def registered_camps_for_admin(admin_email: str, *, search: Optional[str] = None,
                               page: Optional[int] = None, size: Optional[int] = None) -> list[Membership]:
    """Memberships of the camps owned by ``admin_email``."""
    return list(paginate(_for_admin(admin_email, search).order_by(*LIST_ORDERING), page, size))


def count_for_admin(admin_email: str, *, search: Optional[str] = None) -> int:
    return _for_admin(admin_email, search).count()
