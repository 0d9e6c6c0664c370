"""
Camp registry: create, browse, patch and delete camps and keep their
participant counters.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from django.conf import settings
from django.db import transaction
from django.db.models import Count, F, IntegerField, OuterRef, Subquery, Value
from django.db.models.functions import Coalesce, Lower
from rest_framework.exceptions import NotFound, PermissionDenied

from camps.models import Camp, Membership
from camps.services.audit import log_action
from camps.services.pagination import paginate

logger = logging.getLogger(__name__)

SORT_MOST_REGISTERED = 'most-registered'
SORT_FEES = 'fees'
SORT_ALPHABETICAL = 'alphabetical'
SORT_RECENT = 'recent'

# UI labels used by the front-end, mapped onto the short keys.
SORT_ALIASES = {
    'most registered': SORT_MOST_REGISTERED,
    'camp fees': SORT_FEES,
    'alphabetical order': SORT_ALPHABETICAL,
    'recent camp': SORT_RECENT,
}

SORT_ORDERINGS = {
    SORT_MOST_REGISTERED: ('-participant_count', '-created_at', '-id'),
    SORT_FEES: ('fee', Lower('name'), 'id'),
    SORT_ALPHABETICAL: (Lower('name'), 'id'),
    SORT_RECENT: ('-created_at', '-id'),
}
DEFAULT_ORDERING = SORT_ORDERINGS[SORT_RECENT]

# Fields an admin may change through a partial update.
PATCHABLE_FIELDS = (
    'name', 'image', 'fee', 'scheduled_at', 'location',
    'healthcare_professional', 'description', 'capacity',
)


def normalize_sort(sort: Optional[str]) -> Optional[str]:
    if not sort:
        return None
    key = sort.strip().lower()
    key = SORT_ALIASES.get(key, key)
    return key if key in SORT_ORDERINGS else None


def _filtered(search: Optional[str] = None, created_by: Optional[str] = None):
    qs = Camp.objects.all()
    if created_by:
        qs = qs.filter(created_by=created_by)
    if search:
        qs = qs.filter(name__icontains=search)
    return qs


def create_camp(owner_email: str, fields: Dict[str, Any]) -> Camp:
    data = {k: v for k, v in fields.items() if k in PATCHABLE_FIELDS}
    with transaction.atomic():
        camp = Camp.objects.create(created_by=owner_email, participant_count=0, **data)
        log_action(actor=owner_email, action='camp_create', object_type='camp', object_id=camp.id)
    logger.info("camp %s created by %s", camp.id, owner_email)
    return camp


def get_camp(camp_id) -> Camp:
    camp = Camp.objects.filter(id=camp_id).first()
    if not camp:
        raise NotFound('Camp not found')
    return camp


def list_camps(*, search: Optional[str] = None, sort: Optional[str] = None, created_by: Optional[str] = None,
               page: Optional[int] = None, size: Optional[int] = None) -> list[Camp]:
    key = normalize_sort(sort)
    ordering = SORT_ORDERINGS[key] if key else DEFAULT_ORDERING
    qs = _filtered(search, created_by).order_by(*ordering)
    return list(paginate(qs, page, size))


def count_camps(*, search: Optional[str] = None, created_by: Optional[str] = None) -> int:
    return _filtered(search, created_by).count()


def popular_camps(limit: Optional[int] = None) -> list[Camp]:
    limit = limit or settings.MEDIEASE['POPULAR_LIMIT']
    return list(Camp.objects.order_by(*SORT_ORDERINGS[SORT_MOST_REGISTERED])[:limit])


def increment_participant_count(camp_id, by: int = 1) -> int:
    """Atomically add ``by`` to the camp's counter; returns rows updated."""
    return Camp.objects.filter(id=camp_id).update(participant_count=F('participant_count') + by)


def decrement_participant_count(camp_id) -> int:
    return Camp.objects.filter(id=camp_id, participant_count__gt=0).update(
        participant_count=F('participant_count') - 1
    )


def update_camp(camp_id, fields: Dict[str, Any], *, actor: Optional[str] = None) -> tuple[int, int]:
    """Apply a partial update; returns ``(matched, modified)``.

    Only the owning admin (``actor``) may edit a camp.
    """
    data = {k: v for k, v in fields.items() if k in PATCHABLE_FIELDS}
    camp = get_camp(camp_id)
    if actor is not None and camp.created_by != actor:
        raise PermissionDenied('Forbidden', code='forbidden')
    changed = [k for k, v in data.items() if getattr(camp, k) != v]
    if not changed:
        return 1, 0
    with transaction.atomic():
        for k in changed:
            setattr(camp, k, data[k])
        camp.save(update_fields=changed)
        log_action(actor=actor, action='camp_update', object_type='camp', object_id=camp.id, detail={'fields': changed})
    return 1, 1


@transaction.atomic
def delete_camp(camp_id, *, actor: Optional[str] = None) -> int:
    """Delete a camp.  Its memberships are kept (camp reference cleared)
    unless ``MEDIEASE['CASCADE_CAMP_DELETE']`` is set."""
    camp = Camp.objects.filter(id=camp_id).first()
    if not camp:
        return 0
    removed_memberships = 0
    if settings.MEDIEASE['CASCADE_CAMP_DELETE']:
        removed_memberships, _ = Membership.objects.filter(camp=camp).delete()
    camp.delete()
    log_action(actor=actor, action='camp_delete', object_type='camp', object_id=camp_id,
               detail={'memberships_deleted': removed_memberships})
    logger.info("camp %s deleted by %s", camp_id, actor)
    return 1


def _live_membership_count():
    counts = (Membership.objects.filter(camp=OuterRef('pk')).order_by()
              .values('camp').annotate(n=Count('id')).values('n')[:1])
    return Coalesce(Subquery(counts, output_field=IntegerField()), Value(0))


def reconcile_participant_counts(*, dry_run: bool = False) -> list[dict]:
    """Reset every camp's counter to its current membership count.

    Each camp is repaired under its row lock and the new value is
    counted inside the UPDATE itself.  Returns one entry per camp whose counter disagreed.
    """
    drift = []
    for camp_id in Camp.objects.order_by('id').values_list('id', flat=True):
        with transaction.atomic():
            camp = Camp.objects.select_for_update().filter(id=camp_id).first()
            if camp is None:
                continue
            actual = Membership.objects.filter(camp_id=camp_id).count()
            if camp.participant_count == actual:
                continue
            drift.append({'campId': camp_id, 'stored': camp.participant_count, 'actual': actual})
            if not dry_run:
                Camp.objects.filter(id=camp_id).update(participant_count=_live_membership_count())
    if drift and not dry_run:
        log_action(actor=None, action='reconcile_counts', object_type='camp', detail={'camps': drift})
    return drift
