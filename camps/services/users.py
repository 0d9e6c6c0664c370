import logging
from typing import Optional

from django.db import IntegrityError, transaction
from rest_framework.exceptions import NotFound

from camps.exceptions import AlreadyExists
from camps.models import Role, User
from camps.services.audit import log_action

logger = logging.getLogger(__name__)


def register_user(*, email: str, name: str = '', photo_url: str = '') -> User:
    """Create a participant account for ``email``.

    Self-registration never grants a role other than participant; admins
    are provisioned with the ``ensure_admin`` management command.
    """
    email = email.strip().lower()
    if User.objects.filter(email=email).exists():
        raise AlreadyExists('User already exist')
    try:
        with transaction.atomic():
            user = User.objects.create(email=email, name=name, photo_url=photo_url, role=Role.PARTICIPANT)
            log_action(actor=email, action='user_register', object_type='user', object_id=user.id)
    except IntegrityError as exc:
        # Lost a race against a concurrent registration of the same email.
        raise AlreadyExists('User already exist') from exc
    logger.info("registered participant %s", email)
    return user


def get_user(email: str) -> User:
    user = User.objects.filter(email=email.strip().lower()).first()
    if not user:
        raise NotFound('User not found')
    return user


def update_profile(email: str, *, name: Optional[str] = None, photo_url: Optional[str] = None) -> tuple[int, int]:
    """Update display name and avatar; returns ``(matched, modified)``."""
    user = User.objects.filter(email=email.strip().lower()).first()
    if not user:
        return 0, 0
    changed = []
    if name is not None and name != user.name:
        user.name = name
        changed.append('name')
    if photo_url is not None and photo_url != user.photo_url:
        user.photo_url = photo_url
        changed.append('photo_url')
    if changed:
        user.save(update_fields=changed)
    return 1, int(bool(changed))


def ensure_admin(email: str, *, name: str = '') -> tuple[User, bool]:
    """Create or promote ``email`` to admin; returns ``(user, created)``."""
    email = email.strip().lower()
    user, created = User.objects.get_or_create(email=email, defaults={'role': Role.ADMIN, 'name': name})
    if not created:
        fields = []
        if user.role != Role.ADMIN:
            user.role = Role.ADMIN
            fields.append('role')
        if name and user.name != name:
            user.name = name
            fields.append('name')
        if fields:
            user.save(update_fields=fields)
    log_action(actor=email, action='ensure_admin', object_type='user', object_id=user.id, detail={'created': created})
    return user, created
