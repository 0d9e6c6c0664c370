"""
Role based access control.

Both guards are the same predicate: look up the caller's stored
:class:`~camps.models.User` by the email of the verified identity and
compare its role with the role the route requires.  An unknown caller
and a caller with the wrong role are refused with the same message.
"""
from __future__ import annotations

from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import BasePermission

from .models import Role, User

FORBIDDEN = 'Forbidden'


def authorize(identity, required_role: str) -> User:
    """Return the caller's user record or raise ``PermissionDenied``."""
    email = getattr(identity, 'email', None)
    user = User.objects.filter(email=email).first() if email else None
    if user is None or user.role != required_role:
        raise PermissionDenied(FORBIDDEN, code='forbidden')
    return user


class HasRole(BasePermission):
    """Allow access only to callers whose stored role is ``required_role``."""
    required_role: str = ''
    message = FORBIDDEN

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        identity = getattr(request, 'user', None)
        if not (identity and identity.is_authenticated):
            return False
        authorize(identity, self.required_role)
        return True


def role_required(role: Role) -> type[BasePermission]:
    return type(f'Is{role.label}Role', (HasRole,), {'required_role': role.value})


IsAdminRole = role_required(Role.ADMIN)
IsParticipantRole = role_required(Role.PARTICIPANT)
