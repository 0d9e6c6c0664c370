"""
Bearer identity-token authentication.

Identity tokens are issued by an external provider (Firebase ID tokens
in production).  This authentication class only verifies them: the
signature, expiry, audience and issuer checks are delegated to
simplejwt's :class:`TokenBackend` configured from ``SIMPLE_JWT``, and the
caller's email is read from the verified claims.  No database access
happens here; whether the caller may use a route is decided by the role
permissions in :mod:`camps.permissions`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict

from django.conf import settings
from rest_framework import authentication
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.exceptions import TokenBackendError
from rest_framework_simplejwt.state import token_backend

logger = logging.getLogger(__name__)

KEYWORD = 'Bearer'


@dataclass(frozen=True)
class Identity:
    """The verified caller, as seen by the permission layer."""
    email: str
    claims: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_anonymous(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.email


def verify(raw_token: str) -> Identity:
    """Validate ``raw_token`` and return the identity it carries."""
    try:
        claims = token_backend.decode(raw_token, verify=True)
    except TokenBackendError as exc:
        logger.info("rejected identity token: %s", exc)
        raise AuthenticationFailed('Invalid or expired token') from exc
    claim = settings.MEDIEASE['IDENTITY_EMAIL_CLAIM']
    value = claims.get(claim)
    email = value.strip().lower() if isinstance(value, str) else ''
    if not email:
        raise AuthenticationFailed('Token carries no email claim')
    return Identity(email=email, claims=claims)


class BearerIdentityAuthentication(authentication.BaseAuthentication):
    """Authenticate ``Authorization: Bearer <identity-token>`` headers.

    Requests without an ``Authorization`` header are left anonymous so
    that public routes keep working; protected routes then answer 401
    through ``IsAuthenticated``.  A header that is present but not a
    well-formed bearer credential is rejected outright.
    """

    keyword = KEYWORD

    def authenticate(self, request):
        header = authentication.get_authorization_header(request).split()
        if not header:
            return None
        if header[0].decode('latin-1').lower() != self.keyword.lower():
            raise AuthenticationFailed('No token provided')
        if len(header) != 2:
            raise AuthenticationFailed('Malformed authorization header')
        try:
            raw_token = header[1].decode('utf-8')
        except UnicodeError as exc:
            raise AuthenticationFailed('Malformed authorization header') from exc
        identity = verify(raw_token)
        return identity, identity.claims

    def authenticate_header(self, request) -> str:
        # A value here makes DRF answer 401 instead of 403.
        return self.keyword
