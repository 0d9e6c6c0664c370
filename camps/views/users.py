"""
User directory endpoints: self registration, role lookup and profile
updates for admins and participants.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from ..permissions import IsAdminRole, IsParticipantRole
from ..responses import inserted, updated
from ..serializers.users import ProfileUpdateSerializer, UserInfoSerializer, UserSerializer
from ..services import users as user_service


@api_view(['POST'])
@permission_classes([AllowAny])
def user_info(request):
    """Register the signed-up user as a participant.

    The front-end posts ``{"userInfo": {...}}``; a flat body is accepted
    too.  Answers 409 when the email is already registered.
    """
    body = request.data.get('userInfo', request.data) if isinstance(request.data, dict) else request.data
    s = UserInfoSerializer(data=body)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    user = user_service.register_user(email=vd['email'], name=vd.get('name', ''), photo_url=vd.get('photoURL', ''))
    return Response(inserted(user.id, user=UserSerializer(user).data))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def user_role(request, email: str):
    """Return the stored user record (including ``role``) for ``email``."""
    user = user_service.get_user(email)
    return Response(UserSerializer(user).data)


def _update_profile(request, email: str):
    s = ProfileUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    matched, modified = user_service.update_profile(email, name=vd.get('name'), photo_url=vd.get('photoURL'))
    return Response(updated(matched, modified))


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_update_profile(request, email: str):
    return _update_profile(request, email)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsParticipantRole])
def participant_update_profile(request, email: str):
    """Participants may only edit their own profile."""
    if email.strip().lower() != request.user.email:
        raise PermissionDenied('Forbidden', code='forbidden')
    return _update_profile(request, email)
