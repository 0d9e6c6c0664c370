"""
Camp registration endpoints.

Participants join camps, list and cancel their registrations; admins
list the registrations for their own camps, confirm them and delete
them.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..permissions import IsAdminRole, IsParticipantRole
from ..responses import deleted, inserted, updated
from ..serializers.common import CountQuerySerializer, ListQuerySerializer
from ..serializers.registrations import IsJoinedQuerySerializer, JoinCampSerializer, MembershipSerializer
from ..services import registrations


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsParticipantRole])
def join_camp(request):
    s = JoinCampSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    payload = dict(s.validated_data)
    camp_id = payload.pop('campId')
    membership = registrations.join(camp_id, request.user.email, payload)
    return Response(inserted(membership.id, membership=MembershipSerializer(membership).data))


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsParticipantRole])
def registered_camps(request):
    q = ListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    memberships = registrations.registered_camps_for_participant(
        request.user.email, search=vd.get('search') or None, page=vd.get('page'), size=vd.get('size'),
    )
    return Response(MembershipSerializer(memberships, many=True).data)


@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsParticipantRole])
def camp_cancel(request, pk: int):
    return Response(deleted(registrations.cancel(pk, participant_email=request.user.email)))


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsParticipantRole])
def participant_camp_count(request):
    q = CountQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    count = registrations.count_for_participant(request.user.email, search=q.validated_data.get('search') or None)
    return Response({'count': count})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsParticipantRole])
def is_joined(request):
    q = IsJoinedQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response({'alreadyJoined': registrations.is_joined(q.validated_data['campId'], request.user.email)})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsParticipantRole])
def camp_participant(request, pk: int):
    membership = registrations.get_membership(pk, participant_email=request.user.email)
    return Response(MembershipSerializer(membership).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_registered_camps(request):
    """Registrations for the caller's camps; ``search`` matches the
    participant name."""
    q = ListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    memberships = registrations.registered_camps_for_admin(
        request.user.email, search=vd.get('search') or None, page=vd.get('page'), size=vd.get('size'),
    )
    return Response(MembershipSerializer(memberships, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_registered_count(request):
    q = CountQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    count = registrations.count_for_admin(request.user.email, search=q.validated_data.get('search') or None)
    return Response({'count': count})


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def camp_confirm(request, pk: int):
    matched, modified = registrations.confirm(pk, actor=request.user.email)
    return Response(updated(matched, modified))


@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def register_camp_delete(request, pk: int):
    return Response(deleted(registrations.admin_delete(pk, actor=request.user.email)))
