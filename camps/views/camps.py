"""
Camp browsing for everyone and camp management for admins.

``/popular-camps`` and ``/all-camps`` are public.  The admin endpoints
only ever list and count the calling admin's own camps.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from ..permissions import IsAdminRole, IsParticipantRole
from ..responses import deleted, inserted, updated
from ..serializers.camps import CampSerializer
from ..serializers.common import CampListQuerySerializer, CountQuerySerializer, ListQuerySerializer
from ..services import camps as camp_service


@api_view(['GET'])
@permission_classes([AllowAny])
def popular_camps(request):
    return Response(CampSerializer(camp_service.popular_camps(), many=True).data)


@api_view(['GET'])
@permission_classes([AllowAny])
def all_camps(request):
    """List camps.

    Query params:
      - search: case-insensitive match on the camp name
      - sort: "Most Registered" | "Camp Fees" | "Alphabetical Order" |
        "Recent Camp" (default: most recent first)
      - page, size: zero-based paging (optional)
    """
    q = CampListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    camps = camp_service.list_camps(
        search=vd.get('search') or None, sort=vd.get('sort') or None,
        page=vd.get('page'), size=vd.get('size'),
    )
    return Response(CampSerializer(camps, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsParticipantRole])
def camp_details(request, pk: int):
    return Response(CampSerializer(camp_service.get_camp(pk)).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def add_camp(request):
    s = CampSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    camp = camp_service.create_camp(request.user.email, s.validated_data)
    return Response(inserted(camp.id, camp=CampSerializer(camp).data))


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_camps(request):
    q = ListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    camps = camp_service.list_camps(
        search=vd.get('search') or None, created_by=request.user.email,
        page=vd.get('page'), size=vd.get('size'),
    )
    return Response(CampSerializer(camps, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_camps_count(request):
    q = CountQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    count = camp_service.count_camps(search=q.validated_data.get('search') or None, created_by=request.user.email)
    return Response({'count': count})


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def update_camp(request, pk: int):
    """Patch only the fields present in the body."""
    s = CampSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    matched, modified = camp_service.update_camp(pk, s.validated_data, actor=request.user.email)
    return Response(updated(matched, modified))


@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def delete_camp(request, pk: int):
    return Response(deleted(camp_service.delete_camp(pk, actor=request.user.email)))
