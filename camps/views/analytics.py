from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..permissions import IsAdminRole, IsParticipantRole
from ..services import analytics


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_analytics(request):
    """Platform totals with month-over-month percentage changes."""
    return Response(analytics.admin_summary())


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsParticipantRole])
def participant_analytics(request):
    return Response(analytics.participant_summary(request.user.email))
