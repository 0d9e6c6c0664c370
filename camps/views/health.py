"""Liveness probe for load balancers and uptime checks."""
import logging

from django.conf import settings
from django.db import DatabaseError, connections
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def healthz(request):
    payments = bool(settings.MEDIEASE['STRIPE_SECRET_KEY'])
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
    except DatabaseError as exc:
        logger.error("health check cannot reach the database: %s", exc)
        return Response({'ok': False, 'db': False, 'payments': payments},
                        status=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response({'ok': True, 'db': bool(row and row[0] == 1), 'payments': payments})
