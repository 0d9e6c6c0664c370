"""
API errors and the project-wide DRF exception handler.

Every error leaves the API as
``{"ok": false, "error": {"code": ..., "message": ...}}`` with the
status code of the underlying exception.  Anything DRF does not know
how to render becomes a logged 500.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class AlreadyExists(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Already exists.'
    default_code = 'already_exists'


class PaymentProviderError(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'Payment provider request failed.'
    default_code = 'payment_provider_error'


def _error_code(exc, resp) -> str:
    codes = getattr(exc, 'get_codes', None)
    if callable(codes):
        value = codes()
        if isinstance(value, str):
            return value
    if resp.status_code == status.HTTP_400_BAD_REQUEST:
        return 'invalid'
    return 'api_error'


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        view = context.get('view')
        logger.exception("unhandled error in %s", view.__class__.__name__ if view else 'view', exc_info=exc)
        return Response(
            {'ok': False, 'error': {'code': 'server_error', 'message': 'Internal server error'}},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    detail = None
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    resp.data = {'ok': False, 'error': {'code': _error_code(exc, resp), 'message': detail}}
    return resp
