"""
Card payment endpoints.

The client creates a PaymentIntent through ``/create-payment-intent``,
completes the card charge with the processor and then reports it to
``/payment/save-history``, which marks the registration paid and
appends the charge to the payment ledger.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..permissions import IsParticipantRole
from ..responses import inserted
from ..serializers.common import CountQuerySerializer, ListQuerySerializer
from ..serializers.payments import PaymentIntentSerializer, PaymentSerializer, SavePaymentSerializer
from ..services import payments


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_payment_intent(request):
    s = PaymentIntentSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    intent = payments.create_charge_intent(s.validated_data['amount'])
    return Response({
        'id': intent.id,
        'clientSecret': intent.client_secret,
        'amount': intent.amount,
        'currency': intent.currency,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def save_payment_history(request):
    body = request.data.get('paymentData', request.data) if isinstance(request.data, dict) else request.data
    s = SavePaymentSerializer(data=body)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    payment = payments.record_payment(vd['participantId'], request.user.email, {
        'amount': vd['amount'],
        'camp_name': vd.get('camp_name'),
        'transaction_id': vd['transactionId'],
        'payment_method': vd.get('paymentMethod'),
    })
    return Response(inserted(payment.id, payment=PaymentSerializer(payment).data))


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsParticipantRole])
def payment_history(request):
    q = ListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    rows = payments.payment_history(
        request.user.email, search=vd.get('search') or None, page=vd.get('page'), size=vd.get('size'),
    )
    return Response(PaymentSerializer(rows, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsParticipantRole])
def participant_payment_count(request):
    q = CountQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response({'count': payments.count_payments(request.user.email, search=q.validated_data.get('search') or None)})
