from decimal import Decimal

from rest_framework import serializers

from camps.models import Payment


class PaymentIntentSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))


class SavePaymentSerializer(serializers.Serializer):
    """Charge details reported by the client after a successful card
    payment.  ``amount`` is in minor currency units."""
    participantId = serializers.IntegerField(min_value=1)
    camp_name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0'))
    transactionId = serializers.CharField(max_length=255)
    paymentMethod = serializers.CharField(required=False, allow_blank=True, max_length=64)


class PaymentSerializer(serializers.ModelSerializer):
    participantId = serializers.IntegerField(source='membership_id', read_only=True, allow_null=True)
    paymentMethod = serializers.CharField(source='payment_method', read_only=True)
    transactionId = serializers.CharField(source='transaction_id', read_only=True)
    paidAt = serializers.DateTimeField(source='paid_at', read_only=True)

    class Meta:
        model = Payment
        fields = [
            'id', 'participantId', 'camp_name', 'amount', 'paymentMethod', 'transactionId',
            'email', 'payment_status', 'confirmation_status', 'paidAt',
        ]
        read_only_fields = fields
