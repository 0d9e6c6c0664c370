from decimal import Decimal

from rest_framework import serializers

from camps.models import Camp
from camps.serializers.common import clean_text


class CampSerializer(serializers.ModelSerializer):
    """Camp record in the front-end's field naming.

    Used for creation, partial updates (``partial=True``) and output;
    ``participant_count`` and ``created_by`` are maintained server-side.
    """
    camp_name = serializers.CharField(source='name', max_length=255)
    camp_fee = serializers.DecimalField(source='fee', max_digits=10, decimal_places=2, min_value=Decimal('0'))
    date_time = serializers.DateTimeField(source='scheduled_at', required=False, allow_null=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Camp
        fields = [
            'id', 'camp_name', 'image', 'camp_fee', 'date_time', 'location',
            'healthcare_professional', 'description', 'capacity',
            'participant_count', 'created_by', 'createdAt',
        ]
        read_only_fields = ['id', 'participant_count', 'created_by']

    def validate_camp_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('camp_name may not be blank')
        return v
