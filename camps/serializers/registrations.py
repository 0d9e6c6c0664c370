from rest_framework import serializers

from camps.models import Membership
from camps.serializers.common import clean_text


class JoinCampSerializer(serializers.Serializer):
    campId = serializers.IntegerField(min_value=1)
    participant_name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    age = serializers.IntegerField(required=False, allow_null=True, min_value=0, max_value=150)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=32)
    gender = serializers.CharField(required=False, allow_blank=True, max_length=16)
    emergency_contact = serializers.CharField(required=False, allow_blank=True, max_length=64)

    def validate_participant_name(self, v):
        return clean_text(v)


class IsJoinedQuerySerializer(serializers.Serializer):
    campId = serializers.IntegerField(min_value=1)


class MembershipSerializer(serializers.ModelSerializer):
    campId = serializers.IntegerField(source='camp_id', read_only=True, allow_null=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Membership
        fields = [
            'id', 'campId', 'camp_name', 'camp_fee', 'location', 'healthcare_professional',
            'created_by', 'participant_email', 'participant_name', 'age', 'phone', 'gender',
            'emergency_contact', 'payment_status', 'confirmation_status', 'createdAt',
        ]
        read_only_fields = fields
