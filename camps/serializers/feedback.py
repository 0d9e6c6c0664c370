from rest_framework import serializers

from camps.models import Feedback
from camps.serializers.common import clean_text


class FeedbackCreateSerializer(serializers.Serializer):
    campId = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    camp_name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    participant_name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    photoURL = serializers.URLField(required=False, allow_blank=True, max_length=1024)
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(required=False, allow_blank=True, max_length=2000)

    def validate_comment(self, v):
        return clean_text(v)

    def validate_participant_name(self, v):
        return clean_text(v)


class FeedbackSerializer(serializers.ModelSerializer):
    campId = serializers.IntegerField(source='camp_id', read_only=True, allow_null=True)
    photoURL = serializers.URLField(source='photo_url', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Feedback
        fields = [
            'id', 'campId', 'camp_name', 'participant_email', 'participant_name',
            'photoURL', 'rating', 'comment', 'createdAt',
        ]
        read_only_fields = fields
