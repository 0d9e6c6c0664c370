from rest_framework import serializers

from camps.models import User
from camps.serializers.common import clean_text


class UserInfoSerializer(serializers.Serializer):
    """Self-registration body.  A ``role`` sent by the client is ignored."""
    email = serializers.EmailField()
    name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    photoURL = serializers.URLField(required=False, allow_blank=True, max_length=1024)

    def validate_name(self, v):
        return clean_text(v)


class ProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    photoURL = serializers.URLField(required=False, allow_blank=True, max_length=1024)

    def validate_name(self, v):
        return clean_text(v)


class UserSerializer(serializers.ModelSerializer):
    photoURL = serializers.URLField(source='photo_url', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'email', 'name', 'photoURL', 'role', 'createdAt']
        read_only_fields = fields
