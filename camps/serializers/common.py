import bleach
from rest_framework import serializers


def clean_text(v):
    return bleach.clean((v or '').strip(), tags=[], strip=True)


class ListQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True, max_length=128)
    page = serializers.IntegerField(required=False, min_value=0)
    size = serializers.IntegerField(required=False, min_value=1)


class CampListQuerySerializer(ListQuerySerializer):
    sort = serializers.CharField(required=False, allow_blank=True, max_length=64)


class CountQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True, max_length=128)
