from rest_framework import serializers

from . import blank_to_none, clean_text


class ServiceWriteSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    icon = serializers.CharField(max_length=64, required=False, default='Stethoscope')
    is_enabled = serializers.BooleanField(required=False, default=True)
    sort_order = serializers.IntegerField(required=False, default=0)

    def validate_title(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Please enter a service title.')
        return v

    def validate_description(self, v):
        return clean_text(v)

    def validate_icon(self, v):
        return clean_text(v) or 'Stethoscope'

    def validate(self, attrs):
        return blank_to_none(attrs, ('description',))


class SeoSerializer(serializers.Serializer):
    # search engines cut titles at ~60 and descriptions at ~160 characters
    title = serializers.CharField(max_length=255, allow_blank=True)
    description = serializers.CharField(max_length=1000, allow_blank=True)

    def validate_title(self, v):
        return clean_text(v)

    def validate_description(self, v):
        return clean_text(v)
