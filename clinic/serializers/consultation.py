from rest_framework import serializers

from ..models import ConsultationRequest
from . import blank_to_none, clean_text


class ConsultationUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ConsultationRequest.STATUS_CHOICES, required=False)
    doctor_notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_doctor_notes(self, v):
        return clean_text(v)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError('Nothing to update')
        return attrs


class BookingSerializer(serializers.Serializer):
    """Public booking form; the request leaves as a chat message, not a row."""
    name = serializers.CharField(max_length=255)
    age = serializers.IntegerField(min_value=1, max_value=120)
    gender = serializers.ChoiceField(choices=['male', 'female', 'other'])
    phone = serializers.CharField(max_length=32)
    health_issue = serializers.CharField(max_length=4000)
    consultation_type = serializers.ChoiceField(
        choices=ConsultationRequest.TYPE_CHOICES, required=False, default='online'
    )

    def validate_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Please fill in all required fields')
        return v

    def validate_phone(self, v):
        v = clean_text(v)
        if not any(ch.isdigit() for ch in v):
            raise serializers.ValidationError('Please enter a valid phone number')
        return v

    def validate_health_issue(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Please describe your health issue')
        return v


class ContactSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    message = serializers.CharField(max_length=4000)

    def validate_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Please fill in required fields')
        return v

    def validate_message(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Please fill in required fields')
        return v

    def validate(self, attrs):
        return blank_to_none(attrs, ('email', 'phone'))
