from rest_framework import serializers

from ..models import MedicineInquiry
from . import clean_text


class InquiryUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=MedicineInquiry.STATUS_CHOICES, required=False)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_notes(self, v):
        return clean_text(v)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError('Nothing to update')
        return attrs
