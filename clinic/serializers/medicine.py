from decimal import Decimal

from rest_framework import serializers

from ..models import Medicine
from . import blank_to_none, clean_text


class MedicineWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    category = serializers.CharField(max_length=64, required=False, default='Tablet')
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    stock_status = serializers.ChoiceField(choices=Medicine.STOCK_CHOICES, required=False, default=Medicine.STOCK_AVAILABLE)
    images = serializers.ListField(child=serializers.CharField(max_length=1024), required=False, default=list)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    used_for = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    dosage_notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    is_active = serializers.BooleanField(required=False, default=True)

    def validate_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Medicine name is required')
        return v

    def validate_category(self, v):
        return clean_text(v) or 'Tablet'

    def validate_price(self, v):
        if v is None or v <= Decimal('0'):
            raise serializers.ValidationError('Price must be greater than 0')
        return v

    def validate_used_for(self, v):
        if v is None:
            return v
        # normalised comma-joined tag list
        tags = [clean_text(t) for t in v.split(',')]
        return ', '.join(t for t in tags if t)

    def validate_description(self, v):
        return clean_text(v)

    def validate_dosage_notes(self, v):
        return clean_text(v)

    def validate(self, attrs):
        return blank_to_none(attrs, ('description', 'used_for', 'dosage_notes'))
