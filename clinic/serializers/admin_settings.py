from rest_framework import serializers

from . import blank_to_none, clean_text


class AdminSettingsSerializer(serializers.Serializer):
    whatsapp_number = serializers.CharField(max_length=32, required=False, allow_blank=True, allow_null=True)
    consultation_message_template = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    medicine_inquiry_template = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    maintenance_mode = serializers.BooleanField(required=False)
    medicine_selling_enabled = serializers.BooleanField(required=False)
    email_notifications = serializers.BooleanField(required=False)
    sms_notifications = serializers.BooleanField(required=False)
    new_consultation_notification = serializers.BooleanField(required=False)
    new_inquiry_notification = serializers.BooleanField(required=False)

    def validate_whatsapp_number(self, v):
        v = clean_text(v)
        if v and not any(ch.isdigit() for ch in v):
            raise serializers.ValidationError('Please enter a valid WhatsApp number')
        return v

    def validate_consultation_message_template(self, v):
        return clean_text(v)

    def validate_medicine_inquiry_template(self, v):
        return clean_text(v)

    def validate(self, attrs):
        return blank_to_none(attrs, ('whatsapp_number', 'consultation_message_template', 'medicine_inquiry_template'))
