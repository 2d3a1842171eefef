from rest_framework import serializers

from . import blank_to_none, clean_text

WEEKDAYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')


class DoctorProfileSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    qualification = serializers.CharField(max_length=255)
    photo_url = serializers.CharField(max_length=1024, required=False, allow_blank=True, allow_null=True)
    about = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    years_of_experience = serializers.IntegerField(min_value=0, max_value=100, required=False, allow_null=True)
    specializations = serializers.ListField(
        child=serializers.CharField(max_length=128, allow_blank=True), required=False
    )
    contact_phone = serializers.CharField(max_length=32, required=False, allow_blank=True, allow_null=True)
    contact_email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    whatsapp_number = serializers.CharField(max_length=32, required=False, allow_blank=True, allow_null=True)
    clinic_address = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    clinic_timings = serializers.DictField(
        child=serializers.CharField(max_length=64, allow_blank=True), required=False
    )

    def validate_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Name is required')
        return v

    def validate_qualification(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Qualification is required')
        return v

    def validate_about(self, v):
        return clean_text(v)

    def validate_clinic_address(self, v):
        return clean_text(v)

    def validate_specializations(self, values):
        seen: list[str] = []
        for value in values:
            value = clean_text(value)
            if value and value not in seen:
                seen.append(value)
        return seen

    def validate_clinic_timings(self, timings):
        unknown = set(timings) - set(WEEKDAYS)
        if unknown:
            raise serializers.ValidationError(f'Unknown weekday(s): {", ".join(sorted(unknown))}')
        return {day: clean_text(timings[day]) for day in WEEKDAYS if day in timings}

    def validate(self, attrs):
        return blank_to_none(
            attrs, ('photo_url', 'about', 'contact_phone', 'contact_email', 'whatsapp_number', 'clinic_address')
        )
