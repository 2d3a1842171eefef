from rest_framework import serializers


class SignInSerializer(serializers.Serializer):
    # no password rules here; the identity check decides
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)

    def validate_email(self, v):
        return (v or '').strip().lower()


class CredentialsSerializer(SignInSerializer):
    password = serializers.CharField(min_length=6, trim_whitespace=False)


class EmailChangeSerializer(serializers.Serializer):
    new_email = serializers.EmailField()


class PasswordChangeSerializer(serializers.Serializer):
    new_password = serializers.CharField(trim_whitespace=False)
    confirm_password = serializers.CharField(trim_whitespace=False)

    def validate(self, attrs):
        if attrs['new_password'] != attrs['confirm_password']:
            raise serializers.ValidationError('Passwords do not match.')
        return attrs


class SignOutSerializer(serializers.Serializer):
    refresh = serializers.CharField(required=False, allow_blank=True)
