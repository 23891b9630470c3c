from rest_framework import serializers
from .models import StorefrontUser


class StorefrontUserSerializer(serializers.ModelSerializer):
    """Public view of an account; never includes the password hash."""

    class Meta:
        model = StorefrontUser
        fields = ['id', 'name', 'email']
        read_only_fields = fields


class RegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    class Meta:
        model = StorefrontUser
        fields = ['name', 'email', 'password']
        extra_kwargs = {
            'name': {'required': False, 'allow_blank': True},
        }

    def validate_email(self, value):
        return value.strip()

    def create(self, validated_data):
        password = validated_data.pop('password')
        user = StorefrontUser(**validated_data)
        user.set_password(password)
        user.save()
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)


class ProfileUpdateSerializer(serializers.ModelSerializer):
    displayName = serializers.CharField(source='name', required=False, allow_blank=True, max_length=255)

    class Meta:
        model = StorefrontUser
        fields = ['name', 'displayName']
        extra_kwargs = {
            'name': {'required': False, 'allow_blank': True},
        }
