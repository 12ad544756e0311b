from rest_framework import serializers
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.db.models import Q

import logging

User = get_user_model()
logger = logging.getLogger(__name__)

MAX_LOGIN_ATTEMPTS = 5
LOGIN_LOCKOUT_SECONDS = 900


class UserSerializer(serializers.ModelSerializer):
    fullName = serializers.CharField(source='display_name', read_only=True)
    phoneNumber = serializers.CharField(source='phone_number', read_only=True)
    profilePhoto = serializers.CharField(source='profile_photo', read_only=True)
    verificationStatus = serializers.CharField(source='verification_status', read_only=True)
    profileSetupCompleted = serializers.BooleanField(source='profile_setup_completed', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'fullName', 'phoneNumber', 'email', 'role', 'profilePhoto', 'verificationStatus',
                  'profileSetupCompleted']
        read_only_fields = fields


class UserSummarySerializer(serializers.ModelSerializer):
    """Display fields embedded in jobs, offers and ledger entries."""
    fullName = serializers.CharField(source='display_name', read_only=True)
    profilePhoto = serializers.CharField(source='profile_photo', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'fullName', 'profilePhoto']
        read_only_fields = fields


class LoginSerializer(serializers.Serializer):
    identifier = serializers.CharField(max_length=255, trim_whitespace=True)
    password = serializers.CharField(max_length=128, write_only=True)

    def validate(self, data):
        identifier = data.get('identifier').strip()
        password = data.get('password')
        cache_key = f'login_attempts_{identifier.lower()}'
        attempts = cache.get(cache_key, 0)
        if attempts >= MAX_LOGIN_ATTEMPTS:
            logger.warning(f"Too many login attempts for {identifier}")
            raise serializers.ValidationError("Too many login attempts. Please try again in 15 minutes.")
        user = User.objects.filter(
            Q(phone_number=identifier) | Q(username__iexact=identifier) | Q(email__iexact=identifier)
        ).first()
        if not user or not user.check_password(password):
            cache.set(cache_key, attempts + 1, LOGIN_LOCKOUT_SECONDS)
            raise serializers.ValidationError("Invalid credentials.")
        if not user.is_active:
            raise serializers.ValidationError("User account is disabled. Please contact support.")
        cache.delete(cache_key)
        data['user'] = user
        return data


class SwitchRoleSerializer(serializers.Serializer):
    newRole = serializers.CharField(max_length=20)


class ProfileSetupSerializer(serializers.Serializer):
    fullName = serializers.CharField(max_length=150)
    profilePhoto = serializers.URLField(max_length=500, required=False, allow_blank=True)


class ProfileUpdateSerializer(serializers.Serializer):
    fullName = serializers.CharField(max_length=150, required=False)
    profilePhoto = serializers.URLField(max_length=500, required=False, allow_blank=True)
