from rest_framework import serializers

from apps.users.serializers import UserSerializer
from .models import ManagementLog


class ManagementUserSerializer(UserSerializer):
    """User as seen by admins, with account state."""
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    dateJoined = serializers.DateTimeField(source='date_joined', read_only=True)

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ['isActive', 'dateJoined']
        read_only_fields = fields


class ManagementLogSerializer(serializers.ModelSerializer):
    admin = serializers.CharField(source='admin.username', read_only=True)

    class Meta:
        model = ManagementLog
        fields = ['id', 'admin', 'action', 'details', 'timestamp']
        read_only_fields = fields
