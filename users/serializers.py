from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Public view of a user; never exposes tokens or lockout counters"""
    is_locked = serializers.ReadOnlyField()

    class Meta:
        model = User
        fields = [
            'id', 'name', 'email', 'role', 'phone', 'alternate_phone', 'bio',
            'is_active', 'is_email_verified', 'is_locked', 'last_login', 'date_joined'
        ]
        read_only_fields = fields


class UserListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list view"""

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'role', 'is_active', 'date_joined']
