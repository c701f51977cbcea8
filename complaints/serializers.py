from rest_framework import serializers

from tenants.models import Tenant
from users.models import User
from .models import Complaint, ComplaintTimelineEntry


class ComplaintTimelineEntrySerializer(serializers.ModelSerializer):
    updated_by_name = serializers.CharField(source='updated_by.name', read_only=True, default=None)

    class Meta:
        model = ComplaintTimelineEntry
        fields = ['id', 'status', 'comment', 'updated_by', 'updated_by_name', 'timestamp']
        read_only_fields = fields


class ComplaintSerializer(serializers.ModelSerializer):
    """
    Serializer for Complaint.
    property and room follow the tenant; `comment` is stored on the
    timeline entry written for a status change.
    """
    tenant = serializers.PrimaryKeyRelatedField(queryset=Tenant.objects.all(), required=False)
    assigned_to = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(), required=False, allow_null=True
    )
    tenant_name = serializers.CharField(source='tenant.full_name', read_only=True)
    property_name = serializers.CharField(source='property.name', read_only=True)
    room_number = serializers.CharField(source='room.room_number', read_only=True)
    timeline = ComplaintTimelineEntrySerializer(many=True, read_only=True)
    resolution_time_hours = serializers.ReadOnlyField()
    comment = serializers.CharField(write_only=True, required=False, allow_blank=True)

    class Meta:
        model = Complaint
        fields = [
            'id', 'tenant', 'tenant_name', 'property', 'property_name', 'room', 'room_number',
            'title', 'description', 'category', 'priority', 'status', 'assigned_to',
            'response', 'resolved_at', 'resolved_by', 'resolution_time_hours',
            'timeline', 'comment', 'created_at', 'updated_at'
        ]
        read_only_fields = [
            'id', 'property', 'room', 'resolved_at', 'resolved_by', 'created_at', 'updated_at'
        ]


class ComplaintListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list view"""
    tenant_name = serializers.CharField(source='tenant.full_name', read_only=True)
    room_number = serializers.CharField(source='room.room_number', read_only=True)

    class Meta:
        model = Complaint
        fields = [
            'id', 'tenant', 'tenant_name', 'property', 'room_number', 'title',
            'category', 'priority', 'status', 'created_at'
        ]
