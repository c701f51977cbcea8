from rest_framework import serializers

from properties.models import Property
from rooms.models import Room
from users.models import User
from .models import Tenant


class TenantSerializer(serializers.ModelSerializer):
    """
    Serializer for Tenant.
    `property` is optional on write; it is always taken from the room.
    """
    user = serializers.PrimaryKeyRelatedField(queryset=User.objects.all())
    property = serializers.PrimaryKeyRelatedField(queryset=Property.objects.all(), required=False)
    room = serializers.PrimaryKeyRelatedField(queryset=Room.objects.all())
    property_name = serializers.CharField(source='property.name', read_only=True)
    room_number = serializers.CharField(source='room.room_number', read_only=True)
    room_floor = serializers.CharField(source='room.floor', read_only=True)
    days_stayed = serializers.ReadOnlyField()
    months_stayed = serializers.ReadOnlyField()

    class Meta:
        model = Tenant
        fields = [
            'id', 'user', 'property', 'property_name', 'room', 'room_number', 'room_floor',
            'full_name', 'email', 'phone', 'alternate_phone',
            'emergency_contact_name', 'emergency_contact_relation', 'emergency_contact_phone',
            'id_proof_type', 'id_proof_number',
            'occupation_type', 'company_name', 'designation',
            'permanent_street', 'permanent_city', 'permanent_state', 'permanent_pincode',
            'move_in_date', 'move_out_date', 'rent_amount', 'security_deposit', 'security_deposit_paid',
            'status', 'notice_start_date', 'notice_end_date', 'notice_reason',
            'agreement_start_date', 'agreement_end_date',
            'days_stayed', 'months_stayed', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class TenantListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list view"""
    property_name = serializers.CharField(source='property.name', read_only=True)
    room_number = serializers.CharField(source='room.room_number', read_only=True)

    class Meta:
        model = Tenant
        fields = [
            'id', 'full_name', 'email', 'phone', 'property', 'property_name',
            'room', 'room_number', 'status', 'move_in_date', 'rent_amount'
        ]
