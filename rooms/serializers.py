from rest_framework import serializers

from properties.models import Property
from .models import Room


class RoomSerializer(serializers.ModelSerializer):
    """
    Serializer for Room.
    current_occupancy is read-only; `occupied` status is rejected by the service.
    """
    property = serializers.PrimaryKeyRelatedField(queryset=Property.objects.all())
    property_name = serializers.CharField(source='property.name', read_only=True)
    is_available = serializers.ReadOnlyField()
    vacancies = serializers.ReadOnlyField()

    class Meta:
        model = Room
        fields = [
            'id', 'property', 'property_name', 'room_number', 'floor', 'room_type',
            'capacity', 'current_occupancy', 'vacancies', 'is_available', 'rent', 'security_deposit',
            'area', 'furnishing', 'amenities', 'status', 'description', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'current_occupancy', 'created_at', 'updated_at']
        # Uniqueness is reported as a conflict by the service
        validators = []


class RoomListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list view"""
    property_name = serializers.CharField(source='property.name', read_only=True)
    is_available = serializers.ReadOnlyField()

    class Meta:
        model = Room
        fields = [
            'id', 'property', 'property_name', 'room_number', 'floor', 'room_type',
            'capacity', 'current_occupancy', 'rent', 'status', 'is_available'
        ]
