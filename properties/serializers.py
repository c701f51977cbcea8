from rest_framework import serializers

from users.serializers import UserListSerializer
from .models import Property, PropertyImage


class PropertyImageSerializer(serializers.ModelSerializer):
    url = serializers.SerializerMethodField()

    class Meta:
        model = PropertyImage
        fields = ['id', 'url', 'caption', 'created_at']

    def get_url(self, obj):
        request = self.context.get('request')
        url = obj.file.url if obj.file else None
        if url and request is not None:
            return request.build_absolute_uri(url)
        return url


class PropertySerializer(serializers.ModelSerializer):
    """Serializer for Property; room counters are read-only"""
    owner = UserListSerializer(read_only=True)
    images = PropertyImageSerializer(many=True, read_only=True)
    available_rooms = serializers.ReadOnlyField()
    occupancy_percentage = serializers.ReadOnlyField()

    class Meta:
        model = Property
        fields = [
            'id', 'owner', 'name', 'property_type',
            'street', 'city', 'state', 'pincode', 'landmark',
            'contact_person_name', 'contact_phone', 'contact_email',
            'amenities', 'description', 'rules', 'status', 'images',
            'total_rooms', 'occupied_rooms', 'available_rooms', 'occupancy_percentage',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'owner', 'total_rooms', 'occupied_rooms', 'created_at', 'updated_at']


class PropertyListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list view"""
    owner_name = serializers.CharField(source='owner.name', read_only=True)
    available_rooms = serializers.ReadOnlyField()

    class Meta:
        model = Property
        fields = [
            'id', 'name', 'property_type', 'city', 'state', 'status', 'owner_name',
            'total_rooms', 'occupied_rooms', 'available_rooms', 'created_at'
        ]


class PropertyImageUploadSerializer(serializers.Serializer):
    images = serializers.ListField(child=serializers.FileField(), allow_empty=False)
    captions = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
