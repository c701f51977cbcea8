from rest_framework import serializers

from properties.models import Property
from .models import Notice, NoticeRead


class NoticeSerializer(serializers.ModelSerializer):
    """Serializer for Notice; created_by is always the requester"""
    property = serializers.PrimaryKeyRelatedField(
        queryset=Property.objects.all(), required=False, allow_null=True
    )
    property_name = serializers.CharField(source='property.name', read_only=True, default=None)
    created_by_name = serializers.CharField(source='created_by.name', read_only=True)
    is_valid = serializers.ReadOnlyField()
    is_read = serializers.SerializerMethodField()

    class Meta:
        model = Notice
        fields = [
            'id', 'property', 'property_name', 'created_by', 'created_by_name',
            'title', 'content', 'category', 'priority', 'target_audience', 'target_floor',
            'valid_from', 'valid_till', 'status', 'is_valid', 'is_read',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_by', 'created_at', 'updated_at']

    def get_is_read(self, obj):
        request = self.context.get('request')
        if request is None or not request.user.is_authenticated:
            return False
        return obj.reads.filter(user=request.user).exists()


class NoticeListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list view"""
    property_name = serializers.CharField(source='property.name', read_only=True, default=None)

    class Meta:
        model = Notice
        fields = [
            'id', 'property', 'property_name', 'title', 'category', 'priority',
            'target_audience', 'valid_from', 'valid_till', 'status', 'created_at'
        ]


class NoticeReadSerializer(serializers.ModelSerializer):
    class Meta:
        model = NoticeRead
        fields = ['id', 'notice', 'user', 'read_at']
        read_only_fields = fields
