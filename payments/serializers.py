from datetime import date, datetime

from rest_framework import serializers

from tenants.models import Tenant
from .models import Payment

MONTH_INPUT_FORMATS = ('%Y-%m', '%Y-%m-%d')


def parse_month(value) -> date:
    """
    First day of the month named by `value`.
    Accepts a date or a 'YYYY-MM' / 'YYYY-MM-DD' string.
    """
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.replace(day=1)
    text = str(value).strip()
    for fmt in MONTH_INPUT_FORMATS:
        try:
            return datetime.strptime(text, fmt).date().replace(day=1)
        except ValueError:
            continue
    raise ValueError(f"Invalid month '{text}'; use YYYY-MM or YYYY-MM-DD")


class MonthField(serializers.DateField):
    """Billing month; stored as the first day of the month"""

    default_error_messages = {
        'invalid': "Month has wrong format. Use YYYY-MM or YYYY-MM-DD.",
    }

    def to_internal_value(self, value):
        try:
            return parse_month(value)
        except ValueError:
            self.fail('invalid')


class PaymentSerializer(serializers.ModelSerializer):
    """
    Serializer for Payment.
    property, room, total_amount and recorded_by are set server-side.
    """
    tenant = serializers.PrimaryKeyRelatedField(queryset=Tenant.objects.all(), required=False)
    month = MonthField()
    tenant_name = serializers.CharField(source='tenant.full_name', read_only=True)
    property_name = serializers.CharField(source='property.name', read_only=True)
    room_number = serializers.CharField(source='room.room_number', read_only=True)
    recorded_by_name = serializers.CharField(source='recorded_by.name', read_only=True, default=None)

    class Meta:
        model = Payment
        fields = [
            'id', 'tenant', 'tenant_name', 'property', 'property_name', 'room', 'room_number',
            'month', 'amount', 'late_fee', 'discount', 'total_amount', 'due_date',
            'payment_date', 'payment_method', 'transaction_id', 'status', 'notes',
            'recorded_by', 'recorded_by_name', 'created_at', 'updated_at'
        ]
        read_only_fields = [
            'id', 'property', 'room', 'total_amount', 'recorded_by', 'created_at', 'updated_at'
        ]
        # Duplicate tenant/month is reported as a conflict by the service
        validators = []


class PaymentListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list view"""
    tenant_name = serializers.CharField(source='tenant.full_name', read_only=True)
    property_name = serializers.CharField(source='property.name', read_only=True)
    room_number = serializers.CharField(source='room.room_number', read_only=True)

    class Meta:
        model = Payment
        fields = [
            'id', 'tenant', 'tenant_name', 'property', 'property_name', 'room_number',
            'month', 'total_amount', 'due_date', 'payment_date', 'status'
        ]
