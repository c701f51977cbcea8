from django.contrib import admin
from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['tenant', 'property', 'month', 'amount', 'late_fee', 'discount', 'total_amount', 'due_date', 'status']
    list_filter = ['status', 'payment_method', 'property', 'month']
    search_fields = ['tenant__full_name', 'tenant__email', 'transaction_id']
    date_hierarchy = 'month'
    readonly_fields = ['total_amount', 'created_at', 'updated_at']
    raw_id_fields = ['tenant', 'room', 'recorded_by']
