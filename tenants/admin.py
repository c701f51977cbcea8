from django.contrib import admin
from .models import Tenant


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    list_display = ['full_name', 'email', 'phone', 'property', 'room', 'status', 'move_in_date']
    list_filter = ['status', 'property', 'occupation_type']
    search_fields = ['full_name', 'email', 'phone', 'user__email']
    raw_id_fields = ['user', 'room']
    readonly_fields = ['created_at', 'updated_at']
