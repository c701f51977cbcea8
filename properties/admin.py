from django.contrib import admin
from .models import Property, PropertyImage


class PropertyImageInline(admin.TabularInline):
    model = PropertyImage
    extra = 0


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'property_type', 'city', 'status', 'total_rooms', 'occupied_rooms', 'created_at']
    list_filter = ['property_type', 'status', 'city']
    search_fields = ['name', 'city', 'owner__email', 'owner__name']
    readonly_fields = ['total_rooms', 'occupied_rooms', 'created_at', 'updated_at']
    inlines = [PropertyImageInline]
