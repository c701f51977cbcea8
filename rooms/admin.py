from django.contrib import admin
from .models import Room


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ['room_number', 'property', 'floor', 'room_type', 'capacity', 'current_occupancy', 'rent', 'status']
    list_filter = ['room_type', 'status', 'furnishing', 'property']
    search_fields = ['room_number', 'property__name']
    readonly_fields = ['current_occupancy', 'created_at', 'updated_at']
