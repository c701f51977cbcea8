from django.contrib import admin
from .models import Complaint, ComplaintTimelineEntry


class ComplaintTimelineInline(admin.TabularInline):
    model = ComplaintTimelineEntry
    extra = 0
    can_delete = False
    readonly_fields = ['status', 'comment', 'updated_by', 'timestamp']

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Complaint)
class ComplaintAdmin(admin.ModelAdmin):
    list_display = ['title', 'tenant', 'property', 'category', 'priority', 'status', 'created_at']
    list_filter = ['status', 'category', 'priority', 'property']
    search_fields = ['title', 'description', 'tenant__full_name']
    readonly_fields = ['resolved_at', 'resolved_by', 'created_at', 'updated_at']
    raw_id_fields = ['tenant', 'room', 'assigned_to']
    inlines = [ComplaintTimelineInline]
