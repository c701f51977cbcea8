from django.contrib import admin
from .models import Notice, NoticeRead


class NoticeReadInline(admin.TabularInline):
    model = NoticeRead
    extra = 0
    readonly_fields = ['user', 'read_at']


@admin.register(Notice)
class NoticeAdmin(admin.ModelAdmin):
    list_display = ['title', 'property', 'category', 'priority', 'status', 'valid_from', 'valid_till']
    list_filter = ['status', 'priority', 'category', 'target_audience']
    search_fields = ['title', 'content']
    raw_id_fields = ['property', 'created_by']
    inlines = [NoticeReadInline]
