import builtins
from django.conf import settings
from django.db import models
from django.utils import timezone

from core.constants import ComplaintStatus, ComplaintCategory, Priority
from properties.models import Property
from rooms.models import Room
from tenants.models import Tenant


class Complaint(models.Model):
    """Complaint raised by a tenant; every status change is kept in the timeline"""
    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE, related_name='complaints')
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name='complaints')
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name='complaints')
    title = models.CharField(max_length=200)
    description = models.TextField(max_length=1000)
    category = models.CharField(max_length=20, choices=ComplaintCategory.CHOICES)
    priority = models.CharField(max_length=10, choices=Priority.CHOICES, default=Priority.MEDIUM)
    status = models.CharField(max_length=20, choices=ComplaintStatus.CHOICES, default=ComplaintStatus.OPEN)
    assigned_to = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='assigned_complaints'
    )
    response = models.TextField(max_length=1000, blank=True)
    resolved_at = models.DateTimeField(null=True, blank=True)
    resolved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='resolved_complaints'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Complaint"
        verbose_name_plural = "Complaints"
        indexes = [
            models.Index(fields=['tenant', 'status'], name='complaint_tenant_status_idx'),
            models.Index(fields=['property', 'status'], name='complaint_property_status_idx'),
            models.Index(fields=['category', 'status'], name='complaint_category_status_idx'),
            models.Index(fields=['priority', 'status'], name='complaint_priority_status_idx'),
        ]

    def __str__(self):
        return f"{self.title} ({self.get_status_display()})"

    @builtins.property
    def resolution_time_hours(self):
        """Whole hours from creation to resolution"""
        if not (self.resolved_at and self.created_at):
            return None
        return int((self.resolved_at - self.created_at).total_seconds() // 3600)

    def apply_status(self, new_status, user=None, comment=''):
        """
        Move to `new_status` and record the change.

        Resolving stamps resolved_at/resolved_by; reopening clears them.
        Returns the new timeline entry, or None when the status is unchanged.
        """
        if new_status == self.status:
            return None
        self.status = new_status
        if new_status == ComplaintStatus.RESOLVED:
            self.resolved_at = timezone.now()
            self.resolved_by = user
        elif new_status in ComplaintStatus.UNRESOLVED:
            self.resolved_at = None
            self.resolved_by = None
        self.save()
        return self.record_timeline(user=user, comment=comment)

    def record_timeline(self, user=None, comment=''):
        return ComplaintTimelineEntry.objects.create(
            complaint=self, status=self.status, comment=comment, updated_by=user
        )


class ComplaintTimelineEntry(models.Model):
    """Immutable record of a complaint status change"""
    complaint = models.ForeignKey(Complaint, on_delete=models.CASCADE, related_name='timeline')
    status = models.CharField(max_length=20, choices=ComplaintStatus.CHOICES)
    comment = models.TextField(blank=True)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['timestamp', 'id']
        verbose_name = "Complaint Timeline Entry"
        verbose_name_plural = "Complaint Timeline"

    def __str__(self):
        return f"{self.complaint_id} -> {self.status} at {self.timestamp:%Y-%m-%d %H:%M}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Timeline entries cannot be modified")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Timeline entries cannot be deleted")
