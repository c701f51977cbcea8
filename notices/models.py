import builtins
from django.conf import settings
from django.db import models
from django.db.models import Case, IntegerField, Q, Value, When
from django.utils import timezone

from core.constants import NoticeStatus, NoticeCategory, NoticeAudience, Priority
from properties.models import Property


class NoticeQuerySet(models.QuerySet):

    def active(self, at=None):
        """Notices that are active and inside their validity window"""
        now = at or timezone.now()
        return self.filter(
            Q(valid_till__isnull=True) | Q(valid_till__gte=now),
            status=NoticeStatus.ACTIVE,
            valid_from__lte=now,
        )

    def by_priority(self):
        """Urgent first, then newest"""
        rank = Case(
            *[When(priority=key, then=Value(value)) for key, value in Priority.RANK.items()],
            default=Value(0),
            output_field=IntegerField(),
        )
        return self.annotate(priority_rank=rank).order_by('-priority_rank', '-created_at')


class Notice(models.Model):
    """Notice posted by an owner or admin; global when property is empty"""
    property = models.ForeignKey(
        Property, on_delete=models.CASCADE, null=True, blank=True, related_name='notices'
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notices'
    )
    title = models.CharField(max_length=200)
    content = models.TextField(max_length=2000)
    category = models.CharField(max_length=20, choices=NoticeCategory.CHOICES)
    priority = models.CharField(max_length=10, choices=Priority.CHOICES, default=Priority.MEDIUM)
    target_audience = models.CharField(max_length=20, choices=NoticeAudience.CHOICES, default=NoticeAudience.ALL)
    target_floor = models.CharField(max_length=20, blank=True)
    valid_from = models.DateTimeField(default=timezone.now)
    valid_till = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=NoticeStatus.CHOICES, default=NoticeStatus.ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = NoticeQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Notice"
        verbose_name_plural = "Notices"
        indexes = [
            models.Index(fields=['property', 'status'], name='notice_property_status_idx'),
            models.Index(fields=['status', 'valid_from'], name='notice_status_valid_from_idx'),
            models.Index(fields=['created_by'], name='notice_created_by_idx'),
        ]

    def __str__(self):
        return self.title

    def is_valid_at(self, at):
        if self.status != NoticeStatus.ACTIVE:
            return False
        if self.valid_from and self.valid_from > at:
            return False
        return self.valid_till is None or self.valid_till >= at

    @builtins.property
    def is_valid(self):
        return self.is_valid_at(timezone.now())

    def mark_as_read(self, user):
        """Record a read receipt; repeated reads keep the first timestamp"""
        receipt, _ = NoticeRead.objects.get_or_create(notice=self, user=user)
        return receipt


class NoticeRead(models.Model):
    """Read receipt, one per user and notice"""
    notice = models.ForeignKey(Notice, on_delete=models.CASCADE, related_name='reads')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notice_reads')
    read_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ['notice', 'user']
        ordering = ['read_at']
        verbose_name = "Notice Read"
        verbose_name_plural = "Notice Reads"

    def __str__(self):
        return f"{self.user} read {self.notice}"
