"""
Complaint repository - statistics queries for complaints.
"""
from django.db.models import Count, Q, QuerySet

from core.constants import ComplaintStatus
from core.repositories import BaseRepository
from .models import Complaint


class ComplaintRepository(BaseRepository[Complaint]):
    """Repository for Complaint model"""
    model = Complaint

    def get_queryset(self) -> QuerySet[Complaint]:
        return Complaint.objects.select_related(
            'tenant', 'property', 'room', 'assigned_to', 'resolved_by'
        ).prefetch_related('timeline')

    def stats(self, queryset: QuerySet[Complaint]) -> dict:
        """Counts per status, and per category with open/resolved breakdown"""
        queryset = queryset.order_by()
        by_status = {
            row['status']: row['count']
            for row in queryset.values('status').annotate(count=Count('id'))
        }
        by_category = [
            {
                'category': row['category'],
                'count': row['count'],
                'open': row['open'],
                'resolved': row['resolved'],
            }
            for row in queryset.values('category').annotate(
                count=Count('id'),
                open=Count('id', filter=Q(status=ComplaintStatus.OPEN)),
                resolved=Count('id', filter=Q(status=ComplaintStatus.RESOLVED)),
            ).order_by('category')
        ]
        return {
            'total': sum(by_status.values()),
            'by_status': {status: by_status.get(status, 0) for status, _ in ComplaintStatus.CHOICES},
            'by_category': by_category,
        }
