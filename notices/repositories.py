"""
Notice repository - Data access layer for Notice domain.
"""
from django.db.models import Q, QuerySet

from core.constants import UserRole
from core.repositories import BaseRepository
from .models import Notice


class NoticeRepository(BaseRepository[Notice]):
    """Repository for Notice model"""
    model = Notice

    def get_queryset(self) -> QuerySet[Notice]:
        return Notice.objects.select_related('property', 'created_by')

    def visible_to(self, user) -> QuerySet[Notice]:
        """
        Notices a user may read.

        Admins see everything, owners see global notices plus notices on
        their properties or written by them, tenants see global notices plus
        those of the property they live in.
        """
        queryset = self.get_queryset()
        if user.role == UserRole.ADMIN:
            return queryset
        if user.role == UserRole.OWNER:
            return queryset.filter(
                Q(property__isnull=True) | Q(property__owner=user) | Q(created_by=user)
            )
        tenant = getattr(user, 'tenant_profile', None)
        if tenant is None:
            return queryset.filter(property__isnull=True)
        return queryset.filter(Q(property__isnull=True) | Q(property_id=tenant.property_id))
