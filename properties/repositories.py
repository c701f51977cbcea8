"""
Property repository - Data access layer for Property domain.
"""
from django.db.models import QuerySet

from core.constants import UserRole
from core.repositories import BaseRepository
from .models import Property, PropertyImage


class PropertyRepository(BaseRepository[Property]):
    """Repository for Property model"""
    model = Property

    def get_queryset(self) -> QuerySet[Property]:
        return Property.objects.select_related('owner').prefetch_related('images')

    def list_for_user(self, user, status=None, city=None, property_type=None) -> QuerySet[Property]:
        """Owners see their own properties, admins see all"""
        queryset = self.get_queryset()
        if user.role != UserRole.ADMIN:
            queryset = queryset.filter(owner=user)
        if status:
            queryset = queryset.filter(status=status)
        if city:
            queryset = queryset.filter(city__icontains=city)
        if property_type:
            queryset = queryset.filter(property_type=property_type)
        return queryset

    def stored_file_names(self, property_id) -> list:
        return list(
            PropertyImage.objects.filter(property_id=property_id).values_list('file', flat=True)
        )
