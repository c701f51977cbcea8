from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.filters import SearchFilter, OrderingFilter

from api.permissions import IsAdmin
from common.responses import EnvelopeMixin
from .models import User
from .serializers import UserSerializer, UserListSerializer


class UserViewSet(EnvelopeMixin, viewsets.ReadOnlyModelViewSet):
    """
    Admin-only user listing.

    Supports `?role=` filtering plus search on name/email.
    """
    permission_classes = [IsAuthenticated, IsAdmin]
    filter_backends = [SearchFilter, OrderingFilter]
    search_fields = ['name', 'email']
    ordering_fields = ['name', 'email', 'date_joined']
    ordering = ['-date_joined']

    def get_serializer_class(self):
        if self.action == 'list':
            return UserListSerializer
        return UserSerializer

    def get_queryset(self):
        queryset = User.objects.all()
        role = self.request.query_params.get('role')
        if role:
            queryset = queryset.filter(role=role)
        return queryset
