from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.filters import SearchFilter, OrderingFilter
from rest_framework.permissions import IsAuthenticated

from api.filters import RoleScopeFilterBackend, QueryParamFilterBackend
from api.permissions import IsOwnerOrAdminForWrites
from common.responses import EnvelopeMixin, api_response
from core.exceptions import NotFoundError
from .models import Tenant
from .serializers import TenantSerializer, TenantListSerializer
from .services import TenantService


class TenantViewSet(EnvelopeMixin, viewsets.ModelViewSet):
    """
    ViewSet for Tenant management

    - OWNER: tenants in their properties
    - TENANT: only their own record (contact details editable)
    - ADMIN: everything
    """
    permission_classes = [IsAuthenticated]
    filter_backends = [RoleScopeFilterBackend, QueryParamFilterBackend, SearchFilter, OrderingFilter]
    owner_scope_field = 'property__owner'
    tenant_scope_field = 'user'
    filterset_params = {
        'property': 'property_id',
        'room': 'room_id',
        'status': 'status',
    }
    search_fields = ['full_name', 'email', 'phone']
    ordering_fields = ['full_name', 'move_in_date', 'created_at']
    ordering = ['-created_at']

    def get_permissions(self):
        if self.action == 'create':
            return [IsAuthenticated(), IsOwnerOrAdminForWrites()]
        return super().get_permissions()

    def get_service(self):
        return TenantService()

    def get_serializer_class(self):
        if self.action == 'list':
            return TenantListSerializer
        return TenantSerializer

    def get_queryset(self):
        return Tenant.objects.select_related('property', 'room', 'user')

    def get_object(self):
        return self.get_service().get_tenant(self.request.user, self.kwargs['pk'])

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        tenant = self.get_service().create_tenant(request.user, serializer.validated_data)
        return api_response(TenantSerializer(tenant).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        service = self.get_service()
        tenant = service.get_tenant(request.user, kwargs['pk'])
        serializer = self.get_serializer(tenant, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        tenant = service.update_tenant(request.user, tenant.id, serializer.validated_data)
        return api_response(TenantSerializer(tenant).data)

    def destroy(self, request, *args, **kwargs):
        self.get_service().delete_tenant(request.user, kwargs['pk'])
        return api_response(message="Tenant deleted successfully")

    @action(detail=False, methods=['get'])
    def me(self, request):
        """The requesting tenant's own record"""
        tenant = self.get_queryset().filter(user=request.user).first()
        if tenant is None:
            raise NotFoundError(resource_type="Tenant")
        return api_response(TenantSerializer(tenant).data)
