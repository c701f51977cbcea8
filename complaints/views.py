from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.filters import SearchFilter, OrderingFilter
from rest_framework.permissions import IsAuthenticated

from api.filters import RoleScopeFilterBackend, QueryParamFilterBackend
from common.responses import EnvelopeMixin, api_response
from .models import Complaint
from .serializers import ComplaintSerializer, ComplaintListSerializer
from .services import ComplaintService


class ComplaintViewSet(EnvelopeMixin, viewsets.ModelViewSet):
    """
    ViewSet for Complaint management

    - TENANT: raises and follows their own complaints
    - OWNER: handles complaints under their properties
    - ADMIN: everything
    """
    permission_classes = [IsAuthenticated]
    filter_backends = [RoleScopeFilterBackend, QueryParamFilterBackend, SearchFilter, OrderingFilter]
    owner_scope_field = 'property__owner'
    tenant_scope_field = 'tenant__user'
    filterset_params = {
        'property': 'property_id',
        'room': 'room_id',
        'tenant': 'tenant_id',
        'status': 'status',
        'category': 'category',
        'priority': 'priority',
    }
    search_fields = ['title', 'description']
    ordering_fields = ['created_at', 'priority', 'status']
    ordering = ['-created_at']

    def get_service(self):
        return ComplaintService()

    def get_serializer_class(self):
        if self.action == 'list':
            return ComplaintListSerializer
        return ComplaintSerializer

    def get_queryset(self):
        return Complaint.objects.select_related('tenant', 'property', 'room')

    def get_object(self):
        return self.get_service().get_complaint(self.request.user, self.kwargs['pk'])

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        complaint = self.get_service().create_complaint(request.user, serializer.validated_data)
        return api_response(ComplaintSerializer(complaint).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        service = self.get_service()
        complaint = service.get_complaint(request.user, kwargs['pk'])
        serializer = self.get_serializer(complaint, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        complaint = service.update_complaint(request.user, complaint.id, serializer.validated_data)
        return api_response(ComplaintSerializer(complaint).data)

    def destroy(self, request, *args, **kwargs):
        self.get_service().delete_complaint(request.user, kwargs['pk'])
        return api_response(message="Complaint deleted successfully")

    @action(detail=False, methods=['get'])
    def stats(self, request):
        """Counts per status and category over the visible complaints"""
        queryset = RoleScopeFilterBackend().filter_queryset(request, self.get_queryset(), self)
        data = self.get_service().stats(request.user, queryset, request.query_params.get('property'))
        return api_response(data)
