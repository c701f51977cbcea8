from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.filters import SearchFilter, OrderingFilter
from rest_framework.permissions import IsAuthenticated

from api.filters import RoleScopeFilterBackend, QueryParamFilterBackend
from common.responses import EnvelopeMixin, api_response
from .models import Payment
from .serializers import PaymentSerializer, PaymentListSerializer, parse_month
from .services import PaymentService


class PaymentViewSet(EnvelopeMixin, viewsets.ModelViewSet):
    """
    ViewSet for Payment management

    - OWNER: payments under their properties
    - TENANT: only their own payments
    - ADMIN: everything

    Filters: ?property=, ?room=, ?tenant=, ?status=, ?month=YYYY-MM
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
        'month': ('month', parse_month),
    }
    search_fields = ['tenant__full_name', 'transaction_id']
    ordering_fields = ['month', 'due_date', 'total_amount', 'created_at']
    ordering = ['-month', '-created_at']

    def get_service(self):
        return PaymentService()

    def get_serializer_class(self):
        if self.action == 'list':
            return PaymentListSerializer
        return PaymentSerializer

    def get_queryset(self):
        return Payment.objects.select_related('tenant', 'property', 'room', 'recorded_by')

    def get_object(self):
        return self.get_service().get_payment(self.request.user, self.kwargs['pk'])

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payment = self.get_service().create_payment(request.user, serializer.validated_data)
        return api_response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        service = self.get_service()
        payment = service.get_payment(request.user, kwargs['pk'])
        serializer = self.get_serializer(payment, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        payment = service.update_payment(request.user, payment.id, serializer.validated_data)
        return api_response(PaymentSerializer(payment).data)

    def destroy(self, request, *args, **kwargs):
        self.get_service().delete_payment(request.user, kwargs['pk'])
        return api_response(message="Payment deleted successfully")

    @action(detail=False, methods=['get'])
    def summary(self, request):
        """Count and total amount per status over the visible payments"""
        queryset = self.filter_queryset(self.get_queryset())
        return api_response(self.get_service().summary(queryset))

    @action(detail=False, methods=['get'], url_path='monthly-revenue')
    def monthly_revenue(self, request):
        """Paid revenue per month for ?property= in ?year="""
        data = self.get_service().monthly_revenue(
            request.user,
            request.query_params.get('property'),
            request.query_params.get('year'),
        )
        return api_response(data)
