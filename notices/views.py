from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.filters import SearchFilter, OrderingFilter
from rest_framework.permissions import IsAuthenticated

from api.filters import QueryParamFilterBackend
from common.responses import EnvelopeMixin, api_response
from .serializers import NoticeSerializer, NoticeListSerializer, NoticeReadSerializer
from .services import NoticeService


class NoticeViewSet(EnvelopeMixin, viewsets.ModelViewSet):
    """
    ViewSet for Notice management

    Listing returns currently valid notices, urgent first then newest.
    Owners and admins may pass ?include_expired=true to see drafts,
    archived and expired notices they can manage.
    """
    permission_classes = [IsAuthenticated]
    filter_backends = [QueryParamFilterBackend, SearchFilter, OrderingFilter]
    filterset_params = {
        'property': 'property_id',
        'category': 'category',
        'priority': 'priority',
        'status': 'status',
    }
    search_fields = ['title', 'content']
    ordering_fields = ['created_at', 'valid_from', 'valid_till']

    def get_service(self):
        return NoticeService()

    def get_serializer_class(self):
        if self.action == 'list':
            return NoticeListSerializer
        return NoticeSerializer

    def get_queryset(self):
        include_expired = self.request.query_params.get('include_expired') in ('1', 'true', 'True')
        return self.get_service().list_notices(self.request.user, include_expired=include_expired)

    def get_object(self):
        return self.get_service().get_notice(self.request.user, self.kwargs['pk'])

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        notice = self.get_service().create_notice(request.user, serializer.validated_data)
        return api_response(self.get_serializer(notice).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        service = self.get_service()
        notice = service.get_notice(request.user, kwargs['pk'])
        serializer = self.get_serializer(notice, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        notice = service.update_notice(request.user, notice.id, serializer.validated_data)
        return api_response(self.get_serializer(notice).data)

    def destroy(self, request, *args, **kwargs):
        self.get_service().delete_notice(request.user, kwargs['pk'])
        return api_response(message="Notice deleted successfully")

    @action(detail=True, methods=['post'])
    def read(self, request, pk=None):
        receipt = self.get_service().mark_read(request.user, pk)
        return api_response(NoticeReadSerializer(receipt).data, message="Notice marked as read")
