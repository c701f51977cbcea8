from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated

from api.permissions import IsOwnerOrAdmin
from common.responses import EnvelopeMixin, api_response
from .serializers import PropertySerializer, PropertyListSerializer, PropertyImageUploadSerializer
from .services import PropertyService


class PropertyViewSet(EnvelopeMixin, viewsets.ModelViewSet):
    """
    ViewSet for Property management

    Access Control:
    - OWNER: only their own properties
    - ADMIN: every property
    Tenants reach their property through their tenant record.

    Filters: ?status=, ?city= (contains), ?property_type=
    """
    permission_classes = [IsAuthenticated, IsOwnerOrAdmin]
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    search_fields = ['name', 'city', 'street']
    ordering_fields = ['name', 'created_at', 'city']
    ordering = ['-created_at']

    def get_service(self):
        return PropertyService()

    def get_serializer_class(self):
        if self.action == 'list':
            return PropertyListSerializer
        if self.action == 'images':
            return PropertyImageUploadSerializer
        return PropertySerializer

    def get_queryset(self):
        params = self.request.query_params
        return self.get_service().list_properties(
            self.request.user,
            status=params.get('status'),
            city=params.get('city'),
            property_type=params.get('property_type') or params.get('propertyType'),
        )

    def get_object(self):
        return self.get_service().get_property(self.request.user, self.kwargs['pk'])

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        prop = self.get_service().create_property(request.user, serializer.validated_data)
        return api_response(self.get_serializer(prop).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        service = self.get_service()
        prop = service.get_property(request.user, kwargs['pk'])
        serializer = self.get_serializer(prop, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        prop = service.update_property(request.user, prop.id, serializer.validated_data)
        return api_response(self.get_serializer(prop).data)

    def destroy(self, request, *args, **kwargs):
        self.get_service().delete_property(request.user, kwargs['pk'])
        return api_response(message="Property deleted successfully")

    @action(detail=True, methods=['post'])
    def images(self, request, pk=None):
        """Upload one or more images (multipart field `images`)"""
        files = request.FILES.getlist('images')
        captions = request.data.getlist('captions') if hasattr(request.data, 'getlist') else []
        prop = self.get_service().add_images(request.user, pk, files, captions)
        return api_response(PropertySerializer(prop, context=self.get_serializer_context()).data)

    @action(detail=True, methods=['delete'], url_path=r'images/(?P<image_id>\d+)')
    def delete_image(self, request, pk=None, image_id=None):
        self.get_service().delete_image(request.user, pk, image_id)
        return api_response(message="Image deleted successfully")
