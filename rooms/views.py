from rest_framework import viewsets, status
from rest_framework.filters import SearchFilter, OrderingFilter
from rest_framework.permissions import IsAuthenticated

from api.filters import RoleScopeFilterBackend, QueryParamFilterBackend
from api.permissions import IsOwnerOrAdmin
from common.responses import EnvelopeMixin, api_response
from .models import Room
from .serializers import RoomSerializer, RoomListSerializer
from .services import RoomService


class RoomViewSet(EnvelopeMixin, viewsets.ModelViewSet):
    """
    ViewSet for Room management

    Owners manage rooms in their own properties; admins manage all.
    Occupancy fields are maintained by the occupancy engine.
    """
    permission_classes = [IsAuthenticated, IsOwnerOrAdmin]
    filter_backends = [RoleScopeFilterBackend, QueryParamFilterBackend, SearchFilter, OrderingFilter]
    owner_scope_field = 'property__owner'
    filterset_params = {
        'property': 'property_id',
        'status': 'status',
        'room_type': 'room_type',
        'floor': 'floor',
    }
    search_fields = ['room_number', 'property__name']
    ordering_fields = ['room_number', 'rent', 'created_at']
    ordering = ['property_id', 'room_number']

    def get_service(self):
        return RoomService()

    def get_serializer_class(self):
        if self.action == 'list':
            return RoomListSerializer
        return RoomSerializer

    def get_queryset(self):
        return Room.objects.select_related('property')

    def get_object(self):
        return self.get_service().get_room(self.request.user, self.kwargs['pk'])

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room = self.get_service().create_room(request.user, serializer.validated_data)
        return api_response(RoomSerializer(room).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        service = self.get_service()
        room = service.get_room(request.user, kwargs['pk'])
        serializer = self.get_serializer(room, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        room = service.update_room(request.user, room.id, serializer.validated_data)
        return api_response(RoomSerializer(room).data)

    def destroy(self, request, *args, **kwargs):
        self.get_service().delete_room(request.user, kwargs['pk'])
        return api_response(message="Room deleted successfully")
