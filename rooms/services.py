"""
Room service - Business logic layer for Room domain.
Every room write is followed by an occupancy recompute of the room and its property.
"""
from django.db import transaction

from core.access import ensure_access, get_authorized
from core.constants import ResourceKind, RoomStatus
from core.exceptions import ConflictError, ValidationError
from core.repositories import BaseRepository
from core.services import BaseService
from core.validators import CapacityValidator
from occupancy.services import OccupancyService, count_active_tenants
from .models import Room

# Derived fields clients may never write
DERIVED_FIELDS = ('current_occupancy',)

DUPLICATE_ROOM_MESSAGE = "Room number already exists in this property"


class RoomService(BaseService):
    """Service for room-related business logic"""

    def __init__(self, providers=None):
        super().__init__(providers)
        self.room_repo = BaseRepository(Room)
        self.occupancy = OccupancyService(self.providers)

    def _strip_derived(self, data: dict) -> dict:
        return {key: value for key, value in data.items() if key not in DERIVED_FIELDS}

    def _check_status(self, requested, current=None):
        if requested == RoomStatus.OCCUPIED and current != RoomStatus.OCCUPIED:
            raise ValidationError(
                message="Room status 'occupied' is set automatically from tenant assignments",
                details={'status': [f"Allowed values: {', '.join(RoomStatus.CLIENT_SETTABLE)}"]},
            )

    def get_room(self, user, room_id) -> Room:
        return get_authorized(user, ResourceKind.ROOM, room_id)

    def create_room(self, user, data: dict) -> Room:
        data = self._strip_derived(data)
        ensure_access(user, ResourceKind.PROPERTY, data.get('property'))
        self._check_status(data.get('status'))

        with transaction.atomic():
            room = Room(**data)
            self.save_model(room, conflict_message=DUPLICATE_ROOM_MESSAGE)
            self.occupancy.sync(room_ids=[room.id])

        self.log_info(f"Room created: {room.room_number}", room_id=room.id, property_id=room.property_id)
        return self.room_repo.get_by_id(room.id)

    def update_room(self, user, room_id, data: dict) -> Room:
        data = self._strip_derived(data)
        with transaction.atomic():
            self.get_room(user, room_id)
            room = self.room_repo.get_for_update(room_id)

            new_property = data.pop('property', None)
            if new_property is not None and new_property.pk != room.property_id:
                raise ValidationError(
                    message="A room cannot be moved to another property",
                    details={'property': ["Cannot be changed"]},
                )
            if 'status' in data:
                self._check_status(data['status'], room.status)
                if data['status'] == RoomStatus.OCCUPIED:
                    data.pop('status')
            if 'capacity' in data and data['capacity'] != room.capacity:
                CapacityValidator.validate_capacity_change(data['capacity'], count_active_tenants(room.id))

            for field, value in data.items():
                setattr(room, field, value)
            self.save_model(room, conflict_message=DUPLICATE_ROOM_MESSAGE)
            self.occupancy.sync(room_ids=[room.id])

        self.log_info(f"Room updated: {room.room_number}", room_id=room.id)
        return self.room_repo.get_by_id(room.id)

    def delete_room(self, user, room_id):
        """Refused while active tenants occupy the room; inactive history goes with it"""
        with transaction.atomic():
            self.get_room(user, room_id)
            room = self.room_repo.get_for_update(room_id)
            active = count_active_tenants(room.id)
            if active:
                raise ConflictError(
                    message=f"Room has {active} active tenant(s); move or deactivate them first",
                    code="ROOM_OCCUPIED",
                )
            property_id = room.property_id
            self.room_repo.delete(room)
            self.occupancy.sync(property_ids=[property_id])

        self.log_info("Room deleted", room_id=room_id, property_id=property_id)
