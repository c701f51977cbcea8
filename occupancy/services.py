"""
Occupancy consistency engine.

Room.current_occupancy/status and Property.total_rooms/occupied_rooms are
derived values. They are recomputed here from the live child rows after
every tenant or room write, inside the caller's transaction, with row locks
on the room and property being recomputed. Recomputation is idempotent, so
reconcile_all() can repair any drift out of band.
"""
from typing import Iterable, Optional

from django.db import DatabaseError, transaction
from django.db.models import Count, Q
from django.utils import timezone

from core.constants import RoomStatus, TenantStatus
from core.services import BaseService
from properties.models import Property
from rooms.models import Room
from tenants.models import Tenant


def next_room_status(current_status: str, active_count: int) -> str:
    """
    Room status after a recompute.

    Any active tenant makes the room occupied; an emptied occupied room
    becomes available; maintenance/reserved/available are otherwise kept.
    """
    if active_count > 0:
        return RoomStatus.OCCUPIED
    if current_status == RoomStatus.OCCUPIED:
        return RoomStatus.AVAILABLE
    return current_status


def count_active_tenants(room_id, exclude_tenant_id=None) -> int:
    queryset = Tenant.objects.filter(room_id=room_id, status=TenantStatus.ACTIVE)
    if exclude_tenant_id is not None:
        queryset = queryset.exclude(pk=exclude_tenant_id)
    return queryset.count()


class OccupancyService(BaseService):
    """Recomputes derived occupancy counters"""

    def recompute_room(self, room_id) -> Optional[Room]:
        """Set the room's occupancy and status from its active tenants"""
        with transaction.atomic():
            room = Room.objects.select_for_update().filter(pk=room_id).first()
            if room is None:
                return None
            active_count = count_active_tenants(room_id)
            status = next_room_status(room.status, active_count)
            if room.current_occupancy != active_count or room.status != status:
                Room.objects.filter(pk=room_id).update(
                    current_occupancy=active_count, status=status, updated_at=timezone.now()
                )
                room.current_occupancy = active_count
                room.status = status
            return room

    def recompute_property(self, property_id) -> Optional[Property]:
        """Set the property's room counters from its live rooms"""
        with transaction.atomic():
            prop = Property.objects.select_for_update().filter(pk=property_id).first()
            if prop is None:
                return None
            stats = Room.objects.filter(property_id=property_id).aggregate(
                total=Count('id'),
                occupied=Count('id', filter=Q(status=RoomStatus.OCCUPIED)),
            )
            total, occupied = stats['total'] or 0, stats['occupied'] or 0
            if prop.total_rooms != total or prop.occupied_rooms != occupied:
                Property.objects.filter(pk=property_id).update(
                    total_rooms=total, occupied_rooms=occupied, updated_at=timezone.now()
                )
                prop.total_rooms = total
                prop.occupied_rooms = occupied
            return prop

    def sync(self, room_ids: Iterable = (), property_ids: Iterable = ()):
        """
        Recompute the given rooms, then their properties plus any extra
        properties given.

        Each recompute runs in its own savepoint: a failure is logged and
        left for reconciliation, and never aborts the triggering write.
        """
        property_ids = {pid for pid in property_ids if pid is not None}
        for room_id in {rid for rid in room_ids if rid is not None}:
            room = self._guarded(self.recompute_room, room_id, kind='room')
            if room is not None:
                property_ids.add(room.property_id)
        for property_id in property_ids:
            self._guarded(self.recompute_property, property_id, kind='property')

    def _guarded(self, func, object_id, kind):
        try:
            with transaction.atomic():
                return func(object_id)
        except DatabaseError as e:
            self.log_error(f"Occupancy recompute failed for {kind}", error=e, object_id=object_id)
            return None

    def reconcile_all(self) -> dict:
        """Recompute every room and property; returns what was checked and repaired"""
        result = {'rooms_checked': 0, 'rooms_fixed': 0, 'properties_checked': 0, 'properties_fixed': 0}

        for room_id, occupancy, status in list(Room.objects.values_list('id', 'current_occupancy', 'status')):
            room = self._guarded(self.recompute_room, room_id, kind='room')
            result['rooms_checked'] += 1
            if room is not None and (room.current_occupancy, room.status) != (occupancy, status):
                result['rooms_fixed'] += 1

        for property_id, total, occupied in list(
            Property.objects.values_list('id', 'total_rooms', 'occupied_rooms')
        ):
            prop = self._guarded(self.recompute_property, property_id, kind='property')
            result['properties_checked'] += 1
            if prop is not None and (prop.total_rooms, prop.occupied_rooms) != (total, occupied):
                result['properties_fixed'] += 1

        self.log_info("Occupancy reconciliation finished", **result)
        return result
