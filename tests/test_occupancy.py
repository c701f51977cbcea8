"""Occupancy engine: derived room and property counters stay consistent."""
from unittest import mock

import pytest
from django.core.management import call_command
from django.db import DatabaseError

from core.constants import RoomStatus, TenantStatus
from core.exceptions import ConflictError, ValidationError
from occupancy.services import OccupancyService, next_room_status
from rooms.models import Room
from rooms.services import RoomService
from tenants.services import TenantService
from tests.conftest import make_room, make_user, tenant_data

pytestmark = pytest.mark.django_db


def refresh(*objs):
    for obj in objs:
        obj.refresh_from_db()


def assert_consistent(prop):
    """Property counters equal the live room set; rooms equal active tenants"""
    prop.refresh_from_db()
    rooms = list(prop.rooms.all())
    assert prop.total_rooms == len(rooms)
    assert prop.occupied_rooms == sum(1 for r in rooms if r.status == RoomStatus.OCCUPIED)
    for r in rooms:
        assert r.current_occupancy == r.tenants.filter(status=TenantStatus.ACTIVE).count()


class TestNextRoomStatus:

    @pytest.mark.parametrize('current, count, expected', [
        (RoomStatus.AVAILABLE, 1, RoomStatus.OCCUPIED),
        (RoomStatus.MAINTENANCE, 2, RoomStatus.OCCUPIED),
        (RoomStatus.OCCUPIED, 0, RoomStatus.AVAILABLE),
        (RoomStatus.MAINTENANCE, 0, RoomStatus.MAINTENANCE),
        (RoomStatus.RESERVED, 0, RoomStatus.RESERVED),
        (RoomStatus.AVAILABLE, 0, RoomStatus.AVAILABLE),
    ])
    def test_status_rule(self, current, count, expected):
        assert next_room_status(current, count) == expected


class TestTenantLifecycle:

    def test_create_tenant_occupies_room(self, tenant, room, prop):
        refresh(room, prop)
        assert room.current_occupancy == 1
        assert room.status == RoomStatus.OCCUPIED
        assert prop.total_rooms == 1
        assert prop.occupied_rooms == 1

    def test_deactivating_last_tenant_frees_room(self, owner, tenant, room, prop, providers):
        TenantService(providers).update_tenant(owner, tenant.id, {'status': TenantStatus.INACTIVE})
        refresh(room, prop)
        assert room.current_occupancy == 0
        assert room.status == RoomStatus.AVAILABLE
        assert prop.occupied_rooms == 0

    def test_notice_period_tenant_is_not_counted(self, owner, tenant, room, providers):
        TenantService(providers).update_tenant(owner, tenant.id, {'status': TenantStatus.NOTICE_PERIOD})
        room.refresh_from_db()
        assert room.current_occupancy == 0

    def test_delete_tenant_recomputes(self, owner, tenant, room, prop, providers):
        TenantService(providers).delete_tenant(owner, tenant.id)
        refresh(room, prop)
        assert room.current_occupancy == 0
        assert room.status == RoomStatus.AVAILABLE
        assert_consistent(prop)

    def test_moving_tenant_updates_both_rooms(self, owner, tenant, room, prop, providers):
        target = make_room(prop, room_number='102')
        TenantService(providers).update_tenant(owner, tenant.id, {'room': target})
        refresh(room, target, prop)
        assert room.current_occupancy == 0
        assert room.status == RoomStatus.AVAILABLE
        assert target.current_occupancy == 1
        assert target.status == RoomStatus.OCCUPIED
        assert prop.total_rooms == 2
        assert prop.occupied_rooms == 1

    def test_move_notifies_room_assignment(self, owner, tenant, prop, providers, notifier):
        target = make_room(prop, room_number='102')
        notifier.events.clear()
        TenantService(providers).update_tenant(owner, tenant.id, {'room': target})
        events = {(event, audience) for event, audience, _ in notifier.events}
        assert ('tenant:room-assigned', f'user:{tenant.user_id}') in events

    def test_second_tenant_in_double_room(self, owner, tenant, room, second_tenant_user, providers):
        TenantService(providers).create_tenant(owner, tenant_data(second_tenant_user, room))
        room.refresh_from_db()
        assert room.current_occupancy == 2


class TestCapacity:

    def test_full_room_rejects_new_tenant(self, owner, prop, tenant_user, second_tenant_user, providers):
        single = make_room(prop, room_number='201', capacity=1)
        service = TenantService(providers)
        service.create_tenant(owner, tenant_data(tenant_user, single))
        with pytest.raises(ConflictError) as exc:
            service.create_tenant(owner, tenant_data(second_tenant_user, single))
        assert exc.value.code == 'ROOM_FULL'
        single.refresh_from_db()
        assert single.current_occupancy == 1

    def test_inactive_tenant_may_join_full_room(self, owner, prop, tenant_user, second_tenant_user, providers):
        single = make_room(prop, room_number='201', capacity=1)
        service = TenantService(providers)
        service.create_tenant(owner, tenant_data(tenant_user, single))
        service.create_tenant(owner, tenant_data(second_tenant_user, single, status=TenantStatus.INACTIVE))
        single.refresh_from_db()
        assert single.current_occupancy == 1

    def test_reactivating_into_full_room_is_refused(self, owner, prop, tenant_user, second_tenant_user, providers):
        single = make_room(prop, room_number='201', capacity=1)
        service = TenantService(providers)
        service.create_tenant(owner, tenant_data(tenant_user, single))
        waiting = service.create_tenant(
            owner, tenant_data(second_tenant_user, single, status=TenantStatus.INACTIVE)
        )
        with pytest.raises(ConflictError):
            service.update_tenant(owner, waiting.id, {'status': TenantStatus.ACTIVE})

    def test_capacity_cannot_drop_below_active_count(self, owner, tenant, room, second_tenant_user, providers):
        TenantService(providers).create_tenant(owner, tenant_data(second_tenant_user, room))
        with pytest.raises(ValidationError):
            RoomService(providers).update_room(owner, room.id, {'capacity': 1})

    def test_capacity_enforcement_can_be_disabled(self, owner, prop, tenant_user, second_tenant_user,
                                                  providers, settings):
        settings.ENFORCE_ROOM_CAPACITY = False
        single = make_room(prop, room_number='201', capacity=1)
        service = TenantService(providers)
        service.create_tenant(owner, tenant_data(tenant_user, single))
        service.create_tenant(owner, tenant_data(second_tenant_user, single))
        single.refresh_from_db()
        assert single.current_occupancy == 2


class TestRoomWrites:

    def test_room_create_and_delete_update_property_counts(self, owner, prop, providers):
        service = RoomService(providers)
        created = service.create_room(owner, {
            'property': prop, 'room_number': '301', 'floor': '3',
            'room_type': 'single', 'capacity': 1, 'rent': 5000,
        })
        prop.refresh_from_db()
        assert prop.total_rooms == 1

        service.delete_room(owner, created.id)
        prop.refresh_from_db()
        assert prop.total_rooms == 0
        assert prop.occupied_rooms == 0

    def test_client_counters_are_ignored(self, owner, prop, providers):
        created = RoomService(providers).create_room(owner, {
            'property': prop, 'room_number': '301', 'floor': '3',
            'room_type': 'single', 'capacity': 1, 'rent': 5000, 'current_occupancy': 7,
        })
        assert created.current_occupancy == 0

    def test_occupied_status_cannot_be_set_by_client(self, owner, room, providers):
        with pytest.raises(ValidationError):
            RoomService(providers).update_room(owner, room.id, {'status': RoomStatus.OCCUPIED})

    def test_maintenance_status_survives_empty_recompute(self, owner, room, providers):
        RoomService(providers).update_room(owner, room.id, {'status': RoomStatus.MAINTENANCE})
        room.refresh_from_db()
        assert room.status == RoomStatus.MAINTENANCE

    def test_room_with_active_tenants_cannot_be_deleted(self, owner, tenant, room, providers):
        with pytest.raises(ConflictError) as exc:
            RoomService(providers).delete_room(owner, room.id)
        assert exc.value.code == 'ROOM_OCCUPIED'
        assert Room.objects.filter(pk=room.pk).exists()

    def test_room_cannot_move_to_another_property(self, owner, room, providers):
        from tests.conftest import make_property
        other = make_property(owner, name='Blue Nest')
        with pytest.raises(ValidationError):
            RoomService(providers).update_room(owner, room.id, {'property': other})


class TestReconciliation:

    def test_reconcile_repairs_drift(self, tenant, room, prop, providers):
        Room.objects.filter(pk=room.pk).update(current_occupancy=5, status=RoomStatus.AVAILABLE)
        prop.__class__.objects.filter(pk=prop.pk).update(total_rooms=9, occupied_rooms=0)

        result = OccupancyService(providers).reconcile_all()

        assert result['rooms_fixed'] == 1
        assert result['properties_fixed'] == 1
        assert_consistent(prop)
        room.refresh_from_db()
        assert room.status == RoomStatus.OCCUPIED

    def test_reconcile_is_idempotent(self, tenant, prop, providers):
        service = OccupancyService(providers)
        service.reconcile_all()
        second = service.reconcile_all()
        assert second['rooms_fixed'] == 0
        assert second['properties_fixed'] == 0
        assert_consistent(prop)

    def test_management_command(self, tenant, room):
        Room.objects.filter(pk=room.pk).update(current_occupancy=3)
        call_command('reconcile_occupancy')
        room.refresh_from_db()
        assert room.current_occupancy == 1

    def test_recompute_failure_does_not_abort_write(self, owner, room, tenant_user, providers):
        service = TenantService(providers)
        with mock.patch.object(OccupancyService, 'recompute_room', side_effect=DatabaseError('boom')):
            created = service.create_tenant(owner, tenant_data(tenant_user, room))
        assert created.pk is not None
        room.refresh_from_db()
        assert room.current_occupancy == 0

        OccupancyService(providers).reconcile_all()
        room.refresh_from_db()
        assert room.current_occupancy == 1


class TestAggregateInvariant:

    def test_sequence_of_writes_keeps_counts(self, owner, prop, providers):
        tenants = TenantService(providers)
        rooms = RoomService(providers)
        a = make_room(prop, room_number='A', capacity=2)
        b = make_room(prop, room_number='B', capacity=1)
        users = [make_user(f't{i}@example.com', 'tenant') for i in range(3)]

        t0 = tenants.create_tenant(owner, tenant_data(users[0], a))
        tenants.create_tenant(owner, tenant_data(users[1], a))
        tenants.create_tenant(owner, tenant_data(users[2], b))
        assert_consistent(prop)

        tenants.update_tenant(owner, t0.id, {'status': TenantStatus.INACTIVE})
        assert_consistent(prop)

        tenants.delete_tenant(owner, t0.id)
        rooms.update_room(owner, a.id, {'description': 'Corner room'})
        assert_consistent(prop)
