"""
Tenant service - Business logic layer for Tenant domain.

Tenant writes drive room occupancy: the target room is locked, its capacity
checked, and the occupancy engine recomputes every affected room and
property in the same transaction.
"""
from django.conf import settings
from django.db import transaction

from common.notifications import property_audience, user_audience
from core.access import ensure_access, get_authorized
from core.constants import NotificationEvent, ResourceKind, TenantStatus, UserRole
from core.exceptions import ConflictError, PermissionDeniedError, ValidationError
from core.repositories import BaseRepository
from core.services import BaseService
from core.validators import DateRangeValidator
from occupancy.services import OccupancyService, count_active_tenants
from rooms.models import Room
from .models import Tenant

# Fields a tenant may change on their own record
SELF_EDITABLE_FIELDS = {
    'phone', 'alternate_phone',
    'emergency_contact_name', 'emergency_contact_relation', 'emergency_contact_phone',
    'occupation_type', 'company_name', 'designation',
    'permanent_street', 'permanent_city', 'permanent_state', 'permanent_pincode',
}

DUPLICATE_TENANT_MESSAGE = "A tenant record already exists for this user"


class TenantService(BaseService):
    """Service for tenant-related business logic"""

    def __init__(self, providers=None):
        super().__init__(providers)
        self.tenant_repo = BaseRepository(Tenant)
        self.occupancy = OccupancyService(self.providers)

    def get_tenant(self, user, tenant_id) -> Tenant:
        return get_authorized(user, ResourceKind.TENANT, tenant_id)

    def _validate_user(self, tenant_user):
        if tenant_user.role != UserRole.TENANT:
            raise ValidationError(
                message="Tenant records can only be created for users with the tenant role",
                details={'user': ["User must have the tenant role"]},
            )

    def _resolve_room(self, user, data: dict) -> Room:
        """The room decides the property; a mismatching property is rejected"""
        room = data['room']
        ensure_access(user, ResourceKind.ROOM, room)
        given_property = data.get('property')
        if given_property is not None and given_property.pk != room.property_id:
            raise ValidationError(
                message="Room does not belong to the given property",
                details={'room': ["Room does not belong to the given property"]},
            )
        data['property'] = room.property
        return room

    def _check_capacity(self, room_id, exclude_tenant_id=None):
        """Lock the room and refuse one more active tenant when it is full"""
        room = Room.objects.select_for_update().get(pk=room_id)
        if not getattr(settings, 'ENFORCE_ROOM_CAPACITY', True):
            return room
        active = count_active_tenants(room.id, exclude_tenant_id=exclude_tenant_id)
        if active >= room.capacity:
            raise ConflictError(
                message="Room is at full capacity",
                code="ROOM_FULL",
                details={'room': [f"Room {room.room_number} already has {active} of {room.capacity} tenants"]},
            )
        return room

    def _validate_dates(self, tenant):
        DateRangeValidator.validate(tenant.move_in_date, tenant.move_out_date, 'move_out_date', 'Move-out date')
        DateRangeValidator.validate(
            tenant.notice_start_date, tenant.notice_end_date, 'notice_end_date', 'Notice end date'
        )
        DateRangeValidator.validate(
            tenant.agreement_start_date, tenant.agreement_end_date, 'agreement_end_date', 'Agreement end date'
        )

    def create_tenant(self, user, data: dict) -> Tenant:
        data = dict(data)
        room = self._resolve_room(user, data)
        self._validate_user(data['user'])

        with transaction.atomic():
            if data.get('status', TenantStatus.ACTIVE) == TenantStatus.ACTIVE:
                self._check_capacity(room.id)
            tenant = Tenant(**data)
            self._validate_dates(tenant)
            self.save_model(tenant, conflict_message=DUPLICATE_TENANT_MESSAGE)
            self.occupancy.sync(room_ids=[room.id])

        self.log_info(f"Tenant created: {tenant.full_name}", tenant_id=tenant.id, room_id=room.id)
        self._notify_room_assigned(tenant)
        return tenant

    def update_tenant(self, user, tenant_id, data: dict) -> Tenant:
        data = dict(data)
        with transaction.atomic():
            current = self.get_tenant(user, tenant_id)
            if user.role == UserRole.TENANT:
                blocked = sorted(
                    field for field, value in data.items()
                    if field not in SELF_EDITABLE_FIELDS and getattr(current, field) != value
                )
                if blocked:
                    raise PermissionDeniedError(
                        message="Tenants may only update their contact details",
                        details={field: ["Not editable by tenants"] for field in blocked},
                    )

            new_user = data.pop('user', None)
            if new_user is not None and new_user.pk != current.user_id:
                raise ValidationError(
                    message="The user of a tenant record cannot be changed",
                    details={'user': ["Cannot be changed"]},
                )

            if 'room' in data and data['room'].pk != current.room_id:
                self._resolve_room(user, data)
            else:
                data.pop('room', None)
                given_property = data.pop('property', None)
                if given_property is not None and given_property.pk != current.property_id:
                    raise ValidationError(
                        message="Room does not belong to the given property",
                        details={'property': ["Property follows the room"]},
                    )

            tenant = self.tenant_repo.get_for_update(tenant_id)
            old_room_id = tenant.room_id
            was_active = tenant.status == TenantStatus.ACTIVE
            for field, value in data.items():
                setattr(tenant, field, value)

            moved = tenant.room_id != old_room_id
            if tenant.status == TenantStatus.ACTIVE and (moved or not was_active):
                self._check_capacity(tenant.room_id, exclude_tenant_id=tenant.id)

            self._validate_dates(tenant)
            self.save_model(tenant, conflict_message=DUPLICATE_TENANT_MESSAGE)
            self.occupancy.sync(room_ids=[old_room_id, tenant.room_id])

        self.log_info(f"Tenant updated: {tenant.full_name}", tenant_id=tenant.id, moved=moved)
        if moved:
            self._notify_room_assigned(tenant)
        return tenant

    def delete_tenant(self, user, tenant_id):
        if user.role == UserRole.TENANT:
            raise PermissionDeniedError("Tenants cannot delete tenant records")
        with transaction.atomic():
            self.get_tenant(user, tenant_id)
            tenant = self.tenant_repo.get_for_update(tenant_id)
            room_id = tenant.room_id
            self.tenant_repo.delete(tenant)
            self.occupancy.sync(room_ids=[room_id])
        self.log_info("Tenant deleted", tenant_id=tenant_id, room_id=room_id)

    def _notify_room_assigned(self, tenant):
        payload = {
            'tenant_id': tenant.id,
            'room_id': tenant.room_id,
            'room_number': tenant.room.room_number,
            'property_id': tenant.property_id,
        }
        self.notify(NotificationEvent.TENANT_ROOM_ASSIGNED, user_audience(tenant.user_id), payload)
        self.notify(NotificationEvent.TENANT_ROOM_ASSIGNED, property_audience(tenant.property_id), payload)
