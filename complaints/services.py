"""
Complaint service - Business logic layer for Complaint domain.
Status changes always go through Complaint.apply_status so the timeline
stays complete.
"""
from django.db import transaction

from common.notifications import property_audience, user_audience
from core.access import ensure_access, get_authorized
from core.constants import NotificationEvent, ResourceKind, UserRole
from core.exceptions import PermissionDeniedError, ValidationError
from core.services import BaseService
from .models import Complaint
from .repositories import ComplaintRepository

# Fields a tenant may edit on their own complaint
TENANT_EDITABLE_FIELDS = {'title', 'description', 'category', 'priority'}


class ComplaintService(BaseService):
    """Service for complaint-related business logic"""

    def __init__(self, providers=None):
        super().__init__(providers)
        self.complaint_repo = ComplaintRepository()

    def get_complaint(self, user, complaint_id) -> Complaint:
        return get_authorized(user, ResourceKind.COMPLAINT, complaint_id)

    def _resolve_tenant(self, user, data: dict):
        if user.role == UserRole.TENANT:
            tenant = getattr(user, 'tenant_profile', None)
            if tenant is None:
                raise ValidationError(
                    message="No tenant record exists for this user",
                    details={'tenant': ["No tenant record exists for this user"]},
                )
            return tenant
        tenant = data.get('tenant')
        if tenant is None:
            raise ValidationError(details={'tenant': ["This field is required."]})
        return ensure_access(user, ResourceKind.TENANT, tenant)

    def _validate_assignee(self, assignee):
        if assignee is not None and assignee.role not in (UserRole.OWNER, UserRole.ADMIN):
            raise ValidationError(
                message="Complaints can only be assigned to owners or admins",
                details={'assigned_to': ["Must be an owner or admin"]},
            )

    def create_complaint(self, user, data: dict) -> Complaint:
        data = dict(data)
        comment = data.pop('comment', '') or 'Complaint registered'
        tenant = self._resolve_tenant(user, data)
        for field in ('tenant', 'property', 'room', 'status', 'response'):
            data.pop(field, None)
        if user.role == UserRole.TENANT:
            data.pop('assigned_to', None)
        self._validate_assignee(data.get('assigned_to'))

        with transaction.atomic():
            complaint = Complaint(tenant=tenant, property_id=tenant.property_id, room_id=tenant.room_id, **data)
            self.save_model(complaint)
            complaint.record_timeline(user=user, comment=comment)

        self.log_info("Complaint created", complaint_id=complaint.id, tenant_id=tenant.id)
        payload = self._payload(complaint)
        self.notify(NotificationEvent.COMPLAINT_NEW, property_audience(complaint.property_id), payload)
        return self.complaint_repo.get_by_id(complaint.id)

    def update_complaint(self, user, complaint_id, data: dict) -> Complaint:
        data = dict(data)
        comment = data.pop('comment', '')
        with transaction.atomic():
            current = self.get_complaint(user, complaint_id)

            new_tenant = data.pop('tenant', None)
            if new_tenant is not None and new_tenant.pk != current.tenant_id:
                raise ValidationError(
                    message="The tenant of a complaint cannot be changed",
                    details={'tenant': ["Cannot be changed"]},
                )
            if user.role == UserRole.TENANT:
                blocked = sorted(
                    field for field, value in data.items()
                    if field not in TENANT_EDITABLE_FIELDS and getattr(current, field) != value
                )
                if blocked:
                    raise PermissionDeniedError(
                        message="Tenants may only edit the details of their complaint",
                        details={field: ["Not editable by tenants"] for field in blocked},
                    )
            self._validate_assignee(data.get('assigned_to'))

            complaint = self.complaint_repo.get_for_update(complaint_id)
            new_status = data.pop('status', complaint.status)
            for field, value in data.items():
                setattr(complaint, field, value)
            self.save_model(complaint)
            status_changed = complaint.apply_status(new_status, user=user, comment=comment) is not None

        self.log_info("Complaint updated", complaint_id=complaint.id, status=complaint.status)
        payload = self._payload(complaint)
        self.notify(NotificationEvent.COMPLAINT_UPDATED, user_audience(complaint.tenant.user_id), payload)
        self.notify(NotificationEvent.COMPLAINT_UPDATED, property_audience(complaint.property_id), payload)
        if status_changed:
            self.email.send_complaint_update(complaint.tenant, complaint)
        return self.complaint_repo.get_by_id(complaint.id)

    def delete_complaint(self, user, complaint_id):
        complaint = self.get_complaint(user, complaint_id)
        self.complaint_repo.delete(complaint)
        self.log_info("Complaint deleted", complaint_id=complaint_id)

    def stats(self, user, queryset, property_id=None) -> dict:
        if property_id:
            prop = get_authorized(user, ResourceKind.PROPERTY, property_id)
            queryset = queryset.filter(property=prop)
        return self.complaint_repo.stats(queryset)

    def _payload(self, complaint):
        return {
            'complaint_id': complaint.id,
            'title': complaint.title,
            'status': complaint.status,
            'priority': complaint.priority,
            'tenant_id': complaint.tenant_id,
            'property_id': complaint.property_id,
        }
