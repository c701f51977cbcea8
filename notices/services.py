"""
Notice service - Business logic layer for Notice domain.
"""
from django.db import transaction

from common.notifications import property_audience, role_audience
from core.access import ensure_access
from core.constants import NoticeAudience, NotificationEvent, Priority, ResourceKind, TenantStatus, UserRole
from core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from core.services import BaseService
from core.validators import DateRangeValidator
from tenants.models import Tenant
from .models import Notice
from .repositories import NoticeRepository


class NoticeService(BaseService):
    """Service for notice-related business logic"""

    def __init__(self, providers=None):
        super().__init__(providers)
        self.notice_repo = NoticeRepository()

    def list_notices(self, user, include_expired=False):
        queryset = self.notice_repo.visible_to(user)
        if not include_expired or user.role == UserRole.TENANT:
            queryset = queryset.active()
        return queryset.by_priority()

    def get_notice(self, user, notice_id) -> Notice:
        notice = self.notice_repo.get_by_id(notice_id)
        if notice is None:
            raise NotFoundError(resource_type="Notice", resource_id=notice_id)
        if not self.notice_repo.visible_to(user).filter(pk=notice.pk).exists():
            raise PermissionDeniedError("Not authorized to access this notice")
        return notice

    def _can_manage(self, user, notice) -> bool:
        if user.role == UserRole.ADMIN:
            return True
        if notice.created_by_id == user.id:
            return True
        return notice.property is not None and notice.property.owner_id == user.id

    def _check_scope(self, user, notice):
        """Owners post to their own properties; only admins post global notices"""
        if notice.property is None:
            if user.role != UserRole.ADMIN:
                raise ValidationError(
                    message="A property is required",
                    details={'property': ["Only admins can post notices for all properties"]},
                )
        else:
            ensure_access(user, ResourceKind.PROPERTY, notice.property)
        if notice.target_audience == NoticeAudience.SPECIFIC_PROPERTY and notice.property is None:
            raise ValidationError(details={'property': ["Required for property notices"]})
        if notice.target_audience == NoticeAudience.SPECIFIC_FLOOR and not notice.target_floor:
            raise ValidationError(details={'target_floor': ["Required for floor notices"]})
        DateRangeValidator.validate(notice.valid_from, notice.valid_till, 'valid_till', 'Valid till')

    def create_notice(self, user, data: dict) -> Notice:
        if user.role == UserRole.TENANT:
            raise PermissionDeniedError("Tenants cannot post notices")
        data = dict(data)
        data.pop('created_by', None)
        notice = Notice(created_by=user, **data)
        self._check_scope(user, notice)
        self.save_model(notice)
        self.log_info(f"Notice created: {notice.title}", notice_id=notice.id, property_id=notice.property_id)

        if notice.is_valid:
            self._announce(notice)
        return notice

    def update_notice(self, user, notice_id, data: dict) -> Notice:
        with transaction.atomic():
            current = self.get_notice(user, notice_id)
            if not self._can_manage(user, current):
                raise PermissionDeniedError("Not authorized to update this notice")
            notice = self.notice_repo.get_for_update(notice_id)
            for field, value in data.items():
                if field == 'created_by':
                    continue
                setattr(notice, field, value)
            self._check_scope(user, notice)
            self.save_model(notice)
        self.log_info(f"Notice updated: {notice.title}", notice_id=notice.id)
        return notice

    def delete_notice(self, user, notice_id):
        notice = self.get_notice(user, notice_id)
        if not self._can_manage(user, notice):
            raise PermissionDeniedError("Not authorized to delete this notice")
        self.notice_repo.delete(notice)
        self.log_info("Notice deleted", notice_id=notice_id)

    def mark_read(self, user, notice_id):
        notice = self.get_notice(user, notice_id)
        return notice.mark_as_read(user)

    def _announce(self, notice):
        payload = {
            'notice_id': notice.id,
            'title': notice.title,
            'priority': notice.priority,
            'property_id': notice.property_id,
        }
        if notice.property_id:
            audience = property_audience(notice.property_id)
        else:
            audience = role_audience(UserRole.TENANT)
        self.notify(NotificationEvent.NOTICE_NEW, audience, payload)

        if notice.priority == Priority.URGENT:
            recipients = Tenant.objects.filter(status=TenantStatus.ACTIVE).select_related('user')
            if notice.property_id:
                recipients = recipients.filter(property_id=notice.property_id)
            if notice.target_audience == NoticeAudience.SPECIFIC_FLOOR:
                recipients = recipients.filter(room__floor=notice.target_floor)
            for tenant in recipients:
                self.email.send_notice_alert(tenant.user, notice)
