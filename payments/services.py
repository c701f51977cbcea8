"""
Payment service - Business logic layer for Payment domain.
"""
from django.db import transaction
from django.utils import timezone

from common.notifications import property_audience, user_audience
from core.access import ensure_access, get_authorized
from core.constants import NotificationEvent, PaymentStatus, ResourceKind, UserRole
from core.exceptions import PermissionDeniedError, ValidationError
from core.services import BaseService
from core.validators import PaymentValidator
from .models import Payment
from .repositories import PaymentRepository

# Fields a tenant may fill in on their own payment
TENANT_EDITABLE_FIELDS = {'payment_method', 'transaction_id', 'payment_date', 'notes'}

DUPLICATE_PAYMENT_MESSAGE = "Payment for this tenant and month already exists"


class PaymentService(BaseService):
    """Service for payment-related business logic"""

    def __init__(self, providers=None):
        super().__init__(providers)
        self.payment_repo = PaymentRepository()

    def get_payment(self, user, payment_id) -> Payment:
        return get_authorized(user, ResourceKind.PAYMENT, payment_id)

    def _resolve_tenant(self, user, data: dict):
        """Tenants always pay for themselves; owners must manage the tenant"""
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

    def create_payment(self, user, data: dict) -> Payment:
        data = dict(data)
        tenant = self._resolve_tenant(user, data)
        data.update(tenant=tenant, property_id=tenant.property_id, room_id=tenant.room_id, recorded_by=user)
        data.pop('property', None)
        data.pop('room', None)
        PaymentValidator.validate_total(data.get('amount'), data.get('late_fee'), data.get('discount'))

        payment = Payment(**data)
        self.save_model(payment, conflict_message=DUPLICATE_PAYMENT_MESSAGE)
        self.log_info("Payment recorded", payment_id=payment.id, tenant_id=tenant.id, month=str(payment.month))

        self._notify(NotificationEvent.PAYMENT_NEW, payment)
        return self.payment_repo.get_by_id(payment.id)

    def update_payment(self, user, payment_id, data: dict) -> Payment:
        data = dict(data)
        with transaction.atomic():
            current = self.get_payment(user, payment_id)

            new_tenant = data.pop('tenant', None)
            if new_tenant is not None and new_tenant.pk != current.tenant_id:
                raise ValidationError(
                    message="The tenant of a payment cannot be changed",
                    details={'tenant': ["Cannot be changed"]},
                )
            if user.role == UserRole.TENANT:
                blocked = sorted(
                    field for field, value in data.items()
                    if field not in TENANT_EDITABLE_FIELDS and getattr(current, field) != value
                )
                if blocked:
                    raise PermissionDeniedError(
                        message="Tenants may only add payment details",
                        details={field: ["Not editable by tenants"] for field in blocked},
                    )

            payment = self.payment_repo.get_for_update(payment_id)
            for field, value in data.items():
                setattr(payment, field, value)
            PaymentValidator.validate_total(payment.amount, payment.late_fee, payment.discount)
            if payment.status == PaymentStatus.PAID and not payment.payment_date:
                payment.payment_date = timezone.localdate()
            self.save_model(payment, conflict_message=DUPLICATE_PAYMENT_MESSAGE)

        self.log_info("Payment updated", payment_id=payment.id, status=payment.status)
        self._notify(NotificationEvent.PAYMENT_UPDATED, payment)
        return self.payment_repo.get_by_id(payment.id)

    def delete_payment(self, user, payment_id):
        if user.role == UserRole.TENANT:
            raise PermissionDeniedError("Tenants cannot delete payments")
        payment = self.get_payment(user, payment_id)
        self.payment_repo.delete(payment)
        self.log_info("Payment deleted", payment_id=payment_id)

    def summary(self, queryset) -> list:
        return self.payment_repo.summary(queryset)

    def monthly_revenue(self, user, property_id, year=None) -> dict:
        if not property_id:
            raise ValidationError(details={'property': ["This query parameter is required."]})
        try:
            year = int(year) if year else timezone.localdate().year
        except (TypeError, ValueError):
            raise ValidationError(details={'year': ["A valid year is required."]})
        prop = get_authorized(user, ResourceKind.PROPERTY, property_id)
        return {
            'property': prop.id,
            'year': year,
            'months': self.payment_repo.monthly_revenue(prop.id, year),
        }

    def mark_overdue(self, today=None, dry_run=False) -> list:
        """Flip past-due pending payments to overdue; returns the affected payments"""
        today = today or timezone.localdate()
        payments = list(self.payment_repo.past_due_pending(today))
        if not dry_run and payments:
            with transaction.atomic():
                Payment.objects.filter(pk__in=[p.pk for p in payments]).update(
                    status=PaymentStatus.OVERDUE, updated_at=timezone.now()
                )
            for payment in payments:
                payment.status = PaymentStatus.OVERDUE
            self.log_info("Payments marked overdue", count=len(payments))
        return payments

    def send_reminders(self, payments) -> int:
        sent = 0
        for payment in payments:
            if self.email.send_payment_reminder(payment.tenant, payment):
                sent += 1
        return sent

    def _notify(self, event, payment):
        payload = {
            'payment_id': payment.id,
            'tenant_id': payment.tenant_id,
            'month': payment.month.isoformat(),
            'total_amount': str(payment.total_amount),
            'status': payment.status,
        }
        self.notify(event, property_audience(payment.property_id), payload)
        self.notify(event, user_audience(payment.tenant.user_id), payload)
