"""Payments: derived totals, uniqueness per tenant and month, overdue sweep."""
from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.core.management import call_command
from django.utils import timezone

from core.constants import PaymentStatus
from core.exceptions import ConflictError, PermissionDeniedError, ValidationError
from payments.models import Payment
from payments.serializers import parse_month
from payments.services import PaymentService

pytestmark = pytest.mark.django_db

FUTURE_DUE = date(2099, 1, 5)


def payment_data(tenant, **extra):
    data = {'tenant': tenant, 'month': date(2024, 3, 15), 'amount': Decimal('8000'), 'due_date': FUTURE_DUE}
    data.update(extra)
    return data


class TestPaymentModel:

    def test_total_is_derived(self, tenant):
        payment = Payment.objects.create(
            tenant=tenant, property=tenant.property, room=tenant.room, month=date(2024, 3, 1),
            amount=Decimal('8000'), late_fee=Decimal('200'), discount=Decimal('500'), due_date=FUTURE_DUE,
        )
        assert payment.total_amount == Decimal('7700')

        payment.late_fee = Decimal('0')
        payment.save(update_fields=['late_fee'])
        payment.refresh_from_db()
        assert payment.total_amount == Decimal('7500')

    def test_month_normalised_to_first_day(self, tenant):
        payment = Payment.objects.create(
            tenant=tenant, property=tenant.property, room=tenant.room,
            month=date(2024, 3, 20), amount=100, due_date=FUTURE_DUE,
        )
        assert payment.month == date(2024, 3, 1)

    def test_pending_past_due_saved_as_overdue(self, tenant):
        payment = Payment.objects.create(
            tenant=tenant, property=tenant.property, room=tenant.room, month=date(2024, 3, 1),
            amount=100, due_date=timezone.localdate() - timedelta(days=1),
        )
        assert payment.status == PaymentStatus.OVERDUE

    def test_paid_past_due_stays_paid(self, tenant):
        payment = Payment.objects.create(
            tenant=tenant, property=tenant.property, room=tenant.room, month=date(2024, 3, 1),
            amount=100, due_date=date(2020, 1, 1), status=PaymentStatus.PAID,
        )
        assert payment.status == PaymentStatus.PAID


class TestPaymentService:

    def test_create_derives_property_room_and_recorder(self, owner, tenant, providers, notifier):
        payment = PaymentService(providers).create_payment(owner, payment_data(tenant))
        assert payment.property_id == tenant.property_id
        assert payment.room_id == tenant.room_id
        assert payment.recorded_by == owner
        events = {(event, audience) for event, audience, _ in notifier.events}
        assert ('payment:new', f'property:{tenant.property_id}') in events
        assert ('payment:new', f'user:{tenant.user_id}') in events

    def test_duplicate_month_is_conflict(self, owner, tenant, providers):
        service = PaymentService(providers)
        service.create_payment(owner, payment_data(tenant, month=date(2024, 3, 1)))
        with pytest.raises(ConflictError) as exc:
            service.create_payment(owner, payment_data(tenant, month=date(2024, 3, 28)))
        assert exc.value.message == "Payment for this tenant and month already exists"

    def test_discount_cannot_exceed_total(self, owner, tenant, providers):
        with pytest.raises(ValidationError):
            PaymentService(providers).create_payment(owner, payment_data(tenant, discount=Decimal('9000')))

    def test_tenant_pays_for_self(self, tenant_user, tenant, providers):
        payment = PaymentService(providers).create_payment(tenant_user, {
            'month': date(2024, 4, 1), 'amount': Decimal('8000'), 'due_date': FUTURE_DUE,
        })
        assert payment.tenant_id == tenant.id

    def test_other_owner_cannot_bill_tenant(self, other_owner, tenant, providers):
        with pytest.raises(PermissionDeniedError):
            PaymentService(providers).create_payment(other_owner, payment_data(tenant))

    def test_tenant_may_only_fill_payment_details(self, owner, tenant_user, tenant, providers):
        service = PaymentService(providers)
        payment = service.create_payment(owner, payment_data(tenant))
        updated = service.update_payment(tenant_user, payment.id, {'transaction_id': 'UPI-123'})
        assert updated.transaction_id == 'UPI-123'
        with pytest.raises(PermissionDeniedError):
            service.update_payment(tenant_user, payment.id, {'amount': Decimal('1')})

    def test_tenant_cannot_delete(self, owner, tenant_user, tenant, providers):
        service = PaymentService(providers)
        payment = service.create_payment(owner, payment_data(tenant))
        with pytest.raises(PermissionDeniedError):
            service.delete_payment(tenant_user, payment.id)

    def test_marking_paid_stamps_payment_date(self, owner, tenant, providers):
        service = PaymentService(providers)
        payment = service.create_payment(owner, payment_data(tenant))
        updated = service.update_payment(owner, payment.id, {'status': PaymentStatus.PAID})
        assert updated.payment_date == timezone.localdate()

    def test_monthly_revenue(self, owner, tenant, providers):
        service = PaymentService(providers)
        service.create_payment(owner, payment_data(
            tenant, month=date(2024, 1, 1), status=PaymentStatus.PAID, payment_date=date(2024, 1, 3)
        ))
        service.create_payment(owner, payment_data(
            tenant, month=date(2024, 2, 1), status=PaymentStatus.PAID, payment_date=date(2024, 2, 4)
        ))
        service.create_payment(owner, payment_data(tenant, month=date(2024, 3, 1)))

        data = service.monthly_revenue(owner, tenant.property_id, '2024')
        assert data['year'] == 2024
        assert [(row['month'], row['revenue']) for row in data['months']] == [
            (1, Decimal('8000')), (2, Decimal('8000'))
        ]

    def test_monthly_revenue_requires_property(self, owner, providers):
        with pytest.raises(ValidationError):
            PaymentService(providers).monthly_revenue(owner, None)


class TestOverdueSweep:

    def _stale_pending(self, tenant):
        payment = Payment.objects.create(
            tenant=tenant, property=tenant.property, room=tenant.room,
            month=date(2024, 5, 1), amount=100, due_date=FUTURE_DUE,
        )
        Payment.objects.filter(pk=payment.pk).update(due_date=date(2024, 5, 5))
        return payment

    def test_mark_overdue(self, tenant, providers):
        payment = self._stale_pending(tenant)
        marked = PaymentService(providers).mark_overdue()
        assert [p.pk for p in marked] == [payment.pk]
        payment.refresh_from_db()
        assert payment.status == PaymentStatus.OVERDUE

    def test_dry_run_changes_nothing(self, tenant, providers):
        payment = self._stale_pending(tenant)
        PaymentService(providers).mark_overdue(dry_run=True)
        payment.refresh_from_db()
        assert payment.status == PaymentStatus.PENDING

    def test_command_sends_reminders(self, tenant, providers):
        self._stale_pending(tenant)
        call_command('mark_overdue_payments', '--remind')
        assert providers.email.send_payment_reminder.call_count == 1


class TestPaymentEndpoints:

    def test_create_and_summary(self, client_for, owner, tenant):
        client = client_for(owner)
        response = client.post('/api/payments', {
            'tenant': tenant.id, 'month': '2024-03-01', 'amount': '8000.00',
            'late_fee': '100.00', 'due_date': '2099-03-05', 'total_amount': '1.00',
        }, format='json')
        assert response.status_code == 201
        assert response.data['data']['total_amount'] == '8100.00'

        summary = client.get('/api/payments/summary')
        assert summary.status_code == 200
        assert summary.data['data'] == [{'status': 'pending', 'count': 1, 'total_amount': Decimal('8100.00')}]

    def test_duplicate_returns_409(self, client_for, owner, tenant):
        client = client_for(owner)
        body = {'tenant': tenant.id, 'month': '2024-03-01', 'amount': '8000', 'due_date': '2099-03-05'}
        assert client.post('/api/payments', body, format='json').status_code == 201
        response = client.post('/api/payments', body, format='json')
        assert response.status_code == 409
        assert response.data['success'] is False

    def test_year_month_input_records_overdue_payment(self, client_for, owner, tenant):
        response = client_for(owner).post('/api/payments', {
            'tenant': tenant.id, 'month': '2024-01', 'amount': '10000',
            'late_fee': '500', 'discount': '0', 'due_date': '2024-01-05',
        }, format='json')
        assert response.status_code == 201
        data = response.data['data']
        assert data['month'] == '2024-01-01'
        assert data['total_amount'] == '10500.00'
        assert data['status'] == PaymentStatus.OVERDUE

    def test_invalid_month_is_400(self, client_for, owner, tenant):
        response = client_for(owner).post('/api/payments', {
            'tenant': tenant.id, 'month': 'January', 'amount': '10000', 'due_date': '2099-01-05',
        }, format='json')
        assert response.status_code == 400
        assert 'month' in response.data['errors']

    def test_filter_by_year_month(self, client_for, owner, tenant, providers):
        service = PaymentService(providers)
        service.create_payment(owner, payment_data(tenant, month=date(2024, 1, 1)))
        service.create_payment(owner, payment_data(tenant, month=date(2024, 2, 1)))
        client = client_for(owner)

        response = client.get('/api/payments', {'month': '2024-01'})
        assert response.status_code == 200
        assert [row['month'] for row in response.data['data']] == ['2024-01-01']

        assert client.get('/api/payments', {'month': '2024-13'}).status_code == 400


class TestParseMonth:

    @pytest.mark.parametrize('value, expected', [
        ('2024-01', date(2024, 1, 1)),
        ('2024-01-20', date(2024, 1, 1)),
        (' 2023-12 ', date(2023, 12, 1)),
        (date(2024, 6, 30), date(2024, 6, 1)),
    ])
    def test_accepted_forms(self, value, expected):
        assert parse_month(value) == expected

    @pytest.mark.parametrize('value', ['2024', '01-2024', '2024-00', 'soon'])
    def test_rejected_forms(self, value):
        with pytest.raises(ValueError):
            parse_month(value)
