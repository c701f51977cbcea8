"""Collaborator lifecycle, notifier delivery and scheduler wiring."""
from datetime import date, timedelta
from unittest import mock

import pytest
from django.apps import apps
from django.utils import timezone

from common import providers as providers_module
from common import scheduler
from common.notifications import InMemoryNotifier, LoggingNotifier, property_audience, role_audience, user_audience
from common.apps import running_tests
from core.constants import NoticeStatus, RoomStatus, TenantStatus, UserRole
from core.services import BaseService


class TestAudiences:
    def test_audience_strings(self):
        assert user_audience(5) == 'user:5'
        assert property_audience(7) == 'property:7'
        assert role_audience(UserRole.TENANT) == 'role:tenant'


class TestProviders:
    def test_build_uses_configured_notifier(self, settings):
        settings.NOTIFIER_BACKEND = 'common.notifications.InMemoryNotifier'
        built = providers_module.build_providers()
        assert isinstance(built.notifier, InMemoryNotifier)

    def test_default_notifier_logs(self, settings):
        if hasattr(settings, 'NOTIFIER_BACKEND'):
            del settings.NOTIFIER_BACKEND
        assert isinstance(providers_module.build_providers().notifier, LoggingNotifier)

    def test_init_is_idempotent_and_shutdown_clears(self, monkeypatch):
        monkeypatch.setattr(providers_module, '_providers', None)
        first = providers_module.init_providers()
        assert providers_module.init_providers() is first
        assert providers_module.get_providers() is first

        providers_module.shutdown_providers()
        assert providers_module._providers is None

    def test_shutdown_survives_notifier_error(self, monkeypatch, providers):
        notifier = mock.Mock()
        notifier.close.side_effect = RuntimeError('broken')
        providers.notifier = notifier
        monkeypatch.setattr(providers_module, '_providers', providers)

        providers_module.shutdown_providers()

        assert providers_module._providers is None


class TestBaseService:
    def test_services_default_to_process_providers(self, providers):
        assert BaseService().providers is providers

    def test_notify_failures_are_swallowed(self, providers):
        providers.notifier = mock.Mock()
        providers.notifier.notify.side_effect = ConnectionError('down')
        service = BaseService(providers)

        service.notify('notice:new', 'role:tenant', {'id': 1})

        providers.notifier.notify.assert_called_once_with('notice:new', 'role:tenant', {'id': 1})


class TestScheduler:
    @pytest.fixture(autouse=True)
    def reset_scheduler(self, monkeypatch):
        monkeypatch.setattr(scheduler, 'scheduler', None)
        yield
        scheduler.stop_scheduler()

    def test_start_registers_both_jobs(self, settings):
        settings.OCCUPANCY_RECONCILE_INTERVAL_MINUTES = 15
        with mock.patch.object(scheduler.BackgroundScheduler, 'start'):
            scheduler.start_scheduler()

        job_ids = {job.id for job in scheduler.scheduler.get_jobs()}
        assert job_ids == {'reconcile_occupancy', 'mark_overdue_payments'}

    def test_jobs_run_management_commands(self):
        with mock.patch.object(scheduler, 'call_command') as call_command:
            scheduler.reconcile_occupancy_job()
            scheduler.mark_overdue_payments_job()

        assert [c.args[0] for c in call_command.call_args_list] == ['reconcile_occupancy', 'mark_overdue_payments']

    def test_job_errors_are_logged(self):
        with mock.patch.object(scheduler, 'call_command', side_effect=RuntimeError('boom')):
            scheduler.reconcile_occupancy_job()


class TestAppRegistry:
    """Models with a `property` foreign key still expose their computed accessors"""

    @pytest.mark.parametrize('app_label, model_name', [
        ('properties', 'Property'),
        ('rooms', 'Room'),
        ('tenants', 'Tenant'),
        ('payments', 'Payment'),
        ('complaints', 'Complaint'),
        ('notices', 'Notice'),
    ])
    def test_models_load(self, app_label, model_name):
        model = apps.get_model(app_label, model_name)
        assert model._meta.get_field('property').is_relation

    def test_computed_accessors(self):
        Room = apps.get_model('rooms', 'Room')
        Tenant = apps.get_model('tenants', 'Tenant')
        Payment = apps.get_model('payments', 'Payment')
        Complaint = apps.get_model('complaints', 'Complaint')
        Notice = apps.get_model('notices', 'Notice')
        now = timezone.now()

        room = Room(capacity=2, current_occupancy=1, status=RoomStatus.AVAILABLE)
        assert room.is_available is True
        assert room.vacancies == 1

        tenant = Tenant(status=TenantStatus.ACTIVE, move_in_date=date(2024, 1, 1), move_out_date=date(2024, 3, 1))
        assert tenant.is_active is True
        assert tenant.days_stayed == 60
        assert tenant.months_stayed == 2

        assert Payment(due_date=date(2000, 1, 1)).is_past_due is True
        assert Complaint(created_at=now - timedelta(hours=5), resolved_at=now).resolution_time_hours == 5
        assert Notice(status=NoticeStatus.ACTIVE, valid_from=now - timedelta(days=1)).is_valid is True


class TestReadyHook:

    def test_running_tests_detected(self):
        assert running_tests() is True

    def test_no_exit_hook_under_tests(self):
        with mock.patch('common.apps.atexit.register') as register:
            apps.get_app_config('common').ready()
        register.assert_not_called()
