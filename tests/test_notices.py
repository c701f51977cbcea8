"""Notices: validity window, priority ordering, visibility, read receipts."""
from datetime import timedelta

import pytest
from django.utils import timezone

from core.constants import NoticeStatus, Priority
from core.exceptions import PermissionDeniedError, ValidationError
from notices.models import Notice, NoticeRead
from notices.services import NoticeService
from tests.conftest import make_property

pytestmark = pytest.mark.django_db


def make_notice(author, prop=None, **extra):
    data = {'title': 'Water cut', 'content': 'No water 10am-2pm', 'category': 'maintenance'}
    data.update(extra)
    return Notice.objects.create(created_by=author, property=prop, **data)


class TestValidity:

    def test_window(self, owner, prop):
        now = timezone.now()
        notice = make_notice(owner, prop, valid_from=now - timedelta(days=1), valid_till=now + timedelta(days=1))
        assert notice.is_valid_at(now)
        assert not notice.is_valid_at(now + timedelta(days=2))
        assert not notice.is_valid_at(now - timedelta(days=2))

    def test_open_ended(self, owner, prop):
        notice = make_notice(owner, prop)
        assert notice.is_valid_at(timezone.now() + timedelta(days=3650))

    def test_draft_is_never_valid(self, owner, prop):
        assert not make_notice(owner, prop, status=NoticeStatus.DRAFT).is_valid

    def test_active_queryset_matches_is_valid(self, owner, prop):
        now = timezone.now()
        valid = make_notice(owner, prop)
        make_notice(owner, prop, valid_till=now - timedelta(hours=1))
        make_notice(owner, prop, valid_from=now + timedelta(hours=1))
        make_notice(owner, prop, status=NoticeStatus.ARCHIVED)
        assert list(Notice.objects.active()) == [valid]

    def test_by_priority_orders_urgent_first(self, owner, prop):
        low = make_notice(owner, prop, priority=Priority.LOW)
        urgent = make_notice(owner, prop, priority=Priority.URGENT)
        medium = make_notice(owner, prop, priority=Priority.MEDIUM)
        assert list(Notice.objects.by_priority()) == [urgent, medium, low]


class TestVisibility:

    def test_tenant_sees_global_and_own_property(self, admin_user, owner, other_owner, prop, tenant,
                                                 providers):
        own = make_notice(owner, prop)
        global_notice = make_notice(admin_user)
        make_notice(other_owner, make_property(other_owner, name='Elsewhere'))

        visible = set(NoticeService(providers).list_notices(tenant.user))
        assert visible == {own, global_notice}

    def test_tenant_cannot_open_foreign_notice(self, other_owner, tenant, providers):
        foreign = make_notice(other_owner, make_property(other_owner, name='Elsewhere'))
        with pytest.raises(PermissionDeniedError):
            NoticeService(providers).get_notice(tenant.user, foreign.id)


class TestNoticeService:

    def test_owner_creates_property_notice(self, owner, prop, providers, notifier):
        notice = NoticeService(providers).create_notice(owner, {
            'property': prop, 'title': 'Pest control', 'content': 'Saturday', 'category': 'maintenance',
            'created_by': None,
        })
        assert notice.created_by == owner
        assert ('notice:new', f'property:{prop.id}') in {(e, a) for e, a, _ in notifier.events}

    def test_owner_cannot_post_global_notice(self, owner, providers):
        with pytest.raises(ValidationError):
            NoticeService(providers).create_notice(owner, {
                'title': 'Hello', 'content': 'World', 'category': 'general',
            })

    def test_owner_cannot_post_to_foreign_property(self, other_owner, prop, providers):
        with pytest.raises(PermissionDeniedError):
            NoticeService(providers).create_notice(other_owner, {
                'property': prop, 'title': 'Hello', 'content': 'World', 'category': 'general',
            })

    def test_tenant_cannot_post(self, tenant_user, prop, providers):
        with pytest.raises(PermissionDeniedError):
            NoticeService(providers).create_notice(tenant_user, {
                'property': prop, 'title': 'Hello', 'content': 'World', 'category': 'general',
            })

    def test_urgent_notice_emails_active_tenants(self, owner, prop, tenant, providers):
        NoticeService(providers).create_notice(owner, {
            'property': prop, 'title': 'Fire drill', 'content': 'Now', 'category': 'safety',
            'priority': Priority.URGENT,
        })
        providers.email.send_notice_alert.assert_called_once()

    def test_valid_till_before_valid_from_rejected(self, owner, prop, providers):
        now = timezone.now()
        with pytest.raises(ValidationError):
            NoticeService(providers).create_notice(owner, {
                'property': prop, 'title': 'x', 'content': 'y', 'category': 'general',
                'valid_from': now, 'valid_till': now - timedelta(days=1),
            })

    def test_mark_read_is_idempotent(self, owner, prop, tenant, providers):
        notice = make_notice(owner, prop)
        service = NoticeService(providers)
        first = service.mark_read(tenant.user, notice.id)
        second = service.mark_read(tenant.user, notice.id)
        assert first.pk == second.pk
        assert NoticeRead.objects.filter(notice=notice).count() == 1


class TestNoticeEndpoints:

    def test_list_returns_only_valid_notices(self, client_for, owner, prop, tenant):
        valid = make_notice(owner, prop, priority=Priority.HIGH)
        make_notice(owner, prop, valid_till=timezone.now() - timedelta(days=1))
        response = client_for(tenant.user).get('/api/notices')
        assert response.status_code == 200
        assert [n['id'] for n in response.data['data']] == [valid.id]

    def test_read_endpoint(self, client_for, owner, prop, tenant):
        notice = make_notice(owner, prop)
        response = client_for(tenant.user).post(f'/api/notices/{notice.id}/read')
        assert response.status_code == 200
        assert response.data['data']['notice'] == notice.id
