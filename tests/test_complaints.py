"""Complaints: timeline history, resolution stamps, tenant restrictions."""
import pytest

from complaints.models import ComplaintTimelineEntry
from complaints.services import ComplaintService
from core.constants import ComplaintStatus
from core.exceptions import PermissionDeniedError, ValidationError

pytestmark = pytest.mark.django_db

COMPLAINT = {'title': 'No hot water', 'description': 'Geyser not working', 'category': 'electrical'}


@pytest.fixture
def service(providers):
    return ComplaintService(providers)


@pytest.fixture
def complaint(service, tenant_user, tenant):
    return service.create_complaint(tenant_user, dict(COMPLAINT))


class TestComplaintLifecycle:

    def test_create_records_open_entry(self, complaint, tenant, notifier):
        assert complaint.tenant_id == tenant.id
        assert complaint.property_id == tenant.property_id
        assert complaint.room_id == tenant.room_id
        assert [e.status for e in complaint.timeline.all()] == [ComplaintStatus.OPEN]
        assert ('complaint:new', f'property:{tenant.property_id}') in {
            (event, audience) for event, audience, _ in notifier.events
        }

    def test_each_status_change_appends_entry(self, service, owner, complaint):
        service.update_complaint(owner, complaint.id, {'status': ComplaintStatus.IN_PROGRESS})
        service.update_complaint(owner, complaint.id, {'status': ComplaintStatus.RESOLVED, 'comment': 'Fixed'})
        entries = list(ComplaintTimelineEntry.objects.filter(complaint=complaint))
        assert [e.status for e in entries] == [
            ComplaintStatus.OPEN, ComplaintStatus.IN_PROGRESS, ComplaintStatus.RESOLVED
        ]
        assert entries[-1].comment == 'Fixed'
        assert entries[-1].updated_by == owner

    def test_unchanged_status_adds_no_entry(self, service, owner, complaint):
        service.update_complaint(owner, complaint.id, {'response': 'Looking into it'})
        assert ComplaintTimelineEntry.objects.filter(complaint=complaint).count() == 1

    def test_resolving_stamps_and_reopening_clears(self, service, owner, complaint):
        resolved = service.update_complaint(owner, complaint.id, {'status': ComplaintStatus.RESOLVED})
        assert resolved.resolved_at is not None
        assert resolved.resolved_by == owner
        assert resolved.resolution_time_hours == 0

        reopened = service.update_complaint(owner, complaint.id, {'status': ComplaintStatus.OPEN})
        assert reopened.resolved_at is None
        assert reopened.resolved_by is None

    def test_status_change_emails_tenant(self, service, owner, complaint, providers):
        service.update_complaint(owner, complaint.id, {'status': ComplaintStatus.IN_PROGRESS})
        assert providers.email.send_complaint_update.call_count == 1

    def test_timeline_entries_are_immutable(self, complaint):
        entry = ComplaintTimelineEntry.objects.filter(complaint=complaint).first()
        entry.comment = 'edited'
        with pytest.raises(ValueError):
            entry.save()
        with pytest.raises(ValueError):
            entry.delete()
        assert ComplaintTimelineEntry.objects.filter(pk=entry.pk).exists()


class TestComplaintRestrictions:

    def test_tenant_cannot_change_status(self, service, tenant_user, complaint):
        with pytest.raises(PermissionDeniedError):
            service.update_complaint(tenant_user, complaint.id, {'status': ComplaintStatus.CLOSED})

    def test_tenant_may_edit_details(self, service, tenant_user, complaint):
        updated = service.update_complaint(tenant_user, complaint.id, {'priority': 'high'})
        assert updated.priority == 'high'

    def test_assignee_must_be_owner_or_admin(self, service, owner, second_tenant_user, complaint):
        with pytest.raises(ValidationError):
            service.update_complaint(owner, complaint.id, {'assigned_to': second_tenant_user})

    def test_other_owner_cannot_see(self, service, other_owner, complaint):
        with pytest.raises(PermissionDeniedError):
            service.get_complaint(other_owner, complaint.id)


class TestComplaintStats:

    def test_stats_endpoint(self, client_for, owner, complaint, service):
        service.update_complaint(owner, complaint.id, {'status': ComplaintStatus.RESOLVED})
        response = client_for(owner).get('/api/complaints/stats', {'property': complaint.property_id})
        assert response.status_code == 200
        data = response.data['data']
        assert data['total'] == 1
        assert data['by_status'][ComplaintStatus.RESOLVED] == 1
        assert data['by_status'][ComplaintStatus.OPEN] == 0
        assert data['by_category'] == [{'category': 'electrical', 'count': 1, 'open': 0, 'resolved': 1}]

    def test_stats_for_foreign_property_forbidden(self, client_for, other_owner, complaint):
        response = client_for(other_owner).get('/api/complaints/stats', {'property': complaint.property_id})
        assert response.status_code == 403
