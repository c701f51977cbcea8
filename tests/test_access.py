"""Authorization resolver: ownership chain, existence before permission."""
from datetime import date

import pytest

from complaints.models import Complaint
from core.access import check_access, get_authorized, resolve_access
from core.constants import ResourceKind
from core.exceptions import NotFoundError, PermissionDeniedError
from payments.models import Payment

pytestmark = pytest.mark.django_db


@pytest.fixture
def payment(tenant):
    return Payment.objects.create(
        tenant=tenant, property=tenant.property, room=tenant.room,
        month=date(2024, 3, 1), amount=8000, due_date=date(2099, 3, 5),
    )


@pytest.fixture
def complaint(tenant):
    return Complaint.objects.create(
        tenant=tenant, property=tenant.property, room=tenant.room,
        title='Leaking tap', description='Bathroom tap leaks', category='plumbing',
    )


@pytest.fixture
def resources(prop, room, tenant, payment, complaint):
    return {
        ResourceKind.PROPERTY: prop,
        ResourceKind.ROOM: room,
        ResourceKind.TENANT: tenant,
        ResourceKind.PAYMENT: payment,
        ResourceKind.COMPLAINT: complaint,
    }


class TestAccessMatrix:

    @pytest.mark.parametrize('kind', ResourceKind.ALL)
    def test_admin_always_allowed(self, admin_user, resources, kind):
        assert check_access(admin_user, kind, resources[kind])

    @pytest.mark.parametrize('kind', ResourceKind.ALL)
    def test_owner_of_property_allowed(self, owner, resources, kind):
        assert check_access(owner, kind, resources[kind])

    @pytest.mark.parametrize('kind', ResourceKind.ALL)
    def test_other_owner_denied(self, other_owner, resources, kind):
        assert not check_access(other_owner, kind, resources[kind])

    @pytest.mark.parametrize('kind, allowed', [
        (ResourceKind.PROPERTY, False),
        (ResourceKind.ROOM, False),
        (ResourceKind.TENANT, True),
        (ResourceKind.PAYMENT, True),
        (ResourceKind.COMPLAINT, True),
    ])
    def test_tenant_reaches_only_own_records(self, tenant_user, resources, kind, allowed):
        assert check_access(tenant_user, kind, resources[kind]) is allowed

    @pytest.mark.parametrize('kind', [ResourceKind.TENANT, ResourceKind.PAYMENT, ResourceKind.COMPLAINT])
    def test_unrelated_tenant_denied(self, second_tenant_user, resources, kind):
        assert not check_access(second_tenant_user, kind, resources[kind])


class TestResolution:

    def test_missing_resource_is_not_found(self, other_owner):
        decision = resolve_access(other_owner, ResourceKind.PROPERTY, 999999)
        assert not decision.allowed
        assert decision.not_found

    def test_not_found_before_forbidden(self, other_owner):
        with pytest.raises(NotFoundError):
            get_authorized(other_owner, ResourceKind.COMPLAINT, 424242)

    def test_forbidden_when_exists(self, other_owner, prop):
        with pytest.raises(PermissionDeniedError) as exc:
            get_authorized(other_owner, ResourceKind.PROPERTY, prop.id)
        assert exc.value.message == "Not authorized to access this property"

    def test_non_numeric_id_is_not_found(self, owner):
        with pytest.raises(NotFoundError):
            get_authorized(owner, ResourceKind.ROOM, 'abc')

    def test_allowed_returns_resource(self, owner, room):
        assert get_authorized(owner, ResourceKind.ROOM, str(room.id)) == room

    def test_unknown_kind_rejected(self, owner):
        with pytest.raises(ValueError):
            resolve_access(owner, 'building', 1)


class TestEndpointAccess:

    def test_other_owner_gets_403(self, client_for, other_owner, prop):
        response = client_for(other_owner).get(f'/api/properties/{prop.id}')
        assert response.status_code == 403
        assert response.data['success'] is False

    def test_missing_property_gets_404(self, client_for, owner):
        response = client_for(owner).get('/api/properties/999999')
        assert response.status_code == 404
        assert response.data['message'] == "Property not found"

    def test_tenant_cannot_list_properties(self, client_for, tenant_user):
        response = client_for(tenant_user).get('/api/properties')
        assert response.status_code == 403

    def test_unauthenticated_request_is_rejected(self, api_client):
        response = api_client.get('/api/rooms')
        assert response.status_code == 401
        assert response.data['success'] is False

    def test_owner_lists_only_own_rooms(self, client_for, owner, other_owner, room):
        from tests.conftest import make_property, make_room
        make_room(make_property(other_owner, name='Elsewhere'), room_number='9')
        response = client_for(owner).get('/api/rooms')
        assert response.status_code == 200
        assert [r['id'] for r in response.data['data']] == [room.id]

    def test_tenant_sees_own_tenant_record(self, client_for, tenant_user, tenant):
        response = client_for(tenant_user).get('/api/tenants/me')
        assert response.status_code == 200
        assert response.data['data']['id'] == tenant.id

    def test_tenant_list_scoped_to_self(self, client_for, owner, tenant, second_tenant_user, room, providers):
        from tenants.services import TenantService
        from tests.conftest import tenant_data
        TenantService(providers).create_tenant(owner, tenant_data(second_tenant_user, room))
        response = client_for(tenant.user).get('/api/tenants')
        assert [t['id'] for t in response.data['data']] == [tenant.id]
