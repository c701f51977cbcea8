"""
Shared fixtures: users for each role, a property with rooms, tenants,
and collaborators that record instead of delivering.
"""
from datetime import date
from decimal import Decimal
from unittest import mock

import pytest
from rest_framework.test import APIClient

from common.email import EmailService
from common.notifications import InMemoryNotifier
from common.providers import ServiceProviders
from common.storage import FileStorageService
from core.constants import UserRole
from properties.models import Property
from rooms.models import Room
from tenants.models import Tenant
from users.models import User

PASSWORD = 'secret123'


@pytest.fixture
def notifier():
    return InMemoryNotifier()


@pytest.fixture
def providers(notifier):
    return ServiceProviders(
        email=mock.create_autospec(EmailService, instance=True),
        storage=mock.create_autospec(FileStorageService, instance=True),
        notifier=notifier,
    )


@pytest.fixture(autouse=True)
def process_providers(monkeypatch, providers):
    """Services built by views pick up the recording providers"""
    monkeypatch.setattr('common.providers._providers', providers)
    return providers


def make_user(email, role, name=None, password=PASSWORD, **extra):
    return User.objects.create_user(email=email, password=password, name=name or email.split('@')[0], role=role, **extra)


@pytest.fixture
def admin_user(db):
    return make_user('admin@example.com', UserRole.ADMIN)


@pytest.fixture
def owner(db):
    return make_user('owner@example.com', UserRole.OWNER)


@pytest.fixture
def other_owner(db):
    return make_user('other@example.com', UserRole.OWNER)


@pytest.fixture
def tenant_user(db):
    return make_user('tenant@example.com', UserRole.TENANT)


@pytest.fixture
def second_tenant_user(db):
    return make_user('tenant2@example.com', UserRole.TENANT)


def make_property(owner, name='Green Nest'):
    return Property.objects.create(
        owner=owner,
        name=name,
        property_type='co-living',
        street='12 MG Road',
        city='Bengaluru',
        state='Karnataka',
        pincode='560001',
        contact_person_name='Ravi',
        contact_phone='9876543210',
    )


def make_room(prop, room_number='101', capacity=2, **extra):
    return Room.objects.create(
        property=prop,
        room_number=room_number,
        floor='1',
        room_type='double',
        capacity=capacity,
        rent=Decimal('8000'),
        **extra
    )


def tenant_data(user, room, **extra):
    data = {
        'user': user,
        'room': room,
        'full_name': user.name,
        'email': user.email,
        'phone': '9123456780',
        'emergency_contact_name': 'Asha',
        'emergency_contact_relation': 'Mother',
        'emergency_contact_phone': '9123456781',
        'id_proof_type': 'aadhar',
        'id_proof_number': '1234-5678-9012',
        'occupation_type': 'student',
        'move_in_date': date(2024, 1, 1),
        'rent_amount': Decimal('8000'),
    }
    data.update(extra)
    return data


@pytest.fixture
def prop(owner):
    return make_property(owner)


@pytest.fixture
def room(prop):
    return make_room(prop)


@pytest.fixture
def tenant(owner, room, tenant_user, providers):
    from tenants.services import TenantService
    return TenantService(providers).create_tenant(owner, tenant_data(tenant_user, room))


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for():
    """APIClient authenticated as the given user"""
    def _client(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return _client
