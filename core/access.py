"""
Authorization resolver.

Decides whether a user may read/write a Property, Room, Tenant, Payment or
Complaint by walking the ownership chain Property -> Room -> Tenant ->
(Payment | Complaint).

Access Rules:
- Existence is checked first: a missing resource is NotFound, never Forbidden
- ADMIN: always allowed
- Property: allowed iff the user owns it
- Room: allowed iff the user owns the room's property
- Tenant: allowed iff the user owns the property or is the tenant's user
- Payment / Complaint: allowed iff the user owns the linked property or is
  the linked tenant's user
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from core.constants import ResourceKind, UserRole
from core.exceptions import NotFoundError, PermissionDeniedError


DENIAL_NOT_FOUND = 'not_found'
DENIAL_FORBIDDEN = 'forbidden'

RESOURCE_LABELS = {
    ResourceKind.PROPERTY: 'Property',
    ResourceKind.ROOM: 'Room',
    ResourceKind.TENANT: 'Tenant',
    ResourceKind.PAYMENT: 'Payment',
    ResourceKind.COMPLAINT: 'Complaint',
}


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    resource: Optional[Any] = None
    denial: Optional[str] = None

    @property
    def not_found(self):
        return self.denial == DENIAL_NOT_FOUND


# ============================================================================
# RESOURCE LOADERS
# ============================================================================

def _load_property(resource_id):
    from properties.models import Property
    return Property.objects.filter(pk=resource_id).first()


def _load_room(resource_id):
    from rooms.models import Room
    return Room.objects.select_related('property').filter(pk=resource_id).first()


def _load_tenant(resource_id):
    from tenants.models import Tenant
    return Tenant.objects.select_related('property').filter(pk=resource_id).first()


def _load_payment(resource_id):
    from payments.models import Payment
    return Payment.objects.select_related('tenant', 'property').filter(pk=resource_id).first()


def _load_complaint(resource_id):
    from complaints.models import Complaint
    return Complaint.objects.select_related('tenant', 'property').filter(pk=resource_id).first()


# ============================================================================
# OWNERSHIP RULES
# ============================================================================

def _owns_property(user, prop):
    return prop is not None and prop.owner_id == user.id


def _property_rule(user, prop):
    return _owns_property(user, prop)


def _room_rule(user, room):
    # Tenants reach rooms only through their tenant record
    return _owns_property(user, room.property)


def _tenant_rule(user, tenant):
    return _owns_property(user, tenant.property) or tenant.user_id == user.id


def _tenant_linked_rule(user, record):
    """Payments and complaints: property owner or the tenant themself"""
    return _owns_property(user, record.property) or record.tenant.user_id == user.id


_RULES: Dict[str, tuple] = {
    ResourceKind.PROPERTY: (_load_property, _property_rule),
    ResourceKind.ROOM: (_load_room, _room_rule),
    ResourceKind.TENANT: (_load_tenant, _tenant_rule),
    ResourceKind.PAYMENT: (_load_payment, _tenant_linked_rule),
    ResourceKind.COMPLAINT: (_load_complaint, _tenant_linked_rule),
}


def _coerce_id(resource_id):
    try:
        return int(resource_id)
    except (TypeError, ValueError):
        return None


def check_access(user, kind: str, resource) -> bool:
    """Apply the ownership rule for an already loaded resource"""
    if kind not in _RULES:
        raise ValueError(f"Unknown resource kind: {kind}")
    if not user or not user.is_authenticated:
        return False
    if user.role == UserRole.ADMIN:
        return True
    rule: Callable = _RULES[kind][1]
    return bool(rule(user, resource))


def resolve_access(user, kind: str, resource_id) -> AccessDecision:
    """
    Resolve access to a resource by id.

    Pure lookup: loads the resource and its ownership chain, never mutates.
    """
    if kind not in _RULES:
        raise ValueError(f"Unknown resource kind: {kind}")

    pk = _coerce_id(resource_id)
    loader = _RULES[kind][0]
    resource = loader(pk) if pk is not None else None
    if resource is None:
        return AccessDecision(allowed=False, denial=DENIAL_NOT_FOUND)

    if check_access(user, kind, resource):
        return AccessDecision(allowed=True, resource=resource)
    return AccessDecision(allowed=False, resource=resource, denial=DENIAL_FORBIDDEN)


def get_authorized(user, kind: str, resource_id):
    """
    Load a resource the user may access.

    Raises:
        NotFoundError: resource (or its chain) does not exist
        PermissionDeniedError: resource exists but the user may not access it
    """
    decision = resolve_access(user, kind, resource_id)
    if decision.allowed:
        return decision.resource
    label = RESOURCE_LABELS[kind]
    if decision.not_found:
        raise NotFoundError(resource_type=label, resource_id=resource_id)
    raise PermissionDeniedError(f"Not authorized to access this {label.lower()}")


def ensure_access(user, kind: str, resource):
    """Raise PermissionDeniedError unless the user may access an already loaded resource"""
    if not check_access(user, kind, resource):
        label = RESOURCE_LABELS[kind]
        raise PermissionDeniedError(f"Not authorized to access this {label.lower()}")
    return resource
