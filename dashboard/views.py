"""
Role-Aware Dashboard API

Returns a stats snapshot filtered by the requester's role:
- ADMIN: every property, plus user counts per role
- OWNER: only their own properties
- TENANT: their own stay, payments and complaints

SECURITY: All filtering happens in backend queries (no frontend filtering)
"""
from decimal import Decimal

from django.db.models import Count, Q, Sum
from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from common.responses import api_response
from complaints.models import Complaint
from core.constants import ComplaintStatus, PaymentStatus, Priority, RoomStatus, TenantStatus, UserRole
from notices.repositories import NoticeRepository
from payments.models import Payment
from properties.models import Property
from rooms.models import Room
from tenants.models import Tenant
from users.models import User

UNPAID_STATUSES = [PaymentStatus.PENDING, PaymentStatus.OVERDUE, PaymentStatus.PARTIAL]


def _property_stats(properties, current_month):
    """Metrics for a set of properties"""
    property_ids = list(properties.values_list('id', flat=True))

    room_stats = Room.objects.filter(property_id__in=property_ids).aggregate(
        total=Count('id'),
        occupied=Count('id', filter=Q(status=RoomStatus.OCCUPIED)),
        available=Count('id', filter=Q(status=RoomStatus.AVAILABLE)),
        beds=Sum('capacity'),
        occupied_beds=Sum('current_occupancy'),
    )
    total_rooms = room_stats['total'] or 0
    occupied_rooms = room_stats['occupied'] or 0
    total_beds = room_stats['beds'] or 0
    occupied_beds = room_stats['occupied_beds'] or 0

    tenant_stats = Tenant.objects.filter(property_id__in=property_ids).aggregate(
        total=Count('id'),
        active=Count('id', filter=Q(status=TenantStatus.ACTIVE)),
        notice_period=Count('id', filter=Q(status=TenantStatus.NOTICE_PERIOD)),
    )

    payments = Payment.objects.filter(property_id__in=property_ids)
    collected = payments.filter(
        month=current_month, status=PaymentStatus.PAID
    ).aggregate(total=Sum('total_amount'))['total'] or Decimal('0')
    outstanding = payments.filter(
        status__in=UNPAID_STATUSES
    ).aggregate(total=Sum('total_amount'))['total'] or Decimal('0')

    complaints = Complaint.objects.filter(property_id__in=property_ids)

    return {
        'total_properties': len(property_ids),
        'total_rooms': total_rooms,
        'occupied_rooms': occupied_rooms,
        'available_rooms': room_stats['available'] or 0,
        'total_beds': total_beds,
        'occupied_beds': occupied_beds,
        'occupancy_rate': round(occupied_beds / total_beds * 100, 1) if total_beds else 0.0,
        'total_tenants': tenant_stats['total'] or 0,
        'active_tenants': tenant_stats['active'] or 0,
        'tenants_on_notice': tenant_stats['notice_period'] or 0,
        'collected_this_month': float(collected),
        'outstanding_amount': float(outstanding),
        'pending_payments': payments.filter(status=PaymentStatus.PENDING).count(),
        'overdue_payments': payments.filter(status=PaymentStatus.OVERDUE).count(),
        'open_complaints': complaints.filter(status__in=ComplaintStatus.UNRESOLVED).count(),
        'urgent_complaints': complaints.filter(
            status__in=ComplaintStatus.UNRESOLVED, priority=Priority.URGENT
        ).count(),
    }


def _tenant_stats(user):
    tenant = Tenant.objects.select_related('property', 'room').filter(user=user).first()
    notices = NoticeRepository().visible_to(user).active()
    if tenant is None:
        return {
            'has_tenancy': False,
            'active_notices': notices.count(),
        }

    payments = Payment.objects.filter(tenant=tenant)
    outstanding = payments.filter(
        status__in=UNPAID_STATUSES
    ).aggregate(total=Sum('total_amount'))['total'] or Decimal('0')
    last_paid = payments.filter(status=PaymentStatus.PAID).order_by('-month').first()

    return {
        'has_tenancy': True,
        'tenant_id': tenant.id,
        'status': tenant.status,
        'property': {'id': tenant.property_id, 'name': tenant.property.name},
        'room': {'id': tenant.room_id, 'room_number': tenant.room.room_number},
        'rent_amount': float(tenant.rent_amount),
        'days_stayed': tenant.days_stayed,
        'pending_payments': payments.filter(status__in=UNPAID_STATUSES).count(),
        'outstanding_amount': float(outstanding),
        'last_paid_month': last_paid.month.strftime('%Y-%m') if last_paid else None,
        'open_complaints': Complaint.objects.filter(
            tenant=tenant, status__in=ComplaintStatus.UNRESOLVED
        ).count(),
        'active_notices': notices.count(),
        'unread_notices': notices.exclude(reads__user=user).count(),
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_stats(request):
    """
    Get dashboard stats for the requester's role.

    Returns:
        Envelope with role-specific metrics
    """
    user = request.user
    current_month = timezone.localdate().replace(day=1)

    if user.role == UserRole.TENANT:
        data = _tenant_stats(user)
    else:
        properties = Property.objects.all()
        if user.role == UserRole.OWNER:
            properties = properties.filter(owner=user)
        data = _property_stats(properties, current_month)
        if user.role == UserRole.ADMIN:
            data['users'] = dict(
                User.objects.order_by().values('role').annotate(count=Count('id')).values_list('role', 'count')
            )

    data['user_role'] = user.role
    data['current_month'] = current_month.strftime('%Y-%m')
    return api_response(data)
