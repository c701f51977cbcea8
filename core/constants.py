"""
Application-wide constants.
Centralized constants following DRY principle.
"""

# User Roles
class UserRole:
    ADMIN = 'admin'
    OWNER = 'owner'
    TENANT = 'tenant'

    CHOICES = [
        (ADMIN, 'Admin'),
        (OWNER, 'Owner'),
        (TENANT, 'Tenant'),
    ]

    # Roles a visitor may pick when registering
    SELF_REGISTERABLE = [OWNER, TENANT]


# Property
class PropertyType:
    BOYS = 'boys'
    GIRLS = 'girls'
    CO_LIVING = 'co-living'

    CHOICES = [
        (BOYS, 'Boys'),
        (GIRLS, 'Girls'),
        (CO_LIVING, 'Co-living'),
    ]


class PropertyStatus:
    ACTIVE = 'active'
    INACTIVE = 'inactive'
    MAINTENANCE = 'maintenance'

    CHOICES = [
        (ACTIVE, 'Active'),
        (INACTIVE, 'Inactive'),
        (MAINTENANCE, 'Maintenance'),
    ]


PROPERTY_AMENITIES = [
    'wifi', 'ac', 'parking', 'laundry', 'meals', 'gym',
    'powerBackup', 'cctv', 'refrigerator', 'tv',
]


# Room
class RoomType:
    SINGLE = 'single'
    DOUBLE = 'double'
    TRIPLE = 'triple'
    FOUR = 'four'
    DORMITORY = 'dormitory'

    CHOICES = [
        (SINGLE, 'Single'),
        (DOUBLE, 'Double'),
        (TRIPLE, 'Triple'),
        (FOUR, 'Four sharing'),
        (DORMITORY, 'Dormitory'),
    ]


class RoomStatus:
    AVAILABLE = 'available'
    OCCUPIED = 'occupied'
    MAINTENANCE = 'maintenance'
    RESERVED = 'reserved'

    CHOICES = [
        (AVAILABLE, 'Available'),
        (OCCUPIED, 'Occupied'),
        (MAINTENANCE, 'Maintenance'),
        (RESERVED, 'Reserved'),
    ]

    # OCCUPIED is only ever written by the occupancy engine
    CLIENT_SETTABLE = [AVAILABLE, MAINTENANCE, RESERVED]


class Furnishing:
    FULLY = 'fully-furnished'
    SEMI = 'semi-furnished'
    UNFURNISHED = 'unfurnished'

    CHOICES = [
        (FULLY, 'Fully furnished'),
        (SEMI, 'Semi furnished'),
        (UNFURNISHED, 'Unfurnished'),
    ]


ROOM_AMENITIES = [
    'ac', 'balcony', 'attachedBathroom', 'wardrobe', 'fan',
    'light', 'bed', 'table', 'chair',
]


# Tenant
class TenantStatus:
    ACTIVE = 'active'
    INACTIVE = 'inactive'
    NOTICE_PERIOD = 'notice_period'

    CHOICES = [
        (ACTIVE, 'Active'),
        (INACTIVE, 'Inactive'),
        (NOTICE_PERIOD, 'Notice Period'),
    ]


class IdProofType:
    CHOICES = [
        ('aadhar', 'Aadhar'),
        ('passport', 'Passport'),
        ('driving_license', 'Driving License'),
        ('voter_id', 'Voter ID'),
        ('other', 'Other'),
    ]


class OccupationType:
    CHOICES = [
        ('student', 'Student'),
        ('working_professional', 'Working Professional'),
        ('self_employed', 'Self Employed'),
        ('other', 'Other'),
    ]


# Payment Status
class PaymentStatus:
    PENDING = 'pending'
    PAID = 'paid'
    OVERDUE = 'overdue'
    PARTIAL = 'partial'

    CHOICES = [
        (PENDING, 'Pending'),
        (PAID, 'Paid'),
        (OVERDUE, 'Overdue'),
        (PARTIAL, 'Partial'),
    ]


class PaymentMethod:
    CHOICES = [
        ('cash', 'Cash'),
        ('upi', 'UPI'),
        ('bank_transfer', 'Bank Transfer'),
        ('cheque', 'Cheque'),
        ('online', 'Online'),
        ('card', 'Card'),
    ]


# Complaint Status
class ComplaintStatus:
    OPEN = 'open'
    IN_PROGRESS = 'in-progress'
    RESOLVED = 'resolved'
    CLOSED = 'closed'

    CHOICES = [
        (OPEN, 'Open'),
        (IN_PROGRESS, 'In Progress'),
        (RESOLVED, 'Resolved'),
        (CLOSED, 'Closed'),
    ]

    UNRESOLVED = [OPEN, IN_PROGRESS]


class ComplaintCategory:
    CHOICES = [
        ('plumbing', 'Plumbing'),
        ('electrical', 'Electrical'),
        ('cleaning', 'Cleaning'),
        ('maintenance', 'Maintenance'),
        ('wifi', 'WiFi'),
        ('security', 'Security'),
        ('noise', 'Noise'),
        ('pest_control', 'Pest Control'),
        ('other', 'Other'),
    ]


class Priority:
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'
    URGENT = 'urgent'

    CHOICES = [
        (LOW, 'Low'),
        (MEDIUM, 'Medium'),
        (HIGH, 'High'),
        (URGENT, 'Urgent'),
    ]

    # Higher rank sorts first
    RANK = {LOW: 1, MEDIUM: 2, HIGH: 3, URGENT: 4}


# Notice
class NoticeStatus:
    ACTIVE = 'active'
    ARCHIVED = 'archived'
    DRAFT = 'draft'

    CHOICES = [
        (ACTIVE, 'Active'),
        (ARCHIVED, 'Archived'),
        (DRAFT, 'Draft'),
    ]


class NoticeCategory:
    CHOICES = [
        ('general', 'General'),
        ('maintenance', 'Maintenance'),
        ('event', 'Event'),
        ('payment', 'Payment'),
        ('policy', 'Policy'),
        ('safety', 'Safety'),
        ('other', 'Other'),
    ]


class NoticeAudience:
    ALL = 'all'
    SPECIFIC_PROPERTY = 'specific_property'
    SPECIFIC_FLOOR = 'specific_floor'

    CHOICES = [
        (ALL, 'All'),
        (SPECIFIC_PROPERTY, 'Specific Property'),
        (SPECIFIC_FLOOR, 'Specific Floor'),
    ]


# Resource kinds understood by the authorization resolver
class ResourceKind:
    PROPERTY = 'property'
    ROOM = 'room'
    TENANT = 'tenant'
    PAYMENT = 'payment'
    COMPLAINT = 'complaint'

    ALL = [PROPERTY, ROOM, TENANT, PAYMENT, COMPLAINT]


# Realtime events
class NotificationEvent:
    PAYMENT_NEW = 'payment:new'
    PAYMENT_UPDATED = 'payment:updated'
    COMPLAINT_NEW = 'complaint:new'
    COMPLAINT_UPDATED = 'complaint:updated'
    NOTICE_NEW = 'notice:new'
    TENANT_ROOM_ASSIGNED = 'tenant:room-assigned'


# Default Limits
class DefaultLimits:
    LOGIN_MAX_ATTEMPTS = 5
    LOGIN_LOCKOUT_HOURS = 2
    EMAIL_VERIFICATION_HOURS = 24
    PASSWORD_RESET_MINUTES = 10


# Pagination
class Pagination:
    DEFAULT_PAGE_SIZE = 20
    MAX_PAGE_SIZE = 100
