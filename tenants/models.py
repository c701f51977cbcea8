import builtins
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from core.constants import TenantStatus, IdProofType, OccupationType
from core.validators import phone_validator, pincode_validator
from properties.models import Property
from rooms.models import Room


class Tenant(models.Model):
    """Tenant record linking a tenant user to a property and room"""
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='tenant_profile'
    )
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name='tenants')
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name='tenants')

    full_name = models.CharField(max_length=100)
    email = models.EmailField()
    phone = models.CharField(max_length=10, validators=[phone_validator])
    alternate_phone = models.CharField(max_length=10, blank=True, validators=[phone_validator])

    # Emergency contact
    emergency_contact_name = models.CharField(max_length=100)
    emergency_contact_relation = models.CharField(max_length=50)
    emergency_contact_phone = models.CharField(max_length=10, validators=[phone_validator])

    # ID proof
    id_proof_type = models.CharField(max_length=20, choices=IdProofType.CHOICES)
    id_proof_number = models.CharField(max_length=50)

    # Occupation
    occupation_type = models.CharField(max_length=30, choices=OccupationType.CHOICES)
    company_name = models.CharField(max_length=150, blank=True)
    designation = models.CharField(max_length=100, blank=True)

    # Permanent address
    permanent_street = models.CharField(max_length=255, blank=True)
    permanent_city = models.CharField(max_length=100, blank=True)
    permanent_state = models.CharField(max_length=100, blank=True)
    permanent_pincode = models.CharField(max_length=6, blank=True, validators=[pincode_validator])

    move_in_date = models.DateField()
    move_out_date = models.DateField(null=True, blank=True)
    rent_amount = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0'), "Rent amount must be positive")]
    )
    security_deposit = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal('0'), validators=[MinValueValidator(Decimal('0'))]
    )
    security_deposit_paid = models.BooleanField(default=False)
    status = models.CharField(max_length=20, choices=TenantStatus.CHOICES, default=TenantStatus.ACTIVE)

    # Notice period
    notice_start_date = models.DateField(null=True, blank=True)
    notice_end_date = models.DateField(null=True, blank=True)
    notice_reason = models.TextField(blank=True)

    # Agreement
    agreement_start_date = models.DateField(null=True, blank=True)
    agreement_end_date = models.DateField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Tenant"
        verbose_name_plural = "Tenants"
        indexes = [
            models.Index(fields=['property', 'status'], name='tenant_property_status_idx'),
            models.Index(fields=['room', 'status'], name='tenant_room_status_idx'),
            models.Index(fields=['status'], name='tenant_status_idx'),
            models.Index(fields=['move_in_date'], name='tenant_move_in_idx'),
        ]

    def __str__(self):
        return f"{self.full_name} ({self.room})"

    @builtins.property
    def is_active(self):
        return self.status == TenantStatus.ACTIVE

    @builtins.property
    def days_stayed(self):
        end = self.move_out_date or timezone.localdate()
        if not self.move_in_date:
            return 0
        return max((end - self.move_in_date).days, 0)

    @builtins.property
    def months_stayed(self):
        return self.days_stayed // 30
