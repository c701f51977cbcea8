import builtins
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from core.constants import PaymentStatus, PaymentMethod
from properties.models import Property
from rooms.models import Room
from tenants.models import Tenant


class Payment(models.Model):
    """
    Monthly rent payment for a tenant.

    `total_amount` is always amount + late_fee - discount, recomputed on
    every save. A pending payment whose due date has passed is saved as
    overdue.
    """
    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE, related_name='payments')
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name='payments')
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name='payments')
    month = models.DateField(help_text="First day of the billed month")
    amount = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0'), "Amount must be positive")]
    )
    late_fee = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0'), "Late fee must be positive")]
    )
    discount = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0'), "Discount must be positive")]
    )
    total_amount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0'), editable=False)
    due_date = models.DateField()
    payment_date = models.DateField(null=True, blank=True)
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.CHOICES, blank=True)
    transaction_id = models.CharField(max_length=100, blank=True)
    status = models.CharField(max_length=20, choices=PaymentStatus.CHOICES, default=PaymentStatus.PENDING)
    notes = models.TextField(max_length=500, blank=True)
    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='recorded_payments'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-month', '-created_at']
        unique_together = ['tenant', 'month']
        verbose_name = "Payment"
        verbose_name_plural = "Payments"
        indexes = [
            models.Index(fields=['property', 'status'], name='payment_property_status_idx'),
            models.Index(fields=['status', 'due_date'], name='payment_status_due_idx'),
            models.Index(fields=['month'], name='payment_month_idx'),
        ]

    def __str__(self):
        return f"{self.tenant.full_name} - {self.month.strftime('%B %Y')} ({self.get_status_display()})"

    def compute_total(self):
        return (self.amount or Decimal('0')) + (self.late_fee or Decimal('0')) - (self.discount or Decimal('0'))

    @builtins.property
    def is_past_due(self):
        return bool(self.due_date and self.due_date < timezone.localdate())

    def clean(self):
        # Normalise before uniqueness validation runs
        if self.month:
            self.month = self.month.replace(day=1)

    def save(self, *args, **kwargs):
        """Normalise the month, derive the total and flag overdue payments"""
        if self.month:
            self.month = self.month.replace(day=1)
        self.total_amount = self.compute_total()
        if self.status == PaymentStatus.PENDING and self.is_past_due:
            self.status = PaymentStatus.OVERDUE
        update_fields = kwargs.get('update_fields')
        if update_fields is not None:
            kwargs['update_fields'] = set(update_fields) | {'total_amount', 'status', 'month'}
        super().save(*args, **kwargs)
