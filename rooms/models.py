import builtins
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from core.constants import RoomType, RoomStatus, Furnishing, ROOM_AMENITIES
from core.validators import AmenitiesValidator
from properties.models import Property


class Room(models.Model):
    """Room within a property; occupancy fields are owned by the occupancy engine"""
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name='rooms')
    room_number = models.CharField(max_length=20)
    floor = models.CharField(max_length=20)
    room_type = models.CharField(max_length=20, choices=RoomType.CHOICES)
    capacity = models.PositiveIntegerField(validators=[MinValueValidator(1, "Capacity must be at least 1")])
    current_occupancy = models.PositiveIntegerField(default=0, editable=False)
    rent = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0'), "Rent must be a positive number")]
    )
    security_deposit = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal('0'), validators=[MinValueValidator(Decimal('0'))]
    )
    area = models.PositiveIntegerField(null=True, blank=True, help_text="Square feet")
    furnishing = models.CharField(max_length=20, choices=Furnishing.CHOICES, default=Furnishing.UNFURNISHED)
    amenities = models.JSONField(default=dict, blank=True, validators=[AmenitiesValidator(ROOM_AMENITIES)])
    status = models.CharField(max_length=20, choices=RoomStatus.CHOICES, default=RoomStatus.AVAILABLE)
    description = models.TextField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['property', 'room_number']
        unique_together = ['property', 'room_number']
        verbose_name = "Room"
        verbose_name_plural = "Rooms"
        indexes = [
            models.Index(fields=['property', 'status'], name='room_property_status_idx'),
            models.Index(fields=['status'], name='room_status_idx'),
        ]

    def __str__(self):
        return f"{self.property.name} - Room {self.room_number}"

    @builtins.property
    def is_available(self):
        return self.current_occupancy < self.capacity and self.status == RoomStatus.AVAILABLE

    @builtins.property
    def vacancies(self):
        return max(self.capacity - self.current_occupancy, 0)
