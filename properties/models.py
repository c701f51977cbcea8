from django.conf import settings
from django.core.validators import FileExtensionValidator
from django.db import models

from core.constants import PropertyType, PropertyStatus, PROPERTY_AMENITIES
from core.validators import AmenitiesValidator, phone_validator, pincode_validator


def property_image_path(instance, filename):
    """File will be uploaded to MEDIA_ROOT/properties/<property_id>/<filename>"""
    return f'properties/{instance.property_id}/{filename}'


class Property(models.Model):
    """PG property owned by a single owner"""
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='properties'
    )
    name = models.CharField(max_length=100)
    property_type = models.CharField(max_length=20, choices=PropertyType.CHOICES)

    # Address
    street = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    pincode = models.CharField(max_length=6, validators=[pincode_validator])
    landmark = models.CharField(max_length=255, blank=True)

    # Contact
    contact_person_name = models.CharField(max_length=100)
    contact_phone = models.CharField(max_length=10, validators=[phone_validator])
    contact_email = models.EmailField(blank=True)

    amenities = models.JSONField(
        default=dict, blank=True, validators=[AmenitiesValidator(PROPERTY_AMENITIES)]
    )
    description = models.TextField(max_length=1000, blank=True)
    rules = models.TextField(max_length=1000, blank=True)

    # Derived counters, written only by the occupancy engine
    total_rooms = models.PositiveIntegerField(default=0, editable=False)
    occupied_rooms = models.PositiveIntegerField(default=0, editable=False)

    status = models.CharField(max_length=20, choices=PropertyStatus.CHOICES, default=PropertyStatus.ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Property"
        verbose_name_plural = "Properties"
        indexes = [
            models.Index(fields=['owner', 'status'], name='property_owner_status_idx'),
            models.Index(fields=['city'], name='property_city_idx'),
            models.Index(fields=['property_type'], name='property_type_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.city})"

    @property
    def available_rooms(self):
        return self.total_rooms - self.occupied_rooms

    @property
    def occupancy_percentage(self):
        if self.total_rooms == 0:
            return 0
        return round(self.occupied_rooms / self.total_rooms * 100)


class PropertyImage(models.Model):
    """Image stored through the file-storage backend"""
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name='images')
    file = models.FileField(
        upload_to=property_image_path,
        validators=[FileExtensionValidator(allowed_extensions=['jpg', 'jpeg', 'png', 'webp'])],
    )
    caption = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at']
        verbose_name = "Property Image"
        verbose_name_plural = "Property Images"

    def __str__(self):
        return f"{self.property.name} - {self.file.name}"
