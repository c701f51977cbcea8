"""
Validation utilities and validators.
Centralized validation logic following single responsibility principle.
"""
from decimal import Decimal
from django.core.validators import RegexValidator
from core.exceptions import ValidationError as AppValidationError


phone_validator = RegexValidator(
    regex=r'^[0-9]{10}$',
    message='Please provide a valid 10-digit phone number',
)

pincode_validator = RegexValidator(
    regex=r'^[0-9]{6}$',
    message='Please provide a valid 6-digit pincode',
)


class AmenitiesValidator:
    """Validates an amenities mapping against a fixed set of boolean keys"""

    def __init__(self, allowed_keys):
        self.allowed_keys = list(allowed_keys)

    def __call__(self, value):
        from django.core.exceptions import ValidationError
        if not isinstance(value, dict):
            raise ValidationError("Amenities must be an object")
        unknown = sorted(set(value) - set(self.allowed_keys))
        if unknown:
            raise ValidationError(f"Unknown amenities: {', '.join(unknown)}")
        for key, flag in value.items():
            if not isinstance(flag, bool):
                raise ValidationError(f"Amenity '{key}' must be true or false")

    def __eq__(self, other):
        return isinstance(other, AmenitiesValidator) and self.allowed_keys == other.allowed_keys

    def deconstruct(self):
        return ('core.validators.AmenitiesValidator', (self.allowed_keys,), {})


class PaymentValidator:
    """Validates payment amounts"""

    @staticmethod
    def validate_total(amount: Decimal, late_fee: Decimal, discount: Decimal):
        """Validate the derived total can't go negative"""
        total = (amount or 0) + (late_fee or 0) - (discount or 0)
        if total < 0:
            raise AppValidationError(
                message="Discount cannot exceed amount plus late fee",
                code="INVALID_DISCOUNT",
                details={'discount': ["Discount cannot exceed amount plus late fee"]},
            )


class CapacityValidator:
    """Validates room capacity operations"""

    @staticmethod
    def validate_capacity_change(new_capacity: int, active_count: int):
        """Capacity cannot drop below the number of active tenants"""
        if new_capacity < active_count:
            raise AppValidationError(
                message=f"Capacity cannot be lower than the {active_count} active tenant(s) in this room",
                code="CAPACITY_BELOW_OCCUPANCY",
                details={'capacity': [f"Must be at least {active_count}"]},
            )


class DateRangeValidator:
    """Validates start/end date pairs"""

    @staticmethod
    def validate(start, end, field='end_date', label='End date'):
        if start and end and end < start:
            raise AppValidationError(
                message=f"{label} cannot be before start date",
                code="INVALID_DATE_RANGE",
                details={field: [f"{label} cannot be before start date"]},
            )
