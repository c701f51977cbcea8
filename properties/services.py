"""
Property service - Business logic layer for Property domain.
Services orchestrate repositories and contain business rules.
"""
from django.db import transaction

from core.access import get_authorized
from core.constants import ResourceKind
from core.exceptions import NotFoundError, ValidationError
from core.services import BaseService
from .models import Property, PropertyImage
from .repositories import PropertyRepository


class PropertyService(BaseService):
    """Service for property-related business logic"""

    def __init__(self, providers=None):
        super().__init__(providers)
        self.property_repo = PropertyRepository()

    def list_properties(self, user, status=None, city=None, property_type=None):
        return self.property_repo.list_for_user(user, status=status, city=city, property_type=property_type)

    def get_property(self, user, property_id) -> Property:
        """
        Raises:
            NotFoundError: If property doesn't exist
            PermissionDeniedError: If user doesn't own it
        """
        return get_authorized(user, ResourceKind.PROPERTY, property_id)

    def create_property(self, user, data: dict) -> Property:
        """Create a property owned by the requester; client-sent owner is ignored"""
        data = dict(data)
        data.pop('owner', None)
        prop = Property(owner=user, **data)
        self.save_model(prop)
        self.log_info(f"Property created: {prop.name}", property_id=prop.id, owner_id=user.id)
        return prop

    def update_property(self, user, property_id, data: dict) -> Property:
        with transaction.atomic():
            self.get_property(user, property_id)
            prop = self.property_repo.get_for_update(property_id)
            for field, value in data.items():
                if field in ('owner', 'total_rooms', 'occupied_rooms'):
                    continue
                setattr(prop, field, value)
            self.save_model(prop)
        self.log_info(f"Property updated: {prop.name}", property_id=prop.id)
        return prop

    def delete_property(self, user, property_id):
        """
        Delete a property with everything under it.

        Rooms, tenants, payments, complaints and property notices go in the
        same transaction; stored image files are removed once it commits.
        """
        with transaction.atomic():
            self.get_property(user, property_id)
            prop = self.property_repo.get_for_update(property_id)
            file_names = self.property_repo.stored_file_names(property_id)
            name = prop.name
            self.property_repo.delete(prop)
            transaction.on_commit(lambda: self.storage.delete_many(file_names))
        self.log_info(f"Property deleted: {name}", property_id=property_id, files=len(file_names))

    def add_images(self, user, property_id, files, captions=None) -> Property:
        if not files:
            raise ValidationError(message="Please upload images", details={'images': ["No files were uploaded"]})
        for upload in files:
            self.storage.validate_image(upload)

        prop = self.get_property(user, property_id)
        captions = captions or []
        with transaction.atomic():
            for index, upload in enumerate(files):
                caption = captions[index] if index < len(captions) else ''
                PropertyImage.objects.create(property=prop, file=upload, caption=caption)
        self.log_info("Property images uploaded", property_id=prop.id, count=len(files))
        return self.property_repo.get_by_id(prop.id)

    def delete_image(self, user, property_id, image_id):
        prop = self.get_property(user, property_id)
        image = PropertyImage.objects.filter(property=prop, pk=image_id).first()
        if image is None:
            raise NotFoundError(resource_type="Image", resource_id=image_id)
        file_name = image.file.name
        image.delete()
        transaction.on_commit(lambda: self.storage.delete(file_name))
