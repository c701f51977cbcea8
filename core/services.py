"""
Base service classes.
Services contain business logic and orchestrate between repositories.
"""
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
import logging

from core.exceptions import ConflictError, ValidationError

logger = logging.getLogger(__name__)


class BaseService:
    """
    Base service class providing common functionality.
    Services should contain business logic and use repositories for data access.

    Collaborators (email, storage, notifier) are injected through the
    constructor; when omitted the process-wide providers built at startup
    are used.
    """

    def __init__(self, providers=None):
        self.logger = logging.getLogger(self.__class__.__name__)
        if providers is None:
            from common.providers import get_providers
            providers = get_providers()
        self.providers = providers

    @property
    def notifier(self):
        return self.providers.notifier

    @property
    def email(self):
        return self.providers.email

    @property
    def storage(self):
        return self.providers.storage

    def log_info(self, message: str, **context):
        """Log info message with context"""
        self.logger.info(f"{message} | Context: {context}")

    def log_error(self, message: str, error: Exception = None, **context):
        """Log error message with context"""
        if error:
            self.logger.error(f"{message} | Context: {context}", exc_info=error)
        else:
            self.logger.error(f"{message} | Context: {context}")

    def notify(self, event: str, audience: str, payload: dict):
        """Publish a realtime event; delivery failures never reach the caller"""
        try:
            self.notifier.notify(event, audience, payload)
        except Exception as e:
            self.log_error("Notification delivery failed", error=e, event_name=event, audience=audience)

    def save_model(self, instance, conflict_message=None):
        """
        Validate and persist a model instance.

        Model-level validation errors become ValidationError with field
        messages; unique constraint violations become ConflictError.
        """
        try:
            instance.full_clean()
        except DjangoValidationError as e:
            if conflict_message and _is_uniqueness_error(e):
                raise ConflictError(message=conflict_message, details=_error_dict(e))
            raise ValidationError(details=_error_dict(e))
        try:
            with transaction.atomic():
                instance.save()
        except IntegrityError as e:
            raise ConflictError(message=conflict_message or "Resource already exists", details={'error': str(e)})
        return instance


def _error_dict(error: DjangoValidationError) -> dict:
    if hasattr(error, 'error_dict'):
        return {field: [str(m) for m in messages] for field, messages in error.message_dict.items()}
    return {'non_field_errors': error.messages}


def _is_uniqueness_error(error: DjangoValidationError) -> bool:
    if not hasattr(error, 'error_dict'):
        return False
    return any(
        getattr(item, 'code', None) in ('unique', 'unique_together')
        for items in error.error_dict.values()
        for item in items
    )
