"""
Process-wide collaborators (email, storage, notifier).

Built once by CommonConfig.ready() and shut down at exit. Services
receive them through BaseService; tests pass their own instances.
"""
import logging
from dataclasses import dataclass

from django.conf import settings
from django.utils.module_loading import import_string

from .email import EmailService
from .notifications import Notifier
from .storage import FileStorageService

logger = logging.getLogger(__name__)

DEFAULT_NOTIFIER_BACKEND = 'common.notifications.LoggingNotifier'


@dataclass
class ServiceProviders:
    email: EmailService
    storage: FileStorageService
    notifier: Notifier


_providers = None


def build_providers() -> ServiceProviders:
    notifier_class = import_string(getattr(settings, 'NOTIFIER_BACKEND', DEFAULT_NOTIFIER_BACKEND))
    return ServiceProviders(
        email=EmailService(),
        storage=FileStorageService(),
        notifier=notifier_class(),
    )


def init_providers() -> ServiceProviders:
    global _providers
    if _providers is None:
        _providers = build_providers()
        logger.info(f"Service providers initialized (notifier: {type(_providers.notifier).__name__})")
    return _providers


def get_providers() -> ServiceProviders:
    """Return the process-wide providers, building them on first use"""
    return _providers or init_providers()


def shutdown_providers():
    global _providers
    if _providers is None:
        return
    try:
        _providers.notifier.close()
    except Exception as e:
        logger.error(f"Error closing notifier: {e}", exc_info=True)
    finally:
        _providers = None
        logger.info("Service providers shut down")
