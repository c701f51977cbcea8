from django.apps import AppConfig
import atexit
import logging
import os
import sys

logger = logging.getLogger(__name__)

# Management commands that never run background work
NON_SERVING_COMMANDS = ['migrate', 'makemigrations', 'test', 'collectstatic', 'shell']


def running_tests():
    """True under `manage.py test` or pytest"""
    return (len(sys.argv) > 1 and sys.argv[1] == 'test') or 'pytest' in sys.modules


class CommonConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'common'

    def ready(self):
        """
        Build the process-wide collaborators and start the background scheduler.
        The scheduler only runs in the serving process (not in migrations,
        tests, or the autoreloader parent). Test runs skip the exit hook
        since their log streams are closed by then.
        """
        from .providers import init_providers, shutdown_providers
        init_providers()
        if running_tests():
            return
        atexit.register(shutdown_providers)

        if os.environ.get('RUN_MAIN') != 'true':
            return

        if len(sys.argv) > 1 and sys.argv[1] in NON_SERVING_COMMANDS:
            return

        from django.conf import settings
        if getattr(settings, 'ENABLE_BACKGROUND_SCHEDULER', True):
            try:
                from .scheduler import start_scheduler
                start_scheduler()
                logger.info("Background task scheduler initialized")
            except Exception as e:
                logger.error(f"Failed to initialize scheduler: {str(e)}", exc_info=True)
