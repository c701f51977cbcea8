"""
Health endpoints for load balancers and monitoring.

/api/health answers as long as the process serves requests.
/api/health/ready/ also needs the database and the cache; the background
scheduler state is reported but never fails readiness.
"""

import logging
from django.conf import settings
from django.http import JsonResponse
from django.db import connection
from django.core.cache import cache
from django.urls import path
from django.utils import timezone
from django.views.decorators.http import require_GET
from django.views.decorators.csrf import csrf_exempt

logger = logging.getLogger(__name__)

CACHE_PROBE_KEY = 'pg_nexus:readiness'


def _check_database():
    with connection.cursor() as cursor:
        cursor.execute('SELECT 1')
        cursor.fetchone()


def _check_cache():
    cache.set(CACHE_PROBE_KEY, 'ok', 10)
    if cache.get(CACHE_PROBE_KEY) != 'ok':
        raise RuntimeError("read back a different value")
    cache.delete(CACHE_PROBE_KEY)


READINESS_CHECKS = (
    ('database', _check_database),
    ('cache', _check_cache),
)


def _scheduler_state():
    from . import scheduler
    if not getattr(settings, 'ENABLE_BACKGROUND_SCHEDULER', True):
        return 'disabled'
    running = scheduler.scheduler is not None and scheduler.scheduler.running
    return 'running' if running else 'stopped'


@csrf_exempt
@require_GET
def health_check(request):
    """Liveness: 200 whenever the app is up"""
    return JsonResponse({
        'success': True,
        'message': 'Server is running',
        'environment': getattr(settings, 'ENVIRONMENT', 'development'),
        'timestamp': timezone.now().isoformat(),
    })


@csrf_exempt
@require_GET
def readiness_check(request):
    """Readiness: 503 unless every dependency answers"""
    checks = {}
    errors = []
    for name, check in READINESS_CHECKS:
        try:
            check()
            checks[name] = True
        except Exception as e:
            checks[name] = False
            errors.append(f'{name}: {e}')
            logger.error(f'Readiness check failed | {name}: {e}')

    ready = all(checks.values())
    body = {
        'success': ready,
        'message': 'ready' if ready else 'not ready',
        'data': {
            'checks': checks,
            'scheduler': _scheduler_state(),
            'timestamp': timezone.now().isoformat(),
        },
    }
    if errors:
        body['errors'] = errors
    return JsonResponse(body, status=200 if ready else 503)


def get_health_urls(prefix=''):
    """URL patterns for the health endpoints, mounted under `prefix`"""
    return [
        path(f'{prefix}health', health_check, name='health_check'),
        path(f'{prefix}health/', health_check),
        path(f'{prefix}health/ready/', readiness_check, name='readiness_check'),
    ]
