"""
Request-scoped logging: every request carries a short request id that is
returned as X-Request-ID and stamped on each log record emitted while the
request is handled.
"""
import logging
import re
import threading
import time
import uuid

logger = logging.getLogger('pg_nexus.requests')

_thread_local = threading.local()

# Accept a caller's id only when it is short and plain
INCOMING_ID_PATTERN = re.compile(r'^[A-Za-z0-9-]{8,36}$')


def get_request_id():
    return getattr(_thread_local, 'request_id', None)


def new_request_id():
    return uuid.uuid4().hex[:8]


class RequestIDFilter(logging.Filter):
    """Adds `request_id` to every record ('N/A' outside a request)"""

    def filter(self, record):
        request_id = getattr(record, 'request_id', None) or get_request_id()
        record.request_id = request_id or 'N/A'
        return True


class RequestIDMiddleware:
    """
    Assigns the request id, exposes it on request.request_id and logs one
    line per API request with status and duration.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        incoming = request.headers.get('X-Request-ID', '')
        request_id = incoming if INCOMING_ID_PATTERN.match(incoming) else new_request_id()
        request.request_id = request_id
        _thread_local.request_id = request_id
        started = time.monotonic()

        try:
            response = self.get_response(request)
            response['X-Request-ID'] = request_id
            if request.path.startswith('/api/'):
                elapsed_ms = (time.monotonic() - started) * 1000
                logger.info(f"{request.method} {request.path} -> {response.status_code} ({elapsed_ms:.0f} ms)")
            return response
        finally:
            try:
                del _thread_local.request_id
            except AttributeError:
                pass

    def process_exception(self, request, exception):
        request_id = getattr(request, 'request_id', 'N/A')
        logging.getLogger('django.request').error(
            f"Unhandled {type(exception).__name__} on {request.method} {request.path}: {exception}",
            exc_info=True,
            extra={'request_id': request_id}
        )
