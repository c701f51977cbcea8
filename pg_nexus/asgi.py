"""
ASGI config for the PG Nexus project.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'pg_nexus.settings')

application = get_asgi_application()
