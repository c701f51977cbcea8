"""
WSGI config for the PG Nexus project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'pg_nexus.settings')

application = get_wsgi_application()
