"""
WSGI config for the restaurant_ops project.

It exposes the WSGI callable as a module-level variable named ``application``.
"""

import os

import django
from django.core.management import call_command
from django.core.wsgi import get_wsgi_application
from django.db.utils import OperationalError

from restaurant_ops.logging import configure_logging

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "restaurant_ops.settings")

configure_logging()
django.setup()

try:
    call_command("migrate", interactive=False)
except OperationalError:
    # Database may be unavailable when the server starts; continue without failing.
    pass

application = get_wsgi_application()
