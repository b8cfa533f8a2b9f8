"""WSGI config for the groupboard project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "groupboard.settings")

application = get_wsgi_application()
