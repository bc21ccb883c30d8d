"""WSGI config for claimdesk."""

import os

from django.core.wsgi import get_wsgi_application


os.environ.setdefault("DJANGO_SETTINGS_MODULE", "claimdesk.settings")

application = get_wsgi_application()
