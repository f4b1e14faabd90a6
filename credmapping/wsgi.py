"""
WSGI config for the credmapping project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'credmapping.settings')

application = get_wsgi_application()
