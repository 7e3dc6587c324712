"""
WSGI config for joblify project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "joblify.settings")

application = get_wsgi_application()
