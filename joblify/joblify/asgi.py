"""
ASGI config for joblify project.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "joblify.settings")

application = get_asgi_application()
