"""
ASGI config for the StayInn project.

HTTP only; the API has no WebSocket endpoints.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "stayinn.settings")

application = get_asgi_application()
