"""
ASGI config for the medi-ease project.

The API is plain HTTP, so the Django ASGI handler is served directly
(e.g. ``uvicorn mediease.asgi:application``).
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "mediease.settings")

application = get_asgi_application()
