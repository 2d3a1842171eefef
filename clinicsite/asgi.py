"""
ASGI config for the clinic website project.

Only plain HTTP is served; there is no live-update channel.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "clinicsite.settings")

application = get_asgi_application()
