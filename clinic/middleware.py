import logging

from django.shortcuts import render

from .services.gate import AuthGate
from .services.singletons import fetch_settings

logger = logging.getLogger(__name__)


class AuthGateMiddleware:
    """Attach a fresh, unresolved :class:`AuthGate` to every request."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.auth_gate = AuthGate(request)
        return self.get_response(request)


class MaintenanceModeMiddleware:
    """Answer 503 on public pages while the maintenance switch is on."""
    EXEMPT_PREFIXES = ('/admin', '/api/', '/django-admin/', '/static/', '/media/', '/healthz', '/metrics',
                       '/swagger/', '/redoc/')

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        path = request.path or ''
        if not any(path.startswith(p) for p in self.EXEMPT_PREFIXES):
            fetched = fetch_settings()
            # an unreadable settings row leaves the site up
            if fetched.data and fetched.data.get('maintenance_mode'):
                logger.debug('maintenance mode: %s', path)
                return render(request, 'clinic/maintenance.html', status=503)
        return self.get_response(request)
