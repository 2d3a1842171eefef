from django.conf import settings

from .services import messaging
from .services.content import load_seo
from .services.singletons import fetch_profile, fetch_settings
from .store import TableStore


def site(request):
    """Site-wide template values: SEO, chat link and the clinic profile."""
    cached = getattr(request, '_clinic_site', None)
    if cached is not None:
        return cached
    public = TableStore()
    profile = fetch_profile(public).data
    admin_settings = fetch_settings().data
    number = messaging.clinic_number(admin_settings, profile)
    context = {
        'site_name': settings.CLINIC_SITE_NAME,
        'doctor': profile,
        'seo': load_seo(public),
        'whatsapp_number': number,
        'whatsapp_link': messaging.whatsapp_link(number, messaging.DEFAULT_GREETING),
        'selling_enabled': (admin_settings or {}).get('medicine_selling_enabled', True),
    }
    request._clinic_site = context
    return context
