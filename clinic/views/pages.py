"""
Public pages.

Every page reads through an anonymous :class:`~clinic.store.TableStore`,
so inactive medicines and disabled services never reach a template.  A
failed read renders the page with an error notice instead of the list.
The booking and contact forms store nothing: a valid submission becomes
a pre-filled WhatsApp message to the clinic.
"""
from __future__ import annotations

import logging

from django.shortcuts import render
from django.views.decorators.http import require_http_methods

from ..exceptions import StoreError
from ..serializers.consultation import BookingSerializer, ContactSerializer
from ..services import messaging
from ..services.singletons import fetch_profile, fetch_settings
from ..store import TableStore

logger = logging.getLogger(__name__)


def _read(table: str, **kwargs) -> tuple[list, str | None]:
    try:
        return TableStore().select(table, **kwargs), None
    except StoreError as exc:
        logger.warning('public read of %s failed: %s', table, exc)
        return [], 'Failed to load. Please try again later.'


def public_medicines(limit: int | None = None) -> tuple[list, str | None]:
    """Active medicines, newest first, each with its chat links."""
    rows, error = _read('medicines', limit=limit)
    admin_settings = fetch_settings().data
    selling = (admin_settings or {}).get('medicine_selling_enabled', True)
    number = messaging.clinic_number(admin_settings, fetch_profile(TableStore()).data)
    for row in rows:
        row['ask_link'] = messaging.whatsapp_link(number, messaging.medicine_ask_message(row))
        row['buy_link'] = messaging.whatsapp_link(number, messaging.medicine_buy_message(row)) if selling else None
        row['tags'] = [t.strip() for t in (row.get('used_for') or '').split(',') if t.strip()]
    return rows, error


def home(request):
    services, services_error = _read('services', order=('sort_order',), limit=6)
    medicines, medicines_error = public_medicines(limit=4)
    return render(request, 'clinic/home.html', {
        'services': services,
        'medicines': medicines,
        'error': services_error or medicines_error,
    })


def about(request):
    fetched = fetch_profile(TableStore())
    return render(request, 'clinic/about.html', {'profile': fetched.data, 'error': fetched.error})


def services(request):
    rows, error = _read('services', order=('sort_order',))
    return render(request, 'clinic/services.html', {'services': rows, 'error': error})


def medicines(request):
    rows, error = public_medicines()
    return render(request, 'clinic/medicines.html', {'medicines': rows, 'error': error})


def target_number() -> str:
    return messaging.clinic_number(fetch_settings().data, fetch_profile(TableStore()).data)


@require_http_methods(['GET', 'POST'])
def book(request):
    if request.method == 'GET':
        return render(request, 'clinic/book.html', {'form': {}, 'errors': {}})
    s = BookingSerializer(data=request.POST)
    if not s.is_valid():
        return render(request, 'clinic/book.html', {'form': request.POST, 'errors': s.errors}, status=400)
    link = messaging.whatsapp_link(target_number(), messaging.booking_message(s.validated_data))
    return render(request, 'clinic/sent.html', {'whatsapp_url': link, 'kind': 'consultation'})


@require_http_methods(['GET', 'POST'])
def contact(request):
    if request.method == 'GET':
        return render(request, 'clinic/contact.html', {'form': {}, 'errors': {}})
    s = ContactSerializer(data=request.POST)
    if not s.is_valid():
        return render(request, 'clinic/contact.html', {'form': request.POST, 'errors': s.errors}, status=400)
    link = messaging.whatsapp_link(target_number(), messaging.contact_message(s.validated_data))
    return render(request, 'clinic/sent.html', {'whatsapp_url': link, 'kind': 'message'})


def not_found(request, exception=None):
    return render(request, 'clinic/404.html', status=404)
