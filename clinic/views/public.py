"""
Public read-only endpoints and the chat-link builders for the booking
and contact forms.  Nothing submitted here is stored.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny

from ..exceptions import StoreError
from ..serializers import validate_or_raise
from ..serializers.consultation import BookingSerializer, ContactSerializer
from ..services import messaging
from ..services.content import load_seo
from ..store import TableStore
from .common import ok
from .pages import public_medicines, target_number


@api_view(['GET'])
@permission_classes([AllowAny])
def profile(request):
    return ok(TableStore().maybe_single('doctor_profile'))


@api_view(['GET'])
@permission_classes([AllowAny])
def medicines(request):
    """Active medicines only, newest first, with ``ask_link``/``buy_link``."""
    rows, error = public_medicines()
    if error:
        raise StoreError(error, table='medicines', op='select')
    return ok(rows)


@api_view(['GET'])
@permission_classes([AllowAny])
def services(request):
    return ok(TableStore().select('services', order=('sort_order',)))


@api_view(['GET'])
@permission_classes([AllowAny])
def seo(request):
    return ok(load_seo(TableStore()) or {'title': '', 'description': ''})


@api_view(['POST'])
@permission_classes([AllowAny])
def booking(request):
    data = validate_or_raise(BookingSerializer, request.data)
    return ok({'whatsapp_url': messaging.whatsapp_link(target_number(), messaging.booking_message(data))})


@api_view(['POST'])
@permission_classes([AllowAny])
def contact(request):
    data = validate_or_raise(ContactSerializer, request.data)
    return ok({'whatsapp_url': messaging.whatsapp_link(target_number(), messaging.contact_message(data))})
