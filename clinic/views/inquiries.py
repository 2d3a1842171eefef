"""
Medicine inquiry endpoints.

Administrators list inquiries (searchable by medicine, phone and customer
name, filterable by status), update their status and notes, and get a
WhatsApp link for replying to the customer.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from ..permissions import IsAdminRole
from ..services import messaging
from ..services.collections import INQUIRIES
from .common import list_rows, ok, store_for, update_row


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def inquiries(request):
    return list_rows(request, INQUIRIES)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def inquiry_detail(request, pk):
    return update_row(request, INQUIRIES, pk)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def inquiry_reply_link(request, pk):
    store = store_for(request)
    row = store.single(INQUIRIES.table, filters={'pk': pk})
    settings_row = store.maybe_single('admin_settings')
    return ok({'url': messaging.inquiry_reply_link(row, settings_row)})
