from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from ..permissions import IsAdminRole
from ..services import messaging
from ..services.collections import CONSULTATIONS
from .common import list_rows, ok, store_for, update_row


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def consultations(request):
    """Consultation requests, newest first.  Accepts ``?q=`` and ``?status=``."""
    return list_rows(request, CONSULTATIONS)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def consultation_detail(request, pk):
    """Change the status and/or the private doctor notes."""
    return update_row(request, CONSULTATIONS, pk)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def consultation_reply_link(request, pk):
    store = store_for(request)
    row = store.single(CONSULTATIONS.table, filters={'pk': pk})
    settings_row = store.maybe_single('admin_settings')
    return ok({'url': messaging.consultation_reply_link(row, settings_row)})
