"""
Administrative dashboard endpoint.

Totals for consultations (all time and since local midnight), medicines
and new inquiries, plus the five latest consultation requests.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from ..permissions import IsAdminRole
from ..services.dashboard import admin_stats
from .common import ok, store_for


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_dashboard(request):
    return ok(admin_stats(store_for(request)))
