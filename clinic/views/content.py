"""
Website content endpoints: the services list and the SEO block.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from ..permissions import IsAdminRole
from ..services.collections import SERVICES
from ..services.content import load_seo, upsert_seo
from .common import create_row, delete_row, list_rows, ok, store_for, toggle_row, update_row


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def services(request):
    """All services by sort order, hidden ones included."""
    if request.method == 'POST':
        return create_row(request, SERVICES)
    return list_rows(request, SERVICES)


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def service_detail(request, pk):
    if request.method == 'DELETE':
        return delete_row(request, SERVICES, pk)
    return update_row(request, SERVICES, pk)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def service_toggle(request, pk):
    return toggle_row(request, SERVICES, pk, 'is_enabled')


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated, IsAdminRole])
def seo(request):
    store = store_for(request)
    if request.method == 'PUT':
        return ok(upsert_seo(store, request.data))
    return ok(load_seo(store) or {'title': '', 'description': ''})
