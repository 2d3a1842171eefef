"""
Medicine catalog endpoints for administrators.

The public, active-only catalog lives in :mod:`clinic.views.public`.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from ..permissions import IsAdminRole
from ..services.collections import MEDICINES
from .common import create_row, delete_row, list_rows, toggle_row, update_row


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def medicines(request):
    """List every medicine (``?q=`` searches name and category) or add one."""
    if request.method == 'POST':
        return create_row(request, MEDICINES)
    return list_rows(request, MEDICINES)


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def medicine_detail(request, pk):
    if request.method == 'DELETE':
        return delete_row(request, MEDICINES, pk)
    return update_row(request, MEDICINES, pk)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def medicine_toggle(request, pk):
    """Show or hide a medicine in the public catalog."""
    return toggle_row(request, MEDICINES, pk, 'is_active')
