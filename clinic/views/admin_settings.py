from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from ..permissions import IsAdminRole
from ..serializers import validate_or_raise
from ..serializers.admin_settings import AdminSettingsSerializer
from ..services.audit import log_action
from ..services.singletons import settings_record
from .common import ok, store_for


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_settings(request):
    """Site switches and reply templates; provisioned with column defaults when missing."""
    record = settings_record(store_for(request))
    row = record.ensure_exists()
    if request.method == 'PUT':
        values = validate_or_raise(AdminSettingsSerializer, request.data, partial=True)
        row = record.save(values)
        log_action(user=request.user, action='admin_settings.update', object_type='admin_settings',
                   object_id=row['id'], detail={'fields': sorted(values)})
    return ok(row)
