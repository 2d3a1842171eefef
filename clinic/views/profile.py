from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from ..permissions import IsAdminRole
from ..serializers import validate_or_raise
from ..serializers.profile import DoctorProfileSerializer
from ..services.audit import log_action
from ..services.singletons import profile_record
from .common import ok, store_for


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated, IsAdminRole])
def doctor_profile(request):
    """Read or change the doctor profile; the row is created with defaults on first access."""
    record = profile_record(store_for(request))
    row = record.ensure_exists()
    if request.method == 'PUT':
        values = validate_or_raise(DoctorProfileSerializer, request.data, partial=True)
        row = record.save(values)
        log_action(user=request.user, action='doctor_profile.update', object_type='doctor_profile',
                   object_id=row['id'], detail={'fields': sorted(values)})
    return ok(row)
