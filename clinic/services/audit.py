import logging
from typing import Any, Dict, Optional

from django.db import DatabaseError, transaction

from clinic.models import AuditEvent

logger = logging.getLogger(__name__)


def log_action(*, user, action: str, object_type: Optional[str] = None, object_id: Any = None,
               detail: Optional[Dict[str, Any]] = None) -> Optional[AuditEvent]:
    """Record an audit event.  A failed write is logged and never blocks the caller."""
    try:
        with transaction.atomic():
            return AuditEvent.objects.create(
                user=user if getattr(user, 'pk', None) and getattr(user, 'is_authenticated', False) else None,
                action=action,
                object_type=object_type,
                object_id=str(object_id) if object_id is not None else None,
                detail=detail or {},
            )
    except DatabaseError:
        logger.warning('audit write failed for %s on %s/%s', action, object_type, object_id, exc_info=True)
        return None
