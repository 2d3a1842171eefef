from __future__ import annotations

from django.utils import timezone

from ..models import MedicineInquiry
from ..store import TableStore

RECENT_COLUMNS = ('id', 'patient_name', 'health_issue', 'status', 'created_at')


def admin_stats(store: TableStore) -> dict:
    """Overview numbers for the dashboard.  Raises ``StoreError`` on any failed read."""
    midnight = timezone.localtime().replace(hour=0, minute=0, second=0, microsecond=0)
    return {
        'total_consultations': store.count('consultation_requests'),
        'today_consultations': store.count('consultation_requests', filters={'created_at__gte': midnight}),
        'total_medicines': store.count('medicines'),
        'new_inquiries': store.count('medicine_inquiries', filters={'status': MedicineInquiry.STATUS_NEW}),
        'recent_consultations': store.select('consultation_requests', limit=5, columns=RECENT_COLUMNS),
    }
