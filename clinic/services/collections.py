"""The admin-managed collections and how each one is searched, ordered and edited."""
from ..models import ConsultationRequest, MedicineInquiry
from ..serializers.consultation import ConsultationUpdateSerializer
from ..serializers.content import ServiceWriteSerializer
from ..serializers.inquiry import InquiryUpdateSerializer
from ..serializers.medicine import MedicineWriteSerializer
from .crud import CollectionConfig, CollectionState

MEDICINES = CollectionConfig(
    table='medicines',
    label='Medicine',
    search_fields=('name', 'category'),
    create_serializer=MedicineWriteSerializer,
    update_serializer=MedicineWriteSerializer,
    toggle_fields=('is_active',),
)

CONSULTATIONS = CollectionConfig(
    table='consultation_requests',
    label='Consultation',
    search_fields=('patient_name', 'patient_phone', 'health_issue'),
    status_field='status',
    statuses=tuple(value for value, _ in ConsultationRequest.STATUS_CHOICES),
    update_serializer=ConsultationUpdateSerializer,
    title_field='patient_name',
)

INQUIRIES = CollectionConfig(
    table='medicine_inquiries',
    label='Inquiry',
    search_fields=('medicine_name', 'customer_phone', 'customer_name'),
    status_field='status',
    statuses=tuple(value for value, _ in MedicineInquiry.STATUS_CHOICES),
    update_serializer=InquiryUpdateSerializer,
    title_field='medicine_name',
    plural='inquiries',
)

SERVICES = CollectionConfig(
    table='services',
    label='Service',
    order=('sort_order',),
    create_serializer=ServiceWriteSerializer,
    update_serializer=ServiceWriteSerializer,
    toggle_fields=('is_enabled',),
    title_field='title',
    insert_at='sorted',
)

COLLECTIONS = {c.table: c for c in (MEDICINES, CONSULTATIONS, INQUIRIES, SERVICES)}


def open_collection(config: CollectionConfig, store, notifier, *, query: str = '', status: str = 'all') -> CollectionState:
    """Load a collection the way a screen does on mount."""
    state = CollectionState(config, store, notifier)
    state.set_filters(query=query, status=status)
    state.fetch()
    return state
