"""
Tests for the admin collection contract: list, filter, create, update,
toggle and delete keep the local rows in step with the store, and a
failed call leaves them untouched.
"""
import copy
from decimal import Decimal

import pytest

from clinic.exceptions import StoreError
from clinic.models import ConsultationRequest, Medicine, Service
from clinic.services.collections import CONSULTATIONS, MEDICINES, SERVICES, open_collection
from clinic.services.crud import CollectionState, filter_rows

pytestmark = pytest.mark.django_db


def fail(*args, **kwargs):
    raise StoreError('connection reset', table='medicines', op='update')


def test_create_adds_returned_row_exactly_once(admin_store, notifier, tonic):
    state = open_collection(MEDICINES, admin_store, notifier)
    row = state.create({'name': 'Herbal Hair Oil', 'category': 'Oil', 'price': '320.00'})
    assert row['id'] is not None
    assert row['created_at'] is not None
    assert [r['name'] for r in state.rows] == ['Herbal Hair Oil', 'Pain Relief Tonic']
    assert sum(1 for r in state.visible if r['id'] == row['id']) == 1
    assert state.editing is None
    assert notifier.notices[-1].title == 'Medicine Added'
    # a fresh load shows the same row once
    reloaded = open_collection(MEDICINES, admin_store, notifier)
    assert [r['id'] for r in reloaded.rows].count(row['id']) == 1


def test_create_rejects_invalid_input_before_calling_store(admin_store, notifier, monkeypatch):
    state = open_collection(MEDICINES, admin_store, notifier)
    calls = []
    monkeypatch.setattr(admin_store, 'insert', lambda *a, **kw: calls.append(a))
    assert state.create({'name': '', 'price': '0'}) is None
    assert calls == []
    assert state.editing == {'name': '', 'price': '0'}
    assert set(state.field_errors) == {'name', 'price'}
    assert notifier.errors[-1].title == 'Validation Error'


def test_create_failure_keeps_editor_open(admin_store, notifier, monkeypatch):
    state = open_collection(MEDICINES, admin_store, notifier)
    monkeypatch.setattr(admin_store, 'insert', fail)
    data = {'name': 'Digestive Churnam', 'price': '180'}
    assert state.create(data) is None
    assert state.rows == []
    assert state.editing == data
    assert notifier.errors[-1].description == 'Failed to save medicine.'


def test_failed_update_leaves_rows_unchanged(admin_store, notifier, tonic, syrup, monkeypatch):
    state = open_collection(MEDICINES, admin_store, notifier)
    before = copy.deepcopy(state.rows)
    monkeypatch.setattr(admin_store, 'update', fail)
    assert state.update(tonic.pk, {'price': '300.00'}) is None
    assert state.rows == before
    assert notifier.errors[-1].description == 'Failed to update medicine.'


def test_update_patches_only_changed_fields(admin_store, notifier, tonic, monkeypatch):
    state = open_collection(MEDICINES, admin_store, notifier)
    selects = []
    original_select = admin_store.select
    monkeypatch.setattr(admin_store, 'select', lambda *a, **kw: selects.append(a) or original_select(*a, **kw))
    row = state.update(tonic.pk, {'price': '300.00'})
    assert row['price'] == Decimal('300.00')
    assert row['name'] == 'Pain Relief Tonic'
    assert selects == []
    tonic.refresh_from_db()
    assert tonic.price == Decimal('300.00')


def test_update_of_missing_row_reports_error(admin_store, notifier, tonic):
    state = open_collection(MEDICINES, admin_store, notifier)
    before = copy.deepcopy(state.rows)
    tonic.delete()
    assert state.update(before[0]['id'], {'price': '10'}) is None
    assert state.rows == before


def test_toggle_twice_restores_value_with_two_updates(admin_store, notifier, tonic, monkeypatch):
    state = open_collection(MEDICINES, admin_store, notifier)
    calls = []
    original_update = admin_store.update

    def counting_update(table, row_id, values):
        calls.append(values)
        return original_update(table, row_id, values)

    monkeypatch.setattr(admin_store, 'update', counting_update)
    state.toggle(tonic.pk, 'is_active')
    assert state.get(tonic.pk)['is_active'] is False
    state.toggle(tonic.pk, 'is_active')
    assert state.get(tonic.pk)['is_active'] is True
    assert calls == [{'is_active': False}, {'is_active': True}]
    tonic.refresh_from_db()
    assert tonic.is_active is True


def test_toggle_refuses_fields_that_are_not_flags(admin_store, notifier, tonic):
    state = open_collection(MEDICINES, admin_store, notifier)
    with pytest.raises(ValueError):
        state.toggle(tonic.pk, 'price')


def test_failed_toggle_keeps_flag(admin_store, notifier, tonic, monkeypatch):
    state = open_collection(MEDICINES, admin_store, notifier)
    monkeypatch.setattr(admin_store, 'update', fail)
    assert state.toggle(tonic.pk, 'is_active') is None
    assert state.get(tonic.pk)['is_active'] is True


def test_delete_requires_confirmation(admin_store, notifier, tonic, monkeypatch):
    state = open_collection(MEDICINES, admin_store, notifier)
    calls = []
    monkeypatch.setattr(admin_store, 'delete', lambda *a: calls.append(a))
    assert state.delete(tonic.pk, confirmed=False) is False
    assert calls == []
    assert len(state.rows) == 1


def test_delete_removes_row_by_id(admin_store, notifier, tonic, syrup):
    state = open_collection(MEDICINES, admin_store, notifier)
    assert state.delete(str(tonic.pk), confirmed=True) is True
    assert [r['name'] for r in state.rows] == ['Cough Syrup']
    assert not Medicine.objects.filter(pk=tonic.pk).exists()
    assert notifier.notices[-1].title == 'Medicine Deleted'


def test_failed_delete_keeps_row(admin_store, notifier, tonic, monkeypatch):
    state = open_collection(MEDICINES, admin_store, notifier)
    monkeypatch.setattr(admin_store, 'delete', fail)
    assert state.delete(tonic.pk, confirmed=True) is False
    assert len(state.rows) == 1
    assert notifier.errors[-1].description == 'Failed to delete medicine.'


def test_failed_fetch_keeps_previous_rows(admin_store, notifier, tonic, monkeypatch):
    state = open_collection(MEDICINES, admin_store, notifier)
    before = copy.deepcopy(state.rows)
    monkeypatch.setattr(admin_store, 'select', fail)
    assert state.fetch() is False
    assert state.rows == before
    assert state.is_loading is False
    assert notifier.errors[-1].description == 'Failed to load medicines.'


def test_filter_is_case_insensitive_and_never_writes(admin_store, notifier, tonic, syrup):
    state = open_collection(MEDICINES, admin_store, notifier, query='TONIC')
    assert [r['name'] for r in state.visible] == ['Pain Relief Tonic']
    state.set_filters(query='syrup')
    assert [r['name'] for r in state.visible] == ['Cough Syrup']
    assert len(state.rows) == 2


def test_status_filter_is_exact_and_unknown_status_means_all():
    rows = [
        {'id': 1, 'patient_name': 'Ravi', 'status': 'New'},
        {'id': 2, 'patient_name': 'Meena', 'status': 'Contacted'},
    ]
    assert filter_rows(rows, '', ('patient_name',), 'status', 'Contacted') == [rows[1]]
    assert filter_rows(rows, 'ravi', ('patient_name',), 'status', 'all') == [rows[0]]
    state = CollectionState(CONSULTATIONS, store=None, notifier=None)
    state.set_filters(status='Bogus')
    assert state.status_filter == 'all'


def test_status_round_trip_shows_contacted(admin_store, notifier):
    consultation = ConsultationRequest.objects.create(patient_name='Ravi', patient_phone='+91 98765 43210',
                                                      health_issue='Joint pain')
    state = open_collection(CONSULTATIONS, admin_store, notifier)
    state.update(consultation.pk, {'status': 'Contacted'})
    assert notifier.notices[-1].title == 'Status Updated'
    reloaded = open_collection(CONSULTATIONS, admin_store, notifier)
    assert reloaded.get(consultation.pk)['status'] == 'Contacted'


def test_unknown_status_is_rejected(admin_store, notifier):
    consultation = ConsultationRequest.objects.create(patient_name='Ravi', patient_phone='9876543210',
                                                      health_issue='Joint pain')
    state = open_collection(CONSULTATIONS, admin_store, notifier)
    assert state.update(consultation.pk, {'status': 'Archived'}) is None
    assert 'status' in state.field_errors


def test_equal_sort_keys_keep_creation_order(admin_store, notifier):
    first = Service.objects.create(title='Pulse Diagnosis', sort_order=1)
    second = Service.objects.create(title='Varmam Therapy', sort_order=1)
    Service.objects.create(title='Online Consultation', sort_order=5)
    state = open_collection(SERVICES, admin_store, notifier)
    assert [r['title'] for r in state.rows] == ['Pulse Diagnosis', 'Varmam Therapy', 'Online Consultation']
    state.update(first.pk, {'description': 'Naadi examination'})
    assert [r['id'] for r in state.rows][:2] == [first.pk, second.pk]
    created = state.create({'title': 'Skin Disorders', 'sort_order': 1})
    assert [r['title'] for r in state.rows] == [
        'Pulse Diagnosis', 'Varmam Therapy', 'Skin Disorders', 'Online Consultation',
    ]
    reloaded = open_collection(SERVICES, admin_store, notifier)
    assert [r['id'] for r in reloaded.rows] == [r['id'] for r in state.rows]
    assert created['id'] in [r['id'] for r in reloaded.rows]
