import pytest

from clinic.exceptions import StoreError
from clinic.models import AdminSettings, DoctorProfile
from clinic.services.singletons import (
    SingletonState,
    fetch_profile,
    fetch_settings,
    profile_editor,
    profile_record,
    settings_record,
)
from clinic.store import TableStore

pytestmark = pytest.mark.django_db


def test_ensure_exists_provisions_defaults_once(admin_store):
    record = profile_record(admin_store)
    assert record.state is SingletonState.ABSENT
    row = record.ensure_exists()
    assert record.state is SingletonState.PRESENT
    assert row['name'] == 'Dr. Siddha Specialist'
    assert row['qualification'] == 'BBMS'
    assert row['clinic_timings']['sunday'] == 'Closed'
    again = profile_record(admin_store).ensure_exists()
    assert again['id'] == row['id']
    assert DoctorProfile.objects.count() == 1


def test_ensure_exists_recovers_when_another_session_provisioned_first(admin_store, monkeypatch):
    record = settings_record(admin_store)
    original_insert = admin_store.insert

    def racing_insert(table, values):
        # the other session wins; our insert hits the unique key
        original_insert(table, values)
        return original_insert(table, values)

    monkeypatch.setattr(admin_store, 'insert', racing_insert)
    row = record.ensure_exists()
    assert record.state is SingletonState.PRESENT
    assert AdminSettings.objects.count() == 1
    assert str(AdminSettings.objects.get().pk) == str(row['id'])


def test_ensure_exists_reraises_when_still_absent(admin_store, monkeypatch):
    def failing_insert(table, values):
        raise StoreError('connection refused', table=table, op='insert')

    monkeypatch.setattr(admin_store, 'insert', failing_insert)
    record = settings_record(admin_store)
    with pytest.raises(StoreError):
        record.ensure_exists()
    assert record.state is SingletonState.ABSENT


def test_anonymous_store_cannot_provision():
    record = profile_record(TableStore())
    with pytest.raises(StoreError):
        record.ensure_exists()
    assert DoctorProfile.objects.count() == 0


def test_public_fetch_never_provisions():
    fetched = fetch_profile(TableStore())
    assert fetched.data is None
    assert fetched.error is None
    assert fetch_settings().data is None
    assert DoctorProfile.objects.count() == 0
    assert AdminSettings.objects.count() == 0


def test_editor_saves_partial_changes(admin_store, notifier):
    editor = profile_editor(admin_store, notifier)
    assert editor.open() is True
    row = editor.save({'name': 'Dr. Meena', 'specializations': ['Skin', 'Skin', ' Joints ']})
    assert row['name'] == 'Dr. Meena'
    assert row['qualification'] == 'BBMS'
    assert row['specializations'] == ['Skin', 'Joints']
    assert notifier.notices[-1].title == 'Profile Saved'


def test_editor_failure_restores_row(admin_store, notifier, monkeypatch):
    editor = profile_editor(admin_store, notifier)
    editor.open()
    before = dict(editor.data)

    def failing_update(table, row_id, values):
        raise StoreError('timeout', table=table, op='update')

    monkeypatch.setattr(admin_store, 'update', failing_update)
    assert editor.save({'name': 'Dr. Meena'}) is None
    assert editor.data == before
    assert notifier.errors[-1].description == 'Failed to save profile.'


def test_editor_rejects_blank_name(admin_store, notifier):
    editor = profile_editor(admin_store, notifier)
    editor.open()
    assert editor.save({'name': ''}) is None
    assert 'name' in editor.field_errors
    assert DoctorProfile.objects.get().name == 'Dr. Siddha Specialist'
