"""
Singleton records: the doctor profile and the admin settings.

Each table holds exactly one logical row.  :class:`SingletonRecord` moves
through ``ABSENT -> PROVISIONING -> PRESENT`` and the only way to create
the row is :meth:`SingletonRecord.ensure_exists`, which is idempotent:
calling it again, or racing another session that provisions first,
ends with the same single row.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..exceptions import StoreError, ValidationFailed
from ..models import default_clinic_timings
from ..serializers import validate_or_raise
from ..serializers.admin_settings import AdminSettingsSerializer
from ..serializers.profile import DoctorProfileSerializer
from ..store import TableStore
from .audit import log_action
from .notify import Notifier

logger = logging.getLogger(__name__)

PROFILE_TABLE = 'doctor_profile'
SETTINGS_TABLE = 'admin_settings'


def profile_defaults() -> dict:
    return {
        'name': 'Dr. Siddha Specialist',
        'qualification': 'BBMS',
        'specializations': [],
        'clinic_timings': default_clinic_timings(),
    }


def settings_defaults() -> dict:
    # column defaults cover every switch
    return {}


class SingletonState(str, enum.Enum):
    ABSENT = 'absent'
    PROVISIONING = 'provisioning'
    PRESENT = 'present'


class SingletonRecord:
    def __init__(self, store: TableStore, table: str, defaults=None):
        self.store = store
        self.table = table
        self._defaults = defaults or dict
        self.state = SingletonState.ABSENT
        self.row: Optional[dict] = None

    def load(self) -> Optional[dict]:
        """Read the row without creating it."""
        row = self.store.maybe_single(self.table)
        if row is not None:
            self.row = row
            self.state = SingletonState.PRESENT
        return row

    def ensure_exists(self) -> dict:
        if self.state is SingletonState.PRESENT and self.row is not None:
            return self.row
        if self.load() is not None:
            return self.row
        self.state = SingletonState.PROVISIONING
        try:
            row = self.store.insert(self.table, self._defaults())
            logger.info('provisioned %s with defaults', self.table)
        except StoreError:
            # another session may have provisioned it first (unique key)
            row = self.store.maybe_single(self.table)
            if row is None:
                self.state = SingletonState.ABSENT
                raise
        self.row = row
        self.state = SingletonState.PRESENT
        return row

    def save(self, changes: dict) -> dict:
        """Write ``changes`` to the one row, provisioning it first if needed."""
        row = self.ensure_exists()
        stored = self.store.update(self.table, row['id'], changes)
        self.row = {**row, **{k: stored[k] for k in changes if k in stored}}
        return self.row


def profile_record(store: TableStore) -> SingletonRecord:
    return SingletonRecord(store, PROFILE_TABLE, profile_defaults)


def settings_record(store: TableStore) -> SingletonRecord:
    return SingletonRecord(store, SETTINGS_TABLE, settings_defaults)


class SingletonEditor:
    """Admin screen state for a singleton: the row, an error flag and notifications."""

    def __init__(self, record: SingletonRecord, serializer, notifier: Notifier, label: str):
        self.record = record
        self.serializer = serializer
        self.notifier = notifier
        self.label = label
        self.is_loading = True
        self.field_errors: dict = {}

    @property
    def data(self) -> Optional[dict]:
        return self.record.row

    def open(self) -> bool:
        try:
            self.record.ensure_exists()
            return True
        except StoreError as exc:
            logger.warning('loading %s failed: %s', self.record.table, exc)
            self.notifier.error('Error', f'Failed to load {self.label.lower()}.')
            return False
        finally:
            self.is_loading = False

    def save(self, changes: dict) -> Optional[dict]:
        try:
            values = validate_or_raise(self.serializer, changes, partial=True)
        except ValidationFailed as exc:
            self.field_errors = exc.errors
            self.notifier.error('Validation Error', exc.message)
            return None
        before = self.record.row
        try:
            row = self.record.save(values)
        except StoreError as exc:
            logger.warning('saving %s failed: %s', self.record.table, exc)
            self.record.row = before
            self.notifier.error('Error', f'Failed to save {self.label.lower()}.')
            return None
        self.field_errors = {}
        log_action(user=self.record.store.user, action=f'{self.record.table}.update',
                   object_type=self.record.table, object_id=row['id'], detail={'fields': sorted(values)})
        self.notifier.success(f'{self.label} Saved', f'Your {self.label.lower()} has been updated.')
        return row


def profile_editor(store: TableStore, notifier: Notifier) -> SingletonEditor:
    return SingletonEditor(profile_record(store), DoctorProfileSerializer, notifier, 'Profile')


def settings_editor(store: TableStore, notifier: Notifier) -> SingletonEditor:
    return SingletonEditor(settings_record(store), AdminSettingsSerializer, notifier, 'Settings')


@dataclass(frozen=True)
class Fetched:
    """Loading/error/data triple for public read-only views."""
    data: Any = None
    error: Optional[str] = None
    is_loading: bool = False


def fetch_singleton(store: TableStore, table: str) -> Fetched:
    """Read a singleton for display; never provisions it."""
    try:
        return Fetched(data=store.maybe_single(table))
    except StoreError as exc:
        logger.warning('public read of %s failed: %s', table, exc)
        return Fetched(error=exc.message)


def fetch_profile(store: TableStore) -> Fetched:
    return fetch_singleton(store, PROFILE_TABLE)


def fetch_settings() -> Fetched:
    """Settings are admin-only rows; public pages read them with the service store."""
    return fetch_singleton(TableStore.service(), SETTINGS_TABLE)
