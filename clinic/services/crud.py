"""
Local state for one admin-managed collection.

:class:`CollectionState` holds the rows a screen shows, plus the search
text and status filter applied to them, and keeps the rows in step with
the store:

* fetch replaces the rows only when the call succeeds;
* create validates first, then adds the returned row (server id and
  timestamps included) and closes the editor;
* update and toggle patch only the changed fields of the one row;
* delete needs an explicit confirmation and drops the row by id.

A failed call leaves the rows exactly as they were and produces an error
notice; a successful mutation produces a success notice.  Nothing is
retried.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from ..exceptions import StoreError, ValidationFailed
from ..serializers import validate_or_raise
from ..store import TableStore
from .audit import log_action
from .notify import Notifier

logger = logging.getLogger(__name__)

ALL = 'all'


@dataclass(frozen=True)
class CollectionConfig:
    table: str
    label: str
    order: tuple = ('-created_at',)
    search_fields: tuple = ()
    status_field: Optional[str] = None
    statuses: tuple = ()
    create_serializer: Any = None
    update_serializer: Any = None
    toggle_fields: tuple = ()
    title_field: str = 'name'
    plural: str = ''
    # 'start', 'end' or 'sorted' (by the first order key, after equal keys)
    insert_at: str = 'start'


def filter_rows(rows: Iterable[dict], query: str = '', fields: Iterable[str] = (),
                status_field: Optional[str] = None, status: str = ALL) -> list[dict]:
    """Case-insensitive substring search over ``fields`` plus an exact status match."""
    q = (query or '').strip().lower()
    fields = tuple(fields)
    result = []
    for row in rows:
        if q and not any(q in str(row.get(f) or '').lower() for f in fields):
            continue
        if status_field and status and status != ALL and row.get(status_field) != status:
            continue
        result.append(row)
    return result


def _same_id(a, b) -> bool:
    return str(a) == str(b)


class CollectionState:
    def __init__(self, config: CollectionConfig, store: TableStore, notifier: Notifier):
        self.config = config
        self.store = store
        self.notifier = notifier
        self.rows: list[dict] = []
        self.query = ''
        self.status_filter = ALL
        self.is_loading = True
        # entered values of a create/edit that failed; the editor stays open on them
        self.editing: Optional[dict] = None
        self.field_errors: dict = {}

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------
    def fetch(self) -> bool:
        try:
            rows = self.store.select(self.config.table, order=self.config.order)
        except StoreError as exc:
            logger.warning('loading %s failed: %s', self.config.table, exc)
            self.notifier.error('Error', f'Failed to load {self.config.plural or self.config.label.lower() + "s"}.')
            return False
        finally:
            self.is_loading = False
        self.rows = rows
        return True

    def set_filters(self, query: Optional[str] = None, status: Optional[str] = None) -> None:
        if query is not None:
            self.query = query
        if status is not None:
            self.status_filter = status if status in self.config.statuses else ALL

    @property
    def visible(self) -> list[dict]:
        return filter_rows(
            self.rows, self.query, self.config.search_fields, self.config.status_field, self.status_filter
        )

    def get(self, row_id) -> Optional[dict]:
        for row in self.rows:
            if _same_id(row['id'], row_id):
                return row
        return None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _title(self, row: dict) -> str:
        return str(row.get(self.config.title_field) or self.config.label)

    def _validation_error(self, exc: ValidationFailed, data: dict) -> None:
        self.editing = dict(data)
        self.field_errors = exc.errors
        self.notifier.error('Validation Error', exc.message)

    def _audit(self, action: str, row_id, detail: Optional[dict] = None) -> None:
        log_action(user=self.store.user, action=action, object_type=self.config.table,
                   object_id=row_id, detail=detail)

    def _insertion_index(self, row: dict) -> int:
        if self.config.insert_at == 'start':
            return 0
        if self.config.insert_at == 'end' or not self.config.order:
            return len(self.rows)
        key = self.config.order[0]
        desc = key.startswith('-')
        key = key.lstrip('-')
        value = row.get(key)
        for index, existing in enumerate(self.rows):
            other = existing.get(key)
            if value is None or other is None:
                continue
            if (other < value) if desc else (other > value):
                return index
        return len(self.rows)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def create(self, data: dict) -> Optional[dict]:
        try:
            values = validate_or_raise(self.config.create_serializer, data)
        except ValidationFailed as exc:
            self._validation_error(exc, data)
            return None
        try:
            row = self.store.insert(self.config.table, values)
        except StoreError as exc:
            logger.warning('creating %s failed: %s', self.config.table, exc)
            self.editing = dict(data)
            self.notifier.error('Error', f'Failed to save {self.config.label.lower()}.')
            return None
        rows = list(self.rows)
        rows.insert(self._insertion_index(row), row)
        self.rows = rows
        self.editing = None
        self.field_errors = {}
        self._audit(f'{self.config.table}.create', row['id'])
        self.notifier.success(f'{self.config.label} Added', f'{self._title(row)} has been added.')
        return row

    def _apply(self, row_id, values: dict) -> Optional[dict]:
        """Send ``values`` to the store; on success patch those fields locally."""
        try:
            stored = self.store.update(self.config.table, row_id, values)
        except StoreError as exc:
            logger.warning('updating %s/%s failed: %s', self.config.table, row_id, exc)
            return None
        patch = {k: stored[k] for k in values if k in stored}
        self.rows = [{**r, **patch} if _same_id(r['id'], row_id) else r for r in self.rows]
        return self.get(row_id) or stored

    def update(self, row_id, changes: dict) -> Optional[dict]:
        try:
            values = validate_or_raise(self.config.update_serializer, changes, partial=True)
        except ValidationFailed as exc:
            self._validation_error(exc, changes)
            return None
        row = self._apply(row_id, values)
        if row is None:
            self.editing = dict(changes)
            self.notifier.error('Error', f'Failed to update {self.config.label.lower()}.')
            return None
        self.editing = None
        self.field_errors = {}
        self._audit(f'{self.config.table}.update', row_id, {'fields': sorted(values)})
        if self.config.status_field and set(values) == {self.config.status_field}:
            self.notifier.success('Status Updated', f'{self.config.label} marked as {values[self.config.status_field]}.')
        else:
            self.notifier.success(f'{self.config.label} Updated', f'{self._title(row)} has been updated.')
        return row

    def toggle(self, row_id, field: str) -> Optional[dict]:
        """Flip a boolean visibility flag; two toggles restore the original value."""
        if field not in self.config.toggle_fields:
            raise ValueError(f'{field} is not a toggle of {self.config.table}')
        current = self.get(row_id)
        if current is None:
            self.notifier.error('Error', f'{self.config.label} not found.')
            return None
        new_value = not bool(current.get(field))
        row = self._apply(row_id, {field: new_value})
        if row is None:
            self.notifier.error('Error', f'Failed to update {self.config.label.lower()} status.')
            return None
        self._audit(f'{self.config.table}.toggle', row_id, {field: new_value})
        state = 'visible' if new_value else 'hidden'
        self.notifier.success(f'{self.config.label} Updated', f'{self._title(row)} is now {state}.')
        return row

    def delete(self, row_id, *, confirmed: bool) -> bool:
        if not confirmed:
            return False
        row = self.get(row_id)
        try:
            self.store.delete(self.config.table, row_id)
        except StoreError as exc:
            logger.warning('deleting %s/%s failed: %s', self.config.table, row_id, exc)
            self.notifier.error('Error', f'Failed to delete {self.config.label.lower()}.')
            return False
        self.rows = [r for r in self.rows if not _same_id(r['id'], row_id)]
        self._audit(f'{self.config.table}.delete', row_id)
        title = self._title(row) if row else self.config.label
        self.notifier.success(f'{self.config.label} Deleted', f'{title} has been removed.')
        return True
