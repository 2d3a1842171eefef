"""
Table-style data access for every screen.

Screens never touch the ORM directly; they go through :class:`TableStore`,
which exposes a small, table-name keyed API (select, single-row-or-none,
insert, partial update by id, delete by id, count) and returns rows as
plain dictionaries.  Row-level policies are applied here: anonymous and
non-admin actors may only read the public slice of the public tables and
may not write at all.  Every database failure surfaces as
:class:`~clinic.exceptions.StoreError`; nothing is retried.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from django.core.exceptions import FieldError, ValidationError as DjangoValidationError
from django.db import DatabaseError, models, transaction

from .exceptions import PolicyViolation, RowNotFound, StoreError
from .models import (
    AdminSettings,
    ConsultationRequest,
    DoctorProfile,
    Medicine,
    MedicineInquiry,
    Service,
    WebsiteContent,
)

logger = logging.getLogger(__name__)

# Columns the store manages itself; callers cannot write them.
READ_ONLY_COLUMNS = frozenset({'id', 'singleton_key', 'created_at', 'updated_at', 'inquiry_date'})


@dataclass(frozen=True)
class TableSpec:
    model: type[models.Model]
    # None: admin only.  {}: every row is public.  Otherwise the visible slice.
    public_filter: Optional[dict] = None
    hidden_columns: frozenset = field(default_factory=lambda: frozenset({'singleton_key'}))

    @property
    def columns(self) -> list[str]:
        return [f.attname for f in self.model._meta.concrete_fields if f.attname not in self.hidden_columns]

    @property
    def writable_columns(self) -> set[str]:
        return {c for c in self.columns if c not in READ_ONLY_COLUMNS}


TABLES: dict[str, TableSpec] = {
    'doctor_profile': TableSpec(DoctorProfile, public_filter={}),
    'medicines': TableSpec(Medicine, public_filter={'is_active': True}),
    'consultation_requests': TableSpec(ConsultationRequest),
    'medicine_inquiries': TableSpec(MedicineInquiry),
    'services': TableSpec(Service, public_filter={'is_enabled': True}),
    'website_content': TableSpec(WebsiteContent, public_filter={'is_enabled': True}),
    'admin_settings': TableSpec(AdminSettings),
}


def _with_tiebreak(order: Iterable[str]) -> list[str]:
    """Rows sharing the sort key keep creation order."""
    keys = list(order)
    bare = {k.lstrip('-') for k in keys}
    if 'created_at' not in bare:
        keys.append('created_at')
    keys.append('pk')
    return keys


class TableStore:
    """Table access on behalf of one actor.

    ``is_admin`` must come from the role lookup of :mod:`clinic.services.identity`,
    never from client input.  ``privileged`` is for trusted server-side code
    (middleware, management commands) that reads configuration rows.
    """

    def __init__(self, user=None, *, is_admin: bool = False, privileged: bool = False):
        self.user = user
        self.is_admin = is_admin
        self.privileged = privileged

    @classmethod
    def service(cls) -> 'TableStore':
        return cls(privileged=True)

    # ------------------------------------------------------------------
    # Policies
    # ------------------------------------------------------------------
    def _spec(self, table: str) -> TableSpec:
        try:
            return TABLES[table]
        except KeyError:
            raise StoreError(f'relation "{table}" does not exist', table=table) from None

    @property
    def _elevated(self) -> bool:
        return self.privileged or self.is_admin

    def _readable(self, table: str) -> models.QuerySet:
        spec = self._spec(table)
        qs = spec.model.objects.all()
        if self._elevated:
            return qs
        if spec.public_filter is None:
            raise PolicyViolation(f'permission denied for table {table}', table=table, op='select')
        return qs.filter(**spec.public_filter)

    def _check_write(self, table: str, op: str) -> TableSpec:
        spec = self._spec(table)
        if not self._elevated:
            raise PolicyViolation(
                f'new row violates row-level security policy for table "{table}"', table=table, op=op
            )
        return spec

    def _clean_values(self, spec: TableSpec, table: str, values: dict) -> dict:
        unknown = set(values) - spec.writable_columns
        if unknown:
            raise StoreError(f'could not write column(s) {", ".join(sorted(unknown))} of "{table}"', table=table)
        return dict(values)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def select(
        self,
        table: str,
        *,
        filters: Optional[dict] = None,
        order: Iterable[str] = ('-created_at',),
        limit: Optional[int] = None,
        columns: Optional[Iterable[str]] = None,
    ) -> list[dict]:
        spec = self._spec(table)
        try:
            qs = self._readable(table)
            if filters:
                qs = qs.filter(**filters)
            qs = qs.order_by(*_with_tiebreak(order))
            if limit:
                qs = qs[:limit]
            return list(qs.values(*(columns or spec.columns)))
        except (DatabaseError, FieldError, DjangoValidationError) as exc:
            logger.warning('select on %s failed: %s', table, exc)
            raise StoreError(str(exc), table=table, op='select') from exc

    def maybe_single(self, table: str, *, filters: Optional[dict] = None) -> Optional[dict]:
        """Return the one matching row, ``None`` when absent; error on several."""
        rows = self.select(table, filters=filters, limit=2)
        if len(rows) > 1:
            raise StoreError(f'multiple rows returned from "{table}"', table=table, op='maybe_single')
        return rows[0] if rows else None

    def single(self, table: str, *, filters: Optional[dict] = None) -> dict:
        row = self.maybe_single(table, filters=filters)
        if row is None:
            raise RowNotFound(f'no rows returned from "{table}"', table=table, op='single')
        return row

    def count(self, table: str, *, filters: Optional[dict] = None) -> int:
        try:
            qs = self._readable(table)
            if filters:
                qs = qs.filter(**filters)
            return qs.count()
        except (DatabaseError, FieldError, DjangoValidationError) as exc:
            logger.warning('count on %s failed: %s', table, exc)
            raise StoreError(str(exc), table=table, op='count') from exc

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def _row(self, spec: TableSpec, obj: models.Model) -> dict:
        return {c: getattr(obj, c) for c in spec.columns}

    def insert(self, table: str, values: dict) -> dict:
        """Insert one row and return it with its generated id and timestamps."""
        spec = self._check_write(table, 'insert')
        data = self._clean_values(spec, table, values)
        try:
            with transaction.atomic():
                obj = spec.model.objects.create(**data)
            obj.refresh_from_db()
        except (DatabaseError, DjangoValidationError, TypeError, ValueError) as exc:
            logger.warning('insert into %s failed: %s', table, exc)
            raise StoreError(str(exc), table=table, op='insert') from exc
        logger.info('inserted %s row %s', table, obj.pk)
        return self._row(spec, obj)

    def update(self, table: str, row_id: Any, values: dict) -> dict:
        """Write only ``values`` to the row with ``row_id`` and return the stored row."""
        spec = self._check_write(table, 'update')
        data = self._clean_values(spec, table, values)
        try:
            with transaction.atomic():
                obj = spec.model.objects.select_for_update().filter(pk=row_id).first()
                if obj is None:
                    raise RowNotFound(f'no row {row_id} in "{table}"', table=table, op='update')
                for column, value in data.items():
                    setattr(obj, column, value)
                update_fields = list(data)
                if 'updated_at' in spec.columns:
                    update_fields.append('updated_at')
                obj.save(update_fields=update_fields)
            obj.refresh_from_db()
        except StoreError:
            raise
        except (DatabaseError, DjangoValidationError, TypeError, ValueError) as exc:
            logger.warning('update of %s/%s failed: %s', table, row_id, exc)
            raise StoreError(str(exc), table=table, op='update') from exc
        return self._row(spec, obj)

    def delete(self, table: str, row_id: Any) -> None:
        spec = self._check_write(table, 'delete')
        try:
            with transaction.atomic():
                deleted, _ = spec.model.objects.filter(pk=row_id).delete()
        except (DatabaseError, DjangoValidationError, ValueError) as exc:
            logger.warning('delete of %s/%s failed: %s', table, row_id, exc)
            raise StoreError(str(exc), table=table, op='delete') from exc
        if not deleted:
            raise RowNotFound(f'no row {row_id} in "{table}"', table=table, op='delete')
        logger.info('deleted %s row %s', table, row_id)
