"""
Helpers shared by the JSON API views.

The collection endpoints (medicines, consultations, inquiries, services)
differ only in their :class:`~clinic.services.crud.CollectionConfig`, so
list/create/update/toggle/delete live here once.  Store and validation
errors are raised and turned into the error envelope by
:func:`clinic.exceptions.api_exception_handler`.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response

from ..exceptions import ClinicError
from ..serializers import validate_or_raise
from ..services.audit import log_action
from ..services.crud import ALL, CollectionConfig, filter_rows
from ..services.identity import lookup_is_admin
from ..store import TableStore


class ConfirmationRequired(ClinicError):
    code = 'confirmation_required'


def store_for(request) -> TableStore:
    user = request.user if request.user and request.user.is_authenticated else None
    return TableStore(user, is_admin=lookup_is_admin(user))


def ok(data=None, code=status.HTTP_200_OK, **extra) -> Response:
    payload = {'ok': True, 'data': data}
    payload.update(extra)
    return Response(payload, status=code)


def list_rows(request, config: CollectionConfig) -> Response:
    rows = store_for(request).select(config.table, order=config.order)
    status_value = request.query_params.get('status', ALL)
    if status_value not in config.statuses:
        status_value = ALL
    rows = filter_rows(rows, request.query_params.get('q', ''), config.search_fields,
                       config.status_field, status_value)
    return ok(rows, count=len(rows))


def create_row(request, config: CollectionConfig) -> Response:
    values = validate_or_raise(config.create_serializer, request.data)
    row = store_for(request).insert(config.table, values)
    log_action(user=request.user, action=f'{config.table}.create', object_type=config.table, object_id=row['id'])
    return ok(row, status.HTTP_201_CREATED)


def update_row(request, config: CollectionConfig, pk) -> Response:
    values = validate_or_raise(config.update_serializer, request.data, partial=True)
    row = store_for(request).update(config.table, pk, values)
    log_action(user=request.user, action=f'{config.table}.update', object_type=config.table, object_id=pk,
               detail={'fields': sorted(values)})
    return ok(row)


def toggle_row(request, config: CollectionConfig, pk, field: str) -> Response:
    store = store_for(request)
    current = store.single(config.table, filters={'pk': pk})
    row = store.update(config.table, pk, {field: not current[field]})
    log_action(user=request.user, action=f'{config.table}.toggle', object_type=config.table, object_id=pk,
               detail={field: row[field]})
    return ok(row)


def delete_row(request, config: CollectionConfig, pk) -> Response:
    if str(request.query_params.get('confirm', '')).lower() not in {'1', 'true', 'yes'}:
        raise ConfirmationRequired('Deleting requires confirm=true')
    store_for(request).delete(config.table, pk)
    log_action(user=request.user, action=f'{config.table}.delete', object_type=config.table, object_id=pk)
    return ok({'id': str(pk)})
