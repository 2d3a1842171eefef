"""
Error types shared by the services and the unified API error envelope.

Validation problems are caught before any table call, store failures
after it; neither is ever retried automatically.
"""
from __future__ import annotations

import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class ClinicError(Exception):
    code = 'clinic_error'
    status_code = 400

    def __init__(self, message: str = ''):
        super().__init__(message)
        self.message = message


class ValidationFailed(ClinicError):
    """Input rejected locally; nothing was sent to the store."""
    code = 'validation_error'

    def __init__(self, errors, message: str = 'Please fill in all required fields.'):
        super().__init__(message)
        self.errors = errors


class StoreError(ClinicError):
    """A table call failed (connection, constraint, missing row...)."""
    code = 'store_error'
    status_code = 502

    def __init__(self, message: str, *, table: str | None = None, op: str | None = None):
        super().__init__(message)
        self.table = table
        self.op = op


class PolicyViolation(StoreError):
    """The acting identity is not allowed to touch the row."""
    code = 'policy_violation'
    status_code = 403


class RowNotFound(StoreError):
    code = 'not_found'
    status_code = 404


class AuthError(ClinicError):
    code = 'auth_error'


class UploadRejected(ClinicError):
    """The whole batch failed type/size validation; nothing was uploaded."""
    code = 'upload_rejected'


class UploadFailed(ClinicError):
    """Uploading stopped partway; files before the failure stay uploaded."""
    code = 'upload_failed'
    status_code = 502

    def __init__(self, message: str, uploaded: list[str] | None = None):
        super().__init__(message)
        self.uploaded = list(uploaded or [])


def api_exception_handler(exc, context):
    if isinstance(exc, ClinicError):
        error = {'code': exc.code, 'message': exc.message}
        if isinstance(exc, ValidationFailed):
            error['fields'] = exc.errors
        if isinstance(exc, UploadFailed):
            error['uploaded'] = exc.uploaded
        return Response({'ok': False, 'error': error}, status=exc.status_code)
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('unhandled API error', exc_info=exc)
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    # normalize response
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = str(resp.data)
    return Response({'ok': False, 'error': {'code': 'api_error', 'message': detail}}, status=resp.status_code)
