"""Input validation shared by the HTML screens and the JSON API."""
from __future__ import annotations

import html

import bleach

from ..exceptions import ValidationFailed


def clean_text(value):
    """Strip markup from free text; plain ampersands and quotes survive."""
    if value is None:
        return None
    return html.unescape(bleach.clean(str(value), tags=set(), strip=True)).strip()


def blank_to_none(attrs: dict, fields) -> dict:
    for f in fields:
        if f in attrs and attrs[f] == '':
            attrs[f] = None
    return attrs


def validate_or_raise(serializer_class, data, *, partial: bool = False) -> dict:
    """Run ``serializer_class`` over ``data`` and return validated values.

    Raises :class:`ValidationFailed` with the field errors so that callers
    can report the problem before anything reaches the store.
    """
    s = serializer_class(data=data, partial=partial)
    if not s.is_valid():
        raise ValidationFailed(s.errors, message=_first_message(s.errors))
    return dict(s.validated_data)


def _first_message(errors) -> str:
    if isinstance(errors, dict):
        for value in errors.values():
            msg = _first_message(value)
            if msg:
                return msg
    elif isinstance(errors, (list, tuple)):
        for value in errors:
            msg = _first_message(value)
            if msg:
                return msg
    elif errors:
        return str(errors)
    return 'Please fill in all required fields.'
