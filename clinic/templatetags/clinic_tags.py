from django import template

from ..services.badges import status_badge

register = template.Library()


@register.filter
def badge(value, kind='consultation'):
    return status_badge(value, kind)


@register.filter
def get_item(mapping, key):
    if not mapping:
        return None
    return mapping.get(key)


@register.filter
def joined(values, sep=', '):
    return sep.join(str(v) for v in (values or []))
