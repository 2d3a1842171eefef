"""Website content blocks; the SEO title/description live in the ``seo`` block."""
from __future__ import annotations

import logging
from typing import Optional

from ..exceptions import StoreError, ValidationFailed
from ..models import WebsiteContent
from ..serializers import validate_or_raise
from ..serializers.content import SeoSerializer
from ..store import TableStore
from .audit import log_action
from .notify import Notifier

logger = logging.getLogger(__name__)

TABLE = 'website_content'


def load_seo(store: TableStore) -> Optional[dict]:
    """Return ``{'title', 'description'}`` or ``None`` when unset or unreadable."""
    try:
        row = store.maybe_single(TABLE, filters={'section_key': WebsiteContent.SEO_KEY})
    except StoreError as exc:
        logger.warning('reading SEO content failed: %s', exc)
        return None
    if row is None:
        return None
    return {'title': row.get('title') or '', 'description': row.get('content') or ''}


def upsert_seo(store: TableStore, data: dict) -> dict:
    """Update the SEO block, inserting it on first save.  Raises on invalid input or store failure."""
    values = validate_or_raise(SeoSerializer, data)
    changes = {'title': values['title'], 'content': values['description']}
    existing = store.maybe_single(TABLE, filters={'section_key': WebsiteContent.SEO_KEY})
    if existing:
        row = store.update(TABLE, existing['id'], changes)
    else:
        row = store.insert(TABLE, {'section_key': WebsiteContent.SEO_KEY, **changes})
    log_action(user=store.user, action=f'{TABLE}.update', object_type=TABLE, object_id=row['id'],
               detail={'section_key': WebsiteContent.SEO_KEY})
    return {'title': row.get('title') or '', 'description': row.get('content') or ''}


def save_seo(store: TableStore, data: dict, notifier: Notifier) -> Optional[dict]:
    try:
        seo = upsert_seo(store, data)
    except ValidationFailed as exc:
        notifier.error('Validation Error', exc.message)
        return None
    except StoreError as exc:
        logger.warning('saving SEO content failed: %s', exc)
        notifier.error('Error', 'Failed to save SEO settings.')
        return None
    notifier.success('SEO Settings Saved', 'Your SEO settings have been updated.')
    return seo
