"""Object storage over Django's storage backend: one folder per bucket."""
from __future__ import annotations

import logging

from django.core.files.storage import default_storage

from ..exceptions import StoreError

logger = logging.getLogger(__name__)


class ObjectStorage:
    def __init__(self, backend=None):
        self.backend = backend or default_storage

    @staticmethod
    def _path(bucket: str, key: str) -> str:
        return f'{bucket.strip("/")}/{key.lstrip("/")}'

    def upload(self, bucket: str, key: str, file) -> str:
        """Store ``file`` under ``bucket/key``; returns the stored key."""
        path = self._path(bucket, key)
        if self.backend.exists(path):
            raise StoreError(f'The resource already exists: {key}', table=bucket, op='upload')
        try:
            stored = self.backend.save(path, file)
        except OSError as exc:
            logger.warning('upload of %s failed: %s', path, exc)
            raise StoreError(str(exc), table=bucket, op='upload') from exc
        return stored[len(bucket.strip('/')) + 1:]

    def get_public_url(self, bucket: str, key: str) -> str:
        return self.backend.url(self._path(bucket, key))
