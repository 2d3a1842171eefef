"""
Image upload helper for admin forms.

A batch is validated as a whole (type against the allow-list, size
against ``UPLOAD_MAX_MB``) before anything is stored; one bad file
rejects the batch.  Accepted files are uploaded one at a time under
``<folder>/<epoch-ms>-<random>.<ext>``.  When an upload fails partway,
the files already stored stay stored and are reported together with the
failure; they are not removed.
"""
from __future__ import annotations

import logging
import mimetypes
import secrets
import time
from typing import Iterable, Optional, Union

from django.conf import settings

from ..exceptions import StoreError, UploadFailed, UploadRejected
from .notify import Notifier
from .storage import ObjectStorage

logger = logging.getLogger(__name__)

Value = Union[str, list, None]


def _content_type(file) -> str:
    ctype = getattr(file, 'content_type', None)
    if not ctype:
        ctype, _ = mimetypes.guess_type(getattr(file, 'name', '') or '')
    return (ctype or '').lower()


def _extension(file) -> str:
    name = getattr(file, 'name', '') or ''
    if '.' in name:
        return name.rsplit('.', 1)[-1].lower()
    guessed = mimetypes.guess_extension(_content_type(file)) or ''
    return guessed.lstrip('.') or 'bin'


def generate_key(folder: str, file) -> str:
    return f'{folder.strip("/")}/{int(time.time() * 1000)}-{secrets.token_hex(4)}.{_extension(file)}'


class ImageUploader:
    def __init__(self, storage: Optional[ObjectStorage] = None, *, bucket: Optional[str] = None,
                 max_bytes: Optional[int] = None, allowed_types: Optional[Iterable[str]] = None):
        self.storage = storage or ObjectStorage()
        self.bucket = bucket or settings.UPLOAD_BUCKET
        self.max_bytes = max_bytes if max_bytes is not None else settings.UPLOAD_MAX_MB * 1024 * 1024
        self.allowed_types = set(allowed_types or settings.ALLOWED_IMAGE_TYPES)
        # notice of the last failed upload_into; None after a success
        self.error: Optional[str] = None

    def validate(self, files: list) -> None:
        if not files:
            raise UploadRejected('No files selected.')
        if any(_content_type(f) not in self.allowed_types for f in files):
            raise UploadRejected('Please upload only image files (JPEG, PNG, WebP, GIF).')
        if any((getattr(f, 'size', 0) or 0) > self.max_bytes for f in files):
            raise UploadRejected(f'Please upload images smaller than {self.max_bytes // (1024 * 1024)}MB.')

    def upload(self, files: Iterable, folder: str = 'uploads') -> list[str]:
        """Validate the batch, then upload sequentially; returns the public URLs."""
        files = list(files)
        self.validate(files)
        urls: list[str] = []
        for file in files:
            key = generate_key(folder, file)
            try:
                stored = self.storage.upload(self.bucket, key, file)
            except StoreError as exc:
                logger.warning('upload stopped after %d of %d file(s): %s', len(urls), len(files), exc)
                raise UploadFailed('Failed to upload image. Please try again.', uploaded=urls) from exc
            urls.append(self.storage.get_public_url(self.bucket, stored))
        logger.info('uploaded %d image(s) to %s/%s', len(urls), self.bucket, folder)
        return urls

    def upload_into(self, value: Value, files: Iterable, *, folder: str = 'uploads', multiple: bool = False,
                    notifier: Optional[Notifier] = None) -> Value:
        """Upload and apply to a form value; on any failure the value is returned unchanged."""
        self.error = None
        try:
            urls = self.upload(files, folder)
        except UploadRejected as exc:
            self.error = exc.message
            if notifier:
                notifier.error('Invalid upload', exc.message)
            return value
        except UploadFailed as exc:
            self.error = exc.message
            if notifier:
                notifier.error('Upload failed', f'{exc.message} {len(exc.uploaded)} image(s) were stored before the error.')
            return value
        if notifier:
            notifier.success('Upload successful', f'{len(urls)} image(s) uploaded.')
        return apply(value, urls, multiple=multiple)


def apply(value: Value, urls: list[str], *, multiple: bool) -> Value:
    """Single mode replaces the value; multi mode appends to the list."""
    if multiple:
        return [*(value or []), *urls]
    return urls[0] if urls else (value or '')


def remove(value: Value, index: int = 0, *, multiple: bool) -> Value:
    """Drop one URL from the value.  The stored object is left in place."""
    if not multiple:
        return ''
    return [url for i, url in enumerate(value or []) if i != index]
