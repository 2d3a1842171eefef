"""
Image upload endpoint.

Multipart ``files`` (one or more) plus an optional ``folder``.  The
whole batch is rejected when any file has the wrong type or size; a
failure partway through reports the URLs already stored.
"""
from __future__ import annotations

import re

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from ..permissions import IsAdminRole
from ..services.audit import log_action
from ..services.uploads import ImageUploader
from .common import ok

_FOLDER = re.compile(r'^[a-z0-9][a-z0-9_-]{0,63}$')


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def upload_images(request):
    folder = (request.data.get('folder') or 'uploads').strip().lower()
    if not _FOLDER.match(folder):
        folder = 'uploads'
    urls = ImageUploader().upload(request.FILES.getlist('files'), folder)
    log_action(user=request.user, action='upload', object_type='storage', detail={'folder': folder, 'count': len(urls)})
    return ok({'urls': urls}, status.HTTP_201_CREATED)

upload_images.cls.throttle_scope = 'upload'
