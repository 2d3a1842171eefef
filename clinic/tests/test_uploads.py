import re

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from clinic.exceptions import StoreError, UploadFailed, UploadRejected
from clinic.services.notify import Notifier
from clinic.services.storage import ObjectStorage
from clinic.services.uploads import ImageUploader, apply, generate_key, remove

MIB = 1024 * 1024


def image(name='photo.png', size=1024, content_type='image/png'):
    return SimpleUploadedFile(name, b'\0' * size, content_type=content_type)


class RecordingStorage(ObjectStorage):
    """Counts uploads; fails on the upload numbered ``fail_on`` (1-based)."""

    def __init__(self, fail_on=None):
        super().__init__()
        self.fail_on = fail_on
        self.keys = []

    def upload(self, bucket, key, file):
        if self.fail_on is not None and len(self.keys) + 1 == self.fail_on:
            raise StoreError('bucket unavailable', table=bucket, op='upload')
        self.keys.append(key)
        return key

    def get_public_url(self, bucket, key):
        return f'https://cdn.example.com/{bucket}/{key}'


def test_oversize_file_rejects_whole_batch():
    storage = RecordingStorage()
    uploader = ImageUploader(storage, bucket='admin-uploads', max_bytes=5 * MIB)
    batch = [image('large.jpg', 6 * MIB, 'image/jpeg'), image('small.png', 1 * MIB)]
    with pytest.raises(UploadRejected):
        uploader.upload(batch, 'medicines')
    assert storage.keys == []


def test_wrong_type_rejects_whole_batch():
    storage = RecordingStorage()
    uploader = ImageUploader(storage, bucket='admin-uploads', max_bytes=5 * MIB)
    with pytest.raises(UploadRejected) as excinfo:
        uploader.upload([image(), image('notes.pdf', 10, 'application/pdf')], 'medicines')
    assert 'image files' in excinfo.value.message
    assert storage.keys == []


def test_empty_batch_is_rejected():
    with pytest.raises(UploadRejected):
        ImageUploader(RecordingStorage(), bucket='b', max_bytes=MIB).upload([], 'x')


def test_sequential_upload_returns_urls_in_order():
    storage = RecordingStorage()
    uploader = ImageUploader(storage, bucket='admin-uploads', max_bytes=5 * MIB)
    urls = uploader.upload([image('a.png'), image('b.webp', content_type='image/webp')], 'medicines')
    assert len(urls) == 2
    assert urls[0].startswith('https://cdn.example.com/admin-uploads/medicines/')
    assert urls[0].endswith('.png')
    assert urls[1].endswith('.webp')
    assert len(set(storage.keys)) == 2


def test_partial_failure_keeps_and_reports_earlier_uploads():
    storage = RecordingStorage(fail_on=2)
    uploader = ImageUploader(storage, bucket='admin-uploads', max_bytes=5 * MIB)
    with pytest.raises(UploadFailed) as excinfo:
        uploader.upload([image('a.png'), image('b.png'), image('c.png')], 'medicines')
    assert len(storage.keys) == 1
    assert excinfo.value.uploaded == [f'https://cdn.example.com/admin-uploads/{storage.keys[0]}']


def test_upload_into_leaves_value_unchanged_on_failure():
    notifier = Notifier()
    uploader = ImageUploader(RecordingStorage(fail_on=1), bucket='b', max_bytes=5 * MIB)
    value = ['https://cdn.example.com/b/old.png']
    assert uploader.upload_into(value, [image()], folder='medicines', multiple=True, notifier=notifier) == value
    assert notifier.errors[-1].title == 'Upload failed'
    assert uploader.error == 'Failed to upload image. Please try again.'


def test_upload_into_single_mode_replaces_value():
    uploader = ImageUploader(RecordingStorage(), bucket='b', max_bytes=5 * MIB)
    value = uploader.upload_into('https://cdn.example.com/b/old.png', [image()], folder='profile')
    assert value.startswith('https://cdn.example.com/b/profile/')
    assert uploader.error is None


def test_generate_key_is_scoped_and_collision_resistant():
    keys = {generate_key('medicines/', image('x.JPG')) for _ in range(50)}
    assert len(keys) == 50
    for key in keys:
        assert re.fullmatch(r'medicines/\d{13}-[0-9a-f]{8}\.jpg', key)


def test_apply_and_remove():
    assert apply(['a'], ['b', 'c'], multiple=True) == ['a', 'b', 'c']
    assert apply(None, ['b'], multiple=True) == ['b']
    assert apply('old', ['new'], multiple=False) == 'new'
    assert remove(['a', 'b', 'c'], 1, multiple=True) == ['a', 'c']
    assert remove('old', multiple=False) == ''


def test_object_storage_writes_under_bucket_folder(settings, tmp_path):
    storage = ObjectStorage()
    key = storage.upload('admin-uploads', 'medicines/1-abc.png', image())
    assert key == 'medicines/1-abc.png'
    assert (tmp_path / 'admin-uploads' / 'medicines' / '1-abc.png').exists()
    assert storage.get_public_url('admin-uploads', key) == '/media/admin-uploads/medicines/1-abc.png'
    with pytest.raises(StoreError):
        storage.upload('admin-uploads', 'medicines/1-abc.png', image())
