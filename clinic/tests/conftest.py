from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

from clinic.models import Medicine, UserRole
from clinic.services.notify import Notifier
from clinic.store import TableStore

PASSWORD = 'P@ssw0rd1'


@pytest.fixture(autouse=True)
def _isolation(settings, tmp_path):
    # throttling counters live in the cache
    cache.clear()
    settings.MEDIA_ROOT = tmp_path
    settings.EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'
    yield
    cache.clear()


def make_user(email, *, admin=False):
    user = get_user_model().objects.create_user(username=email, email=email, password=PASSWORD)
    if admin:
        UserRole.objects.create(user=user, role=UserRole.ROLE_ADMIN)
    return user


@pytest.fixture
def admin_user(db):
    return make_user('doctor@example.com', admin=True)


@pytest.fixture
def plain_user(db):
    return make_user('visitor@example.com')


@pytest.fixture
def admin_api(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def admin_store(admin_user):
    return TableStore(admin_user, is_admin=True)


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def tonic(db):
    return Medicine.objects.create(name='Pain Relief Tonic', category='Tonic', price=Decimal('250.00'),
                                   used_for='Joint pain, Back pain', is_active=True)


@pytest.fixture
def syrup(db):
    return Medicine.objects.create(name='Cough Syrup', category='Syrup', price=Decimal('150.00'), is_active=False)
