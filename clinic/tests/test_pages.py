from decimal import Decimal
from urllib.parse import parse_qs, urlsplit

import pytest
from django.contrib.messages import get_messages

from clinic.models import AdminSettings, ConsultationRequest, DoctorProfile, Medicine, Service, WebsiteContent

pytestmark = pytest.mark.django_db


def messages_of(response):
    return [str(m) for m in get_messages(response.wsgi_request)]


# ---------------------------------------------------------------------
# Public site
# ---------------------------------------------------------------------
@pytest.mark.parametrize('path', ['/', '/about', '/services', '/medicines', '/book', '/contact'])
def test_public_pages_render(client, path):
    assert client.get(path).status_code == 200


def test_unknown_path_renders_not_found(client):
    response = client.get('/no-such-page')
    assert response.status_code == 404
    assert b'Page not found' in response.content


def test_public_catalog_hides_inactive_medicines(client, tonic, syrup):
    response = client.get('/medicines')
    assert b'Pain Relief Tonic' in response.content
    assert b'Cough Syrup' not in response.content


def test_catalog_buy_link_follows_selling_switch(client, tonic):
    assert b'Consult &amp; Buy' in client.get('/medicines').content
    AdminSettings.objects.create(medicine_selling_enabled=False)
    content = client.get('/medicines').content
    assert b'Consult &amp; Buy' not in content
    assert b'Ask Doctor' in content


def test_disabled_services_are_not_listed(client):
    Service.objects.create(title='Pulse Diagnosis')
    Service.objects.create(title='Varmam Therapy', is_enabled=False)
    content = client.get('/services').content
    assert b'Pulse Diagnosis' in content
    assert b'Varmam Therapy' not in content


def test_seo_title_and_description_are_used(client):
    WebsiteContent.objects.create(section_key='seo', title='Siddha Clinic Chennai', content='Traditional care')
    content = client.get('/').content.decode()
    assert '<title>Siddha Clinic Chennai</title>' in content
    assert '<meta name="description" content="Traditional care">' in content


def test_booking_links_to_clinic_number_and_stores_nothing(client):
    DoctorProfile.objects.create(name='Dr. Meena', qualification='BSMS', whatsapp_number='+91 90000 11111')
    response = client.post('/book', {
        'name': 'Ravi', 'age': '42', 'gender': 'male', 'phone': '9876543210',
        'health_issue': 'Knee pain', 'consultation_type': 'phone',
    })
    assert response.status_code == 200
    assert b'Consultation Request Sent!' in response.content
    url = response.context['whatsapp_url']
    assert url.startswith('https://wa.me/919000011111?text=')
    text = parse_qs(urlsplit(url).query)['text'][0]
    assert 'Name: Ravi' in text and 'Phone Call' in text
    assert ConsultationRequest.objects.count() == 0


def test_booking_with_missing_fields_is_rejected(client):
    response = client.post('/book', {'name': 'Ravi'})
    assert response.status_code == 400
    assert response.context['errors']['phone']


def test_contact_form_builds_link(client, settings):
    settings.CLINIC_WHATSAPP_NUMBER = '910000000000'
    response = client.post('/contact', {'name': 'Meena', 'message': 'What are the timings?'})
    assert response.status_code == 200
    assert response.context['whatsapp_url'].startswith('https://wa.me/910000000000?text=')


def test_maintenance_mode_blocks_public_pages_only(client, admin_user):
    AdminSettings.objects.create(maintenance_mode=True)
    response = client.get('/')
    assert response.status_code == 503
    assert b'Under Maintenance' in response.content
    assert client.get('/admin/login').status_code == 200
    assert client.get('/api/public/services').status_code == 200
    assert client.get('/healthz').status_code == 200
    client.force_login(admin_user)
    assert client.get('/admin').status_code == 200


def test_healthz(client):
    response = client.get('/healthz')
    assert response.status_code == 200
    assert response.json() == {'ok': True, 'db': True}


# ---------------------------------------------------------------------
# Admin screens
# ---------------------------------------------------------------------
@pytest.fixture
def admin_client(client, admin_user):
    client.force_login(admin_user)
    return client


def test_medicine_screen_create_and_search(admin_client, syrup):
    response = admin_client.post('/admin/medicines', {
        'action': 'create', 'name': 'Pain Relief Tonic', 'category': 'Tonic', 'price': '250',
        'stock_status': 'Available', 'is_active': 'true', 'images_field': '1',
    })
    assert response.status_code == 302
    assert 'Medicine Added: Pain Relief Tonic has been added.' in messages_of(response)
    assert Medicine.objects.filter(name='Pain Relief Tonic').count() == 1
    content = admin_client.get('/admin/medicines?q=tonic').content
    assert b'Pain Relief Tonic' in content
    assert b'Cough Syrup' not in content
    # the admin search ignores the active flag
    assert b'Cough Syrup' in admin_client.get('/admin/medicines?q=syrup').content


def test_medicine_screen_invalid_create_keeps_form(admin_client):
    response = admin_client.post('/admin/medicines', {'action': 'create', 'name': 'Herbal Hair Oil', 'price': '0'})
    assert response.status_code == 400
    assert response.context['editing']['name'] == 'Herbal Hair Oil'
    assert b'value="Herbal Hair Oil"' in response.content
    assert Medicine.objects.count() == 0


def test_medicine_screen_delete_asks_for_confirmation(admin_client, tonic):
    response = admin_client.post('/admin/medicines', {'action': 'delete', 'id': str(tonic.pk)})
    assert response.status_code == 200
    assert b'Are you sure you want to delete' in response.content
    assert Medicine.objects.filter(pk=tonic.pk).exists()
    response = admin_client.post('/admin/medicines', {'action': 'delete', 'id': str(tonic.pk), 'confirm': 'yes'})
    assert response.status_code == 302
    assert not Medicine.objects.filter(pk=tonic.pk).exists()


def test_medicine_screen_toggle(admin_client, tonic):
    admin_client.post('/admin/medicines', {'action': 'toggle', 'id': str(tonic.pk)})
    tonic.refresh_from_db()
    assert tonic.is_active is False


def test_medicine_screen_image_upload_and_remove(admin_client, tonic):
    from django.core.files.uploadedfile import SimpleUploadedFile

    photo = SimpleUploadedFile('tonic.png', b'\x89PNG' + b'\0' * 64, content_type='image/png')
    admin_client.post('/admin/medicines', {
        'action': 'update', 'id': str(tonic.pk), 'images_field': '1', 'image_files': photo,
    })
    tonic.refresh_from_db()
    assert len(tonic.images) == 1
    assert tonic.images[0].startswith('/media/admin-uploads/medicines/')
    admin_client.post('/admin/medicines', {
        'action': 'update', 'id': str(tonic.pk), 'images_field': '1', 'images': tonic.images, 'remove_image': '0',
    })
    tonic.refresh_from_db()
    assert tonic.images == []
    assert tonic.price == Decimal('250.00')


def test_medicine_screen_rejected_images_block_create(admin_client, settings):
    from django.core.files.uploadedfile import SimpleUploadedFile

    big = SimpleUploadedFile('big.png', b'\0' * (6 * 1024 * 1024), content_type='image/png')
    small = SimpleUploadedFile('small.png', b'\0' * 1024, content_type='image/png')
    response = admin_client.post('/admin/medicines', {
        'action': 'create', 'name': 'Herbal Oil', 'category': 'Oil', 'price': '120',
        'images_field': '1', 'image_files': [big, small],
    })
    assert response.status_code == 400
    assert 'Invalid upload: Please upload images smaller than 5MB.' in messages_of(response)
    assert not any(m.startswith('Medicine Added') for m in messages_of(response))
    assert response.context['editing']['name'] == 'Herbal Oil'
    assert not Medicine.objects.filter(name='Herbal Oil').exists()
    assert not list(settings.MEDIA_ROOT.rglob('*.png'))


def test_consultation_screen_status_and_filter(admin_client):
    ravi = ConsultationRequest.objects.create(patient_name='Ravi', patient_phone='9876543210', health_issue='Knee')
    ConsultationRequest.objects.create(patient_name='Meena', patient_phone='9123456780', health_issue='Skin')
    response = admin_client.post('/admin/consultations', {'action': 'update', 'id': str(ravi.pk), 'status': 'Contacted'})
    assert response.status_code == 302
    assert any(m.startswith('Status Updated') for m in messages_of(response))
    content = admin_client.get('/admin/consultations?status=Contacted').content
    assert b'Ravi' in content and b'Meena' not in content
    assert b'badge-secondary' in content
    assert b'https://wa.me/9876543210?text=' in content


def test_dashboard_lists_recent_consultations(admin_client):
    ConsultationRequest.objects.create(patient_name='Ravi', patient_phone='1', health_issue='Knee pain')
    response = admin_client.get('/admin')
    assert response.context['stats']['total_consultations'] == 1
    assert b'Knee pain' in response.content


def test_profile_screen_saves_timings_and_specializations(admin_client):
    response = admin_client.post('/admin/profile', {
        'name': 'Dr. Meena', 'qualification': 'BSMS', 'specializations': 'Skin, Joints, ',
        'timing_sunday': 'By appointment',
    })
    assert response.status_code == 302
    profile = DoctorProfile.objects.get()
    assert profile.name == 'Dr. Meena'
    assert profile.specializations == ['Skin', 'Joints']
    assert profile.clinic_timings['sunday'] == 'By appointment'
    assert profile.clinic_timings['monday'] == '9:00 AM - 6:00 PM'


def test_profile_screen_rejected_photo_blocks_save(admin_client):
    from django.core.files.uploadedfile import SimpleUploadedFile

    admin_client.get('/admin/profile')
    before = DoctorProfile.objects.get().name
    response = admin_client.post('/admin/profile', {
        'name': 'Dr. New Name',
        'photo': SimpleUploadedFile('cv.pdf', b'%PDF-1.4', content_type='application/pdf'),
    })
    assert response.status_code == 400
    assert 'Invalid upload: Please upload only image files (JPEG, PNG, WebP, GIF).' in messages_of(response)
    assert b'value="Dr. New Name"' in response.content
    assert DoctorProfile.objects.get().name == before


def test_content_screen_seo_and_services(admin_client):
    admin_client.post('/admin/content', {'form': 'seo', 'title': 'Siddha Clinic', 'description': 'Care'})
    seo = WebsiteContent.objects.get(section_key='seo')
    assert (seo.title, seo.content) == ('Siddha Clinic', 'Care')
    admin_client.post('/admin/content', {'action': 'create', 'title': 'Pulse Diagnosis', 'sort_order': '1',
                                         'is_enabled': 'true'})
    assert Service.objects.filter(title='Pulse Diagnosis', sort_order=1).exists()


def test_content_screen_rejected_seo_keeps_typed_values(admin_client):
    response = admin_client.post('/admin/content', {'form': 'seo', 'title': 'x' * 300,
                                                    'description': 'Traditional Siddha care'})
    assert response.status_code == 400
    assert any(m.startswith('Validation Error') for m in messages_of(response))
    assert b'Traditional Siddha care</textarea>' in response.content
    assert not WebsiteContent.objects.filter(section_key='seo').exists()


def test_settings_screen_flags(admin_client):
    response = admin_client.post('/admin/settings', {
        'form': 'settings', 'whatsapp_number': '+91 90000 22222', 'flags': ['maintenance_mode', 'sms_notifications'],
    })
    assert response.status_code == 302
    row = AdminSettings.objects.get()
    assert row.maintenance_mode is True
    assert row.sms_notifications is True
    assert row.medicine_selling_enabled is False
