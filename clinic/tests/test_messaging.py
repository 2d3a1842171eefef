from urllib.parse import parse_qs, urlsplit

import pytest

from clinic.services import messaging
from clinic.services.badges import status_badge


def text_of(url):
    return parse_qs(urlsplit(url).query)['text'][0]


def test_whatsapp_link_uses_digits_and_encodes_text():
    url = messaging.whatsapp_link('+91 95007-69849', 'Hello Doctor & team?')
    assert url.startswith('https://wa.me/919500769849?text=')
    assert '%26' in url and '%3F' in url and ' ' not in url
    assert text_of(url) == 'Hello Doctor & team?'


def test_whatsapp_link_without_text():
    assert messaging.whatsapp_link('919500769849') == 'https://wa.me/919500769849'


def test_clinic_number_falls_back_in_order(settings):
    settings.CLINIC_WHATSAPP_NUMBER = '910000000000'
    assert messaging.clinic_number({'whatsapp_number': '911111111111'}, {'whatsapp_number': '922'}) == '911111111111'
    assert messaging.clinic_number({'whatsapp_number': ''}, {'whatsapp_number': '922'}) == '922'
    assert messaging.clinic_number(None, None) == '910000000000'


def test_booking_message_lists_patient_details():
    text = messaging.booking_message({
        'name': 'Ravi', 'age': 42, 'gender': 'male', 'phone': '9876543210',
        'health_issue': 'Knee pain', 'consultation_type': 'phone',
    })
    assert 'Name: Ravi' in text
    assert 'Age: 42' in text
    assert 'Knee pain' in text
    assert 'Phone Call' in text


def test_contact_message_marks_missing_fields():
    text = messaging.contact_message({'name': 'Meena', 'message': 'Timings?'})
    assert 'Not provided' in text
    assert 'Timings?' in text


def test_reply_links_use_admin_templates():
    row = {'patient_name': 'Ravi', 'patient_phone': '+91 98765 43210'}
    url = messaging.consultation_reply_link(row, {'consultation_message_template': 'Namaste {name}!'})
    assert url.startswith('https://wa.me/919876543210?text=')
    assert text_of(url) == 'Namaste Ravi!'
    inquiry = {'medicine_name': 'Pain Relief Tonic', 'customer_phone': '98765'}
    assert 'Pain Relief Tonic' in text_of(messaging.inquiry_reply_link(inquiry, None))


def test_broken_template_falls_back_to_default():
    row = {'patient_name': 'Ravi', 'patient_phone': '1'}
    url = messaging.consultation_reply_link(row, {'consultation_message_template': 'Hi {patient}'})
    assert text_of(url) == messaging.DEFAULT_CONSULTATION_REPLY.format(name='Ravi')


@pytest.mark.parametrize('value,kind,expected', [
    ('New', 'consultation', 'default'),
    ('Contacted', 'consultation', 'secondary'),
    ('Completed', 'consultation', 'outline'),
    ('Cancelled', 'consultation', 'destructive'),
    ('Replied', 'inquiry', 'secondary'),
    ('Closed', 'inquiry', 'outline'),
    ('Out of Stock', 'stock', 'destructive'),
    ('Archived', 'consultation', 'default'),
    (None, 'consultation', 'default'),
    ('New', 'unknown-kind', 'default'),
])
def test_status_badge_never_fails(value, kind, expected):
    assert status_badge(value, kind) == expected
