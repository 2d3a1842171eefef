"""
WhatsApp deep links.

Public forms do not store anything: a booking or contact submission is
turned into a pre-filled chat message for the clinic's number.  Admin
screens use the same builder to reply to a patient or customer.
"""
from __future__ import annotations

import re
from typing import Optional
from urllib.parse import quote

from django.conf import settings

DEFAULT_GREETING = 'Hello Doctor, I would like to consult you.'
DEFAULT_CONSULTATION_REPLY = (
    'Hello {name}, this is Dr. Siddha Specialist. I received your consultation request. '
    'How can I help you today?'
)
DEFAULT_INQUIRY_REPLY = (
    "Hello! Thank you for your interest in {medicine}. I'm Dr. Siddha Specialist. "
    'How can I help you with this medicine?'
)

_NON_DIGITS = re.compile(r'[^0-9]')


def digits(number: Optional[str]) -> str:
    return _NON_DIGITS.sub('', number or '')


def whatsapp_link(number: Optional[str], text: Optional[str] = None) -> str:
    url = f'https://wa.me/{digits(number)}'
    if text:
        # same escaping as encodeURIComponent
        url += '?text=' + quote(text, safe="-_.!~*'()")
    return url


def clinic_number(settings_row: Optional[dict] = None, profile_row: Optional[dict] = None) -> str:
    """The number public links target: admin settings, then the profile, then configuration."""
    for row in (settings_row, profile_row):
        if row and digits(row.get('whatsapp_number')):
            return row['whatsapp_number']
    return settings.CLINIC_WHATSAPP_NUMBER


def booking_message(data: dict) -> str:
    kind = 'Online Video Call' if data.get('consultation_type', 'online') == 'online' else 'Phone Call'
    return (
        '🏥 *New Consultation Request*\n\n'
        '👤 *Patient Details:*\n'
        f"Name: {data['name']}\n"
        f"Age: {data['age']}\n"
        f"Gender: {data['gender']}\n"
        f"Phone: {data['phone']}\n\n"
        '📋 *Health Issue:*\n'
        f"{data['health_issue']}\n\n"
        f'📞 *Preferred Consultation:* {kind}\n\n'
        '---\n'
        f'Sent from {settings.CLINIC_SITE_NAME} Website'
    )


def contact_message(data: dict) -> str:
    return (
        '📧 *Contact Form Message*\n\n'
        f"👤 *From:* {data['name']}\n"
        f"📧 *Email:* {data.get('email') or 'Not provided'}\n"
        f"📱 *Phone:* {data.get('phone') or 'Not provided'}\n\n"
        '💬 *Message:*\n'
        f"{data['message']}\n\n"
        '---\n'
        'Sent from Contact Page'
    )


def medicine_buy_message(medicine: dict) -> str:
    return (
        f'Hello Doctor, I am interested in "{medicine["name"]}" (Price: ₹{medicine["price"]}). '
        'I would like to consult before purchasing this medicine.'
    )


def medicine_ask_message(medicine: dict) -> str:
    return f'Hello Doctor, I would like to know more about "{medicine["name"]}" and its benefits.'


def _render(template: Optional[str], default: str, **values) -> str:
    template = template or default
    try:
        return template.format(**values)
    except (KeyError, IndexError, ValueError):
        # admin-edited template with stray braces
        return default.format(**values)


def consultation_reply_link(row: dict, settings_row: Optional[dict] = None) -> str:
    text = _render((settings_row or {}).get('consultation_message_template'), DEFAULT_CONSULTATION_REPLY,
                   name=row.get('patient_name') or '')
    return whatsapp_link(row.get('patient_phone'), text)


def inquiry_reply_link(row: dict, settings_row: Optional[dict] = None) -> str:
    text = _render((settings_row or {}).get('medicine_inquiry_template'), DEFAULT_INQUIRY_REPLY,
                   medicine=row.get('medicine_name') or '', name=row.get('customer_name') or '')
    return whatsapp_link(row.get('customer_phone'), text)
