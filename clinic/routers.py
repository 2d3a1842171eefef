"""
URL mappings for the clinic JSON API.

Mounted under ``/api/`` by :mod:`clinicsite.urls`.  Trailing slashes
are omitted, matching ``APPEND_SLASH = False``.
"""
from django.urls import path

from .auth_views import (
    email_change_view,
    jwt_refresh_view,
    password_change_view,
    session_view,
    sign_in_view,
    sign_out_view,
    sign_up_view,
)
from .views import admin_settings, consultations, content, dashboard, inquiries, medicines, profile, public, uploads

urlpatterns = [
    # Identity
    path('auth/sign-in', sign_in_view, name='api-sign-in'),
    path('auth/sign-up', sign_up_view, name='api-sign-up'),
    path('auth/sign-out', sign_out_view, name='api-sign-out'),
    path('auth/session', session_view, name='api-session'),
    path('auth/refresh', jwt_refresh_view, name='api-refresh'),
    path('auth/email', email_change_view, name='api-email'),
    path('auth/password', password_change_view, name='api-password'),

    # Public, read-only
    path('public/profile', public.profile, name='api-public-profile'),
    path('public/medicines', public.medicines, name='api-public-medicines'),
    path('public/services', public.services, name='api-public-services'),
    path('public/seo', public.seo, name='api-public-seo'),
    path('public/booking', public.booking, name='api-public-booking'),
    path('public/contact', public.contact, name='api-public-contact'),

    # Admin
    path('admin/dashboard', dashboard.admin_dashboard, name='api-dashboard'),
    path('admin/profile', profile.doctor_profile, name='api-profile'),
    path('admin/settings', admin_settings.admin_settings, name='api-settings'),
    path('admin/medicines', medicines.medicines, name='api-medicines'),
    path('admin/medicines/<uuid:pk>', medicines.medicine_detail, name='api-medicine-detail'),
    path('admin/medicines/<uuid:pk>/toggle', medicines.medicine_toggle, name='api-medicine-toggle'),
    path('admin/consultations', consultations.consultations, name='api-consultations'),
    path('admin/consultations/<uuid:pk>', consultations.consultation_detail, name='api-consultation-detail'),
    path('admin/consultations/<uuid:pk>/whatsapp', consultations.consultation_reply_link, name='api-consultation-whatsapp'),
    path('admin/inquiries', inquiries.inquiries, name='api-inquiries'),
    path('admin/inquiries/<uuid:pk>', inquiries.inquiry_detail, name='api-inquiry-detail'),
    path('admin/inquiries/<uuid:pk>/whatsapp', inquiries.inquiry_reply_link, name='api-inquiry-whatsapp'),
    path('admin/services', content.services, name='api-services'),
    path('admin/services/<uuid:pk>', content.service_detail, name='api-service-detail'),
    path('admin/services/<uuid:pk>/toggle', content.service_toggle, name='api-service-toggle'),
    path('admin/seo', content.seo, name='api-seo'),
    path('admin/uploads', uploads.upload_images, name='api-uploads'),
]
