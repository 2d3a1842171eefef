"""HTML routes: the public site and the admin back-office."""
from django.urls import path

from .views import admin_pages, pages

urlpatterns = [
    path('', pages.home, name='home'),
    path('about', pages.about, name='about'),
    path('services', pages.services, name='services'),
    path('medicines', pages.medicines, name='medicines'),
    path('book', pages.book, name='book'),
    path('contact', pages.contact, name='contact'),

    path('admin', admin_pages.dashboard, name='admin-dashboard'),
    path('admin/login', admin_pages.login_page, name='admin-login'),
    path('admin/logout', admin_pages.logout_page, name='admin-logout'),
    path('admin/profile', admin_pages.profile, name='admin-profile'),
    path('admin/consultations', admin_pages.consultations, name='admin-consultations'),
    path('admin/medicines', admin_pages.medicines, name='admin-medicines'),
    path('admin/inquiries', admin_pages.inquiries, name='admin-inquiries'),
    path('admin/content', admin_pages.content, name='admin-content'),
    path('admin/settings', admin_pages.settings_page, name='admin-settings'),
    path('admin/confirm-email/<str:token>', admin_pages.confirm_email, name='admin-confirm-email'),
]
