"""
Django admin registrations for the clinic models.

The back-office screens under ``/admin`` are the real management UI;
the Django admin at ``/django-admin/`` is kept for superusers to inspect
rows and grant roles during development.
"""

from django.contrib import admin

from .models import (
    AdminSettings,
    AuditEvent,
    ConsultationRequest,
    DoctorProfile,
    Medicine,
    MedicineInquiry,
    Service,
    UserRole,
    WebsiteContent,
)


@admin.register(UserRole)
class UserRoleAdmin(admin.ModelAdmin):
    list_display = ('user', 'role', 'created_at')
    list_filter = ('role',)
    search_fields = ('user__username', 'user__email')


@admin.register(DoctorProfile)
class DoctorProfileAdmin(admin.ModelAdmin):
    list_display = ('name', 'qualification', 'contact_phone', 'whatsapp_number', 'updated_at')


@admin.register(Medicine)
class MedicineAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'price', 'stock_status', 'is_active', 'created_at')
    list_filter = ('category', 'stock_status', 'is_active')
    search_fields = ('name', 'category')


@admin.register(ConsultationRequest)
class ConsultationRequestAdmin(admin.ModelAdmin):
    list_display = ('patient_name', 'patient_phone', 'consultation_type', 'status', 'created_at')
    list_filter = ('status', 'consultation_type')
    search_fields = ('patient_name', 'patient_phone', 'health_issue')


@admin.register(MedicineInquiry)
class MedicineInquiryAdmin(admin.ModelAdmin):
    list_display = ('medicine_name', 'customer_name', 'customer_phone', 'status', 'inquiry_date')
    list_filter = ('status',)
    search_fields = ('medicine_name', 'customer_phone', 'customer_name')


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ('title', 'icon', 'is_enabled', 'sort_order')
    list_filter = ('is_enabled',)


@admin.register(WebsiteContent)
class WebsiteContentAdmin(admin.ModelAdmin):
    list_display = ('section_key', 'title', 'is_enabled', 'updated_at')


@admin.register(AdminSettings)
class AdminSettingsAdmin(admin.ModelAdmin):
    list_display = ('whatsapp_number', 'maintenance_mode', 'medicine_selling_enabled', 'updated_at')


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'user', 'object_type', 'object_id', 'created_at')
    list_filter = ('action', 'object_type')
    search_fields = ('action', 'object_id', 'user__username')
