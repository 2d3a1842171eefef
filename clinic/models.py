"""
Database models for the clinic website.

The tables mirror what the public site and the admin back-office read
and write: the doctor's profile, the medicine catalog, consultation and
medicine inquiry records, the services list, free-form website content
blocks and the admin settings.  Rows are exposed to the rest of the
application as plain dictionaries through :mod:`clinic.store`, so field
names here are the column names every screen works with.
"""
from __future__ import annotations

import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


SINGLETON_KEY = 'default'


def default_clinic_timings() -> dict:
    return {
        'monday': '9:00 AM - 6:00 PM',
        'tuesday': '9:00 AM - 6:00 PM',
        'wednesday': '9:00 AM - 6:00 PM',
        'thursday': '9:00 AM - 6:00 PM',
        'friday': '9:00 AM - 6:00 PM',
        'saturday': '9:00 AM - 1:00 PM',
        'sunday': 'Closed',
    }


class UserRole(models.Model):
    """Role assignment looked up after the identity is resolved.

    Signing up never creates a row here; an admin role is granted out of
    band (``manage.py grant_admin``).
    """
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        ('admin', 'Administrator'),
        ('moderator', 'Moderator'),
        ('user', 'User'),
    ]
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='roles')
    role = models.CharField(max_length=16, choices=ROLE_CHOICES, default='user')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = [('user', 'role')]

    def __str__(self) -> str:
        return f"{self.user} ({self.role})"


class DoctorProfile(models.Model):
    """Singleton row describing the doctor and the clinic."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    # Unique constant key keeps the table at one row even under concurrent provisioning
    singleton_key = models.CharField(max_length=16, unique=True, default=SINGLETON_KEY, editable=False)
    name = models.CharField(max_length=255)
    qualification = models.CharField(max_length=255)
    photo_url = models.URLField(max_length=1024, blank=True, null=True)
    about = models.TextField(blank=True, null=True)
    years_of_experience = models.PositiveIntegerField(blank=True, null=True)
    specializations = models.JSONField(default=list, blank=True)
    contact_phone = models.CharField(max_length=32, blank=True, null=True)
    contact_email = models.EmailField(blank=True, null=True)
    whatsapp_number = models.CharField(max_length=32, blank=True, null=True)
    clinic_address = models.TextField(blank=True, null=True)
    clinic_timings = models.JSONField(default=default_clinic_timings, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.name


class Medicine(models.Model):
    STOCK_AVAILABLE = 'Available'
    STOCK_LIMITED = 'Limited'
    STOCK_OUT = 'Out of Stock'
    STOCK_CHOICES = [
        (STOCK_AVAILABLE, 'Available'),
        (STOCK_LIMITED, 'Limited'),
        (STOCK_OUT, 'Out of Stock'),
    ]
    CATEGORY_CHOICES = [
        ('Tablet', 'Tablet'),
        ('Syrup', 'Syrup'),
        ('Tonic', 'Tonic'),
        ('Powder', 'Powder'),
        ('Oil', 'Oil'),
        ('Capsule', 'Capsule'),
        ('Other', 'Other'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=64, default='Tablet')
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    stock_status = models.CharField(max_length=16, choices=STOCK_CHOICES, default=STOCK_AVAILABLE)
    images = models.JSONField(default=list, blank=True)
    description = models.TextField(blank=True, null=True)
    # comma-joined tags
    used_for = models.TextField(blank=True, null=True)
    dosage_notes = models.TextField(blank=True, null=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.CheckConstraint(condition=models.Q(price__gte=0), name='medicine_price_non_negative'),
        ]

    def __str__(self) -> str:
        return self.name


class ConsultationRequest(models.Model):
    STATUS_NEW = 'New'
    STATUS_CHOICES = [
        ('New', 'New'),
        ('Contacted', 'Contacted'),
        ('Completed', 'Completed'),
        ('Cancelled', 'Cancelled'),
    ]
    TYPE_CHOICES = [
        ('online', 'Online Video Call'),
        ('phone', 'Phone Call'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient_name = models.CharField(max_length=255)
    patient_phone = models.CharField(max_length=32)
    patient_age = models.PositiveIntegerField(blank=True, null=True)
    patient_gender = models.CharField(max_length=16, blank=True, null=True)
    health_issue = models.TextField()
    consultation_type = models.CharField(max_length=16, blank=True, null=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_NEW, db_index=True)
    doctor_notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.patient_name} ({self.status})"


class MedicineInquiry(models.Model):
    STATUS_NEW = 'New'
    STATUS_CHOICES = [
        ('New', 'New'),
        ('Replied', 'Replied'),
        ('Closed', 'Closed'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    medicine = models.ForeignKey(Medicine, null=True, blank=True, on_delete=models.SET_NULL, related_name='inquiries')
    medicine_name = models.CharField(max_length=255)
    customer_name = models.CharField(max_length=255, blank=True, null=True)
    customer_phone = models.CharField(max_length=32)
    inquiry_date = models.DateTimeField(auto_now_add=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_NEW, db_index=True)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.medicine_name} <- {self.customer_phone}"


class Service(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    icon = models.CharField(max_length=64, default='Stethoscope')
    is_enabled = models.BooleanField(default=True, db_index=True)
    sort_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.title


class WebsiteContent(models.Model):
    """Keyed content block; ``section_key='seo'`` holds the meta title/description."""
    SEO_KEY = 'seo'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    section_key = models.CharField(max_length=64, unique=True)
    title = models.CharField(max_length=255, blank=True, null=True)
    content = models.TextField(blank=True, null=True)
    metadata = models.JSONField(default=dict, blank=True)
    is_enabled = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.section_key


class AdminSettings(models.Model):
    """Singleton row of site-wide switches and messaging templates."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    singleton_key = models.CharField(max_length=16, unique=True, default=SINGLETON_KEY, editable=False)
    whatsapp_number = models.CharField(max_length=32, blank=True, null=True)
    consultation_message_template = models.TextField(blank=True, null=True)
    medicine_inquiry_template = models.TextField(blank=True, null=True)
    maintenance_mode = models.BooleanField(default=False)
    medicine_selling_enabled = models.BooleanField(default=True)
    email_notifications = models.BooleanField(default=True)
    sms_notifications = models.BooleanField(default=False)
    new_consultation_notification = models.BooleanField(default=True)
    new_inquiry_notification = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = 'admin settings'

    def __str__(self) -> str:
        return f"settings ({self.singleton_key})"


class AuditEvent(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='clinic_audit_action_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='clinic_audit_object_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.action}:{self.user_id}@{self.created_at:%F %T}"
