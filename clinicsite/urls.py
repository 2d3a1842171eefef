"""
URL configuration for the clinic website.

Public pages and the admin back-office come from ``clinic.urls``, the
JSON API from ``clinic.routers`` under ``/api/``.  The Django admin sits
at ``/django-admin/`` because ``/admin`` belongs to the back-office.
OpenAPI documentation is exposed at ``/swagger/`` and ``/redoc/``.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path, include

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

from clinic.views.health import healthz

# API metadata for Swagger/OpenAPI documentation
api_info = openapi.Info(
    title="Clinic Website API",
    default_version='v1',
    description="Public catalog, booking links and admin back-office endpoints of the clinic website.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('django-admin/', admin.site.urls),
    path('api/', include('clinic.routers')),
    path('healthz', healthz, name='healthz'),
    path('', include('django_prometheus.urls')),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
    path('', include('clinic.urls')),
] + static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

handler404 = 'clinic.views.pages.not_found'
