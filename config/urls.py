"""URL configuration for the golf club project.

The `urlpatterns` list routes URLs to views. It includes both Django admin
and application‑level routers provided by Django Rest Framework and each app.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import (  # type: ignore
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

from shared.api.health import healthz

# API versioning. v1 is our initial version; future versions can be added here.

urlpatterns = [
    path('admin/', admin.site.urls),
    path('health/', healthz, name='healthz'),
    # Application URLs
    path('api/v1/auth/', include(('apps.users.auth_urls', 'auth'), namespace='auth')),
    path('api/v1/courses/', include('apps.courses.urls')),
    path('api/v1/', include('apps.bookings.urls')),
    path('api/v1/payments/', include('apps.finances.urls')),
    path('api/v1/notifications/', include('apps.notifications.urls')),
    # Club administration API
    path('api/v1/admin/', include('apps.users.api.urls')),
    path('api/v1/admin/', include('apps.bookings.admin_urls')),
    path('api/v1/admin/', include('apps.analytics.urls')),
    # drf-spectacular URLs
    path('api/v1/schema/', SpectacularAPIView.as_view(), name='schema'),
    path(
        'api/v1/schema/swagger-ui/',
        SpectacularSwaggerView.as_view(url_name='schema'),
        name='swagger-ui',
    ),
    path(
        'api/v1/schema/redoc/',
        SpectacularRedocView.as_view(url_name='schema'),
        name='redoc',
    ),
]
