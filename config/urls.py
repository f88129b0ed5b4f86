"""URL configuration for TravelTrove project.

The `urlpatterns` list routes URLs to views. It includes the Django admin,
the API schema and the routers provided by each domain app.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView  # type: ignore

from shared.api.views import health, service_root

urlpatterns = [
    path('', service_root, name='service-root'),
    path('health/', health, name='health'),
    path('admin/', admin.site.urls),
    # Application URLs
    path('api/auth/', include('apps.users.auth_urls', namespace='auth')),
    path('api/properties/', include('apps.properties.urls')),
    path('api/bookings/', include('apps.bookings.urls')),
    # API documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
]
