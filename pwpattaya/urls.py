"""
URL configuration for the PW Pattaya project.

API resources are reachable with and without a language prefix:
/api/v1/properties/ serves English, /de/api/v1/properties/ serves German
display fields (see LANGUAGES in settings).
"""

import logging
import sys

from django.conf import settings
from django.conf.urls.i18n import i18n_patterns
from django.contrib import admin
from django.db import connection, DatabaseError
from django.http import JsonResponse
from django.urls import path, include
from django.utils import timezone
from django.views.decorators.cache import cache_control
from django.views.decorators.http import require_http_methods
from rest_framework_simplejwt.views import (
    TokenObtainPairView,
    TokenRefreshView,
    TokenVerifyView,
)

logger = logging.getLogger(__name__)


# =============================================================================
# HEALTH CHECK ENDPOINT
# =============================================================================

@require_http_methods(["GET"])
@cache_control(no_cache=True, must_revalidate=True, no_store=True)
def health_check(request):
    """
    Health check endpoint for deployment monitoring.

    Returns:
        JSON response with system status and database connectivity
    """
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
    except DatabaseError as e:
        logger.error(f"Health check database failure: {e}")
        return JsonResponse({
            "status": "unhealthy",
            "database": "error",
            "error": str(e) if settings.DEBUG else "Database connection failed"
        }, status=503)

    return JsonResponse({
        "status": "healthy",
        "database": "connected",
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}",
        "timestamp": timezone.now().isoformat(),
    })


# =============================================================================
# API INFO ENDPOINT
# =============================================================================

@require_http_methods(["GET"])
def api_info(request):
    """
    API information endpoint for frontend integration.

    Returns:
        JSON response with API version and available endpoints
    """
    api_info_data = {
        "api_name": "PW Pattaya API",
        "version": "1.0",
        "description": "Pattaya real estate listings, projects and leads",
        "languages": [code for code, _name in settings.LANGUAGES],
        "endpoints": {
            "authentication": {
                "token_obtain": "/api/v1/auth/token/",
                "token_refresh": "/api/v1/auth/token/refresh/",
                "token_verify": "/api/v1/auth/token/verify/",
            },
            "properties": {
                "list_create": "/api/v1/properties/",
                "detail_update": "/api/v1/properties/{id}/",
                "by_slug": "/api/v1/properties/by-slug/{slug}/",
                "bulk_import": "/api/v1/properties/import/",
            },
            "projects": {
                "list_create": "/api/v1/projects/",
                "detail_update": "/api/v1/projects/{id}/",
                "by_slug": "/api/v1/projects/by-slug/{slug}/",
            },
            "templates": {
                "list_create": "/api/v1/templates/",
                "use": "/api/v1/templates/{id}/use/",
                "autofill": "/api/v1/templates/autofill/",
                "options": "/api/v1/templates/options/",
            },
            "leads": {
                "submit_list": "/api/v1/leads/",
                "detail_update": "/api/v1/leads/{id}/",
            },
            "imports": {
                "csv_import": "/api/v1/imports/csv/",
                "batches": "/api/v1/imports/batches/",
                "batch_detail": "/api/v1/imports/batches/{batch_id}/",
            },
            "utilities": {
                "health": "/api/v1/health/",
            }
        },
        "data_stats": {
            "active_properties": None,
            "projects": None,
        }
    }

    try:
        from properties.models import Property, Project
        api_info_data["data_stats"]["active_properties"] = Property.objects.filter(status='active').count()
        api_info_data["data_stats"]["projects"] = Project.objects.count()
    except DatabaseError:
        logger.warning("API info: database not ready, omitting data stats")

    return JsonResponse(api_info_data)


# =============================================================================
# MAIN URL PATTERNS
# =============================================================================

urlpatterns = [
    # Django Admin Interface
    path('admin/', admin.site.urls),

    # Health and System Status
    path('api/v1/health/', health_check, name='health-check'),
    path('api/v1/info/', api_info, name='api-info'),

    # Authentication Endpoints (JWT)
    path('api/v1/auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/v1/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('api/v1/auth/token/verify/', TokenVerifyView.as_view(), name='token_verify'),

    # API Root
    path('api/v1/', api_info, name='api-root'),
    path('api/', api_info, name='api-default'),
]

# Localized API resources (no prefix for English)
urlpatterns += i18n_patterns(
    path('api/v1/imports/', include('imports.urls')),
    path('api/v1/', include('properties.urls')),
    path('api/v1/', include('leads.urls')),
    prefix_default_language=False,
)


# =============================================================================
# CUSTOM ERROR HANDLERS
# =============================================================================

def _is_api_request(request):
    return '/api/' in request.path


def custom_404_handler(request, exception):
    """Custom 404 handler for API endpoints"""
    if _is_api_request(request):
        return JsonResponse({
            'error': 'API endpoint not found',
            'message': f'The requested endpoint {request.path} does not exist',
            'available_endpoints': '/api/v1/info/'
        }, status=404)

    from django.views.defaults import page_not_found
    return page_not_found(request, exception)


def custom_500_handler(request):
    """Custom 500 handler for API endpoints"""
    if _is_api_request(request):
        return JsonResponse({
            'error': 'Internal server error',
            'message': 'An unexpected error occurred',
        }, status=500)

    from django.views.defaults import server_error
    return server_error(request)


handler404 = custom_404_handler
handler500 = custom_500_handler
