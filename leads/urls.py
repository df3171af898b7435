"""
URL configuration for leads app.

- leads/          - submit (POST, public), list (GET, staff)
- leads/{id}/     - detail/status update/delete (staff)

Included by the main project URLs at /api/v1/.
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import LeadViewSet


router = DefaultRouter()
router.register(r'leads', LeadViewSet, basename='lead')


urlpatterns = [
    path('', include(router.urls)),
]
