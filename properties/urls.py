"""
URL configuration for properties app.

Uses Django REST Framework's router for ViewSet URL generation.

URL Structure Generated:
========================

Property Endpoints:
- properties/                         - list/create (GET, POST)
- properties/{id}/                    - detail/update/delete (GET, PUT, PATCH, DELETE)
- properties/by-slug/{slug}/          - lookup by slug (GET)
- properties/import/                  - bulk import (POST)

Project Endpoints:
- projects/                           - list/create (GET, POST)
- projects/{id}/                      - detail/update/delete
- projects/by-slug/{slug}/            - lookup by slug (GET)

Template Endpoints:
- templates/                          - list/create (GET, POST)
- templates/{id}/                     - detail/update/delete
- templates/{id}/use/                 - count a template application (POST)
- templates/autofill/                 - type/location defaults (GET)
- templates/options/                  - controlled vocabularies (GET)

This URLs file gets included by the main project URLs at /api/v1/.
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import PropertyViewSet, ProjectViewSet, PropertyTemplateViewSet


router = DefaultRouter()
router.register(r'properties', PropertyViewSet, basename='property')
router.register(r'projects', ProjectViewSet, basename='project')
router.register(r'templates', PropertyTemplateViewSet, basename='template')


urlpatterns = [
    path('', include(router.urls)),
]
