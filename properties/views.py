"""
Views for the properties app.

This module defines the API viewsets for Properties, Projects and Property
Templates, including filtering, search, slug lookup and the listing
auto-fill endpoint.
"""

import logging

from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.pagination import LimitOffsetPagination
from rest_framework.response import Response

from services import SlugGenerationExhausted, StorageUnavailable
from services.autofill import auto_fill_template
from .filters import PropertyFilter, ProjectFilter
from .models import Property, Project, PropertyTemplate
from .options import get_form_options
from .serializers import (
    AutoFillQuerySerializer,
    ProjectSerializer,
    PropertyListSerializer,
    PropertySerializer,
    PropertyTemplateSerializer,
)

logger = logging.getLogger(__name__)


# =============================================================================
# CUSTOM PAGINATION CLASS
# =============================================================================

class ListingPagination(LimitOffsetPagination):
    """
    Limit/offset pagination for listing endpoints.

    Response shape:
        {
            "<results_key>": [...],
            "pagination": {"total": 120, "limit": 50, "offset": 0, "hasMore": true}
        }

    Usage:
        GET /api/v1/properties/                      -> first 50 results
        GET /api/v1/properties/?limit=12&offset=24  -> results 25-36
    """
    default_limit = 50
    max_limit = 1000
    results_key = 'results'

    def get_paginated_response(self, data):
        return Response({
            self.results_key: data,
            'pagination': {
                'total': self.count,
                'limit': self.limit,
                'offset': self.offset,
                'hasMore': self.offset + len(data) < self.count,
            },
        })

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'properties': {
                self.results_key: schema,
                'pagination': {'type': 'object'},
            },
        }


class PropertyPagination(ListingPagination):
    results_key = 'properties'


class ProjectPagination(ListingPagination):
    results_key = 'projects'


class TemplatePagination(ListingPagination):
    results_key = 'templates'


# =============================================================================
# SLUG ERROR HANDLING
# =============================================================================

class SlugErrorMixin:
    """Map slug generation failures to JSON responses instead of 500s."""

    def handle_exception(self, exc):
        if isinstance(exc, SlugGenerationExhausted):
            logger.warning(str(exc))
            return Response(
                {
                    'error': 'Could not generate a unique slug',
                    'details': str(exc),
                },
                status=status.HTTP_409_CONFLICT
            )
        if isinstance(exc, StorageUnavailable):
            logger.error(f"Slug storage unavailable: {exc}")
            return Response(
                {'error': 'Storage unavailable, please retry'},
                status=status.HTTP_503_SERVICE_UNAVAILABLE
            )
        return super().handle_exception(exc)


# =============================================================================
# PROPERTY VIEWSET
# =============================================================================

class PropertyViewSet(SlugErrorMixin, viewsets.ModelViewSet):
    """
    API endpoint for Properties.

    Supports:
    - List properties (active only unless ?status= is given)
    - Filtering by listing type, property type, location, price, bedrooms
    - Search by title and location
    - Retrieve by id or by slug
    - Create, update, delete (authenticated)
    - Bulk import of parsed sheet rows (authenticated)
    """
    queryset = Property.objects.all()
    serializer_class = PropertySerializer
    permission_classes = [permissions.IsAuthenticatedOrReadOnly]
    pagination_class = PropertyPagination
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = PropertyFilter

    search_fields = ['title', 'location', 'description']

    ordering_fields = ['price', 'area', 'bedrooms', 'created_at', 'updated_at']
    ordering = ['-created_at']

    def get_serializer_class(self):
        """Listing cards use the compact serializer."""
        if self.action == 'list':
            return PropertyListSerializer
        return PropertySerializer

    def filter_queryset(self, queryset):
        # Status defaulting applies to listings; detail routes see every status
        if self.action != 'list':
            return queryset
        return super().filter_queryset(queryset)

    @action(detail=False, methods=['get'], url_path=r'by-slug/(?P<slug>[-\w]+)')
    def by_slug(self, request, slug=None):
        """
        Retrieve a property by its slug.

        GET /api/v1/properties/by-slug/luxury-beach-condo-in-pattaya/
        """
        prop = get_object_or_404(Property, slug=slug)
        return Response(PropertySerializer(prop, context=self.get_serializer_context()).data)

    @action(detail=False, methods=['post'], url_path='import',
            permission_classes=[permissions.IsAuthenticated])
    def import_properties(self, request):
        """
        Bulk import of already parsed properties.

        POST /api/v1/properties/import/
        Body: {"properties": [{...}, ...]}
        """
        from imports.models import ImportBatch
        from imports.services import PropertyImportService

        rows = request.data.get('properties')
        if not isinstance(rows, list):
            return Response(
                {'error': 'Invalid request: properties array required'},
                status=status.HTTP_400_BAD_REQUEST
            )

        batch = ImportBatch.objects.create(
            import_type='API',
            created_by=request.user,
            records_total=len(rows),
        )
        results = PropertyImportService(batch).run(rows)
        return Response({'message': 'Import completed', 'results': results})


# =============================================================================
# PROJECT VIEWSET
# =============================================================================

class ProjectViewSet(SlugErrorMixin, viewsets.ModelViewSet):
    """
    API endpoint for Projects.

    Supports list (filter by location, developer), retrieve by id or slug,
    and authenticated create/update/delete.
    """
    queryset = Project.objects.all()
    serializer_class = ProjectSerializer
    permission_classes = [permissions.IsAuthenticatedOrReadOnly]
    pagination_class = ProjectPagination
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = ProjectFilter

    search_fields = ['name', 'location', 'developer']

    ordering_fields = ['name', 'price_from', 'units', 'created_at']
    ordering = ['-created_at']

    @action(detail=False, methods=['get'], url_path=r'by-slug/(?P<slug>[-\w]+)')
    def by_slug(self, request, slug=None):
        """
        Retrieve a project by its slug.

        GET /api/v1/projects/by-slug/the-riviera-wongamat/
        """
        project = get_object_or_404(Project, slug=slug)
        return Response(ProjectSerializer(project, context=self.get_serializer_context()).data)


# =============================================================================
# PROPERTY TEMPLATE VIEWSET
# =============================================================================

class PropertyTemplateViewSet(viewsets.ModelViewSet):
    """
    API endpoint for Property Templates (admin only).

    Supports:
    - CRUD on saved templates, most used first
    - POST /{id}/use/ to count a template application
    - GET autofill/ for type/location based defaults
    - GET options/ for the controlled vocabularies
    """
    queryset = PropertyTemplate.objects.all()
    serializer_class = PropertyTemplateSerializer
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = TemplatePagination
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['property_type', 'listing_type']
    search_fields = ['name', 'location']

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)

    @action(detail=True, methods=['post'])
    def use(self, request, pk=None):
        """Increment the usage counter when the template is applied to a form."""
        template = self.get_object()
        template.mark_used()
        return Response(self.get_serializer(template).data)

    @action(detail=False, methods=['get'])
    def autofill(self, request):
        """
        Default feature selections for a property type and location.

        GET /api/v1/templates/autofill/?property_type=condo&location=Wongamat%20Beach

        Response:
        {
            "communalFacilities": ["Swimming Pool", ...],
            "security": [...],
            "technicalEquipment": [...],
            "locationFeatures": ["Close to Beach", "Beach Front", "Easy Beach Access"]
        }
        """
        query = AutoFillQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        template = auto_fill_template(
            query.validated_data['property_type'],
            query.validated_data['location'],
        )
        return Response(template.to_dict())

    @action(detail=False, methods=['get'], url_path='options')
    def form_options(self, request):
        """All feature vocabularies and choice lists for the property form."""
        return Response(get_form_options())
