"""
Properties Filters - PW Pattaya Backend API
Django REST Framework filters for property and project listings.

Provides filtering for:
- Listing type, property type and status (buy/rent pages)
- Location and price ranges
- Bedroom counts
- Project location and developer
"""

from django_filters import rest_framework as filters
from django_filters import CharFilter, NumberFilter

from .models import Property, Project

# Status used when the client does not ask for one
DEFAULT_STATUS = 'active'
ALL_STATUSES = 'all'


def split_csv_param(value):
    """Split a comma-separated query parameter into clean values."""
    return [part.strip() for part in value.split(',') if part.strip()]


# =============================================================================
# PROPERTY FILTERS
# =============================================================================

class PropertyFilter(filters.FilterSet):
    """
    Filtering for the public buy/rent listings and the admin property table.

    Only active listings are returned unless ?status= is given;
    ?status=all disables the status filter.
    """

    listing_type = CharFilter(
        field_name='listing_type',
        lookup_expr='exact',
        help_text='sale or rent'
    )

    property_type = CharFilter(
        field_name='property_type',
        lookup_expr='exact',
        help_text='condo, house, villa or land'
    )

    property_types = CharFilter(
        method='filter_multiple_property_types',
        help_text='Filter by multiple property types (comma-separated)'
    )

    location = CharFilter(
        field_name='location',
        lookup_expr='iexact',
        help_text='Filter by location (exact match, case-insensitive)'
    )

    location_contains = CharFilter(
        field_name='location',
        lookup_expr='icontains',
        help_text='Filter by location (partial match)'
    )

    min_price = NumberFilter(
        field_name='price',
        lookup_expr='gte',
        help_text='Minimum price in THB'
    )

    max_price = NumberFilter(
        field_name='price',
        lookup_expr='lte',
        help_text='Maximum price in THB'
    )

    bedrooms = NumberFilter(
        field_name='bedrooms',
        lookup_expr='exact',
        help_text='Exact number of bedrooms (0 for studios)'
    )

    min_bedrooms = NumberFilter(
        field_name='bedrooms',
        lookup_expr='gte',
        help_text='Minimum number of bedrooms'
    )

    status = CharFilter(
        method='filter_status',
        help_text="Listing status (default 'active', 'all' for every status)"
    )

    class Meta:
        model = Property
        fields = []

    def __init__(self, data=None, *args, **kwargs):
        if data is not None:
            data = data.copy()
            if not data.get('status'):
                data['status'] = DEFAULT_STATUS
        super().__init__(data, *args, **kwargs)

    def filter_status(self, queryset, name, value):
        """Filter by one or more comma-separated statuses."""
        if value == ALL_STATUSES:
            return queryset
        statuses = split_csv_param(value)
        if not statuses:
            return queryset
        return queryset.filter(status__in=statuses)

    def filter_multiple_property_types(self, queryset, name, value):
        """Filter by comma-separated property types."""
        types = split_csv_param(value)
        if not types:
            return queryset
        return queryset.filter(property_type__in=types)


# =============================================================================
# PROJECT FILTERS
# =============================================================================

class ProjectFilter(filters.FilterSet):
    """Filtering for the projects page."""

    location = CharFilter(
        field_name='location',
        lookup_expr='iexact',
        help_text='Filter by location (exact match, case-insensitive)'
    )

    developer = CharFilter(
        field_name='developer',
        lookup_expr='iexact',
        help_text='Filter by developer name'
    )

    max_price_from = NumberFilter(
        field_name='price_from',
        lookup_expr='lte',
        help_text='Maximum starting price in THB'
    )

    class Meta:
        model = Project
        fields = []
