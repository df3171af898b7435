"""
Properties models for PW Pattaya.

This module implements the core listing entities:
- Property: a condo, house, villa or land plot for sale or rent
- Project: a development with several units
- PropertyTemplate: saved feature presets for the admin property form

Titles, names and descriptions are stored in English with optional
German, Thai, Russian and French translations.
"""

import logging

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from .options import (
    LISTING_TYPE_CHOICES,
    OWNER_TYPE_CHOICES,
    PROPERTY_TYPE_CHOICES,
    QUOTA_CHOICES,
    STATUS_CHOICES,
    TRANSFER_COSTS_CHOICES,
)

logger = logging.getLogger(__name__)


# Languages with translated columns (English lives in the base column)
TRANSLATED_LANGUAGES = ('de', 'th', 'ru', 'fr')

DEFAULT_COMMISSION = 3.0


def localized_value(obj, field_name, language):
    """
    Return the translation of field_name for language, falling back to English.

    Example:
        localized_value(prop, 'title', 'de-at') -> prop.title_de or prop.title
    """
    base = getattr(obj, field_name)
    if not language:
        return base
    code = language.split('-')[0].lower()
    if code not in TRANSLATED_LANGUAGES:
        return base
    return getattr(obj, f'{field_name}_{code}', None) or base


# =============================================================================
# PROPERTY MODEL
# =============================================================================

class Property(models.Model):
    """
    A single listing shown on the buy and rent pages.

    The slug is generated from the English title by services.slugs and is
    unique among properties.
    """

    # Identification
    title = models.CharField(max_length=255)
    title_de = models.CharField(max_length=255, blank=True, null=True)
    title_th = models.CharField(max_length=255, blank=True, null=True)
    title_ru = models.CharField(max_length=255, blank=True, null=True)
    title_fr = models.CharField(max_length=255, blank=True, null=True)
    slug = models.SlugField(
        max_length=280,
        unique=True,
        help_text="URL identifier, generated from the title"
    )

    description = models.TextField(blank=True, default='')
    description_de = models.TextField(blank=True, null=True)
    description_th = models.TextField(blank=True, null=True)
    description_ru = models.TextField(blank=True, null=True)
    description_fr = models.TextField(blank=True, null=True)

    # Core facts
    price = models.PositiveBigIntegerField(help_text="Price in THB")
    location = models.CharField(max_length=255, help_text="Area, e.g. 'Wongamat Beach'")
    bedrooms = models.PositiveSmallIntegerField(default=0, help_text="0 for studios")
    bathrooms = models.PositiveSmallIntegerField(default=1)
    area = models.FloatField(validators=[MinValueValidator(0)], help_text="Living area in sqm")
    floor = models.IntegerField(blank=True, null=True)
    property_type = models.CharField(max_length=20, choices=PROPERTY_TYPE_CHOICES)
    listing_type = models.CharField(max_length=10, choices=LISTING_TYPE_CHOICES)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active', db_index=True)

    # Media and legacy feature list
    images = models.JSONField(default=list, blank=True)
    features = models.JSONField(default=list, blank=True)

    # Geolocation
    latitude = models.FloatField(
        blank=True,
        null=True,
        validators=[MinValueValidator(-90), MaxValueValidator(90)]
    )
    longitude = models.FloatField(
        blank=True,
        null=True,
        validators=[MinValueValidator(-180), MaxValueValidator(180)]
    )

    # Owner information
    owner_name = models.CharField(max_length=255, blank=True, null=True)
    owner_line = models.CharField(max_length=100, blank=True, null=True)
    owner_phone = models.CharField(max_length=50, blank=True, null=True)
    owner_email = models.EmailField(blank=True, null=True)
    owner_type = models.CharField(max_length=20, choices=OWNER_TYPE_CHOICES, blank=True, null=True)

    # Listing details
    commission = models.FloatField(default=DEFAULT_COMMISSION, help_text="Commission rate in %")
    short_term_let = models.BooleanField(default=False)
    quota = models.CharField(max_length=30, choices=QUOTA_CHOICES, blank=True, null=True)
    land_size = models.CharField(max_length=50, blank=True, null=True, help_text="Land size in sq. wah")

    # Feature categories (labels from properties.options)
    views = models.JSONField(default=list, blank=True)
    private_features = models.JSONField(default=list, blank=True)
    rooms_spaces = models.JSONField(default=list, blank=True)
    communal_facilities = models.JSONField(default=list, blank=True)
    technical_equipment = models.JSONField(default=list, blank=True)
    security = models.JSONField(default=list, blank=True)
    location_features = models.JSONField(default=list, blank=True)
    kitchen_features = models.JSONField(default=list, blank=True)
    layout_features = models.JSONField(default=list, blank=True)
    furnishing_status = models.CharField(max_length=50, blank=True, null=True)

    # Running costs
    maintenance_charges = models.IntegerField(blank=True, null=True, help_text="THB per month")
    common_area_fee = models.FloatField(blank=True, null=True, help_text="THB per sqm per month")
    transfer_costs = models.CharField(max_length=30, choices=TRANSFER_COSTS_CHOICES, blank=True, null=True)

    # Availability
    available_from = models.CharField(max_length=100, blank=True, null=True)
    special_remarks = models.TextField(blank=True, null=True)

    # Import tracking
    import_source = models.CharField(max_length=100, blank=True, null=True)
    import_date = models.DateTimeField(blank=True, null=True)

    # Metadata
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'properties'
        ordering = ['-created_at']
        verbose_name = 'Property'
        verbose_name_plural = 'Properties'

        indexes = [
            models.Index(fields=['listing_type', 'status'], name='properties_listing_64b1f0_idx'),
            models.Index(fields=['property_type'], name='properties_propert_0d5c2a_idx'),
            models.Index(fields=['location'], name='properties_locatio_8e9f21_idx'),
            models.Index(fields=['price'], name='properties_price_3b7a4d_idx'),
        ]

    def __str__(self):
        return self.title

    def __repr__(self):
        return f"<Property: {self.slug}>"

    def localized_title(self, language=None):
        return localized_value(self, 'title', language)

    def localized_description(self, language=None):
        return localized_value(self, 'description', language)

    @property
    def has_coordinates(self):
        """Check if the listing has a map position."""
        return self.latitude is not None and self.longitude is not None

    def get_price_per_sqm(self):
        """
        Price per square meter of living area.

        Returns:
            float: THB/sqm rounded to whole baht, or None without an area
        """
        if not self.area:
            return None
        return round(self.price / self.area)


# =============================================================================
# PROJECT MODEL
# =============================================================================

class Project(models.Model):
    """A development project (condo building, villa estate) with several units."""

    name = models.CharField(max_length=255)
    name_de = models.CharField(max_length=255, blank=True, null=True)
    name_th = models.CharField(max_length=255, blank=True, null=True)
    name_ru = models.CharField(max_length=255, blank=True, null=True)
    name_fr = models.CharField(max_length=255, blank=True, null=True)
    slug = models.SlugField(
        max_length=280,
        unique=True,
        help_text="URL identifier, generated from the name"
    )

    description = models.TextField(blank=True, default='')
    description_de = models.TextField(blank=True, null=True)
    description_th = models.TextField(blank=True, null=True)
    description_ru = models.TextField(blank=True, null=True)
    description_fr = models.TextField(blank=True, null=True)

    location = models.CharField(max_length=255)
    developer = models.CharField(max_length=255)
    completion = models.CharField(max_length=50, help_text="Completion date or quarter, e.g. 'Q4 2026'")
    units = models.PositiveIntegerField(default=0)
    price_from = models.PositiveBigIntegerField(default=0, help_text="Starting price in THB")

    images = models.JSONField(default=list, blank=True)
    amenities = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'projects'
        ordering = ['-created_at']
        verbose_name = 'Project'
        verbose_name_plural = 'Projects'

        indexes = [
            models.Index(fields=['location'], name='projects_locatio_5c1d7e_idx'),
            models.Index(fields=['developer'], name='projects_develop_a2f9b3_idx'),
        ]

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"<Project: {self.slug}>"

    def localized_name(self, language=None):
        return localized_value(self, 'name', language)

    def localized_description(self, language=None):
        return localized_value(self, 'description', language)


# =============================================================================
# PROPERTY TEMPLATE MODEL
# =============================================================================

class PropertyTemplate(models.Model):
    """
    Saved preset of feature selections for the admin property form.

    Most used templates are listed first.
    """

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    property_type = models.CharField(max_length=20, choices=PROPERTY_TYPE_CHOICES)
    listing_type = models.CharField(max_length=10, choices=LISTING_TYPE_CHOICES, blank=True, null=True)
    location = models.CharField(max_length=255, blank=True, null=True)

    views = models.JSONField(default=list, blank=True)
    private_features = models.JSONField(default=list, blank=True)
    rooms_spaces = models.JSONField(default=list, blank=True)
    communal_facilities = models.JSONField(default=list, blank=True)
    technical_equipment = models.JSONField(default=list, blank=True)
    security = models.JSONField(default=list, blank=True)
    location_features = models.JSONField(default=list, blank=True)
    kitchen_features = models.JSONField(default=list, blank=True)
    layout_features = models.JSONField(default=list, blank=True)
    furnishing_status = models.CharField(max_length=50, blank=True, null=True)

    commission = models.FloatField(default=DEFAULT_COMMISSION)
    short_term_let = models.BooleanField(default=False)
    quota = models.CharField(max_length=30, choices=QUOTA_CHOICES, blank=True, null=True)
    transfer_costs = models.CharField(max_length=30, choices=TRANSFER_COSTS_CHOICES, blank=True, null=True)

    usage_count = models.PositiveIntegerField(default=0)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='property_templates'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'property_templates'
        ordering = ['-usage_count', '-updated_at']
        verbose_name = 'Property Template'
        verbose_name_plural = 'Property Templates'

    def __str__(self):
        return f"{self.name} ({self.property_type})"

    def mark_used(self):
        """Increment usage_count atomically in the database."""
        PropertyTemplate.objects.filter(pk=self.pk).update(
            usage_count=models.F('usage_count') + 1
        )
        self.refresh_from_db(fields=['usage_count'])
