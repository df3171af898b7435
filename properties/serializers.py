"""
API Serializers for PW Pattaya Properties.

This module defines the serialization layer between Django models and REST API:
- List views (summary data for listing cards)
- Detail views (complete property information)
- Create/Update (input validation, slug assignment)

Slugs are never accepted from clients; they are derived from the English
title (properties) or name (projects) through services.slugs.
"""

import logging

from django.utils.translation import get_language
from rest_framework import serializers

from services.slugs import save_with_unique_slug
from .models import Property, Project, PropertyTemplate

logger = logging.getLogger(__name__)


FEATURE_LIST_FIELDS = [
    'views',
    'private_features',
    'rooms_spaces',
    'communal_facilities',
    'technical_equipment',
    'security',
    'location_features',
    'kitchen_features',
    'layout_features',
]


class StringListField(serializers.ListField):
    """List of non-empty, distinct strings (order preserved)."""
    child = serializers.CharField(max_length=255)

    def to_internal_value(self, data):
        values = super().to_internal_value(data)
        cleaned = []
        for value in values:
            value = value.strip()
            if value and value not in cleaned:
                cleaned.append(value)
        return cleaned


# =============================================================================
# PROPERTY SERIALIZERS
# =============================================================================

class PropertyListSerializer(serializers.ModelSerializer):
    """
    Property serializer for listing cards on the buy/rent pages.

    Includes the title in the active language.
    """

    display_title = serializers.SerializerMethodField()

    class Meta:
        model = Property
        fields = [
            'id',
            'slug',
            'title',
            'display_title',
            'price',
            'location',
            'bedrooms',
            'bathrooms',
            'area',
            'property_type',
            'listing_type',
            'status',
            'images',
            'latitude',
            'longitude',
            'created_at',
        ]
        read_only_fields = fields

    def get_display_title(self, obj):
        return obj.localized_title(get_language())


class PropertySerializer(serializers.ModelSerializer):
    """
    Complete property serializer used for detail, create and update.

    Creating or updating regenerates the slug from the title; the
    property's own slug never counts as a collision.
    """

    display_title = serializers.SerializerMethodField()
    display_description = serializers.SerializerMethodField()
    price_per_sqm = serializers.SerializerMethodField()

    images = StringListField(required=False)
    features = StringListField(required=False)
    views = StringListField(required=False)
    private_features = StringListField(required=False)
    rooms_spaces = StringListField(required=False)
    communal_facilities = StringListField(required=False)
    technical_equipment = StringListField(required=False)
    security = StringListField(required=False)
    location_features = StringListField(required=False)
    kitchen_features = StringListField(required=False)
    layout_features = StringListField(required=False)

    class Meta:
        model = Property
        fields = [
            'id', 'slug',
            'title', 'title_de', 'title_th', 'title_ru', 'title_fr', 'display_title',
            'description', 'description_de', 'description_th', 'description_ru',
            'description_fr', 'display_description',
            'price', 'price_per_sqm', 'location', 'bedrooms', 'bathrooms', 'area', 'floor',
            'property_type', 'listing_type', 'status',
            'images', 'features', 'latitude', 'longitude',
            'owner_name', 'owner_line', 'owner_phone', 'owner_email', 'owner_type',
            'commission', 'short_term_let', 'quota', 'land_size',
            *FEATURE_LIST_FIELDS,
            'furnishing_status',
            'maintenance_charges', 'common_area_fee', 'transfer_costs',
            'available_from', 'special_remarks',
            'import_source', 'import_date',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'slug', 'import_source', 'import_date', 'created_at', 'updated_at']

    def get_display_title(self, obj):
        return obj.localized_title(get_language())

    def get_display_description(self, obj):
        return obj.localized_description(get_language())

    def get_price_per_sqm(self, obj):
        return obj.get_price_per_sqm()

    def validate_title(self, value):
        """Title must contain text; the slug is built from it."""
        cleaned = value.strip()
        if not cleaned:
            raise serializers.ValidationError("Title cannot be empty.")
        return cleaned

    def validate_price(self, value):
        if value <= 0:
            raise serializers.ValidationError("Price must be positive.")
        return value

    def validate_area(self, value):
        if value <= 0:
            raise serializers.ValidationError("Area must be positive.")
        return value

    def validate(self, data):
        """Coordinates are stored as a pair or not at all."""
        latitude = data.get('latitude', getattr(self.instance, 'latitude', None))
        longitude = data.get('longitude', getattr(self.instance, 'longitude', None))
        if (latitude is None) != (longitude is None):
            raise serializers.ValidationError(
                {'latitude': "Latitude and longitude must be provided together."}
            )
        return data

    def create(self, validated_data):
        instance = Property(**validated_data)
        save_with_unique_slug(instance, 'property', instance.title)
        logger.info(f"Created property {instance.pk} with slug '{instance.slug}'")
        return instance

    def update(self, instance, validated_data):
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        save_with_unique_slug(instance, 'property', instance.title)
        return instance


# =============================================================================
# PROJECT SERIALIZERS
# =============================================================================

class ProjectSerializer(serializers.ModelSerializer):
    """
    Project serializer for list, detail, create and update.

    The slug is generated on create and regenerated only when the name changes.
    """

    display_name = serializers.SerializerMethodField()
    display_description = serializers.SerializerMethodField()
    images = StringListField(required=False)
    amenities = StringListField(required=False)

    class Meta:
        model = Project
        fields = [
            'id', 'slug',
            'name', 'name_de', 'name_th', 'name_ru', 'name_fr', 'display_name',
            'description', 'description_de', 'description_th', 'description_ru',
            'description_fr', 'display_description',
            'location', 'developer', 'completion', 'units', 'price_from',
            'images', 'amenities',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'slug', 'created_at', 'updated_at']

    def get_display_name(self, obj):
        return obj.localized_name(get_language())

    def get_display_description(self, obj):
        return obj.localized_description(get_language())

    def validate_name(self, value):
        cleaned = value.strip()
        if not cleaned:
            raise serializers.ValidationError("Name cannot be empty.")
        return cleaned

    def create(self, validated_data):
        instance = Project(**validated_data)
        save_with_unique_slug(instance, 'project', instance.name)
        logger.info(f"Created project {instance.pk} with slug '{instance.slug}'")
        return instance

    def update(self, instance, validated_data):
        name_changed = 'name' in validated_data and validated_data['name'] != instance.name
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        if name_changed:
            save_with_unique_slug(instance, 'project', instance.name)
        else:
            instance.save()
        return instance


# =============================================================================
# PROPERTY TEMPLATE SERIALIZERS
# =============================================================================

class PropertyTemplateSerializer(serializers.ModelSerializer):
    """Saved feature preset for the admin property form."""

    views = StringListField(required=False)
    private_features = StringListField(required=False)
    rooms_spaces = StringListField(required=False)
    communal_facilities = StringListField(required=False)
    technical_equipment = StringListField(required=False)
    security = StringListField(required=False)
    location_features = StringListField(required=False)
    kitchen_features = StringListField(required=False)
    layout_features = StringListField(required=False)
    created_by = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        model = PropertyTemplate
        fields = [
            'id', 'name', 'description', 'property_type', 'listing_type', 'location',
            *FEATURE_LIST_FIELDS,
            'furnishing_status', 'commission', 'short_term_let', 'quota', 'transfer_costs',
            'usage_count', 'created_by', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'usage_count', 'created_by', 'created_at', 'updated_at']

    def validate_name(self, value):
        cleaned = value.strip()
        if not cleaned:
            raise serializers.ValidationError("Name cannot be empty.")
        return cleaned


class AutoFillQuerySerializer(serializers.Serializer):
    """Query parameters of the auto-fill endpoint."""
    property_type = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    location = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
