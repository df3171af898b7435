"""
Properties Admin - PW Pattaya Back Office
Django admin configuration for properties, projects and property templates.
"""

from django import forms
from django.contrib import admin, messages

from services import SlugGenerationExhausted, StorageUnavailable
from services.autofill import auto_fill_template
from services.slugs import generate_unique_slug, save_with_unique_slug
from .models import Property, Project, PropertyTemplate


# =============================================================================
# SLUG CHECKED FORMS
# =============================================================================

class SlugCheckedAdminForm(forms.ModelForm):
    """
    Admin form that reports slug generation failures as form errors.

    save_model() assigns the slug; clean() runs the same lookup first so an
    exhausted counter or an unavailable database shows as a form error.
    """
    slug_kind = None
    slug_source_field = None

    def slug_needs_check(self, text):
        return True

    def clean(self):
        cleaned_data = super().clean()
        text = cleaned_data.get(self.slug_source_field)
        if text and self.slug_needs_check(text):
            try:
                generate_unique_slug(self.slug_kind, text, exclude_id=self.instance.pk)
            except SlugGenerationExhausted as e:
                raise forms.ValidationError(f"Could not generate a unique slug: {e}")
            except StorageUnavailable:
                raise forms.ValidationError("Storage unavailable, please retry.")
        return cleaned_data


class PropertyAdminForm(SlugCheckedAdminForm):
    slug_kind = 'property'
    slug_source_field = 'title'

    class Meta:
        model = Property
        fields = '__all__'


class ProjectAdminForm(SlugCheckedAdminForm):
    slug_kind = 'project'
    slug_source_field = 'name'

    class Meta:
        model = Project
        fields = '__all__'

    def slug_needs_check(self, text):
        # Existing projects keep their slug until the name changes
        return self.instance.pk is None or text != self.instance.name


# =============================================================================
# PROPERTY ADMIN
# =============================================================================

@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    """
    Admin interface for property listings.

    Features:
    - Filtering by listing/property type and status
    - Slugs generated on save, never typed by hand
    - Bulk status changes and feature auto-fill
    """

    form = PropertyAdminForm

    list_display = [
        'title',
        'location',
        'property_type',
        'listing_type',
        'price_display',
        'bedrooms',
        'status',
        'updated_at',
    ]

    list_filter = [
        'listing_type',
        'property_type',
        'status',
        'location',
        'created_at',
    ]

    search_fields = [
        'title',
        'slug',
        'location',
        'owner_name',
        'owner_phone',
    ]

    readonly_fields = ['id', 'slug', 'import_source', 'import_date', 'created_at', 'updated_at']

    fieldsets = (
        ('Identity', {
            'fields': ('id', 'title', 'slug', 'description'),
            'classes': ('wide',)
        }),

        ('Translations', {
            'fields': (
                'title_de', 'description_de',
                'title_th', 'description_th',
                'title_ru', 'description_ru',
                'title_fr', 'description_fr',
            ),
            'classes': ('collapse',)
        }),

        ('Listing', {
            'fields': (
                'listing_type',
                'property_type',
                'status',
                'price',
                'location',
                ('bedrooms', 'bathrooms'),
                ('area', 'floor'),
                ('latitude', 'longitude'),
                'images',
            ),
        }),

        ('Features', {
            'fields': (
                'views',
                'private_features',
                'rooms_spaces',
                'communal_facilities',
                'technical_equipment',
                'security',
                'location_features',
                'kitchen_features',
                'layout_features',
                'furnishing_status',
                'features',
            ),
            'classes': ('collapse',)
        }),

        ('Owner', {
            'fields': ('owner_name', 'owner_type', 'owner_phone', 'owner_line', 'owner_email'),
            'classes': ('collapse',)
        }),

        ('Terms and Costs', {
            'fields': (
                'commission',
                'short_term_let',
                'quota',
                'land_size',
                'maintenance_charges',
                'common_area_fee',
                'transfer_costs',
                'available_from',
                'special_remarks',
            ),
            'classes': ('collapse',)
        }),

        ('System Metadata', {
            'fields': ('import_source', 'import_date', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        })
    )

    actions = ['mark_sold', 'mark_rented', 'mark_active', 'apply_auto_fill']

    list_per_page = 25

    def save_model(self, request, obj, form, change):
        save_with_unique_slug(obj, 'property', obj.title)

    def price_display(self, obj):
        """Display price formatted in baht"""
        return f"฿{obj.price:,}"
    price_display.short_description = 'Price'
    price_display.admin_order_field = 'price'

    def _set_status(self, request, queryset, new_status):
        updated = queryset.update(status=new_status)
        self.message_user(request, f"{updated} properties marked as {new_status}.", messages.SUCCESS)

    def mark_sold(self, request, queryset):
        self._set_status(request, queryset, 'sold')
    mark_sold.short_description = 'Mark selected as sold'

    def mark_rented(self, request, queryset):
        self._set_status(request, queryset, 'rented')
    mark_rented.short_description = 'Mark selected as rented'

    def mark_active(self, request, queryset):
        self._set_status(request, queryset, 'active')
    mark_active.short_description = 'Mark selected as active'

    def apply_auto_fill(self, request, queryset):
        """Fill empty feature categories from the property type and location defaults."""
        filled = 0
        for prop in queryset:
            template = auto_fill_template(prop.property_type, prop.location)
            changed = []
            for category in ('communal_facilities', 'security', 'technical_equipment', 'location_features'):
                defaults = getattr(template, category)
                if defaults and not getattr(prop, category):
                    setattr(prop, category, defaults)
                    changed.append(category)
            if changed:
                prop.save(update_fields=changed + ['updated_at'])
                filled += 1
        self.message_user(request, f"Auto-filled features for {filled} properties.", messages.SUCCESS)
    apply_auto_fill.short_description = 'Auto-fill empty feature categories'


# =============================================================================
# PROJECT ADMIN
# =============================================================================

@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    """Admin interface for development projects."""

    form = ProjectAdminForm

    list_display = ['name', 'developer', 'location', 'completion', 'units', 'price_from']
    list_filter = ['developer', 'location']
    search_fields = ['name', 'slug', 'developer', 'location']
    readonly_fields = ['id', 'slug', 'created_at', 'updated_at']

    fieldsets = (
        ('Identity', {
            'fields': ('id', 'name', 'slug', 'description'),
        }),
        ('Translations', {
            'fields': (
                'name_de', 'description_de',
                'name_th', 'description_th',
                'name_ru', 'description_ru',
                'name_fr', 'description_fr',
            ),
            'classes': ('collapse',)
        }),
        ('Project Details', {
            'fields': ('location', 'developer', 'completion', 'units', 'price_from', 'images', 'amenities'),
        }),
        ('System Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def save_model(self, request, obj, form, change):
        if not change or 'name' in form.changed_data:
            save_with_unique_slug(obj, 'project', obj.name)
        else:
            obj.save()


# =============================================================================
# PROPERTY TEMPLATE ADMIN
# =============================================================================

@admin.register(PropertyTemplate)
class PropertyTemplateAdmin(admin.ModelAdmin):
    """Admin interface for saved property form templates."""

    list_display = ['name', 'property_type', 'listing_type', 'location', 'usage_count', 'updated_at']
    list_filter = ['property_type', 'listing_type']
    search_fields = ['name', 'location']
    readonly_fields = ['usage_count', 'created_by', 'created_at', 'updated_at']

    def save_model(self, request, obj, form, change):
        if not change and obj.created_by_id is None:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)


# =============================================================================
# ADMIN SITE CUSTOMIZATION
# =============================================================================

admin.site.site_header = 'PW Pattaya Administration'
admin.site.site_title = 'PW Pattaya Admin'
admin.site.index_title = 'Listings, Projects and Leads'
