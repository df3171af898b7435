# ===== PROPERTIES APP TEST SUITE =====
"""
Test suite for properties app functionality
File: properties/tests.py

Test Coverage:
- Property, Project and PropertyTemplate model helpers
- Listing API: pagination envelope, default status, filters, search
- Slug assignment on create and update, lookup by slug
- Language prefixed display fields
- Template auto-fill, usage counter and form options
- Slug failure mapping (409 / 503) and admin form errors
- Health and API info endpoints
"""

from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.test import TestCase
from django.urls import Resolver404, resolve, reverse

from rest_framework import status
from rest_framework.test import APITestCase

from services import SlugGenerationExhausted, StorageUnavailable
from .admin import ProjectAdminForm, PropertyAdminForm
from .models import Property, Project, PropertyTemplate, localized_value

User = get_user_model()


def create_property(title='Sea View Condo', **fields):
    from services.slugs import slugify

    data = {
        'title': title,
        'slug': fields.pop('slug', None) or slugify(title),
        'price': 3500000,
        'location': 'Jomtien',
        'bedrooms': 1,
        'bathrooms': 1,
        'area': 40,
        'property_type': 'condo',
        'listing_type': 'sale',
    }
    data.update(fields)
    return Property.objects.create(**data)


def create_project(name='The Riviera', **fields):
    from services.slugs import slugify

    data = {
        'name': name,
        'slug': fields.pop('slug', None) or slugify(name),
        'location': 'Wongamat',
        'developer': 'Riviera Group',
        'completion': 'Q4 2026',
        'units': 120,
        'price_from': 2900000,
    }
    data.update(fields)
    return Project.objects.create(**data)


PROPERTY_PAYLOAD = {
    'title': 'Luxury Beach Condo in Pattaya',
    'price': 5900000,
    'location': 'Wongamat Beach',
    'bedrooms': 2,
    'bathrooms': 2,
    'area': 72.5,
    'property_type': 'condo',
    'listing_type': 'sale',
    'views': ['Sea View', 'Sea View'],
}


# =============================================================================
# MODEL TESTS
# =============================================================================

class PropertyModelTest(TestCase):
    """Test Property model helpers"""

    def setUp(self):
        self.prop = create_property(title_de='Wohnung mit Meerblick', description='Bright unit')

    def test_string_representation(self):
        self.assertEqual(str(self.prop), 'Sea View Condo')
        self.assertEqual(repr(self.prop), '<Property: sea-view-condo>')

    def test_defaults(self):
        self.assertEqual(self.prop.status, 'active')
        self.assertEqual(self.prop.commission, 3.0)
        self.assertFalse(self.prop.short_term_let)
        self.assertEqual(self.prop.views, [])
        self.assertFalse(self.prop.has_coordinates)

    def test_localized_title(self):
        self.assertEqual(self.prop.localized_title('de'), 'Wohnung mit Meerblick')
        self.assertEqual(self.prop.localized_title('de-at'), 'Wohnung mit Meerblick')
        self.assertEqual(self.prop.localized_title('th'), 'Sea View Condo')
        self.assertEqual(self.prop.localized_title('ja'), 'Sea View Condo')
        self.assertEqual(self.prop.localized_title(None), 'Sea View Condo')

    def test_localized_value_skips_blank_translation(self):
        self.prop.description_fr = ''
        self.assertEqual(localized_value(self.prop, 'description', 'fr'), 'Bright unit')

    def test_price_per_sqm(self):
        self.assertEqual(self.prop.get_price_per_sqm(), 87500)
        self.prop.area = 0
        self.assertIsNone(self.prop.get_price_per_sqm())


class ProjectModelTest(TestCase):

    def test_localized_name(self):
        project = create_project(name_ru='Ривьера')
        self.assertEqual(project.localized_name('ru'), 'Ривьера')
        self.assertEqual(project.localized_name('de'), 'The Riviera')
        self.assertEqual(repr(project), '<Project: the-riviera>')


class PropertyTemplateModelTest(TestCase):

    def test_mark_used(self):
        template = PropertyTemplate.objects.create(name='Beach Condo', property_type='condo')

        template.mark_used()
        template.mark_used()

        self.assertEqual(template.usage_count, 2)
        self.assertEqual(str(template), 'Beach Condo (condo)')


# =============================================================================
# PROPERTY API TESTS
# =============================================================================

class PropertyListAPITest(APITestCase):
    """Test the public property listing"""

    def setUp(self):
        self.url = reverse('property-list')
        self.condo = create_property('Sea View Condo', price=3500000, bedrooms=1)
        self.villa = create_property(
            'Pool Villa', price=12500000, bedrooms=4, area=320,
            property_type='villa', location='East Pattaya'
        )
        self.rental = create_property(
            'Studio for Rent', price=15000, bedrooms=0, area=28,
            listing_type='rent', location='Jomtien'
        )
        self.sold = create_property('Sold Condo', status='sold')

    def test_envelope_and_default_status(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(set(response.data), {'properties', 'pagination'})
        slugs = {item['slug'] for item in response.data['properties']}
        self.assertEqual(slugs, {'sea-view-condo', 'pool-villa', 'studio-for-rent'})
        self.assertEqual(
            response.data['pagination'],
            {'total': 3, 'limit': 50, 'offset': 0, 'hasMore': False}
        )

    def test_status_all_and_explicit_status(self):
        response = self.client.get(self.url, {'status': 'all'})
        self.assertEqual(response.data['pagination']['total'], 4)

        response = self.client.get(self.url, {'status': 'sold,rented'})
        self.assertEqual([p['slug'] for p in response.data['properties']], ['sold-condo'])

    def test_limit_offset(self):
        response = self.client.get(self.url, {'limit': 2, 'offset': 0, 'ordering': 'price'})

        self.assertEqual(len(response.data['properties']), 2)
        self.assertEqual(response.data['properties'][0]['slug'], 'studio-for-rent')
        self.assertTrue(response.data['pagination']['hasMore'])

        response = self.client.get(self.url, {'limit': 2, 'offset': 2, 'ordering': 'price'})
        self.assertEqual([p['slug'] for p in response.data['properties']], ['pool-villa'])
        self.assertFalse(response.data['pagination']['hasMore'])

    def test_filters(self):
        def slugs(params):
            response = self.client.get(self.url, params)
            return {p['slug'] for p in response.data['properties']}

        self.assertEqual(slugs({'listing_type': 'rent'}), {'studio-for-rent'})
        self.assertEqual(slugs({'property_type': 'villa'}), {'pool-villa'})
        self.assertEqual(slugs({'property_types': 'villa, condo'}), {'sea-view-condo', 'pool-villa', 'studio-for-rent'})
        self.assertEqual(slugs({'min_price': 1000000, 'max_price': 5000000}), {'sea-view-condo'})
        self.assertEqual(slugs({'bedrooms': 0}), {'studio-for-rent'})
        self.assertEqual(slugs({'min_bedrooms': 2}), {'pool-villa'})
        self.assertEqual(slugs({'location': 'east pattaya'}), {'pool-villa'})
        self.assertEqual(slugs({'search': 'villa'}), {'pool-villa'})

    def test_unknown_type_values_match_nothing(self):
        for params in ({'property_type': 'townhouse'}, {'listing_type': 'lease'}):
            response = self.client.get(self.url, params)

            self.assertEqual(response.status_code, status.HTTP_200_OK)
            self.assertEqual(response.data['properties'], [])
            self.assertEqual(response.data['pagination']['total'], 0)

    def test_list_uses_compact_serializer(self):
        response = self.client.get(self.url)
        item = response.data['properties'][0]
        self.assertIn('display_title', item)
        self.assertNotIn('owner_phone', item)


class PropertyDetailAPITest(APITestCase):
    """Test retrieve, create, update and delete"""

    def setUp(self):
        self.user = User.objects.create_user(username='agent', password='secret-pass-123')
        self.list_url = reverse('property-list')

    def test_create_requires_authentication(self):
        response = self.client.post(self.list_url, PROPERTY_PAYLOAD, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(Property.objects.exists())

    def test_create_assigns_slug(self):
        self.client.force_authenticate(self.user)

        response = self.client.post(self.list_url, PROPERTY_PAYLOAD, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['slug'], 'luxury-beach-condo-in-pattaya')
        self.assertEqual(response.data['views'], ['Sea View'])
        self.assertEqual(response.data['price_per_sqm'], 81379)

    def test_duplicate_titles_get_suffixes(self):
        self.client.force_authenticate(self.user)

        slugs = [
            self.client.post(self.list_url, PROPERTY_PAYLOAD, format='json').data['slug']
            for _ in range(3)
        ]

        self.assertEqual(slugs, [
            'luxury-beach-condo-in-pattaya',
            'luxury-beach-condo-in-pattaya-2',
            'luxury-beach-condo-in-pattaya-3',
        ])

    def test_client_slug_is_ignored(self):
        self.client.force_authenticate(self.user)
        payload = dict(PROPERTY_PAYLOAD, slug='my-own-slug')

        response = self.client.post(self.list_url, payload, format='json')

        self.assertEqual(response.data['slug'], 'luxury-beach-condo-in-pattaya')

    def test_validation_errors(self):
        self.client.force_authenticate(self.user)
        payload = dict(PROPERTY_PAYLOAD, title='   ', price=0, latitude=12.9)

        response = self.client.post(self.list_url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('title', response.data)
        self.assertIn('price', response.data)

    def test_update_keeps_own_slug(self):
        prop = create_property()
        self.client.force_authenticate(self.user)

        response = self.client.patch(
            reverse('property-detail', args=[prop.pk]), {'price': 3300000}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['slug'], 'sea-view-condo')

    def test_retitle_onto_taken_slug(self):
        create_property('Pool Villa', property_type='villa')
        prop = create_property()
        self.client.force_authenticate(self.user)

        response = self.client.patch(
            reverse('property-detail', args=[prop.pk]), {'title': 'Pool Villa'}, format='json'
        )

        self.assertEqual(response.data['slug'], 'pool-villa-2')

    def test_retrieve_sold_property(self):
        prop = create_property(status='sold')
        response = self.client.get(reverse('property-detail', args=[prop.pk]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_delete(self):
        prop = create_property()
        self.client.force_authenticate(self.user)

        response = self.client.delete(reverse('property-detail', args=[prop.pk]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Property.objects.exists())

    def test_by_slug(self):
        create_property()

        response = self.client.get(reverse('property-by-slug', kwargs={'slug': 'sea-view-condo'}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['title'], 'Sea View Condo')

        response = self.client.get(reverse('property-by-slug', kwargs={'slug': 'missing'}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_language_prefix(self):
        prop = create_property(title_de='Wohnung mit Meerblick')

        english = self.client.get(f'/api/v1/properties/{prop.pk}/')
        german = self.client.get(f'/de/api/v1/properties/{prop.pk}/')

        self.assertEqual(english.data['display_title'], 'Sea View Condo')
        self.assertEqual(german.data['display_title'], 'Wohnung mit Meerblick')
        self.assertEqual(german.data['title'], 'Sea View Condo')

    def test_slug_exhaustion_returns_conflict(self):
        self.client.force_authenticate(self.user)
        error = SlugGenerationExhausted('property', 'luxury-beach-condo-in-pattaya', 100)

        with patch('properties.serializers.save_with_unique_slug', side_effect=error):
            response = self.client.post(self.list_url, PROPERTY_PAYLOAD, format='json')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertIn('after 100 attempts', response.data['details'])

    def test_storage_failure_returns_503(self):
        self.client.force_authenticate(self.user)

        with patch('properties.serializers.save_with_unique_slug',
                   side_effect=StorageUnavailable('lookup failed')):
            response = self.client.post(self.list_url, PROPERTY_PAYLOAD, format='json')

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)


# =============================================================================
# PROJECT API TESTS
# =============================================================================

class ProjectAPITest(APITestCase):

    def setUp(self):
        self.user = User.objects.create_user(username='agent', password='secret-pass-123')
        self.client.force_authenticate(self.user)

    def test_list_envelope_and_filter(self):
        create_project()
        create_project('Jomtien Heights', location='Jomtien', developer='Acme')

        response = self.client.get(reverse('project-list'), {'developer': 'acme'})

        self.assertEqual(response.data['pagination']['total'], 1)
        self.assertEqual(response.data['projects'][0]['slug'], 'jomtien-heights')

    def test_create_and_duplicate_name(self):
        payload = {
            'name': 'The Riviera',
            'location': 'Wongamat',
            'developer': 'Riviera Group',
            'completion': 'Q4 2026',
        }
        first = self.client.post(reverse('project-list'), payload, format='json')
        second = self.client.post(reverse('project-list'), payload, format='json')

        self.assertEqual(first.status_code, status.HTTP_201_CREATED)
        self.assertEqual(first.data['slug'], 'the-riviera')
        self.assertEqual(second.data['slug'], 'the-riviera-2')

    def test_slug_changes_only_with_name(self):
        project = create_project()
        url = reverse('project-detail', args=[project.pk])

        response = self.client.patch(url, {'units': 150}, format='json')
        self.assertEqual(response.data['slug'], 'the-riviera')

        response = self.client.patch(url, {'name': 'Riviera Monaco'}, format='json')
        self.assertEqual(response.data['slug'], 'riviera-monaco')

    def test_by_slug(self):
        create_project()
        response = self.client.get(reverse('project-by-slug', kwargs={'slug': 'the-riviera'}))
        self.assertEqual(response.data['developer'], 'Riviera Group')


# =============================================================================
# PROPERTY TEMPLATE API TESTS
# =============================================================================

class PropertyTemplateAPITest(APITestCase):

    def setUp(self):
        self.user = User.objects.create_user(username='agent', password='secret-pass-123')
        self.client.force_authenticate(self.user)

    def test_requires_authentication(self):
        self.client.force_authenticate(None)
        response = self.client.get(reverse('template-autofill'), {'property_type': 'condo'})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_create_sets_owner(self):
        payload = {'name': 'Beach Condo', 'property_type': 'condo', 'security': ['Key Card Access']}

        response = self.client.post(reverse('template-list'), payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['created_by'], self.user.pk)
        self.assertEqual(response.data['usage_count'], 0)

    def test_use_increments_counter(self):
        template = PropertyTemplate.objects.create(name='Beach Condo', property_type='condo')

        self.client.post(reverse('template-use', args=[template.pk]))
        response = self.client.post(reverse('template-use', args=[template.pk]))

        self.assertEqual(response.data['usage_count'], 2)

    def test_list_most_used_first(self):
        PropertyTemplate.objects.create(name='Rarely', property_type='land', usage_count=1)
        PropertyTemplate.objects.create(name='Often', property_type='condo', usage_count=9)

        response = self.client.get(reverse('template-list'))

        self.assertEqual([t['name'] for t in response.data['templates']], ['Often', 'Rarely'])

    def test_autofill(self):
        response = self.client.get(
            reverse('template-autofill'), {'property_type': 'condo', 'location': 'Wongamat Beach'}
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.data['locationFeatures'],
            ['Close to Beach', 'Beach Front', 'Easy Beach Access']
        )
        self.assertIn('Swimming Pool', response.data['communalFacilities'])

    def test_autofill_without_property_type(self):
        for params in ({'property_type': '', 'location': 'Jomtien'}, {'location': 'Jomtien'}):
            response = self.client.get(reverse('template-autofill'), params)

            self.assertEqual(response.status_code, status.HTTP_200_OK)
            self.assertEqual(response.data['locationFeatures'], ['Near Jomtien Beach', 'Easy Beach Access'])
            self.assertEqual(response.data['communalFacilities'], [])
            self.assertEqual(response.data['security'], [])
            self.assertEqual(response.data['technicalEquipment'], [])

    def test_form_options(self):
        response = self.client.get(reverse('template-form-options'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('Sea View', response.data['views'])
        self.assertIn({'value': 'Foreign', 'label': 'Foreign'}, response.data['quotas'])


# =============================================================================
# ADMIN FORM TESTS
# =============================================================================

class SlugCheckedAdminFormTest(TestCase):
    """Slug failures surface as admin form errors instead of server errors"""

    def clean_form(self, form_class, instance=None, **cleaned_data):
        form = form_class(instance=instance)
        form.cleaned_data = cleaned_data
        return form.clean()

    def test_property_form_passes_with_free_slug(self):
        cleaned = self.clean_form(PropertyAdminForm, title='Sea View Condo')
        self.assertEqual(cleaned['title'], 'Sea View Condo')

    def test_property_form_reports_exhaustion(self):
        error = SlugGenerationExhausted('property', 'sea-view-condo', 100)

        with patch('properties.admin.generate_unique_slug', side_effect=error):
            with self.assertRaises(ValidationError) as ctx:
                self.clean_form(PropertyAdminForm, title='Sea View Condo')

        self.assertIn('Could not generate a unique slug', ctx.exception.messages[0])

    def test_project_form_reports_storage_failure(self):
        with patch('properties.admin.generate_unique_slug', side_effect=StorageUnavailable('down')):
            with self.assertRaises(ValidationError) as ctx:
                self.clean_form(ProjectAdminForm, name='The Riviera')

        self.assertEqual(ctx.exception.messages, ['Storage unavailable, please retry.'])

    def test_project_form_skips_check_for_unchanged_name(self):
        project = create_project()

        with patch('properties.admin.generate_unique_slug') as generate:
            self.clean_form(ProjectAdminForm, instance=project, name='The Riviera')
            generate.assert_not_called()

            self.clean_form(ProjectAdminForm, instance=project, name='Riviera Monaco')
            generate.assert_called_once_with('project', 'Riviera Monaco', exclude_id=project.pk)


# =============================================================================
# SYSTEM ENDPOINT TESTS
# =============================================================================

class SystemEndpointTest(TestCase):

    def test_health_check(self):
        response = self.client.get(reverse('health-check'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'healthy')

    def test_health_check_database_failure(self):
        with patch('pwpattaya.urls.connection') as connection:
            connection.cursor.side_effect = DatabaseError('down')
            response = self.client.get(reverse('health-check'))

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()['status'], 'unhealthy')

    def test_api_info_counts(self):
        create_property()
        create_property('Sold Condo', status='sold')
        create_project()

        data = self.client.get(reverse('api-info')).json()

        self.assertEqual(data['data_stats'], {'active_properties': 1, 'projects': 1})
        self.assertIn('de', data['languages'])

    def test_no_browsable_api_login_route(self):
        with self.assertRaises(Resolver404):
            resolve('/api-auth/login/')

    def test_unknown_api_path_returns_json(self):
        response = self.client.get('/api/v1/nothing-here/')
        self.assertEqual(response.status_code, 404)
