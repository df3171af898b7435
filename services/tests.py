# ===== SERVICES LAYER TEST SUITE =====
"""
Test suite for services layer functionality
File: services/tests.py

Test Coverage:
- Slug normalization and unique slug generation (sync and async)
- Storage failures and attempt cap
- Listing auto-fill defaults by property type and location
- Lead notification email
- Auto-fill vocabulary system check
"""

import re
from unittest.mock import patch

from django.core import mail
from django.db import DatabaseError, IntegrityError
from django.test import SimpleTestCase, TestCase, override_settings

from leads.models import Lead
from properties.models import Property, Project
from properties.options import FEATURE_VOCABULARIES
from . import NotificationError, SlugGenerationExhausted, StorageUnavailable
from .apps import check_autofill_vocabulary
from .autofill import FeatureTemplate, auto_fill_template, location_features_for, validate_vocabulary
from .notifications import build_lead_html, safe_send_lead_notification, send_lead_notification
from .slugs import (
    agenerate_unique_slug,
    base_slug_for,
    candidate_slugs,
    default_store,
    generate_unique_slug,
    save_with_unique_slug,
    slugify,
)


SLUG_PATTERN = re.compile(r'^[a-z0-9_]+(-[a-z0-9_]+)*$')


class StubSlugStore:
    """In-memory slug lookup: {(kind, slug): entity_id}."""

    def __init__(self, taken=None):
        self.taken = dict(taken or {})
        self.lookups = []

    def find_first(self, kind, slug, exclude_id=None):
        self.lookups.append(slug)
        entity_id = self.taken.get((kind, slug))
        if entity_id is None or entity_id == exclude_id:
            return None
        return entity_id

    async def afind_first(self, kind, slug, exclude_id=None):
        return self.find_first(kind, slug, exclude_id)


class FailingSlugStore:

    def find_first(self, kind, slug, exclude_id=None):
        raise StorageUnavailable('database down')

    async def afind_first(self, kind, slug, exclude_id=None):
        raise StorageUnavailable('database down')


def make_property(title='Beach Condo', slug=None, **fields):
    data = {
        'title': title,
        'slug': slug or slugify(title),
        'price': 3500000,
        'location': 'Jomtien',
        'area': 40,
        'property_type': 'condo',
        'listing_type': 'sale',
    }
    data.update(fields)
    return Property.objects.create(**data)


# =============================================================================
# SLUGIFY TESTS
# =============================================================================

class SlugifyTest(SimpleTestCase):

    def test_examples(self):
        self.assertEqual(slugify('Luxury Beach Condo in Pattaya'), 'luxury-beach-condo-in-pattaya')
        self.assertEqual(slugify('2-Bedroom Apartment @ Jomtien!'), '2-bedroom-apartment-jomtien')

    def test_whitespace_and_hyphen_runs_collapse(self):
        self.assertEqual(slugify('  Sea   View -- Condo  '), 'sea-view-condo')
        self.assertEqual(slugify('---Pool Villa---'), 'pool-villa')

    def test_non_ascii_characters_dropped(self):
        self.assertEqual(slugify('Villa Müller ★ Naklua'), 'villa-mller-naklua')
        self.assertEqual(slugify('คอนโด'), '')

    def test_empty_input(self):
        self.assertEqual(slugify(''), '')
        self.assertEqual(slugify(None), '')
        self.assertEqual(slugify('!!! ???'), '')

    def test_underscores_are_kept(self):
        self.assertEqual(slugify('Pool_Villa Naklua'), 'pool_villa-naklua')
        self.assertRegex(slugify('Pool_Villa Naklua'), SLUG_PATTERN)

    def test_output_shape(self):
        titles = [
            'Luxury Beach Condo in Pattaya',
            'The Base Central Pattaya (Tower A) 12th floor',
            'Unit #1204, Wongamat',
            '  Studio / 28 sqm / Jomtien  ',
        ]
        for title in titles:
            slug = slugify(title)
            self.assertRegex(slug, SLUG_PATTERN, title)

    def test_base_slug_falls_back_to_kind(self):
        self.assertEqual(base_slug_for('property', '@@@'), 'property')
        self.assertEqual(base_slug_for('project', ''), 'project')
        self.assertEqual(base_slug_for('project', 'Riviera'), 'riviera')

    def test_candidate_sequence(self):
        self.assertEqual(list(candidate_slugs('beach-condo', 3)), ['beach-condo', 'beach-condo-2', 'beach-condo-3'])
        self.assertEqual(list(candidate_slugs('beach-condo', 1)), ['beach-condo'])


# =============================================================================
# UNIQUE SLUG GENERATION TESTS
# =============================================================================

class GenerateUniqueSlugTest(SimpleTestCase):

    def test_free_base_slug(self):
        store = StubSlugStore()
        self.assertEqual(generate_unique_slug('property', 'Beach Condo', store=store), 'beach-condo')
        self.assertEqual(store.lookups, ['beach-condo'])

    def test_numeric_suffixes(self):
        store = StubSlugStore({('property', 'beach-condo'): 1})
        self.assertEqual(generate_unique_slug('property', 'Beach Condo', store=store), 'beach-condo-2')

        store.taken[('property', 'beach-condo-2')] = 2
        self.assertEqual(generate_unique_slug('property', 'Beach Condo', store=store), 'beach-condo-3')

    def test_self_exclusion(self):
        store = StubSlugStore({('property', 'beach-condo'): 7})
        self.assertEqual(
            generate_unique_slug('property', 'Beach Condo', exclude_id=7, store=store),
            'beach-condo'
        )

    def test_kinds_are_separate_namespaces(self):
        store = StubSlugStore({('property', 'riviera'): 1})
        self.assertEqual(generate_unique_slug('project', 'Riviera', store=store), 'riviera')

    def test_empty_title_uses_kind_then_suffix(self):
        store = StubSlugStore({('property', 'property'): 1})
        self.assertEqual(generate_unique_slug('property', '★★★', store=store), 'property-2')

    def test_exhaustion(self):
        store = StubSlugStore({
            ('property', 'beach-condo'): 1,
            ('property', 'beach-condo-2'): 2,
            ('property', 'beach-condo-3'): 3,
        })
        with self.assertRaises(SlugGenerationExhausted) as ctx:
            generate_unique_slug('property', 'Beach Condo', store=store, max_attempts=3)

        self.assertEqual(ctx.exception.base_slug, 'beach-condo')
        self.assertEqual(ctx.exception.attempts, 3)
        self.assertEqual(len(store.lookups), 3)

    @override_settings(SLUG_MAX_ATTEMPTS=2)
    def test_attempt_cap_from_settings(self):
        store = StubSlugStore({('project', 'riviera'): 1, ('project', 'riviera-2'): 2})
        with self.assertRaises(SlugGenerationExhausted):
            generate_unique_slug('project', 'Riviera', store=store)

    def test_invalid_attempt_cap(self):
        with self.assertRaises(ValueError):
            generate_unique_slug('property', 'Beach Condo', store=StubSlugStore(), max_attempts=0)

    def test_storage_failure_propagates(self):
        with self.assertRaises(StorageUnavailable):
            generate_unique_slug('property', 'Beach Condo', store=FailingSlugStore())


class AsyncGenerateUniqueSlugTest(SimpleTestCase):

    async def test_numeric_suffixes(self):
        store = StubSlugStore({('property', 'beach-condo'): 1, ('property', 'beach-condo-2'): 2})
        slug = await agenerate_unique_slug('property', 'Beach Condo', store=store)
        self.assertEqual(slug, 'beach-condo-3')

    async def test_logs_taken_base_slug(self):
        store = StubSlugStore({('property', 'beach-condo'): 1})

        with self.assertLogs('services.slugs', level='DEBUG') as logs:
            await agenerate_unique_slug('property', 'Beach Condo', store=store)

        self.assertIn("Slug 'beach-condo' taken for property, using 'beach-condo-2'", logs.output[0])

    async def test_self_exclusion(self):
        store = StubSlugStore({('project', 'riviera'): 4})
        slug = await agenerate_unique_slug('project', 'Riviera', exclude_id=4, store=store)
        self.assertEqual(slug, 'riviera')

    async def test_exhaustion(self):
        store = StubSlugStore({('property', 'beach-condo'): 1})
        with self.assertRaises(SlugGenerationExhausted):
            await agenerate_unique_slug('property', 'Beach Condo', store=store, max_attempts=1)

    async def test_storage_failure_propagates(self):
        with self.assertRaises(StorageUnavailable):
            await agenerate_unique_slug('property', 'Beach Condo', store=FailingSlugStore())


class ModelSlugStoreTest(TestCase):

    def test_lookup_against_database(self):
        prop = make_property('Beach Condo')

        self.assertEqual(default_store.find_first('property', 'beach-condo'), prop)
        self.assertIsNone(default_store.find_first('property', 'beach-condo', exclude_id=prop.pk))
        self.assertIsNone(default_store.find_first('project', 'beach-condo'))

    def test_generate_against_database(self):
        make_property('Beach Condo')
        make_property('Beach Condo', slug='beach-condo-2')

        self.assertEqual(generate_unique_slug('property', 'Beach Condo'), 'beach-condo-3')

    def test_unknown_kind(self):
        with self.assertRaises(ValueError):
            default_store.find_first('lead', 'anything')

    def test_database_error_becomes_storage_unavailable(self):
        with patch('django.db.models.query.QuerySet.first', side_effect=DatabaseError('gone')):
            with self.assertRaises(StorageUnavailable):
                generate_unique_slug('property', 'Beach Condo')


class SaveWithUniqueSlugTest(TestCase):

    def test_assigns_slug_on_create(self):
        make_property('Pool Villa')
        project = Project(name='Pool Villa', location='East Pattaya', developer='Acme', completion='2026')

        save_with_unique_slug(project, 'project', project.name)

        self.assertIsNotNone(project.pk)
        self.assertEqual(project.slug, 'pool-villa')

    def test_update_keeps_own_slug(self):
        prop = make_property('Beach Condo')
        prop.price = 3200000

        save_with_unique_slug(prop, 'property', prop.title)

        self.assertEqual(prop.slug, 'beach-condo')

    def test_retries_when_slug_claimed_concurrently(self):
        prop = Property(title='Beach Condo', price=1, location='Jomtien', area=30,
                        property_type='condo', listing_type='sale')
        original_save = Property.save
        calls = []

        def racing_save(instance, *args, **kwargs):
            calls.append(instance.slug)
            if len(calls) == 1:
                raise IntegrityError('UNIQUE constraint failed: properties.slug')
            return original_save(instance, *args, **kwargs)

        with patch.object(Property, 'save', racing_save):
            save_with_unique_slug(prop, 'property', prop.title)

        self.assertEqual(len(calls), 2)
        self.assertIsNotNone(prop.pk)

    def test_gives_up_after_retries(self):
        prop = Property(title='Beach Condo', price=1, location='Jomtien', area=30,
                        property_type='condo', listing_type='sale')

        with patch.object(Property, 'save', side_effect=IntegrityError('conflict')):
            with self.assertRaises(IntegrityError):
                save_with_unique_slug(prop, 'property', prop.title, retries=2)


# =============================================================================
# AUTO-FILL TESTS
# =============================================================================

class AutoFillTemplateTest(SimpleTestCase):

    def test_condo_on_wongamat_beach(self):
        template = auto_fill_template('condo', 'Wongamat Beach')

        self.assertEqual(
            template.communal_facilities,
            ['Swimming Pool', 'Fitness Center', 'Lobby', '24h Reception', 'Communal Parking']
        )
        self.assertEqual(template.security, ['24h Communal Security', 'Key Card Access', 'Security Guard'])
        self.assertEqual(template.technical_equipment, ['Air Conditioning', 'Balcony'])
        self.assertEqual(template.location_features, ['Close to Beach', 'Beach Front', 'Easy Beach Access'])

    def test_land_in_unknown_area_is_empty(self):
        template = auto_fill_template('land', 'Unknown Area')
        self.assertTrue(template.is_empty())
        self.assertEqual(template, FeatureTemplate())

    def test_villa_in_jomtien(self):
        template = auto_fill_template('villa', 'Jomtien')

        self.assertEqual(template.security, ['Security Guard', 'CCTV Surveillance'])
        self.assertEqual(template.technical_equipment, ['Air Conditioning'])
        self.assertEqual(template.communal_facilities, [])
        self.assertEqual(template.location_features, ['Near Jomtien Beach', 'Easy Beach Access'])

    def test_house_matches_villa_defaults(self):
        self.assertEqual(auto_fill_template('house', '').security, ['Security Guard', 'CCTV Surveillance'])

    def test_unknown_type_and_no_location(self):
        self.assertTrue(auto_fill_template('townhouse', None).is_empty())
        self.assertTrue(auto_fill_template(None, None).is_empty())

    def test_location_rules_are_cumulative_and_deduplicated(self):
        features = location_features_for('Jomtien Beach Road')
        self.assertEqual(
            features,
            ['Close to Beach', 'Beach Front', 'Easy Beach Access', 'Near Jomtien Beach']
        )

    def test_case_insensitive_location(self):
        self.assertEqual(location_features_for('PRATUMNAK HILL'), ['Close to Beach', 'Quiet Area'])
        self.assertEqual(
            location_features_for('Central Pattaya'),
            ['City Center', 'Close to Shopping Center', 'Close to Terminal 21']
        )

    def test_results_are_independent_copies(self):
        first = auto_fill_template('condo', '')
        first.security.append('Moat')
        self.assertNotIn('Moat', auto_fill_template('condo', '').security)

    def test_to_dict_keys(self):
        payload = auto_fill_template('condo', 'Wongamat').to_dict()
        self.assertEqual(
            list(payload),
            ['communalFacilities', 'security', 'technicalEquipment', 'locationFeatures']
        )

    def test_labels_are_in_vocabulary(self):
        self.assertEqual(validate_vocabulary(), [])
        template = auto_fill_template('condo', 'Wongamat Beach Jomtien Central Pratumnak')
        for value in template.location_features:
            self.assertIn(value, FEATURE_VOCABULARIES['location_features'])


class AutoFillVocabularyCheckTest(SimpleTestCase):

    def test_passes_with_shipped_vocabulary(self):
        self.assertEqual(check_autofill_vocabulary(None), [])

    def test_reports_unknown_labels(self):
        with patch('services.autofill.validate_vocabulary', return_value=['security: Moat']):
            errors = check_autofill_vocabulary(None)

        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].id, 'services.E001')
        self.assertIn('Moat', errors[0].msg)


# =============================================================================
# NOTIFICATION TESTS
# =============================================================================

@override_settings(ADMIN_EMAIL='office@example.com', DEFAULT_FROM_EMAIL='noreply@example.com')
class LeadNotificationTest(SimpleTestCase):

    def setUp(self):
        self.lead = Lead(
            name='Anna <script>',
            email='anna@example.com',
            phone='+66 81 234 5678',
            subject='Viewing',
            message='Line one\nLine two',
        )

    def test_message_contents(self):
        send_lead_notification(self.lead)

        self.assertEqual(len(mail.outbox), 1)
        message = mail.outbox[0]
        self.assertEqual(message.to, ['office@example.com'])
        self.assertEqual(message.from_email, 'noreply@example.com')
        self.assertEqual(message.reply_to, ['anna@example.com'])
        self.assertIn('Subject: Viewing', message.body)
        self.assertIn('Line two', message.body)

    def test_html_is_escaped(self):
        html = build_lead_html(self.lead)
        self.assertNotIn('<script>', html)
        self.assertIn('Anna &lt;script&gt;', html)
        self.assertIn('<br>', html)

    def test_backend_failure_raises_notification_error(self):
        with patch('django.core.mail.EmailMultiAlternatives.send', side_effect=OSError('refused')):
            with self.assertRaises(NotificationError):
                send_lead_notification(self.lead)

    def test_safe_send_swallows_failure(self):
        with patch('django.core.mail.EmailMultiAlternatives.send', side_effect=OSError('refused')):
            self.assertFalse(safe_send_lead_notification(self.lead))
        self.assertTrue(safe_send_lead_notification(self.lead))
