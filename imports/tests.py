# ===== IMPORTS APP TEST SUITE =====
"""
Test suite for the property import pipeline
File: imports/tests.py

Test Coverage:
- Sheet row parsing and validation rules
- PropertyImportService batch tracking and per-row failures
- CSV upload, JSON bulk import and batch history endpoints
- import_properties management command
"""

import io
import tempfile
from pathlib import Path
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase, TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from properties.models import Property
from services import SlugGenerationExhausted
from .models import ImportBatch
from .parsers import (
    convert_row,
    parse_csv,
    parse_float,
    parse_int,
    parse_sheet_rows,
    split_and_clean,
    validate_properties,
)
from .services import PropertyImportService, import_csv_content, normalize_payload

User = get_user_model()


SHEET_HEADER = (
    'Timestamp,Email Address,Line,Name (Owner/Agent),Phone Number,Property Address,'
    'Listing Type,Price (THB),Commission Rate (%),Short Term Let Available?,Property Type,'
    'Property Size (sqm),Land Size (SQWha),Quata,Number of Bedrooms,Number of Bathrooms,'
    'Location/Area,Views,Private Features,Rooms & Spaces,Communal Facilities,'
    'Technical Equipment,Security,Location Features,Furnishing Status,'
    'Kitchen & Layout Features,Maintenance Charges (Baht/Month),'
    'Common Area Fee (Baht/sqm/Month),Transfer Costs Payment,Special Features or Remarks,'
    'Available From,Property Photos,Email'
)

CONDO_ROW = (
    '2024/05/01,owner@example.com,@somchai,Somchai (Owner),081-234-5678,The Riviera Wongamat 1204,'
    'Sale,"3,900,000",,Yes,Condo,'
    '45.5,,Foreign,1,1,'
    'Wongamat,"Sea View, City View",Balcony,,"Swimming Pool, Fitness",'
    'Air Conditioning,"CCTV, Keycard Access",Close to Beach,Fully Furnished,'
    '"Oven, Microwave",1500,'
    '45,Shared 50/50,Corner unit,'
    'Immediately,"https://drive.google.com/a, https://drive.google.com/b",'
)

STUDIO_ROW = (
    '2024/05/02,agent@example.com,,Best Realty Agent,089-000-0000,,'
    'Sale,"1,890,000",5,No,Condo,'
    '28,,,Studio,1,'
    'Jomtien,,,,,'
    ',,,Fully Furnished,'
    ',,'
    ',,,'
    ',,'
)

BAD_PRICE_ROW = (
    '2024/05/03,x@example.com,,Someone,0,Cheap Plot,'
    'Sale,0,,No,Land,'
    '400,100,Thai,0,1,'
    'Huay Yai,,,,,'
    ',,,,'
    ',,'
    ',,,'
    ',,'
)


def sheet_csv(*rows):
    return '\n'.join((SHEET_HEADER,) + rows) + '\n'


def sheet_row(**overrides):
    """A parsed-property payload as produced by the sheet parser."""
    data = {
        'title': 'Sea View Condo',
        'description': '1 bedroom Condo for sale in Jomtien.',
        'price': 3500000,
        'location': 'Jomtien',
        'bedrooms': 1,
        'bathrooms': 1,
        'area': 35,
        'property_type': 'condo',
        'listing_type': 'sale',
        'status': 'active',
        'views': ['Sea View'],
        'private_features': ['Balcony'],
        'rooms_spaces': [],
        'import_source': 'google-sheets',
    }
    data.update(overrides)
    return data


# =============================================================================
# PARSER TESTS
# =============================================================================

class CellHelperTest(SimpleTestCase):

    def test_split_and_clean(self):
        self.assertEqual(split_and_clean('Sea View, Pool View,, '), ['Sea View', 'Pool View'])
        self.assertEqual(split_and_clean(''), [])
        self.assertEqual(split_and_clean(None), [])

    def test_parse_int_takes_leading_number(self):
        self.assertEqual(parse_int('3'), 3)
        self.assertEqual(parse_int(' 2 bedrooms'), 2)
        self.assertIsNone(parse_int('Studio'))
        self.assertIsNone(parse_int(''))

    def test_parse_float(self):
        self.assertEqual(parse_float('45.5'), 45.5)
        self.assertEqual(parse_float('120 sqm'), 120.0)
        self.assertIsNone(parse_float('n/a'))


class SheetParserTest(SimpleTestCase):

    def test_condo_row(self):
        parsed = parse_csv(sheet_csv(CONDO_ROW))

        self.assertEqual(len(parsed), 1)
        prop = parsed[0]
        self.assertEqual(prop['title'], 'The Riviera Wongamat 1204')
        self.assertEqual(prop['price'], 3900000)
        self.assertEqual(prop['area'], 45.5)
        self.assertEqual(prop['bedrooms'], 1)
        self.assertEqual(prop['property_type'], 'condo')
        self.assertEqual(prop['listing_type'], 'sale')
        self.assertEqual(prop['status'], 'active')
        self.assertEqual(prop['views'], ['Sea View', 'City View'])
        self.assertEqual(prop['communal_facilities'], ['Swimming Pool', 'Fitness'])
        self.assertEqual(prop['kitchen_features'], ['Oven', 'Microwave'])
        self.assertEqual(prop['images'], ['https://drive.google.com/a', 'https://drive.google.com/b'])
        self.assertEqual(prop['owner_type'], 'Owner')
        self.assertEqual(prop['owner_email'], 'owner@example.com')
        self.assertEqual(prop['quota'], 'Foreign')
        self.assertEqual(prop['transfer_costs'], 'Shared 50/50')
        self.assertEqual(prop['maintenance_charges'], 1500)
        self.assertEqual(prop['common_area_fee'], 45.0)
        self.assertTrue(prop['short_term_let'])
        self.assertEqual(prop['commission'], 3.0)
        self.assertEqual(prop['import_source'], 'google-sheets')

    def test_generated_description(self):
        prop = parse_csv(sheet_csv(CONDO_ROW))[0]
        self.assertEqual(
            prop['description'],
            '1 bedroom Condo for sale in Wongamat. 45.5 sqm. Fully Furnished. '
            'Views: Sea View, City View. Corner unit'
        )

    def test_studio_row(self):
        prop = parse_csv(sheet_csv(STUDIO_ROW))[0]

        self.assertEqual(prop['bedrooms'], 0)
        self.assertEqual(prop['title'], 'Property in Jomtien')
        self.assertEqual(prop['listing_type'], 'sale')
        self.assertEqual(prop['price'], 1890000)
        self.assertEqual(prop['commission'], 5.0)
        self.assertEqual(prop['owner_type'], 'Agent')
        self.assertFalse(prop['short_term_let'])
        self.assertTrue(prop['description'].startswith('Studio Condo for sale in Jomtien.'))

    def test_unknown_types_fall_back(self):
        prop = convert_row({'Property Type': 'Townhouse', 'Listing Type': 'Lease', 'Location/Area': 'Naklua'})
        self.assertEqual(prop['property_type'], 'condo')
        self.assertEqual(prop['listing_type'], 'sale')
        self.assertEqual(prop['bathrooms'], 1)
        self.assertEqual(prop['bedrooms'], 1)

    def test_unknown_quota_left_empty(self):
        prop = convert_row({'Quata': 'Mixed', 'Location/Area': 'Pratumnak'})
        self.assertIsNone(prop['quota'])

    def test_blank_rows_skipped(self):
        parsed = parse_sheet_rows([{'Property Address': '', 'Location/Area': ' '}, {'Location/Area': 'Jomtien'}])
        self.assertEqual(len(parsed), 1)

    def test_byte_order_mark_stripped(self):
        parsed = parse_csv('\ufeff' + sheet_csv(CONDO_ROW))
        self.assertEqual(parsed[0]['title'], 'The Riviera Wongamat 1204')

    def test_empty_csv_rejected(self):
        with self.assertRaises(ValueError):
            parse_csv('')


class ValidatePropertiesTest(SimpleTestCase):

    def test_valid_row(self):
        valid, errors = validate_properties([sheet_row()])
        self.assertEqual(len(valid), 1)
        self.assertEqual(errors, [])

    def test_required_fields(self):
        valid, errors = validate_properties([sheet_row(title='', price=0, location='', area=0)])

        self.assertEqual(valid, [])
        self.assertEqual(errors[0]['index'], 0)
        self.assertIn('Title is required', errors[0]['errors'])
        self.assertIn('Valid price is required', errors[0]['errors'])
        self.assertIn('Location is required', errors[0]['errors'])
        self.assertIn('Area is required', errors[0]['errors'])

    def test_zero_bedrooms_is_valid(self):
        valid, errors = validate_properties([sheet_row(bedrooms=0)])
        self.assertEqual(len(valid), 1)

    def test_price_plausibility_warnings_reject_row(self):
        _, errors = validate_properties([sheet_row(price=50000), sheet_row(price=150000000)])

        self.assertEqual(errors[0]['errors'], ['Warning: Price seems too low'])
        self.assertEqual(errors[1]['errors'], ['Warning: Price seems too high'])


# =============================================================================
# SERVICE TESTS
# =============================================================================

class PropertyImportServiceTest(TestCase):

    def setUp(self):
        self.batch = ImportBatch.objects.create(import_type='API')

    def test_imports_rows_with_unique_slugs(self):
        results = PropertyImportService(self.batch).run([sheet_row(), sheet_row()])

        self.assertEqual(results['total'], 2)
        self.assertEqual(results['success'], 2)
        self.assertEqual(results['failed'], 0)
        slugs = sorted(Property.objects.values_list('slug', flat=True))
        self.assertEqual(slugs, ['sea-view-condo', 'sea-view-condo-2'])
        self.assertEqual(sorted(results['successIds']), sorted(Property.objects.values_list('pk', flat=True)))

    def test_import_tracking_fields(self):
        PropertyImportService(self.batch).run([sheet_row()])

        prop = Property.objects.get()
        self.assertEqual(prop.import_source, 'google-sheets')
        self.assertIsNotNone(prop.import_date)
        self.assertEqual(prop.features, ['Sea View', 'Balcony'])

    def test_camel_case_payload(self):
        row = sheet_row()
        row.pop('property_type')
        row.pop('listing_type')
        row.update({'propertyType': 'villa', 'listingType': 'rent', 'locationFeatures': ['Quiet Area']})

        PropertyImportService(self.batch).run([row])

        prop = Property.objects.get()
        self.assertEqual(prop.property_type, 'villa')
        self.assertEqual(prop.listing_type, 'rent')
        self.assertEqual(prop.location_features, ['Quiet Area'])

    def test_failed_rows_are_recorded_and_others_imported(self):
        results = PropertyImportService(self.batch).run([
            sheet_row(title='Good Condo'),
            sheet_row(title='Bad Condo', price=-5),
            'not a row',
        ])

        self.assertEqual(results['success'], 1)
        self.assertEqual(results['failed'], 2)
        self.assertEqual(results['errors'][0]['property'], 'Bad Condo')
        self.assertIn('price', results['errors'][0]['error'])
        self.assertEqual(results['errors'][1]['property'], 'Row 3')

        self.batch.refresh_from_db()
        self.assertEqual(self.batch.status, 'completed')
        self.assertTrue(self.batch.has_errors)
        self.assertEqual(self.batch.records_created, 1)
        self.assertEqual(self.batch.records_skipped, 2)
        self.assertEqual(len(self.batch.error_log), 2)

    def test_slug_exhaustion_fails_only_that_row(self):
        with patch('properties.serializers.save_with_unique_slug',
                   side_effect=SlugGenerationExhausted('property', 'sea-view-condo', 100)):
            results = PropertyImportService(self.batch).run([sheet_row()])

        self.assertEqual(results['failed'], 1)
        self.assertIn('No free slug', results['errors'][0]['error'])

    def test_unexpected_error_marks_batch_failed(self):
        with patch.object(PropertyImportService, 'create_property', side_effect=RuntimeError('boom')):
            with self.assertRaises(RuntimeError):
                PropertyImportService(self.batch).run([sheet_row()])

        self.batch.refresh_from_db()
        self.assertEqual(self.batch.status, 'failed')
        self.assertEqual(self.batch.error_message, 'boom')

    def test_normalize_payload(self):
        self.assertEqual(
            normalize_payload({'ownerName': 'Somchai', 'price': 1}),
            {'owner_name': 'Somchai', 'price': 1}
        )


class ImportCSVContentTest(TestCase):

    def test_validation_rejects_are_logged_on_batch(self):
        batch = ImportBatch.objects.create(import_type='CSV')

        outcome = import_csv_content(sheet_csv(CONDO_ROW, BAD_PRICE_ROW), batch)

        self.assertEqual(outcome['results']['success'], 1)
        self.assertEqual(len(outcome['validationErrors']), 1)
        self.assertEqual(outcome['validationErrors'][0]['index'], 1)

        batch.refresh_from_db()
        self.assertEqual(batch.records_total, 2)
        self.assertEqual(batch.records_created, 1)
        self.assertEqual(batch.records_skipped, 1)
        self.assertEqual(batch.error_log[0]['property'], 'Cheap Plot')


# =============================================================================
# API TESTS
# =============================================================================

class CSVUploadAPITest(APITestCase):

    def setUp(self):
        self.url = reverse('upload-csv')
        self.user = User.objects.create_user(username='agent', password='testpass123')

    def _upload(self, content, name='listings.csv'):
        upload = SimpleUploadedFile(name, content.encode('utf-8'), content_type='text/csv')
        return self.client.post(self.url, {'file': upload}, format='multipart')

    def test_requires_authentication(self):
        response = self._upload(sheet_csv(CONDO_ROW))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_upload_imports_properties(self):
        self.client.force_authenticate(self.user)

        response = self._upload(sheet_csv(CONDO_ROW, STUDIO_ROW, BAD_PRICE_ROW))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Import completed')
        self.assertEqual(response.data['results']['success'], 2)
        self.assertEqual(len(response.data['validationErrors']), 1)
        self.assertEqual(Property.objects.count(), 2)

        batch = ImportBatch.objects.get(batch_id=response.data['batch_id'])
        self.assertEqual(batch.import_type, 'CSV')
        self.assertEqual(batch.created_by, self.user)
        self.assertEqual(batch.file_name, 'listings.csv')
        self.assertEqual(len(batch.file_hash), 64)

    def test_missing_file(self):
        self.client.force_authenticate(self.user)
        response = self.client.post(self.url, {}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_wrong_extension(self):
        self.client.force_authenticate(self.user)
        response = self._upload(sheet_csv(CONDO_ROW), name='listings.xlsx')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_non_utf8_file(self):
        self.client.force_authenticate(self.user)
        upload = SimpleUploadedFile('listings.csv', b'\xff\xfe\x00bad', content_type='text/csv')
        response = self.client.post(self.url, {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class BulkImportAPITest(APITestCase):

    def setUp(self):
        self.url = reverse('property-import-properties')
        self.user = User.objects.create_user(username='agent', password='testpass123')

    def test_requires_authentication(self):
        response = self.client.post(self.url, {'properties': [sheet_row()]}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_properties_array_required(self):
        self.client.force_authenticate(self.user)
        response = self.client.post(self.url, {'properties': 'nope'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Invalid request: properties array required')

    def test_bulk_import(self):
        self.client.force_authenticate(self.user)

        response = self.client.post(
            self.url,
            {'properties': [sheet_row(), sheet_row(title='Pool Villa', property_type='villa')]},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Import completed')
        self.assertEqual(response.data['results']['total'], 2)
        self.assertEqual(response.data['results']['success'], 2)
        self.assertEqual(ImportBatch.objects.get().import_type, 'API')


class ImportBatchAPITest(APITestCase):

    def setUp(self):
        self.staff = User.objects.create_user(username='staff', password='pw', is_staff=True)
        self.agent = User.objects.create_user(username='agent', password='pw')
        self.batch = ImportBatch.objects.create(import_type='CSV', file_name='listings.csv')

    def test_staff_only(self):
        url = reverse('import-batch-list')
        self.client.force_authenticate(self.agent)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.staff)
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['results'][0]['file_name'], 'listings.csv')

    def test_detail_by_batch_id(self):
        self.client.force_authenticate(self.staff)
        response = self.client.get(reverse('import-batch-detail', args=[self.batch.batch_id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['batch_id'], str(self.batch.batch_id))
        self.assertEqual(response.data['status'], 'pending')


# =============================================================================
# MANAGEMENT COMMAND TESTS
# =============================================================================

class ImportPropertiesCommandTest(TestCase):

    def _write_csv(self, content):
        tmp = tempfile.NamedTemporaryFile('w', suffix='.csv', delete=False, encoding='utf-8')
        tmp.write(content)
        tmp.close()
        self.addCleanup(Path(tmp.name).unlink)
        return tmp.name

    def test_imports_file(self):
        path = self._write_csv(sheet_csv(CONDO_ROW, STUDIO_ROW))
        out = io.StringIO()

        call_command('import_properties', path, stdout=out)

        self.assertEqual(Property.objects.count(), 2)
        batch = ImportBatch.objects.get()
        self.assertEqual(batch.import_type, 'MANUAL')
        self.assertEqual(batch.status, 'completed')
        self.assertIn('Created: 2', out.getvalue())

    def test_dry_run_saves_nothing(self):
        path = self._write_csv(sheet_csv(CONDO_ROW, BAD_PRICE_ROW))
        out = io.StringIO()

        call_command('import_properties', path, '--dry-run', stdout=out)

        self.assertEqual(Property.objects.count(), 0)
        self.assertFalse(ImportBatch.objects.exists())
        self.assertIn('Valid: 1', out.getvalue())
        self.assertIn('Invalid: 1', out.getvalue())

    def test_missing_file(self):
        with self.assertRaises(CommandError):
            call_command('import_properties', '/nonexistent/listings.csv', stdout=io.StringIO())
