# ===== IMPORTS SERVICES - PROPERTY IMPORT BUSINESS LOGIC =====
"""
Property import services for PW Pattaya
File: imports/services.py

Creates properties from parsed sheet rows inside a tracked ImportBatch.
Rows are imported one by one: a failing row is logged on the batch and the
rest of the file still goes in.

Key Services:
- PropertyImportService: batch driven row import
- import_csv_content: parse, validate and import a CSV export in one call
- file_hash: SHA256 of an uploaded file for the batch record
"""

import hashlib
import logging
from typing import Any, Dict, List, Optional

from django.db import IntegrityError
from django.utils import timezone

from services import ImportRowError, SlugGenerationError
from properties.serializers import PropertySerializer
from .models import ImportBatch
from .parsers import parse_csv, validate_properties

logger = logging.getLogger(__name__)


DEFAULT_IMPORT_SOURCE = 'google-sheets-import'

# Payloads built by the admin frontend use camelCase keys
CAMEL_CASE_FIELDS = {
    'propertyType': 'property_type',
    'listingType': 'listing_type',
    'ownerName': 'owner_name',
    'ownerLine': 'owner_line',
    'ownerPhone': 'owner_phone',
    'ownerEmail': 'owner_email',
    'ownerType': 'owner_type',
    'shortTermLet': 'short_term_let',
    'landSize': 'land_size',
    'privateFeatures': 'private_features',
    'roomsSpaces': 'rooms_spaces',
    'communalFacilities': 'communal_facilities',
    'technicalEquipment': 'technical_equipment',
    'locationFeatures': 'location_features',
    'furnishingStatus': 'furnishing_status',
    'kitchenFeatures': 'kitchen_features',
    'layoutFeatures': 'layout_features',
    'maintenanceCharges': 'maintenance_charges',
    'commonAreaFee': 'common_area_fee',
    'transferCosts': 'transfer_costs',
    'availableFrom': 'available_from',
    'specialRemarks': 'special_remarks',
    'importSource': 'import_source',
    'importDate': 'import_date',
}

# Legacy "features" list is the union of these categories
LEGACY_FEATURE_SOURCES = ('views', 'private_features', 'rooms_spaces')


def normalize_payload(row: Dict[str, Any]) -> Dict[str, Any]:
    """Map camelCase keys to model field names; snake_case keys pass through."""
    return {CAMEL_CASE_FIELDS.get(key, key): value for key, value in row.items()}


def format_serializer_errors(errors: Dict[str, Any]) -> str:
    """{'price': ['Price must be positive.']} -> 'price: Price must be positive.'"""
    parts = []
    for field, messages in errors.items():
        if isinstance(messages, (list, tuple)):
            messages = ' '.join(str(message) for message in messages)
        parts.append(f"{field}: {messages}")
    return '; '.join(parts)


def file_hash(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest()


# =============================================================================
# PROPERTY IMPORT SERVICE
# =============================================================================

class PropertyImportService:
    """
    Import parsed property rows into the database.

    Usage:
        batch = ImportBatch.objects.create(import_type='API', created_by=user)
        results = PropertyImportService(batch).run(rows)

    Results:
        {
            "total": 3,
            "success": 2,
            "failed": 1,
            "successIds": [41, 42],
            "errors": [{"property": "Sea View Condo", "error": "price: ..."}]
        }
    """

    def __init__(self, import_batch: ImportBatch):
        self.import_batch = import_batch
        self.success_ids: List[int] = []
        self.failures: List[Dict[str, str]] = []

    def run(self, rows: List[Any]) -> Dict[str, Any]:
        """Import every row and finalize the batch."""
        logger.info(f"Starting property import for batch {self.import_batch.batch_id} ({len(rows)} rows)")
        self.import_batch.records_total = len(rows)
        self.import_batch.mark_as_processing()

        try:
            for index, row in enumerate(rows):
                self._import_row(index, row)
        except Exception as e:
            logger.error(f"Property import failed for batch {self.import_batch.batch_id}: {e}")
            self.import_batch.mark_as_failed(str(e))
            raise

        self._finalize_import_batch()
        return self.results()

    def results(self) -> Dict[str, Any]:
        return {
            'total': len(self.success_ids) + len(self.failures),
            'success': len(self.success_ids),
            'failed': len(self.failures),
            'successIds': list(self.success_ids),
            'errors': list(self.failures),
        }

    def _import_row(self, index: int, row: Any):
        title = row.get('title') if isinstance(row, dict) else None
        label = title or f'Row {index + 1}'
        try:
            prop = self.create_property(row)
        except (ImportRowError, SlugGenerationError, IntegrityError) as e:
            logger.warning(f"Failed to import '{label}': {e}")
            self.failures.append({'property': label, 'error': str(e)})
        else:
            self.success_ids.append(prop.pk)
            logger.info(f"Imported '{prop.title}' (id {prop.pk}, slug '{prop.slug}')")

    def create_property(self, row: Any):
        """
        Create one property from a parsed row.

        Raises:
            ImportRowError: the row is not an object or fails validation
        """
        if not isinstance(row, dict):
            raise ImportRowError('Row is not an object')

        payload = normalize_payload(row)
        serializer = PropertySerializer(data=payload)
        if not serializer.is_valid():
            raise ImportRowError(format_serializer_errors(serializer.errors))

        extra = {
            'import_source': payload.get('import_source') or DEFAULT_IMPORT_SOURCE,
            'import_date': timezone.now(),
        }
        if 'features' not in payload:
            features = []
            for field in LEGACY_FEATURE_SOURCES:
                features.extend(serializer.validated_data.get(field, []))
            extra['features'] = features

        return serializer.save(**extra)

    def _finalize_import_batch(self):
        batch = self.import_batch
        batch.records_processed = len(self.success_ids) + len(self.failures)
        batch.records_created = len(self.success_ids)
        batch.records_skipped = len(self.failures)
        batch.error_log = list(batch.error_log or []) + self.failures
        batch.mark_as_completed()
        logger.info(
            f"Batch {batch.batch_id} completed: {batch.records_created} created, "
            f"{batch.records_skipped} failed"
        )


# =============================================================================
# CSV PIPELINE
# =============================================================================

def import_csv_content(content: str, import_batch: ImportBatch) -> Dict[str, Any]:
    """
    Parse, validate and import a CSV export of the listing sheet.

    Rows rejected by validation are logged on the batch and reported
    separately from rows that fail on creation.

    Returns:
        {'results': {...}, 'validationErrors': [...]}

    Raises:
        ValueError: the CSV cannot be parsed
    """
    parsed = parse_csv(content)
    valid, validation_errors = validate_properties(parsed)

    import_batch.error_log = [
        {'property': error['property'] or f"Row {error['index'] + 1}", 'error': '; '.join(error['errors'])}
        for error in validation_errors
    ]

    service = PropertyImportService(import_batch)
    results = service.run(valid)

    import_batch.records_total = len(parsed)
    import_batch.records_skipped = len(import_batch.error_log)
    import_batch.save(update_fields=['records_total', 'records_skipped', 'updated_at'])

    return {'results': results, 'validationErrors': validation_errors}


def create_import_batch(import_type: str, user=None, file_name: Optional[str] = None,
                        content: Optional[bytes] = None) -> ImportBatch:
    """Create a pending batch, recording file size and hash when content is given."""
    batch = ImportBatch(import_type=import_type, file_name=file_name)
    if user is not None and getattr(user, 'is_authenticated', False):
        batch.created_by = user
    if content is not None:
        batch.file_size = len(content)
        batch.file_hash = file_hash(content)
    batch.save()
    return batch
