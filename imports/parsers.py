"""
Google-Sheets listing form parser for PW Pattaya imports.
File: imports/parsers.py

Owners and agents submit listings through a Google form; the sheet export
has one row per submission with the form questions as headers. This module
converts those rows into property payloads the import service understands.

Usage:
    rows = parse_csv(content)
    valid, errors = validate_properties(rows)
"""

import csv
import io
import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

from properties.models import DEFAULT_COMMISSION
from properties.options import QUOTA_CHOICES, TRANSFER_COSTS_CHOICES

logger = logging.getLogger(__name__)


IMPORT_SOURCE = 'google-sheets'

# Form question -> property field for comma separated feature answers
FEATURE_COLUMNS = {
    'Views': 'views',
    'Private Features': 'private_features',
    'Rooms & Spaces': 'rooms_spaces',
    'Communal Facilities': 'communal_facilities',
    'Technical Equipment': 'technical_equipment',
    'Security': 'security',
    'Location Features': 'location_features',
    'Kitchen & Layout Features': 'kitchen_features',
}

PROPERTY_TYPE_MAP = {
    'Condo': 'condo',
    'House': 'house',
    'Villa': 'villa',
    'Land': 'land',
}

LISTING_TYPE_MAP = {
    'Sale': 'sale',
    'Rent': 'rent',
}

MIN_PLAUSIBLE_PRICE = 100_000
MAX_PLAUSIBLE_PRICE = 100_000_000

_INT_RE = re.compile(r'\s*([-+]?\d+)')
_FLOAT_RE = re.compile(r'\s*([-+]?(?:\d+\.?\d*|\.\d+))')


# =============================================================================
# CELL HELPERS
# =============================================================================

def _cell(row: Dict[str, Any], column: str) -> str:
    value = row.get(column)
    if value is None:
        return ''
    return str(value).strip()


def split_and_clean(value: Optional[str]) -> List[str]:
    """'Sea View, Pool View,, ' -> ['Sea View', 'Pool View']"""
    if not value:
        return []
    return [part.strip() for part in value.split(',') if part.strip()]


def parse_int(value: Optional[str]) -> Optional[int]:
    """Leading integer of a cell ('3 bedrooms' -> 3), or None."""
    if not value:
        return None
    match = _INT_RE.match(value)
    return int(match.group(1)) if match else None


def parse_float(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    match = _FLOAT_RE.match(value)
    return float(match.group(1)) if match else None


def match_choice(value: str, choices) -> Optional[str]:
    """Case-insensitive lookup of a free-text answer in model choices."""
    if not value:
        return None
    for choice_value, _label in choices:
        if choice_value.lower() == value.lower():
            return choice_value
    logger.debug(f"Unrecognised choice '{value}', leaving empty")
    return None


# =============================================================================
# ROW CONVERSION
# =============================================================================

def build_description(row: Dict[str, Any]) -> str:
    """
    Generated listing description, e.g.
    '2 bedroom Condo for sale in Jomtien. 65 sqm. Fully Furnished. Views: Sea View.'
    """
    bedrooms = _cell(row, 'Number of Bedrooms')
    bedrooms_text = 'Studio' if bedrooms == 'Studio' else f'{bedrooms} bedroom'
    description = (
        f"{bedrooms_text} {_cell(row, 'Property Type')} for "
        f"{_cell(row, 'Listing Type').lower()} in {_cell(row, 'Location/Area')}. "
        f"{_cell(row, 'Property Size (sqm)')} sqm. {_cell(row, 'Furnishing Status')}."
    )
    views = _cell(row, 'Views')
    if views:
        description += f' Views: {views}.'
    remarks = _cell(row, 'Special Features or Remarks')
    if remarks:
        description += f' {remarks}'
    return description


def convert_row(row: Dict[str, Any]) -> Dict[str, Any]:
    """Convert one sheet row into a property payload (snake_case keys)."""
    location = _cell(row, 'Location/Area')
    owner_name = _cell(row, 'Name (Owner/Agent)')

    bedrooms_cell = _cell(row, 'Number of Bedrooms')
    if bedrooms_cell == 'Studio':
        bedrooms = 0
    else:
        bedrooms = parse_int(bedrooms_cell) or 1

    property_data = {
        'title': _cell(row, 'Property Address') or f'Property in {location}',
        'description': build_description(row),
        'price': parse_int(_cell(row, 'Price (THB)').replace(',', '')) or 0,
        'location': location,
        'bedrooms': bedrooms,
        'bathrooms': parse_int(_cell(row, 'Number of Bathrooms')) or 1,
        'area': parse_float(_cell(row, 'Property Size (sqm)')) or 0,
        'property_type': PROPERTY_TYPE_MAP.get(_cell(row, 'Property Type'), 'condo'),
        'listing_type': LISTING_TYPE_MAP.get(_cell(row, 'Listing Type'), 'sale'),
        'status': 'active',

        'owner_name': owner_name or None,
        'owner_line': _cell(row, 'Line') or None,
        'owner_phone': _cell(row, 'Phone Number') or None,
        'owner_email': _cell(row, 'Email') or _cell(row, 'Email Address') or None,
        'owner_type': 'Owner' if 'Owner' in owner_name else 'Agent',

        'commission': parse_float(_cell(row, 'Commission Rate (%)')) or DEFAULT_COMMISSION,
        'short_term_let': _cell(row, 'Short Term Let Available?') == 'Yes',
        # the form column is spelled "Quata"
        'quota': match_choice(_cell(row, 'Quata') or _cell(row, 'Quota'), QUOTA_CHOICES),
        'land_size': _cell(row, 'Land Size (SQWha)') or None,

        'furnishing_status': _cell(row, 'Furnishing Status') or None,
        'layout_features': [],

        'maintenance_charges': parse_int(_cell(row, 'Maintenance Charges (Baht/Month)')) or None,
        'common_area_fee': parse_float(_cell(row, 'Common Area Fee (Baht/sqm/Month)')) or None,
        'transfer_costs': match_choice(_cell(row, 'Transfer Costs Payment'), TRANSFER_COSTS_CHOICES),

        'available_from': _cell(row, 'Available From') or None,
        'special_remarks': _cell(row, 'Special Features or Remarks') or None,

        'images': split_and_clean(_cell(row, 'Property Photos')),
        'import_source': IMPORT_SOURCE,
    }

    for column, field in FEATURE_COLUMNS.items():
        property_data[field] = split_and_clean(_cell(row, column))

    return property_data


def parse_sheet_rows(rows: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Convert sheet rows to property payloads, skipping blank rows."""
    parsed = []
    for row in rows:
        if not any(_cell(row, column) for column in row if column):
            continue
        parsed.append(convert_row(row))
    return parsed


def parse_csv(content: str) -> List[Dict[str, Any]]:
    """
    Parse a CSV export of the listing sheet.

    Args:
        content: CSV text with the form questions as the header row

    Raises:
        ValueError: the content has no header row
    """
    if content.startswith('\ufeff'):
        content = content[1:]
    reader = csv.DictReader(io.StringIO(content))
    if not reader.fieldnames:
        raise ValueError('CSV file has no header row')
    parsed = parse_sheet_rows(reader)
    logger.info(f"Parsed {len(parsed)} properties from CSV")
    return parsed


# =============================================================================
# VALIDATION
# =============================================================================

def validate_property(property_data: Dict[str, Any]) -> List[str]:
    """Return the problems that keep a parsed row from being imported."""
    problems = []
    price = property_data.get('price') or 0
    area = property_data.get('area') or 0

    if not property_data.get('title'):
        problems.append('Title is required')
    if price <= 0:
        problems.append('Valid price is required')
    if not property_data.get('location'):
        problems.append('Location is required')
    if property_data.get('bedrooms') is None:
        problems.append('Bedrooms is required')
    if not property_data.get('bathrooms'):
        problems.append('Bathrooms is required')
    if area <= 0:
        problems.append('Area is required')

    if price < MIN_PLAUSIBLE_PRICE:
        problems.append('Warning: Price seems too low')
    if price > MAX_PLAUSIBLE_PRICE:
        problems.append('Warning: Price seems too high')

    return problems


def validate_properties(parsed: List[Dict[str, Any]]) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    Split parsed rows into importable ones and rejects.

    Returns:
        (valid, errors) where each error is
        {'index': row position, 'property': title, 'errors': [...]}
    """
    valid = []
    errors = []
    for index, property_data in enumerate(parsed):
        problems = validate_property(property_data)
        if problems:
            errors.append({
                'index': index,
                'property': property_data.get('title') or '',
                'errors': problems,
            })
        else:
            valid.append(property_data)
    return valid, errors
