"""
Template Auto-Fill Service for PW Pattaya.

Derives default feature selections for a new listing from its property type
and the free-text location, so the admin form starts pre-populated.

Rules:
- Property type sets communal facilities, security and technical equipment
  (condo, house/villa; land and unknown types get nothing)
- Location keywords add location features; every matching rule applies
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from properties.options import (
    COMMUNAL_FACILITY_OPTIONS,
    LOCATION_FEATURE_OPTIONS,
    SECURITY_OPTIONS,
    TECHNICAL_EQUIPMENT_OPTIONS,
)

logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class FeatureTemplate:
    """Default feature selections across the four auto-filled categories."""
    communal_facilities: List[str] = field(default_factory=list)
    security: List[str] = field(default_factory=list)
    technical_equipment: List[str] = field(default_factory=list)
    location_features: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[str]]:
        """Form payload keys as used by the admin property form."""
        return {
            'communalFacilities': list(self.communal_facilities),
            'security': list(self.security),
            'technicalEquipment': list(self.technical_equipment),
            'locationFeatures': list(self.location_features),
        }

    def is_empty(self) -> bool:
        return not (self.communal_facilities or self.security
                    or self.technical_equipment or self.location_features)


# =============================================================================
# DEFAULTS BY PROPERTY TYPE
# =============================================================================

CONDO_DEFAULTS = {
    'communal_facilities': (
        'Swimming Pool',
        'Fitness Center',
        'Lobby',
        '24h Reception',
        'Communal Parking',
    ),
    'security': ('24h Communal Security', 'Key Card Access', 'Security Guard'),
    'technical_equipment': ('Air Conditioning', 'Balcony'),
}

HOUSE_DEFAULTS = {
    'security': ('Security Guard', 'CCTV Surveillance'),
    'technical_equipment': ('Air Conditioning',),
}

TYPE_DEFAULTS = {
    'condo': CONDO_DEFAULTS,
    'house': HOUSE_DEFAULTS,
    'villa': HOUSE_DEFAULTS,
}

# (keywords, features) checked in order against the lowercased location
LOCATION_RULES: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...]], ...] = (
    (('wongamat', 'beach'), ('Close to Beach', 'Beach Front', 'Easy Beach Access')),
    (('jomtien',), ('Near Jomtien Beach', 'Easy Beach Access')),
    (('central', 'pattaya'), ('City Center', 'Close to Shopping Center', 'Close to Terminal 21')),
    (('pratumnak',), ('Close to Beach', 'Quiet Area')),
)

_VOCABULARIES = {
    'communal_facilities': COMMUNAL_FACILITY_OPTIONS,
    'security': SECURITY_OPTIONS,
    'technical_equipment': TECHNICAL_EQUIPMENT_OPTIONS,
    'location_features': LOCATION_FEATURE_OPTIONS,
}


def _append_unique(target: List[str], values) -> None:
    for value in values:
        if value not in target:
            target.append(value)


# =============================================================================
# AUTO-FILL
# =============================================================================

def location_features_for(location: Optional[str]) -> List[str]:
    """
    Location features implied by keywords in a free-text location.

    Matching is a case-insensitive substring test. Rules are cumulative;
    a label produced by more than one rule appears once, at its first
    position.
    """
    text = (location or '').lower()
    features: List[str] = []

    for keywords, rule_features in LOCATION_RULES:
        if any(keyword in text for keyword in keywords):
            _append_unique(features, rule_features)

    return features


def auto_fill_template(property_type: Optional[str], location: Optional[str]) -> FeatureTemplate:
    """
    Build the default feature template for a property type and location.

    Args:
        property_type: 'condo', 'house', 'villa', 'land' or anything else
        location: Free-text location, e.g. "Wongamat Beach"

    Returns:
        FeatureTemplate; categories without defaults are empty lists
    """
    template = FeatureTemplate()

    for category, values in TYPE_DEFAULTS.get(property_type, {}).items():
        setattr(template, category, list(values))

    template.location_features = location_features_for(location)

    logger.debug(
        f"Auto-fill for type={property_type!r} location={location!r}: "
        f"{sum(len(v) for v in template.to_dict().values())} features"
    )
    return template


def validate_vocabulary() -> List[str]:
    """Return auto-fill labels missing from their category vocabulary (empty when consistent)."""
    problems = []
    for defaults in TYPE_DEFAULTS.values():
        for category, values in defaults.items():
            for value in values:
                if value not in _VOCABULARIES[category]:
                    problems.append(f"{category}: {value}")
    for _, values in LOCATION_RULES:
        for value in values:
            if value not in LOCATION_FEATURE_OPTIONS:
                problems.append(f"location_features: {value}")
    return problems
