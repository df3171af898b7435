"""
Property form options.

Controlled vocabularies for listing features and the choice lists used by
the property, project and template models. All values are immutable and
shared for the lifetime of the process.
"""

VIEW_OPTIONS = (
    'Sea View',
    'Panoramic View',
    'Mountain View',
    'City View',
    'Garden View',
    'Pool View',
)

PRIVATE_FEATURE_OPTIONS = (
    'Private Terrace',
    'Private Jacuzzi',
    'Private Garden',
    'Private Pool',
)

ROOMS_SPACES_OPTIONS = (
    'Walk-in Closet',
    'Laundry Room',
    'Home Office',
    'Storage Room',
    "Maid's Room",
)

COMMUNAL_FACILITY_OPTIONS = (
    'Swimming Pool',
    'Fitness Center',
    'Communal Sauna',
    'Communal Garden',
    'Communal Parking',
    'Lobby',
    '24h Reception',
    'Co-working Space',
    'Children Playground',
    'BBQ Area',
)

TECHNICAL_EQUIPMENT_OPTIONS = (
    'WiFi',
    'High Speed Internet',
    'Air Conditioning',
    'Satellite TV',
    'CCTV',
    'Terrace',
    'Balcony',
    'Large Terrace',
    'Large Balcony',
)

SECURITY_OPTIONS = (
    'Personal Security System',
    '24h Communal Security',
    '24h Patrolling Security',
    'Key Card Access',
    'Security Guard',
    'CCTV Surveillance',
)

LOCATION_FEATURE_OPTIONS = (
    'Close to Beach',
    'Beach Front',
    'City Center',
    'Close to Shopping Center',
    'Close to Hospital',
    'Close to Terminal 21',
    'Close to Central Festival',
    'Near Walking Street',
    'Near Jomtien Beach',
    'On Main Road',
    'On Taxi Routes',
    'Easy Beach Access',
    'Quiet Area',
)

KITCHEN_FEATURE_OPTIONS = (
    'European Kitchen',
    'Kitchenette',
    'Built-in Appliances',
    'Open Plan Kitchen',
)

LAYOUT_FEATURE_OPTIONS = (
    'Corner Unit',
    'High Floor',
    'Duplex',
    'Penthouse',
)

FURNISHING_OPTIONS = (
    'Fully Furnished',
    'Partially Furnished',
    'Unfurnished',
)

# Feature category (model field name) -> vocabulary
FEATURE_VOCABULARIES = {
    'views': VIEW_OPTIONS,
    'private_features': PRIVATE_FEATURE_OPTIONS,
    'rooms_spaces': ROOMS_SPACES_OPTIONS,
    'communal_facilities': COMMUNAL_FACILITY_OPTIONS,
    'technical_equipment': TECHNICAL_EQUIPMENT_OPTIONS,
    'security': SECURITY_OPTIONS,
    'location_features': LOCATION_FEATURE_OPTIONS,
    'kitchen_features': KITCHEN_FEATURE_OPTIONS,
    'layout_features': LAYOUT_FEATURE_OPTIONS,
}


# =============================================================================
# MODEL CHOICES
# =============================================================================

PROPERTY_TYPE_CHOICES = [
    ('condo', 'Condo'),
    ('house', 'House'),
    ('villa', 'Villa'),
    ('land', 'Land'),
]

LISTING_TYPE_CHOICES = [
    ('sale', 'For Sale'),
    ('rent', 'For Rent'),
]

STATUS_CHOICES = [
    ('active', 'Active'),
    ('pending', 'Pending'),
    ('sold', 'Sold'),
    ('rented', 'Rented'),
]

OWNER_TYPE_CHOICES = [
    ('Owner', 'Owner'),
    ('Agent', 'Agent'),
]

QUOTA_CHOICES = [
    ('Thai', 'Thai'),
    ('Foreign', 'Foreign'),
    ('Limited Company', 'Limited Company'),
]

TRANSFER_COSTS_CHOICES = [
    ('Seller Pays', 'Seller Pays'),
    ('Buyer Pays', 'Buyer Pays'),
    ('Shared 50/50', 'Shared 50/50'),
]


def as_choice_list(choices):
    """Render Django choices as [{'value': ..., 'label': ...}] for API consumers."""
    return [{'value': value, 'label': label} for value, label in choices]


def get_form_options():
    """All vocabularies and choice lists keyed for the admin property form."""
    options = {name: list(values) for name, values in FEATURE_VOCABULARIES.items()}
    options.update({
        'furnishing': list(FURNISHING_OPTIONS),
        'property_types': as_choice_list(PROPERTY_TYPE_CHOICES),
        'listing_types': as_choice_list(LISTING_TYPE_CHOICES),
        'statuses': as_choice_list(STATUS_CHOICES),
        'owner_types': as_choice_list(OWNER_TYPE_CHOICES),
        'quotas': as_choice_list(QUOTA_CHOICES),
        'transfer_costs': as_choice_list(TRANSFER_COSTS_CHOICES),
    })
    return options
