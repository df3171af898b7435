# ===== SERVICES INTEGRATION LAYER =====
"""
Centralized service integration layer for the PW Pattaya backend.
Provides consistent interfaces and error handling for all business services.

Modules:
- slugs: unique URL slug generation for properties and projects
- autofill: default feature selections for new listings
- notifications: lead notification email

The imports app raises ImportRowError for rows it cannot turn into properties.
"""


# =============================================================================
# SERVICE INTEGRATION EXCEPTIONS
# =============================================================================

class ServiceIntegrationError(Exception):
    """Base exception for service integration errors."""
    pass


class SlugGenerationError(ServiceIntegrationError):
    """Raised when a unique slug cannot be produced."""
    pass


class StorageUnavailable(SlugGenerationError):
    """Raised when the slug collision lookup against storage fails."""
    pass


class SlugGenerationExhausted(SlugGenerationError):
    """Raised when every candidate slug up to the attempt cap is taken."""

    def __init__(self, kind: str, base_slug: str, attempts: int):
        self.kind = kind
        self.base_slug = base_slug
        self.attempts = attempts
        super().__init__(
            f"No free slug for {kind} '{base_slug}' after {attempts} attempts"
        )


class NotificationError(ServiceIntegrationError):
    """Raised when an outgoing notification cannot be delivered."""
    pass


class ImportRowError(ServiceIntegrationError):
    """Raised when a single imported row cannot become a property."""
    pass
