"""
Slug Generation Service for PW Pattaya.

Turns listing titles and project names into URL-safe slugs that are unique
within their own collection (properties and projects do not share a
namespace).

Workflow:
1. slugify() normalizes the text into a base slug
2. the storage lookup is asked whether a candidate is taken
3. "-2", "-3", ... suffixes are tried until a free candidate is found

The lookup is bounded by SLUG_MAX_ATTEMPTS. Uniqueness across concurrent
writers is enforced by the unique constraint on the slug column, see
save_with_unique_slug().
"""

import logging
import re
from typing import Any, Iterator, Optional

from django.apps import apps
from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction

from . import SlugGenerationExhausted, StorageUnavailable

logger = logging.getLogger(__name__)


DEFAULT_MAX_ATTEMPTS = 100
SLUG_SAVE_RETRIES = 3

# Slug namespaces and the models that own them
SLUG_KIND_MODELS = {
    'property': 'properties.Property',
    'project': 'properties.Project',
}

_WHITESPACE_RE = re.compile(r'\s+')
_INVALID_CHARS_RE = re.compile(r'[^\w\-]+', re.ASCII)
_MULTI_HYPHEN_RE = re.compile(r'--+')


# =============================================================================
# BASE SLUG NORMALIZATION
# =============================================================================

def slugify(text: Optional[str]) -> str:
    """
    Convert text to a URL-friendly slug.

    Lowercases, turns whitespace runs into hyphens, drops everything that is
    not an ASCII word character or hyphen, collapses repeated hyphens and
    trims hyphens from both ends. May return an empty string.

    Examples:
        slugify("Luxury Beach Condo in Pattaya") -> "luxury-beach-condo-in-pattaya"
        slugify("2-Bedroom Apartment @ Jomtien!") -> "2-bedroom-apartment-jomtien"
    """
    if not text:
        return ''

    slug = text.lower().strip()
    slug = _WHITESPACE_RE.sub('-', slug)
    slug = _INVALID_CHARS_RE.sub('', slug)
    slug = _MULTI_HYPHEN_RE.sub('-', slug)
    return slug.strip('-')


def base_slug_for(kind: str, text: Optional[str]) -> str:
    """Base slug for text, falling back to the kind name when text has no usable characters."""
    return slugify(text) or slugify(kind) or 'item'


# =============================================================================
# STORAGE LOOKUP
# =============================================================================

class ModelSlugStore:
    """
    Slug collision lookup backed by the Django ORM.

    find_first() returns the first entity of the given kind holding the slug,
    ignoring the entity whose primary key is exclude_id.
    """

    def _queryset(self, kind: str, slug: str, exclude_id: Any = None):
        try:
            model_label = SLUG_KIND_MODELS[kind]
        except KeyError:
            raise ValueError(f"Unknown slug kind: {kind!r}")

        model = apps.get_model(model_label)
        queryset = model.objects.filter(slug=slug)
        if exclude_id is not None:
            queryset = queryset.exclude(pk=exclude_id)
        return queryset

    def find_first(self, kind: str, slug: str, exclude_id: Any = None):
        queryset = self._queryset(kind, slug, exclude_id)
        try:
            return queryset.first()
        except DatabaseError as e:
            logger.error(f"Slug lookup failed for {kind} '{slug}': {e}")
            raise StorageUnavailable(f"Slug lookup failed for {kind} '{slug}'") from e

    async def afind_first(self, kind: str, slug: str, exclude_id: Any = None):
        queryset = self._queryset(kind, slug, exclude_id)
        try:
            return await queryset.afirst()
        except DatabaseError as e:
            logger.error(f"Slug lookup failed for {kind} '{slug}': {e}")
            raise StorageUnavailable(f"Slug lookup failed for {kind} '{slug}'") from e


default_store = ModelSlugStore()


# =============================================================================
# UNIQUE SLUG GENERATION
# =============================================================================

def _max_attempts(max_attempts: Optional[int]) -> int:
    if max_attempts is None:
        max_attempts = getattr(settings, 'SLUG_MAX_ATTEMPTS', DEFAULT_MAX_ATTEMPTS)
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    return max_attempts


def candidate_slugs(base_slug: str, max_attempts: int) -> Iterator[str]:
    """Yield base_slug, base_slug-2, base_slug-3, ... (max_attempts values in total)."""
    yield base_slug
    for counter in range(2, max_attempts + 1):
        yield f"{base_slug}-{counter}"


def generate_unique_slug(kind: str, text: Optional[str], exclude_id: Any = None,
                         store=None, max_attempts: Optional[int] = None) -> str:
    """
    Generate a slug for text that no other entity of the same kind holds.

    Args:
        kind: Slug namespace ('property' or 'project')
        text: Title or name to derive the slug from
        exclude_id: Primary key of the entity being updated, ignored in the check
        store: Lookup collaborator exposing find_first(kind, slug, exclude_id)
        max_attempts: Number of candidates to try before giving up

    Returns:
        The base slug, or the base slug with the smallest free "-N" suffix (N >= 2)

    Raises:
        SlugGenerationExhausted: every candidate up to max_attempts is taken
        StorageUnavailable: the lookup failed
    """
    store = store or default_store
    attempts = _max_attempts(max_attempts)
    base_slug = base_slug_for(kind, text)

    for candidate in candidate_slugs(base_slug, attempts):
        if store.find_first(kind, candidate, exclude_id) is None:
            if candidate != base_slug:
                logger.debug(f"Slug '{base_slug}' taken for {kind}, using '{candidate}'")
            return candidate

    logger.warning(f"Slug generation exhausted for {kind} '{base_slug}' after {attempts} attempts")
    raise SlugGenerationExhausted(kind, base_slug, attempts)


async def agenerate_unique_slug(kind: str, text: Optional[str], exclude_id: Any = None,
                                store=None, max_attempts: Optional[int] = None) -> str:
    """Async variant of generate_unique_slug(); awaits store.afind_first() for every candidate."""
    store = store or default_store
    attempts = _max_attempts(max_attempts)
    base_slug = base_slug_for(kind, text)

    for candidate in candidate_slugs(base_slug, attempts):
        if await store.afind_first(kind, candidate, exclude_id) is None:
            if candidate != base_slug:
                logger.debug(f"Slug '{base_slug}' taken for {kind}, using '{candidate}'")
            return candidate

    logger.warning(f"Slug generation exhausted for {kind} '{base_slug}' after {attempts} attempts")
    raise SlugGenerationExhausted(kind, base_slug, attempts)


def save_with_unique_slug(instance, kind: str, text: Optional[str],
                          retries: int = SLUG_SAVE_RETRIES):
    """
    Assign a unique slug to a model instance and save it.

    A concurrent writer can claim the same slug between the lookup and the
    insert; the unique constraint then raises IntegrityError and the slug is
    regenerated. The last IntegrityError is re-raised once retries run out.
    """
    for attempt in range(1, retries + 1):
        instance.slug = generate_unique_slug(kind, text, exclude_id=instance.pk)
        try:
            with transaction.atomic():
                instance.save()
            return instance
        except IntegrityError:
            if attempt == retries:
                logger.error(f"Could not save {kind} with slug '{instance.slug}' after {retries} attempts")
                raise
            logger.warning(f"Slug '{instance.slug}' for {kind} was claimed concurrently, retrying")
