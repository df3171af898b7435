"""
Leads App Configuration - PW Pattaya Backend
"""

from django.apps import AppConfig


class LeadsConfig(AppConfig):
    """Configuration for the Leads app (website contact requests)."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'leads'
    verbose_name = 'Leads'
