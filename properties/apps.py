"""
Properties App Configuration - PW Pattaya Backend
Django app configuration for the properties application.
"""

from django.apps import AppConfig


class PropertiesConfig(AppConfig):
    """
    Configuration for the Properties app.

    This app manages:
    - Property listings for sale and rent
    - Development projects
    - Property form templates and feature vocabularies
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'properties'
    verbose_name = 'Properties & Projects'
