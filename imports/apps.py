'''
Django App Configuration for Imports
File: imports/apps.py

Handles bulk property imports from the Google-Sheets listing form export
(CSV upload, JSON API and management command) with batch tracking.
'''

from django.apps import AppConfig


class ImportsConfig(AppConfig):
    '''
    Configuration class for the Imports Django app

    This app manages:
    - CSV upload, parsing and validation of sheet rows
    - Import batch tracking with per-row error logs
    - Property creation through the properties serializers
    '''

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'imports'
    verbose_name = 'Property Imports'

    def ready(self):
        """Register system checks for import configuration."""
        from django.core.checks import register, Tags, Warning
        from django.conf import settings

        @register(Tags.compatibility)
        def check_upload_size(app_configs, **kwargs):
            errors = []
            limit = getattr(settings, 'IMPORT_MAX_FILE_SIZE', None)
            if not isinstance(limit, int) or limit <= 0:
                errors.append(
                    Warning(
                        'IMPORT_MAX_FILE_SIZE must be a positive number of bytes',
                        hint='CSV uploads are rejected until a limit is configured.',
                        id='imports.W001',
                    )
                )
            return errors
