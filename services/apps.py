"""
Django application configuration for the services app.

The services app provides business logic shared by the other PW Pattaya
apps: slug generation, listing auto-fill and lead notifications.
"""

from django.apps import AppConfig
from django.core.checks import Error, Tags, register


class ServicesConfig(AppConfig):
    """
    Application configuration for the services app.

    Registers a system check that keeps the auto-fill defaults inside the
    controlled feature vocabularies.
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'services'
    verbose_name = 'Services'

    def ready(self):
        register(check_autofill_vocabulary, Tags.models)


def check_autofill_vocabulary(app_configs, **kwargs):
    """Every auto-fill label must exist in its category vocabulary."""
    from .autofill import validate_vocabulary

    return [
        Error(
            f'Auto-fill label not in vocabulary: {problem}',
            hint='Add the label to properties/options.py or fix services/autofill.py',
            obj='services.autofill',
            id='services.E001',
        )
        for problem in validate_vocabulary()
    ]
