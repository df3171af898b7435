#!/usr/bin/env python
"""
Django's command-line utility for administrative tasks.

PW Pattaya Backend Management Script
====================================

Usage Examples:
===============

Development:
  python manage.py runserver                    # Start development server
  python manage.py migrate                      # Apply migrations
  python manage.py createsuperuser              # Create admin user
  python manage.py test                         # Run tests

Production:
  python manage.py collectstatic --noinput      # Collect static files

PW Pattaya Specific Commands:
  python manage.py import_properties <file.csv>            # Import sheet export
  python manage.py import_properties <file.csv> --dry-run  # Validate only
"""

import os
import sys


def main():
    """Run administrative tasks."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'pwpattaya.settings')

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?\n"
            "Try: pip install -e .[test]"
        ) from exc

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
