"""
WSGI config for pwpattaya project.

This module contains the WSGI application used by Django's development server
and any production WSGI deployments. It exposes a module-level variable
named ``application``.

Start command:
    gunicorn pwpattaya.wsgi:application
"""

import json
import logging
import os

from django.core.wsgi import get_wsgi_application

# Set the default settings module for the 'pwpattaya' program.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'pwpattaya.settings')

# Initialize Django application early to avoid AppRegistryNotReady errors
django_application = get_wsgi_application()

logger = logging.getLogger('django')


# =============================================================================
# PRODUCTION WSGI APPLICATION
# =============================================================================

def application(environ, start_response):
    """
    Production WSGI application.

    - /wsgi-health/ answers without touching Django (process monitor probe)
    - uncaught errors become a JSON 500 instead of a bare server error
    """
    if environ.get('PATH_INFO') == '/wsgi-health/':
        start_response('200 OK', [
            ('Content-Type', 'application/json'),
            ('Cache-Control', 'no-cache'),
        ])
        return [b'{"status": "healthy", "service": "pwpattaya-wsgi"}']

    try:
        return django_application(environ, start_response)
    except Exception:
        logger.exception("WSGI application error")
        body = json.dumps({
            "error": "Internal server error",
            "message": "The server encountered an unexpected condition",
            "service": "pwpattaya-wsgi"
        }).encode('utf-8')
        start_response('500 Internal Server Error', [
            ('Content-Type', 'application/json'),
            ('Cache-Control', 'no-cache'),
        ])
        return [body]
