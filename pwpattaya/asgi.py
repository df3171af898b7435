"""
ASGI config for pwpattaya project.

It exposes the ASGI callable as a module-level variable named ``application``.
Serve with Uvicorn or Daphne, e.g.:
    uvicorn pwpattaya.asgi:application
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'pwpattaya.settings')

application = get_asgi_application()
