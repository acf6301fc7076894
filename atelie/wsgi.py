"""
WSGI config for the Ateliê Manager project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'atelie.settings')

application = get_wsgi_application()
