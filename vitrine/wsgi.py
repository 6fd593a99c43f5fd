"""
WSGI config para o projeto Vitrine.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'vitrine.settings')

application = get_wsgi_application()
