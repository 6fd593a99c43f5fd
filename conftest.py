"""Configuração do pytest: prepara o Django antes da coleta dos testes."""

import os

import django


def pytest_configure():
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'vitrine.settings')
    django.setup()
