from django.apps import AppConfig


class InfrastructureConfig(AppConfig):
    name = 'vitrine.infrastructure'
    label = 'infrastructure'
    verbose_name = 'Gateways da API e Armazenamento'
