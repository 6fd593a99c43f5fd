from django.apps import AppConfig


class PresentationConfig(AppConfig):
    name = 'vitrine.presentation'
    label = 'presentation'
    verbose_name = 'API do Carrinho e Checkout'
