# vitrine/core/apps.py

from django.apps import AppConfig


class CoreConfig(AppConfig):
    name = 'vitrine.core'
    label = 'core'
    verbose_name = 'Carrinho, Preços e Checkout (Core)'
    # Camada sem modelos: o estado vive na sessão e os pedidos na API remota.
