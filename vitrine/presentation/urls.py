"""
Define as rotas da API REST do carrinho e do checkout.
"""
from django.urls import path
from . import views


urlpatterns = [
    # ====================================================================
    # 1. ROTAS DO CARRINHO
    # ====================================================================
    path('api/carrinho/', views.CarrinhoAPIView.as_view(), name='api_carrinho'),
    path('api/carrinho/itens/', views.CarrinhoItensAPIView.as_view(), name='api_carrinho_itens'),
    path('api/carrinho/itens/<int:product_id>/', views.CarrinhoItemAPIView.as_view(), name='api_carrinho_item'),

    # ====================================================================
    # 2. ROTAS DE CHECKOUT
    # ====================================================================
    path('api/checkout/opcoes/', views.OpcoesCheckoutAPIView.as_view(), name='api_checkout_opcoes'),
    path('api/checkout/resumo/', views.ResumoCheckoutAPIView.as_view(), name='api_checkout_resumo'),
    path('api/checkout/', views.CheckoutAPIView.as_view(), name='api_checkout'),

    # ====================================================================
    # 3. ROTAS DE ENDEREÇOS (ÁREA DO CLIENTE)
    # ====================================================================
    path('api/enderecos/', views.EnderecosAPIView.as_view(), name='api_enderecos'),
    path('api/enderecos/<int:address_id>/', views.EnderecoAPIView.as_view(), name='api_endereco'),

    # ====================================================================
    # 4. ROTAS DE PEDIDOS (ÁREA DO CLIENTE)
    # ====================================================================
    path('api/pedidos/', views.PedidosAPIView.as_view(), name='api_pedidos'),
]
