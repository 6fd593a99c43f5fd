# vitrine/core/dependency_injection.py
"""
Módulo de Injeção de Dependência (DI).
Responsável por instanciar o carrinho e os Use Cases com seus Gateways/Armazenamento
concretos da camada de Infraestrutura.
"""
from typing import Optional

from django.conf import settings

from vitrine.core.cart import CartStore
from vitrine.infrastructure.gateways import (
    ApiClient,
    AddressGateway,
    CatalogGateway,
    OrderGateway,
)
from vitrine.infrastructure.locks import CacheCheckoutLock
from vitrine.infrastructure.storage import SessionCartStorage
from .use_cases import ListarPedidosDoUsuarioUseCase, OrderAssembler


# ====================================================================
# Carrinho (um por sessão do navegador)
# ====================================================================

def get_cart_store(session) -> CartStore:
    return CartStore(SessionCartStorage(session), storage_key=settings.CART_SESSION_KEY)


# ====================================================================
# Gateways da API remota (token do cliente repassado a cada requisição)
# ====================================================================

def get_catalog_gateway(token: Optional[str] = None) -> CatalogGateway:
    return CatalogGateway(ApiClient(token=token))

def get_address_gateway(token: Optional[str] = None) -> AddressGateway:
    return AddressGateway(ApiClient(token=token))

def get_order_gateway(token: Optional[str] = None) -> OrderGateway:
    return OrderGateway(ApiClient(token=token))


# ====================================================================
# Use Cases de Checkout
# ====================================================================

def get_checkout_lock() -> CacheCheckoutLock:
    return CacheCheckoutLock()

def get_order_assembler(token: Optional[str] = None) -> OrderAssembler:
    return OrderAssembler(get_order_gateway(token), get_checkout_lock())

def get_listar_pedidos_use_case(token: Optional[str] = None) -> ListarPedidosDoUsuarioUseCase:
    return ListarPedidosDoUsuarioUseCase(get_order_gateway(token))
