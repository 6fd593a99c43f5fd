# vitrine/core/ports.py
"""
Definição das Portas (Interfaces/Protocolos) da Arquitetura Limpa.

Estes protocolos definem o contrato que a camada de Infraestrutura (Gateways,
Armazenamento) DEVE seguir para se conectar à camada Core (Casos de Uso).
"""

from typing import Protocol, List, Optional
from abc import abstractmethod

from vitrine.core.entities import Address, Order, OrderDraft, OrderReceipt, Product


# ====================================================================
# 1. ESTADO DO CARRINHO (armazenamento e envio em andamento)
# ====================================================================

class ICartStorage(Protocol):
    """Armazenamento chave/valor que sobrevive a recarregamentos da página."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]: ...

    @abstractmethod
    def set(self, key: str, value: str): ...

    @abstractmethod
    def remove(self, key: str): ...


class ICheckoutLock(Protocol):
    """
    Marcador de envio em andamento por carrinho, visível para todas as
    requisições (um duplo clique chega como duas requisições distintas).
    """

    @abstractmethod
    def acquire(self, cart_id: str) -> bool:
        """Marca o carrinho como em envio. Retorna False se já estava marcado."""
        ...

    @abstractmethod
    def release(self, cart_id: str): ...


# ====================================================================
# 2. SERVIÇOS REMOTOS (Portas de Serviços Externos)
# ====================================================================

class ICatalogService(Protocol):
    """Protocolo para a busca de produtos no catálogo."""

    @abstractmethod
    def find_by_id(self, product_id: int) -> Product: ...


class IAddressService(Protocol):
    """Protocolo para os endereços do usuário autenticado."""

    @abstractmethod
    def find_all_by_user(self) -> List[Address]: ...

    @abstractmethod
    def find_by_id(self, address_id: int) -> Address: ...

    @abstractmethod
    def create(self, address: Address) -> Address: ...

    @abstractmethod
    def remove(self, address_id: int): ...


class IOrderService(Protocol):
    """Protocolo para a persistência de pedidos no servidor."""

    @abstractmethod
    def create(self, draft: OrderDraft) -> OrderReceipt:
        """
        Envia o pedido. O status 201 é o único sinal de sucesso considerado
        pelo checkout.
        """
        ...

    @abstractmethod
    def find_all_by_user(self) -> List[Order]: ...
