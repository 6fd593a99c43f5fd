from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional
import uuid

from vitrine.core.exceptions import InvalidOptionError
from vitrine.core.money import Money

# ====================================================================
# LIMITES DO CARRINHO
# ====================================================================

MIN_QUANTITY = 1
MAX_QUANTITY = 99


def clamp_quantity(quantidade: int) -> int:
    """Força a quantidade para o intervalo [MIN_QUANTITY, MAX_QUANTITY]."""
    return max(MIN_QUANTITY, min(MAX_QUANTITY, int(quantidade)))


# ====================================================================
# OPÇÕES DE CHECKOUT
# Os valores são os mesmos usados pela API remota de pedidos.
# ====================================================================

class _OpcaoCheckout(str, Enum):
    """Base das enumerações de checkout, com validação na fronteira."""

    @classmethod
    def parse(cls, valor):
        """
        Converte o valor recebido (ex: do corpo da requisição) na enumeração.
        Valores desconhecidos são rejeitados aqui, nunca dentro do motor de preços.
        """
        if isinstance(valor, cls):
            return valor
        try:
            return cls(str(valor).strip().lower())
        except ValueError:
            validos = ', '.join(opcao.value for opcao in cls)
            raise InvalidOptionError(
                f"Opção '{valor}' inválida para {cls.__name__}. Válidas: {validos}."
            )

    @property
    def label(self) -> str:
        return self._labels()[self]

    @classmethod
    def _labels(cls) -> dict:
        raise NotImplementedError


class ShippingOption(_OpcaoCheckout):
    STANDARD = 'standard'
    EXPRESS = 'express'
    PICKUP = 'pickup'

    @classmethod
    def _labels(cls) -> dict:
        return {
            cls.STANDARD: 'Padrão (10-15 dias)',
            cls.EXPRESS: 'Expresso (até 5 dias)',
            cls.PICKUP: 'Retirar na Loja',
        }


class PaymentMethod(_OpcaoCheckout):
    CREDIT = 'credit'
    PIX = 'pix'
    BOLETO = 'boleto'

    @classmethod
    def _labels(cls) -> dict:
        return {
            cls.CREDIT: 'Cartão de Crédito',
            cls.PIX: 'PIX',
            cls.BOLETO: 'Boleto Bancário',
        }


# ====================================================================
# ENTIDADES CORE
# Representam os objetos de negócio puros.
# ====================================================================

@dataclass(frozen=True)
class Product:
    """Cópia somente-leitura de um produto do catálogo remoto."""
    id: int
    name: str
    price: Money
    category: Optional[str] = None
    image_url: Optional[str] = None


@dataclass
class Address:
    """Endereço de entrega selecionado pelo cliente (opaco para o motor de preços)."""
    street: str
    zip_code: str
    city: str
    state: str
    country: str
    complement: Optional[str] = None
    id: Optional[int] = None


@dataclass
class CartItem:
    """Entidade que representa um item no carrinho."""
    product: Product
    quantity: int

    @property
    def line_total(self) -> Money:
        """Total da linha para exibição, arredondado de forma independente."""
        return (self.product.price * self.quantity).round2()


@dataclass
class Cart:
    """Entidade do Carrinho de Compras. A ordem de inserção é preservada para exibição."""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    items: List[CartItem] = field(default_factory=list)

    def get_item(self, product_id: int) -> Optional[CartItem]:
        return next((item for item in self.items if item.product.id == product_id), None)

    def is_empty(self) -> bool:
        return not self.items


@dataclass
class OrderItemDraft:
    """Linha do pedido com o preço unitário já ajustado pela forma de pagamento."""
    product: Product
    quantity: int
    price: Money


@dataclass
class OrderDraft:
    """Pedido montado no momento de "finalizar compra", ainda não enviado."""
    total_price: Money
    payment_method: PaymentMethod
    shipping_method: ShippingOption
    address: Address
    items: List[OrderItemDraft]
    # Preenchida pelo OrderAssembler a partir do carrinho e do conteúdo do pedido
    idempotency_key: str = ''


@dataclass(frozen=True)
class OrderReceipt:
    """Resposta do serviço de pedidos à criação (id e status HTTP)."""
    id: Optional[int]
    status: int


@dataclass
class OrderItem:
    """Item de um pedido já registrado no servidor."""
    price: Money
    quantity: int
    product: Product
    id: Optional[int] = None


@dataclass
class Order:
    """Pedido registrado no servidor (histórico do cliente)."""
    total_price: Money
    payment_method: str
    shipping_method: str
    address: Optional[Address]
    items: List[OrderItem] = field(default_factory=list)
    id: Optional[int] = None
    date_order: Optional[datetime] = None
