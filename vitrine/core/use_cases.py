# vitrine/core/use_cases.py
"""
Implementação dos Casos de Uso (Lógica de Negócio) do checkout.
Esta camada depende apenas das Entidades, do motor de preços e das Portas
(Interfaces) do Core, garantindo o isolamento da lógica de negócio.
"""
import hashlib
import logging
from decimal import Decimal
from typing import List, Optional

from vitrine.core import pricing
from vitrine.core.cart import CartStore
from vitrine.core.entities import (
    Address, CartItem, Order, OrderDraft, OrderItemDraft, PaymentMethod, ShippingOption
)
from vitrine.core.exceptions import (
    CheckoutInProgressError,
    EmptyCartError,
    GatewayError,
    MissingAddressError,
    SubmissionError,
)
from vitrine.core.ports import ICheckoutLock, IOrderService

logger = logging.getLogger(__name__)

HTTP_201_CREATED = 201


class TravaEmMemoria(ICheckoutLock):
    """Marcador de envio restrito a um processo (sem cache compartilhado)."""

    def __init__(self):
        self._carrinhos = set()

    def acquire(self, cart_id: str) -> bool:
        if cart_id in self._carrinhos:
            return False
        self._carrinhos.add(cart_id)
        return True

    def release(self, cart_id: str):
        self._carrinhos.discard(cart_id)


# ====================================================================
# 1. MONTAGEM E ENVIO DO PEDIDO
# ====================================================================

class OrderAssembler:
    """
    Caso de Uso que coordena a finalização da compra:
    pré-condições, cálculo de valores, montagem do pedido, envio e limpeza do carrinho.
    """
    def __init__(self, order_service: IOrderService, checkout_lock: Optional[ICheckoutLock] = None):
        self.order_service = order_service
        self.checkout_lock = checkout_lock if checkout_lock is not None else TravaEmMemoria()
        self._em_andamento = False

    @property
    def busy(self) -> bool:
        """Indica que há um envio em andamento (a interface deve bloquear novo clique)."""
        return self._em_andamento

    def build_draft(
        self,
        cart: CartStore,
        address: Optional[Address],
        shipping_option: ShippingOption,
        payment_method: PaymentMethod,
    ) -> OrderDraft:
        """Valida as pré-condições e monta o pedido a partir do estado atual do carrinho."""
        if cart.is_empty():
            raise EmptyCartError("Não é possível finalizar a compra com o carrinho vazio.")
        if address is None:
            raise MissingAddressError()

        itens = cart.snapshot()
        valores = pricing.quote(cart.get_subtotal(), shipping_option, payment_method)

        draft = OrderDraft(
            total_price=valores.total,
            payment_method=payment_method,
            shipping_method=shipping_option,
            address=address,
            items=self._itens_do_pedido(itens, payment_method),
        )
        draft.idempotency_key = self._chave_idempotencia(cart.cart_id, draft)
        return draft

    def finalize_purchase(
        self,
        cart: CartStore,
        address: Optional[Address],
        shipping_option: ShippingOption,
        payment_method: PaymentMethod,
    ):
        """
        Processa o checkout e retorna o id do pedido criado.

        O carrinho só é limpo quando o serviço confirma a criação (201).
        Em qualquer falha o carrinho permanece exatamente como estava.
        """
        if self._em_andamento:
            raise CheckoutInProgressError()

        # 1. Pré-condições (nenhuma chamada de rede antes disso)
        draft = self.build_draft(cart, address, shipping_option, payment_method)

        # 2. Envio ao serviço de pedidos (um por carrinho de cada vez)
        if not self.checkout_lock.acquire(cart.cart_id):
            logger.warning("Envio já em andamento para o carrinho %s", cart.cart_id)
            raise CheckoutInProgressError()
        self._em_andamento = True
        try:
            logger.info(
                "Enviando pedido do carrinho %s (total %s, %s/%s)",
                cart.cart_id, draft.total_price, payment_method.value, shipping_option.value,
            )
            try:
                receipt = self.order_service.create(draft)
            except GatewayError as e:
                logger.warning("Falha ao enviar pedido do carrinho %s: %s", cart.cart_id, e)
                raise SubmissionError(f"Pedido não registrado: {e.message}", status_code=e.status_code) from e
        finally:
            self._em_andamento = False
            self.checkout_lock.release(cart.cart_id)

        if receipt.status != HTTP_201_CREATED:
            logger.warning(
                "Serviço de pedidos respondeu %s para o carrinho %s", receipt.status, cart.cart_id
            )
            raise SubmissionError(status_code=receipt.status)

        # 3. Sucesso confirmado: limpa o carrinho
        cart.clear()
        if receipt.id is None:
            logger.warning("Pedido criado (201) sem id na resposta (chave %s)", draft.idempotency_key)
        else:
            logger.info("Pedido %s criado", receipt.id)
        return receipt.id

    @staticmethod
    def _itens_do_pedido(itens: List[CartItem], payment_method: PaymentMethod) -> List[OrderItemDraft]:
        """
        Preço unitário de cada linha ajustado pela mesma taxa de desconto do subtotal.
        A API de pedidos espera o preço já descontado por linha.
        """
        fator = Decimal('1') - pricing.discount_rate(payment_method)
        return [
            OrderItemDraft(
                product=item.product,
                quantity=item.quantity,
                price=(item.product.price * fator).round2(),
            )
            for item in itens
        ]

    @staticmethod
    def _chave_idempotencia(cart_id: str, draft: OrderDraft) -> str:
        """
        Mesmo carrinho com o mesmo conteúdo gera a mesma chave, então um clique
        repetido não cria um segundo pedido no servidor.
        """
        conteudo = '|'.join([
            cart_id,
            str(draft.total_price),
            draft.payment_method.value,
            draft.shipping_method.value,
            str(draft.address.id),
            *(f"{item.product.id}x{item.quantity}@{item.price}" for item in draft.items),
        ])
        return f"{cart_id}-{hashlib.sha256(conteudo.encode()).hexdigest()[:16]}"


# ====================================================================
# 2. HISTÓRICO DE PEDIDOS
# ====================================================================

class ListarPedidosDoUsuarioUseCase:
    """Caso de Uso para listar os pedidos do cliente autenticado."""
    def __init__(self, order_service: IOrderService):
        self.order_service = order_service

    def executar(self) -> List[Order]:
        """Retorna a lista de pedidos, do mais recente para o mais antigo."""
        pedidos = self.order_service.find_all_by_user()
        return list(reversed(pedidos))
