# vitrine/core/pricing.py
"""
Motor de preços do checkout.

Funções puras de (subtotal, forma de entrega, forma de pagamento). Nenhum outro
módulo recalcula frete ou desconto; carrinho e montagem do pedido chamam daqui.
"""
from decimal import Decimal
from typing import NamedTuple

from vitrine.core.entities import PaymentMethod, ShippingOption
from vitrine.core.money import Money, Numero

FREE_SHIPPING_THRESHOLD = Money.of('149.00')

SHIPPING_BASE_COST = {
    ShippingOption.STANDARD: Money.of('10.00'),
    ShippingOption.EXPRESS: Money.of('25.00'),
    ShippingOption.PICKUP: Money.zero(),
}

PIX_DISCOUNT_RATE = Decimal('0.05')


class PriceQuote(NamedTuple):
    """Resumo de valores exibido no checkout."""

    subtotal: Money
    shipping: Money
    discount: Money
    total: Money


def shipping_cost(subtotal: Numero, shipping_option: ShippingOption) -> Money:
    """
    Frete para o subtotal informado.

    Retirada na loja é sempre grátis, assim como qualquer subtotal a partir de
    FREE_SHIPPING_THRESHOLD (comparação inclusiva). As duas regras são
    independentes.
    """
    subtotal = Money.of(subtotal)
    if shipping_option == ShippingOption.PICKUP:
        return Money.zero()
    if subtotal >= FREE_SHIPPING_THRESHOLD:
        return Money.zero()
    return SHIPPING_BASE_COST[shipping_option]


def discount_rate(payment_method: PaymentMethod) -> Decimal:
    """Percentual de desconto da forma de pagamento (só PIX tem desconto)."""
    if payment_method == PaymentMethod.PIX:
        return PIX_DISCOUNT_RATE
    return Decimal('0')


def discount(subtotal: Numero, payment_method: PaymentMethod) -> Money:
    """Desconto sobre o subtotal, arredondado para duas casas."""
    rate = discount_rate(payment_method)
    if not rate:
        return Money.zero()
    return (Money.of(subtotal) * rate).round2()


def final_total(subtotal: Numero, shipping_option: ShippingOption, payment_method: PaymentMethod) -> Money:
    """subtotal + frete - desconto, arredondado e nunca negativo."""
    subtotal = Money.of(subtotal)
    total = subtotal + shipping_cost(subtotal, shipping_option) - discount(subtotal, payment_method)
    return total.round2().clamp_zero()


def quote(subtotal: Numero, shipping_option: ShippingOption, payment_method: PaymentMethod) -> PriceQuote:
    """Calcula todos os valores do resumo de uma vez."""
    subtotal = Money.of(subtotal)
    return PriceQuote(
        subtotal=subtotal.round2(),
        shipping=shipping_cost(subtotal, shipping_option),
        discount=discount(subtotal, payment_method),
        total=final_total(subtotal, shipping_option, payment_method),
    )
