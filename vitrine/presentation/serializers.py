from rest_framework import serializers

from vitrine.core.entities import Address, PaymentMethod, ShippingOption
from vitrine.core.exceptions import InvalidOptionError


class MoneyField(serializers.DecimalField):
    """Representa um Money como decimal com duas casas (string, padrão do DRF)."""

    def __init__(self, **kwargs):
        kwargs.setdefault('max_digits', 12)
        kwargs.setdefault('decimal_places', 2)
        kwargs.setdefault('read_only', True)
        super().__init__(**kwargs)

    def to_representation(self, value):
        return super().to_representation(value.amount)


class ProductSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    price = MoneyField()
    category = serializers.CharField(allow_null=True)
    image_url = serializers.CharField(allow_null=True)


# ====================================================================
# SERIALIZERS PARA O CARRINHO
# ====================================================================

class CartItemSerializer(serializers.Serializer):
    """
    Serializer para o item do carrinho.
    Usa o ProductSerializer para representar o produto aninhado.
    """
    product = ProductSerializer(read_only=True)
    quantity = serializers.IntegerField()
    line_total = MoneyField()


class CartSerializer(serializers.Serializer):
    """
    Serializer principal do carrinho, construído a partir do CartStore.
    Os totais são derivados a cada leitura.
    """
    id = serializers.CharField(source='cart_id')
    items = CartItemSerializer(many=True, read_only=True)
    total_items = serializers.IntegerField(source='get_total_items')
    subtotal = MoneyField(source='get_subtotal')


class AdicionarItemSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)
    # Acima de 99 o carrinho limita; abaixo de 1 é rejeitado
    quantity = serializers.IntegerField(default=1, min_value=1)


class AtualizarQuantidadeSerializer(serializers.Serializer):
    quantity = serializers.IntegerField()


# ====================================================================
# SERIALIZERS PARA O CHECKOUT
# ====================================================================

class OpcoesCheckoutSerializer(serializers.Serializer):
    """
    Validação da forma de entrega e de pagamento.
    Valores desconhecidos são rejeitados aqui, antes de chegar ao motor de preços.
    """
    shipping_method = serializers.ChoiceField(
        choices=[(opcao.value, opcao.label) for opcao in ShippingOption],
        default=ShippingOption.STANDARD.value,
    )
    payment_method = serializers.ChoiceField(
        choices=[(opcao.value, opcao.label) for opcao in PaymentMethod],
        default=PaymentMethod.CREDIT.value,
    )

    def validate_shipping_method(self, value):
        try:
            return ShippingOption.parse(value)
        except InvalidOptionError as e:
            raise serializers.ValidationError(e.message)

    def validate_payment_method(self, value):
        try:
            return PaymentMethod.parse(value)
        except InvalidOptionError as e:
            raise serializers.ValidationError(e.message)


class CheckoutSerializer(OpcoesCheckoutSerializer):
    """Serializer para a finalização da compra."""
    address_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class ResumoCheckoutSerializer(serializers.Serializer):
    """Valores do resumo do pedido (PriceQuote)."""
    subtotal = MoneyField()
    shipping = MoneyField()
    discount = MoneyField()
    total = MoneyField()


class OpcaoSerializer(serializers.Serializer):
    value = serializers.CharField()
    label = serializers.CharField()


# ====================================================================
# SERIALIZERS DE ENDEREÇOS E DO HISTÓRICO DE PEDIDOS
# ====================================================================

class AddressSerializer(serializers.Serializer):
    id = serializers.IntegerField(allow_null=True)
    street = serializers.CharField()
    complement = serializers.CharField(allow_null=True)
    zip_code = serializers.CharField()
    city = serializers.CharField()
    state = serializers.CharField()
    country = serializers.CharField()


class NovoEnderecoSerializer(serializers.Serializer):
    """Cadastro de endereço de entrega (repassado à API remota)."""
    street = serializers.CharField(max_length=255)
    complement = serializers.CharField(max_length=255, required=False, allow_null=True, allow_blank=True)
    zip_code = serializers.CharField(max_length=20)
    city = serializers.CharField(max_length=120)
    state = serializers.CharField(max_length=60)
    country = serializers.CharField(max_length=60, default='Brasil')

    def create(self, validated_data):
        return Address(**validated_data)


class OrderItemSerializer(serializers.Serializer):
    product = ProductSerializer()
    quantity = serializers.IntegerField()
    price = MoneyField()


class OrderSerializer(serializers.Serializer):
    id = serializers.IntegerField(allow_null=True)
    date_order = serializers.DateTimeField(allow_null=True)
    total_price = MoneyField()
    payment_method = serializers.CharField()
    shipping_method = serializers.CharField()
    address = AddressSerializer(allow_null=True)
    items = OrderItemSerializer(many=True)
