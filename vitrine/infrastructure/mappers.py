"""
Mapeadores (Mappers) para converter entre:
1. O JSON da API remota (catálogo, endereços, pedidos)
2. Entidades de Domínio (vitrine.core.entities)
"""
from datetime import datetime
from typing import Any, Dict, Optional

from vitrine.core.entities import (
    Address, Order, OrderDraft, OrderItem, Product
)
from vitrine.core.money import Money


class BaseMapper:

    @staticmethod
    def money(value: Any) -> Money:
        """A API envia números JSON; None vira zero."""
        return Money.of(value if value is not None else 0)


# ====================================================================
# MAPPERS DO CATÁLOGO
# ====================================================================

class ProductMapper(BaseMapper):
    """Mapeador para Produto."""

    @classmethod
    def to_entity(cls, data: Dict[str, Any]) -> Product:
        categoria = data.get('category')
        # A categoria pode vir como objeto {id, name} ou apenas como rótulo
        if isinstance(categoria, dict):
            categoria = categoria.get('name')
        return Product(
            id=int(data['id']),
            name=data.get('name', ''),
            price=cls.money(data.get('price')),
            category=categoria,
            image_url=data.get('urlImg'),
        )

    @staticmethod
    def to_payload(product: Product) -> Dict[str, Any]:
        return {
            'id': product.id,
            'name': product.name,
            'price': float(product.price),
            'urlImg': product.image_url,
        }


# ====================================================================
# MAPPERS DE ENDEREÇO
# ====================================================================

class AddressMapper(BaseMapper):
    """Mapeador para Endereço."""

    @staticmethod
    def to_entity(data: Dict[str, Any]) -> Address:
        return Address(
            id=data.get('id'),
            street=data.get('street', ''),
            complement=data.get('complement'),
            zip_code=data.get('zipCode', ''),
            city=data.get('city', ''),
            state=data.get('state', ''),
            country=data.get('country', ''),
        )

    @staticmethod
    def to_payload(address: Address) -> Dict[str, Any]:
        payload = {
            'street': address.street,
            'complement': address.complement,
            'zipCode': address.zip_code,
            'city': address.city,
            'state': address.state,
            'country': address.country,
        }
        if address.id is not None:
            payload['id'] = address.id
        return payload


# ====================================================================
# MAPPERS DE PEDIDO
# ====================================================================

class OrderMapper(BaseMapper):
    """Mapeador para Pedido (envio e histórico)."""

    @classmethod
    def to_payload(cls, draft: OrderDraft) -> Dict[str, Any]:
        """Monta o corpo do POST /orders no formato esperado pela API."""
        return {
            'totalPrice': float(draft.total_price),
            'formaPagamento': draft.payment_method.value,
            'formaEntrega': draft.shipping_method.value,
            'address': AddressMapper.to_payload(draft.address),
            'items': [
                {
                    'price': float(item.price),
                    'quantity': item.quantity,
                    'product': ProductMapper.to_payload(item.product),
                }
                for item in draft.items
            ],
        }

    @classmethod
    def to_entity(cls, data: Dict[str, Any]) -> Order:
        endereco = data.get('address')
        return Order(
            id=data.get('id'),
            date_order=cls._parse_data(data.get('dateOrder')),
            total_price=cls.money(data.get('totalPrice')),
            payment_method=data.get('formaPagamento', ''),
            shipping_method=data.get('formaEntrega', ''),
            address=AddressMapper.to_entity(endereco) if endereco else None,
            items=[
                OrderItem(
                    id=item.get('id'),
                    price=cls.money(item.get('price')),
                    quantity=int(item.get('quantity', 0)),
                    product=ProductMapper.to_entity(item['product']),
                )
                for item in data.get('items', [])
            ],
        )

    @staticmethod
    def _parse_data(value: Optional[str]) -> Optional[datetime]:
        if not value:
            return None
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
